"""Sliding-window normal synthesis."""

import numpy as np

from objmesh.geometry.normals.base import (
    NORMAL_DTYPE,
    NormalStrategy,
    check_indices,
    face_normals,
)


class SlidingWindowNormals(NormalStrategy):
    """Accumulate normals over every run of three consecutive indices.

    The window advances one index at a time, so consecutive windows share two
    indices and an index stream of length M yields M - 2 windows. Each
    window's unit normal is added to its first vertex only, and sums are left
    unnormalized unless ``renormalize`` is set.

    A degenerate window (collinear or repeated corners) contributes the zero
    vector. This deliberately departs from plain vector normalization, which
    would yield NaN and poison every later sum at that vertex.
    """

    name = "sliding_window"

    def _accumulate_impl(self, positions: np.ndarray, indices: np.ndarray) -> np.ndarray:
        normals = np.zeros((len(positions), 3), dtype=NORMAL_DTYPE)
        if len(indices) < 3:
            return normals

        check_indices(indices, len(positions))

        first, middle, last = indices[:-2], indices[1:-1], indices[2:]
        window_normals = face_normals(
            positions[first], positions[middle], positions[last]
        )
        # unbuffered add so repeated first indices all accumulate
        np.add.at(normals, first, window_normals)
        return normals
