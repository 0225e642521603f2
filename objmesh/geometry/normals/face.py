"""Face-average normal synthesis."""

import numpy as np

from objmesh.geometry.normals.base import (
    NORMAL_DTYPE,
    NormalStrategy,
    check_indices,
    face_normals,
)


class FaceAverageNormals(NormalStrategy):
    """Accumulate each triangle's unit normal onto all three of its corners.

    Indices are read as disjoint triples; trailing indices that do not
    complete a triangle are ignored.
    """

    name = "face_average"

    def _accumulate_impl(self, positions: np.ndarray, indices: np.ndarray) -> np.ndarray:
        normals = np.zeros((len(positions), 3), dtype=NORMAL_DTYPE)
        triangle_count = len(indices) // 3
        if triangle_count == 0:
            return normals

        faces = indices[: triangle_count * 3].reshape((triangle_count, 3))
        check_indices(faces.reshape(-1), len(positions))

        per_face = face_normals(
            positions[faces[:, 0]], positions[faces[:, 1]], positions[faces[:, 2]]
        )
        for corner in range(3):
            np.add.at(normals, faces[:, corner], per_face)
        return normals
