"""Per-vertex normal synthesis strategies for objmesh."""

import numpy as np

from objmesh.geometry.normals.base import (
    NormalStrategy,
    check_indices,
    face_normals,
    unitize,
)
from objmesh.geometry.normals.face import FaceAverageNormals
from objmesh.geometry.normals.factory import NormalsFactory
from objmesh.geometry.normals.sliding import SlidingWindowNormals


def synthesize_normals(
    positions: np.ndarray,
    indices: np.ndarray,
    mode: str = "sliding_window",
    renormalize: bool = False,
) -> np.ndarray:
    """Convenience function to synthesize per-vertex normals.

    Args:
        positions: Vertex positions (N, 3)
        indices: Flat index stream (M,)
        mode: Strategy name (see ``NormalsFactory.available_modes``)
        renormalize: Rescale accumulated normals to unit length

    Returns:
        Array of normals (N, 3)
    """
    strategy = NormalsFactory.create(mode, renormalize=renormalize)
    return strategy.compute(positions, indices)


__all__ = [
    "NormalStrategy",
    "NormalsFactory",
    "SlidingWindowNormals",
    "FaceAverageNormals",
    "synthesize_normals",
    "check_indices",
    "face_normals",
    "unitize",
]
