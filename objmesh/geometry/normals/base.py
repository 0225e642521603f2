"""Base classes and utilities for normal synthesis."""

from abc import ABC, abstractmethod

import numpy as np

from objmesh.core.exceptions import GeometryError, IndexOutOfRangeError

NORMAL_DTYPE = np.float32


class NormalStrategy(ABC):
    """Abstract base class for per-vertex normal synthesis strategies."""

    name: str = "base"

    def __init__(self, renormalize: bool = False):
        """Initialize normal strategy.

        Args:
            renormalize: Rescale accumulated normals to unit length
        """
        self.renormalize = renormalize

    def compute(self, positions: np.ndarray, indices: np.ndarray) -> np.ndarray:
        """Synthesize one normal per vertex.

        Args:
            positions: Vertex positions (N, 3)
            indices: Flat index stream (M,)

        Returns:
            Array of normals (N, 3)

        Raises:
            GeometryError: If positions are not shaped (N, 3)
            IndexOutOfRangeError: If a referenced index is not below N
        """
        positions = np.asarray(positions, dtype=NORMAL_DTYPE)
        if positions.ndim != 2 or positions.shape[1] != 3:
            raise GeometryError(
                f"Positions must have shape (N, 3), got {positions.shape}"
            )
        indices = np.asarray(indices, dtype=np.int64).reshape(-1)

        normals = self._accumulate_impl(positions, indices)

        if self.renormalize:
            normals = unitize(normals)
        return normals

    @abstractmethod
    def _accumulate_impl(self, positions: np.ndarray, indices: np.ndarray) -> np.ndarray:
        """Accumulate face normals onto vertices.

        Args:
            positions: Vertex positions (N, 3) float32
            indices: Flat index stream (M,) int64

        Returns:
            Accumulated normals (N, 3) float32
        """
        pass


def check_indices(indices: np.ndarray, vertex_count: int) -> None:
    """Fail on the first index that does not reference a vertex.

    Raises:
        IndexOutOfRangeError: If any index is negative or >= vertex_count
    """
    if indices.size == 0:
        return
    bad = np.flatnonzero((indices < 0) | (indices >= vertex_count))
    if bad.size:
        raise IndexOutOfRangeError(int(indices[bad[0]]), vertex_count)


def face_normals(v0: np.ndarray, v1: np.ndarray, v2: np.ndarray) -> np.ndarray:
    """Unit normals of the triangles (v0, v1, v2), pivoting on v1.

    Computes ``normalize(cross(v0 - v1, v2 - v1))`` row by row. Degenerate
    triangles yield the zero vector.
    """
    normals = np.cross(v0 - v1, v2 - v1).astype(NORMAL_DTYPE, copy=False)
    return unitize(normals)


def unitize(vectors: np.ndarray) -> np.ndarray:
    """Scale non-zero rows to unit length; zero rows stay zero."""
    lengths = np.linalg.norm(vectors, axis=1, keepdims=True)
    out = np.zeros_like(vectors, dtype=NORMAL_DTYPE)
    np.divide(vectors, lengths, out=out, where=lengths > 0)
    return out
