"""Geometry containers shared by the mesh pipeline."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping, Sequence, Union

import numpy as np
import trimesh

from objmesh.core.exceptions import GeometryError

POSITION_DTYPE = np.float32
INDEX_DTYPE = np.uint32


class AttributeName(str, Enum):
    """Names of the per-vertex attribute buffers."""

    POSITION = "POSITION"
    NORMAL = "NORMAL"
    UV0 = "UV0"


class Topology(str, Enum):
    """Primitive topology of an index buffer."""

    TRIANGLE_LIST = "triangle_list"


def _frozen(array: np.ndarray) -> np.ndarray:
    """Return a private read-only copy of an array."""
    array = np.array(array, copy=True)
    array.setflags(write=False)
    return array


@dataclass(frozen=True, eq=False)
class RawGeometry:
    """Parsed vertex positions and the flat index stream that references them."""

    positions: np.ndarray
    indices: np.ndarray

    def __post_init__(self) -> None:
        positions = np.asarray(self.positions, dtype=POSITION_DTYPE)
        if positions.size == 0:
            positions = positions.reshape((0, 3))
        if positions.ndim != 2 or positions.shape[1] != 3:
            raise GeometryError(
                f"Positions must have shape (N, 3), got {positions.shape}"
            )

        indices = np.asarray(self.indices)
        if indices.ndim != 1:
            indices = indices.reshape(-1)
        if indices.size and not np.issubdtype(indices.dtype, np.integer):
            raise GeometryError(f"Indices must be integers, got {indices.dtype}")
        if indices.size and indices.min() < 0:
            raise GeometryError(f"Negative vertex index {int(indices.min())}")

        object.__setattr__(self, "positions", _frozen(positions))
        object.__setattr__(self, "indices", _frozen(indices.astype(INDEX_DTYPE)))

    @classmethod
    def from_sequences(
        cls,
        positions: Sequence[Sequence[float]],
        indices: Sequence[int],
    ) -> "RawGeometry":
        """Build geometry from plain Python sequences."""
        return cls(
            positions=np.asarray(positions, dtype=POSITION_DTYPE),
            indices=np.asarray(indices, dtype=np.int64),
        )

    @property
    def vertex_count(self) -> int:
        return len(self.positions)

    @property
    def index_count(self) -> int:
        return len(self.indices)


@dataclass(frozen=True, eq=False)
class Mesh:
    """Renderer-ready indexed mesh.

    Attribute buffers are index-aligned with each other and read-only; use
    ``objmesh.geometry.assembly.assemble_mesh`` to build one.
    """

    attributes: Mapping[AttributeName, np.ndarray]
    indices: np.ndarray
    topology: Topology = Topology.TRIANGLE_LIST
    metadata: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "attributes",
            MappingProxyType(
                {AttributeName(name): _frozen(values) for name, values in self.attributes.items()}
            ),
        )
        object.__setattr__(self, "indices", _frozen(np.asarray(self.indices, dtype=INDEX_DTYPE)))
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Mesh):
            return NotImplemented
        if self.topology != other.topology:
            return False
        if set(self.attributes) != set(other.attributes):
            return False
        for name, values in self.attributes.items():
            theirs = other.attributes[name]
            if values.dtype != theirs.dtype or not np.array_equal(values, theirs):
                return False
        return np.array_equal(self.indices, other.indices)

    __hash__ = None  # type: ignore[assignment]

    @property
    def position(self) -> np.ndarray:
        return self.attributes[AttributeName.POSITION]

    @property
    def normal(self) -> np.ndarray:
        return self.attributes[AttributeName.NORMAL]

    @property
    def uv(self) -> np.ndarray:
        return self.attributes[AttributeName.UV0]

    @property
    def vertex_count(self) -> int:
        return len(self.position)

    @property
    def index_count(self) -> int:
        return len(self.indices)

    @property
    def triangle_count(self) -> int:
        """Number of complete triangles in the index buffer."""
        return self.index_count // 3

    def to_arrays(self) -> dict[str, np.ndarray]:
        """Flatten the mesh into named arrays (for caching or ``np.savez``)."""
        arrays = {name.value: values for name, values in self.attributes.items()}
        arrays["indices"] = self.indices
        return arrays

    @classmethod
    def from_arrays(cls, arrays: Mapping[str, np.ndarray]) -> "Mesh":
        """Rebuild a mesh from the output of ``to_arrays``."""
        attributes = {
            AttributeName(name): values
            for name, values in arrays.items()
            if name != "indices"
        }
        return cls(attributes=attributes, indices=arrays["indices"])

    def save_npz(self, path: Union[str, Path]) -> Path:
        """Write all buffers to a compressed ``.npz`` archive."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        np.savez_compressed(path, **self.to_arrays())
        return path

    def to_trimesh(self) -> trimesh.Trimesh:
        """Convert to a trimesh object for export or inspection.

        Trailing indices that do not complete a triangle are dropped.
        """
        faces = self.indices[: self.triangle_count * 3].astype(np.int64).reshape((-1, 3))
        return trimesh.Trimesh(
            vertices=self.position,
            faces=faces,
            vertex_normals=self.normal,
            process=False,
        )
