"""Mesh inspection and reporting functionality."""

from dataclasses import dataclass
from typing import List

import numpy as np

from objmesh.geometry.normals import face_normals
from objmesh.geometry.types import Mesh


@dataclass
class MeshReport:
    """Report describing an assembled mesh."""

    is_renderable: bool
    vertex_count: int
    index_count: int
    triangle_count: int
    trailing_indices: int
    uv_components: int
    bounds_min: np.ndarray
    bounds_max: np.ndarray
    extents: np.ndarray
    errors: List[str]
    warnings: List[str]

    # Index usage
    max_index: int
    unreferenced_vertices: int
    degenerate_triangles: int

    # Normal statistics
    zero_normals: int
    unit_normals: int
    normal_length_min: float
    normal_length_max: float
    normal_length_mean: float


class MeshInspector:
    """Inspects assembled meshes for rendering problems."""

    UNIT_TOLERANCE = 1e-4
    MIN_NORMAL_LENGTH = 1e-12

    def inspect(self, mesh: Mesh) -> MeshReport:
        """Build a report for a mesh.

        Args:
            mesh: Assembled mesh

        Returns:
            MeshReport with results
        """
        errors = []
        warnings = []

        vertex_count = mesh.vertex_count
        indices = mesh.indices.astype(np.int64)

        if vertex_count == 0:
            errors.append("Mesh has no vertices")
        if mesh.triangle_count == 0:
            warnings.append("Mesh has no triangles")

        trailing = mesh.index_count % 3
        if trailing:
            warnings.append(f"{trailing} trailing indices do not form a triangle")

        max_index = int(indices.max()) if indices.size else -1
        if max_index >= vertex_count:
            out_of_range = int(np.sum(indices >= vertex_count))
            errors.append(f"{out_of_range} indices reference missing vertices")

        referenced = np.zeros(vertex_count, dtype=bool)
        referenced[indices[indices < vertex_count]] = True
        unreferenced = int(np.sum(~referenced))
        if unreferenced:
            warnings.append(f"{unreferenced} vertices are not referenced")

        degenerate = self._count_degenerate(mesh) if not errors else 0
        if degenerate:
            warnings.append(f"{degenerate} degenerate triangles found")

        lengths = np.linalg.norm(mesh.normal, axis=1) if vertex_count else np.array([0.0])
        zero_normals = int(np.sum(lengths < self.MIN_NORMAL_LENGTH)) if vertex_count else 0
        unit_normals = int(np.sum(np.abs(lengths - 1.0) < self.UNIT_TOLERANCE)) if vertex_count else 0
        if zero_normals:
            warnings.append(f"{zero_normals} vertices have a zero normal")

        if vertex_count:
            bounds_min = mesh.position.min(axis=0)
            bounds_max = mesh.position.max(axis=0)
        else:
            bounds_min = np.zeros(3)
            bounds_max = np.zeros(3)

        return MeshReport(
            is_renderable=len(errors) == 0,
            vertex_count=vertex_count,
            index_count=mesh.index_count,
            triangle_count=mesh.triangle_count,
            trailing_indices=trailing,
            uv_components=mesh.uv.shape[1] if mesh.uv.ndim == 2 else 0,
            bounds_min=bounds_min,
            bounds_max=bounds_max,
            extents=bounds_max - bounds_min,
            errors=errors,
            warnings=warnings,
            max_index=max_index,
            unreferenced_vertices=unreferenced,
            degenerate_triangles=degenerate,
            zero_normals=zero_normals,
            unit_normals=unit_normals,
            normal_length_min=float(np.min(lengths)),
            normal_length_max=float(np.max(lengths)),
            normal_length_mean=float(np.mean(lengths)),
        )

    def _count_degenerate(self, mesh: Mesh) -> int:
        """Count triangles whose corners do not span a plane."""
        if mesh.triangle_count == 0:
            return 0
        faces = mesh.indices[: mesh.triangle_count * 3].astype(np.int64).reshape((-1, 3))
        positions = mesh.position
        normals = face_normals(
            positions[faces[:, 0]], positions[faces[:, 1]], positions[faces[:, 2]]
        )
        return int(np.sum(~np.any(normals, axis=1)))


def inspect_mesh(mesh: Mesh) -> MeshReport:
    """Convenience function to inspect a mesh."""
    return MeshInspector().inspect(mesh)
