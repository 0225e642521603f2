"""Geometry processing for objmesh."""

from objmesh.geometry.assembly import assemble_mesh, build_mesh
from objmesh.geometry.ingest import position_attribute
from objmesh.geometry.normals import (
    FaceAverageNormals,
    NormalsFactory,
    NormalStrategy,
    SlidingWindowNormals,
    synthesize_normals,
)
from objmesh.geometry.types import AttributeName, Mesh, RawGeometry, Topology
from objmesh.geometry.uv import placeholder_uvs

__all__ = [
    "AttributeName",
    "Mesh",
    "RawGeometry",
    "Topology",
    "position_attribute",
    "NormalStrategy",
    "NormalsFactory",
    "SlidingWindowNormals",
    "FaceAverageNormals",
    "synthesize_normals",
    "placeholder_uvs",
    "assemble_mesh",
    "build_mesh",
]
