"""OBJ parsing and mesh inspection for objmesh."""

from objmesh.processing.inspector import MeshInspector, MeshReport, inspect_mesh
from objmesh.processing.parser import parse_obj

__all__ = [
    "parse_obj",
    "MeshInspector",
    "MeshReport",
    "inspect_mesh",
]
