"""objmesh - Turn OBJ geometry into renderer-ready indexed meshes."""

__version__ = "0.1.0"
