"""Content loaders that turn asset files into meshes."""

from objmesh.loaders.base import AssetLoader
from objmesh.loaders.obj_loader import ObjLoader, load_obj
from objmesh.loaders.registry import LoaderRegistry, LoadResult

__all__ = [
    "AssetLoader",
    "ObjLoader",
    "load_obj",
    "LoaderRegistry",
    "LoadResult",
]
