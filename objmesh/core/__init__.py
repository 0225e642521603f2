"""Core configuration and errors for objmesh."""

from objmesh.core.config import (
    CacheConfig,
    Config,
    LoaderConfig,
    LoggingConfig,
    NormalsConfig,
    UVConfig,
    get_default_config,
    load_config,
)
from objmesh.core.exceptions import (
    CacheError,
    ConfigurationError,
    GeometryError,
    IndexOutOfRangeError,
    MeshAssemblyError,
    ObjFormatError,
    ObjLoadError,
    ObjMeshError,
    UnsupportedExtensionError,
)

__all__ = [
    # Config classes
    "Config",
    "NormalsConfig",
    "UVConfig",
    "LoaderConfig",
    "CacheConfig",
    "LoggingConfig",
    # Config functions
    "get_default_config",
    "load_config",
    # Exceptions
    "ObjMeshError",
    "ConfigurationError",
    "GeometryError",
    "ObjLoadError",
    "ObjFormatError",
    "IndexOutOfRangeError",
    "MeshAssemblyError",
    "UnsupportedExtensionError",
    "CacheError",
]
