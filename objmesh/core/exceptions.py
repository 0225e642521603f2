"""Custom exceptions for objmesh."""

from pathlib import Path
from typing import Any, Optional, Sequence, Union


class ObjMeshError(Exception):
    """Base exception for objmesh."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.details = details or {}


class ConfigurationError(ObjMeshError):
    """Raised when configuration is invalid."""

    pass


class GeometryError(ObjMeshError):
    """Raised when raw geometry arrays are malformed."""

    pass


class ObjLoadError(ObjMeshError):
    """Raised when an OBJ file cannot be read."""

    def __init__(self, path: Path, reason: str):
        super().__init__(f"Failed to load OBJ file '{path}': {reason}")
        self.path = path
        self.reason = reason


class ObjFormatError(ObjMeshError):
    """Raised when bytes cannot be parsed as an OBJ document."""

    def __init__(self, source: Optional[Union[str, Path]], reason: str):
        where = f" '{source}'" if source else ""
        super().__init__(f"Invalid OBJ file{where}: {reason}")
        self.source = source
        self.reason = reason


class IndexOutOfRangeError(ObjMeshError):
    """Raised when a triangle index references a missing vertex."""

    def __init__(self, index: int, vertex_count: int):
        super().__init__(
            f"Vertex index {index} out of range for {vertex_count} vertices",
            details={"index": index, "vertex_count": vertex_count},
        )
        self.index = index
        self.vertex_count = vertex_count


class MeshAssemblyError(ObjMeshError):
    """Raised when attribute buffers cannot form a mesh."""

    def __init__(self, lengths: dict[str, int]):
        summary = ", ".join(f"{name}={length}" for name, length in lengths.items())
        super().__init__(
            f"Attribute buffer lengths disagree: {summary}",
            details={"lengths": lengths},
        )
        self.lengths = lengths


class UnsupportedExtensionError(ObjMeshError):
    """Raised when no loader is registered for a file extension."""

    def __init__(self, extension: str, available: Sequence[str]):
        super().__init__(
            f"No loader registered for extension '{extension}'. "
            f"Available: {', '.join(available) or 'none'}"
        )
        self.extension = extension
        self.available = list(available)


class CacheError(ObjMeshError):
    """Raised when cache operations fail."""

    pass
