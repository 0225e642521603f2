"""Placeholder texture-coordinate channel."""

import numpy as np

from objmesh.core.exceptions import ConfigurationError, GeometryError

SUPPORTED_COMPONENTS = (2, 3)


def placeholder_uvs(vertex_count: int, components: int = 3) -> np.ndarray:
    """Emit a zero-filled ``UV0`` buffer, one entry per vertex.

    OBJ content reaches this stage without texture coordinates, so every entry
    is the origin. Three components is the default buffer layout; two give a
    genuine texture-coordinate shape.

    Args:
        vertex_count: Number of vertices
        components: Components per entry (2 or 3)

    Returns:
        Array of zeros (vertex_count, components)

    Raises:
        ConfigurationError: If components is not supported
        GeometryError: If vertex_count is negative
    """
    if components not in SUPPORTED_COMPONENTS:
        raise ConfigurationError(
            f"UV components must be one of {SUPPORTED_COMPONENTS}, got {components}"
        )
    if vertex_count < 0:
        raise GeometryError(f"Vertex count cannot be negative: {vertex_count}")
    return np.zeros((vertex_count, components), dtype=np.float32)
