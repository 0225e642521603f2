"""Vertex position ingest."""

import numpy as np

from objmesh.geometry.types import POSITION_DTYPE, RawGeometry


def position_attribute(geometry: RawGeometry) -> np.ndarray:
    """Copy parsed positions into a ``POSITION`` buffer, unchanged.

    Args:
        geometry: Parsed geometry

    Returns:
        Array of positions (N, 3) in input order
    """
    return np.array(geometry.positions, dtype=POSITION_DTYPE, copy=True)
