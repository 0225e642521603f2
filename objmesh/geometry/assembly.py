"""Mesh assembly from attribute and index buffers."""

from typing import Any, Mapping, Optional

import numpy as np

from objmesh.core.config import NormalsConfig, UVConfig
from objmesh.core.exceptions import MeshAssemblyError
from objmesh.geometry.ingest import position_attribute
from objmesh.geometry.normals import NormalsFactory
from objmesh.geometry.types import AttributeName, Mesh, RawGeometry, Topology
from objmesh.geometry.uv import placeholder_uvs


def assemble_mesh(
    position: np.ndarray,
    normal: np.ndarray,
    uv: np.ndarray,
    indices: np.ndarray,
    metadata: Optional[Mapping[str, Any]] = None,
) -> Mesh:
    """Combine attribute buffers and indices into a triangle-list mesh.

    Buffers are copied, so the mesh never aliases the caller's arrays and
    repeated assembly from the same inputs yields equal meshes.

    Args:
        position: Positions (N, 3)
        normal: Normals (N, 3)
        uv: Texture coordinates (N, 2 or 3)
        indices: Index buffer (M,)
        metadata: Optional descriptive metadata

    Returns:
        Assembled mesh

    Raises:
        MeshAssemblyError: If attribute buffer lengths disagree
    """
    attributes = {
        AttributeName.POSITION: position,
        AttributeName.NORMAL: normal,
        AttributeName.UV0: uv,
    }
    lengths = {name.value: len(values) for name, values in attributes.items()}
    if len(set(lengths.values())) > 1:
        raise MeshAssemblyError(lengths)

    return Mesh(
        attributes=attributes,
        indices=indices,
        topology=Topology.TRIANGLE_LIST,
        metadata=metadata or {},
    )


def build_mesh(
    geometry: RawGeometry,
    normals_config: Optional[NormalsConfig] = None,
    uv_config: Optional[UVConfig] = None,
    metadata: Optional[Mapping[str, Any]] = None,
) -> Mesh:
    """Run ingest, normal synthesis, UV placeholder and assembly.

    Args:
        geometry: Parsed geometry
        normals_config: Normal synthesis settings (defaults if None)
        uv_config: UV settings (defaults if None)
        metadata: Optional descriptive metadata

    Returns:
        Assembled mesh

    Raises:
        IndexOutOfRangeError: If an index references a missing vertex
    """
    normals_config = normals_config or NormalsConfig()
    uv_config = uv_config or UVConfig()

    positions = position_attribute(geometry)
    strategy = NormalsFactory.create(
        normals_config.mode, renormalize=normals_config.renormalize
    )
    normals = strategy.compute(positions, geometry.indices)
    uvs = placeholder_uvs(geometry.vertex_count, uv_config.components)

    return assemble_mesh(positions, normals, uvs, geometry.indices, metadata=metadata)
