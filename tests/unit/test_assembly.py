"""Unit tests for position ingest, UV placeholders and mesh assembly."""

import numpy as np
import pytest

from objmesh.core.config import NormalsConfig, UVConfig
from objmesh.core.exceptions import (
    ConfigurationError,
    GeometryError,
    IndexOutOfRangeError,
    MeshAssemblyError,
)
from objmesh.geometry import (
    AttributeName,
    RawGeometry,
    Topology,
    assemble_mesh,
    build_mesh,
    placeholder_uvs,
    position_attribute,
)


class TestPositionIngest:
    """Test position buffer ingest."""

    def test_identity(self, quad_geometry):
        positions = position_attribute(quad_geometry)

        np.testing.assert_array_equal(positions, quad_geometry.positions)
        assert positions.dtype == np.float32

    def test_returns_independent_copy(self, quad_geometry):
        positions = position_attribute(quad_geometry)
        positions[0] = [9, 9, 9]

        np.testing.assert_array_equal(quad_geometry.positions[0], [0, 0, 0])


class TestPlaceholderUVs:
    """Test the constant UV channel."""

    def test_three_component_default(self):
        uvs = placeholder_uvs(5)

        assert uvs.shape == (5, 3)
        assert not np.any(uvs)

    def test_two_components(self):
        uvs = placeholder_uvs(4, components=2)

        assert uvs.shape == (4, 2)
        assert not np.any(uvs)

    def test_empty(self):
        assert placeholder_uvs(0).shape == (0, 3)

    def test_invalid_components(self):
        with pytest.raises(ConfigurationError):
            placeholder_uvs(3, components=4)

    def test_negative_count(self):
        with pytest.raises(GeometryError):
            placeholder_uvs(-1)


class TestAssembleMesh:
    """Test mesh assembly."""

    def _buffers(self, count: int = 3):
        position = np.arange(count * 3, dtype=np.float32).reshape((count, 3))
        normal = np.ones((count, 3), dtype=np.float32)
        uv = np.zeros((count, 3), dtype=np.float32)
        indices = np.array([0, 1, 2], dtype=np.uint32)
        return position, normal, uv, indices

    def test_assemble(self):
        position, normal, uv, indices = self._buffers()

        mesh = assemble_mesh(position, normal, uv, indices)

        assert mesh.topology is Topology.TRIANGLE_LIST
        assert set(mesh.attributes) == {
            AttributeName.POSITION,
            AttributeName.NORMAL,
            AttributeName.UV0,
        }
        np.testing.assert_array_equal(mesh.position, position)
        np.testing.assert_array_equal(mesh.normal, normal)
        np.testing.assert_array_equal(mesh.indices, indices)
        assert mesh.indices.dtype == np.uint32

    def test_length_mismatch(self):
        position, normal, uv, indices = self._buffers()

        with pytest.raises(MeshAssemblyError) as exc_info:
            assemble_mesh(position, normal[:2], uv, indices)

        assert exc_info.value.lengths == {"POSITION": 3, "NORMAL": 2, "UV0": 3}

    def test_idempotent(self):
        buffers = self._buffers()

        first = assemble_mesh(*buffers)
        second = assemble_mesh(*buffers)

        assert first == second
        assert first is not second

    def test_does_not_alias_inputs(self):
        position, normal, uv, indices = self._buffers()
        mesh = assemble_mesh(position, normal, uv, indices)

        position[0] = [-1, -1, -1]
        indices[0] = 2

        assert mesh.position[0].tolist() == [0.0, 1.0, 2.0]
        assert mesh.indices[0] == 0

    def test_mesh_is_read_only(self):
        mesh = assemble_mesh(*self._buffers())

        with pytest.raises(ValueError):
            mesh.position[0] = [1, 1, 1]
        with pytest.raises(TypeError):
            mesh.attributes[AttributeName.UV0] = np.zeros((3, 2))

    def test_indices_not_range_checked(self):
        """Assembly leaves index validity to the caller."""
        position, normal, uv, _ = self._buffers()

        mesh = assemble_mesh(position, normal, uv, np.array([0, 1, 99]))

        assert mesh.index_count == 3


class TestBuildMesh:
    """Test the full geometry pipeline."""

    def test_lengths(self, quad_geometry):
        mesh = build_mesh(quad_geometry)

        assert mesh.vertex_count == 4
        assert len(mesh.normal) == len(mesh.uv) == len(mesh.position) == 4
        assert mesh.index_count == 6
        assert mesh.triangle_count == 2

    def test_single_triangle_pipeline(self, triangle_geometry):
        mesh = build_mesh(triangle_geometry)

        np.testing.assert_array_equal(mesh.position, triangle_geometry.positions)
        np.testing.assert_allclose(mesh.normal[0], [0, 0, -1], atol=1e-6)
        assert not np.any(mesh.normal[1:])
        assert mesh.uv.shape == (3, 3)
        assert not np.any(mesh.uv)
        np.testing.assert_array_equal(mesh.indices, [0, 1, 2])

    def test_short_index_stream(self):
        geometry = RawGeometry.from_sequences([(0, 0, 0), (1, 1, 1)], [0, 1])

        mesh = build_mesh(geometry)

        assert not np.any(mesh.normal)
        assert mesh.index_count == 2
        assert mesh.triangle_count == 0

    def test_out_of_range_aborts(self):
        geometry = RawGeometry.from_sequences(
            [(0, 0, 0), (1, 0, 0), (0, 1, 0)],
            [0, 1, 3],
        )

        with pytest.raises(IndexOutOfRangeError):
            build_mesh(geometry)

    def test_configured_modes(self, quad_geometry):
        mesh = build_mesh(
            quad_geometry,
            normals_config=NormalsConfig(mode="face_average", renormalize=True),
            uv_config=UVConfig(components=2),
        )

        np.testing.assert_allclose(
            mesh.normal, np.tile([0.0, 0.0, -1.0], (4, 1)), atol=1e-6
        )
        assert mesh.uv.shape == (4, 2)

    def test_rebuild_is_equal(self, quad_geometry):
        assert build_mesh(quad_geometry) == build_mesh(quad_geometry)

    def test_metadata_attached(self, triangle_geometry):
        mesh = build_mesh(triangle_geometry, metadata={"source": "triangle.obj"})

        assert mesh.metadata["source"] == "triangle.obj"
