"""Unit tests for OBJ parsing."""

import numpy as np
import pytest

from objmesh.core.exceptions import IndexOutOfRangeError, ObjFormatError
from objmesh.geometry import RawGeometry
from objmesh.processing import parse_obj


class TestParseObj:
    """Test OBJ document parsing."""

    def test_parse_triangle(self, triangle_obj: bytes):
        geometry = parse_obj(triangle_obj)

        assert isinstance(geometry, RawGeometry)
        assert geometry.vertex_count == 3
        assert geometry.index_count == 3
        assert sorted(geometry.indices.tolist()) == [0, 1, 2]
        np.testing.assert_allclose(
            np.sort(geometry.positions, axis=0),
            np.sort(np.array([[0, 0, 0], [1, 0, 0], [0, 1, 0]], dtype=np.float32), axis=0),
        )

    def test_quads_are_triangulated(self, quad_obj: bytes):
        geometry = parse_obj(quad_obj)

        assert geometry.vertex_count == 4
        assert geometry.index_count == 6

    def test_cube(self, cube_obj: bytes):
        geometry = parse_obj(cube_obj)

        assert geometry.vertex_count == 8
        assert geometry.index_count == 36
        assert int(geometry.indices.max()) == 7

    def test_empty_document(self):
        with pytest.raises(ObjFormatError) as exc_info:
            parse_obj(b"", source="empty.obj")

        message = str(exc_info.value)
        assert message.startswith("Invalid OBJ file")
        assert "empty.obj" in message

    def test_whitespace_document(self):
        with pytest.raises(ObjFormatError):
            parse_obj(b"   \n\n")

    def test_document_without_geometry(self):
        with pytest.raises(ObjFormatError):
            parse_obj(b"# nothing but a comment\nthis is not geometry\n")

    def test_vertices_without_faces(self):
        with pytest.raises(ObjFormatError) as exc_info:
            parse_obj(b"v 0 0 0\nv 1 0 0\n")

        assert "No faces found" in str(exc_info.value)

    def test_vertex_order_follows_document(self):
        geometry = parse_obj(b"v 0 0 0\nv 1 0 0\nv 0 1 0\nf 3 1 2\n")

        np.testing.assert_array_equal(
            geometry.positions,
            np.array([[0, 0, 0], [1, 0, 0], [0, 1, 0]], dtype=np.float32),
        )
        assert geometry.indices.tolist() == [2, 0, 1]

    def test_unreferenced_vertex_kept_in_place(self):
        geometry = parse_obj(b"v 0 0 0\nv 9 9 9\nv 1 0 0\nv 0 1 0\nf 1 3 4\n")

        assert geometry.vertex_count == 4
        np.testing.assert_array_equal(geometry.positions[1], [9, 9, 9])
        assert geometry.indices.tolist() == [0, 2, 3]

    def test_face_past_last_vertex(self):
        with pytest.raises(IndexOutOfRangeError) as exc_info:
            parse_obj(b"v 0 0 0\nv 1 0 0\nv 0 1 0\nf 1 2 4\n", source="bad.obj")

        assert exc_info.value.index == 3
        assert exc_info.value.vertex_count == 3
        assert not isinstance(exc_info.value, ObjFormatError)
