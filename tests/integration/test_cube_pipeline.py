"""Integration tests running OBJ files through the full loading pipeline."""

from pathlib import Path

import numpy as np
import pytest
from typer.testing import CliRunner

from objmesh.cli.app import app
from objmesh.core import Config
from objmesh.core.config import CacheConfig
from objmesh.geometry import AttributeName, Topology
from objmesh.loaders import LoaderRegistry
from objmesh.processing import inspect_mesh
from objmesh.utils import CacheManager


@pytest.mark.integration
class TestCubePipeline:
    """Load the cube fixture end to end."""

    def test_default_pipeline(self, cube_obj_path: Path):
        mesh = LoaderRegistry().load(cube_obj_path)

        assert mesh.topology is Topology.TRIANGLE_LIST
        assert set(mesh.attributes) == {
            AttributeName.POSITION,
            AttributeName.NORMAL,
            AttributeName.UV0,
        }
        assert mesh.vertex_count == 8
        assert mesh.index_count == 36
        assert mesh.normal.dtype == np.float32
        assert not mesh.uv.any()
        assert mesh.metadata["source"] == str(cube_obj_path)

        report = inspect_mesh(mesh)
        assert report.is_renderable
        assert report.degenerate_triangles == 0
        np.testing.assert_allclose(report.extents, [1, 1, 1])

    def test_face_average_normals_point_inward(self, cube_obj_path: Path):
        # Counter-clockwise outward faces produce inward normals with this cross order
        config = Config(normals={"mode": "face_average", "renormalize": True})

        mesh = LoaderRegistry(config=config).load(cube_obj_path)

        dots = np.einsum("ij,ij->i", mesh.normal, mesh.position)
        assert np.all(dots < 0)
        np.testing.assert_allclose(
            np.linalg.norm(mesh.normal, axis=1), np.ones(8), atol=1e-6
        )

    def test_batch_with_cache(self, cube_obj_path: Path, quad_obj_path: Path, temp_dir: Path):
        config = Config(cache={"enabled": True, "cache_dir": str(temp_dir / "cache")})
        registry = LoaderRegistry(config=config)
        paths = [cube_obj_path, quad_obj_path]

        first = registry.load_many(paths, parallel=True)
        second = registry.load_many(paths, parallel=True)

        assert all(r.success for r in first + second)
        for a, b in zip(first, second):
            assert a.mesh == b.mesh
            assert b.mesh.metadata["source"] == str(b.path)

        stats = CacheManager(CacheConfig(enabled=True, cache_dir=temp_dir / "cache")).get_stats()
        assert stats["entries"] == 2

    def test_cli_conversion(self, cube_obj_path: Path, temp_dir: Path):
        out_dir = temp_dir / "buffers"

        result = CliRunner().invoke(
            app, ["convert", str(cube_obj_path), "-o", str(out_dir), "--parallel"]
        )

        assert result.exit_code == 0
        mesh = LoaderRegistry().load(cube_obj_path)
        with np.load(out_dir / "cube.npz") as data:
            np.testing.assert_array_equal(data["POSITION"], mesh.position)
            np.testing.assert_array_equal(data["NORMAL"], mesh.normal)
            np.testing.assert_array_equal(data["indices"], mesh.indices)
