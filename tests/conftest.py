"""Shared test fixtures and configuration."""

import shutil
import tempfile
from pathlib import Path
from typing import Generator

import pytest

from objmesh.core import Config
from objmesh.geometry import RawGeometry
from objmesh.utils import CacheManager

TRIANGLE_OBJ = b"""# single triangle
v 0.0 0.0 0.0
v 1.0 0.0 0.0
v 0.0 1.0 0.0
f 1 2 3
"""

QUAD_OBJ = b"""# unit quad in the XY plane
v 0.0 0.0 0.0
v 1.0 0.0 0.0
v 1.0 1.0 0.0
v 0.0 1.0 0.0
f 1 2 3 4
"""

CUBE_OBJ = b"""# unit cube centred on the origin, counter-clockwise outward faces
o cube
v -0.5 -0.5 -0.5
v 0.5 -0.5 -0.5
v 0.5 0.5 -0.5
v -0.5 0.5 -0.5
v -0.5 -0.5 0.5
v 0.5 -0.5 0.5
v 0.5 0.5 0.5
v -0.5 0.5 0.5
f 1 4 3
f 1 3 2
f 5 6 7
f 5 7 8
f 1 2 6
f 1 6 5
f 4 8 7
f 4 7 3
f 1 5 8
f 1 8 4
f 2 3 7
f 2 7 6
"""


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    temp_path = Path(tempfile.mkdtemp())
    yield temp_path
    shutil.rmtree(temp_path)


@pytest.fixture
def test_config() -> Config:
    """Create a test configuration."""
    return Config(
        cache={"enabled": False},
        logging={"colorize": False},
    )


@pytest.fixture
def cache_manager(temp_dir: Path) -> CacheManager:
    """Create a test cache manager."""
    from objmesh.core.config import CacheConfig

    cache_config = CacheConfig(
        enabled=True,
        cache_dir=temp_dir / "cache",
        max_size_gb=0.1,  # Small size for tests
        ttl_days=1,
    )
    return CacheManager(cache_config)


@pytest.fixture
def triangle_geometry() -> RawGeometry:
    """A single right triangle in the XY plane."""
    return RawGeometry.from_sequences(
        [(0, 0, 0), (1, 0, 0), (0, 1, 0)],
        [0, 1, 2],
    )


@pytest.fixture
def quad_geometry() -> RawGeometry:
    """A unit quad split into two triangles."""
    return RawGeometry.from_sequences(
        [(0, 0, 0), (1, 0, 0), (1, 1, 0), (0, 1, 0)],
        [0, 1, 2, 0, 2, 3],
    )


@pytest.fixture
def triangle_obj() -> bytes:
    """Single-triangle OBJ document."""
    return TRIANGLE_OBJ


@pytest.fixture
def quad_obj() -> bytes:
    """Quad OBJ document."""
    return QUAD_OBJ


@pytest.fixture
def cube_obj() -> bytes:
    """Cube OBJ document."""
    return CUBE_OBJ


@pytest.fixture
def triangle_obj_path(temp_dir: Path) -> Path:
    """Write the single-triangle OBJ document."""
    path = temp_dir / "triangle.obj"
    path.write_bytes(TRIANGLE_OBJ)
    return path


@pytest.fixture
def quad_obj_path(temp_dir: Path) -> Path:
    """Write the quad OBJ document."""
    path = temp_dir / "quad.obj"
    path.write_bytes(QUAD_OBJ)
    return path


@pytest.fixture
def cube_obj_path(temp_dir: Path) -> Path:
    """Write the cube OBJ document."""
    path = temp_dir / "cube.obj"
    path.write_bytes(CUBE_OBJ)
    return path


# Markers for different test categories
def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests that test individual components"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests that test multiple components"
    )
    config.addinivalue_line(
        "markers", "slow: Tests that take more than 1 second"
    )
