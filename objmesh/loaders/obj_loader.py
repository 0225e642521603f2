"""Wavefront OBJ content loader."""

from dataclasses import replace
from pathlib import Path
from typing import Optional, Sequence, Union

from objmesh.core.config import Config
from objmesh.geometry.assembly import build_mesh
from objmesh.geometry.types import Mesh, RawGeometry
from objmesh.loaders.base import AssetLoader
from objmesh.processing.parser import parse_obj
from objmesh.utils.cache import CacheManager
from objmesh.utils.logging import StructuredLogger, get_logger

logger = get_logger(__name__)


class ObjLoader(AssetLoader):
    """Loads OBJ documents into renderer-ready meshes.

    Each call is independent: the loader holds configuration only, so one
    instance can serve concurrent loads.
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        cache_manager: Optional[CacheManager] = None,
    ):
        """Initialize OBJ loader.

        Args:
            config: Configuration object
            cache_manager: Optional cache manager for storing loaded meshes
        """
        self.config = config or Config()
        self.cache_manager = cache_manager
        self.max_file_size = int(self.config.loader.max_file_size_mb * 1024 * 1024)

    def extensions(self) -> Sequence[str]:
        return self.config.loader.extensions

    def load(self, data: bytes, source: Optional[Union[str, Path]] = None) -> Mesh:
        """Parse OBJ bytes and assemble a mesh.

        Args:
            data: OBJ document bytes
            source: Optional name used in errors and logs

        Returns:
            Assembled mesh

        Raises:
            ObjFormatError: If the document cannot be parsed
            IndexOutOfRangeError: If a face references a missing vertex
        """
        cache_key = None
        if self.cache_manager and self.cache_manager.enabled:
            cache_key = self.cache_manager.generate_key(
                data, params=self._cache_params(), prefix="obj"
            )
            cached = self.cache_manager.get_mesh(cache_key)
            if cached is not None:
                logger.debug("obj_cache_hit", source=str(source), key=cache_key)
                return replace(cached, metadata=self._metadata(source))

        with StructuredLogger(logger, "obj_load", source=str(source)) as op:
            geometry = parse_obj(data, source=source)
            mesh = self.load_geometry(geometry, source=source)
            op.update_context(
                vertices=mesh.vertex_count,
                indices=mesh.index_count,
            )

        if cache_key:
            self.cache_manager.cache_mesh(cache_key, mesh)

        return mesh

    def load_geometry(
        self,
        geometry: RawGeometry,
        source: Optional[Union[str, Path]] = None,
    ) -> Mesh:
        """Assemble a mesh from already-parsed geometry."""
        return build_mesh(
            geometry,
            normals_config=self.config.normals,
            uv_config=self.config.uv,
            metadata=self._metadata(source),
        )

    @staticmethod
    def _metadata(source: Optional[Union[str, Path]]) -> dict:
        return {"source": str(source)} if source is not None else {}

    def _cache_params(self) -> dict:
        return {
            "normals": self.config.normals.model_dump(),
            "uv": self.config.uv.model_dump(),
        }


def load_obj(
    file_path: Union[str, Path],
    config: Optional[Config] = None,
    cache_manager: Optional[CacheManager] = None,
) -> Mesh:
    """Convenience function to load an OBJ file.

    Args:
        file_path: Path to OBJ file
        config: Optional configuration
        cache_manager: Optional cache manager for caching loaded meshes

    Returns:
        Assembled mesh

    Raises:
        ObjLoadError: If file cannot be read
        ObjFormatError: If the document cannot be parsed
        IndexOutOfRangeError: If a face references a missing vertex
    """
    loader = ObjLoader(config=config, cache_manager=cache_manager)
    return loader.load_file(file_path)
