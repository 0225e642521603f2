"""Extension-based dispatch and batch loading of mesh assets."""

import concurrent.futures
import os
import time
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

from tqdm import tqdm

from objmesh.core.config import Config
from objmesh.core.exceptions import ObjMeshError, UnsupportedExtensionError
from objmesh.geometry.types import Mesh
from objmesh.loaders.base import AssetLoader
from objmesh.loaders.obj_loader import ObjLoader
from objmesh.utils.cache import CacheManager, create_cache_manager
from objmesh.utils.logging import get_logger, log_load_result, log_performance

logger = get_logger(__name__)


class LoadResult:
    """Result of loading one asset."""

    def __init__(
        self,
        success: bool,
        path: Path,
        mesh: Optional[Mesh] = None,
        error: Optional[str] = None,
        error_type: Optional[str] = None,
        metrics: Optional[Dict[str, Any]] = None,
    ):
        """Initialize load result.

        Args:
            success: Whether the load succeeded
            path: Asset path
            mesh: Loaded mesh (if successful)
            error: Error message (if failed)
            error_type: Exception class name (if failed)
            metrics: Timing and size metrics
        """
        self.success = success
        self.path = path
        self.mesh = mesh
        self.error = error
        self.error_type = error_type
        self.metrics = metrics or {}
        self.timestamp = time.time()


class LoaderRegistry:
    """Routes asset files to loaders by extension."""

    def __init__(
        self,
        config: Optional[Config] = None,
        cache_manager: Optional[CacheManager] = None,
        register_defaults: bool = True,
    ):
        """Initialize registry.

        Args:
            config: Configuration object
            cache_manager: Cache manager (created from config if not provided)
            register_defaults: Register the OBJ loader
        """
        self.config = config or Config()
        self.cache_manager = cache_manager or (
            create_cache_manager(self.config.cache) if self.config.cache.enabled else None
        )
        self._loaders: Dict[str, AssetLoader] = {}

        if register_defaults:
            self.register(ObjLoader(config=self.config, cache_manager=self.cache_manager))

    def register(self, loader: AssetLoader) -> None:
        """Register a loader for each extension it declares.

        Later registrations replace earlier ones for the same extension.
        """
        for extension in loader.extensions():
            self._loaders[extension.lower().lstrip(".")] = loader

    def extensions(self) -> List[str]:
        """Get the registered extensions."""
        return sorted(self._loaders)

    def loader_for(self, path: Union[str, Path]) -> AssetLoader:
        """Find the loader for a path.

        Raises:
            UnsupportedExtensionError: If no loader handles the extension
        """
        extension = Path(path).suffix.lower().lstrip(".")
        try:
            return self._loaders[extension]
        except KeyError:
            raise UnsupportedExtensionError(extension, self.extensions()) from None

    def load(self, path: Union[str, Path]) -> Mesh:
        """Load one asset, raising on failure."""
        return self.loader_for(path).load_file(path)

    def load_single(self, path: Union[str, Path]) -> LoadResult:
        """Load one asset and report the outcome as a result.

        Args:
            path: Asset path

        Returns:
            LoadResult with success status and metrics
        """
        path = Path(path)
        start_time = time.perf_counter()
        metrics: Dict[str, Any] = {}

        try:
            mesh = self.load(path)
        except ObjMeshError as e:
            metrics["total_time"] = time.perf_counter() - start_time
            result = LoadResult(
                success=False,
                path=path,
                error=str(e),
                error_type=type(e).__name__,
                metrics=metrics,
            )
        else:
            metrics["total_time"] = time.perf_counter() - start_time
            metrics["vertex_count"] = mesh.vertex_count
            metrics["index_count"] = mesh.index_count
            result = LoadResult(success=True, path=path, mesh=mesh, metrics=metrics)

        log_load_result(logger, result)
        return result

    def load_many(
        self,
        paths: Sequence[Union[str, Path]],
        parallel: Optional[bool] = None,
        max_workers: Optional[int] = None,
        progress: bool = False,
    ) -> List[LoadResult]:
        """Load several assets independently.

        A failing asset never affects the others. Results follow the order
        of ``paths``.

        Args:
            paths: Asset paths
            parallel: Load in a thread pool (defaults to config)
            max_workers: Maximum parallel workers (defaults to config, then auto)
            progress: Show a progress bar

        Returns:
            List of LoadResult objects
        """
        if parallel is None:
            parallel = self.config.loader.parallel
        max_workers = max_workers or self.config.loader.max_workers

        start_time = time.perf_counter()
        results = self._run_batch(paths, parallel, max_workers, progress)
        log_performance(
            logger,
            "load_many",
            time.perf_counter() - start_time,
            files=len(paths),
            failed=sum(1 for r in results if not r.success),
            parallel=parallel,
        )
        return results

    def _run_batch(
        self,
        paths: Sequence[Union[str, Path]],
        parallel: bool,
        max_workers: Optional[int],
        progress: bool,
    ) -> List[LoadResult]:
        with tqdm(
            total=len(paths),
            desc="Loading meshes",
            disable=not progress,
            unit="files",
        ) as pbar:
            if not parallel or len(paths) <= 1:
                results = []
                for path in paths:
                    results.append(self.load_single(path))
                    pbar.update(1)
                return results

            if max_workers is None:
                max_workers = min(os.cpu_count() or 1, len(paths), 8)

            with concurrent.futures.ThreadPoolExecutor(max_workers=max_workers) as executor:
                futures = [executor.submit(self.load_single, path) for path in paths]
                for _ in concurrent.futures.as_completed(futures):
                    pbar.update(1)

            return [future.result() for future in futures]
