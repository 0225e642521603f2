"""Caching system for objmesh using DiskCache."""

import hashlib
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

from diskcache import Cache

from objmesh.core.config import CacheConfig
from objmesh.core.exceptions import CacheError
from objmesh.geometry.types import Mesh

logger = logging.getLogger(__name__)


class CacheManager:
    """Manages caching of assembled meshes."""

    def __init__(self, config: Optional[CacheConfig] = None):
        """Initialize cache manager.

        Args:
            config: Cache configuration

        Raises:
            CacheError: If the cache directory cannot be opened
        """
        if config is None:
            config = CacheConfig()

        self.config = config
        self.enabled = config.enabled

        if not self.enabled:
            logger.debug("Cache disabled")
            return

        self.cache_dir = Path(config.cache_dir)
        try:
            self.cache_dir.mkdir(parents=True, exist_ok=True)
            self.cache = Cache(
                str(self.cache_dir / "meshes"),
                size_limit=int(config.max_size_gb * 1024**3),
                eviction_policy="least-recently-used",
            )
        except OSError as e:
            raise CacheError(f"Cannot open cache at {self.cache_dir}: {e}") from e
        self.cache.stats(enable=True)

        logger.info(f"Cache initialized at {self.cache_dir}")

    def generate_key(
        self,
        source: Union[bytes, str, Path],
        params: Optional[Dict[str, Any]] = None,
        prefix: str = "",
    ) -> str:
        """Generate cache key from content and parameters.

        Args:
            source: Raw bytes, or a path whose contents are hashed
            params: Optional parameters dict
            prefix: Optional key prefix

        Returns:
            Cache key string
        """
        if isinstance(source, bytes):
            content_hash = hashlib.sha256(source).hexdigest()[:16]
        else:
            content_hash = self._get_file_hash(Path(source))

        param_hash = ""
        if params:
            param_str = json.dumps(params, sort_keys=True, default=str)
            param_hash = hashlib.md5(param_str.encode()).hexdigest()[:8]

        key_parts = [prefix] if prefix else []
        key_parts.extend([content_hash, param_hash])
        return "_".join(filter(None, key_parts))

    def _get_file_hash(self, file_path: Path, chunk_size: int = 8192) -> str:
        """Get first 16 characters of the SHA256 of a file's contents."""
        sha256 = hashlib.sha256()

        with open(file_path, "rb") as f:
            while chunk := f.read(chunk_size):
                sha256.update(chunk)

        return sha256.hexdigest()[:16]

    def get(self, key: str, default: Any = None) -> Any:
        """Get value from cache.

        Args:
            key: Cache key
            default: Default value if not found

        Returns:
            Cached value or default
        """
        if not self.enabled:
            return default

        try:
            value = self.cache.get(key, default)
            if value is not default:
                logger.debug(f"Cache hit: {key}")
            else:
                logger.debug(f"Cache miss: {key}")
            return value
        except Exception as e:
            logger.warning(f"Cache get error: {e}")
            return default

    def set(
        self,
        key: str,
        value: Any,
        ttl: Optional[float] = None,
        tag: Optional[str] = None,
    ) -> None:
        """Set value in cache.

        Args:
            key: Cache key
            value: Value to cache
            ttl: Time to live in seconds
            tag: Optional tag for grouped operations
        """
        if not self.enabled:
            return

        try:
            expire = ttl if ttl else self.config.ttl_days * 24 * 3600
            self.cache.set(key, value, expire=expire, tag=tag)
            logger.debug(f"Cache set: {key} (TTL: {expire}s)")
        except Exception as e:
            logger.warning(f"Cache set error: {e}")

    def delete(self, key: str) -> bool:
        """Delete key from cache.

        Returns:
            True if deleted, False otherwise
        """
        if not self.enabled:
            return False

        try:
            return bool(self.cache.delete(key))
        except Exception as e:
            logger.warning(f"Cache delete error: {e}")
            return False

    def clear(self) -> None:
        """Clear entire cache."""
        if not self.enabled:
            return

        try:
            self.cache.clear()
            logger.info("Cache cleared")
        except Exception as e:
            logger.warning(f"Cache clear error: {e}")

    def evict_expired(self) -> int:
        """Evict expired entries.

        Returns:
            Number of entries evicted
        """
        if not self.enabled:
            return 0

        try:
            return self.cache.expire()
        except Exception as e:
            logger.warning(f"Cache evict error: {e}")
            return 0

    def get_stats(self) -> Dict[str, Any]:
        """Get cache statistics.

        Returns:
            Dictionary with cache statistics
        """
        if not self.enabled:
            return {"enabled": False}

        try:
            hits, misses = self.cache.stats()
            total = hits + misses
            return {
                "enabled": True,
                "location": str(self.cache_dir),
                "size_limit_gb": self.config.max_size_gb,
                "entries": len(self.cache),
                "size_bytes": self.cache.volume(),
                "size_mb": self.cache.volume() / 1024 / 1024,
                "hits": hits,
                "misses": misses,
                "hit_rate": hits / total if total > 0 else 0.0,
            }
        except Exception as e:
            logger.warning(f"Cache stats error: {e}")
            return {"enabled": True, "error": str(e)}

    def cache_mesh(
        self,
        key: str,
        mesh: Mesh,
        ttl: Optional[int] = None,
    ) -> None:
        """Cache an assembled mesh as plain arrays.

        Args:
            key: Cache key
            mesh: Mesh to cache
            ttl: Optional TTL override (defaults to the configured ttl_days)
        """
        self.set(
            f"mesh_{key}",
            {"arrays": mesh.to_arrays(), "topology": mesh.topology.value},
            ttl=ttl,
            tag="mesh",
        )

    def get_mesh(self, key: str) -> Optional[Mesh]:
        """Get a cached mesh.

        Args:
            key: Cache key

        Returns:
            Rebuilt immutable mesh or None
        """
        data = self.get(f"mesh_{key}")
        if not data:
            return None
        return Mesh.from_arrays(data["arrays"])


def create_cache_manager(
    config: Optional[CacheConfig] = None
) -> CacheManager:
    """Create a cache manager instance."""
    return CacheManager(config)
