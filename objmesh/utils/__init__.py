"""Utility functions for objmesh."""

from objmesh.utils.cache import CacheManager, create_cache_manager
from objmesh.utils.logging import (
    setup_logging,
    get_logger,
    log_performance,
    log_load_result,
    StructuredLogger,
)

__all__ = [
    "CacheManager",
    "create_cache_manager",
    "setup_logging",
    "get_logger",
    "log_performance",
    "log_load_result",
    "StructuredLogger",
]
