"""Structured logging configuration using structlog."""

import logging
import sys
import time
from pathlib import Path
from typing import Any, Optional

import structlog
from structlog.processors import CallsiteParameter

from objmesh.core.config import LoggingConfig

# Third-party loggers held at WARNING regardless of the configured level
QUIET_LIBRARIES = ("trimesh", "numpy", "PIL")


def setup_logging(
    config: Optional[LoggingConfig] = None,
    log_file: Optional[Path] = None,
) -> structlog.stdlib.BoundLogger:
    """Set up structured logging with structlog.

    Args:
        config: Logging configuration
        log_file: Optional log file path (overrides ``config.log_file``)

    Returns:
        Configured logger instance
    """
    if config is None:
        config = LoggingConfig()
    log_file = log_file or config.log_file

    processors = _shared_processors(config)
    structlog.configure(
        processors=processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    root = logging.getLogger()
    for old in list(root.handlers):
        root.removeHandler(old)
        if isinstance(old, logging.FileHandler):
            old.close()

    # stderr keeps stdout free for CLI output
    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(_formatter(processors, _renderer(config)))
    root.addHandler(console)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path)
        file_handler.setFormatter(
            _formatter(processors, structlog.processors.JSONRenderer())
        )
        root.addHandler(file_handler)

    root.setLevel(getattr(logging, config.level))
    for name in QUIET_LIBRARIES:
        logging.getLogger(name).setLevel(logging.WARNING)

    return structlog.get_logger("objmesh")


def _shared_processors(config: LoggingConfig) -> list:
    """Processors applied to structlog and foreign stdlib records alike."""
    processors = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt=config.timestamp_format),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]
    if config.add_caller_info:
        processors.append(
            structlog.processors.CallsiteParameterAdder(
                parameters=[
                    CallsiteParameter.FILENAME,
                    CallsiteParameter.LINENO,
                    CallsiteParameter.FUNC_NAME,
                ],
            )
        )
    return processors


def _renderer(config: LoggingConfig) -> Any:
    if config.format == "json":
        return structlog.processors.JSONRenderer()
    if config.format == "console":
        return structlog.dev.ConsoleRenderer(
            colors=config.colorize and sys.stderr.isatty(),
            exception_formatter=structlog.dev.plain_traceback,
        )
    return structlog.processors.KeyValueRenderer(
        key_order=["timestamp", "level", "logger", "event"],
        drop_missing=True,
    )


def _formatter(processors: list, renderer: Any) -> structlog.stdlib.ProcessorFormatter:
    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=processors,
        processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a logger instance.

    Args:
        name: Logger name

    Returns:
        Logger instance
    """
    return structlog.get_logger(name)


def log_performance(
    logger: structlog.stdlib.BoundLogger,
    operation: str,
    duration: float,
    **kwargs: Any,
) -> None:
    """Log performance metrics.

    Args:
        logger: Logger instance
        operation: Operation name
        duration: Duration in seconds
        **kwargs: Additional metrics
    """
    logger.info(
        "performance",
        operation=operation,
        duration_ms=round(duration * 1000, 2),
        **kwargs,
    )


def log_load_result(
    logger: structlog.stdlib.BoundLogger,
    result: Any,  # LoadResult
) -> None:
    """Log the outcome of a single file load.

    Args:
        logger: Logger instance
        result: Load result object
    """
    if result.success:
        logger.info(
            "load_success",
            input_file=str(result.path),
            **result.metrics,
        )
    else:
        logger.error(
            "load_failed",
            input_file=str(result.path),
            error=result.error,
            error_type=result.error_type,
            **result.metrics,
        )


class StructuredLogger:
    """Context manager for structured logging of operations."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger,
        operation: str,
        **context: Any,
    ):
        """Initialize structured logger context.

        Args:
            logger: Logger instance
            operation: Operation name
            **context: Additional context
        """
        self.logger = logger
        self.operation = operation
        self.context = context
        self._start_time: Optional[float] = None

    def __enter__(self) -> "StructuredLogger":
        self._start_time = time.perf_counter()
        self.logger.debug(f"{self.operation}_started", **self.context)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        duration = time.perf_counter() - self._start_time

        if exc_type is None:
            self.logger.info(
                f"{self.operation}_completed",
                duration_ms=round(duration * 1000, 2),
                **self.context,
            )
        else:
            self.logger.error(
                f"{self.operation}_failed",
                duration_ms=round(duration * 1000, 2),
                error=str(exc_val),
                error_type=exc_type.__name__,
                **self.context,
            )

    @property
    def elapsed(self) -> float:
        """Seconds since the operation started."""
        if self._start_time is None:
            return 0.0
        return time.perf_counter() - self._start_time

    def update_context(self, **kwargs: Any) -> None:
        """Update logging context."""
        self.context.update(kwargs)
