"""Configuration management for objmesh using Pydantic."""

from pathlib import Path
from typing import Literal, Optional

import tomli
from pydantic import BaseModel, ConfigDict, Field, field_validator


class NormalsConfig(BaseModel):
    """Configuration for normal synthesis."""

    model_config = ConfigDict(frozen=True)

    mode: Literal["sliding_window", "face_average"] = Field(
        "sliding_window", description="Normal synthesis strategy"
    )
    renormalize: bool = Field(
        False, description="Rescale accumulated normals to unit length"
    )


class UVConfig(BaseModel):
    """Configuration for the placeholder texture-coordinate channel."""

    model_config = ConfigDict(frozen=True)

    components: Literal[2, 3] = Field(
        3, description="Components per UV entry (2 or 3)"
    )


class LoaderConfig(BaseModel):
    """Configuration for file loading and dispatch."""

    model_config = ConfigDict(frozen=True)

    extensions: tuple[str, ...] = Field(
        ("obj",), description="File extensions routed to the OBJ loader"
    )
    max_file_size_mb: float = Field(
        512.0, gt=0, description="Largest file accepted (MB)"
    )
    parallel: bool = Field(False, description="Load batches in parallel")
    max_workers: Optional[int] = Field(
        None, ge=1, description="Max workers for parallel loads (None = auto)"
    )

    @field_validator("extensions")
    @classmethod
    def normalize_extensions(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        """Strip leading dots and lowercase extensions."""
        cleaned = tuple(ext.lower().lstrip(".") for ext in v)
        if not cleaned or any(not ext for ext in cleaned):
            raise ValueError("extensions must be non-empty strings")
        return cleaned


class CacheConfig(BaseModel):
    """Configuration for caching system."""

    model_config = ConfigDict(frozen=True)

    enabled: bool = Field(False, description="Enable caching")
    cache_dir: Path = Field(
        Path.home() / ".cache" / "objmesh", description="Cache directory"
    )
    max_size_gb: float = Field(2.0, gt=0, description="Maximum cache size (GB)")
    ttl_days: int = Field(30, ge=1, description="Cache time-to-live (days)")


class LoggingConfig(BaseModel):
    """Configuration for logging."""

    model_config = ConfigDict(frozen=True)

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        "INFO", description="Logging level"
    )
    format: Literal["json", "console", "plain"] = Field(
        "console", description="Log format"
    )
    colorize: bool = Field(True, description="Colorize console output")
    add_caller_info: bool = Field(
        False, description="Add filename, line and function to events"
    )
    timestamp_format: str = Field("iso", description="structlog timestamp format")
    log_file: Optional[Path] = Field(None, description="Optional JSON log file")


class Config(BaseModel):
    """Main configuration for objmesh."""

    model_config = ConfigDict(frozen=True)

    normals: NormalsConfig = Field(
        default_factory=NormalsConfig, description="Normal synthesis configuration"
    )
    uv: UVConfig = Field(default_factory=UVConfig, description="UV configuration")
    loader: LoaderConfig = Field(
        default_factory=LoaderConfig, description="Loader configuration"
    )
    cache: CacheConfig = Field(
        default_factory=CacheConfig, description="Cache configuration"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )

    @classmethod
    def from_toml(cls, path: Path | str) -> "Config":
        """Load configuration from TOML file.

        Args:
            path: Path to TOML configuration file

        Returns:
            Config instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            tomli.TOMLDecodeError: If TOML is invalid
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        with open(path, "rb") as f:
            data = tomli.load(f)

        return cls(**data)

    @classmethod
    def from_dict(cls, data: dict) -> "Config":
        """Create configuration from dictionary."""
        return cls(**data)

    def to_dict(self) -> dict:
        """Convert configuration to a TOML-friendly dictionary."""
        return self.model_dump(mode="json", exclude_none=True)

    def save_toml(self, path: Path | str) -> None:
        """Save configuration to TOML file.

        Args:
            path: Path to save TOML file
        """
        import tomli_w

        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "wb") as f:
            tomli_w.dump(self.to_dict(), f)


def get_default_config() -> Config:
    """Get default configuration."""
    return Config()


def load_config(path: Optional[Path | str] = None) -> Config:
    """Load configuration from file or return defaults.

    Args:
        path: Optional path to configuration file

    Returns:
        Config instance
    """
    if path:
        return Config.from_toml(path)
    return get_default_config()
