"""Factory for creating normal synthesis strategies."""

from typing import Any, Dict, Type

from objmesh.core.exceptions import ConfigurationError
from objmesh.geometry.normals.base import NormalStrategy
from objmesh.geometry.normals.face import FaceAverageNormals
from objmesh.geometry.normals.sliding import SlidingWindowNormals


class NormalsFactory:
    """Factory for creating normal synthesis strategies."""

    _strategies: Dict[str, Type[NormalStrategy]] = {
        "sliding_window": SlidingWindowNormals,
        "face_average": FaceAverageNormals,
    }

    @classmethod
    def create(cls, mode: str, **kwargs: Any) -> NormalStrategy:
        """Create a normal synthesis strategy.

        Args:
            mode: Strategy name
            **kwargs: Additional arguments for the strategy

        Returns:
            Strategy instance

        Raises:
            ConfigurationError: If mode is unknown
        """
        if mode not in cls._strategies:
            available = ", ".join(cls._strategies.keys())
            raise ConfigurationError(
                f"Unknown normal mode: {mode}. Available: {available}"
            )

        strategy_class = cls._strategies[mode]
        return strategy_class(**kwargs)

    @classmethod
    def register(cls, name: str, strategy_class: Type[NormalStrategy]) -> None:
        """Register a new normal synthesis strategy.

        Args:
            name: Name for the strategy
            strategy_class: Strategy class
        """
        cls._strategies[name] = strategy_class

    @classmethod
    def available_modes(cls) -> list[str]:
        """Get list of available normal modes."""
        return list(cls._strategies.keys())
