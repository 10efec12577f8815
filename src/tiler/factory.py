"""
Strategy Factory Module - Registry of tiling strategies by name.
"""

from typing import Any, Dict, List, Type

from .base import TilingStrategy


# Global registry of strategies, keyed by lower-case name
_STRATEGIES: Dict[str, Type[TilingStrategy]] = {}


def register_strategy(cls: Type[TilingStrategy]) -> Type[TilingStrategy]:
    """
    Class decorator adding a strategy to the registry.

    Usage:
        @register_strategy
        class CountStrategy(TilingStrategy):
            name = "count"
            ...
    """
    key = cls.name.lower()
    if key in _STRATEGIES and _STRATEGIES[key] is not cls:
        raise ValueError(f"Strategy name already registered: {cls.name}")
    _STRATEGIES[key] = cls
    return cls


def create_strategy(name: str, **kwargs: Any) -> TilingStrategy:
    """
    Create a strategy instance by name.

    Args:
        name: Strategy name ("count", "graph" or "single"), case-insensitive
        **kwargs: Additional arguments passed to strategy constructor

    Returns:
        Strategy instance

    Raises:
        ValueError: If strategy name not found
    """
    cls = _STRATEGIES.get(name.lower())
    if cls is None:
        available = ", ".join(_STRATEGIES)
        raise ValueError(f"Unknown strategy: {name}. Available: {available}")
    return cls(**kwargs)


def get_strategy_names() -> List[str]:
    """Registered strategy names, in registration order."""
    return list(_STRATEGIES)


def get_strategy_info() -> List[Dict[str, str]]:
    """Name and description of every registered strategy, for help output."""
    return [
        {"name": cls.name, "description": cls.description}
        for cls in _STRATEGIES.values()
    ]
