"""
Strategies Package - Concrete strategy implementations.

Import this module to register all built-in strategies.
"""

from .count import CountStrategy, count_tilings
from .graph import GraphStrategy, build_graph, count_from_graph
from .single import SingleTilingStrategy, sample_one_tiling

__all__ = [
    "CountStrategy",
    "GraphStrategy",
    "SingleTilingStrategy",
    "count_tilings",
    "build_graph",
    "count_from_graph",
    "sample_one_tiling",
]
