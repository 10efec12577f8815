"""
Result Module - Outcome of a strategy run and its metrics.
"""

from dataclasses import dataclass, field
from typing import List, Optional

import psutil

from .board import BoardState
from .graph import TransitionGraph


def current_rss_mb() -> float:
    """Resident set size of this process in megabytes."""
    return psutil.Process().memory_info().rss / (1024 * 1024)


@dataclass
class TilingMetrics:
    """
    Performance metrics for a tiling computation.

    Attributes:
        computation_time_ms: Time taken in milliseconds
        states_explored: Number of board states expanded
        levels: Number of BFS levels processed (tiles in a full tiling)
        peak_frontier: Largest frontier seen
        peak_rss_mb: Largest resident memory observed between levels
        strategy_name: Name of strategy that produced this result
    """
    computation_time_ms: float = 0.0
    states_explored: int = 0
    levels: int = 0
    peak_frontier: int = 0
    peak_rss_mb: float = 0.0
    strategy_name: str = ""

    def observe_level(self, frontier_size: int) -> None:
        """Record one finished BFS level."""
        self.levels += 1
        self.states_explored += frontier_size
        self.peak_frontier = max(self.peak_frontier, frontier_size)
        self.peak_rss_mb = max(self.peak_rss_mb, current_rss_mb())


@dataclass
class TilingResult:
    """
    Result of a strategy computation.

    Attributes:
        count: Number of tilings (None for the sampler)
        graph: Transition graph, when the strategy built one
        path: Sampled board sequence from initial to complete board
        metrics: Performance statistics
    """
    count: Optional[int] = None
    graph: Optional[TransitionGraph] = None
    path: Optional[List[BoardState]] = None
    metrics: TilingMetrics = field(default_factory=TilingMetrics)

    @property
    def has_path(self) -> bool:
        return bool(self.path)

    @property
    def final_board(self) -> Optional[BoardState]:
        """Last board of the sampled path, if any."""
        return self.path[-1] if self.path else None

    def get_board_after_placement(self, index: int) -> BoardState:
        """
        Get board state after the placement at index.

        Raises:
            IndexError: If index out of range or no path was sampled
        """
        if not self.path:
            raise IndexError("No sampled path")
        return self.path[index + 1]
