"""
Tiling Context Module - Shared inputs passed to every strategy run.
"""

import random
from dataclasses import dataclass, field
from typing import Callable, Optional

from .board import BoardState
from .tiles import TileSet

# Complete paths collected by the sampler before it stops searching
DEFAULT_MAX_SOLUTIONS = 1000


@dataclass
class TilingContext:
    """
    Inputs and runtime knobs for one strategy run.

    There is no cancellation or timeout: a run either completes or the
    process is stopped from outside.

    Attributes:
        board: Initial board state
        tileset: Tile shapes available for placement
        workers: Worker count for frontier expansion (None = cpu count)
        executor: "serial", "thread" or "process"
        rng: Random source used by the sampler
        max_solutions: Sampler cap on collected complete paths
        progress_callback: Optional callback receiving (level, message)
    """
    board: BoardState
    tileset: TileSet
    workers: Optional[int] = None
    executor: str = "thread"
    rng: random.Random = field(default_factory=random.Random)
    max_solutions: int = DEFAULT_MAX_SOLUTIONS
    progress_callback: Optional[Callable[[int, str], None]] = None

    @classmethod
    def seeded(cls, board: BoardState, tileset: TileSet, seed: Optional[int],
               **kwargs) -> 'TilingContext':
        """Create a context whose sampler draws from random.Random(seed)."""
        return cls(board=board, tileset=tileset, rng=random.Random(seed), **kwargs)

    def report_progress(self, level: int, message: str = "") -> None:
        """
        Report progress after a BFS level or sampler milestone.

        Args:
            level: Number of tiles placed so far
            message: Optional status message
        """
        if self.progress_callback:
            self.progress_callback(level, message)
