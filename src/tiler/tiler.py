"""
Tiler Module - Convenience wrapper holding one board and one tile set.
"""

import logging
import random
from typing import List, Optional

from .board import BoardState
from .graph import TransitionGraph
from .strategies import build_graph, count_from_graph, count_tilings, sample_one_tiling
from .tiles import TileSet

logger = logging.getLogger(__name__)


class Tiler:
    """
    Board + tiles pair with an optional cached transition graph.

    count_tilings() reuses the graph once generate_graph() has built it,
    otherwise it runs the direct level-by-level count.
    """

    def __init__(self, tiles: TileSet, initial_board: BoardState,
                 workers: Optional[int] = None, executor: str = "thread"):
        self.tiles = tiles
        self.initial_board = initial_board
        self.workers = workers
        self.executor = executor
        self.graph: Optional[TransitionGraph] = None

    def count_tilings(self) -> int:
        if self.graph is not None:
            return count_from_graph(self.graph)
        return count_tilings(self.initial_board, self.tiles,
                             workers=self.workers, executor=self.executor)

    def generate_graph(self) -> TransitionGraph:
        """Build (or rebuild) and cache the transition graph."""
        self.graph = build_graph(self.initial_board, self.tiles,
                                 workers=self.workers, executor=self.executor)
        logger.debug(f"Graph cached: {self.graph.node_count} nodes")
        return self.graph

    def single_tiling(self, rng: Optional[random.Random] = None) -> Optional[List[BoardState]]:
        return sample_one_tiling(self.initial_board, self.tiles, rng=rng)
