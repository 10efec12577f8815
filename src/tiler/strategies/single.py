"""
Single Tiling Strategy - Depth-first search for one random tiling.
"""

import logging
import random
import time
from typing import List, Optional

from ..base import TilingStrategy
from ..board import BoardState
from ..context import DEFAULT_MAX_SOLUTIONS, TilingContext
from ..expander import placements_at
from ..factory import register_strategy
from ..result import TilingMetrics, TilingResult
from ..tiles import TileSet

logger = logging.getLogger(__name__)


def sample_one_tiling(
    initial: BoardState,
    tileset: TileSet,
    rng: Optional[random.Random] = None,
    max_solutions: int = DEFAULT_MAX_SOLUTIONS,
    metrics: Optional[TilingMetrics] = None,
) -> Optional[List[BoardState]]:
    """
    Collect up to max_solutions complete tilings and return one at random.

    Search stops as soon as the cap is reached, so on boards with very many
    tilings the choice is uniform over the tilings found, not over all of them.

    Args:
        initial: Starting board
        tileset: Tile shapes to place
        rng: Random source for the final choice (fresh Random() if None)
        max_solutions: Number of complete paths to collect before stopping
        metrics: Optional metrics object (states_explored is updated)

    Returns:
        Boards from initial to complete, one placement per step,
        or None if the board cannot be tiled
    """
    if max_solutions < 1:
        raise ValueError(f"max_solutions must be positive, got {max_solutions}")
    if rng is None:
        rng = random.Random()

    if initial.is_complete():
        return [initial]

    stack: List[List[BoardState]] = [[initial]]
    completed: List[List[BoardState]] = []
    explored = 0

    while stack and len(completed) < max_solutions:
        path = stack.pop()
        current = path[-1]
        explored += 1

        for placement in placements_at(current, tileset):
            board = current.apply(placement)
            extended = path + [board]
            if board.is_complete():
                completed.append(extended)
                if len(completed) >= max_solutions:
                    logger.debug(f"[Sample] Reached cap of {max_solutions} tilings")
                    break
            else:
                stack.append(extended)

    if metrics is not None:
        metrics.states_explored += explored

    if not completed:
        logger.debug(f"[Sample] No tiling found after {explored} states")
        return None

    return rng.choice(completed)


@register_strategy
class SingleTilingStrategy(TilingStrategy):
    """Return one tiling chosen at random from the first ones found."""
    name = "single"
    description = f"Sample one tiling (from up to {DEFAULT_MAX_SOLUTIONS} found)"

    def run(self, context: TilingContext) -> TilingResult:
        start_time = time.perf_counter()
        metrics = self._new_metrics()

        path = sample_one_tiling(
            context.board, context.tileset,
            rng=context.rng, max_solutions=context.max_solutions, metrics=metrics,
        )
        if path is not None:
            metrics.levels = len(path) - 1
            context.report_progress(metrics.levels, "tiling found")

        logger.info(
            f"[Sample] {'found' if path else 'no'} tiling, "
            f"{metrics.states_explored} states explored"
        )
        return self._finish(TilingResult(path=path, metrics=metrics), start_time)
