"""
Count Strategy - Level-synchronous dynamic programming over board states.

Each level holds the distinct boards reachable after the same number of
placements, together with how many placement sequences reach each one.
Branches expand their boards independently and return local contribution
lists; a single-threaded merge then sums contributions per successor.
Nothing shared is written while a level is being expanded.
"""

import logging
import time
from functools import partial
from typing import Callable, Dict, List, Optional, Tuple

from ..base import TilingStrategy
from ..board import BoardState
from ..context import TilingContext
from ..expander import expand
from ..factory import register_strategy
from ..pool import FrontierPool
from ..result import TilingMetrics, TilingResult
from ..tiles import TileSet

logger = logging.getLogger(__name__)

Contribution = Tuple[BoardState, int]


def _expand_branch(item: Contribution, tileset: TileSet) -> Tuple[List[Contribution], List[Contribution]]:
    """
    Expand one frontier board into weighted contributions.

    Returns:
        (contributions to incomplete successors, contributions to complete ones)
    """
    board, weight = item
    incomplete: List[Contribution] = []
    complete: List[Contribution] = []
    for successor in expand(board, tileset):
        if successor.is_complete():
            complete.append((successor, weight))
        else:
            incomplete.append((successor, weight))
    return incomplete, complete


def count_tilings(
    initial: BoardState,
    tileset: TileSet,
    workers: Optional[int] = None,
    executor: str = "thread",
    metrics: Optional[TilingMetrics] = None,
    progress: Optional[Callable[[int, str], None]] = None,
    pool: Optional[FrontierPool] = None,
) -> int:
    """
    Count complete tilings of a board by breadth-first DP.

    A board that is already complete has exactly one tiling (no placements).

    Args:
        initial: Starting board
        tileset: Tile shapes to place
        workers: Worker count for frontier expansion
        executor: "serial", "thread" or "process"
        metrics: Optional metrics object updated per level
        progress: Optional callback receiving (level, message)
        pool: Already-open FrontierPool to use instead of creating one

    Returns:
        Number of tilings (0 if the board cannot be tiled)
    """
    if pool is None:
        with FrontierPool(workers=workers, kind=executor) as own_pool:
            return count_tilings(initial, tileset, metrics=metrics,
                                 progress=progress, pool=own_pool)

    completed: Dict[BoardState, int] = {}
    frontier: Dict[BoardState, int] = {}
    if initial.is_complete():
        completed[initial] = 1
    else:
        frontier[initial] = 1

    level = 0
    expand_one = partial(_expand_branch, tileset=tileset)

    while frontier:
        branches = pool.map(expand_one, list(frontier.items()))

        next_frontier: Dict[BoardState, int] = {}
        for incomplete, complete in branches:
            for board, weight in incomplete:
                next_frontier[board] = next_frontier.get(board, 0) + weight
            for board, weight in complete:
                completed[board] = completed.get(board, 0) + weight

        level += 1
        if metrics is not None:
            metrics.observe_level(len(frontier))
        logger.debug(
            f"[Count] Level {level}: expanded {len(frontier)} boards, "
            f"next frontier {len(next_frontier)}, complete {len(completed)}"
        )
        if progress:
            progress(level, f"{len(next_frontier)} boards in frontier")

        frontier = next_frontier

    if not completed:
        return 0
    if len(completed) > 1:
        logger.warning(f"[Count] {len(completed)} distinct complete boards; using the first")
    return next(iter(completed.values()))


@register_strategy
class CountStrategy(TilingStrategy):
    """
    Direct counting without materialising any graph.

    Memory holds only two consecutive levels, so this is the cheapest way
    to get the number of tilings.
    """
    name = "count"
    description = "Count tilings level by level (no graph)"

    def run(self, context: TilingContext) -> TilingResult:
        start_time = time.perf_counter()
        metrics = self._new_metrics()

        with self._open_pool(context) as pool:
            count = count_tilings(
                context.board, context.tileset,
                metrics=metrics, progress=context.progress_callback, pool=pool,
            )

        logger.info(
            f"[Count] {count} tilings, {metrics.levels} levels, "
            f"{metrics.states_explored} states, peak frontier {metrics.peak_frontier}, "
            f"peak RSS {metrics.peak_rss_mb:.1f} MB"
        )
        return self._finish(TilingResult(count=count, metrics=metrics), start_time)
