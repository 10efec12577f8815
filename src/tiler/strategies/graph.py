"""
Graph Strategy - Build the deduplicated transition graph, then count on it.

Expansion of a level runs on the pool; assigning arena indices, adding
edges and marking completion happen in the calling thread, behind the
graph's lock, one branch result at a time.
"""

import logging
import time
from collections import Counter
from functools import partial
from typing import Callable, Dict, List, Optional

from ..base import TilingStrategy
from ..board import BoardState
from ..context import TilingContext
from ..expander import successors
from ..factory import register_strategy
from ..graph import TransitionGraph
from ..pool import FrontierPool
from ..result import TilingMetrics, TilingResult
from ..tiles import TileSet

logger = logging.getLogger(__name__)

ROOT = 0


def _child_boards(board: BoardState, tileset: TileSet) -> List[BoardState]:
    return [child for _, child in successors(board, tileset)]


def build_graph(
    initial: BoardState,
    tileset: TileSet,
    workers: Optional[int] = None,
    executor: str = "thread",
    metrics: Optional[TilingMetrics] = None,
    progress: Optional[Callable[[int, str], None]] = None,
    pool: Optional[FrontierPool] = None,
) -> TransitionGraph:
    """
    Breadth-first construction of the transition graph.

    A board seen again, from any predecessor and at any level, reuses its
    arena slot; only newly created incomplete nodes are expanded.

    Args:
        initial: Starting board (becomes node 0)
        tileset: Tile shapes to place
        workers: Worker count for frontier expansion
        executor: "serial", "thread" or "process"
        metrics: Optional metrics object updated per level
        progress: Optional callback receiving (level, message)
        pool: Already-open FrontierPool to use instead of creating one

    Returns:
        TransitionGraph with complete_index set if a tiling exists
    """
    if pool is None:
        with FrontierPool(workers=workers, kind=executor) as own_pool:
            return build_graph(initial, tileset, metrics=metrics,
                               progress=progress, pool=own_pool)

    graph = TransitionGraph()
    root, _ = graph.add_node(initial)
    if initial.is_complete():
        graph.mark_complete(root)
        return graph

    frontier = [root]
    level = 0
    expand_one = partial(_child_boards, tileset=tileset)

    while frontier:
        boards = [graph.get_node(index) for index in frontier]
        children = pool.map(expand_one, boards)

        next_frontier: List[int] = []
        for parent, child_boards in zip(frontier, children):
            for board in child_boards:
                child, created = graph.add_node(board)
                graph.add_edge(parent, child)
                if board.is_complete():
                    graph.mark_complete(child)
                elif created:
                    next_frontier.append(child)

        level += 1
        if metrics is not None:
            metrics.observe_level(len(frontier))
        logger.debug(
            f"[Graph] Level {level}: expanded {len(frontier)} nodes, "
            f"{graph.node_count} nodes / {graph.edge_count} edges so far"
        )
        if progress:
            progress(level, f"{graph.node_count} nodes")

        frontier = next_frontier

    return graph


def count_from_graph(graph: TransitionGraph) -> int:
    """
    Count tilings by a forward pass over the graph's edges.

    Frontiers advance in topological order: a node joins the next frontier
    once every one of its incoming edges has delivered its contribution,
    so each node's count is final before it is pushed further.

    Args:
        graph: Graph built by build_graph

    Returns:
        Path count of the completion node, or 0 if there is none
    """
    if graph.complete_index is None:
        return 0

    pending: Counter = Counter()
    for targets in graph.edges.values():
        for target in targets:
            pending[target] += 1

    counts: Dict[int, int] = {ROOT: 1}
    frontier = [ROOT]

    while frontier:
        next_frontier: List[int] = []
        for index in frontier:
            current = counts[index]
            for target in graph.get_edges(index):
                counts[target] = counts.get(target, 0) + current
                pending[target] -= 1
                if pending[target] == 0:
                    next_frontier.append(target)
        frontier = next_frontier

    return counts.get(graph.complete_index, 0)


@register_strategy
class GraphStrategy(TilingStrategy):
    """
    Materialise the full transition graph and count tilings from it.

    Slower and heavier than "count", but the graph is returned with the
    result and can be serialised or counted again.
    """
    name = "graph"
    description = "Build the board-state graph, then count on its edges"

    def run(self, context: TilingContext) -> TilingResult:
        start_time = time.perf_counter()
        metrics = self._new_metrics()

        with self._open_pool(context) as pool:
            graph = build_graph(
                context.board, context.tileset,
                metrics=metrics, progress=context.progress_callback, pool=pool,
            )
        count = count_from_graph(graph)

        logger.info(
            f"[Graph] {graph.node_count} nodes, {graph.edge_count} edges, "
            f"complete node {graph.complete_index}, {count} tilings, "
            f"peak RSS {metrics.peak_rss_mb:.1f} MB"
        )
        return self._finish(TilingResult(count=count, graph=graph, metrics=metrics), start_time)
