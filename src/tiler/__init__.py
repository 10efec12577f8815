"""
Tiler Package - Exact tiling counts for polyomino boards.

Counts, graphs and samples the tilings of a finite board by a fixed set of
polyomino tiles (all rotations and reflections), working on board states
that record which cells are covered.

Public API:
    - BoardState: Immutable board representation
    - TilePlacement: One tile laid in one orientation
    - TileShape / TileSet: Tile shapes and their orientations
    - TransitionGraph: Deduplicated graph of board states
    - count_tilings(): Direct level-by-level count
    - build_graph() / count_from_graph(): Graph construction and counting
    - sample_one_tiling(): One random tiling as a sequence of boards
    - Tiler: Board + tiles wrapper with a cached graph
    - create_strategy(): Factory for the "count", "graph" and "single" strategies

Usage:
    from src.tiler import count_tilings, l_board, make_tileset

    board = l_board(2)
    tiles = make_tileset("LTile", 2)
    print(count_tilings(board, tiles))

    # Strategy framework with metrics
    context = TilingContext(board=board, tileset=tiles)
    result = create_strategy("graph").run(context)
    print(result.count, result.graph.node_count, result.metrics.peak_frontier)
"""

# Core data structures
from .board import BoardState, HOLE
from .placement import TilePlacement
from .tiles import (
    TileShape,
    TileSet,
    feasible_placements,
    generate_orientations,
    l_tile,
    t_tile,
    rect_tile,
    make_tileset,
)
from .shapes import rectangle, l_board, t_board, make_board
from .graph import TransitionGraph
from .expander import expand, placements_at, successors
from .context import TilingContext, DEFAULT_MAX_SOLUTIONS
from .result import TilingResult, TilingMetrics

# Strategy framework
from .base import TilingStrategy
from .factory import (
    create_strategy,
    get_strategy_names,
    get_strategy_info,
    register_strategy,
)

# Import strategies to register them
from . import strategies
from .strategies import count_tilings, build_graph, count_from_graph, sample_one_tiling
from .tiler import Tiler

__all__ = [
    # Data structures
    "BoardState",
    "HOLE",
    "TilePlacement",
    "TileShape",
    "TileSet",
    "TransitionGraph",
    "TilingContext",
    "TilingResult",
    "TilingMetrics",
    "DEFAULT_MAX_SOLUTIONS",
    # Tiles and boards
    "feasible_placements",
    "generate_orientations",
    "l_tile",
    "t_tile",
    "rect_tile",
    "make_tileset",
    "rectangle",
    "l_board",
    "t_board",
    "make_board",
    # Algorithms
    "expand",
    "placements_at",
    "successors",
    "count_tilings",
    "build_graph",
    "count_from_graph",
    "sample_one_tiling",
    "Tiler",
    # Strategy framework
    "TilingStrategy",
    "create_strategy",
    "get_strategy_names",
    "get_strategy_info",
    "register_strategy",
]
