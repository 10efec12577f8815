"""
Placement Expander - Successor states reachable by placing one more tile.

The expander always covers the first unmarked cell in row-major order.
Any fixed choice of cell is correct because every complete tiling must
cover it; a fixed choice also means each tiling is reached through exactly
one placement order.
"""

from typing import Dict, List, Optional, Set, Tuple

from .board import BoardState, Position
from .placement import TilePlacement
from .tiles import TileSet, feasible_placements


def placements_at(state: BoardState, tileset: TileSet,
                  anchor: Optional[Position] = None) -> List[TilePlacement]:
    """
    Collect the distinct placements covering the anchor cell.

    Args:
        state: Board to place on
        tileset: Available tile shapes
        anchor: Cell to cover (defaults to the first unmarked cell)

    Returns:
        Placements in discovery order, duplicates (same cells) removed
    """
    if anchor is None:
        anchor = state.first_unmarked_position()
        if anchor is None:
            return []

    fitting: List[TilePlacement] = []
    seen: Set[Tuple[Position, ...]] = set()
    for tile in tileset:
        for placement in feasible_placements(state, tile, anchor):
            if placement.cells not in seen:
                seen.add(placement.cells)
                fitting.append(placement)
    return fitting


def successors(state: BoardState, tileset: TileSet) -> List[Tuple[TilePlacement, BoardState]]:
    """
    Pair each distinct successor state with one placement producing it.

    Returns:
        (placement, successor) pairs, deduplicated by successor value
    """
    found: Dict[BoardState, TilePlacement] = {}
    for placement in placements_at(state, tileset):
        board = state.apply(placement)
        if board not in found:
            found[board] = placement
    return [(placement, board) for board, placement in found.items()]


def expand(state: BoardState, tileset: TileSet) -> Set[BoardState]:
    """
    Produce every distinct state reachable by placing exactly one tile.

    Returns an empty set both when the state is already complete and when
    no tile fits the first unmarked cell (a dead end).

    Args:
        state: Board to expand
        tileset: Available tile shapes

    Returns:
        Set of successor BoardStates
    """
    return {board for _, board in successors(state, tileset)}
