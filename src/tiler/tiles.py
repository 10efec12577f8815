"""
Tiles Module - Tile shapes, their orientations and the placement feasibility test.

Shapes are described by their cells; every rotation and reflection is
generated once with numpy and deduplicated, so a TileShape carries the
full list of distinct orientations, each normalised to start at (0, 0).
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Tuple

import numpy as np

from .board import BoardState, Position
from .placement import TilePlacement

logger = logging.getLogger(__name__)

Orientation = Tuple[Position, ...]


def _to_mask(cells: Iterable[Position]) -> np.ndarray:
    cells = list(cells)
    if not cells:
        raise ValueError("A tile needs at least one cell")
    min_r = min(r for r, _ in cells)
    min_c = min(c for _, c in cells)
    height = max(r for r, _ in cells) - min_r + 1
    width = max(c for _, c in cells) - min_c + 1
    mask = np.zeros((height, width), dtype=bool)
    for r, c in cells:
        mask[r - min_r, c - min_c] = True
    return mask


def _mask_cells(mask: np.ndarray) -> Orientation:
    rows, cols = np.nonzero(mask)
    return tuple((int(r), int(c)) for r, c in zip(rows, cols))


def generate_orientations(cells: Iterable[Position], rotate: bool = True,
                          reflect: bool = True) -> Tuple[Orientation, ...]:
    """
    Generate the distinct orientations of a polyomino.

    Args:
        cells: (row, col) cells of the base shape
        rotate: Include the four quarter-turn rotations
        reflect: Include mirror images

    Returns:
        Tuple of orientations, each a row-major sorted tuple of cells
    """
    base = _to_mask(cells)
    variants = [np.rot90(base, k) for k in range(4)] if rotate else [base]
    if reflect:
        variants += [np.fliplr(v) for v in variants]

    orientations: List[Orientation] = []
    for variant in variants:
        shape = _mask_cells(variant)
        if shape not in orientations:
            orientations.append(shape)
    return tuple(orientations)


@dataclass(frozen=True)
class TileShape:
    """
    A polyomino tile and all of its usable orientations.

    Attributes:
        name: Short identifier (e.g. "L2", "T2")
        orientations: Distinct orientations, each normalised to (0, 0)
    """
    name: str
    orientations: Tuple[Orientation, ...]

    @classmethod
    def from_cells(cls, name: str, cells: Iterable[Position],
                   rotate: bool = True, reflect: bool = True) -> 'TileShape':
        return cls(name=name, orientations=generate_orientations(cells, rotate, reflect))

    @property
    def size(self) -> int:
        """Number of cells in the tile."""
        return len(self.orientations[0])


@dataclass(frozen=True)
class TileSet:
    """Fixed collection of tile shapes used for one tiling run."""
    tiles: Tuple[TileShape, ...]

    @classmethod
    def of(cls, *tiles: TileShape) -> 'TileSet':
        return cls(tiles=tuple(tiles))

    def __iter__(self) -> Iterator[TileShape]:
        return iter(self.tiles)

    def __len__(self) -> int:
        return len(self.tiles)

    @property
    def names(self) -> List[str]:
        return [tile.name for tile in self.tiles]


def l_tile(size: int) -> TileShape:
    """
    L-shaped tile with two arms of `size` cells sharing the corner.

    l_tile(2) is the L-tromino.
    """
    if size < 2:
        raise ValueError(f"L tile size must be at least 2, got {size}")
    cells = [(r, 0) for r in range(size)] + [(size - 1, c) for c in range(1, size)]
    return TileShape.from_cells(f"L{size}", cells)


def t_tile(size: int) -> TileShape:
    """
    T-shaped tile: a bar of 2*size-1 cells with a centred stem of size-1 cells.

    t_tile(2) is the T-tetromino.
    """
    if size < 2:
        raise ValueError(f"T tile size must be at least 2, got {size}")
    bar = 2 * size - 1
    cells = [(0, c) for c in range(bar)] + [(r, size - 1) for r in range(1, size)]
    return TileShape.from_cells(f"T{size}", cells)


def rect_tile(width: int, height: int, rotate: bool = True) -> TileShape:
    """Rectangular tile (rect_tile(2, 1) is the domino)."""
    if width < 1 or height < 1:
        raise ValueError(f"Rectangle tile needs positive sides, got {width}x{height}")
    cells = [(r, c) for r in range(height) for c in range(width)]
    return TileShape.from_cells(f"R{width}x{height}", cells, rotate=rotate, reflect=False)


TILE_TYPES = {
    "ltile": l_tile,
    "ttile": t_tile,
}


def make_tileset(tile_type: str, tile_size: int) -> TileSet:
    """
    Build the tile set for a named tile type.

    Args:
        tile_type: "LTile" or "TTile" (case-insensitive)
        tile_size: Size parameter passed to the tile generator

    Returns:
        TileSet containing the single requested shape

    Raises:
        ValueError: If tile type is unknown
    """
    key = tile_type.lower()
    if key not in TILE_TYPES:
        raise ValueError(f"Unknown tile type: {tile_type}. Available: LTile, TTile")
    tile = TILE_TYPES[key](tile_size)
    logger.debug(f"Tile {tile.name}: {tile.size} cells, {len(tile.orientations)} orientations")
    return TileSet.of(tile)


def feasible_placements(board: BoardState, tile: TileShape,
                        anchor: Position) -> List[TilePlacement]:
    """
    Enumerate every valid placement of a tile that covers the anchor cell.

    Each orientation is tried with each of its cells lying on the anchor;
    a placement is valid when all of its cells are on the board and unmarked.

    Args:
        board: Current board state
        tile: Tile shape to place
        anchor: (row, col) cell the placement must cover

    Returns:
        List of TilePlacement objects (may contain duplicates across tiles)
    """
    ar, ac = anchor
    placements = []

    for index, orientation in enumerate(tile.orientations):
        for dr, dc in orientation:
            cells = [(ar - dr + r, ac - dc + c) for r, c in orientation]
            if any(board.is_marked(r, c) for r, c in cells):
                continue
            placements.append(TilePlacement.create(tile.name, index, cells))

    return placements
