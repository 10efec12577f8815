"""
Placement Module - One tile laid on the board in one orientation.
"""

from dataclasses import dataclass
from typing import Iterable, Tuple


@dataclass(frozen=True)
class TilePlacement:
    """
    Represents one way of laying a tile onto the board.

    Attributes:
        tile_name: Name of the tile shape that was placed
        orientation: Index of the orientation used
        cells: Sorted tuple of (row, col) tuples covered by the tile
    """
    tile_name: str
    orientation: int
    cells: Tuple[Tuple[int, int], ...]

    @classmethod
    def create(cls, tile_name: str, orientation: int,
               cells: Iterable[Tuple[int, int]]) -> 'TilePlacement':
        """
        Create a TilePlacement with cells normalised to a sorted tuple.

        Args:
            tile_name: Tile shape name
            orientation: Orientation index within the shape
            cells: Covered (row, col) positions

        Returns:
            TilePlacement instance
        """
        return cls(tile_name=tile_name, orientation=orientation,
                   cells=tuple(sorted(cells)))

    @property
    def cell_count(self) -> int:
        """Number of cells covered by this placement."""
        return len(self.cells)
