"""
Board State Module - Immutable board representation for polyomino tiling.
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Tuple, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .placement import TilePlacement


# Tag used for cells that lie outside the polyomino (never coverable)
HOLE = 0

Position = Tuple[int, int]


def _coverage(grid: Tuple[Tuple[Optional[int], ...], ...]) -> Tuple[Tuple[bool, ...], ...]:
    return tuple(tuple(cell is not None for cell in row) for row in grid)


@dataclass(frozen=True)
class BoardState:
    """
    Immutable board state representation.

    Uses tuple-of-tuples for hashability and immutability.
    Board cells contain None for unmarked cells, HOLE for cells outside
    the board shape, or a positive integer tag identifying the tile
    placement that covered the cell.

    Equality and hashing only look at the coverage pattern (which cells
    are marked), not at the tags. Two states reached through different
    placement sequences that cover the same cells are the same state.

    Attributes:
        grid: Tuple of tuples representing the board state
    """
    grid: Tuple[Tuple[Optional[int], ...], ...]
    coverage: Tuple[Tuple[bool, ...], ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "coverage", _coverage(self.grid))

    @classmethod
    def empty(cls, rows: int, cols: int) -> 'BoardState':
        """
        Create a fully unmarked rectangular board.

        Args:
            rows: Number of rows
            cols: Number of columns

        Returns:
            BoardState with every cell unmarked
        """
        if rows < 0 or cols < 0:
            raise ValueError(f"Board dimensions must be non-negative, got {rows}x{cols}")
        if rows == 0 or cols == 0:
            return cls(grid=())
        return cls(grid=tuple(tuple(None for _ in range(cols)) for _ in range(rows)))

    @classmethod
    def from_rows(cls, rows: List[List[Optional[int]]]) -> 'BoardState':
        """
        Create BoardState from a 2D list of tags.

        Args:
            rows: 2D list of integer tags or None values

        Returns:
            BoardState instance with immutable grid
        """
        widths = {len(row) for row in rows}
        if len(widths) > 1:
            raise ValueError(f"Board rows have inconsistent widths: {sorted(widths)}")
        return cls(grid=tuple(tuple(row) for row in rows))

    @classmethod
    def from_mask(cls, mask: Iterable[Iterable[bool]]) -> 'BoardState':
        """
        Create BoardState from a boolean membership mask.

        Cells where the mask is True belong to the board and start
        unmarked; all other cells are tagged as HOLE.

        Args:
            mask: 2D iterable of booleans (numpy arrays work too)

        Returns:
            BoardState instance
        """
        rows = [[None if bool(inside) else HOLE for inside in row] for row in mask]
        return cls.from_rows(rows)

    @property
    def rows(self) -> int:
        """Get number of rows in board."""
        return len(self.grid)

    @property
    def cols(self) -> int:
        """Get number of columns in board."""
        return len(self.grid[0]) if self.rows > 0 else 0

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def get_cell(self, row: int, col: int) -> Optional[int]:
        """
        Get tag at specific cell position.

        Args:
            row: Row index
            col: Column index

        Returns:
            Cell tag, or None if unmarked or out of bounds
        """
        if self.in_bounds(row, col):
            return self.grid[row][col]
        return None

    def is_marked(self, row: int, col: int) -> bool:
        """Out-of-bounds cells count as marked."""
        if not self.in_bounds(row, col):
            return True
        return self.coverage[row][col]

    def first_unmarked_position(self) -> Optional[Position]:
        """
        Find the first unmarked cell in row-major scan order.

        Returns:
            (row, col) of the first unmarked cell, or None if complete
        """
        for r, row in enumerate(self.coverage):
            for c, marked in enumerate(row):
                if not marked:
                    return (r, c)
        return None

    def is_complete(self) -> bool:
        """True when no unmarked cell remains."""
        return self.first_unmarked_position() is None

    def marked_count(self) -> int:
        """Number of marked cells, holes included."""
        return sum(sum(row) for row in self.coverage)

    def unmarked_count(self) -> int:
        return self.rows * self.cols - self.marked_count()

    def cell_count(self) -> int:
        """Number of cells that belong to the board shape (not holes)."""
        return sum(1 for row in self.grid for cell in row if cell != HOLE)

    def covers(self, other: 'BoardState') -> bool:
        """
        Check whether this board's marked cells are a superset of other's.

        Args:
            other: Board with the same dimensions

        Returns:
            True if every cell marked in other is marked here too
        """
        if (self.rows, self.cols) != (other.rows, other.cols):
            return False
        for mine, theirs in zip(self.coverage, other.coverage):
            for a, b in zip(mine, theirs):
                if b and not a:
                    return False
        return True

    def apply(self, placement: 'TilePlacement', tag: Optional[int] = None) -> 'BoardState':
        """
        Apply a placement to create a new board state.

        Marks every cell of the placement and returns a new BoardState.
        Original board is unchanged.

        Args:
            placement: Placement to apply
            tag: Tag to write into the covered cells (defaults to
                 next_tag())

        Returns:
            New BoardState with the placement's cells marked

        Raises:
            ValueError: If the placement leaves the board or covers a marked cell
        """
        if tag is None:
            tag = self.next_tag()

        new_grid = [list(row) for row in self.grid]
        for r, c in placement.cells:
            if self.is_marked(r, c):
                raise ValueError(f"Placement {placement} covers marked cell ({r},{c})")
            new_grid[r][c] = tag

        return BoardState(grid=tuple(tuple(row) for row in new_grid))

    def placement_count(self) -> int:
        """Number of distinct tile tags on the board."""
        tags = {cell for row in self.grid for cell in row if cell is not None and cell != HOLE}
        return len(tags)

    def next_tag(self) -> int:
        """Tag for the next placed tile: one past the largest tag on the board."""
        return max((cell for row in self.grid for cell in row if cell is not None), default=HOLE) + 1

    def diff(self, other: 'BoardState') -> List[Position]:
        """
        Find cells whose coverage differs between this board and another.

        Args:
            other: Another BoardState to compare against

        Returns:
            List of (row, col) tuples where coverage differs
        """
        if not isinstance(other, BoardState):
            raise TypeError("Can only diff against another BoardState")
        if (self.rows, self.cols) != (other.rows, other.cols):
            raise ValueError("Can only diff boards of equal dimensions")

        differences = []
        for r in range(self.rows):
            for c in range(self.cols):
                if self.coverage[r][c] != other.coverage[r][c]:
                    differences.append((r, c))

        return differences

    def __hash__(self):
        """Enable using BoardState as dict key or in sets."""
        return hash(self.coverage)

    def __eq__(self, other):
        """Boards are equal when they cover the same cells."""
        if not isinstance(other, BoardState):
            return False
        return self.coverage == other.coverage

    def to_list(self) -> List[List[Optional[int]]]:
        """
        Convert to mutable 2D list representation.

        Returns:
            2D list representation of the board
        """
        return [list(row) for row in self.grid]
