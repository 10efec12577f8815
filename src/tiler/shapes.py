"""
Board Shapes Module - Constructors for the initial boards.

Non-rectangular boards are drawn as numpy membership masks; cells outside
the shape become HOLE cells of the BoardState.
"""

import logging
from typing import Optional

import numpy as np

from .board import BoardState

logger = logging.getLogger(__name__)


def rectangle(width: int, height: int) -> BoardState:
    """Fully unmarked width x height board."""
    return BoardState.empty(height, width)


def l_board(size: int, scale: int = 1) -> BoardState:
    """
    L-shaped board: the L-tromino scaled by n = size * scale.

    A 2n x 2n square with its top-right n x n quadrant removed.
    """
    n = _scaled(size, scale)
    mask = np.ones((2 * n, 2 * n), dtype=bool)
    mask[:n, n:] = False
    return BoardState.from_mask(mask)


def t_board(size: int, scale: int = 1) -> BoardState:
    """
    T-shaped board: the T-tetromino scaled by n = size * scale.

    A 3n wide bar of height n with an n x n stem centred below it.
    """
    n = _scaled(size, scale)
    mask = np.zeros((2 * n, 3 * n), dtype=bool)
    mask[:n, :] = True
    mask[n:, n:2 * n] = True
    return BoardState.from_mask(mask)


def _scaled(size: int, scale: int) -> int:
    if size < 0 or scale < 1:
        raise ValueError(f"Board size must be >= 0 and scale >= 1, got size={size} scale={scale}")
    return size * scale


BOARD_TYPES = ("Rectangle", "LBoard", "TBoard")


def make_board(board_type: str, board_size: int, board_width: Optional[int] = None,
               board_scale: int = 1) -> BoardState:
    """
    Create a board from CLI-style options.

    Args:
        board_type: "Rectangle", "LBoard" or "TBoard" (case-insensitive)
        board_size: Height of a rectangle, or base size of L/T boards
        board_width: Width of a rectangle (defaults to board_size)
        board_scale: Scale factor for L/T boards

    Returns:
        Initial BoardState

    Raises:
        ValueError: If board type is unknown
    """
    key = board_type.lower()
    if key == "rectangle":
        width = board_size if board_width is None else board_width
        board = rectangle(width, board_size)
    elif key == "lboard":
        board = l_board(board_size, board_scale)
    elif key == "tboard":
        board = t_board(board_size, board_scale)
    else:
        available = ", ".join(BOARD_TYPES)
        raise ValueError(f"Unknown board type: {board_type}. Available: {available}")

    logger.debug(f"Board {board_type}: {board.rows}x{board.cols}, {board.cell_count()} cells")
    return board
