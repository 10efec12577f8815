"""
Tiling Render Utilities

Text rendering of boards and tiling paths, and PNG rendering with Pillow.
"""

import colorsys
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from PIL import Image, ImageDraw

from .board import HOLE, BoardState


# Symbols cycled through for tile tags in text output
TAG_SYMBOLS = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789"
UNMARKED_SYMBOL = "."
HOLE_SYMBOL = " "

# Image settings
CELL_PX = 32
GRID_COLOR = (60, 60, 60)
HOLE_COLOR = (255, 255, 255)
UNMARKED_COLOR = (220, 220, 220)


def _symbol(cell: Optional[int]) -> str:
    if cell is None:
        return UNMARKED_SYMBOL
    if cell == HOLE:
        return HOLE_SYMBOL
    return TAG_SYMBOLS[(cell - 1) % len(TAG_SYMBOLS)]


def render_board(board: BoardState) -> str:
    """
    Render a board as text, one line per row.

    Each placed tile is drawn with the symbol of its tag; unmarked cells
    are '.', cells outside the board are blank.
    """
    return "\n".join("".join(_symbol(cell) for cell in row).rstrip() for row in board.grid)


def render_path(path: Sequence[BoardState]) -> str:
    """Render every board of a tiling path, separated by blank lines."""
    return "\n\n".join(render_board(board) for board in path)


def tag_color(tag: int) -> Tuple[int, int, int]:
    """Deterministic, well-spread colour for a tile tag."""
    hue = (tag * 0.618033988749895) % 1.0
    r, g, b = colorsys.hsv_to_rgb(hue, 0.55, 0.9)
    return (int(r * 255), int(g * 255), int(b * 255))


def render_board_image(board: BoardState, cell_px: int = CELL_PX) -> Image.Image:
    """
    Draw a board as an RGB image.

    Cells of the same tile share a colour; borders are drawn only between
    cells that belong to different tiles.

    Args:
        board: Board to draw
        cell_px: Side length of one cell in pixels

    Returns:
        PIL Image
    """
    width = max(1, board.cols * cell_px)
    height = max(1, board.rows * cell_px)
    image = Image.new("RGB", (width, height), HOLE_COLOR)
    draw = ImageDraw.Draw(image)

    for r, row in enumerate(board.grid):
        for c, cell in enumerate(row):
            if cell == HOLE:
                continue
            x0, y0 = c * cell_px, r * cell_px
            fill = UNMARKED_COLOR if cell is None else tag_color(cell)
            draw.rectangle([x0, y0, x0 + cell_px - 1, y0 + cell_px - 1], fill=fill)

    for r, row in enumerate(board.grid):
        for c, cell in enumerate(row):
            if cell == HOLE:
                continue
            x0, y0 = c * cell_px, r * cell_px
            x1, y1 = x0 + cell_px - 1, y0 + cell_px - 1
            if board.get_cell(r - 1, c) != cell or r == 0 or cell is None:
                draw.line([x0, y0, x1, y0], fill=GRID_COLOR, width=2)
            if board.get_cell(r + 1, c) != cell or r == board.rows - 1 or cell is None:
                draw.line([x0, y1, x1, y1], fill=GRID_COLOR, width=2)
            if board.get_cell(r, c - 1) != cell or c == 0 or cell is None:
                draw.line([x0, y0, x0, y1], fill=GRID_COLOR, width=2)
            if board.get_cell(r, c + 1) != cell or c == board.cols - 1 or cell is None:
                draw.line([x1, y0, x1, y1], fill=GRID_COLOR, width=2)

    return image


def save_board_image(board: BoardState, path: str, cell_px: int = CELL_PX) -> Path:
    """
    Save a board image, creating parent directories as needed.

    Returns:
        Path written
    """
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    render_board_image(board, cell_px).save(out)
    return out


def save_path_images(path: List[BoardState], directory: str, prefix: str = "step") -> List[Path]:
    """Save one image per board of a tiling path (step_000.png, step_001.png, ...)."""
    return [
        save_board_image(board, str(Path(directory) / f"{prefix}_{i:03d}.png"))
        for i, board in enumerate(path)
    ]
