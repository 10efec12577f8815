"""
Polyomino Tiler - Entry Point

Counts, graphs or samples tilings of a board by a polyomino tile.

Example:
    python main.py 2 2                      # count L-tromino tilings of the L-board
    python main.py 4 2 Rectangle --width 6 --single --seed 7
    python main.py 3 2 LBoard LTile --graph --json graph.json
    python main.py 1 2 LBoard LTile --scaling --max-scale 4
"""

import sys
import logging
import argparse
from typing import Any, Dict, List, Optional

from src.settings import load_settings
from src.tiler import (
    TilingContext,
    create_strategy,
    get_strategy_info,
    make_board,
    make_tileset,
)
from src.tiler.render import render_board, save_board_image, save_path_images
from src.tiler.shapes import BOARD_TYPES

logger = logging.getLogger(__name__)

TILE_TYPES = ("LTile", "TTile")


def configure_logging(level: str) -> None:
    """Log to both console and tiler.log."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        handlers=[
            logging.StreamHandler(),  # Console output
            logging.FileHandler("tiler.log", mode='w', encoding='utf-8')  # File output
        ]
    )


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    strategies = "\n".join(f"  {info['name']:8s} {info['description']}" for info in get_strategy_info())
    parser = argparse.ArgumentParser(
        prog="tiler",
        description="Computes various tilings of polyomino boards",
        epilog=f"strategies:\n{strategies}",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("board_size", type=int, help="The size of the board to tile")
    parser.add_argument("tile_size", type=int, help="The size of the tile")
    parser.add_argument(
        "board_type", nargs="?", default="LBoard", choices=BOARD_TYPES,
        help="The type of board to use (default: LBoard)"
    )
    parser.add_argument(
        "tile_type", nargs="?", default="LTile", choices=TILE_TYPES,
        help="The type of tile to use (default: LTile)"
    )
    parser.add_argument("--width", "-w", type=int, help="The (optional) width of a Rectangle board")
    parser.add_argument("--scale", type=int, default=1, help="The board scale to use for LBoard/TBoard")

    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--single", "-s", action="store_true", help="Computes a single tiling")
    mode.add_argument("--count", "-c", action="store_true", help="Counts all tilings")
    mode.add_argument("--graph", "-g", action="store_true", help="Computes the full tilings graph")
    mode.add_argument(
        "--scaling", action="store_true",
        help="Computes the tiling count for increasing values of the scale parameter"
    )

    parser.add_argument("--max-scale", type=int, default=8, help="Last scale tried in --scaling mode")
    parser.add_argument("--workers", type=int, help="Worker count for frontier expansion")
    parser.add_argument(
        "--executor", choices=("serial", "thread", "process"),
        help="How frontier expansion is parallelised (only 'process' uses several CPU cores)"
    )
    parser.add_argument("--seed", type=int, help="Random seed for --single")
    parser.add_argument("--max-solutions", type=int, help="Tilings collected before --single picks one")
    parser.add_argument("--json", metavar="PATH", help="Write the graph as JSON ('-' for stdout)")
    parser.add_argument("--image", metavar="PATH", help="Save the sampled tiling as a PNG")
    parser.add_argument("--steps", metavar="DIR", help="Save one PNG per placement of the sampled tiling")
    parser.add_argument("--debug", "-d", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def select_strategy(args: argparse.Namespace, settings: Dict[str, Any]) -> str:
    """Strategy name from the mode flags, falling back to the saved setting."""
    if args.single:
        return "single"
    if args.graph:
        return "graph"
    if args.count:
        return "count"
    return settings.get("strategy_name", "count")


def build_context(args: argparse.Namespace, settings: Dict[str, Any],
                  scale: Optional[int] = None) -> TilingContext:
    """Board, tiles and runtime knobs from CLI flags over saved settings."""
    board = make_board(args.board_type, args.board_size, args.width,
                       args.scale if scale is None else scale)
    tiles = make_tileset(args.tile_type, args.tile_size)

    workers = args.workers if args.workers is not None else settings.get("workers")
    executor = args.executor or settings.get("executor", "thread")
    seed = args.seed if args.seed is not None else settings.get("seed")
    max_solutions = args.max_solutions if args.max_solutions is not None else settings.get("max_solutions", 1000)

    return TilingContext.seeded(
        board, tiles, seed,
        workers=workers, executor=executor, max_solutions=max_solutions,
    )


def run_scaling(args: argparse.Namespace, settings: Dict[str, Any]) -> int:
    """Count tilings for scale = 1 .. --max-scale."""
    strategy = create_strategy("count")
    for scale in range(1, args.max_scale + 1):
        context = build_context(args, settings, scale=scale)
        result = strategy.run(context)
        print(f"scale({scale}), {result.count} tilings")
    return 0


def run_once(args: argparse.Namespace, settings: Dict[str, Any]) -> int:
    """Run the selected strategy once and print its result."""
    name = select_strategy(args, settings)
    context = build_context(args, settings)
    logger.info(
        f"Running '{name}' on {args.board_type} {context.board.rows}x{context.board.cols} "
        f"with tiles {', '.join(context.tileset.names)}"
    )

    result = create_strategy(name).run(context)

    if name == "single":
        if result.path is None:
            print("No tilings found!")
            return 1
        print(render_board(result.final_board))
        if args.image:
            out = save_board_image(result.final_board, args.image)
            logger.info(f"Tiling image saved: {out}")
        if args.steps:
            saved = save_path_images(result.path, args.steps)
            logger.info(f"Saved {len(saved)} step images to {args.steps}")
    else:
        print(f"{result.count} tilings")

    if name == "graph" and args.json:
        payload = result.graph.to_json()
        if args.json == "-":
            print(payload)
        else:
            with open(args.json, 'w', encoding='utf-8') as f:
                f.write(payload)
            logger.info(f"Graph written: {args.json}")

    logger.info(f"Finished in {result.metrics.computation_time_ms:.1f} ms")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Parse arguments, configure logging and dispatch to the selected mode."""
    args = parse_args(argv)
    settings = load_settings()
    configure_logging("DEBUG" if args.debug else settings.get("log_level", "INFO"))

    try:
        if args.scaling:
            return run_scaling(args, settings)
        return run_once(args, settings)
    except ValueError as e:
        logger.error(f"Invalid input: {e}")
        return 2


if __name__ == "__main__":
    sys.exit(main())
