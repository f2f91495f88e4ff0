"""
Command line entry point for the BigPixel editor.

Usage examples
--------------

Open (or create) a drawing::

    python -m bigpixel.cli sprite.bmp

Start a new 32x32 drawing with debug logging::

    python -m bigpixel.cli --size 32x32 --debug new.bmp

Plain clicks paint black, shift+clicks paint white.  The image is saved
automatically shortly after each change.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Callable, Optional, Sequence

from .config import BMP_EXTENSION, INITIAL_CANVAS_SIZE, EditorConfig, parse_size
from .editor import EditorState
from .errors import ImageDecodeError

logger = logging.getLogger("bigpixel")

EditorRunner = Callable[[EditorState, EditorConfig], int]


def _setup_logging(debug: bool = False) -> None:
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def _size_arg(text: str):
    try:
        return parse_size(text)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="bigpixel",
        description="Paint pixel art into a block-scaled BMP image.",
    )
    parser.add_argument(
        "image",
        type=Path,
        help="Image file name with suffix '.bmp'; created on first save if missing.",
    )
    parser.add_argument(
        "--size",
        type=_size_arg,
        default=INITIAL_CANVAS_SIZE,
        metavar="WxH",
        help="Canvas size in blocks for a new image (default: %dx%d)." % INITIAL_CANVAS_SIZE,
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable verbose debug logging.",
    )
    return parser.parse_args(argv)


def _run_window(state: EditorState, config: EditorConfig) -> int:
    from .gui_app import run_editor

    return run_editor(state, config)


def main(argv: Optional[Sequence[str]] = None, runner: Optional[EditorRunner] = None) -> int:
    args = parse_args(argv)
    _setup_logging(args.debug)

    if args.image.suffix.lower() != BMP_EXTENSION:
        logger.error("image file must have suffix '%s': %s", BMP_EXTENSION, args.image)
        return 1

    config = EditorConfig(initial_canvas_size=args.size)
    try:
        state = EditorState.open(args.image, config)
    except ImageDecodeError as exc:
        logger.error("%s", exc)
        logger.error("Delete the file if you want to replace it.")
        return 1

    width, height = state.canvas.size
    logger.info("Editing %s (%dx%d blocks)", state.path, width, height)
    return (runner or _run_window)(state, config)


if __name__ == "__main__":
    raise SystemExit(main())
