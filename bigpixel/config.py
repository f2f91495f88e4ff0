"""Editor configuration: timing, block geometry, canvas defaults."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


# ---------------------------------------------------------------------------
# Timing
# ---------------------------------------------------------------------------
# Frames per second of the window's frame timer
FPS = 60

# Minimum time (in seconds) between image writes
WRITE_INTERVAL = 0.3


# ---------------------------------------------------------------------------
# Geometry
# ---------------------------------------------------------------------------
# Physical pixels per pixel-art block (width, height)
PIXEL_SIZE: Tuple[int, int] = (8, 8)

# Blocks on a freshly created canvas (width, height)
INITIAL_CANVAS_SIZE: Tuple[int, int] = (16, 32)

# Padding between the canvas and the window border
WINDOW_PADDING = 40


# ---------------------------------------------------------------------------
# Files and window
# ---------------------------------------------------------------------------
BMP_EXTENSION = ".bmp"
WINDOW_TITLE = "BigPixel"
WINDOW_POSITION: Tuple[int, int] = (100, 50)


@dataclass
class EditorConfig:
    """Run-time settings handed from the command line to the editor."""

    block_size: Tuple[int, int] = PIXEL_SIZE
    initial_canvas_size: Tuple[int, int] = INITIAL_CANVAS_SIZE
    write_interval: float = WRITE_INTERVAL
    window_padding: int = WINDOW_PADDING
    fps: int = FPS


def parse_size(text: str) -> Tuple[int, int]:
    """Parse a ``WIDTHxHEIGHT`` string such as ``16x32``.

    Raises:
        ValueError: If the text is not two positive integers separated by ``x``.
    """
    parts = text.lower().split("x")
    if len(parts) != 2:
        raise ValueError(f"Expected WIDTHxHEIGHT, got {text!r}")
    width, height = (int(part) for part in parts)
    if width < 1 or height < 1:
        raise ValueError(f"Canvas size must be positive, got {text!r}")
    return width, height
