"""
Mapping between window coordinates and canvas cells.

Window coordinates have their origin at the centre of the window and the y
axis pointing up.  The physical canvas extent reserves one extra block on
each axis as a border.
"""

from __future__ import annotations

import math
from typing import Optional, Tuple

from .canvas import Canvas, CellIndex
from .config import PIXEL_SIZE, WINDOW_PADDING

Point = Tuple[float, float]


def physical_canvas_extent(canvas: Canvas, block_size: Tuple[int, int] = PIXEL_SIZE) -> Point:
    """Size of the canvas in physical pixels, including the one-block border."""
    block_w, block_h = block_size
    return (float((canvas.width + 1) * block_w), float((canvas.height + 1) * block_h))


def window_to_cell(
    canvas: Canvas,
    point: Point,
    block_size: Tuple[int, int] = PIXEL_SIZE,
) -> Optional[CellIndex]:
    """Cell under a window point, or ``None`` for the border and background."""
    block_w, block_h = block_size
    extent_w, extent_h = physical_canvas_extent(canvas, block_size)
    x_shifted = point[0] + extent_w / 2
    y_shifted = point[1] + extent_h / 2

    if x_shifted < 0 or x_shifted >= extent_w or y_shifted < 0 or y_shifted >= extent_h:
        return None

    i = math.floor(x_shifted) // block_w
    j = math.floor(y_shifted) // block_h
    # The border block lies inside the extent but holds no cell.
    if i >= canvas.width or j >= canvas.height:
        return None
    return (i, j)


def cell_to_window(
    extent: Point,
    index: CellIndex,
    block_size: Tuple[int, int] = PIXEL_SIZE,
) -> Point:
    """Window position of the centre of cell ``index``."""
    block_w, block_h = block_size
    i, j = index
    x = (i + 0.5) * block_w - extent[0] / 2
    y = (j + 0.5) * block_h - extent[1] / 2
    return (x, y)


def window_size(
    canvas: Canvas,
    block_size: Tuple[int, int] = PIXEL_SIZE,
    padding: float = WINDOW_PADDING,
) -> Tuple[int, int]:
    """Initial window size: the canvas extent plus padding on every side."""
    extent_w, extent_h = physical_canvas_extent(canvas, block_size)
    return (round(extent_w + 2 * padding), round(extent_h + 2 * padding))
