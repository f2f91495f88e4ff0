"""
Editor state and the handlers the window's event loop calls into.

The window owns a single :class:`EditorState` and feeds it
:class:`PaintEvent` and :class:`TickEvent` objects through
:func:`handle_event`.  Drawing is left to the window, which reads a
:class:`RenderSnapshot`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional, Tuple, Union

import numpy as np

from .canvas import Canvas, CellIndex
from .color import BLACK, WHITE, Color
from .config import PIXEL_SIZE, WINDOW_PADDING, WRITE_INTERVAL, EditorConfig
from .coordinates import (
    Point,
    cell_to_window,
    physical_canvas_extent,
    window_size,
    window_to_cell,
)
from .image_codec import load_canvas, write_image_file
from .persistence import PersistenceController

logger = logging.getLogger(__name__)

PRIMARY_COLOR = BLACK
SECONDARY_COLOR = WHITE


@dataclass(frozen=True)
class PaintEvent:
    window_point: Point
    use_secondary_color: bool = False

    @property
    def color(self) -> Color:
        return SECONDARY_COLOR if self.use_secondary_color else PRIMARY_COLOR


@dataclass(frozen=True)
class TickEvent:
    elapsed_seconds: float


Event = Union[PaintEvent, TickEvent]


@dataclass(frozen=True, eq=False)
class RenderSnapshot:
    """Read-only copy of what the window needs to draw one frame."""

    cells: np.ndarray
    block_size: Tuple[int, int]
    extent: Point

    @property
    def size(self) -> Tuple[int, int]:
        return (self.cells.shape[1], self.cells.shape[0])

    def blocks(self) -> Iterator[Tuple[Point, Tuple[int, int], Color]]:
        """Yield ``(centre, block size, colour)`` for every cell."""
        width, height = self.size
        for j in range(height):
            for i in range(width):
                centre = cell_to_window(self.extent, (i, j), self.block_size)
                yield centre, self.block_size, Color(*(float(v) for v in self.cells[j, i]))


class EditorState:
    """Canvas, file and save bookkeeping for one editing session."""

    def __init__(
        self,
        path: Union[str, Path],
        canvas: Canvas,
        block_size: Tuple[int, int] = PIXEL_SIZE,
        write_interval: float = WRITE_INTERVAL,
    ):
        self.path = Path(path)
        self.canvas = canvas
        self.block_size = block_size
        self.persistence = PersistenceController(write_interval)

    @classmethod
    def open(cls, path: Union[str, Path], config: Optional[EditorConfig] = None) -> "EditorState":
        """Load ``path`` (or start a blank canvas) and build the state.

        Raises:
            ImageDecodeError: If the file exists but cannot be decoded.
        """
        config = config or EditorConfig()
        canvas = load_canvas(path, config)
        return cls(path, canvas, config.block_size, config.write_interval)

    @property
    def dirty(self) -> bool:
        return self.persistence.dirty

    @property
    def time_since_flush(self) -> float:
        return self.persistence.time_since_flush

    def cell_at(self, point: Point) -> Optional[CellIndex]:
        return window_to_cell(self.canvas, point, self.block_size)

    def paint_at(self, point: Point, color: Color) -> bool:
        """Paint the cell under ``point``.  Returns False outside the canvas."""
        index = self.cell_at(point)
        if index is None:
            return False
        if self.canvas.paint(index[0], index[1], color):
            self.persistence.mark_dirty()
        return True

    def tick(self, elapsed: float) -> bool:
        return self.persistence.tick(elapsed, self.flush)

    def flush(self) -> None:
        write_image_file(self.path, self.canvas, self.block_size)
        logger.debug("Saved %s", self.path)

    def save_pending(self) -> bool:
        """Write outstanding changes right away, e.g. when the window closes."""
        return self.persistence.flush_now(self.flush)

    def extent(self) -> Point:
        return physical_canvas_extent(self.canvas, self.block_size)

    def window_size(self, padding: float = WINDOW_PADDING) -> Tuple[int, int]:
        return window_size(self.canvas, self.block_size, padding)

    def snapshot(self) -> RenderSnapshot:
        cells = self.canvas.to_array()
        cells.setflags(write=False)
        return RenderSnapshot(cells, self.block_size, self.extent())


def handle_event(state: EditorState, event: Event) -> bool:
    """Dispatch one event.  Returns True if the canvas changed or was saved."""
    if isinstance(event, PaintEvent):
        return state.paint_at(event.window_point, event.color)
    if isinstance(event, TickEvent):
        return state.tick(event.elapsed_seconds)
    raise TypeError(f"Unsupported event: {event!r}")
