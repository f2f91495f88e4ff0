"""The colour grid that holds the drawing."""

from __future__ import annotations

from typing import Iterable, Iterator, Tuple

import numpy as np

from .color import WHITE, Color

CellIndex = Tuple[int, int]


class Canvas:
    """
    Fixed-size grid of colours addressed by ``(i, j)`` cell indices.

    ``i`` runs along the x axis and ``j`` along the y axis, with ``(0, 0)`` in
    the bottom-left corner.  Channels are stored in a float array of shape
    ``(height, width, 4)`` indexed as ``[j, i]``.
    """

    def __init__(self, width: int, height: int, fill: Color = WHITE):
        if width < 1 or height < 1:
            raise ValueError(f"Canvas must be at least 1x1, got {width}x{height}")
        self._cells = np.empty((height, width, 4), dtype=np.float64)
        self._cells[:, :] = fill.as_tuple()

    @classmethod
    def from_array(cls, cells: np.ndarray) -> "Canvas":
        """Build a canvas from a ``(height, width, 4)`` float array (copied)."""
        cells = np.asarray(cells, dtype=np.float64)
        if cells.ndim != 3 or cells.shape[2] != 4:
            raise ValueError(f"Expected an (H, W, 4) array, got shape {cells.shape}")
        height, width = cells.shape[:2]
        canvas = cls(width, height)
        canvas._cells[...] = cells
        return canvas

    @property
    def width(self) -> int:
        return self._cells.shape[1]

    @property
    def height(self) -> int:
        return self._cells.shape[0]

    @property
    def size(self) -> Tuple[int, int]:
        return (self.width, self.height)

    def _check_index(self, i: int, j: int) -> None:
        if not (0 <= i < self.width and 0 <= j < self.height):
            raise IndexError(
                f"Cell ({i}, {j}) outside {self.width}x{self.height} canvas"
            )

    def get(self, i: int, j: int) -> Color:
        self._check_index(i, j)
        return Color(*(float(value) for value in self._cells[j, i]))

    def paint(self, i: int, j: int, color: Color) -> bool:
        """Replace one cell.  Always reports a change to the caller."""
        self._check_index(i, j)
        self._cells[j, i] = color.as_tuple()
        return True

    def paint_many(self, assignments: Iterable[Tuple[CellIndex, Color]]) -> bool:
        """Replace several cells at once."""
        updates = list(assignments)
        for (i, j), _ in updates:
            self._check_index(i, j)
        for (i, j), color in updates:
            self._cells[j, i] = color.as_tuple()
        return True

    def cells(self) -> Iterator[Tuple[CellIndex, Color]]:
        for j in range(self.height):
            for i in range(self.width):
                yield (i, j), self.get(i, j)

    def to_array(self) -> np.ndarray:
        return self._cells.copy()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Canvas):
            return NotImplemented
        return self.size == other.size and bool(np.array_equal(self._cells, other._cells))

    def __repr__(self) -> str:
        return f"Canvas({self.width}x{self.height})"
