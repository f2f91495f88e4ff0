"""Tests for the window <-> cell mapping."""

from __future__ import annotations

import pytest

from bigpixel.canvas import Canvas
from bigpixel.coordinates import (
    cell_to_window,
    physical_canvas_extent,
    window_size,
    window_to_cell,
)


class TestExtent:
    def test_extent_has_one_block_border(self):
        assert physical_canvas_extent(Canvas(2, 2), (8, 8)) == (24.0, 24.0)
        assert physical_canvas_extent(Canvas(16, 32), (8, 4)) == (136.0, 132.0)

    def test_window_size_adds_padding(self):
        assert window_size(Canvas(16, 32), (8, 8), padding=40) == (216, 344)


class TestMapping:
    @pytest.mark.parametrize("block_size", [(8, 8), (8, 4), (1, 1), (3, 5)])
    def test_cell_centre_maps_back_to_cell(self, block_size):
        canvas = Canvas(5, 3)
        extent = physical_canvas_extent(canvas, block_size)
        for j in range(canvas.height):
            for i in range(canvas.width):
                point = cell_to_window(extent, (i, j), block_size)
                assert window_to_cell(canvas, point, block_size) == (i, j)

    def test_cell_centres_are_offset_by_half_a_block(self):
        extent = (24.0, 24.0)
        assert cell_to_window(extent, (0, 0), (8, 8)) == (-8.0, -8.0)
        assert cell_to_window(extent, (1, 1), (8, 8)) == (0.0, 0.0)

    def test_window_origin(self):
        assert window_to_cell(Canvas(2, 2), (0.0, 0.0), (8, 8)) == (1, 1)

    def test_lower_left_corner_is_cell_zero(self):
        assert window_to_cell(Canvas(2, 2), (-12.0, -12.0), (8, 8)) == (0, 0)

    @pytest.mark.parametrize(
        "point",
        [
            (-12.01, 0.0),   # left of the extent
            (0.0, -12.5),    # below the extent
            (12.0, 0.0),     # right edge is exclusive
            (0.0, 12.0),     # top edge is exclusive
            (500.0, 500.0),  # far in the background
        ],
    )
    def test_points_outside_extent(self, point):
        assert window_to_cell(Canvas(2, 2), point, (8, 8)) is None

    @pytest.mark.parametrize("point", [(4.0, 0.0), (0.0, 11.9), (11.9, 11.9)])
    def test_border_block_holds_no_cell(self, point):
        assert window_to_cell(Canvas(2, 2), point, (8, 8)) is None
