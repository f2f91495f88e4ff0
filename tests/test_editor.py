"""Tests for the editor state and its event handlers."""

from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest

from bigpixel.canvas import Canvas
from bigpixel.color import BLACK, WHITE
from bigpixel.config import EditorConfig
from bigpixel.coordinates import cell_to_window
from bigpixel.editor import EditorState, PaintEvent, TickEvent, handle_event
from bigpixel.errors import ImageDecodeError
from bigpixel.image_codec import read_image_file


def _state(tmp_path: Path, width: int = 2, height: int = 2) -> EditorState:
    return EditorState(tmp_path / "drawing.bmp", Canvas(width, height), (8, 8), 0.3)


def _centre(state: EditorState, i: int, j: int):
    return cell_to_window(state.extent(), (i, j), state.block_size)


class TestPainting:
    def test_paint_marks_dirty(self, tmp_path):
        state = _state(tmp_path)
        assert not state.dirty
        assert handle_event(state, PaintEvent(_centre(state, 1, 0))) is True
        assert state.canvas.get(1, 0) == BLACK
        assert state.dirty
        assert state.time_since_flush == 0.0

    def test_secondary_colour_is_white(self, tmp_path):
        state = _state(tmp_path)
        state.canvas.paint(0, 1, BLACK)
        handle_event(state, PaintEvent(_centre(state, 0, 1), use_secondary_color=True))
        assert state.canvas.get(0, 1) == WHITE

    def test_click_outside_canvas(self, tmp_path):
        state = _state(tmp_path)
        assert handle_event(state, PaintEvent((400.0, -400.0))) is False
        assert not state.dirty
        assert all(color == WHITE for _, color in state.canvas.cells())

    def test_repeated_paint_still_marks_dirty(self, tmp_path):
        state = _state(tmp_path)
        point = _centre(state, 0, 0)
        handle_event(state, PaintEvent(point))
        assert state.save_pending() is True
        assert not state.dirty

        before = state.canvas.to_array()
        handle_event(state, PaintEvent(point))
        assert np.array_equal(state.canvas.to_array(), before)
        assert state.dirty

    def test_unknown_event(self, tmp_path):
        with pytest.raises(TypeError):
            handle_event(_state(tmp_path), object())  # type: ignore[arg-type]


class TestSaving:
    def test_example_scenario(self, tmp_path):
        state = _state(tmp_path)
        handle_event(state, PaintEvent(_centre(state, 0, 0)))
        assert handle_event(state, TickEvent(0.29)) is False
        assert not state.path.exists()

        assert handle_event(state, TickEvent(0.02)) is True
        assert not state.dirty
        assert state.time_since_flush == 0.0

        loaded = read_image_file(state.path, (8, 8))
        assert loaded == state.canvas
        assert loaded.get(0, 0) == BLACK
        assert loaded.get(1, 1) == WHITE

    def test_paint_after_flush_is_not_in_that_flush(self, tmp_path):
        state = _state(tmp_path)
        handle_event(state, PaintEvent(_centre(state, 0, 0)))
        handle_event(state, TickEvent(0.5))
        handle_event(state, PaintEvent(_centre(state, 1, 1)))

        loaded = read_image_file(state.path, (8, 8))
        assert loaded.get(0, 0) == BLACK
        assert loaded.get(1, 1) == WHITE
        assert state.dirty

    def test_failed_save_keeps_editing_alive(self, tmp_path):
        state = EditorState(tmp_path / "missing" / "drawing.bmp", Canvas(2, 2), (8, 8), 0.3)
        handle_event(state, PaintEvent(_centre(state, 0, 0)))
        assert handle_event(state, TickEvent(1.0)) is False
        assert state.dirty

        state.path.parent.mkdir()
        assert handle_event(state, TickEvent(1 / 60)) is True
        assert state.path.exists()

    def test_open_existing_file(self, tmp_path):
        state = _state(tmp_path, 3, 2)
        state.canvas.paint(2, 1, BLACK)
        state.flush()

        reopened = EditorState.open(state.path, EditorConfig(block_size=(8, 8)))
        assert reopened.canvas.size == (3, 2)
        assert reopened.canvas.get(2, 1) == BLACK
        assert not reopened.dirty

    def test_open_missing_file(self, tmp_path):
        state = EditorState.open(tmp_path / "new.bmp", EditorConfig(initial_canvas_size=(4, 5)))
        assert state.canvas.size == (4, 5)
        assert not state.path.exists()

    def test_open_corrupt_file(self, tmp_path):
        path = tmp_path / "broken.bmp"
        path.write_bytes(b"BM garbage")
        with pytest.raises(ImageDecodeError):
            EditorState.open(path)
        assert path.read_bytes() == b"BM garbage"


class TestSnapshot:
    def test_snapshot_is_a_frozen_copy(self, tmp_path):
        state = _state(tmp_path)
        snapshot = state.snapshot()
        assert not snapshot.cells.flags.writeable
        handle_event(state, PaintEvent(_centre(state, 0, 0)))
        assert tuple(snapshot.cells[0, 0]) == WHITE.as_tuple()

    def test_blocks_cover_every_cell(self, tmp_path):
        state = _state(tmp_path, 3, 2)
        state.canvas.paint(2, 1, BLACK)
        blocks = list(state.snapshot().blocks())
        assert len(blocks) == 6
        centres = {centre: color for centre, _, color in blocks}
        assert centres[_centre(state, 2, 1)] == BLACK
        assert all(size == (8, 8) for _, size, _ in blocks)

    def test_window_size(self, tmp_path):
        assert _state(tmp_path, 16, 32).window_size(40) == (216, 344)
