"""Public interface for the BigPixel pixel-art editor core."""

from __future__ import annotations

from .canvas import Canvas
from .color import BLACK, WHITE, Color, decode_color, encode_color
from .coordinates import cell_to_window, physical_canvas_extent, window_to_cell
from .editor import EditorState, PaintEvent, TickEvent, handle_event
from .errors import BigPixelError, ImageDecodeError, MalformedStreamError
from .image_codec import decode_pixels, encode_canvas, load_canvas, read_image_file, write_image_file
from .persistence import PersistenceController

__all__ = [
    "BLACK",
    "WHITE",
    "BigPixelError",
    "Canvas",
    "Color",
    "EditorState",
    "ImageDecodeError",
    "MalformedStreamError",
    "PaintEvent",
    "PersistenceController",
    "TickEvent",
    "cell_to_window",
    "decode_color",
    "decode_pixels",
    "encode_canvas",
    "encode_color",
    "handle_event",
    "load_canvas",
    "physical_canvas_extent",
    "read_image_file",
    "window_to_cell",
    "write_image_file",
]
