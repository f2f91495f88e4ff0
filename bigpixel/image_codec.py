"""
Conversion between canvases and block-expanded BMP images.

Every canvas cell is stored as a ``Bw x Bh`` block of identical physical
pixels.  Loading reverses this by averaging each block in decoded float
space, so images that were touched up in another editor still load.

Raster arrays follow Pillow's layout: shape ``(height, width, 4)`` with the
top image row first.  Canvas row ``j = 0`` is the bottom row, which is also
the first row stored in a BMP file, so rows are flipped at this boundary.
Files are 32-bit BMPs and keep their alpha byte when read back.
"""

from __future__ import annotations

import logging
import math
import os
from pathlib import Path
from typing import Optional, Tuple, Union

import numpy as np
from PIL import Image

from .canvas import Canvas
from .color import WHITE, decode_array, encode_array
from .config import PIXEL_SIZE, EditorConfig
from .errors import ImageDecodeError

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def _check_block_size(block_size: Tuple[int, int]) -> Tuple[int, int]:
    block_w, block_h = int(block_size[0]), int(block_size[1])
    if block_w < 1 or block_h < 1:
        raise ValueError(f"Block size must be positive, got {block_size}")
    return block_w, block_h


# ---------------------------------------------------------------------------
# Encoding
# ---------------------------------------------------------------------------


def encode_canvas(canvas: Canvas, block_size: Tuple[int, int] = PIXEL_SIZE) -> np.ndarray:
    """Expand a canvas into an RGBA raster of ``(H * Bh, W * Bw, 4)`` bytes."""
    block_w, block_h = _check_block_size(block_size)
    quads = encode_array(canvas.to_array())
    expanded = np.repeat(np.repeat(quads, block_h, axis=0), block_w, axis=1)
    return np.ascontiguousarray(np.flipud(expanded))


def canvas_to_image(canvas: Canvas, block_size: Tuple[int, int] = PIXEL_SIZE) -> Image.Image:
    return Image.fromarray(encode_canvas(canvas, block_size))


def write_image_file(
    path: PathLike,
    canvas: Canvas,
    block_size: Tuple[int, int] = PIXEL_SIZE,
) -> None:
    """
    Write the canvas to ``path`` as a 32-bit BMP.

    The image is written to a sibling temporary file first and then moved over
    the target, so the previous image survives a failed write.

    Raises:
        OSError: If the file cannot be written.
    """
    target = Path(path)
    temp_path = target.with_name(target.name + ".tmp")
    image = canvas_to_image(canvas, block_size)
    try:
        image.save(temp_path, format="BMP")
        os.replace(temp_path, target)
    except OSError:
        if temp_path.exists():
            temp_path.unlink()
        raise
    logger.debug("Wrote %dx%d canvas to %s", canvas.width, canvas.height, target)


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------


def _average_blocks(blocks: np.ndarray) -> np.ndarray:
    """Per-channel mean over the last axis, summed with exact rounding."""
    count = blocks.shape[-1]
    return np.apply_along_axis(math.fsum, -1, blocks) / count


def decode_pixels(
    pixels: np.ndarray,
    block_size: Tuple[int, int] = PIXEL_SIZE,
    source: str = "<image>",
) -> Canvas:
    """
    Reduce an RGBA raster to a canvas by averaging each block.

    Dimensions that are not a multiple of the block size only produce a
    warning; the partial blocks along the top and right edges are ignored.

    Raises:
        ImageDecodeError: If the raster is not RGBA or holds no complete block.
    """
    block_w, block_h = _check_block_size(block_size)
    pixels = np.asarray(pixels)
    if pixels.ndim != 3 or pixels.shape[2] != 4:
        raise ImageDecodeError(f"{source}: expected RGBA pixel data, got shape {pixels.shape}")

    image_h, image_w = pixels.shape[:2]
    if image_w % block_w or image_h % block_h:
        logger.warning(
            "'%s' doesn't appear to be a BigPixel image: expected the image size "
            "to be a multiple of %dx%d, got %dx%d",
            source, block_w, block_h, image_w, image_h,
        )

    canvas_w, canvas_h = image_w // block_w, image_h // block_h
    if canvas_w < 1 or canvas_h < 1:
        raise ImageDecodeError(
            f"{source}: {image_w}x{image_h} image is smaller than one {block_w}x{block_h} block"
        )

    rows = np.flipud(pixels)[: canvas_h * block_h, : canvas_w * block_w]
    channels = decode_array(rows)
    # (cells_y, block_y, cells_x, block_x, rgba) -> (cells_y, cells_x, rgba, block pixels)
    blocks = channels.reshape(canvas_h, block_h, canvas_w, block_w, 4)
    blocks = blocks.transpose(0, 2, 4, 1, 3).reshape(canvas_h, canvas_w, 4, block_h * block_w)
    return Canvas.from_array(_average_blocks(blocks))


def _has_unread_alpha(image: Image.Image) -> bool:
    """True for uncompressed 32-bit BMPs, which Pillow opens as RGB and drops the fourth byte."""
    if len(image.tile) != 1:
        return False
    codec, _, _, args = image.tile[0]
    return (
        codec == "raw"
        and args[0] == "BGRX"
        and image.info.get("compression", 0) == 0
    )


def _read_bgra_pixels(path: Path, image: Image.Image) -> np.ndarray:
    """Decode the pixel array of a 32-bit BMP keeping the fourth byte as alpha."""
    _, _, offset, (_, stride, direction) = image.tile[0]
    width, height = image.size
    with path.open("rb") as handle:
        handle.seek(offset)
        data = handle.read(stride * height)
    rgba = Image.frombuffer("RGBA", (width, height), data, "raw", "BGRA", stride, direction)
    return np.array(rgba)


def read_image_file(
    path: PathLike,
    block_size: Tuple[int, int] = PIXEL_SIZE,
) -> Optional[Canvas]:
    """
    Load a canvas from a BMP file.

    Returns:
        The decoded canvas, or ``None`` if the file does not exist.

    Raises:
        ImageDecodeError: If the file exists but cannot be read as a BMP image.
    """
    path = Path(path)
    try:
        with Image.open(path) as image:
            if image.format != "BMP":
                raise ImageDecodeError(f"'{path}' is a {image.format} image, not a BMP")
            if _has_unread_alpha(image):
                pixels = _read_bgra_pixels(path, image)
            else:
                pixels = np.array(image.convert("RGBA"))
    except FileNotFoundError:
        logger.debug("No image at %s", path)
        return None
    except (OSError, ValueError, Image.DecompressionBombError) as exc:
        raise ImageDecodeError(f"error reading '{path}': {exc}") from exc

    canvas = decode_pixels(pixels, block_size, source=str(path))
    logger.info("Loaded %dx%d canvas from %s", canvas.width, canvas.height, path)
    return canvas


def load_canvas(path: PathLike, config: Optional[EditorConfig] = None) -> Canvas:
    """Read ``path`` or fall back to a blank canvas of the configured size."""
    config = config or EditorConfig()
    canvas = read_image_file(path, config.block_size)
    if canvas is None:
        width, height = config.initial_canvas_size
        logger.info("Starting a new %dx%d canvas for %s", width, height, path)
        canvas = Canvas(width, height, fill=WHITE)
    return canvas
