"""
Colour values and their 8-bit RGBA representation.

A :class:`Color` holds four normalised channels in ``[0.0, 1.0]``.  On disk
every channel is a single byte: encoding truncates ``x * 255`` toward zero
after clamping, decoding divides by 255.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Sequence, Tuple

import numpy as np

from .errors import MalformedStreamError

RgbaQuad = Tuple[int, int, int, int]


@dataclass(frozen=True)
class Color:
    red: float
    green: float
    blue: float
    alpha: float = 1.0

    def as_tuple(self) -> Tuple[float, float, float, float]:
        return (self.red, self.green, self.blue, self.alpha)

    def __iter__(self) -> Iterator[float]:
        return iter(self.as_tuple())


BLACK = Color(0.0, 0.0, 0.0, 1.0)
WHITE = Color(1.0, 1.0, 1.0, 1.0)
GRID_COLOR = Color(0.9, 0.9, 0.9, 1.0)


def _to_byte(value: float) -> int:
    clamped = min(max(float(value), 0.0), 1.0)
    return int(clamped * 255)


def encode_color(color: Color) -> RgbaQuad:
    """Convert a colour to its ``(R, G, B, A)`` byte quad."""
    return (
        _to_byte(color.red),
        _to_byte(color.green),
        _to_byte(color.blue),
        _to_byte(color.alpha),
    )


def decode_color(quad: Sequence[int]) -> Color:
    """Convert an ``(R, G, B, A)`` byte quad back to a colour."""
    if len(quad) != 4:
        raise MalformedStreamError(f"Not an RGBA quad: {tuple(quad)!r}")
    red, green, blue, alpha = (int(byte) / 255.0 for byte in quad)
    return Color(red, green, blue, alpha)


def decode_stream(data: bytes) -> List[Color]:
    """Split a flat RGBA byte stream into colours.

    Raises:
        MalformedStreamError: If the stream length is not a multiple of four.
    """
    if len(data) % 4:
        raise MalformedStreamError(
            f"RGBA stream of {len(data)} bytes is not a multiple of 4"
        )
    return [decode_color(data[offset:offset + 4]) for offset in range(0, len(data), 4)]


def encode_array(channels: np.ndarray) -> np.ndarray:
    """Vectorised :func:`encode_color` over a float array whose last axis is RGBA."""
    clamped = np.clip(np.asarray(channels, dtype=np.float64), 0.0, 1.0)
    return np.floor(clamped * 255).astype(np.uint8)


def decode_array(pixels: np.ndarray) -> np.ndarray:
    """Vectorised :func:`decode_color` over a uint8 array whose last axis is RGBA."""
    return np.asarray(pixels, dtype=np.uint8).astype(np.float64) / 255.0
