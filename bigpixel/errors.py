"""Exceptions raised by the BigPixel core."""


class BigPixelError(Exception):
    """Base class for all BigPixel errors."""


class ImageDecodeError(BigPixelError):
    """An existing image file could not be read or parsed."""


class MalformedStreamError(ImageDecodeError):
    """A raw RGBA byte stream whose length is not a multiple of four."""
