"""
Pixel extraction from raw RGB buffers.
Turns row-major R,G,B byte triples into pixel sequences.

extract_pixels() returns a list of Pixel values. pixel_array() is its
vectorized form, with one row per Pixel, and is what the algorithms use.
Both apply the same reading rules.
"""

from typing import List, NamedTuple, Union

import numpy as np

Buffer = Union[bytes, bytearray, memoryview, np.ndarray]


class EmptyImageError(ValueError):
    """Raised when an image or buffer carries no pixel data."""

    def __init__(self, message: str = "no pixel data"):
        super().__init__(message)


class Pixel(NamedTuple):
    """One RGB sample, each channel in [0, 255]."""

    red: int
    green: int
    blue: int


def _as_uint8(buffer: Buffer) -> np.ndarray:
    if isinstance(buffer, np.ndarray):
        return np.ascontiguousarray(buffer, dtype=np.uint8).ravel()
    return np.frombuffer(bytes(buffer), dtype=np.uint8)


def pixel_array(buffer: Buffer, width: int, height: int) -> np.ndarray:
    """
    Read a row-major RGB buffer into an (n, 3) integer array.

    Complete triples are read from offset 0 in steps of 3; an incomplete
    trailing triple is ignored. At most width * height pixels are returned.

    Args:
        buffer: Raw channel bytes (R, G, B, R, G, B, ...)
        width: Image width in pixels
        height: Image height in pixels

    Returns:
        Array of shape (n, 3), dtype int64, row index = row * width + col

    Raises:
        EmptyImageError: If the buffer or the image area is empty
    """
    data = _as_uint8(buffer)
    count = min(len(data) // 3, max(width, 0) * max(height, 0))
    if count == 0:
        raise EmptyImageError()
    return data[:count * 3].reshape(count, 3).astype(np.int64)


def extract_pixels(buffer: Buffer, width: int, height: int) -> List[Pixel]:
    """
    Convert a raw RGB buffer into an ordered list of Pixel values.

    Same reading rules as pixel_array().
    """
    return [Pixel(int(r), int(g), int(b)) for r, g, b in pixel_array(buffer, width, height)]
