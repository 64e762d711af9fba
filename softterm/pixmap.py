"""A flat RGB pixel buffer."""

from __future__ import annotations

from typing import Tuple

RGB = Tuple[int, int, int]


class RgbPixmap:
    """A pixmap with RGB pixels stored row by row in a flat byte array."""

    def __init__(self, width: int, height: int) -> None:
        if width < 0 or height < 0:
            raise ValueError("pixmap dimensions must be non-negative")
        self._width = width
        self._height = height
        self._data = bytearray(3 * width * height)

    def __repr__(self) -> str:
        return f"RgbPixmap(width={self._width}, height={self._height})"

    def _offset(self, x: int, y: int) -> int:
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise IndexError(f"pixel coordinates out of bounds: ({x}, {y})")
        return 3 * (y * self._width + x)

    def to_rgba(self) -> bytes:
        """Return the pixels as flat RGBA bytes with full opacity."""
        out = bytearray(4 * self._width * self._height)
        out[0::4] = self._data[0::3]
        out[1::4] = self._data[1::3]
        out[2::4] = self._data[2::3]
        out[3::4] = b"\xff" * (self._width * self._height)
        return bytes(out)

    def put_pixel(self, x: int, y: int, color: RGB) -> None:
        """Set the pixel at (x, y)."""
        index = self._offset(x, y)
        self._data[index : index + 3] = bytes(color)

    def get_pixel(self, x: int, y: int) -> RGB:
        """Return the pixel at (x, y)."""
        index = self._offset(x, y)
        r, g, b = self._data[index : index + 3]
        return (r, g, b)

    def fill(self, color: RGB) -> None:
        """Set every pixel to ``color``."""
        self._data[:] = bytes(color) * (self._width * self._height)

    def width(self) -> int:
        """Width in pixels."""
        return self._width

    def height(self) -> int:
        """Height in pixels."""
        return self._height

    def data(self) -> bytes:
        """The raw RGB bytes, row by row."""
        return bytes(self._data)