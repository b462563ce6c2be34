"""An off-screen ARGB image addressed from its centre, with anti-aliased lines."""

from __future__ import annotations

import sys
from array import array

from .color import hue_to_int
from .geometry import frac_num, rfrac_num

_BLACK = 0xFF000000
_MASK32 = 0xFFFFFFFF

Point = tuple[int, int]


class Canvas:
    """A ``width`` x ``height`` image whose origin is the middle of the window.

    Pixels hold packed ``0xAARRGGBB`` values. A point is drawable when it lies
    strictly inside the half-width and half-height around the origin.
    """

    def __init__(self, width: int = 1200, height: int = 900) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"canvas size must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self._pixels = self._blank()

    def _blank(self) -> array:
        return array("I", [_BLACK]) * (self.width * self.height)

    def _index(self, x: int, y: int) -> int | None:
        half_w, half_h = self.width // 2, self.height // 2
        if x >= half_w or x <= -half_w or y >= half_h or y <= -half_h:
            return None
        return (y + half_h) * self.width + (x + half_w)

    def clear(self) -> None:
        """Fill the whole image with opaque black."""
        self._pixels = self._blank()

    def add_pixel(self, x: int, y: int, color: int) -> None:
        """Set the pixel at ``(x, y)``; points off the canvas are ignored."""
        index = self._index(x, y)
        if index is not None:
            self._pixels[index] = color & _MASK32

    def pixel(self, x: int, y: int) -> int:
        """Colour stored at ``(x, y)``; raises IndexError off the canvas."""
        index = self._index(x, y)
        if index is None:
            raise IndexError(f"({x}, {y}) lies outside the canvas")
        return self._pixels[index]

    def plot_line(self, start: Point, end: Point, hue: int) -> None:
        """Draw an anti-aliased line in the given hue between two points."""
        (x1, y1), (x2, y2) = start, end
        steep = abs(y2 - y1) > abs(x2 - x1)
        if steep:
            x1, y1, x2, y2 = y1, x1, y2, x2
        if x1 > x2:
            x1, y1, x2, y2 = x2, y2, x1, y1
        dx = x2 - x1
        gradient = (y2 - y1) / dx if dx else 1.0

        # Positions along the major axis that cannot reach the canvas are skipped.
        limit = (self.height if steep else self.width) // 2
        first = max(x1, -limit)
        last = min(x2, limit)
        intersect = float(y1) if first == x1 else y1 + gradient * (first - x1)

        for major in range(first, last + 1):
            pairs = (
                (int(intersect), rfrac_num(intersect)),
                (int(intersect - 1), frac_num(intersect)),
            )
            for minor, alpha in pairs:
                color = hue_to_int(hue, alpha)
                if steep:
                    self.add_pixel(minor, major, color)
                else:
                    self.add_pixel(major, minor, color)
            intersect += gradient

    def to_bytes(self) -> bytes:
        """The image as rows of little-endian 32-bit pixels (B, G, R, A)."""
        data = array("I", self._pixels)
        if sys.byteorder == "big":
            data.byteswap()
        return data.tobytes()