"""Linear RGB colors.

Colors are stored as floats and are not clamped while shading; values above
1.0 are legal until a pixel is written out, when to_rgb8() clamps each
channel to [0, 1], scales it to [0, 255] and rounds half up.
"""

from __future__ import annotations

import math
from typing import NamedTuple

from raytracer.core.tuples import approx_equal


class PixelColor(NamedTuple):
    """An 8-bit RGB triple as delivered to display sinks."""

    r: int
    g: int
    b: int


def to_byte(value: float) -> int:
    """Convert a linear channel value to 0-255 (clamp, scale, round half up)."""
    clamped = min(max(value, 0.0), 1.0)
    return int(math.floor(clamped * 255.0 + 0.5))


class Color:
    """An RGB color with float channels.

    Attributes:
        r: Red channel.
        g: Green channel.
        b: Blue channel.
    """

    __slots__ = ("r", "g", "b")

    def __init__(self, r: float, g: float, b: float) -> None:
        self.r = float(r)
        self.g = float(g)
        self.b = float(b)

    def __repr__(self) -> str:
        return f"Color(r={self.r!r}, g={self.g!r}, b={self.b!r})"

    def __iter__(self):
        yield self.r
        yield self.g
        yield self.b

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Color):
            return NotImplemented
        return (
            approx_equal(self.r, other.r)
            and approx_equal(self.g, other.g)
            and approx_equal(self.b, other.b)
        )

    __hash__ = None  # type: ignore[assignment]

    def __getstate__(self) -> tuple[float, float, float]:
        return (self.r, self.g, self.b)

    def __setstate__(self, state: tuple[float, float, float]) -> None:
        self.r, self.g, self.b = state

    def __add__(self, other: Color) -> Color:
        return Color(self.r + other.r, self.g + other.g, self.b + other.b)

    def __sub__(self, other: Color) -> Color:
        return Color(self.r - other.r, self.g - other.g, self.b - other.b)

    def __mul__(self, other: Color | float) -> Color:
        # Color * Color is the Hadamard (channel-wise) product
        if isinstance(other, Color):
            return Color(self.r * other.r, self.g * other.g, self.b * other.b)
        return Color(self.r * other, self.g * other, self.b * other)

    def __rmul__(self, scalar: float) -> Color:
        return Color(self.r * scalar, self.g * scalar, self.b * scalar)

    def to_rgb8(self) -> PixelColor:
        """Convert to clamped 8-bit channels."""
        return PixelColor(to_byte(self.r), to_byte(self.g), to_byte(self.b))

    @classmethod
    def from_tuple(cls, rgb: tuple[float, float, float]) -> Color:
        return cls(rgb[0], rgb[1], rgb[2])


BLACK = Color(0.0, 0.0, 0.0)
WHITE = Color(1.0, 1.0, 1.0)
