"""Canvas and display sinks.

The Canvas holds the linear float color of every pixel in a NumPy array of
shape (height, width, 3). It is written by exactly one owner during a render:
Camera.render for the sequential path, or PixelScheduler.render for the
concurrent one.

A display sink is anything with a ``paint(x, y, r, g, b)`` method that takes
8-bit channels. CanvasSink is the in-memory sink used by draw() and by tests;
the Taichi preview window in raytracer.preview.interactive is another.
"""

from __future__ import annotations

import logging
from typing import Protocol, runtime_checkable

import numpy as np
import numpy.typing as npt

from raytracer.core.color import Color

logger = logging.getLogger(__name__)


def to_rgb8_array(pixels: npt.NDArray[np.float64]) -> npt.NDArray[np.uint8]:
    """Clamp, scale and round (half up) a float image to uint8."""
    return np.floor(np.clip(pixels, 0.0, 1.0) * 255.0 + 0.5).astype(np.uint8)


class Canvas:
    """A float RGB image.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        pixels: Array of shape (height, width, 3), initialized to black.
    """

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"Canvas dimensions must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.pixels: npt.NDArray[np.float64] = np.zeros((height, width, 3), dtype=np.float64)

    def _check_bounds(self, x: int, y: int) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(
                f"Pixel ({x}, {y}) outside {self.width}x{self.height} canvas"
            )

    def write_pixel(self, x: int, y: int, color: Color) -> None:
        self._check_bounds(x, y)
        self.pixels[y, x] = (color.r, color.g, color.b)

    def write_rgb8(self, x: int, y: int, r: int, g: int, b: int) -> None:
        """Write an 8-bit color, stored as its float equivalent."""
        self._check_bounds(x, y)
        self.pixels[y, x] = (r / 255.0, g / 255.0, b / 255.0)

    def pixel_at(self, x: int, y: int) -> Color:
        self._check_bounds(x, y)
        r, g, b = self.pixels[y, x]
        return Color(r, g, b)

    def to_rgb8(self) -> npt.NDArray[np.uint8]:
        """Return the image as a (height, width, 3) uint8 array."""
        return to_rgb8_array(self.pixels)


@runtime_checkable
class DisplaySink(Protocol):
    """Receives one painted pixel at a time."""

    def paint(self, x: int, y: int, r: int, g: int, b: int) -> None: ...


class CanvasSink:
    """A display sink that paints into an in-memory uint8 image.

    Every pixel is expected to be painted exactly once; a repeated paint is
    applied but logged as a warning.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        image: Array of shape (height, width, 3), dtype uint8.
        painted: Boolean mask of pixels that have been painted.
        paint_count: Total number of paint() calls.
    """

    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self.image: npt.NDArray[np.uint8] = np.zeros((height, width, 3), dtype=np.uint8)
        self.painted: npt.NDArray[np.bool_] = np.zeros((height, width), dtype=bool)
        self.paint_count = 0

    def paint(self, x: int, y: int, r: int, g: int, b: int) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Pixel ({x}, {y}) outside {self.width}x{self.height} sink")
        if self.painted[y, x]:
            logger.warning("Pixel (%d, %d) painted more than once", x, y)
        self.image[y, x] = (r, g, b)
        self.painted[y, x] = True
        self.paint_count += 1

    @property
    def complete(self) -> bool:
        """True once every pixel has been painted at least once."""
        return bool(self.painted.all())
