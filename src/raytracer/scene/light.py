"""Point light source."""

from __future__ import annotations

from dataclasses import dataclass

from raytracer.core.color import Color
from raytracer.core.tuples import Tuple4


@dataclass(frozen=True)
class PointLight:
    """A light with no size, emitting equally in all directions.

    Attributes:
        position: World-space position (point).
        intensity: Light color and brightness.
    """

    position: Tuple4
    intensity: Color
