"""Ray data structure.

A ray is an origin point plus a direction vector. Shapes intersect rays in
their own local space, so rays are transformed by a shape's inverse transform
before the intersection test.

Example:
    >>> from raytracer.core.ray import Ray
    >>> from raytracer.core.tuples import point, vector
    >>> ray = Ray(point(2, 3, 4), vector(1, 0, 0))
    >>> ray.position(2.5)
    Tuple4(x=4.5, y=3.0, z=4.0, w=1.0)
"""

from __future__ import annotations

from dataclasses import dataclass

from raytracer.core.matrix import Matrix4
from raytracer.core.tuples import Tuple4


@dataclass(frozen=True)
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray (w=1).
        direction: The direction vector of the ray (w=0). Not required to be
            normalized; intersection t values are in units of its length.
    """

    origin: Tuple4
    direction: Tuple4

    def position(self, t: float) -> Tuple4:
        """Compute the point origin + direction * t."""
        return self.origin + self.direction * t

    def transform(self, matrix: Matrix4) -> Ray:
        """Return this ray with origin and direction multiplied by matrix."""
        return Ray(matrix * self.origin, matrix * self.direction)
