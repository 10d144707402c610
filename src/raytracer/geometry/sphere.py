"""Unit sphere primitive.

Every Sphere is the unit sphere centred at its local origin; position, size
and orientation in the world come entirely from its transform.

The ray-sphere intersection solves

    |O + tD|^2 = 1

in the sphere's local space, which expands to the quadratic

    a*t^2 + b*t + c = 0,  a = D.D,  b = 2 * D.O,  c = O.O - 1

A negative discriminant means the ray misses. A tangent ray (zero
discriminant) yields two intersections with the same t, so callers always
receive either zero or two values.

Example:
    >>> from raytracer.core.transform import scaling
    >>> from raytracer.core.tuples import point
    >>> sphere = Sphere(transform=scaling(2, 2, 2))
    >>> sphere.normal_at(point(0, 2, 0))
    Tuple4(x=0.0, y=1.0, z=0.0, w=0.0)
"""

from __future__ import annotations

import math

from raytracer.core.matrix import IDENTITY, Matrix4
from raytracer.core.ray import Ray
from raytracer.core.tuples import ORIGIN, Tuple4
from raytracer.geometry.shape import ObjectFrame, next_shape_id, normal_at
from raytracer.materials.phong import Material


class Sphere:
    """A unit sphere placed in the world by a transform.

    Attributes:
        id: Process-unique, stable identifier.
        material: Surface material.
    """

    def __init__(
        self,
        transform: Matrix4 = IDENTITY,
        material: Material | None = None,
    ) -> None:
        self.id = next_shape_id()
        self.material = material if material is not None else Material()
        self._frame = ObjectFrame(transform)

    def __repr__(self) -> str:
        return f"Sphere(id={self.id}, transform={self.transform!r}, material={self.material!r})"

    @property
    def transform(self) -> Matrix4:
        return self._frame.transform

    @property
    def inverse_transform(self) -> Matrix4:
        return self._frame.inverse

    @property
    def normal_transform(self) -> Matrix4:
        return self._frame.normal

    def set_transform(self, transform: Matrix4) -> None:
        """Replace the model-to-world transform.

        Only call this while building a scene; shapes are shared read-only
        between render workers.
        """
        self._frame = ObjectFrame(transform)

    def intersect_local(self, local_ray: Ray) -> list[float]:
        sphere_to_ray = local_ray.origin - ORIGIN
        direction = local_ray.direction

        a = direction.dot(direction)
        b = 2.0 * direction.dot(sphere_to_ray)
        c = sphere_to_ray.dot(sphere_to_ray) - 1.0

        discriminant = b * b - 4.0 * a * c
        if discriminant < 0.0 or a == 0.0:
            return []

        sqrt_d = math.sqrt(discriminant)
        t1 = (-b - sqrt_d) / (2.0 * a)
        t2 = (-b + sqrt_d) / (2.0 * a)
        return [t1, t2]

    def normal_at_local(self, local_point: Tuple4) -> Tuple4:
        return local_point - ORIGIN

    def normal_at(self, world_point: Tuple4) -> Tuple4:
        """World-space normal at a point on the surface."""
        return normal_at(self, world_point)
