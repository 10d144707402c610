"""Infinite plane primitive.

In local space the plane is y = 0, extending forever in x and z, with the
normal (0, 1, 0) everywhere. Rays parallel to the plane (including rays lying
in it) never intersect it.
"""

from __future__ import annotations

from raytracer.core.matrix import IDENTITY, Matrix4
from raytracer.core.ray import Ray
from raytracer.core.tuples import EPSILON, Tuple4, vector
from raytracer.geometry.shape import ObjectFrame, next_shape_id, normal_at
from raytracer.materials.phong import Material

_LOCAL_NORMAL = vector(0.0, 1.0, 0.0)


class Plane:
    """The xz plane placed in the world by a transform.

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
        return f"Plane(id={self.id}, transform={self.transform!r}, material={self.material!r})"

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
        self._frame = ObjectFrame(transform)

    def intersect_local(self, local_ray: Ray) -> list[float]:
        if abs(local_ray.direction.y) < EPSILON:
            return []
        return [-local_ray.origin.y / local_ray.direction.y]

    def normal_at_local(self, local_point: Tuple4) -> Tuple4:
        return _LOCAL_NORMAL

    def normal_at(self, world_point: Tuple4) -> Tuple4:
        return normal_at(self, world_point)
