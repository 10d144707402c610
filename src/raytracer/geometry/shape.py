"""Shape capability protocol and the shape-agnostic intersection engine.

Shapes are not related by inheritance. Anything that provides the Shape
protocol below can be placed in a World: the engine functions in this module
(intersect, normal_at, prepare_computations) only rely on the protocol, and
each concrete shape only has to answer two questions in its own local space:

    intersect_local(local_ray) -> list of t values
    normal_at_local(local_point) -> normal vector

Transforms are handled once, here. A ray is moved into the shape's local
space with the inverse transform, and local normals are moved back out with
the transpose of the inverse so that they stay perpendicular to the surface
under non-uniform scaling.

Example:
    >>> from raytracer.core.ray import Ray
    >>> from raytracer.core.tuples import point, vector
    >>> from raytracer.geometry.sphere import Sphere
    >>> xs = intersect(Sphere(), Ray(point(0, 0, -5), vector(0, 0, 1)))
    >>> [i.t for i in xs]
    [4.0, 6.0]
"""

from __future__ import annotations

import itertools
from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from raytracer.core.errors import NotInvertibleError
from raytracer.core.matrix import IDENTITY, Matrix4
from raytracer.core.ray import Ray
from raytracer.core.tuples import EPSILON, Tuple4, vector

if TYPE_CHECKING:
    from raytracer.materials.phong import Material

_shape_ids = itertools.count(1)


def next_shape_id() -> int:
    """Return a process-unique id for a new shape."""
    return next(_shape_ids)


@runtime_checkable
class Shape(Protocol):
    """Capabilities every renderable shape provides."""

    id: int
    material: Material

    @property
    def transform(self) -> Matrix4: ...

    @property
    def inverse_transform(self) -> Matrix4: ...

    @property
    def normal_transform(self) -> Matrix4: ...

    def set_transform(self, transform: Matrix4) -> None: ...

    def intersect_local(self, local_ray: Ray) -> list[float]: ...

    def normal_at_local(self, local_point: Tuple4) -> Tuple4: ...


class ObjectFrame:
    """A model-to-world transform with its inverse and normal matrix cached.

    A singular transform is accepted so that scenes can be assembled in any
    order, but every access to the inverse then raises NotInvertibleError.
    """

    __slots__ = ("transform", "_inverse", "_normal")

    def __init__(self, transform: Matrix4 = IDENTITY) -> None:
        self.transform = transform
        try:
            self._inverse: Matrix4 | None = transform.inverse()
        except NotInvertibleError:
            self._inverse = None
            self._normal: Matrix4 | None = None
        else:
            self._normal = self._inverse.transpose()

    def __getstate__(self):
        return (self.transform, self._inverse, self._normal)

    def __setstate__(self, state) -> None:
        self.transform, self._inverse, self._normal = state

    @property
    def is_invertible(self) -> bool:
        return self._inverse is not None

    @property
    def inverse(self) -> Matrix4:
        if self._inverse is None:
            raise NotInvertibleError(f"Singular object transform {self.transform!r}")
        return self._inverse

    @property
    def normal(self) -> Matrix4:
        """Transpose of the inverse, used to move normals to world space."""
        if self._normal is None:
            raise NotInvertibleError(f"Singular object transform {self.transform!r}")
        return self._normal


# =============================================================================
# Intersections
# =============================================================================


@dataclass(frozen=True, eq=False)
class Intersection:
    """A ray crossing a shape at parameter t.

    Attributes:
        t: Distance along the ray in units of the ray direction's length.
        object: The shape that was hit.
    """

    t: float
    object: Shape

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Intersection):
            return NotImplemented
        return abs(self.t - other.t) < EPSILON and self.object is other.object


def hit(intersections: Iterable[Intersection]) -> Intersection | None:
    """Select the visible intersection.

    Returns the intersection with the smallest non-negative t, or None when
    every t is negative (all hits are behind the ray origin). The input does
    not need to be sorted.
    """
    best: Intersection | None = None
    for candidate in intersections:
        if candidate.t >= 0.0 and (best is None or candidate.t < best.t):
            best = candidate
    return best


def intersect(shape: Shape, ray: Ray) -> list[Intersection]:
    """Intersect a world-space ray with a shape.

    Raises:
        NotInvertibleError: If the shape's transform is singular.
    """
    local_ray = ray.transform(shape.inverse_transform)
    return [Intersection(t, shape) for t in shape.intersect_local(local_ray)]


def normal_at(shape: Shape, world_point: Tuple4) -> Tuple4:
    """Surface normal of a shape at a world-space point.

    Raises:
        NotInvertibleError: If the shape's transform is singular.
    """
    local_point = shape.inverse_transform * world_point
    local_normal = shape.normal_at_local(local_point)
    world_normal = shape.normal_transform * local_normal
    # The transposed inverse can leak translation into w
    return vector(world_normal.x, world_normal.y, world_normal.z).normalize()


# =============================================================================
# Hit preparation
# =============================================================================


@dataclass(frozen=True)
class Computations:
    """State precomputed at a hit for shading.

    Attributes:
        t: Ray parameter of the hit.
        object: The shape that was hit.
        point: World-space hit point.
        over_point: The hit point nudged EPSILON along the normal, used as
            the origin of shadow rays to avoid self-shadowing acne.
        eye_vector: Unit vector from the hit point back toward the eye.
        normal_vector: Unit surface normal, flipped to face the eye.
        inside: True when the hit is on the inside of the surface.
    """

    t: float
    object: Shape
    point: Tuple4
    over_point: Tuple4
    eye_vector: Tuple4
    normal_vector: Tuple4
    inside: bool


def prepare_computations(intersection: Intersection, ray: Ray) -> Computations:
    """Precompute the shading inputs for an intersection."""
    position = ray.position(intersection.t)
    eye_vector = -ray.direction
    normal_vector = normal_at(intersection.object, position)

    inside = normal_vector.dot(eye_vector) < 0.0
    if inside:
        normal_vector = -normal_vector

    return Computations(
        t=intersection.t,
        object=intersection.object,
        point=position,
        over_point=position + normal_vector * EPSILON,
        eye_vector=eye_vector,
        normal_vector=normal_vector,
        inside=inside,
    )
