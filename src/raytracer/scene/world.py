"""World: the objects and lights of a scene, and the color seen along a ray.

The world answers one question for the renderer: what color does a ray see?

1. Intersect the ray with every object (a linear scan; there is no
   acceleration structure) and pick the hit, the nearest non-negative t.
2. On a miss, return the background color (black).
3. On a hit, precompute the hit point, eye vector and normal, then sum the
   Phong contribution of every light. Each light gets its own shadow ray,
   cast from the hit point nudged off the surface along the normal.

A World is immutable once constructed. Workers rendering in parallel share it
(or receive a copy) and only ever read from it.

Example:
    >>> from raytracer.core.ray import Ray
    >>> from raytracer.core.tuples import point, vector
    >>> world = default_world()
    >>> world.color_at(Ray(point(0, 0, -5), vector(0, 1, 0)))
    Color(r=0.0, g=0.0, b=0.0)
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from raytracer.core.color import BLACK, WHITE, Color
from raytracer.core.errors import SceneError
from raytracer.core.ray import Ray
from raytracer.core.transform import scaling
from raytracer.core.tuples import Tuple4, point
from raytracer.geometry.shape import (
    Computations,
    Intersection,
    Shape,
    hit,
    intersect,
    prepare_computations,
)
from raytracer.geometry.sphere import Sphere
from raytracer.materials.phong import Material, lighting
from raytracer.scene.light import PointLight

BACKGROUND = BLACK


@dataclass(frozen=True, eq=False)
class World:
    """An immutable collection of shapes and point lights.

    Attributes:
        objects: Shapes in insertion order.
        lights: Point lights in insertion order.
    """

    objects: tuple[Shape, ...] = field(default_factory=tuple)
    lights: tuple[PointLight, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "objects", tuple(self.objects))
        object.__setattr__(self, "lights", tuple(self.lights))

    @classmethod
    def of(cls, objects: Sequence[Shape], lights: Sequence[PointLight]) -> World:
        return cls(tuple(objects), tuple(lights))

    def validate(self) -> None:
        """Check that the world can be rendered.

        Raises:
            SceneError: If the world has no light.
            NotInvertibleError: If any object has a singular transform.
        """
        if not self.lights:
            raise SceneError("A world needs at least one light to be rendered")
        for shape in self.objects:
            _ = shape.inverse_transform

    # =========================================================================
    # Ray queries
    # =========================================================================

    def intersect(self, ray: Ray) -> list[Intersection]:
        """All intersections of the ray with every object, sorted by t."""
        intersections: list[Intersection] = []
        for shape in self.objects:
            intersections.extend(intersect(shape, ray))
        intersections.sort(key=lambda i: i.t)
        return intersections

    def is_shadowed(self, position: Tuple4, light: PointLight | None = None) -> bool:
        """Check whether something blocks the light from reaching a point.

        Args:
            position: World-space point to test. Pass a point already offset
                from the surface (Computations.over_point) to avoid acne.
            light: The light to test against; defaults to the first light.

        Returns:
            True if any object is hit strictly between the point and the light.
        """
        if light is None:
            if not self.lights:
                raise SceneError("A world needs at least one light for shadow tests")
            light = self.lights[0]

        to_light = light.position - position
        distance = to_light.magnitude()
        shadow_ray = Ray(position, to_light.normalize())

        for candidate in self.intersect(shadow_ray):
            if 0.0 < candidate.t < distance:
                return True
        return False

    def shade_hit(self, comps: Computations) -> Color:
        """Sum the lighting of every light at a prepared hit."""
        if not self.lights:
            raise SceneError("A world needs at least one light to be rendered")

        color = BLACK
        for light in self.lights:
            shadowed = self.is_shadowed(comps.over_point, light)
            color = color + lighting(
                comps.object.material,
                light,
                comps.over_point,
                comps.eye_vector,
                comps.normal_vector,
                shadowed,
            )
        return color

    def color_at(self, ray: Ray) -> Color:
        """The color seen along a ray, or the background on a miss."""
        intersections = self.intersect(ray)
        nearest = hit(intersections)
        if nearest is None:
            return BACKGROUND
        return self.shade_hit(prepare_computations(nearest, ray))


def default_world() -> World:
    """Two concentric spheres lit by a white light at (-10, 10, -10).

    The outer unit sphere is light green with diffuse 0.7 and specular 0.2; the
    inner sphere is the default material scaled by 0.5.
    """
    outer = Sphere(
        material=Material(color=Color(0.8, 1.0, 0.6), diffuse=0.7, specular=0.2)
    )
    inner = Sphere(transform=scaling(0.5, 0.5, 0.5))
    light = PointLight(point(-10.0, 10.0, -10.0), WHITE)
    return World((outer, inner), (light,))
