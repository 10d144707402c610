"""Ready-made scenes.

three_spheres_scene() is the demo scene rendered by the example scripts:
a floor plane with three spheres of different sizes, lit from the upper
left and viewed slightly from above.

    - Floor: default white plane at y = 0
    - Middle sphere: unit sphere at (-0.5, 1, 0.5), green-cyan
    - Right sphere: radius 0.5 at (1.5, 0.5, -0.5), yellow-green
    - Left sphere: radius 0.33 at (-1.5, 0.33, -0.75), orange-yellow
    - Light: white point light at (-10, 10, -10)
    - Camera: field of view pi/3, from (0, 1.5, -5) looking at (0, 1, 0)

default_scene() wraps default_world() with a camera at (0, 0, -5) looking
at the origin; it is the reference scene of the test suite.

Example:
    >>> from raytracer.scene.presets import ThreeSpheresParams, three_spheres_scene
    >>> scene = three_spheres_scene()
    >>> len(scene.world.objects)
    4
    >>> warm = three_spheres_scene(ThreeSpheresParams(light_color=(1.0, 0.9, 0.8)))
"""

import math
from dataclasses import dataclass

from raytracer.core.color import Color
from raytracer.core.transform import scaling, translation, view_transform
from raytracer.core.tuples import point, vector
from raytracer.geometry.plane import Plane
from raytracer.geometry.sphere import Sphere
from raytracer.materials.phong import Material
from raytracer.scene.config import SceneConfig
from raytracer.scene.light import PointLight
from raytracer.scene.world import World, default_world

# =============================================================================
# Three Spheres Parameters
# =============================================================================


@dataclass
class ThreeSpheresParams:
    """Parameters for the three-spheres demo scene.

    Attributes:
        light_position: Position of the point light.
        light_color: RGB intensity of the light.
        middle_color: Color of the large middle sphere.
        right_color: Color of the small right sphere.
        left_color: Color of the smallest, left sphere.
        samples_per_axis: Sub-pixel grid size for multi-sampling.
    """

    light_position: tuple[float, float, float] = (-10.0, 10.0, -10.0)
    light_color: tuple[float, float, float] = (1.0, 1.0, 1.0)
    middle_color: tuple[float, float, float] = (0.1, 1.0, 0.5)
    right_color: tuple[float, float, float] = (0.5, 1.0, 0.1)
    left_color: tuple[float, float, float] = (1.0, 0.8, 0.1)
    samples_per_axis: int = 1


# Shared by all three spheres
SPHERE_DIFFUSE = 0.7
SPHERE_SPECULAR = 0.3

FIELD_OF_VIEW = math.pi / 3.0
EYE = (0.0, 1.5, -5.0)
LOOK_AT = (0.0, 1.0, 0.0)


def _sphere_material(color: tuple[float, float, float]) -> Material:
    return Material(
        color=Color.from_tuple(color),
        diffuse=SPHERE_DIFFUSE,
        specular=SPHERE_SPECULAR,
    )


def three_spheres_scene(params: ThreeSpheresParams | None = None) -> SceneConfig:
    """Create the three-spheres-on-a-floor demo scene.

    Args:
        params: Optional colors, light and sampling overrides. If None, uses
            default ThreeSpheresParams().

    Returns:
        An immutable SceneConfig ready to render at any image size.
    """
    if params is None:
        params = ThreeSpheresParams()

    floor = Plane()

    middle = Sphere(
        transform=translation(-0.5, 1.0, 0.5),
        material=_sphere_material(params.middle_color),
    )
    right = Sphere(
        transform=translation(1.5, 0.5, -0.5) @ scaling(0.5, 0.5, 0.5),
        material=_sphere_material(params.right_color),
    )
    left = Sphere(
        transform=translation(-1.5, 0.33, -0.75) @ scaling(0.33, 0.33, 0.33),
        material=_sphere_material(params.left_color),
    )

    light = PointLight(point(*params.light_position), Color.from_tuple(params.light_color))
    world = World((floor, middle, right, left), (light,))

    return SceneConfig(
        world=world,
        field_of_view=FIELD_OF_VIEW,
        view_transform=view_transform(point(*EYE), point(*LOOK_AT), vector(0.0, 1.0, 0.0)),
        samples_per_axis=params.samples_per_axis,
    )


def default_scene(samples_per_axis: int = 1) -> SceneConfig:
    """The default world seen from (0, 0, -5) looking at the origin."""
    return SceneConfig(
        world=default_world(),
        field_of_view=math.pi / 2.0,
        view_transform=view_transform(
            point(0.0, 0.0, -5.0), point(0.0, 0.0, 0.0), vector(0.0, 1.0, 0.0)
        ),
        samples_per_axis=samples_per_axis,
    )
