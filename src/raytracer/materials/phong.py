"""Phong material model.

The Phong reflection model approximates the light leaving a surface as the
sum of three terms:

    ambient  = color * intensity * ambient
    diffuse  = color * intensity * diffuse * (L . N)            if L . N >= 0
    specular = intensity * specular * (R . E) ^ shininess        if R . E > 0

where L is the unit vector toward the light, N the surface normal, E the unit
vector toward the eye and R the reflection of -L about N. A point in shadow
only receives the ambient term. The result is not clamped; values above 1.0
are clamped when the pixel is written.

Example:
    >>> from raytracer.core.color import Color, WHITE
    >>> from raytracer.core.tuples import point, vector
    >>> from raytracer.scene.light import PointLight
    >>> light = PointLight(point(0, 0, -10), WHITE)
    >>> eye = normal = vector(0, 0, -1)
    >>> lighting(Material(), light, point(0, 0, 0), eye, normal) == Color(1.9, 1.9, 1.9)
    True
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from raytracer.core.color import BLACK, Color
from raytracer.core.tuples import Tuple4

if TYPE_CHECKING:
    from raytracer.scene.light import PointLight


@dataclass(frozen=True)
class Material:
    """Surface reflectance parameters.

    Attributes:
        color: Surface color, each channel normally in [0, 1].
        ambient: Fraction of light reflected regardless of geometry.
        diffuse: Fraction of light reflected diffusely (matte).
        specular: Strength of the specular highlight.
        shininess: Specular exponent; larger values give smaller highlights.
    """

    color: Color = field(default_factory=lambda: Color(1.0, 1.0, 1.0))
    ambient: float = 0.1
    diffuse: float = 0.9
    specular: float = 0.9
    shininess: float = 200.0

    def __post_init__(self) -> None:
        for name in ("ambient", "diffuse", "specular", "shininess"):
            value = getattr(self, name)
            if value < 0.0:
                raise ValueError(f"Material {name} must be non-negative, got {value}")


def lighting(
    material: Material,
    light: PointLight,
    position: Tuple4,
    eye_vector: Tuple4,
    normal_vector: Tuple4,
    in_shadow: bool = False,
) -> Color:
    """Shade a surface point lit by a single point light.

    Args:
        material: Material of the surface.
        light: The light source.
        position: World-space point being shaded.
        eye_vector: Unit vector from the point toward the eye.
        normal_vector: Unit surface normal at the point.
        in_shadow: If True, only the ambient term is returned.

    Returns:
        The (unclamped) reflected color.
    """
    effective_color = material.color * light.intensity
    ambient = effective_color * material.ambient
    if in_shadow:
        return ambient

    light_vector = (light.position - position).normalize()
    light_dot_normal = light_vector.dot(normal_vector)

    if light_dot_normal < 0.0:
        # Light is on the other side of the surface
        diffuse = BLACK
        specular = BLACK
    else:
        diffuse = effective_color * (material.diffuse * light_dot_normal)

        reflect_vector = (-light_vector).reflect(normal_vector)
        reflect_dot_eye = reflect_vector.dot(eye_vector)
        if reflect_dot_eye <= 0.0:
            specular = BLACK
        else:
            factor = reflect_dot_eye**material.shininess
            specular = light.intensity * (material.specular * factor)

    return ambient + diffuse + specular
