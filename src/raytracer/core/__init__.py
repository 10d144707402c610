"""Core rendering module.

This module contains the fundamental building blocks for ray tracing:

Components:
    errors: Error hierarchy shared by the whole package
    tuples: Points and vectors as homogeneous 4-tuples
    color: Linear RGB colors and 8-bit conversion
    matrix: 4x4 matrices with cofactor inversion
    transform: Translation, scaling, rotation, shearing and view transforms
    ray: Ray data structure
    canvas: Float image buffer and display sinks
    renderer: draw() and color_at_pixel() entry points, worker protocol
    scheduler: Round-robin pixel dispatch across a worker pool
"""

from .canvas import Canvas, CanvasSink, DisplaySink, to_rgb8_array
from .color import BLACK, WHITE, Color, PixelColor, to_byte
from .errors import (
    DegenerateVectorError,
    InvalidOperandError,
    NotInvertibleError,
    RayTracerError,
    SceneError,
)
from .matrix import IDENTITY, Matrix4
from .ray import Ray
from .transform import (
    rotation_x,
    rotation_y,
    rotation_z,
    scaling,
    shearing,
    translation,
    view_transform,
)
from .tuples import EPSILON, ORIGIN, Tuple4, approx_equal, point, vector

# Note: renderer and scheduler are NOT imported here to avoid circular imports.
# Import directly from raytracer.core.renderer or raytracer.core.scheduler:
#   from raytracer.core.renderer import color_at_pixel, draw
#   from raytracer.core.scheduler import PixelScheduler

__all__ = [
    # Errors
    "RayTracerError",
    "NotInvertibleError",
    "DegenerateVectorError",
    "InvalidOperandError",
    "SceneError",
    # Tuples
    "EPSILON",
    "ORIGIN",
    "Tuple4",
    "approx_equal",
    "point",
    "vector",
    # Color
    "BLACK",
    "WHITE",
    "Color",
    "PixelColor",
    "to_byte",
    # Matrices and transforms
    "IDENTITY",
    "Matrix4",
    "translation",
    "scaling",
    "rotation_x",
    "rotation_y",
    "rotation_z",
    "shearing",
    "view_transform",
    # Rays and images
    "Ray",
    "Canvas",
    "CanvasSink",
    "DisplaySink",
    "to_rgb8_array",
]
