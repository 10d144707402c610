"""Geometry module for shape primitives.

Components:
    shape: Shape capability protocol, intersections and hit computations
    sphere: Unit sphere at the origin in object space
    plane: Infinite xz plane in object space

Every shape keeps its transform together with the cached inverse and normal
transform; rays are intersected in object space and normals are mapped
back to world space.
"""

from .plane import Plane
from .shape import (
    Computations,
    Intersection,
    ObjectFrame,
    Shape,
    hit,
    intersect,
    normal_at,
    prepare_computations,
)
from .sphere import Sphere

__all__ = [
    "Shape",
    "ObjectFrame",
    "Intersection",
    "Computations",
    "hit",
    "intersect",
    "normal_at",
    "prepare_computations",
    "Sphere",
    "Plane",
]
