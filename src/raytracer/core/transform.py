"""Transformation matrix builders.

All builders return Matrix4 instances meant to be chained right to left:

    >>> from raytracer.core.transform import rotation_x, scaling, translation
    >>> transform = translation(10, 5, 7) @ scaling(5, 5, 5) @ rotation_x(0.5)

applies the rotation first, then the scaling, then the translation.
"""

import math

from raytracer.core.matrix import Matrix4
from raytracer.core.tuples import Tuple4


def translation(x: float, y: float, z: float) -> Matrix4:
    """Move points by (x, y, z). Vectors are unaffected."""
    return Matrix4(
        [
            [1.0, 0.0, 0.0, x],
            [0.0, 1.0, 0.0, y],
            [0.0, 0.0, 1.0, z],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def scaling(x: float, y: float, z: float) -> Matrix4:
    """Scale along each axis. Negative values reflect."""
    return Matrix4(
        [
            [x, 0.0, 0.0, 0.0],
            [0.0, y, 0.0, 0.0],
            [0.0, 0.0, z, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def rotation_x(radians: float) -> Matrix4:
    """Rotate around the x axis (left-handed)."""
    c, s = math.cos(radians), math.sin(radians)
    return Matrix4(
        [
            [1.0, 0.0, 0.0, 0.0],
            [0.0, c, -s, 0.0],
            [0.0, s, c, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def rotation_y(radians: float) -> Matrix4:
    """Rotate around the y axis (left-handed)."""
    c, s = math.cos(radians), math.sin(radians)
    return Matrix4(
        [
            [c, 0.0, s, 0.0],
            [0.0, 1.0, 0.0, 0.0],
            [-s, 0.0, c, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def rotation_z(radians: float) -> Matrix4:
    """Rotate around the z axis (left-handed)."""
    c, s = math.cos(radians), math.sin(radians)
    return Matrix4(
        [
            [c, -s, 0.0, 0.0],
            [s, c, 0.0, 0.0],
            [0.0, 0.0, 1.0, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def shearing(
    xy: float, xz: float, yx: float, yz: float, zx: float, zy: float
) -> Matrix4:
    """Shear each component in proportion to the other two.

    Args:
        xy: x moved in proportion to y.
        xz: x moved in proportion to z.
        yx: y moved in proportion to x.
        yz: y moved in proportion to z.
        zx: z moved in proportion to x.
        zy: z moved in proportion to y.
    """
    return Matrix4(
        [
            [1.0, xy, xz, 0.0],
            [yx, 1.0, yz, 0.0],
            [zx, zy, 1.0, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def view_transform(from_point: Tuple4, to_point: Tuple4, up: Tuple4) -> Matrix4:
    """Orient the world relative to an eye at from_point looking at to_point.

    Args:
        from_point: Eye position (point).
        to_point: Position the eye looks at (point).
        up: Approximate up direction (vector); need not be normalized or
            exactly perpendicular to the view direction.

    Returns:
        The world-to-camera transform.

    Raises:
        DegenerateVectorError: If from_point equals to_point or up is zero.
    """
    forward = (to_point - from_point).normalize()
    left = forward.cross(up.normalize())
    true_up = left.cross(forward)
    orientation = Matrix4(
        [
            [left.x, left.y, left.z, 0.0],
            [true_up.x, true_up.y, true_up.z, 0.0],
            [-forward.x, -forward.y, -forward.z, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )
    return orientation @ translation(-from_point.x, -from_point.y, -from_point.z)
