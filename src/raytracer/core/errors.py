"""Exception types raised by the ray tracer.

NotInvertibleError and DegenerateVectorError raised while computing a single
pixel are caught by the render entry points and turned into a background
pixel. InvalidOperandError signals a programming error and always propagates.
SceneError is raised while validating a scene, before any pixel is rendered.
"""


class RayTracerError(Exception):
    """Base class for all ray tracer errors."""


class NotInvertibleError(RayTracerError, ArithmeticError):
    """A matrix with a (near) zero determinant was inverted."""


class DegenerateVectorError(RayTracerError, ValueError):
    """A zero-length vector was normalized."""


class InvalidOperandError(RayTracerError, TypeError):
    """An operation received a point where a vector was required (or vice versa)."""


class SceneError(RayTracerError, ValueError):
    """The scene or camera configuration cannot be rendered."""
