"""Four-component tuples for points and vectors.

A Tuple4 with w=1.0 is a point and with w=0.0 is a vector. Keeping the w
component lets a single 4x4 matrix translate points while leaving vectors
untouched (translation lives in the fourth column, which a vector's w=0
cancels out).

Comparisons are approximate: two tuples are equal when every component is
within EPSILON of the other, which absorbs the rounding error accumulated by
chained transforms.

Example:
    >>> from raytracer.core.tuples import point, vector
    >>> p = point(1.0, 2.0, 3.0)
    >>> v = vector(0.0, 0.0, 1.0)
    >>> p + v * 2.0
    Tuple4(x=1.0, y=2.0, z=5.0, w=1.0)
"""

from __future__ import annotations

import math

from raytracer.core.errors import DegenerateVectorError, InvalidOperandError

# Tolerance for approximate float comparisons throughout the package
EPSILON = 1e-5


def approx_equal(a: float, b: float, epsilon: float = EPSILON) -> bool:
    """Return True when a and b differ by less than epsilon."""
    return abs(a - b) < epsilon


class Tuple4:
    """A point (w=1) or vector (w=0) in homogeneous coordinates.

    Instances are treated as immutable values; every operation returns a new
    tuple.

    Attributes:
        x: X component.
        y: Y component.
        z: Z component.
        w: 1.0 for points, 0.0 for vectors.
    """

    __slots__ = ("x", "y", "z", "w")

    def __init__(self, x: float, y: float, z: float, w: float) -> None:
        self.x = float(x)
        self.y = float(y)
        self.z = float(z)
        self.w = float(w)

    def __repr__(self) -> str:
        return f"Tuple4(x={self.x!r}, y={self.y!r}, z={self.z!r}, w={self.w!r})"

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z
        yield self.w

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Tuple4):
            return NotImplemented
        return (
            approx_equal(self.x, other.x)
            and approx_equal(self.y, other.y)
            and approx_equal(self.z, other.z)
            and approx_equal(self.w, other.w)
        )

    # Approximate equality cannot be made consistent with hashing
    __hash__ = None  # type: ignore[assignment]

    def __getstate__(self) -> tuple[float, float, float, float]:
        return (self.x, self.y, self.z, self.w)

    def __setstate__(self, state: tuple[float, float, float, float]) -> None:
        self.x, self.y, self.z, self.w = state

    @property
    def is_point(self) -> bool:
        return approx_equal(self.w, 1.0)

    @property
    def is_vector(self) -> bool:
        return approx_equal(self.w, 0.0)

    # =========================================================================
    # Arithmetic
    # =========================================================================

    def __add__(self, other: Tuple4) -> Tuple4:
        return Tuple4(
            self.x + other.x, self.y + other.y, self.z + other.z, self.w + other.w
        )

    def __sub__(self, other: Tuple4) -> Tuple4:
        return Tuple4(
            self.x - other.x, self.y - other.y, self.z - other.z, self.w - other.w
        )

    def __neg__(self) -> Tuple4:
        return Tuple4(-self.x, -self.y, -self.z, -self.w)

    def __mul__(self, scalar: float) -> Tuple4:
        return Tuple4(self.x * scalar, self.y * scalar, self.z * scalar, self.w * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> Tuple4:
        return Tuple4(self.x / scalar, self.y / scalar, self.z / scalar, self.w / scalar)

    # =========================================================================
    # Vector operations
    # =========================================================================

    def magnitude(self) -> float:
        """Euclidean length of the tuple (all four components)."""
        return math.sqrt(
            self.x * self.x + self.y * self.y + self.z * self.z + self.w * self.w
        )

    def normalize(self) -> Tuple4:
        """Return a unit-length tuple pointing the same way.

        Raises:
            DegenerateVectorError: If the tuple has zero length.
        """
        length = self.magnitude()
        if length == 0.0:
            raise DegenerateVectorError(f"Cannot normalize zero-length {self!r}")
        return Tuple4(self.x / length, self.y / length, self.z / length, self.w / length)

    def dot(self, other: Tuple4) -> float:
        """Dot product over all four components."""
        return (
            self.x * other.x + self.y * other.y + self.z * other.z + self.w * other.w
        )

    def cross(self, other: Tuple4) -> Tuple4:
        """Cross product of two vectors.

        Raises:
            InvalidOperandError: If either operand is not a vector.
        """
        if not (self.is_vector and other.is_vector):
            raise InvalidOperandError(
                f"Cross product is only defined for vectors: {self!r} x {other!r}"
            )
        return vector(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def reflect(self, normal: Tuple4) -> Tuple4:
        """Reflect this vector about a (unit) normal."""
        return self - normal * (2.0 * self.dot(normal))


def point(x: float, y: float, z: float) -> Tuple4:
    """Create a point (w=1.0)."""
    return Tuple4(x, y, z, 1.0)


def vector(x: float, y: float, z: float) -> Tuple4:
    """Create a vector (w=0.0)."""
    return Tuple4(x, y, z, 0.0)


ORIGIN = point(0.0, 0.0, 0.0)
