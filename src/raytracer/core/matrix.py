"""Immutable 4x4 transformation matrices.

Matrix4 wraps a read-only float64 NumPy array. Transforms compose by
multiplication and apply right to left: in ``translation @ scaling`` the
scaling is applied to object-local coordinates first.

The inverse is computed by cofactor expansion. A matrix whose determinant is
within EPSILON of zero is treated as singular and inverse() raises
NotInvertibleError instead of returning a matrix full of infinities.

Example:
    >>> from raytracer.core.matrix import Matrix4
    >>> from raytracer.core.tuples import point
    >>> m = Matrix4([[1, 0, 0, 5], [0, 1, 0, 0], [0, 0, 1, 0], [0, 0, 0, 1]])
    >>> m * point(1, 2, 3)
    Tuple4(x=6.0, y=2.0, z=3.0, w=1.0)
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
import numpy.typing as npt

from raytracer.core.errors import NotInvertibleError
from raytracer.core.tuples import EPSILON, Tuple4


def _submatrix(m: npt.NDArray[np.float64], row: int, col: int) -> npt.NDArray[np.float64]:
    return np.delete(np.delete(m, row, axis=0), col, axis=1)


def _determinant(m: npt.NDArray[np.float64]) -> float:
    """Determinant by cofactor expansion along the first row."""
    size = m.shape[0]
    if size == 1:
        return float(m[0, 0])
    if size == 2:
        return float(m[0, 0] * m[1, 1] - m[0, 1] * m[1, 0])
    det = 0.0
    for col in range(size):
        det += float(m[0, col]) * _cofactor(m, 0, col)
    return det


def _cofactor(m: npt.NDArray[np.float64], row: int, col: int) -> float:
    minor = _determinant(_submatrix(m, row, col))
    return -minor if (row + col) % 2 else minor


class Matrix4:
    """An immutable 4x4 matrix of float64.

    Attributes:
        elements: Read-only (4, 4) float64 array.
    """

    __slots__ = ("elements",)

    def __init__(self, rows: Sequence[Sequence[float]] | npt.ArrayLike) -> None:
        elements = np.array(rows, dtype=np.float64)
        if elements.shape != (4, 4):
            raise ValueError(f"Matrix4 requires a 4x4 array, got shape {elements.shape}")
        elements.setflags(write=False)
        self.elements = elements

    @classmethod
    def identity(cls) -> Matrix4:
        return cls(np.identity(4))

    def __repr__(self) -> str:
        return f"Matrix4({self.elements.tolist()!r})"

    def __getitem__(self, index: tuple[int, int]) -> float:
        return float(self.elements[index])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix4):
            return NotImplemented
        return bool(np.allclose(self.elements, other.elements, rtol=0.0, atol=EPSILON))

    __hash__ = None  # type: ignore[assignment]

    def __getstate__(self) -> list[list[float]]:
        return self.elements.tolist()

    def __setstate__(self, state: list[list[float]]) -> None:
        elements = np.array(state, dtype=np.float64)
        elements.setflags(write=False)
        self.elements = elements

    # =========================================================================
    # Products
    # =========================================================================

    def __matmul__(self, other: Matrix4) -> Matrix4:
        if not isinstance(other, Matrix4):
            return NotImplemented
        return Matrix4(self.elements @ other.elements)

    def __mul__(self, other: Matrix4 | Tuple4) -> Matrix4 | Tuple4:
        """Multiply by another matrix or transform a tuple."""
        if isinstance(other, Matrix4):
            return Matrix4(self.elements @ other.elements)
        if isinstance(other, Tuple4):
            x, y, z, w = self.elements @ np.array(
                (other.x, other.y, other.z, other.w), dtype=np.float64
            )
            return Tuple4(x, y, z, w)
        return NotImplemented

    def transpose(self) -> Matrix4:
        return Matrix4(self.elements.T)

    # =========================================================================
    # Inversion
    # =========================================================================

    def submatrix(self, row: int, col: int) -> npt.NDArray[np.float64]:
        """The 3x3 array left after removing the given row and column."""
        return _submatrix(self.elements, row, col)

    def minor(self, row: int, col: int) -> float:
        return _determinant(self.submatrix(row, col))

    def cofactor(self, row: int, col: int) -> float:
        return _cofactor(self.elements, row, col)

    def determinant(self) -> float:
        return _determinant(self.elements)

    def is_invertible(self) -> bool:
        return abs(self.determinant()) >= EPSILON

    def inverse(self) -> Matrix4:
        """Invert the matrix by cofactor expansion.

        Returns:
            The inverse matrix.

        Raises:
            NotInvertibleError: If the determinant is within EPSILON of zero.
        """
        det = self.determinant()
        if abs(det) < EPSILON:
            raise NotInvertibleError(f"Matrix is not invertible (determinant={det!r})")

        cofactors = np.empty((4, 4), dtype=np.float64)
        for row in range(4):
            for col in range(4):
                cofactors[row, col] = _cofactor(self.elements, row, col)

        # Inverse is the transposed cofactor matrix over the determinant
        return Matrix4(cofactors.T / det)


IDENTITY = Matrix4.identity()
