"""Unit tests for matrices and transforms.

Tests cover:
- Matrix construction, equality and products
- Determinants, minors and cofactors
- Inversion and singular matrices
- Translation, scaling, rotation, shearing and view transforms
"""

import math

import numpy as np
import pytest

A_ROWS = [
    [-5.0, 2.0, 6.0, -8.0],
    [1.0, -5.0, 1.0, 8.0],
    [7.0, 7.0, -6.0, -7.0],
    [1.0, -3.0, 7.0, 4.0],
]


class TestMatrixBasics:
    """Tests for Matrix4 construction and products."""

    def test_construct_and_index(self):
        """Test reading elements by (row, col)."""
        from raytracer.core.matrix import Matrix4

        m = Matrix4(
            [
                [1.0, 2.0, 3.0, 4.0],
                [5.5, 6.5, 7.5, 8.5],
                [9.0, 10.0, 11.0, 12.0],
                [13.5, 14.5, 15.5, 16.5],
            ]
        )
        assert m[0, 3] == 4.0
        assert m[1, 0] == 5.5
        assert m[3, 2] == 15.5

    def test_wrong_shape_raises(self):
        """Test that only 4x4 input is accepted."""
        from raytracer.core.matrix import Matrix4

        with pytest.raises(ValueError, match="4x4"):
            Matrix4([[1.0, 2.0], [3.0, 4.0]])

    def test_elements_are_read_only(self):
        """Test that a matrix cannot be mutated through its array."""
        from raytracer.core.matrix import IDENTITY

        with pytest.raises(ValueError):
            IDENTITY.elements[0, 0] = 2.0

    def test_matrix_product(self):
        """Test multiplying two matrices."""
        from raytracer.core.matrix import Matrix4

        a = Matrix4([[1, 2, 3, 4], [5, 6, 7, 8], [9, 8, 7, 6], [5, 4, 3, 2]])
        b = Matrix4([[-2, 1, 2, 3], [3, 2, 1, -1], [4, 3, 6, 5], [1, 2, 7, 8]])
        expected = Matrix4(
            [
                [20, 22, 50, 48],
                [44, 54, 114, 108],
                [40, 58, 110, 102],
                [16, 26, 46, 42],
            ]
        )
        assert a @ b == expected
        assert a * b == expected

    def test_matrix_times_tuple(self):
        """Test transforming a tuple by a matrix."""
        from raytracer.core.matrix import Matrix4
        from raytracer.core.tuples import Tuple4

        a = Matrix4([[1, 2, 3, 4], [2, 4, 4, 2], [8, 6, 4, 1], [0, 0, 0, 1]])
        assert a * Tuple4(1.0, 2.0, 3.0, 1.0) == Tuple4(18.0, 24.0, 33.0, 1.0)

    def test_identity(self):
        """Test that the identity matrix leaves matrices and tuples unchanged."""
        from raytracer.core.matrix import IDENTITY, Matrix4
        from raytracer.core.tuples import Tuple4

        a = Matrix4(A_ROWS)
        assert a @ IDENTITY == a
        assert IDENTITY * Tuple4(1.0, 2.0, 3.0, 4.0) == Tuple4(1.0, 2.0, 3.0, 4.0)

    def test_transpose(self):
        """Test transposing a matrix, including the identity."""
        from raytracer.core.matrix import IDENTITY, Matrix4

        a = Matrix4([[0, 9, 3, 0], [9, 8, 0, 8], [1, 8, 5, 3], [0, 0, 5, 8]])
        expected = Matrix4([[0, 9, 1, 0], [9, 8, 8, 0], [3, 0, 5, 5], [0, 8, 3, 8]])
        assert a.transpose() == expected
        assert IDENTITY.transpose() == IDENTITY


class TestMatrixInversion:
    """Tests for determinants and inverses."""

    def test_cofactors_and_determinant(self):
        """Test cofactor expansion of a 4x4 matrix."""
        from raytracer.core.matrix import Matrix4

        a = Matrix4([[-2, -8, 3, 5], [-3, 1, 7, 3], [1, 2, -9, 6], [-6, 7, 7, -9]])
        assert a.cofactor(0, 0) == pytest.approx(690.0)
        assert a.cofactor(0, 1) == pytest.approx(447.0)
        assert a.cofactor(0, 2) == pytest.approx(210.0)
        assert a.cofactor(0, 3) == pytest.approx(51.0)
        assert a.determinant() == pytest.approx(-4071.0)

    def test_minor_and_submatrix(self):
        """Test that a minor is the determinant of the submatrix."""
        from raytracer.core.matrix import Matrix4

        a = Matrix4(A_ROWS)
        sub = a.submatrix(2, 1)
        assert sub.shape == (3, 3)
        assert a.minor(2, 1) == pytest.approx(np.linalg.det(sub))
        # Sign alternates with (row + col)
        assert a.cofactor(2, 1) == pytest.approx(-a.minor(2, 1))

    def test_inverse(self):
        """Test inverting a matrix."""
        from raytracer.core.matrix import IDENTITY, Matrix4

        a = Matrix4(A_ROWS)
        assert a.determinant() == pytest.approx(532.0)
        b = a.inverse()
        assert b[3, 2] == pytest.approx(-160.0 / 532.0)
        assert b[2, 3] == pytest.approx(105.0 / 532.0)
        assert a @ b == IDENTITY

    def test_inverse_undoes_product(self):
        """Test that C = A * B implies C * inverse(B) = A."""
        from raytracer.core.matrix import Matrix4

        a = Matrix4([[3, -9, 7, 3], [3, -8, 2, -9], [-4, 4, 4, 1], [-6, 5, -1, 1]])
        b = Matrix4([[8, 2, 2, 2], [3, -1, 7, 0], [7, 0, 5, 4], [6, -2, 0, 5]])
        c = a @ b
        assert c @ b.inverse() == a

    def test_singular_matrix_raises(self):
        """Test that inverting a singular matrix raises NotInvertibleError."""
        from raytracer.core.errors import NotInvertibleError
        from raytracer.core.matrix import Matrix4

        a = Matrix4([[-4, 2, -2, -3], [9, 6, 2, 6], [0, -5, 1, -5], [0, 0, 0, 0]])
        assert not a.is_invertible()
        with pytest.raises(NotInvertibleError):
            a.inverse()

    def test_not_invertible_error_is_arithmetic_error(self):
        """Test the error hierarchy for singular matrices."""
        from raytracer.core.errors import NotInvertibleError, RayTracerError

        assert issubclass(NotInvertibleError, ArithmeticError)
        assert issubclass(NotInvertibleError, RayTracerError)


class TestTransforms:
    """Tests for transformation matrix builders."""

    def test_translation(self):
        """Test that translation moves points but not vectors."""
        from raytracer.core.transform import translation
        from raytracer.core.tuples import point, vector

        t = translation(5.0, -3.0, 2.0)
        assert t * point(-3.0, 4.0, 5.0) == point(2.0, 1.0, 7.0)
        assert t.inverse() * point(-3.0, 4.0, 5.0) == point(-8.0, 7.0, 3.0)
        assert t * vector(-3.0, 4.0, 5.0) == vector(-3.0, 4.0, 5.0)

    def test_scaling(self):
        """Test scaling points and vectors, and reflection by negative scale."""
        from raytracer.core.transform import scaling
        from raytracer.core.tuples import point, vector

        s = scaling(2.0, 3.0, 4.0)
        assert s * point(-4.0, 6.0, 8.0) == point(-8.0, 18.0, 32.0)
        assert s * vector(-4.0, 6.0, 8.0) == vector(-8.0, 18.0, 32.0)
        assert s.inverse() * vector(-4.0, 6.0, 8.0) == vector(-2.0, 2.0, 2.0)
        assert scaling(-1.0, 1.0, 1.0) * point(2.0, 3.0, 4.0) == point(-2.0, 3.0, 4.0)

    def test_rotations(self):
        """Test quarter turns around each axis."""
        from raytracer.core.transform import rotation_x, rotation_y, rotation_z
        from raytracer.core.tuples import point

        quarter = math.pi / 2.0
        assert rotation_x(quarter) * point(0.0, 1.0, 0.0) == point(0.0, 0.0, 1.0)
        assert rotation_y(quarter) * point(0.0, 0.0, 1.0) == point(1.0, 0.0, 0.0)
        assert rotation_z(quarter) * point(0.0, 1.0, 0.0) == point(-1.0, 0.0, 0.0)

    def test_half_quarter_rotation_x(self):
        """Test an eighth turn around x and its inverse."""
        from raytracer.core.transform import rotation_x
        from raytracer.core.tuples import point

        half = math.sqrt(2.0) / 2.0
        r = rotation_x(math.pi / 4.0)
        assert r * point(0.0, 1.0, 0.0) == point(0.0, half, half)
        assert r.inverse() * point(0.0, 1.0, 0.0) == point(0.0, half, -half)

    def test_shearing(self):
        """Test each shearing component."""
        from raytracer.core.transform import shearing
        from raytracer.core.tuples import point

        p = point(2.0, 3.0, 4.0)
        assert shearing(1, 0, 0, 0, 0, 0) * p == point(5.0, 3.0, 4.0)
        assert shearing(0, 1, 0, 0, 0, 0) * p == point(6.0, 3.0, 4.0)
        assert shearing(0, 0, 1, 0, 0, 0) * p == point(2.0, 5.0, 4.0)
        assert shearing(0, 0, 0, 1, 0, 0) * p == point(2.0, 7.0, 4.0)
        assert shearing(0, 0, 0, 0, 1, 0) * p == point(2.0, 3.0, 6.0)
        assert shearing(0, 0, 0, 0, 0, 1) * p == point(2.0, 3.0, 7.0)

    def test_chained_transforms_apply_in_reverse_order(self):
        """Test that T @ S @ R applies R first."""
        from raytracer.core.transform import rotation_x, scaling, translation
        from raytracer.core.tuples import point

        transform = translation(10.0, 5.0, 7.0) @ scaling(5.0, 5.0, 5.0) @ rotation_x(
            math.pi / 2.0
        )
        assert transform * point(1.0, 0.0, 1.0) == point(15.0, 0.0, 7.0)


class TestViewTransform:
    """Tests for view_transform."""

    def test_default_orientation_is_identity(self):
        """Test looking down -z from the origin."""
        from raytracer.core.matrix import IDENTITY
        from raytracer.core.transform import view_transform
        from raytracer.core.tuples import point, vector

        t = view_transform(point(0, 0, 0), point(0, 0, -1), vector(0, 1, 0))
        assert t == IDENTITY

    def test_looking_in_positive_z(self):
        """Test that looking toward +z mirrors x and z."""
        from raytracer.core.transform import scaling, view_transform
        from raytracer.core.tuples import point, vector

        t = view_transform(point(0, 0, 0), point(0, 0, 1), vector(0, 1, 0))
        assert t == scaling(-1.0, 1.0, -1.0)

    def test_moves_the_world(self):
        """Test that the view transform moves the world, not the eye."""
        from raytracer.core.transform import translation, view_transform
        from raytracer.core.tuples import point, vector

        t = view_transform(point(0, 0, 8), point(0, 0, 0), vector(0, 1, 0))
        assert t == translation(0.0, 0.0, -8.0)

    def test_arbitrary_view(self):
        """Test an arbitrary eye, target and up vector."""
        from raytracer.core.transform import view_transform
        from raytracer.core.tuples import point, vector

        t = view_transform(point(1, 3, 2), point(4, -2, 8), vector(1, 1, 0))
        expected = np.array(
            [
                [-0.50709, 0.50709, 0.67612, -2.36643],
                [0.76772, 0.60609, 0.12122, -2.82843],
                [-0.35857, 0.59761, -0.71714, 0.00000],
                [0.00000, 0.00000, 0.00000, 1.00000],
            ]
        )
        assert np.allclose(t.elements, expected, atol=1e-4)

    def test_eye_equal_to_target_raises(self):
        """Test that a zero-length view direction is rejected."""
        from raytracer.core.errors import DegenerateVectorError
        from raytracer.core.transform import view_transform
        from raytracer.core.tuples import point, vector

        with pytest.raises(DegenerateVectorError):
            view_transform(point(1, 1, 1), point(1, 1, 1), vector(0, 1, 0))


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
