"""Unit tests for plane intersection and normals."""

import pytest


class TestPlane:
    """Tests for the xz plane."""

    def test_normal_is_constant(self):
        """Test that the normal is +y everywhere."""
        from raytracer.core.tuples import point, vector
        from raytracer.geometry.plane import Plane

        p = Plane()
        for where in (point(0, 0, 0), point(10, 0, -10), point(-5, 0, 150)):
            assert p.normal_at(where) == vector(0.0, 1.0, 0.0)

    def test_parallel_ray_misses(self):
        """Test a ray parallel to the plane."""
        from raytracer.core.ray import Ray
        from raytracer.core.tuples import point, vector
        from raytracer.geometry.plane import Plane

        p = Plane()
        assert p.intersect_local(Ray(point(0, 10, 0), vector(0, 0, 1))) == []

    def test_coplanar_ray_misses(self):
        """Test a ray lying in the plane."""
        from raytracer.core.ray import Ray
        from raytracer.core.tuples import point, vector
        from raytracer.geometry.plane import Plane

        assert Plane().intersect_local(Ray(point(0, 0, 0), vector(0, 0, 1))) == []

    def test_ray_from_above(self):
        """Test a ray hitting the plane from above."""
        from raytracer.core.ray import Ray
        from raytracer.core.tuples import point, vector
        from raytracer.geometry.plane import Plane
        from raytracer.geometry.shape import intersect

        p = Plane()
        xs = intersect(p, Ray(point(0, 1, 0), vector(0, -1, 0)))
        assert len(xs) == 1
        assert xs[0].t == pytest.approx(1.0)
        assert xs[0].object is p

    def test_ray_from_below(self):
        """Test a ray hitting the plane from below."""
        from raytracer.core.ray import Ray
        from raytracer.core.tuples import point, vector
        from raytracer.geometry.plane import Plane
        from raytracer.geometry.shape import intersect

        xs = intersect(Plane(), Ray(point(0, -1, 0), vector(0, 1, 0)))
        assert [i.t for i in xs] == pytest.approx([1.0])

    def test_transformed_plane(self):
        """Test a plane lifted by a translation."""
        from raytracer.core.ray import Ray
        from raytracer.core.transform import translation
        from raytracer.core.tuples import point, vector
        from raytracer.geometry.plane import Plane
        from raytracer.geometry.shape import intersect

        p = Plane(transform=translation(0.0, 2.0, 0.0))
        xs = intersect(p, Ray(point(0, 5, 0), vector(0, -1, 0)))
        assert [i.t for i in xs] == pytest.approx([3.0])

    def test_satisfies_shape_protocol(self):
        """Test that Plane provides every shape capability."""
        from raytracer.geometry.plane import Plane
        from raytracer.geometry.shape import Shape

        assert isinstance(Plane(), Shape)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
