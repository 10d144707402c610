"""Pytest configuration for raytracer tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session.
"""

import math

import pytest
import taichi as ti


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls which can cause
    segmentation faults due to Taichi runtime conflicts.
    """
    ti.init(arch=ti.cpu, random_seed=42)
    yield


@pytest.fixture
def world():
    """A fresh default world (two concentric spheres, one light)."""
    from raytracer.scene.world import default_world

    return default_world()


@pytest.fixture
def small_scene():
    """The default world seen from (0, 0, -5), for 11x11 renders."""
    from raytracer.scene.presets import default_scene

    return default_scene()


@pytest.fixture
def degenerate_scene():
    """Two spheres, the left one reporting a zero normal everywhere.

    Every pixel that sees the left sphere cannot be shaded. The shape class
    is local, so the scene only works with in-process workers.
    """
    from raytracer.core.color import WHITE
    from raytracer.core.transform import translation, view_transform
    from raytracer.core.tuples import point, vector
    from raytracer.geometry.sphere import Sphere
    from raytracer.scene.config import SceneConfig
    from raytracer.scene.light import PointLight
    from raytracer.scene.world import World

    class FlatSphere(Sphere):
        def normal_at_local(self, local_point):
            return vector(0.0, 0.0, 0.0)

    world = World(
        (Sphere(transform=translation(1.5, 0, 0)), FlatSphere(transform=translation(-1.5, 0, 0))),
        (PointLight(point(-10, 10, -10), WHITE),),
    )
    return SceneConfig(
        world,
        field_of_view=math.pi / 2.0,
        view_transform=view_transform(point(0, 0, -5), point(0, 0, 0), vector(0, 1, 0)),
    )
