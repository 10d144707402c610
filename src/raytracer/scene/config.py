"""Immutable scene configuration shared with render workers.

A SceneConfig bundles everything needed to compute any pixel of any image
size: the world, the camera's field of view and view transform, and the
number of samples per pixel. Cameras are derived from it per image size, so
one configuration serves both the full-frame render and the per-pixel worker
protocol, where each request carries its own width and height.

Workers never mutate a SceneConfig. To change the scene, build a new one and
start a new render pass.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from raytracer.camera.pinhole import Camera, sample_offsets
from raytracer.core.canvas import Canvas
from raytracer.core.errors import SceneError
from raytracer.core.matrix import IDENTITY, Matrix4
from raytracer.scene.world import World


@dataclass(frozen=True, eq=False)
class SceneConfig:
    """Everything a worker needs to shade pixels.

    Attributes:
        world: The objects and lights to render.
        field_of_view: Camera field of view in radians.
        view_transform: World-to-camera transform.
        samples_per_axis: Sub-pixel grid size; each pixel averages
            samples_per_axis**2 rays. 1 renders one ray through the center.
    """

    world: World
    field_of_view: float = math.pi / 3.0
    view_transform: Matrix4 = field(default_factory=lambda: IDENTITY)
    samples_per_axis: int = 1

    @property
    def samples_per_pixel(self) -> int:
        return self.samples_per_axis * self.samples_per_axis

    def camera(self, width: int, height: int) -> Camera:
        """Build the camera for an image of the given size."""
        return Camera(width, height, self.field_of_view, self.view_transform)

    def offsets(self) -> list[tuple[float, float]]:
        return sample_offsets(self.samples_per_axis)

    def render(self, width: int, height: int) -> Canvas:
        """Render every pixel sequentially on the calling thread.

        Uses all samples_per_axis**2 samples per pixel, so the result matches
        PixelScheduler.render() for the same size after 8-bit conversion.
        """
        return self.camera(width, height).render(self.world, self.samples_per_axis)

    def validate(self, width: int | None = None, height: int | None = None) -> None:
        """Fail fast on a scene that cannot be rendered.

        Args:
            width: Optional image width to validate the camera against.
            height: Optional image height to validate the camera against.

        Raises:
            SceneError: No lights, invalid field of view, image size or
                sample count.
            NotInvertibleError: A singular object or view transform.
        """
        self.world.validate()
        if self.samples_per_axis < 1:
            raise SceneError(
                f"samples_per_axis must be >= 1, got {self.samples_per_axis}"
            )
        if (width is not None and width <= 0) or (height is not None and height <= 0):
            raise SceneError(f"Image size must be positive, got {width}x{height}")
        # Constructing the camera checks the field of view and view transform
        self.camera(width or 1, height or 1)
