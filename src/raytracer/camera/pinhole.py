"""Pinhole camera model mapping pixels to world-space rays.

The camera sits at the origin of its own space looking toward -z, with the
image plane one unit in front of it at z = -1. The plane is sized so that
the larger image dimension spans the field of view:

    half_view = tan(field_of_view / 2)
    aspect    = hsize / vsize
    aspect >= 1:  half_width = half_view,           half_height = half_view / aspect
    aspect <  1:  half_width = half_view * aspect,  half_height = half_view
    pixel_size = 2 * half_width / hsize

The camera transform is a world-to-camera (view) transform, typically built
with view_transform(); its inverse moves pixel positions and the eye from
camera space back into the world.

Example:
    >>> import math
    >>> from raytracer.core.transform import view_transform
    >>> from raytracer.core.tuples import point, vector
    >>> camera = Camera(
    ...     201,
    ...     101,
    ...     math.pi / 2,
    ...     transform=view_transform(point(0, 0, -5), point(0, 0, 0), vector(0, 1, 0)),
    ... )
    >>> ray = camera.ray_for_pixel(100, 50)  # Ray through image center
"""

from __future__ import annotations

import math
from collections.abc import Iterator

from raytracer.core.canvas import Canvas
from raytracer.core.errors import SceneError
from raytracer.core.matrix import IDENTITY, Matrix4
from raytracer.core.ray import Ray
from raytracer.core.tuples import ORIGIN, point
from raytracer.scene.world import World

# =============================================================================
# Sub-pixel sampling
# =============================================================================


def sample_offsets(samples_per_axis: int) -> list[tuple[float, float]]:
    """Stratified sub-pixel offsets for multi-sample rendering.

    The pixel is split into an n x n grid and the center of every cell is
    returned, row by row. The grid is fixed (no random jitter) so that every
    render of the same scene produces identical pixels.

    Args:
        samples_per_axis: Grid size n; n=1 gives only the pixel center.

    Returns:
        List of n*n (offset_x, offset_y) pairs in [0, 1).
    """
    if samples_per_axis < 1:
        raise ValueError(f"samples_per_axis must be >= 1, got {samples_per_axis}")
    step = 1.0 / samples_per_axis
    return [
        ((i + 0.5) * step, (j + 0.5) * step)
        for j in range(samples_per_axis)
        for i in range(samples_per_axis)
    ]


# =============================================================================
# Camera
# =============================================================================


class Camera:
    """A perspective camera with cached image-plane geometry.

    Attributes:
        hsize: Horizontal size of the image in pixels.
        vsize: Vertical size of the image in pixels.
        field_of_view: Angle in radians covered by the larger image dimension.
        half_width: Half of the image plane width at z = -1.
        half_height: Half of the image plane height at z = -1.
        pixel_size: Width (and height) of one pixel on the image plane.
    """

    def __init__(
        self,
        hsize: int,
        vsize: int,
        field_of_view: float,
        transform: Matrix4 = IDENTITY,
    ) -> None:
        if hsize <= 0 or vsize <= 0:
            raise SceneError(f"Camera size must be positive, got {hsize}x{vsize}")
        if not 0.0 < field_of_view < math.pi:
            raise SceneError(
                f"Field of view must be in (0, pi) radians, got {field_of_view}"
            )

        self.hsize = hsize
        self.vsize = vsize
        self.field_of_view = field_of_view

        half_view = math.tan(field_of_view / 2.0)
        aspect = hsize / vsize
        if aspect >= 1.0:
            self.half_width = half_view
            self.half_height = half_view / aspect
        else:
            self.half_width = half_view * aspect
            self.half_height = half_view
        self.pixel_size = (self.half_width * 2.0) / hsize

        self.set_transform(transform)

    def __repr__(self) -> str:
        return (
            f"Camera(hsize={self.hsize}, vsize={self.vsize}, "
            f"field_of_view={self.field_of_view!r})"
        )

    @property
    def transform(self) -> Matrix4:
        return self._transform

    def set_transform(self, transform: Matrix4) -> None:
        """Set the view transform.

        Raises:
            NotInvertibleError: If the transform is singular.
        """
        self._inverse = transform.inverse()
        self._transform = transform
        self._origin = self._inverse * ORIGIN

    # =========================================================================
    # Ray generation
    # =========================================================================

    def ray_for_pixel(
        self, px: int, py: int, offset_x: float = 0.5, offset_y: float = 0.5
    ) -> Ray:
        """World-space ray from the eye through a point of a pixel.

        Args:
            px: Pixel column, 0 at the left.
            py: Pixel row, 0 at the top.
            offset_x: Horizontal position inside the pixel in [0, 1).
            offset_y: Vertical position inside the pixel in [0, 1).

        Returns:
            Ray with a normalized direction.
        """
        x_offset = (px + offset_x) * self.pixel_size
        y_offset = (py + offset_y) * self.pixel_size

        # The camera looks toward -z, so +x is to the left
        world_x = self.half_width - x_offset
        world_y = self.half_height - y_offset

        pixel = self._inverse * point(world_x, world_y, -1.0)
        direction = (pixel - self._origin).normalize()
        return Ray(self._origin, direction)

    def pixels(self) -> Iterator[tuple[int, int]]:
        """All pixel coordinates in row-major order (x innermost)."""
        for y in range(self.vsize):
            for x in range(self.hsize):
                yield x, y

    def render(self, world: World, samples_per_axis: int = 1) -> Canvas:
        """Render every pixel sequentially.

        This is the single-threaded reference. Pixels are shaded exactly as
        the scheduler workers shade them, including painting a pixel that
        cannot be shaded as background. The canvas keeps the linear float
        colors, while the scheduler only receives 8-bit channels, so compare
        the two through Canvas.to_rgb8().

        Args:
            world: The world to render.
            samples_per_axis: Sub-pixel grid size, as in SceneConfig.

        Raises:
            SceneError: If the world has no lights.
            NotInvertibleError: If a transform in the world is singular.
        """
        # Imported lazily: the renderer module imports this one
        from raytracer.core.renderer import pixel_color_or_background

        world.validate()
        offsets = sample_offsets(samples_per_axis)
        image = Canvas(self.hsize, self.vsize)
        for x, y in self.pixels():
            image.write_pixel(x, y, pixel_color_or_background(self, world, x, y, offsets))
        return image
