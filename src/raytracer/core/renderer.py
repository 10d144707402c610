"""Render entry points and the per-pixel worker protocol.

This module is the boundary between the ray tracer and whatever displays its
output. It offers two entry points:

    draw(display_target, width, height)
        Synchronous, single-threaded full render. Paints every pixel to
        display_target before returning.

    color_at_pixel(width, height, x, y) -> PixelColor(r, g, b)
        One pixel as 8-bit channels. This is what each scheduler worker runs.

Workers speak a small message protocol:

    request:  PixelRequest(x, y, width, height)
    response: PixelMessage(x, y, r, g, b)

Given the same scene and the same (width, height, x, y), color_at_pixel always
returns the same color; it keeps no state between calls other than a cache
of cameras per image size.

Per-pixel failures are isolated: a NotInvertibleError or DegenerateVectorError
raised while shading one pixel is logged and that pixel is painted with the
background color. Other exceptions propagate.

Example:
    >>> from raytracer.core.canvas import CanvasSink
    >>> from raytracer.core.renderer import PixelRenderer, draw
    >>> from raytracer.scene.presets import default_scene
    >>> renderer = PixelRenderer(default_scene())
    >>> renderer.color_at_pixel(11, 11, 5, 5)
    PixelColor(r=97, g=121, b=73)
    >>> sink = CanvasSink(11, 11)
    >>> draw(sink, 11, 11, default_scene())
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import NamedTuple

from raytracer.camera.pinhole import Camera
from raytracer.core.canvas import DisplaySink
from raytracer.core.color import BLACK, Color, PixelColor
from raytracer.core.errors import DegenerateVectorError, NotInvertibleError
from raytracer.scene.config import SceneConfig
from raytracer.scene.world import BACKGROUND, World

logger = logging.getLogger(__name__)


# =============================================================================
# Per-pixel shading
# =============================================================================


def sample_pixel(
    camera: Camera,
    world: World,
    x: int,
    y: int,
    offsets: Sequence[tuple[float, float]],
) -> Color:
    """Linear color of a pixel, averaged over the given sub-pixel offsets.

    Raises:
        NotInvertibleError: If a transform in the scene is singular.
        DegenerateVectorError: If a ray or normal degenerates.
    """
    if len(offsets) == 1:
        offset_x, offset_y = offsets[0]
        return world.color_at(camera.ray_for_pixel(x, y, offset_x, offset_y))

    total = BLACK
    for offset_x, offset_y in offsets:
        total = total + world.color_at(camera.ray_for_pixel(x, y, offset_x, offset_y))
    return total * (1.0 / len(offsets))


def pixel_color_or_background(
    camera: Camera,
    world: World,
    x: int,
    y: int,
    offsets: Sequence[tuple[float, float]],
) -> Color:
    """Like sample_pixel(), but a pixel that cannot be shaded is background.

    Both the sequential Camera.render() and the scheduler workers go through
    this function, so a failing pixel looks the same on either path.
    """
    try:
        return sample_pixel(camera, world, x, y, offsets)
    except (NotInvertibleError, DegenerateVectorError) as exc:
        logger.warning(
            "Pixel (%d, %d) of %dx%d painted as background: %s",
            x,
            y,
            camera.hsize,
            camera.vsize,
            exc,
        )
        return BACKGROUND


# =============================================================================
# Worker protocol
# =============================================================================


class PixelRequest(NamedTuple):
    """Work item sent to a worker: one pixel of a width x height image."""

    x: int
    y: int
    width: int
    height: int


class PixelMessage(NamedTuple):
    """Worker response: the 8-bit color of one pixel."""

    x: int
    y: int
    r: int
    g: int
    b: int


class PixelRenderer:
    """Computes pixel colors for one immutable scene.

    Each scheduler worker owns one PixelRenderer. The scene is only read.

    Attributes:
        scene: The scene configuration being rendered.
    """

    def __init__(self, scene: SceneConfig) -> None:
        self.scene = scene
        self._offsets = scene.offsets()
        self._cameras: dict[tuple[int, int], Camera] = {}

    def camera(self, width: int, height: int) -> Camera:
        """Camera for the image size, built on first use."""
        key = (width, height)
        camera = self._cameras.get(key)
        if camera is None:
            camera = self.scene.camera(width, height)
            self._cameras[key] = camera
        return camera

    def shade_pixel(self, width: int, height: int, x: int, y: int) -> Color:
        """Linear color of a pixel, averaged over all sub-pixel samples.

        Raises:
            NotInvertibleError: If a transform in the scene is singular.
            DegenerateVectorError: If a ray or normal degenerates.
        """
        return sample_pixel(self.camera(width, height), self.scene.world, x, y, self._offsets)

    def color_at_pixel(self, width: int, height: int, x: int, y: int) -> PixelColor:
        """8-bit color of a pixel; background if the pixel cannot be shaded."""
        color = pixel_color_or_background(
            self.camera(width, height), self.scene.world, x, y, self._offsets
        )
        return color.to_rgb8()

    def handle(self, request: PixelRequest) -> PixelMessage:
        """Answer a single worker request."""
        r, g, b = self.color_at_pixel(request.width, request.height, request.x, request.y)
        return PixelMessage(request.x, request.y, r, g, b)

    def render_chunk(self, requests: Iterable[PixelRequest]) -> list[PixelMessage]:
        """Answer a batch of requests, in order."""
        return [self.handle(request) for request in requests]


# =============================================================================
# Module-level entry points
# =============================================================================


def _scene_or_default(scene: SceneConfig | None) -> SceneConfig:
    if scene is not None:
        return scene
    # Imported lazily: presets builds geometry at call time
    from raytracer.scene.presets import three_spheres_scene

    return three_spheres_scene()


def color_at_pixel(
    width: int, height: int, x: int, y: int, scene: SceneConfig | None = None
) -> PixelColor:
    """8-bit color of one pixel of a width x height render.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        x: Pixel column.
        y: Pixel row.
        scene: Scene to render; defaults to the three-spheres demo scene.
    """
    return PixelRenderer(_scene_or_default(scene)).color_at_pixel(width, height, x, y)


def draw(
    display_target: DisplaySink,
    width: int,
    height: int,
    scene: SceneConfig | None = None,
) -> None:
    """Render every pixel synchronously and paint it to display_target.

    The scene is validated before the first pixel is computed.

    Args:
        display_target: Sink receiving paint(x, y, r, g, b) for every pixel.
        width: Image width in pixels.
        height: Image height in pixels.
        scene: Scene to render; defaults to the three-spheres demo scene.

    Raises:
        SceneError: If the scene or image size cannot be rendered.
        NotInvertibleError: If a transform in the scene is singular.
    """
    scene = _scene_or_default(scene)
    scene.validate(width, height)

    renderer = PixelRenderer(scene)
    logger.info("Drawing %dx%d image on a single thread", width, height)
    for y in range(height):
        for x in range(width):
            r, g, b = renderer.color_at_pixel(width, height, x, y)
            display_target.paint(x, y, r, g, b)
