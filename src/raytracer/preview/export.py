"""Image export utilities for rendered canvases.

Supported formats:
    - PNG (8-bit RGB via Pillow)
    - PPM (binary P6 via Pillow)

The 8-bit conversion is the same one the pixel workers use: each channel is
clamped to [0, 1], scaled by 255 and rounded half up.

Example:
    >>> from raytracer.core.scheduler import PixelScheduler
    >>> from raytracer.preview.export import save_image
    >>> from raytracer.scene.presets import three_spheres_scene
    >>>
    >>> with PixelScheduler(three_spheres_scene()) as scheduler:
    ...     canvas = scheduler.render(350, 250)
    >>> save_image(canvas, "spheres.png")
"""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

from raytracer.core.canvas import Canvas, to_rgb8_array

logger = logging.getLogger(__name__)

# Extension -> Pillow format name
IMAGE_FORMATS = {".png": "PNG", ".ppm": "PPM"}


def canvas_to_uint8(image: Canvas | npt.NDArray[np.floating]) -> npt.NDArray[np.uint8]:
    """Convert a canvas or linear float image to a (H, W, 3) uint8 array.

    Args:
        image: A Canvas, or a float array of shape (H, W, 3).

    Raises:
        ValueError: If the array is not of shape (H, W, 3).
    """
    if isinstance(image, Canvas):
        return image.to_rgb8()
    if image.ndim != 3 or image.shape[2] != 3:
        raise ValueError(f"Expected an image of shape (H, W, 3), got {image.shape}")
    return to_rgb8_array(image.astype(np.float64))


def _save(image: Canvas | npt.NDArray[np.floating], filepath: str | Path, fmt: str) -> None:
    pil_image = PILImage.fromarray(canvas_to_uint8(image))
    pil_image.save(filepath, format=fmt)
    logger.info("Saved %dx%d %s image to %s", pil_image.width, pil_image.height, fmt, filepath)


def save_png(image: Canvas | npt.NDArray[np.floating], filepath: str | Path) -> None:
    """Save a canvas as an 8-bit PNG file."""
    _save(image, filepath, "PNG")


def save_ppm(image: Canvas | npt.NDArray[np.floating], filepath: str | Path) -> None:
    """Save a canvas as a binary PPM file."""
    _save(image, filepath, "PPM")


def save_image(image: Canvas | npt.NDArray[np.floating], filepath: str | Path) -> None:
    """Save a canvas, choosing the format from the file extension.

    Raises:
        ValueError: If the extension is not .png or .ppm.
    """
    suffix = Path(filepath).suffix.lower()
    fmt = IMAGE_FORMATS.get(suffix)
    if fmt is None:
        raise ValueError(
            f"Unsupported image extension {suffix!r}; expected one of {sorted(IMAGE_FORMATS)}"
        )
    _save(image, filepath, fmt)


def compute_rmse(
    image_a: npt.NDArray[np.number],
    image_b: npt.NDArray[np.number],
) -> float:
    """Compute root mean squared error between two images.

    Args:
        image_a: First image array.
        image_b: Second image array (must have same shape as image_a).

    Returns:
        RMSE value (lower is more similar).

    Raises:
        ValueError: If image shapes don't match.
    """
    if image_a.shape != image_b.shape:
        raise ValueError(
            f"Image shapes must match: {image_a.shape} vs {image_b.shape}"
        )

    diff = image_a.astype(np.float64) - image_b.astype(np.float64)
    return float(np.sqrt(np.mean(diff**2)))
