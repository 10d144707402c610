"""Matplotlib-based preview display for rendered images.

Features:
    - Static preview window for a finished canvas
    - Side-by-side comparison of two renders with a difference view

Matplotlib is imported when a figure is shown, so importing this module
does not require a display backend.

Example:
    >>> from raytracer.core.scheduler import PixelScheduler
    >>> from raytracer.preview.display import show_preview
    >>> from raytracer.scene.presets import three_spheres_scene
    >>>
    >>> with PixelScheduler(three_spheres_scene(), workers=4) as scheduler:
    ...     canvas = scheduler.render(350, 250)
    >>> show_preview(canvas)
"""

from __future__ import annotations

import numpy as np
import numpy.typing as npt

from raytracer.core.canvas import Canvas
from raytracer.preview.export import canvas_to_uint8, compute_rmse


def show_preview(
    image: Canvas | npt.NDArray[np.floating],
    *,
    title: str | None = None,
    figsize: tuple[float, float] = (8, 6),
    block: bool = True,
) -> None:
    """Display a rendered image as a Matplotlib figure.

    Args:
        image: Canvas or float image of shape (H, W, 3).
        title: Custom title (default shows the image size).
        figsize: Figure size in inches (width, height).
        block: Whether to block execution until figure is closed.
    """
    import matplotlib.pyplot as plt

    display_image = canvas_to_uint8(image)
    height, width = display_image.shape[:2]

    fig, ax = plt.subplots(1, 1, figsize=figsize)
    ax.imshow(display_image)
    ax.axis("off")
    ax.set_title(title if title is not None else f"Render Preview - {width}x{height}")

    plt.tight_layout()
    plt.show(block=block)


def show_comparison(
    image_a: Canvas | npt.NDArray[np.floating],
    image_b: Canvas | npt.NDArray[np.floating],
    *,
    labels: tuple[str, str] = ("A", "B"),
    diff_scale: float = 10.0,
    figsize: tuple[float, float] = (16, 6),
    block: bool = True,
) -> float:
    """Display side-by-side comparison of two images with difference view.

    Useful for checking that a scheduled render matches the sequential one.

    Args:
        image_a: First canvas or float image.
        image_b: Second canvas or float image.
        labels: Labels for the two images.
        diff_scale: Scale factor for difference amplification.
        figsize: Figure size in inches.
        block: Whether to block execution until figure is closed.

    Returns:
        RMSE between the two images in 8-bit units.
    """
    import matplotlib.pyplot as plt

    display_a = canvas_to_uint8(image_a)
    display_b = canvas_to_uint8(image_b)
    rmse = compute_rmse(display_a, display_b)

    diff = np.abs(display_a.astype(np.float64) - display_b.astype(np.float64)) / 255.0
    diff_amplified = np.clip(diff * diff_scale, 0.0, 1.0)

    fig, axes = plt.subplots(1, 3, figsize=figsize)

    axes[0].imshow(display_a)
    axes[0].set_title(labels[0])
    axes[0].axis("off")

    axes[1].imshow(display_b)
    axes[1].set_title(labels[1])
    axes[1].axis("off")

    axes[2].imshow(diff_amplified)
    axes[2].set_title(f"Difference ({diff_scale}x) - RMSE: {rmse:.4f}")
    axes[2].axis("off")

    plt.tight_layout()
    plt.show(block=block)

    return rmse
