"""Preview module for output and visualization.

Components:
    export: PNG/PPM image export via Pillow
    display: Matplotlib-based static preview and comparison
    interactive: Taichi GGUI window that displays pixels as they stream in
    kernels: Taichi kernels behind the interactive window

Example:
    >>> from raytracer.preview import InteractivePreview, save_png
    >>> preview = InteractivePreview(350, 250)
    >>> canvas = preview.run_streaming(scheduler)
    >>> save_png(canvas, "output.png")
"""

from raytracer.preview.display import show_comparison, show_preview
from raytracer.preview.export import (
    canvas_to_uint8,
    compute_rmse,
    save_image,
    save_png,
    save_ppm,
)
from raytracer.preview.interactive import InteractivePreview

__all__ = [
    # Interactive preview
    "InteractivePreview",
    # Display functions
    "show_preview",
    "show_comparison",
    # Export functions
    "canvas_to_uint8",
    "save_png",
    "save_ppm",
    "save_image",
    "compute_rmse",
]
