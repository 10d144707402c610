"""Taichi kernels used by the interactive preview.

Taichi reads kernel argument annotations at compile time, so this module
must not use ``from __future__ import annotations``: ndarray annotations
would otherwise reach the compiler as strings.
"""

from typing import Any

import taichi as ti

# Lazy kernel holder - kernel is created on first use after Taichi is initialized
_scatter_pixels_kernel: Any = None


def get_scatter_pixels_kernel() -> Any:
    """Get or create the kernel writing buffered paints into a field.

    The kernel takes ``(xs, ys, colors, count, height, dst)``: int32 pixel
    coordinates with y pointing down, float32 colors of shape (count, 3) in
    [0, 1], and a Vector field of shape (width, height) with y pointing up.

    The kernel is created lazily to ensure Taichi is initialized first.
    """
    global _scatter_pixels_kernel
    if _scatter_pixels_kernel is None:

        @ti.kernel
        def _kernel(
            xs: ti.types.ndarray(),
            ys: ti.types.ndarray(),
            colors: ti.types.ndarray(),
            count: ti.i32,
            height: ti.i32,
            dst: ti.template(),
        ):
            for i in range(count):
                # Taichi has its origin at bottom-left
                dst[xs[i], height - 1 - ys[i]] = ti.Vector(
                    [colors[i, 0], colors[i, 1], colors[i, 2]]
                )

        _scatter_pixels_kernel = _kernel
    return _scatter_pixels_kernel
