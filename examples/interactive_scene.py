#!/usr/bin/env python3
"""Watch the three-spheres scene render pixel by pixel.

This script opens a Taichi GGUI window and streams pixels into it as the
scheduler's workers finish them, so the image fills in out of order across
the whole frame. The window stays open after the render completes.

Usage:
    python -m examples.interactive_scene [--width W] [--height H] [--workers N]

Controls:
    - Export PNG: Save the displayed image with a timestamp
"""

from __future__ import annotations

import argparse
import logging
import platform
import sys

import taichi as ti


def initialize_taichi() -> str:
    """Initialize Taichi with the best available backend.

    On macOS, prefers Metal. Falls back to CPU if GPU is unavailable.

    Returns:
        Name of the backend being used.
    """
    system = platform.system()

    if system == "Darwin":
        try:
            ti.init(arch=ti.metal)
            return "Metal (GPU)"
        except RuntimeError:
            pass

    try:
        ti.init(arch=ti.gpu)
        return "GPU"
    except RuntimeError:
        pass

    ti.init(arch=ti.cpu)
    return "CPU"


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(description="Stream a render into a preview window.")
    parser.add_argument("--width", type=int, default=350, help="Image width (default: 350)")
    parser.add_argument("--height", type=int, default=250, help="Image height (default: 250)")
    parser.add_argument(
        "--workers", type=int, default=None, help="Worker pool size (default: CPU count)"
    )
    parser.add_argument(
        "--samples-per-axis", type=int, default=1, help="Sub-pixel grid size (default: 1)"
    )
    return parser.parse_args()


def main() -> int:
    """Main entry point for the streaming preview.

    Returns:
        Exit code (0 for success, non-zero for error).
    """
    args = parse_args()
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    backend = initialize_taichi()
    print(f"Taichi backend: {backend}")

    from raytracer.core.scheduler import PixelScheduler
    from raytracer.preview.interactive import InteractivePreview
    from raytracer.scene.presets import ThreeSpheresParams, three_spheres_scene

    if not InteractivePreview.is_display_available():
        print("Error: No display available. Cannot run interactive preview.")
        print("This script requires a graphical display environment.")
        return 1

    scene = three_spheres_scene(ThreeSpheresParams(samples_per_axis=args.samples_per_axis))
    preview = InteractivePreview(args.width, args.height)

    print(f"Rendering {args.width}x{args.height}...")
    print("  - Click 'Export PNG' to save the current image")
    print("  - Close window to exit")
    print()

    try:
        with PixelScheduler(scene, args.workers) as scheduler:
            preview.run_streaming(scheduler)
    except KeyboardInterrupt:
        print("\nInterrupted by user.")
    finally:
        preview.close()
        print("Preview window closed.")

    return 0


if __name__ == "__main__":
    sys.exit(main())
