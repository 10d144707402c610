#!/usr/bin/env python3
"""Render the three-spheres demo scene with the pixel scheduler.

The image is split into pixel jobs that are handed round-robin to a pool of
worker processes (or threads); finished pixels are painted as they arrive
and the completed image is saved as PNG or PPM.

Usage:
    python -m examples.render_scene [options]

Options:
    --width WIDTH           Image width in pixels (default: 350)
    --height HEIGHT         Image height in pixels (default: 250)
    --workers N             Worker pool size (default: CPU count)
    --backend {process,thread}
                            Worker type (default: process)
    --chunk-size SIZE       Pixels per job (default: 1)
    --samples-per-axis N    Sub-pixel grid size (default: 1)
    --output OUTPUT         Output file path, .png or .ppm (default: render.png)
    --sequential            Use the single-threaded draw() instead
    --quiet                 Suppress progress output
    --verbose               Show debug logging

Example:
    python -m examples.render_scene --width 700 --height 500 --workers 8
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path

from raytracer.config import BACKENDS, RenderSettings


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    defaults = RenderSettings()
    parser = argparse.ArgumentParser(
        description="Render the three-spheres demo scene.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width",
        type=int,
        default=defaults.width,
        help=f"Image width in pixels (default: {defaults.width})",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=defaults.height,
        help=f"Image height in pixels (default: {defaults.height})",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Worker pool size (default: CPU count)",
    )
    parser.add_argument(
        "--backend",
        choices=BACKENDS,
        default=defaults.backend,
        help=f"Worker type (default: {defaults.backend})",
    )
    parser.add_argument(
        "--chunk-size",
        type=int,
        default=defaults.chunk_size,
        help=f"Pixels per job (default: {defaults.chunk_size})",
    )
    parser.add_argument(
        "--samples-per-axis",
        type=int,
        default=defaults.samples_per_axis,
        help=f"Sub-pixel grid size (default: {defaults.samples_per_axis})",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=defaults.output,
        help=f"Output file path, .png or .ppm (default: {defaults.output})",
    )
    parser.add_argument(
        "--sequential",
        action="store_true",
        help="Use the single-threaded draw() instead of the scheduler",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Show debug logging",
    )
    return parser.parse_args()


def render_scene(settings: RenderSettings, *, sequential: bool = False, quiet: bool = False) -> Path:
    """Render the demo scene and save it to settings.output.

    Args:
        settings: Image size, worker pool and output settings.
        sequential: If True, render with draw() on the calling thread.
        quiet: If True, suppress progress output.

    Returns:
        Path to the saved image file.
    """
    from raytracer.core.canvas import CanvasSink
    from raytracer.core.renderer import draw
    from raytracer.core.scheduler import PixelScheduler
    from raytracer.preview.export import save_image
    from raytracer.scene.presets import ThreeSpheresParams, three_spheres_scene

    settings.validate()
    scene = three_spheres_scene(ThreeSpheresParams(samples_per_axis=settings.samples_per_axis))

    start_time = time.time()
    output_file = Path(settings.output)

    if sequential:
        if not quiet:
            print(f"Drawing {settings.width}x{settings.height} on one thread...")
        sink = CanvasSink(settings.width, settings.height)
        draw(sink, settings.width, settings.height, scene)
        save_image(sink.image.astype("float64") / 255.0, output_file)
    else:
        scheduler = PixelScheduler(
            scene,
            settings.workers,
            backend=settings.backend,
            chunk_size=settings.chunk_size,
        )
        if not quiet:
            print(
                f"Rendering {settings.width}x{settings.height} with "
                f"{scheduler.workers} {settings.backend} workers..."
            )

        step = max(1, settings.pixel_count // 100)

        def progress_callback(done: int, total: int) -> None:
            if not quiet and (done % step == 0 or done == total):
                elapsed = time.time() - start_time
                pixels_per_sec = done / elapsed if elapsed > 0 else 0
                print(
                    f"\r  Progress: {done}/{total} pixels "
                    f"({done / total * 100:.1f}%) - {pixels_per_sec:.0f} px/s",
                    end="",
                    flush=True,
                )

        with scheduler:
            canvas = scheduler.render(
                settings.width, settings.height, callback=progress_callback
            )
        if not quiet:
            print()  # Newline after progress
        save_image(canvas, output_file)

    total_time = time.time() - start_time
    if not quiet:
        print(f"Saved to: {output_file.absolute()}")
        print(f"Total time: {total_time:.2f}s")

    return output_file


def main() -> int:
    """Main entry point."""
    args = parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    settings = RenderSettings(
        width=args.width,
        height=args.height,
        workers=args.workers,
        backend=args.backend,
        chunk_size=args.chunk_size,
        samples_per_axis=args.samples_per_axis,
        output=args.output,
    )

    try:
        render_scene(settings, sequential=args.sequential, quiet=args.quiet)
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
