"""Interactive preview window using Taichi GGUI.

InteractivePreview is a display sink: the scheduler paints finished pixels
into it with ``paint(x, y, r, g, b)`` as they arrive from the workers, and
the window shows the image filling in. Paints are buffered on the host and
scattered into a Taichi field once per frame by flush(), so a frame costs
one kernel launch however many pixels arrived since the last one.

Features:
    - Streaming display of a scheduled render (run_streaming)
    - Taichi GGUI-based window (GPU-accelerated)
    - Support for updating the whole display from a canvas or numpy array
    - Export of the displayed image to PNG from a GUI button

Example:
    >>> from raytracer.core.scheduler import PixelScheduler
    >>> from raytracer.preview.interactive import InteractivePreview
    >>> from raytracer.scene.presets import three_spheres_scene
    >>>
    >>> preview = InteractivePreview(350, 250)
    >>> with PixelScheduler(three_spheres_scene(), workers=4) as scheduler:
    ...     canvas = preview.run_streaming(scheduler)
"""

from __future__ import annotations

import logging
import os
from datetime import datetime
from typing import TYPE_CHECKING

import numpy as np
import taichi as ti

from raytracer.core.canvas import Canvas
from raytracer.preview.kernels import get_scatter_pixels_kernel

if TYPE_CHECKING:
    import numpy.typing as npt

    from raytracer.core.scheduler import PixelScheduler

logger = logging.getLogger(__name__)


class InteractivePreview:
    """Interactive preview window and streaming display sink.

    Attributes:
        width: Window width in pixels.
        height: Window height in pixels.
        window: The Taichi GGUI window instance.
        canvas: The GGUI canvas for rendering.
        display_image: Taichi field storing the display image (RGB float),
            indexed (x, y) with y pointing up.

    Example:
        >>> preview = InteractivePreview(350, 250)
        >>> preview.paint(10, 20, 255, 128, 0)
        >>> preview.flush()
        >>> preview.run()
    """

    def __init__(
        self,
        width: int,
        height: int,
        *,
        title: str = "Ray Tracer - Interactive Preview",
    ) -> None:
        """Initialize the preview.

        Args:
            width: Window width in pixels.
            height: Window height in pixels.
            title: Window title.

        Note:
            Taichi must be initialized before the preview is created. The
            window is not created until it is first shown, so paint() and
            flush() also work headless.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Preview dimensions must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self._title = title
        self._is_initialized = False

        # Defer window creation until first use to support headless checks
        self._window: ti.ui.Window | None = None
        self._canvas: ti.ui.Canvas | None = None

        self.display_image: ti.MatrixField = ti.Vector.field(
            3, dtype=ti.f32, shape=(width, height)
        )

        self._pending_xs: list[int] = []
        self._pending_ys: list[int] = []
        self._pending_colors: list[tuple[int, int, int]] = []
        self._painted = np.zeros((height, width), dtype=bool)

    def _initialize_window(self) -> None:
        if self._is_initialized:
            return

        self._window = ti.ui.Window(
            name=self._title,
            res=(self.width, self.height),
            vsync=True,
        )
        self._canvas = self._window.get_canvas()
        self._is_initialized = True

    @property
    def window(self) -> ti.ui.Window:
        """Get the Taichi GGUI window, initializing if needed."""
        if self._window is None:
            self._initialize_window()
        assert self._window is not None
        return self._window

    @property
    def canvas(self) -> ti.ui.Canvas:
        """Get the canvas for rendering."""
        if self._canvas is None:
            self._initialize_window()
        assert self._canvas is not None
        return self._canvas

    # =========================================================================
    # Display sink
    # =========================================================================

    def paint(self, x: int, y: int, r: int, g: int, b: int) -> None:
        """Buffer one 8-bit pixel; it becomes visible on the next flush().

        Raises:
            IndexError: If (x, y) is outside the preview.
        """
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Pixel ({x}, {y}) outside {self.width}x{self.height} preview")
        self._pending_xs.append(x)
        self._pending_ys.append(y)
        self._pending_colors.append((r, g, b))
        self._painted[y, x] = True

    @property
    def pending_count(self) -> int:
        """Number of painted pixels not yet flushed to the display field."""
        return len(self._pending_xs)

    @property
    def painted_count(self) -> int:
        """Number of distinct pixels painted so far."""
        return int(self._painted.sum())

    def flush(self) -> int:
        """Write all buffered paints into display_image.

        Returns:
            The number of pixels written.
        """
        count = len(self._pending_xs)
        if count == 0:
            return 0

        xs = np.asarray(self._pending_xs, dtype=np.int32)
        ys = np.asarray(self._pending_ys, dtype=np.int32)
        colors = np.asarray(self._pending_colors, dtype=np.float32) / 255.0

        kernel = get_scatter_pixels_kernel()
        kernel(xs, ys, colors, count, self.height, self.display_image)

        self._pending_xs = []
        self._pending_ys = []
        self._pending_colors = []
        return count

    # =========================================================================
    # Whole-image updates
    # =========================================================================

    def update_image(self, image: Canvas | npt.NDArray[np.floating]) -> None:
        """Replace the display image with a canvas or a float array.

        Args:
            image: A Canvas, or a NumPy array of shape (height, width, 3)
                with values in [0, 1].

        Raises:
            ValueError: If image shape doesn't match (height, width, 3).
        """
        if isinstance(image, Canvas):
            array = image.to_rgb8().astype(np.float32) / 255.0
        else:
            array = np.clip(image, 0.0, 1.0).astype(np.float32)

        expected_shape = (self.height, self.width, 3)
        if array.shape != expected_shape:
            raise ValueError(
                f"Image shape {array.shape} doesn't match expected {expected_shape}"
            )

        # NumPy images are (height, width, channels) with row 0 at the top;
        # the field is (x, y) with y = 0 at the bottom
        image_transposed = np.ascontiguousarray(np.transpose(np.flipud(array), (1, 0, 2)))
        self.display_image.from_numpy(image_transposed)
        self._painted[:] = True

    def get_image(self) -> npt.NDArray[np.float32]:
        """Return the display image as a (height, width, 3) float array."""
        field = self.display_image.to_numpy()
        return np.ascontiguousarray(np.flipud(np.transpose(field, (1, 0, 2))))

    # =========================================================================
    # Window loop
    # =========================================================================

    def is_running(self) -> bool:
        """Check if the window is still open."""
        return self.window.running

    def show_frame(self) -> None:
        """Flush pending paints and present one frame."""
        self.flush()
        self.canvas.set_image(self.display_image)
        self.window.show()

    def run(self, *, show_controls: bool = True) -> None:
        """Run the window event loop until the window is closed.

        Args:
            show_controls: Whether to draw the export panel.
        """
        self._initialize_window()

        while self.is_running():
            if show_controls:
                self._draw_gui_panel()
            self.show_frame()

    def run_streaming(
        self,
        scheduler: PixelScheduler,
        *,
        pixels_per_frame: int | None = None,
        keep_open: bool = True,
    ) -> Canvas:
        """Render with a scheduler while showing pixels as they arrive.

        Args:
            scheduler: Scheduler whose scene is rendered at the preview size.
            pixels_per_frame: Number of arrived pixels between frames;
                defaults to one image row.
            keep_open: Whether to keep the window open after the render
                completes, until the user closes it.

        Returns:
            The completed canvas.
        """
        if pixels_per_frame is None:
            pixels_per_frame = self.width
        if pixels_per_frame < 1:
            raise ValueError(f"pixels_per_frame must be >= 1, got {pixels_per_frame}")

        self._initialize_window()

        def on_progress(done: int, total: int) -> None:
            if (done % pixels_per_frame == 0 or done == total) and self.is_running():
                self.show_frame()

        canvas = scheduler.render(self.width, self.height, sink=self, callback=on_progress)
        self.flush()
        logger.info("Streamed %d pixels to the preview", self.painted_count)

        if keep_open:
            self.run()
        return canvas

    def _draw_gui_panel(self) -> None:
        with self.window.GUI.sub_window("Export", 0.02, 0.02, 0.25, 0.08) as gui:
            if gui.button("Export PNG"):
                self._export_png()

    def _export_png(self) -> None:
        """Export the displayed image to a timestamped PNG file."""
        from raytracer.preview.export import save_png

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filename = f"render_{timestamp}.png"
        self.flush()
        save_png(self.get_image(), filename)
        logger.info("Exported %s (%d pixels painted)", filename, self.painted_count)

    def close(self) -> None:
        """Close the preview window.

        After calling this, the window cannot be reopened.
        """
        if self._window is not None:
            self._window.running = False

    @staticmethod
    def is_display_available() -> bool:
        """Check if a display is available for GUI rendering.

        Returns:
            True if a display is available, False for headless environments.
        """
        display = os.environ.get("DISPLAY")
        wayland = os.environ.get("WAYLAND_DISPLAY")

        if os.name == "nt":
            return True

        # On macOS, display is available unless in SSH without X forwarding
        if os.uname().sysname == "Darwin":
            ssh_connection = os.environ.get("SSH_CONNECTION")
            return not (ssh_connection and not display)

        return bool(display or wayland)
