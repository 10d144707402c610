"""Round-robin pixel-dispatch scheduler.

The scheduler splits a W x H image into independent jobs, hands them to a
fixed pool of N workers in round-robin order and streams the finished pixels
back as they complete:

1. Enumerate pixels in row-major order (x innermost) as PixelRequests.
2. Group consecutive requests into chunks of chunk_size pixels (chunk_size=1
   dispatches single pixels).
3. Give chunk k to worker k mod N.
4. Each worker computes PixelRenderer.render_chunk() for its chunks against
   its own copy (processes) or a shared read-only reference (threads) of
   the immutable SceneConfig.
5. Yield PixelMessages in completion order.

Ordering between pixels is not guaranteed and not needed: every message
targets a different pixel and pixel colors do not depend on each other, so
painting them in arrival order produces the same image as the sequential
Camera.render(). A render is a finite batch; it runs to completion and there
is no cancellation, back-pressure or timeout.

Each worker is a single-worker executor, so the pool size is exactly N and
a worker processes its own chunks one at a time.

Example:
    >>> from raytracer.core.scheduler import PixelScheduler
    >>> from raytracer.scene.presets import three_spheres_scene
    >>>
    >>> with PixelScheduler(three_spheres_scene(), workers=4) as scheduler:
    ...     canvas = scheduler.render(350, 250)
"""

from __future__ import annotations

import itertools
import logging
import multiprocessing
import os
import time
from collections.abc import Callable, Generator, Iterable, Sequence
from concurrent.futures import (
    Executor,
    Future,
    ProcessPoolExecutor,
    ThreadPoolExecutor,
    as_completed,
)
from functools import partial
from typing import Literal, TypeVar

import numpy as np

from raytracer.core.canvas import Canvas, DisplaySink
from raytracer.core.renderer import PixelMessage, PixelRenderer, PixelRequest
from raytracer.scene.config import SceneConfig

logger = logging.getLogger(__name__)

Backend = Literal["process", "thread"]

# Callback receives (pixels_done, pixels_total)
ProgressCallback = Callable[[int, int], None]

T = TypeVar("T")


# =============================================================================
# Job enumeration and assignment
# =============================================================================


def default_worker_count() -> int:
    """Available hardware parallelism, falling back to 1."""
    return os.cpu_count() or 1


def pixel_jobs(width: int, height: int) -> list[PixelRequest]:
    """All pixel requests of an image in row-major order (x innermost)."""
    return [PixelRequest(x, y, width, height) for y in range(height) for x in range(width)]


def chunk_jobs(jobs: Sequence[PixelRequest], chunk_size: int) -> list[list[PixelRequest]]:
    """Split jobs into consecutive runs of at most chunk_size requests."""
    if chunk_size < 1:
        raise ValueError(f"chunk_size must be >= 1, got {chunk_size}")
    return [list(jobs[i : i + chunk_size]) for i in range(0, len(jobs), chunk_size)]


def assign_round_robin(items: Iterable[T], workers: int) -> list[list[T]]:
    """Distribute items so that item i goes to worker i mod workers.

    Returns:
        One list per worker, each preserving the original item order.
    """
    if workers < 1:
        raise ValueError(f"workers must be >= 1, got {workers}")
    buckets: list[list[T]] = [[] for _ in range(workers)]
    for index, item in enumerate(items):
        buckets[index % workers].append(item)
    return buckets


# =============================================================================
# Process worker state
# =============================================================================

# Set once per worker process by the executor initializer
_worker_renderer: PixelRenderer | None = None


def _init_process_worker(scene: SceneConfig) -> None:
    global _worker_renderer
    _worker_renderer = PixelRenderer(scene)


def _render_chunk_in_process(requests: list[PixelRequest]) -> list[PixelMessage]:
    if _worker_renderer is None:
        raise RuntimeError("Pixel worker process was not initialized with a scene")
    return _worker_renderer.render_chunk(requests)


# =============================================================================
# Scheduler
# =============================================================================


class PixelScheduler:
    """Dispatches pixel jobs round-robin across a fixed worker pool.

    The pool is started on first use (or on entering the context manager)
    and kept until shutdown(), so several renders of the same scene can
    reuse warm workers. To render a different scene, create a new scheduler.

    Attributes:
        scene: The immutable scene being rendered.
        workers: Number of workers in the pool.
        backend: "process" for one OS process per worker, "thread" for one
            thread per worker.
        chunk_size: Pixels per message sent to a worker.
    """

    def __init__(
        self,
        scene: SceneConfig,
        workers: int | None = None,
        *,
        backend: Backend = "process",
        chunk_size: int = 1,
        mp_context: multiprocessing.context.BaseContext | None = None,
    ) -> None:
        """Configure the scheduler without starting any worker.

        Args:
            scene: Scene configuration shared with every worker.
            workers: Pool size; defaults to default_worker_count().
            backend: "process" or "thread".
            chunk_size: Number of consecutive pixels per job (default 1).
            mp_context: Multiprocessing context for the process backend;
                defaults to the "spawn" context.

        Raises:
            ValueError: If workers or chunk_size is below 1, or the backend
                is unknown.
        """
        if workers is None:
            workers = default_worker_count()
        if workers < 1:
            raise ValueError(f"workers must be >= 1, got {workers}")
        if chunk_size < 1:
            raise ValueError(f"chunk_size must be >= 1, got {chunk_size}")
        if backend not in ("process", "thread"):
            raise ValueError(f"Unknown backend: {backend!r}")

        self.scene = scene
        self.workers = workers
        self.backend = backend
        self.chunk_size = chunk_size
        self._mp_context = mp_context
        self._executors: list[Executor] = []
        self._submitters: list[Callable[[list[PixelRequest]], Future[list[PixelMessage]]]] = []

    def __repr__(self) -> str:
        return (
            f"PixelScheduler(workers={self.workers}, backend={self.backend!r}, "
            f"chunk_size={self.chunk_size})"
        )

    def __enter__(self) -> PixelScheduler:
        self.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.shutdown()

    # =========================================================================
    # Pool lifecycle
    # =========================================================================

    @property
    def started(self) -> bool:
        return bool(self._executors)

    def start(self) -> None:
        """Start the worker pool if it is not running."""
        if self.started:
            return

        if self.backend == "process":
            context = self._mp_context or multiprocessing.get_context("spawn")
            for _ in range(self.workers):
                executor = ProcessPoolExecutor(
                    max_workers=1,
                    mp_context=context,
                    initializer=_init_process_worker,
                    initargs=(self.scene,),
                )
                self._executors.append(executor)
                self._submitters.append(partial(executor.submit, _render_chunk_in_process))
        else:
            for index in range(self.workers):
                executor = ThreadPoolExecutor(
                    max_workers=1, thread_name_prefix=f"pixel-worker-{index}"
                )
                renderer = PixelRenderer(self.scene)
                self._executors.append(executor)
                self._submitters.append(partial(executor.submit, renderer.render_chunk))

        logger.info("Started %d %s pixel workers", self.workers, self.backend)

    def shutdown(self) -> None:
        """Stop all workers, waiting for submitted jobs to finish."""
        for executor in self._executors:
            executor.shutdown(wait=True)
        self._executors = []
        self._submitters = []

    # =========================================================================
    # Rendering
    # =========================================================================

    def stream(self, width: int, height: int) -> Generator[PixelMessage, None, None]:
        """Render an image, yielding pixels in completion order.

        The scene is validated before any job is dispatched. If the pool was
        not started, it is started for this render and shut down afterwards.

        Args:
            width: Image width in pixels.
            height: Image height in pixels.

        Yields:
            Exactly width * height PixelMessages, one per pixel.

        Raises:
            SceneError: If the scene or image size cannot be rendered.
            NotInvertibleError: If a transform in the scene is singular.
        """
        self.scene.validate(width, height)

        owns_pool = not self.started
        self.start()

        chunks = chunk_jobs(pixel_jobs(width, height), self.chunk_size)
        assignments = assign_round_robin(chunks, self.workers)
        for worker, assigned in enumerate(assignments):
            logger.debug("Worker %d assigned %d chunks", worker, len(assigned))

        # Submit round by round so early rows are in flight first
        futures: list[Future[list[PixelMessage]]] = []
        for round_chunks in itertools.zip_longest(*assignments):
            for worker, chunk in enumerate(round_chunks):
                if chunk is not None:
                    futures.append(self._submitters[worker](chunk))

        logger.info(
            "Dispatched %dx%d image as %d jobs to %d workers",
            width,
            height,
            len(chunks),
            self.workers,
        )
        try:
            for future in as_completed(futures):
                yield from future.result()
        finally:
            for future in futures:
                future.cancel()
            if owns_pool:
                self.shutdown()

    def render(
        self,
        width: int,
        height: int,
        sink: DisplaySink | None = None,
        callback: ProgressCallback | None = None,
    ) -> Canvas:
        """Render an image into a canvas, painting each pixel as it arrives.

        Workers only send 8-bit channels, so the canvas holds each channel
        as value / 255. It matches SceneConfig.render() exactly after
        Canvas.to_rgb8(), not in its float pixels.

        Args:
            width: Image width in pixels.
            height: Image height in pixels.
            sink: Optional display sink that also receives every pixel.
            callback: Optional progress callback receiving
                (pixels_done, pixels_total) after each pixel.

        Returns:
            The completed canvas.

        Raises:
            RuntimeError: If the workers did not deliver exactly one message
                per pixel.
        """
        total = width * height
        canvas = Canvas(width, height)
        seen = np.zeros((height, width), dtype=bool)
        received = 0
        start_time = time.perf_counter()

        for message in self.stream(width, height):
            if seen[message.y, message.x]:
                raise RuntimeError(f"Pixel ({message.x}, {message.y}) delivered twice")
            seen[message.y, message.x] = True

            canvas.write_rgb8(message.x, message.y, message.r, message.g, message.b)
            if sink is not None:
                sink.paint(message.x, message.y, message.r, message.g, message.b)

            received += 1
            if callback is not None:
                callback(received, total)

        if received != total:
            raise RuntimeError(f"Expected {total} pixel messages, received {received}")

        logger.info(
            "Rendered %dx%d image in %.2fs", width, height, time.perf_counter() - start_time
        )
        return canvas
