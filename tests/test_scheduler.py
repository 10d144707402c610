"""Tests for the round-robin pixel scheduler.

Tests cover:
- Job enumeration, chunking and round-robin assignment
- Streaming exactly one message per pixel
- Scheduled renders matching the sequential reference for any worker count
- Display sink and progress callback integration
- Pool lifecycle and argument validation
- The process backend (marked slow)
"""

import threading

import numpy as np
import pytest


class TestJobAssignment:
    """Tests for pixel_jobs, chunk_jobs and assign_round_robin."""

    def test_pixel_jobs_row_major(self):
        """Test that jobs enumerate pixels with x innermost."""
        from raytracer.core.renderer import PixelRequest
        from raytracer.core.scheduler import pixel_jobs

        jobs = pixel_jobs(3, 2)
        assert len(jobs) == 6
        assert jobs[0] == PixelRequest(0, 0, 3, 2)
        assert jobs[1] == PixelRequest(1, 0, 3, 2)
        assert jobs[3] == PixelRequest(0, 1, 3, 2)

    def test_round_robin_assignment(self):
        """Test that item k goes to worker k mod N."""
        from raytracer.core.scheduler import assign_round_robin

        assert assign_round_robin(range(7), 3) == [[0, 3, 6], [1, 4], [2, 5]]

    def test_more_workers_than_items(self):
        """Test that extra workers receive nothing."""
        from raytracer.core.scheduler import assign_round_robin

        assert assign_round_robin(["a", "b"], 4) == [["a"], ["b"], [], []]

    def test_round_robin_rejects_zero_workers(self):
        """Test that at least one worker is required."""
        from raytracer.core.scheduler import assign_round_robin

        with pytest.raises(ValueError):
            assign_round_robin([1, 2], 0)

    def test_chunking(self):
        """Test splitting jobs into consecutive chunks."""
        from raytracer.core.scheduler import chunk_jobs, pixel_jobs

        jobs = pixel_jobs(5, 1)
        chunks = chunk_jobs(jobs, 2)
        assert [[j.x for j in chunk] for chunk in chunks] == [[0, 1], [2, 3], [4]]
        assert chunk_jobs(jobs, 1) == [[j] for j in jobs]

    def test_chunking_rejects_zero(self):
        """Test that chunk_size must be positive."""
        from raytracer.core.scheduler import chunk_jobs, pixel_jobs

        with pytest.raises(ValueError):
            chunk_jobs(pixel_jobs(2, 2), 0)

    def test_default_worker_count(self):
        """Test that the default pool size is at least one."""
        from raytracer.core.scheduler import default_worker_count

        assert default_worker_count() >= 1


class TestSchedulerConfiguration:
    """Tests for PixelScheduler construction and lifecycle."""

    def test_defaults(self, small_scene):
        """Test default worker count, backend and chunk size."""
        from raytracer.core.scheduler import PixelScheduler, default_worker_count

        scheduler = PixelScheduler(small_scene)
        assert scheduler.workers == default_worker_count()
        assert scheduler.backend == "process"
        assert scheduler.chunk_size == 1
        assert not scheduler.started

    @pytest.mark.parametrize(
        "kwargs",
        [{"workers": 0}, {"chunk_size": 0}, {"backend": "fiber"}],
    )
    def test_invalid_arguments(self, small_scene, kwargs):
        """Test that invalid pool settings are rejected."""
        from raytracer.core.scheduler import PixelScheduler

        with pytest.raises(ValueError):
            PixelScheduler(small_scene, **kwargs)

    def test_context_manager_starts_and_stops(self, small_scene):
        """Test the pool lifecycle under a with block."""
        from raytracer.core.scheduler import PixelScheduler

        scheduler = PixelScheduler(small_scene, 2, backend="thread")
        with scheduler:
            assert scheduler.started
        assert not scheduler.started

    def test_stream_owns_pool_when_not_started(self, small_scene):
        """Test that a one-off stream shuts its pool down afterwards."""
        from raytracer.core.scheduler import PixelScheduler

        scheduler = PixelScheduler(small_scene, 2, backend="thread")
        messages = list(scheduler.stream(3, 3))
        assert len(messages) == 9
        assert not scheduler.started

    def test_invalid_scene_fails_before_dispatch(self):
        """Test that a scene without lights is rejected up front."""
        from raytracer.core.errors import SceneError
        from raytracer.core.scheduler import PixelScheduler
        from raytracer.geometry.sphere import Sphere
        from raytracer.scene.config import SceneConfig
        from raytracer.scene.world import World

        scheduler = PixelScheduler(SceneConfig(World((Sphere(),), ())), 2, backend="thread")
        with pytest.raises(SceneError):
            scheduler.render(4, 4)
        assert not scheduler.started


class TestThreadBackend:
    """Tests for scheduled renders on worker threads."""

    @pytest.mark.parametrize("workers", [1, 2, 3, 7])
    def test_matches_sequential_render(self, small_scene, workers):
        """Test that any worker count reproduces the sequential image."""
        from raytracer.core.scheduler import PixelScheduler

        expected = small_scene.camera(11, 11).render(small_scene.world).to_rgb8()
        with PixelScheduler(small_scene, workers, backend="thread") as scheduler:
            canvas = scheduler.render(11, 11)
        assert np.array_equal(canvas.to_rgb8(), expected)

    @pytest.mark.parametrize("chunk_size", [2, 5, 200])
    def test_chunked_render_matches(self, small_scene, chunk_size):
        """Test that chunking does not change the image."""
        from raytracer.core.scheduler import PixelScheduler

        expected = small_scene.camera(11, 11).render(small_scene.world).to_rgb8()
        with PixelScheduler(
            small_scene, 3, backend="thread", chunk_size=chunk_size
        ) as scheduler:
            canvas = scheduler.render(11, 11)
        assert np.array_equal(canvas.to_rgb8(), expected)

    def test_failing_pixels_match_sequential_render(self, degenerate_scene):
        """Test unshadeable pixels and multi-sampling against the reference."""
        import dataclasses

        from raytracer.core.scheduler import PixelScheduler

        scene = dataclasses.replace(degenerate_scene, samples_per_axis=2)
        expected = scene.render(11, 11).to_rgb8()
        with PixelScheduler(scene, 3, backend="thread") as scheduler:
            canvas = scheduler.render(11, 11)
        assert np.array_equal(canvas.to_rgb8(), expected)

    def test_canvas_holds_8bit_values(self, small_scene):
        """Test that the scheduled canvas stores each channel as value / 255."""
        from raytracer.core.scheduler import PixelScheduler

        with PixelScheduler(small_scene, 2, backend="thread") as scheduler:
            canvas = scheduler.render(11, 11)
        assert np.array_equal(canvas.pixels, canvas.to_rgb8() / 255.0)
        linear = np.clip(small_scene.render(11, 11).pixels, 0.0, 1.0)
        assert np.allclose(canvas.pixels, linear, rtol=0.0, atol=0.5 / 255.0 + 1e-9)

    def test_stream_yields_each_pixel_once(self, small_scene):
        """Test that the stream covers every pixel exactly once."""
        from raytracer.core.scheduler import PixelScheduler

        with PixelScheduler(small_scene, 4, backend="thread") as scheduler:
            coords = [(m.x, m.y) for m in scheduler.stream(6, 4)]
        assert len(coords) == 24
        assert set(coords) == {(x, y) for y in range(4) for x in range(6)}

    def test_paints_sink_and_reports_progress(self, small_scene):
        """Test that the sink receives every pixel and progress counts up."""
        from raytracer.core.canvas import CanvasSink
        from raytracer.core.scheduler import PixelScheduler

        sink = CanvasSink(11, 11)
        progress = []
        with PixelScheduler(small_scene, 3, backend="thread") as scheduler:
            canvas = scheduler.render(
                11, 11, sink=sink, callback=lambda done, total: progress.append((done, total))
            )
        assert sink.complete
        assert sink.paint_count == 121
        assert np.array_equal(sink.image, canvas.to_rgb8())
        assert progress[0] == (1, 121)
        assert progress[-1] == (121, 121)
        assert [done for done, _ in progress] == list(range(1, 122))

    def test_pool_is_reusable(self, small_scene):
        """Test rendering several sizes with the same warm pool."""
        from raytracer.core.scheduler import PixelScheduler

        with PixelScheduler(small_scene, 2, backend="thread") as scheduler:
            small = scheduler.render(5, 5)
            large = scheduler.render(11, 11)
        assert small.to_rgb8().shape == (5, 5, 3)
        assert large.to_rgb8()[5, 5].tolist() == [97, 121, 73]

    def test_work_runs_on_worker_threads(self, small_scene):
        """Test that pixels are not computed on the calling thread."""
        from raytracer.core.renderer import PixelRenderer
        from raytracer.core.scheduler import PixelScheduler

        caller = threading.get_ident()
        seen_threads = set()
        original = PixelRenderer.handle

        def recording_handle(self, request):
            seen_threads.add(threading.get_ident())
            return original(self, request)

        PixelRenderer.handle = recording_handle
        try:
            with PixelScheduler(small_scene, 2, backend="thread") as scheduler:
                scheduler.render(4, 4)
        finally:
            PixelRenderer.handle = original
        assert seen_threads
        assert caller not in seen_threads
        assert len(seen_threads) <= 2


@pytest.mark.slow
class TestProcessBackend:
    """Tests for scheduled renders on worker processes."""

    def test_matches_sequential_render(self, small_scene):
        """Test that worker processes reproduce the sequential image."""
        from raytracer.core.scheduler import PixelScheduler

        expected = small_scene.camera(11, 11).render(small_scene.world).to_rgb8()
        with PixelScheduler(small_scene, 2, chunk_size=11) as scheduler:
            canvas = scheduler.render(11, 11)
        assert np.array_equal(canvas.to_rgb8(), expected)

    def test_default_scene(self):
        """Test rendering the three-spheres scene across processes."""
        from raytracer.core.renderer import color_at_pixel
        from raytracer.core.scheduler import PixelScheduler
        from raytracer.scene.presets import three_spheres_scene

        scene = three_spheres_scene()
        with PixelScheduler(scene, 2, chunk_size=8) as scheduler:
            canvas = scheduler.render(14, 10)
        assert tuple(canvas.to_rgb8()[4, 7]) == tuple(color_at_pixel(14, 10, 7, 4, scene))


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
