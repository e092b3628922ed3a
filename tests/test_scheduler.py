"""Unit tests for the multithreaded render scheduler.

Tests cover:
- Row partitioning (coverage, remainder, capping)
- Thread count resolution and validation
- Seeded, reproducible renders
- Progress reporting across worker threads
- Worker exception propagation
- Single-threaded rendering on the calling thread
- PPM stream output
"""

import io
import threading

import numpy as np
import pytest

from cpu_raytracer.camera.thin_lens import CameraConfig, ThinLensCamera
from cpu_raytracer.core.scheduler import (
    RenderScheduler,
    default_thread_count,
    partition_rows,
    render_image,
)
from cpu_raytracer.geometry.hittable import Hittable


def small_config(**overrides):
    settings = dict(width=16, samples_per_pixel=2, max_depth=3)
    settings.update(overrides)
    return CameraConfig(**settings)


class ExplodingWorld(Hittable):
    """A world whose intersection test always fails."""

    def hit(self, ray, ray_t):
        raise RuntimeError("intersection failed")


class ThreadRecordingWorld(Hittable):
    """An empty world that records which threads query it."""

    def __init__(self):
        self.thread_names = set()
        self._lock = threading.Lock()

    def hit(self, ray, ray_t):
        with self._lock:
            self.thread_names.add(threading.current_thread().name)
        return None


class TestPartitionRows:
    """Tests for partition_rows."""

    def test_even_split(self):
        assert partition_rows(9, 3) == [range(0, 3), range(3, 6), range(6, 9)]

    def test_last_range_absorbs_remainder(self):
        assert partition_rows(10, 3) == [range(0, 3), range(3, 6), range(6, 10)]

    def test_single_thread(self):
        assert partition_rows(56, 1) == [range(0, 56)]

    def test_thread_count_capped_at_height(self):
        parts = partition_rows(3, 8)
        assert parts == [range(0, 1), range(1, 2), range(2, 3)]

    @pytest.mark.parametrize("height", [1, 2, 7, 56, 225])
    @pytest.mark.parametrize("threads", [1, 2, 3, 4, 16])
    def test_ranges_cover_every_row_once(self, height, threads):
        parts = partition_rows(height, threads)
        rows = [j for part in parts for j in part]
        assert rows == list(range(height))
        assert all(len(part) > 0 for part in parts)
        assert len(parts) == min(threads, height)

    @pytest.mark.parametrize("threads", [0, -2])
    def test_invalid_thread_count(self, threads):
        with pytest.raises(ValueError, match="at least 1"):
            partition_rows(10, threads)


class TestSchedulerSetup:
    """Tests for thread count and seed resolution."""

    def test_threads_from_argument(self):
        scheduler = RenderScheduler(ThinLensCamera(small_config(threads=2)), threads=3)
        assert scheduler.threads == 3

    def test_threads_from_config(self):
        scheduler = RenderScheduler(ThinLensCamera(small_config(threads=2)))
        assert scheduler.threads == 2

    def test_threads_default_to_cpu_count(self):
        scheduler = RenderScheduler(ThinLensCamera(small_config()))
        assert scheduler.threads == default_thread_count()
        assert default_thread_count() >= 1

    def test_invalid_threads(self):
        with pytest.raises(ValueError):
            RenderScheduler(ThinLensCamera(small_config()), threads=0)

    def test_seed_from_config(self):
        scheduler = RenderScheduler(ThinLensCamera(small_config(seed=11)))
        assert scheduler.seed == 11
        assert RenderScheduler(ThinLensCamera(small_config(seed=11)), seed=5).seed == 5

    def test_spawned_generators_are_independent_and_reproducible(self):
        scheduler = RenderScheduler(ThinLensCamera(small_config()), threads=1, seed=3)
        first = [g.random() for g in scheduler.spawn_generators(3)]
        second = [g.random() for g in scheduler.spawn_generators(3)]
        assert first == second
        assert len(set(first)) == 3


class TestRender:
    """Tests for full frame rendering."""

    def test_buffer_shape_and_dtype(self, single_sphere_scene):
        scheduler = RenderScheduler(ThinLensCamera(small_config()), threads=2, seed=1)
        buffer = scheduler.render(single_sphere_scene)
        assert buffer.shape == (9, 16, 3)
        assert buffer.dtype == np.uint8

    def test_render_initializes_camera(self, single_sphere_scene):
        camera = ThinLensCamera(small_config())
        RenderScheduler(camera, threads=1, seed=1).render(single_sphere_scene)
        assert camera.is_initialized

    @pytest.mark.parametrize("threads", [1, 3])
    def test_seeded_render_is_reproducible(self, single_sphere_scene, threads):
        first = RenderScheduler(ThinLensCamera(small_config()), threads=threads, seed=7)
        second = RenderScheduler(ThinLensCamera(small_config()), threads=threads, seed=7)
        np.testing.assert_array_equal(
            first.render(single_sphere_scene), second.render(single_sphere_scene)
        )

    def test_progress_reaches_total(self, single_sphere_scene):
        calls = []
        scheduler = RenderScheduler(ThinLensCamera(small_config()), threads=4, seed=1)

        scheduler.render(single_sphere_scene, callback=lambda done, total: calls.append((done, total)))

        assert sorted(calls) == [(k, 9) for k in range(1, 10)]
        assert scheduler.rows_completed == 9

    def test_progress_resets_between_renders(self, single_sphere_scene):
        scheduler = RenderScheduler(ThinLensCamera(small_config()), threads=2, seed=1)
        scheduler.render(single_sphere_scene)
        scheduler.render(single_sphere_scene)
        assert scheduler.rows_completed == 9

    @pytest.mark.parametrize("threads", [1, 2])
    def test_worker_exception_propagates(self, threads):
        scheduler = RenderScheduler(ThinLensCamera(small_config()), threads=threads, seed=1)
        with pytest.raises(RuntimeError, match="intersection failed"):
            scheduler.render(ExplodingWorld())

    def test_single_thread_renders_on_calling_thread(self):
        world = ThreadRecordingWorld()
        RenderScheduler(ThinLensCamera(small_config()), threads=1, seed=1).render(world)
        assert world.thread_names == {threading.current_thread().name}

    def test_multiple_threads_use_worker_pool(self):
        world = ThreadRecordingWorld()
        RenderScheduler(ThinLensCamera(small_config()), threads=3, seed=1).render(world)
        assert world.thread_names
        assert all(name.startswith("render") for name in world.thread_names)

    def test_render_to_stream(self, single_sphere_scene):
        stream = io.StringIO()
        scheduler = RenderScheduler(ThinLensCamera(small_config()), threads=2, seed=1)

        buffer = scheduler.render_to_stream(single_sphere_scene, stream)

        lines = stream.getvalue().splitlines()
        assert lines[:3] == ["P3", "16 9", "255"]
        assert len(lines) == 3 + 16 * 9
        assert lines[3] == " ".join(str(c) for c in buffer[0, 0])

    def test_render_image(self, single_sphere_scene):
        buffer = render_image(single_sphere_scene, small_config(threads=2, seed=4))
        again = render_image(single_sphere_scene, small_config(threads=2, seed=4))
        assert buffer.shape == (9, 16, 3)
        np.testing.assert_array_equal(buffer, again)

    def test_repr(self):
        scheduler = RenderScheduler(ThinLensCamera(small_config()), threads=2, seed=9)
        assert repr(scheduler) == "RenderScheduler(threads=2, seed=9)"
