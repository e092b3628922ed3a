"""Multithreaded frame rendering.

This module splits an image into contiguous row ranges, renders each range
on its own worker thread, and returns the assembled frame buffer.

Workers never share mutable state:
- the scene and its materials are only read during a render
- each worker writes only the rows of its own range in the frame buffer
- each worker draws from its own random generator, spawned from a single
  ``numpy.random.SeedSequence`` so that a seeded render is reproducible

A lock-guarded counter tracks finished rows for progress reporting. It is
advisory only; nothing in the render depends on it.

Example:
    >>> from cpu_raytracer.camera.thin_lens import CameraConfig, ThinLensCamera
    >>> from cpu_raytracer.core.scheduler import RenderScheduler
    >>>
    >>> camera = ThinLensCamera(CameraConfig(width=400, samples_per_pixel=20))
    >>> scheduler = RenderScheduler(camera, threads=4, seed=7)
    >>> buffer = scheduler.render(scene)
    >>> buffer.shape
    (225, 400, 3)
"""

from __future__ import annotations

import logging
import os
import threading
import time
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from typing import TextIO

import numpy as np
import numpy.typing as npt

from cpu_raytracer.camera.thin_lens import CameraConfig, ThinLensCamera
from cpu_raytracer.geometry.hittable import Hittable
from cpu_raytracer.preview.export import write_ppm

logger = logging.getLogger(__name__)

# Type alias for progress callback
# Callback receives (rows_completed, total_rows)
ProgressCallback = Callable[[int, int], None]


def default_thread_count() -> int:
    """Number of worker threads used when none is configured."""
    return os.cpu_count() or 1


def partition_rows(height: int, threads: int) -> list[range]:
    """Split image rows into contiguous, non-overlapping ranges.

    Every range but the last holds ``height // n`` rows; the last range
    absorbs the remainder. The thread count is capped at the number of
    rows so that no range is empty.

    Args:
        height: Number of image rows.
        threads: Requested number of ranges.

    Returns:
        A list of row ranges covering 0..height-1 in order.

    Raises:
        ValueError: If threads is less than 1.
    """
    if threads < 1:
        raise ValueError(f"Thread count must be at least 1, got {threads}")

    n = max(1, min(threads, height))
    rows_per_range = height // n

    ranges = [range(k * rows_per_range, (k + 1) * rows_per_range) for k in range(n - 1)]
    ranges.append(range((n - 1) * rows_per_range, height))
    return ranges


class RenderScheduler:
    """Renders a frame by fanning row ranges out to worker threads.

    Attributes:
        camera: The camera producing rays and pixel colors.
        threads: Number of worker threads (1 = render on the calling thread).
        seed: Seed for the per-worker generators, or None for fresh entropy.
    """

    def __init__(
        self,
        camera: ThinLensCamera,
        threads: int | None = None,
        seed: int | None = None,
    ) -> None:
        """Initialize the scheduler.

        ``threads`` and ``seed`` default to the camera configuration's values.

        Raises:
            ValueError: If the resolved thread count is less than 1.
        """
        if threads is None:
            threads = camera.config.threads
        if threads is None:
            threads = default_thread_count()
        if threads < 1:
            raise ValueError(f"Thread count must be at least 1, got {threads}")

        self.camera = camera
        self.threads = threads
        self.seed = seed if seed is not None else camera.config.seed

        self._lock = threading.Lock()
        self._rows_completed = 0

    @property
    def rows_completed(self) -> int:
        """Rows finished so far in the current (or last) render."""
        with self._lock:
            return self._rows_completed

    def spawn_generators(self, count: int) -> list[np.random.Generator]:
        """Create independent random generators, one per worker."""
        seed_seq = np.random.SeedSequence(self.seed)
        return [np.random.default_rng(child) for child in seed_seq.spawn(count)]

    def render(
        self,
        world: Hittable,
        callback: ProgressCallback | None = None,
    ) -> npt.NDArray[np.uint8]:
        """Render the full frame and block until every worker has finished.

        Args:
            world: The scene to render.
            callback: Optional progress callback, called after each finished
                row with (rows_completed, total_rows). With more than one
                thread it is called from worker threads.

        Returns:
            Frame buffer of shape (height, width, 3) with dtype uint8.

        Raises:
            Exception: Any exception raised by a worker is re-raised here.
        """
        self.camera.initialize()
        height = self.camera.image_height
        width = self.camera.image_width

        buffer = np.zeros((height, width, 3), dtype=np.uint8)
        partitions = partition_rows(height, self.threads)
        generators = self.spawn_generators(len(partitions))

        with self._lock:
            self._rows_completed = 0

        def on_row(_row: int) -> None:
            with self._lock:
                self._rows_completed += 1
                completed = self._rows_completed
            if callback is not None:
                callback(completed, height)

        logger.debug(
            "rendering %dx%d with %d worker(s): %s",
            width,
            height,
            len(partitions),
            [(r.start, r.stop) for r in partitions],
        )
        start_time = time.perf_counter()

        if len(partitions) == 1:
            self.camera.render_rows(world, partitions[0], buffer, generators[0], on_row)
        else:
            with ThreadPoolExecutor(
                max_workers=len(partitions), thread_name_prefix="render"
            ) as executor:
                futures = [
                    executor.submit(self.camera.render_rows, world, rows, buffer, rng, on_row)
                    for rows, rng in zip(partitions, generators)
                ]
                for future in futures:
                    future.result()

        logger.info(
            "rendered %dx%d in %.2fs (%d spp, %d thread(s))",
            width,
            height,
            time.perf_counter() - start_time,
            self.camera.config.samples_per_pixel,
            len(partitions),
        )
        return buffer

    def render_to_stream(
        self,
        world: Hittable,
        stream: TextIO,
        callback: ProgressCallback | None = None,
    ) -> npt.NDArray[np.uint8]:
        """Render the frame, then write it to ``stream`` as a PPM image."""
        buffer = self.render(world, callback=callback)
        write_ppm(buffer, stream)
        return buffer

    def __repr__(self) -> str:
        return f"RenderScheduler(threads={self.threads}, seed={self.seed})"


def render_image(
    world: Hittable,
    config: CameraConfig | None = None,
    callback: ProgressCallback | None = None,
) -> npt.NDArray[np.uint8]:
    """Render a scene with a fresh camera built from ``config``.

    Thread count and seed come from the configuration.
    """
    camera = ThinLensCamera(config)
    return RenderScheduler(camera).render(world, callback=callback)
