"""Thin-lens camera model for perspective ray generation with depth of field.

This module implements a camera that generates primary rays for rendering.
The camera supports:
- Look-at positioning (lookfrom, lookat, vup)
- Vertical field of view in degrees
- Arbitrary aspect ratios
- Jittered sampling for anti-aliasing (box filter over each pixel)
- Defocus blur from a finite lens aperture

The camera builds an orthonormal basis (u, v, w) from the view parameters:
- w: points from lookat toward lookfrom (opposite view direction)
- u: points right in the image plane
- v: points up in the image plane

The image plane sits at the focus distance, so everything at that distance
stays sharp. With ``defocus_angle > 0`` ray origins are spread over a disk
around the camera center whose radius is set by the cone angle subtended
at the focus plane; ``defocus_angle <= 0`` gives a pinhole camera.

Example:
    >>> import numpy as np
    >>> from cpu_raytracer.camera.thin_lens import CameraConfig, ThinLensCamera
    >>>
    >>> camera = ThinLensCamera(CameraConfig(
    ...     width=400,
    ...     lookfrom=(-2.0, 2.0, 1.0),
    ...     lookat=(0.0, 0.0, -1.0),
    ...     vfov=20.0,
    ...     defocus_angle=10.0,
    ...     focus_dist=3.4,
    ... ))
    >>> camera.initialize()
    >>> ray = camera.get_ray(200, 112, np.random.default_rng(0))
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable
from dataclasses import dataclass

import numpy as np
import numpy.typing as npt

from cpu_raytracer.core.integrator import T_MIN, ray_color
from cpu_raytracer.core.ray import RandomSource, Ray, random_in_unit_disk
from cpu_raytracer.core.vec3 import Color, Point3, Vec3
from cpu_raytracer.geometry.hittable import Hittable
from cpu_raytracer.preview.export import write_color

logger = logging.getLogger(__name__)

# Type alias for per-row notifications, receives the finished row index
RowCallback = Callable[[int], None]


# =============================================================================
# Camera Configuration
# =============================================================================


@dataclass
class CameraConfig:
    """Configuration for a thin-lens camera and its render.

    Attributes:
        aspect_ratio: Ratio of image width over height.
        width: Rendered image width in pixels. Values below 1 render as 1.
        samples_per_pixel: Count of random samples for each pixel.
        max_depth: Maximum number of ray bounces into the scene.
        epsilon: Hits closer than this are ignored (floating-point acne).
        vfov: Vertical field of view in degrees.
        lookfrom: Camera position in world space (x, y, z).
        lookat: Point the camera is looking at in world space (x, y, z).
        vup: Camera-relative "up" direction.
        defocus_angle: Variation angle of rays through each pixel, in degrees.
            0 disables depth of field.
        focus_dist: Distance from lookfrom to the plane of perfect focus.
        threads: Worker thread count. None uses every available core and
            1 renders on the calling thread.
        seed: Seed for the per-worker random generators. None draws fresh
            entropy for every render.
    """

    aspect_ratio: float = 16.0 / 9.0
    width: int = 1920
    samples_per_pixel: int = 10
    max_depth: int = 10
    epsilon: float = T_MIN
    vfov: float = 90.0
    lookfrom: tuple[float, float, float] = (0.0, 0.0, 0.0)
    lookat: tuple[float, float, float] = (0.0, 0.0, -1.0)
    vup: tuple[float, float, float] = (0.0, 1.0, 0.0)
    defocus_angle: float = 0.0
    focus_dist: float = 10.0
    threads: int | None = None
    seed: int | None = None

    @property
    def image_width(self) -> int:
        """Image width in pixels (at least 1)."""
        return max(1, int(self.width))

    @property
    def image_height(self) -> int:
        """Image height derived from width and aspect ratio (at least 1)."""
        return max(1, int(self.image_width / self.aspect_ratio))


# =============================================================================
# Camera
# =============================================================================


class ThinLensCamera:
    """A camera that turns pixel coordinates into sampled world-space rays.

    Derived geometry is computed by ``initialize()``, which must run before
    any ray is generated. Re-run it after changing ``config``.
    """

    def __init__(self, config: CameraConfig | None = None) -> None:
        self.config = config if config is not None else CameraConfig()
        self._initialized = False

        self.image_height = 0
        self.center = Point3()
        self.pixel00_loc = Point3()
        self.pixel_delta_u = Vec3()
        self.pixel_delta_v = Vec3()
        self.u = Vec3()
        self.v = Vec3()
        self.w = Vec3()
        self.defocus_disk_u = Vec3()
        self.defocus_disk_v = Vec3()
        self.pixel_samples_scale = 1.0

    @property
    def image_width(self) -> int:
        return self.config.image_width

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    def initialize(self) -> None:
        """Compute derived camera state from the configuration.

        Builds the orthonormal basis, the viewport at the focus distance,
        the per-pixel offsets and the defocus disk basis.
        """
        cfg = self.config
        self.image_height = cfg.image_height
        self.pixel_samples_scale = 1.0 / cfg.samples_per_pixel

        # Build orthonormal basis using NumPy
        lookfrom = np.array(tuple(cfg.lookfrom), dtype=np.float64)
        lookat = np.array(tuple(cfg.lookat), dtype=np.float64)
        vup = np.array(tuple(cfg.vup), dtype=np.float64)

        # w points from lookat toward lookfrom (backward)
        w = lookfrom - lookat
        w = w / np.linalg.norm(w)

        # u points right (perpendicular to w and vup)
        u = np.cross(vup, w)
        u = u / np.linalg.norm(u)

        # v points up in the camera's frame
        v = np.cross(w, u)

        self.center = Point3(*lookfrom.tolist())
        self.u = Vec3(*u.tolist())
        self.v = Vec3(*v.tolist())
        self.w = Vec3(*w.tolist())

        # Viewport dimensions at the focus distance
        theta = math.radians(cfg.vfov)
        h = math.tan(theta / 2.0)
        viewport_height = 2.0 * h * cfg.focus_dist
        viewport_width = viewport_height * (cfg.image_width / self.image_height)

        # Viewport edges: across the horizontal edge, and down the vertical edge
        viewport_u = viewport_width * self.u
        viewport_v = viewport_height * -self.v

        self.pixel_delta_u = viewport_u / cfg.image_width
        self.pixel_delta_v = viewport_v / self.image_height

        viewport_upper_left = (
            self.center - cfg.focus_dist * self.w - viewport_u / 2.0 - viewport_v / 2.0
        )
        self.pixel00_loc = viewport_upper_left + 0.5 * (self.pixel_delta_u + self.pixel_delta_v)

        defocus_radius = cfg.focus_dist * math.tan(math.radians(cfg.defocus_angle / 2.0))
        self.defocus_disk_u = defocus_radius * self.u
        self.defocus_disk_v = defocus_radius * self.v

        self._initialized = True
        logger.debug(
            "camera initialized: %dx%d, vfov=%.1f, defocus_angle=%.2f, focus_dist=%.3f",
            cfg.image_width,
            self.image_height,
            cfg.vfov,
            cfg.defocus_angle,
            cfg.focus_dist,
        )

    def _check_initialized(self) -> None:
        if not self._initialized:
            raise RuntimeError("Camera not initialized. Call initialize() first.")

    # =========================================================================
    # Ray Generation
    # =========================================================================

    def sample_square(self, rng: RandomSource) -> Vec3:
        """Return a random offset in the [-.5, +.5) unit square."""
        return Vec3(rng.random() - 0.5, rng.random() - 0.5, 0.0)

    def defocus_disk_sample(self, rng: RandomSource) -> Point3:
        """Return a random point on the camera's defocus disk."""
        p = random_in_unit_disk(rng)
        return self.center + (p.x * self.defocus_disk_u) + (p.y * self.defocus_disk_v)

    def get_ray(self, i: int, j: int, rng: RandomSource) -> Ray:
        """Generate a jittered camera ray for pixel (i, j).

        The ray originates on the defocus disk (or exactly at the camera
        center when defocus is disabled) and passes through a random point
        in the pixel's square.

        Args:
            i: Pixel column (0 = left).
            j: Pixel row (0 = top).
            rng: Random source owned by the calling render worker.

        Returns:
            The sampled Ray, with a random time in [0, 1).
        """
        self._check_initialized()

        offset = self.sample_square(rng)
        pixel_sample = (
            self.pixel00_loc
            + ((i + offset.x) * self.pixel_delta_u)
            + ((j + offset.y) * self.pixel_delta_v)
        )

        if self.config.defocus_angle <= 0.0:
            ray_origin = self.center
        else:
            ray_origin = self.defocus_disk_sample(rng)

        ray_direction = pixel_sample - ray_origin
        ray_time = rng.random()
        return Ray(ray_origin, ray_direction, ray_time)

    # =========================================================================
    # Pixel Estimation
    # =========================================================================

    def pixel_color(self, i: int, j: int, world: Hittable, rng: RandomSource) -> tuple[int, int, int]:
        """Estimate the final 8-bit color of pixel (i, j).

        Averages ``samples_per_pixel`` independent path samples, then applies
        gamma correction and clamping.
        """
        cfg = self.config
        total = Color(0.0, 0.0, 0.0)
        for _ in range(cfg.samples_per_pixel):
            ray = self.get_ray(i, j, rng)
            total = total + ray_color(ray, cfg.max_depth, world, rng, cfg.epsilon)
        return write_color(self.pixel_samples_scale * total)

    def render_rows(
        self,
        world: Hittable,
        rows: range,
        buffer: npt.NDArray[np.uint8],
        rng: RandomSource,
        on_row: RowCallback | None = None,
    ) -> None:
        """Render a contiguous range of rows into the frame buffer.

        Only the rows in ``rows`` are written, so several workers can fill
        disjoint ranges of the same buffer at once.

        Args:
            world: The scene to render.
            rows: Row indices to render (0 = top).
            buffer: Frame buffer of shape (height, width, 3).
            rng: Random source owned by the calling render worker.
            on_row: Optional callback invoked with each finished row index.
        """
        self._check_initialized()
        width = self.config.image_width
        for j in rows:
            buffer[j] = [self.pixel_color(i, j, world, rng) for i in range(width)]
            if on_row is not None:
                on_row(j)

    # =========================================================================
    # Utility Functions
    # =========================================================================

    def get_camera_info(self) -> dict[str, tuple[float, float, float]]:
        """Get derived camera state for debugging.

        Returns:
            Dictionary with center, u, v, w, pixel00, pixel_delta_u,
            pixel_delta_v, defocus_disk_u and defocus_disk_v.
        """
        self._check_initialized()
        return {
            "center": self.center.to_tuple(),
            "u": self.u.to_tuple(),
            "v": self.v.to_tuple(),
            "w": self.w.to_tuple(),
            "pixel00": self.pixel00_loc.to_tuple(),
            "pixel_delta_u": self.pixel_delta_u.to_tuple(),
            "pixel_delta_v": self.pixel_delta_v.to_tuple(),
            "defocus_disk_u": self.defocus_disk_u.to_tuple(),
            "defocus_disk_v": self.defocus_disk_v.to_tuple(),
        }
