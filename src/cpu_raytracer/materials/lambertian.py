"""Lambertian (ideal diffuse) material implementation.

This module implements ideal diffuse reflection, where incident light is
scattered in all directions weighted by the cosine of the angle from the
surface normal.

The scattered direction is the surface normal plus a random unit vector.
Points on the unit sphere offset along the normal are distributed with
density proportional to cos(theta), which gives cosine-weighted sampling
without building a local frame. Because that sampling density matches the
BRDF, the attenuation of every scatter is simply the albedo:

    attenuation = (BRDF * cos_theta) / pdf
                = (albedo / pi) * cos_theta / (cos_theta / pi)
                = albedo

Example:
    >>> import numpy as np
    >>> from cpu_raytracer.materials.lambertian import Lambertian
    >>> material = Lambertian(Vec3(0.8, 0.3, 0.3))
    >>> # record = material.scatter(ray, rec, np.random.default_rng(0))
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from cpu_raytracer.core.ray import RandomSource, Ray, near_zero, random_unit_vector
from cpu_raytracer.core.vec3 import Color, Vec3
from cpu_raytracer.materials.material import Material, ScatterRecord, validate_albedo

if TYPE_CHECKING:
    from cpu_raytracer.geometry.hittable import HitRecord


class Lambertian(Material):
    """Lambertian (ideal diffuse) material.

    Attributes:
        albedo: The diffuse reflectance color (RGB, each component in [0, 1]).
            Represents the fraction of light reflected for each color channel.
    """

    def __init__(self, albedo: Color | tuple[float, float, float]) -> None:
        """Create a diffuse material.

        Raises:
            ValueError: If any albedo component is outside [0, 1].
        """
        self.albedo = Vec3.from_tuple(albedo)
        validate_albedo(self.albedo)

    def __repr__(self) -> str:
        return f"Lambertian(albedo={self.albedo!r})"

    def scatter(self, ray_in: Ray, rec: HitRecord, rng: RandomSource) -> ScatterRecord:
        """Scatter around the normal. Diffuse surfaces always scatter."""
        scatter_direction = rec.normal + random_unit_vector(rng)

        # The random unit vector can cancel the normal almost exactly
        if near_zero(scatter_direction):
            scatter_direction = rec.normal

        return ScatterRecord(
            attenuation=self.albedo,
            scattered=Ray(rec.point, scatter_direction, ray_in.time),
        )
