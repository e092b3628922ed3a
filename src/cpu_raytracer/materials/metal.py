"""Metal (specular reflective) material implementation.

This module implements specular reflection with optional fuzziness.
Perfect metals (fuzz=0) produce mirror-like reflections, while fuzzier
metals perturb the mirror direction by a random point in a sphere of
radius ``fuzz``.

The reflection formula is:
    R = I - 2(I . N)N

where I is the incident direction and N is the surface normal.

A perturbed direction can end up below the surface. Such rays are
absorbed rather than scattered into the object.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from cpu_raytracer.core.ray import (
    RandomSource,
    Ray,
    dot,
    normalize,
    random_in_unit_sphere,
    reflect,
)
from cpu_raytracer.core.vec3 import Color, Vec3
from cpu_raytracer.materials.material import Material, ScatterRecord, validate_albedo

if TYPE_CHECKING:
    from cpu_raytracer.geometry.hittable import HitRecord


class Metal(Material):
    """Metal (specular reflective) material.

    Attributes:
        albedo: The reflective color (RGB, each component in [0, 1]).
            Represents the color tint of reflected light.
        fuzz: The surface roughness in [0, 1].
            0 = perfect mirror, 1 = maximum fuzziness.
    """

    def __init__(self, albedo: Color | tuple[float, float, float], fuzz: float = 0.0) -> None:
        """Create a metal material.

        Raises:
            ValueError: If any albedo component is outside [0, 1].
            ValueError: If fuzz is outside [0, 1].
        """
        self.albedo = Vec3.from_tuple(albedo)
        validate_albedo(self.albedo)

        if fuzz < 0.0 or fuzz > 1.0:
            raise ValueError(
                f"Fuzz = {fuzz} is outside [0, 1]. "
                "Fuzz must be between 0 (perfect mirror) and 1 (maximum fuzz)."
            )
        self.fuzz = float(fuzz)

    def __repr__(self) -> str:
        return f"Metal(albedo={self.albedo!r}, fuzz={self.fuzz!r})"

    def scatter(self, ray_in: Ray, rec: HitRecord, rng: RandomSource) -> ScatterRecord | None:
        """Reflect about the normal, absorbing rays pushed below the surface."""
        reflected = reflect(normalize(ray_in.direction), rec.normal)
        direction = reflected + self.fuzz * random_in_unit_sphere(rng)

        if dot(direction, rec.normal) <= 0.0:
            return None

        return ScatterRecord(
            attenuation=self.albedo,
            scattered=Ray(rec.point, direction, ray_in.time),
        )
