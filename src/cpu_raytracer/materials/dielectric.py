"""Dielectric (glass/water) material implementation.

This module implements transparent materials like glass and water with
refraction and Fresnel reflectance.

Key physics:
    - Snell's law for refraction: n1 * sin(theta1) = n2 * sin(theta2)
    - Schlick's approximation for Fresnel reflectance
    - Total internal reflection when sin(theta_t) > 1

The material randomly chooses between reflection and refraction based on
the Fresnel reflectance probability, which increases at grazing angles.

Example:
    >>> glass = Dielectric(1.5)
    >>> bubble = Dielectric(1.0 / 1.33)  # air pocket inside water
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from cpu_raytracer.core.ray import (
    RandomSource,
    Ray,
    dot,
    normalize,
    reflect,
    refract,
    schlick_fresnel,
)
from cpu_raytracer.core.vec3 import Color, Vec3
from cpu_raytracer.materials.material import Material, ScatterRecord

if TYPE_CHECKING:
    from cpu_raytracer.geometry.hittable import HitRecord

# Clear dielectrics absorb nothing
WHITE = Color(1.0, 1.0, 1.0)


def refraction_ratio(refraction_index: float, front_face: bool) -> float:
    """Return n_incident / n_transmitted for a ray hitting the surface.

    Entering from outside (front face) goes from air into the material;
    otherwise the ray is leaving the material.
    """
    return 1.0 / refraction_index if front_face else refraction_index


def will_reflect(
    refraction_index: float,
    incident_direction: Vec3,
    normal: Vec3,
    front_face: bool,
) -> bool:
    """Determine if total internal reflection will occur.

    Args:
        refraction_index: Index of refraction of the material.
        incident_direction: The incoming ray direction (normalized).
        normal: The surface normal facing against the ray.
        front_face: True if the ray hits the outside of the surface.

    Returns:
        True if refraction is impossible.
    """
    ratio = refraction_ratio(refraction_index, front_face)
    cos_theta = min(dot(-incident_direction, normal), 1.0)
    sin_theta = math.sqrt(1.0 - cos_theta * cos_theta)
    return ratio * sin_theta > 1.0


class Dielectric(Material):
    """Dielectric (glass/water) material.

    Attributes:
        refraction_index: Index of refraction relative to the enclosing
            medium. Common values:
            - Water: 1.33
            - Glass: 1.5
            - Diamond: 2.4
            Values below 1 model a less dense pocket (e.g. air in water).
    """

    def __init__(self, refraction_index: float = 1.5) -> None:
        """Create a dielectric material.

        Raises:
            ValueError: If the refraction index is not positive.
        """
        if refraction_index <= 0.0:
            raise ValueError(
                f"Index of refraction = {refraction_index} must be positive."
            )
        self.refraction_index = float(refraction_index)

    def __repr__(self) -> str:
        return f"Dielectric(refraction_index={self.refraction_index!r})"

    def scatter(self, ray_in: Ray, rec: HitRecord, rng: RandomSource) -> ScatterRecord:
        """Reflect or refract. Dielectrics always scatter."""
        ratio = refraction_ratio(self.refraction_index, rec.front_face)

        unit_direction = normalize(ray_in.direction)
        cos_theta = min(dot(-unit_direction, rec.normal), 1.0)

        cannot_refract = will_reflect(
            self.refraction_index, unit_direction, rec.normal, rec.front_face
        )
        if cannot_refract or schlick_fresnel(cos_theta, ratio) > rng.random():
            direction = reflect(unit_direction, rec.normal)
        else:
            direction = refract(unit_direction, rec.normal, ratio)

        return ScatterRecord(
            attenuation=WHITE,
            scattered=Ray(rec.point, direction, ray_in.time),
        )
