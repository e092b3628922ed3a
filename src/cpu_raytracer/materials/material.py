"""Base material interface.

A material decides what happens to a ray that strikes a surface: it is
either absorbed, or scattered into a new ray with a color attenuation.
Materials hold no per-call state and may be shared by any number of
primitives and render threads.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

from cpu_raytracer.core.ray import RandomSource, Ray
from cpu_raytracer.core.vec3 import Color

if TYPE_CHECKING:
    from cpu_raytracer.geometry.hittable import HitRecord


@dataclass
class ScatterRecord:
    """Result of a successful scatter.

    Attributes:
        attenuation: Per-channel fraction of light carried by the new ray.
        scattered: The outgoing ray.
    """

    attenuation: Color
    scattered: Ray


class Material(ABC):
    """Abstract surface scattering model."""

    @abstractmethod
    def scatter(self, ray_in: Ray, rec: HitRecord, rng: RandomSource) -> ScatterRecord | None:
        """Scatter an incoming ray at a hit point.

        Args:
            ray_in: The incoming ray.
            rec: The intersection record for the hit.
            rng: Random source owned by the calling render worker.

        Returns:
            A ScatterRecord, or None if the ray is absorbed.
        """


def validate_albedo(albedo: Color) -> None:
    """Reject albedo colors outside [0, 1].

    Raises:
        ValueError: If any component is outside [0, 1].
    """
    for i, component in enumerate(albedo):
        if component < 0.0 or component > 1.0:
            raise ValueError(
                f"Albedo component {i} = {component} is outside [0, 1]. "
                "This would violate energy conservation."
            )
