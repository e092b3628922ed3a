"""Hit records and the abstract intersectable surface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

from cpu_raytracer.core.interval import Interval
from cpu_raytracer.core.ray import Ray, dot
from cpu_raytracer.core.vec3 import Vec3

if TYPE_CHECKING:
    from cpu_raytracer.materials.material import Material


@dataclass
class HitRecord:
    """Record of a ray-surface intersection.

    Attributes:
        point: The 3D point where the ray intersected the surface.
        normal: The unit surface normal at the hit point. Always points
            against the incoming ray (outward for front face hits).
        t: The ray parameter at the intersection.
        front_face: True if the ray hit the surface from outside.
        material: The material of the surface that was hit.
    """

    point: Vec3
    normal: Vec3
    t: float
    front_face: bool
    material: Material

    @classmethod
    def from_outward_normal(
        cls,
        ray: Ray,
        t: float,
        point: Vec3,
        outward_normal: Vec3,
        material: Material,
    ) -> HitRecord:
        """Build a record, orienting the normal against the ray.

        Args:
            ray: The incoming ray.
            t: The ray parameter of the hit.
            point: The hit point.
            outward_normal: The geometric normal (assumed unit length).
            material: The surface material.
        """
        front_face = dot(ray.direction, outward_normal) < 0.0
        normal = outward_normal if front_face else -outward_normal
        return cls(
            point=point,
            normal=normal,
            t=t,
            front_face=front_face,
            material=material,
        )


class Hittable(ABC):
    """A surface that can be intersected by a ray."""

    @abstractmethod
    def hit(self, ray: Ray, ray_t: Interval) -> HitRecord | None:
        """Return the closest intersection with t strictly inside ray_t.

        Returns:
            A HitRecord, or None if the ray misses within the interval.
        """
