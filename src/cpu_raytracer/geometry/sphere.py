"""Sphere primitive with ray-sphere intersection.

The ray-sphere intersection is found by solving:
    |origin + t * direction - center|^2 = radius^2

Expanding and rearranging gives the quadratic equation:
    a*t^2 - 2*h*t + c = 0

where:
    a = dot(direction, direction)
    h = dot(direction, oc)
    c = dot(oc, oc) - radius^2
    oc = center - origin

A negative radius keeps the same surface but flips the outward normal,
which turns the sphere into a hollow shell. Nesting a negative-radius
sphere inside a dielectric sphere models a glass bubble.

Example:
    >>> from cpu_raytracer.materials import Lambertian
    >>> sphere = Sphere(Vec3(0, 0, -1), 0.5, Lambertian(Vec3(0.5, 0.5, 0.5)))
    >>> rec = sphere.hit(Ray(Vec3(0, 0, 0), Vec3(0, 0, -1)), Interval(0.001, math.inf))
    >>> rec.t
    0.5
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from cpu_raytracer.core.interval import Interval
from cpu_raytracer.core.ray import Ray, dot
from cpu_raytracer.core.vec3 import Vec3
from cpu_raytracer.geometry.hittable import HitRecord, Hittable

if TYPE_CHECKING:
    from cpu_raytracer.materials.material import Material


class Sphere(Hittable):
    """A sphere defined by center point, radius and material.

    Attributes:
        center: The center point of the sphere.
        radius: The radius. Negative values invert the surface normal.
        material: Shared material reference; never copied per sphere.

    Raises:
        ValueError: If material is None.
    """

    __slots__ = ("center", "radius", "material")

    def __init__(
        self,
        center: Vec3 | tuple[float, float, float],
        radius: float,
        material: Material,
    ) -> None:
        if material is None:
            raise ValueError("Sphere requires a material")
        self.center = Vec3.from_tuple(center)
        self.radius = float(radius)
        self.material = material

    def __repr__(self) -> str:
        return f"Sphere(center={self.center!r}, radius={self.radius!r}, material={self.material!r})"

    def hit(self, ray: Ray, ray_t: Interval) -> HitRecord | None:
        oc = self.center - ray.origin
        a = ray.direction.length_squared()
        h = dot(ray.direction, oc)
        c = oc.length_squared() - self.radius * self.radius

        discriminant = h * h - a * c
        if discriminant < 0.0:
            return None

        sqrt_d = math.sqrt(discriminant)

        # Nearest root first, then the far one
        root = (h - sqrt_d) / a
        if not ray_t.surrounds(root):
            root = (h + sqrt_d) / a
            if not ray_t.surrounds(root):
                return None

        point = ray.at(root)
        outward_normal = (point - self.center) / self.radius
        return HitRecord.from_outward_normal(ray, root, point, outward_normal, self.material)
