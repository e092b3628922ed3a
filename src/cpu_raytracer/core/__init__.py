"""Core rendering module.

This module contains the fundamental building blocks for ray tracing:

Components:
    vec3: Vector/color value type
    ray: Ray data structure, vector utilities and random sampling
    interval: Real intervals for hit bounds and clamping
    integrator: Path-traced color estimation along a ray
    scheduler: Multithreaded row-partitioned frame rendering
"""

from .interval import EMPTY, UNIVERSE, Interval
from .ray import (
    RandomSource,
    Ray,
    cross,
    dot,
    near_zero,
    normalize,
    random_double,
    random_in_unit_disk,
    random_in_unit_sphere,
    random_unit_vector,
    random_vec3,
    reflect,
    refract,
    schlick_fresnel,
)
from .vec3 import Color, Point3, Vec3

# Note: integrator and scheduler are NOT imported here to avoid circular imports.
# Import directly from cpu_raytracer.core.integrator or cpu_raytracer.core.scheduler.

__all__ = [
    "Vec3",
    "Point3",
    "Color",
    "Interval",
    "EMPTY",
    "UNIVERSE",
    "Ray",
    "RandomSource",
    "normalize",
    "dot",
    "cross",
    "reflect",
    "refract",
    "schlick_fresnel",
    "near_zero",
    "random_double",
    "random_vec3",
    "random_in_unit_sphere",
    "random_unit_vector",
    "random_in_unit_disk",
]
