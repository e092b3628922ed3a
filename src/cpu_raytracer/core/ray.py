"""Ray data structure and vector utilities for CPU ray tracing.

This module provides the fundamental Ray dataclass and the vector utility
functions used throughout the renderer: dot/cross products, normalization,
reflection, refraction, Fresnel reflectance, and random sampling for Monte
Carlo scattering.

Random sampling functions never touch global state. Each takes an explicit
generator (anything with a ``random()`` method returning a float in
[0, 1), normally a ``numpy.random.Generator``) so that every render worker
can own its own stream.

Example:
    >>> import numpy as np
    >>> origin = Vec3(0.0, 0.0, 0.0)
    >>> direction = Vec3(0.0, 0.0, -1.0)
    >>> ray = Ray(origin=origin, direction=direction)
    >>> point = ray.at(5.0)  # Point 5 units along the ray
    >>> rng = np.random.default_rng(42)
    >>> d = random_unit_vector(rng)
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Protocol

from cpu_raytracer.core.vec3 import Vec3


class RandomSource(Protocol):
    """Anything that yields uniform floats in [0, 1) from ``random()``."""

    def random(self) -> float: ...


@dataclass
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray.
        direction: The direction vector of the ray. Not required to be
            normalized.
        time: Sample time in [0, 1). Carried through scattering for motion
            blur; static geometry ignores it.
    """

    origin: Vec3
    direction: Vec3
    time: float = 0.0

    def at(self, t: float) -> Vec3:
        """Return origin + t * direction (t may be negative)."""
        return self.origin + t * self.direction


# =============================================================================
# Vector Utility Functions
# =============================================================================


def normalize(v: Vec3) -> Vec3:
    """Normalize a vector to unit length.

    The caller must guarantee a non-zero length; a zero vector raises
    ZeroDivisionError.
    """
    return v / v.length()


def dot(a: Vec3, b: Vec3) -> float:
    """Compute the dot product a . b."""
    return a.x * b.x + a.y * b.y + a.z * b.z


def cross(a: Vec3, b: Vec3) -> Vec3:
    """Compute the cross product a x b."""
    return Vec3(
        a.y * b.z - a.z * b.y,
        a.z * b.x - a.x * b.z,
        a.x * b.y - a.y * b.x,
    )


def reflect(incident: Vec3, normal: Vec3) -> Vec3:
    """Reflect an incident vector about a normal.

    The normal should be unit length for correct results.

    Args:
        incident: The incoming direction vector (pointing toward the surface).
        normal: The surface normal.

    Returns:
        The reflected direction vector I - 2(I . N)N.
    """
    return incident - 2.0 * dot(incident, normal) * normal


def refract(incident: Vec3, normal: Vec3, eta: float) -> Vec3:
    """Refract a unit incident vector through a surface using Snell's law.

    The caller is responsible for ruling out total internal reflection
    first (see ``Dielectric.scatter``).

    Args:
        incident: The incoming direction vector (normalized).
        normal: The surface normal facing against the incident ray.
        eta: The ratio of refractive indices (n_incident / n_transmitted).

    Returns:
        The refracted direction vector.
    """
    cos_theta = min(dot(-incident, normal), 1.0)
    r_out_perp = eta * (incident + cos_theta * normal)
    r_out_parallel = -math.sqrt(abs(1.0 - r_out_perp.length_squared())) * normal
    return r_out_perp + r_out_parallel


def schlick_fresnel(cosine: float, ref_idx: float) -> float:
    """Compute Fresnel reflectance using Schlick's approximation.

    Args:
        cosine: Cosine of the angle between incident direction and normal.
        ref_idx: Ratio of refractive indices.

    Returns:
        The approximate Fresnel reflectance coefficient.
    """
    r0 = ((1.0 - ref_idx) / (1.0 + ref_idx)) ** 2
    return r0 + (1.0 - r0) * ((1.0 - cosine) ** 5)


def near_zero(v: Vec3) -> bool:
    """Check if a vector is near zero in all components.

    Used to catch degenerate scatter directions.
    """
    s = 1e-8
    return abs(v.x) < s and abs(v.y) < s and abs(v.z) < s


# =============================================================================
# Random Sampling Utilities for Monte Carlo
# =============================================================================


def random_double(rng: RandomSource, lo: float = 0.0, hi: float = 1.0) -> float:
    """Return a uniform float in [lo, hi)."""
    return lo + (hi - lo) * rng.random()


def random_vec3(rng: RandomSource, lo: float = 0.0, hi: float = 1.0) -> Vec3:
    """Return a vector with each component uniform in [lo, hi)."""
    return Vec3(
        random_double(rng, lo, hi),
        random_double(rng, lo, hi),
        random_double(rng, lo, hi),
    )


def random_in_unit_sphere(rng: RandomSource) -> Vec3:
    """Generate a random point inside the unit sphere.

    Uses rejection sampling to generate uniformly distributed points.

    Returns:
        A random point with length < 1.
    """
    while True:
        p = random_vec3(rng, -1.0, 1.0)
        if p.length_squared() < 1.0:
            return p


def random_unit_vector(rng: RandomSource) -> Vec3:
    """Generate a random unit vector uniformly distributed on the sphere.

    Points too close to the origin are rejected so normalization never
    divides by (nearly) zero.
    """
    while True:
        p = random_vec3(rng, -1.0, 1.0)
        lensq = p.length_squared()
        if 1e-160 < lensq < 1.0:
            return p / math.sqrt(lensq)


def random_in_unit_disk(rng: RandomSource) -> Vec3:
    """Generate a random point inside the unit disk in the xy-plane.

    Used for depth-of-field lens sampling.

    Returns:
        A random point (x, y, 0) with x^2 + y^2 < 1.
    """
    while True:
        p = Vec3(random_double(rng, -1.0, 1.0), random_double(rng, -1.0, 1.0), 0.0)
        if p.length_squared() < 1.0:
            return p
