"""Path tracing integrator for Monte Carlo light transport.

This module estimates the color carried back along a single camera ray.
Rays bounce through the scene according to material scattering until they
escape to the sky, are absorbed, or run out of bounces.

The sky gradient is the only light source: a blend from white at the
horizon to sky blue overhead, based on the ray's vertical direction.

The estimator is written as a loop that carries the running product of
attenuations (the path throughput). It returns exactly what the recursive
form returns:

    ray_color(r, d) = 0                                  if d <= 0
                    = sky(r)                             if r misses
                    = 0                                  if absorbed
                    = attenuation * ray_color(r', d - 1) otherwise

Example:
    >>> import numpy as np
    >>> rng = np.random.default_rng(0)
    >>> color = ray_color(ray, 10, scene, rng)
"""

from __future__ import annotations

import math

from cpu_raytracer.core.interval import Interval
from cpu_raytracer.core.ray import RandomSource, Ray, normalize
from cpu_raytracer.core.vec3 import Color
from cpu_raytracer.geometry.hittable import Hittable

# =============================================================================
# Rendering Constants
# =============================================================================

# Minimum hit distance, excludes self-intersection at the ray origin
T_MIN = 0.001

BLACK = Color(0.0, 0.0, 0.0)
WHITE = Color(1.0, 1.0, 1.0)
SKY_BLUE = Color(0.5, 0.7, 1.0)


def background(ray: Ray) -> Color:
    """Sky gradient seen by rays that escape the scene.

    Linearly interpolates between white and sky blue based on the
    normalized ray direction's y component.
    """
    unit_direction = normalize(ray.direction)
    a = 0.5 * (unit_direction.y + 1.0)
    return (1.0 - a) * WHITE + a * SKY_BLUE


def ray_color(
    ray: Ray,
    depth: int,
    world: Hittable,
    rng: RandomSource,
    epsilon: float = T_MIN,
) -> Color:
    """Estimate the color arriving along a ray.

    Args:
        ray: The ray to trace.
        depth: Maximum number of surface interactions. Values <= 0
            contribute no light.
        world: The scene to intersect.
        rng: Random source owned by the calling render worker.
        epsilon: Lower bound for valid hit distances.

    Returns:
        The estimated linear color.
    """
    throughput = WHITE
    ray_t = Interval(epsilon, math.inf)

    for _ in range(depth):
        rec = world.hit(ray, ray_t)
        if rec is None:
            return throughput * background(ray)

        scatter = rec.material.scatter(ray, rec, rng)
        if scatter is None:
            return BLACK

        throughput = throughput * scatter.attenuation
        ray = scatter.scattered

    # Path exhausted
    return BLACK
