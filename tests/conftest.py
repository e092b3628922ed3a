"""Pytest configuration for raytracer tests.

This module provides shared fixtures for all test modules: seeded random
generators, deterministic stand-in random sources, and small scenes.
"""

from __future__ import annotations

import itertools
from collections.abc import Iterable

import numpy as np
import pytest

from cpu_raytracer.core.vec3 import Color, Point3
from cpu_raytracer.geometry.sphere import Sphere
from cpu_raytracer.materials.lambertian import Lambertian
from cpu_raytracer.scene.intersection import Scene


class ConstantRandom:
    """Random source that always returns the same value.

    With 0.5 every pixel jitter is zero, so camera rays pass exactly
    through pixel centers.
    """

    def __init__(self, value: float = 0.5) -> None:
        self.value = value
        self.calls = 0

    def random(self) -> float:
        self.calls += 1
        return self.value


class SequenceRandom:
    """Random source that cycles through a fixed list of values."""

    def __init__(self, values: Iterable[float]) -> None:
        self._values = itertools.cycle(list(values))

    def random(self) -> float:
        return next(self._values)


@pytest.fixture
def rng():
    """A seeded NumPy generator."""
    return np.random.default_rng(42)


@pytest.fixture
def constant_rng():
    """A random source fixed at 0.5 (no jitter)."""
    return ConstantRandom(0.5)


@pytest.fixture
def sequence_rng():
    """Factory for random sources that replay a list of values."""
    return SequenceRandom


@pytest.fixture
def gray_diffuse():
    return Lambertian(Color(0.5, 0.5, 0.5))


@pytest.fixture
def single_sphere_scene(gray_diffuse):
    """A single diffuse sphere of radius 0.5 centered at (0, 0, -1)."""
    scene = Scene()
    scene.add(Sphere(Point3(0.0, 0.0, -1.0), 0.5, gray_diffuse))
    return scene
