"""Unit tests for the dielectric material module.

Tests cover:
- Refraction ratio for front and back face hits
- Total internal reflection detection
- Reflect/refract choice driven by Schlick reflectance
- Attenuation is always white
- Index of refraction validation
"""

import math

import pytest

from cpu_raytracer.core.ray import Ray
from cpu_raytracer.core.vec3 import Color, Vec3
from cpu_raytracer.geometry.hittable import HitRecord
from cpu_raytracer.materials.dielectric import Dielectric, refraction_ratio, will_reflect

UP = Vec3(0.0, 1.0, 0.0)

SIN_60 = math.sqrt(3.0) / 2.0


def make_record(front_face, material):
    return HitRecord(
        point=Vec3(0.0, 0.0, 0.0),
        normal=UP,
        t=1.0,
        front_face=front_face,
        material=material,
    )


class TestRefractionRatio:
    """Tests for the relative index of refraction."""

    def test_entering(self):
        assert refraction_ratio(1.5, True) == pytest.approx(1.0 / 1.5)

    def test_leaving(self):
        assert refraction_ratio(1.5, False) == 1.5


class TestTotalInternalReflection:
    """Tests for will_reflect."""

    def test_no_tir_entering_glass(self):
        incident = Vec3(SIN_60, -0.5, 0.0)
        assert will_reflect(1.5, incident, UP, True) is False

    def test_tir_leaving_glass_at_60_degrees(self):
        # 1.5 * sin(60) = 1.3 > 1
        incident = Vec3(SIN_60, -0.5, 0.0)
        assert will_reflect(1.5, incident, UP, False) is True

    def test_no_tir_leaving_glass_at_normal_incidence(self):
        assert will_reflect(1.5, Vec3(0.0, -1.0, 0.0), UP, False) is False


class TestDielectricScatter:
    """Tests for the reflect/refract choice."""

    def test_normal_incidence_refracts_straight_through(self, sequence_rng):
        glass = Dielectric(1.5)
        # Reflectance at normal incidence is 0.04, below the draw of 0.5
        result = glass.scatter(
            Ray(Vec3(0.0, 1.0, 0.0), Vec3(0.0, -1.0, 0.0)), make_record(True, glass), sequence_rng([0.5])
        )

        direction = result.scattered.direction
        assert direction.x == pytest.approx(0.0)
        assert direction.y == pytest.approx(-1.0)

    def test_low_draw_reflects(self, sequence_rng):
        glass = Dielectric(1.5)
        result = glass.scatter(
            Ray(Vec3(0.0, 1.0, 0.0), Vec3(0.0, -1.0, 0.0)), make_record(True, glass), sequence_rng([0.0])
        )
        assert result.scattered.direction.y == pytest.approx(1.0)

    def test_total_internal_reflection_always_reflects(self, sequence_rng):
        glass = Dielectric(1.5)
        ray_in = Ray(Vec3(-SIN_60, 0.5, 0.0), Vec3(SIN_60, -0.5, 0.0))

        result = glass.scatter(ray_in, make_record(False, glass), sequence_rng([0.999]))

        direction = result.scattered.direction
        assert direction.x == pytest.approx(SIN_60)
        assert direction.y == pytest.approx(0.5)

    @pytest.mark.parametrize("front_face", [True, False])
    def test_scatter_agrees_with_will_reflect(self, constant_rng, front_face):
        """Total internal reflection reflects without drawing a sample."""
        glass = Dielectric(1.5)
        incident = Vec3(SIN_60, -0.5, 0.0)
        tir = will_reflect(1.5, incident, UP, front_face)

        result = glass.scatter(Ray(Vec3(), incident), make_record(front_face, glass), constant_rng)

        assert (constant_rng.calls == 0) is tir
        if tir:
            assert result.scattered.direction.y == pytest.approx(0.5)

    def test_refracted_ray_bends_toward_normal(self, sequence_rng):
        glass = Dielectric(1.5)
        ray_in = Ray(Vec3(-SIN_60, 0.5, 0.0), Vec3(SIN_60, -0.5, 0.0))

        result = glass.scatter(ray_in, make_record(True, glass), sequence_rng([0.999]))

        direction = result.scattered.direction
        assert direction.y < 0.0
        # sin(theta_t) = sin(60) / 1.5
        assert direction.x == pytest.approx(SIN_60 / 1.5)
        assert direction.length() == pytest.approx(1.0)

    def test_reflection_rate_follows_schlick(self, rng):
        """At normal incidence roughly 4% of samples reflect."""
        glass = Dielectric(1.5)
        ray_in = Ray(Vec3(0.0, 1.0, 0.0), Vec3(0.0, -1.0, 0.0))
        rec = make_record(True, glass)

        n = 5000
        reflected = sum(glass.scatter(ray_in, rec, rng).scattered.direction.y > 0.0 for _ in range(n))

        assert reflected / n == pytest.approx(0.04, abs=0.015)

    def test_attenuation_is_white(self, rng):
        glass = Dielectric(1.5)
        for front_face in (True, False):
            result = glass.scatter(
                Ray(Vec3(0.0, 1.0, 0.0), Vec3(0.3, -1.0, 0.0)), make_record(front_face, glass), rng
            )
            assert result.attenuation == Color(1.0, 1.0, 1.0)

    def test_scattered_from_hit_point_with_time(self, rng):
        glass = Dielectric(1.5)
        rec = HitRecord(point=Vec3(0.5, 0.0, -1.0), normal=UP, t=1.0, front_face=True, material=glass)
        result = glass.scatter(Ray(Vec3(0.5, 1.0, -1.0), Vec3(0.0, -1.0, 0.0), 0.75), rec, rng)
        assert result.scattered.origin == Vec3(0.5, 0.0, -1.0)
        assert result.scattered.time == 0.75


class TestValidation:
    """Tests for constructor validation."""

    @pytest.mark.parametrize("ior", [0.0, -1.5])
    def test_non_positive_index_rejected(self, ior):
        with pytest.raises(ValueError, match="must be positive"):
            Dielectric(ior)

    def test_index_below_one_allowed(self):
        bubble = Dielectric(1.0 / 1.33)
        assert bubble.refraction_index == pytest.approx(0.7519, abs=1e-4)

    def test_default_index(self):
        assert Dielectric().refraction_index == 1.5
