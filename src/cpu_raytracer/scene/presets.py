"""Ready-made demo scenes.

Each factory returns a ``(scene, camera_config)`` pair, ready to pass to
``render_image`` or a ``RenderScheduler``.

Scenes:
    three_spheres: a diffuse sphere between a hollow glass sphere and a
        gold mirror, resting on a large yellow-green ground sphere, viewed
        from above left with a strong defocus blur.
    random_spheres: a field of small randomly placed spheres with random
        materials around three large feature spheres.

Example:
    >>> from cpu_raytracer.scene.presets import create_three_spheres_scene
    >>> scene, config = create_three_spheres_scene()
    >>> config.width = 200
    >>> buffer = render_image(scene, config)
"""

from __future__ import annotations

from collections.abc import Callable

import numpy as np

from cpu_raytracer.camera.thin_lens import CameraConfig
from cpu_raytracer.core.vec3 import Color, Point3
from cpu_raytracer.geometry.sphere import Sphere
from cpu_raytracer.materials.dielectric import Dielectric
from cpu_raytracer.materials.lambertian import Lambertian
from cpu_raytracer.materials.metal import Metal
from cpu_raytracer.scene.intersection import Scene

# Glass index of refraction
GLASS_IOR = 1.5


def create_three_spheres_scene(seed: int | None = None) -> tuple[Scene, CameraConfig]:
    """Create the three-spheres demo scene.

    The left sphere is a glass shell: an outer glass sphere with a
    negative-radius sphere of the same material inside it, so the
    inner surface faces inward. Both spheres share one material instance.

    Args:
        seed: Ignored. The layout is fixed; the parameter matches the other
            factories in SCENES.

    Returns:
        Tuple of (scene, camera_config).
    """
    material_ground = Lambertian(Color(0.8, 0.8, 0.0))
    material_center = Lambertian(Color(0.1, 0.2, 0.5))
    material_left = Dielectric(GLASS_IOR)
    material_right = Metal(Color(0.8, 0.6, 0.2), 0.0)

    scene = Scene()
    scene.add(Sphere(Point3(0.0, -100.5, -1.0), 100.0, material_ground))
    scene.add(Sphere(Point3(0.0, 0.0, -1.0), 0.5, material_center))
    scene.add(Sphere(Point3(-1.0, 0.0, -1.0), 0.5, material_left))
    scene.add(Sphere(Point3(-1.0, 0.0, -1.0), -0.4, material_left))
    scene.add(Sphere(Point3(1.0, 0.0, -1.0), 0.5, material_right))

    config = CameraConfig(
        vfov=20.0,
        lookfrom=(-2.0, 2.0, 1.0),
        lookat=(0.0, 0.0, -1.0),
        vup=(0.0, 1.0, 0.0),
        defocus_angle=10.0,
        focus_dist=3.4,
    )
    return scene, config


def create_random_spheres_scene(seed: int | None = None) -> tuple[Scene, CameraConfig]:
    """Create the random-spheres scene.

    Small spheres are laid out on a jittered 22x22 grid. Each is diffuse
    (80%), metal (15%) or glass (5%). Spheres that would overlap the large
    metal sphere are skipped.

    Args:
        seed: Seed for scene layout. The same seed always yields the same
            scene.

    Returns:
        Tuple of (scene, camera_config).
    """
    rng = np.random.default_rng(seed)
    scene = Scene()

    ground_material = Lambertian(Color(0.5, 0.5, 0.5))
    scene.add(Sphere(Point3(0.0, -1000.0, 0.0), 1000.0, ground_material))

    glass = Dielectric(GLASS_IOR)
    keep_clear = Point3(4.0, 0.2, 0.0)

    for a in range(-11, 11):
        for b in range(-11, 11):
            choose_mat = rng.random()
            center = Point3(a + 0.9 * rng.random(), 0.2, b + 0.9 * rng.random())

            if (center - keep_clear).length() <= 0.9:
                continue

            if choose_mat < 0.8:
                albedo = _random_color(rng.random) * _random_color(rng.random)
                scene.add(Sphere(center, 0.2, Lambertian(albedo)))
            elif choose_mat < 0.95:
                albedo = _random_color(lambda: rng.uniform(0.5, 1.0))
                fuzz = rng.uniform(0.0, 0.5)
                scene.add(Sphere(center, 0.2, Metal(albedo, fuzz)))
            else:
                scene.add(Sphere(center, 0.2, glass))

    scene.add(Sphere(Point3(0.0, 1.0, 0.0), 1.0, glass))
    scene.add(Sphere(Point3(-4.0, 1.0, 0.0), 1.0, Lambertian(Color(0.4, 0.2, 0.1))))
    scene.add(Sphere(Point3(4.0, 1.0, 0.0), 1.0, Metal(Color(0.7, 0.6, 0.5), 0.0)))

    config = CameraConfig(
        aspect_ratio=16.0 / 9.0,
        width=1200,
        samples_per_pixel=500,
        max_depth=50,
        vfov=20.0,
        lookfrom=(13.0, 2.0, 3.0),
        lookat=(0.0, 0.0, 0.0),
        vup=(0.0, 1.0, 0.0),
        defocus_angle=0.6,
        focus_dist=10.0,
    )
    return scene, config


def _random_color(draw: Callable[[], float]) -> Color:
    return Color(draw(), draw(), draw())


SceneFactory = Callable[[int | None], tuple[Scene, CameraConfig]]

# Every factory takes an optional layout seed
SCENES: dict[str, SceneFactory] = {
    "three_spheres": create_three_spheres_scene,
    "random_spheres": create_random_spheres_scene,
}
