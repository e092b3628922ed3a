"""Scene module for scene containers and demo scenes.

Components:
    intersection: Scene container with closest-hit queries
    presets: Ready-made scenes paired with camera configurations
"""

from .intersection import Scene
from .presets import (
    SCENES,
    create_random_spheres_scene,
    create_three_spheres_scene,
)

__all__ = [
    "Scene",
    "SCENES",
    "create_three_spheres_scene",
    "create_random_spheres_scene",
]
