"""Scene-level ray intersection testing.

The Scene is an insertion-ordered container of hittables that is itself a
hittable. A query tests every member and returns the closest hit along the
ray, shrinking the search interval each time a nearer surface is found so
that farther objects can never override a nearer one.

Example:
    >>> from cpu_raytracer.geometry import Sphere
    >>> from cpu_raytracer.materials import Lambertian
    >>> diffuse = Lambertian((0.5, 0.5, 0.5))
    >>> scene = Scene()
    >>> scene.add(Sphere((0, 0, -1), 0.5, diffuse))
    >>> scene.add(Sphere((0, -100.5, -1), 100, diffuse))
    >>> rec = scene.hit(ray, Interval(0.001, math.inf))
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from cpu_raytracer.core.interval import Interval
from cpu_raytracer.core.ray import Ray
from cpu_raytracer.geometry.hittable import HitRecord, Hittable


class Scene(Hittable):
    """A composite of hittables queried as a single surface."""

    def __init__(self, objects: Iterable[Hittable] = ()) -> None:
        self._objects: list[Hittable] = list(objects)

    def add(self, obj: Hittable) -> int:
        """Add an object to the scene.

        Returns:
            The index of the added object.
        """
        self._objects.append(obj)
        return len(self._objects) - 1

    def clear(self) -> None:
        """Remove all objects from the scene."""
        self._objects.clear()

    @property
    def objects(self) -> tuple[Hittable, ...]:
        return tuple(self._objects)

    def __len__(self) -> int:
        return len(self._objects)

    def __iter__(self) -> Iterator[Hittable]:
        return iter(self._objects)

    def __repr__(self) -> str:
        return f"Scene(objects={len(self._objects)})"

    def hit(self, ray: Ray, ray_t: Interval) -> HitRecord | None:
        """Test ray against all objects and return the closest hit.

        Args:
            ray: The ray to trace.
            ray_t: Interval of acceptable ray parameters.

        Returns:
            The record of the closest intersection, or None on a miss.
        """
        closest = None
        search = ray_t

        for obj in self._objects:
            rec = obj.hit(ray, search)
            if rec is not None:
                closest = rec
                search = search.with_max(rec.t)

        return closest
