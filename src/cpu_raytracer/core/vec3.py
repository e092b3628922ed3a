"""Three-component vector used for points, directions and colors.

Vec3 is a small immutable-by-convention value type. Every arithmetic
operator returns a new vector, so instances can be shared freely between
worker threads.

Multiplying two vectors is component-wise (the Hadamard product), which is
how material attenuation is applied to an incoming color.

Example:
    >>> a = Vec3(1.0, 2.0, 3.0)
    >>> b = Vec3(0.5, 0.5, 0.5)
    >>> a + b
    Vec3(1.5, 2.5, 3.5)
    >>> a * b
    Vec3(0.5, 1.0, 1.5)
"""

from __future__ import annotations

import math
from collections.abc import Iterator


class Vec3:
    """A 3D vector of floats.

    Attributes:
        x: First component (red when used as a color).
        y: Second component (green when used as a color).
        z: Third component (blue when used as a color).
    """

    __slots__ = ("x", "y", "z")

    def __init__(self, x: float = 0.0, y: float = 0.0, z: float = 0.0) -> None:
        self.x = float(x)
        self.y = float(y)
        self.z = float(z)

    @classmethod
    def from_tuple(cls, values: tuple[float, float, float] | Vec3) -> Vec3:
        """Build a vector from a 3-tuple (vectors are returned unchanged)."""
        if isinstance(values, Vec3):
            return values
        x, y, z = values
        return cls(x, y, z)

    def __add__(self, other: Vec3) -> Vec3:
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vec3) -> Vec3:
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> Vec3:
        return Vec3(-self.x, -self.y, -self.z)

    def __mul__(self, other: Vec3 | float) -> Vec3:
        if isinstance(other, Vec3):
            return Vec3(self.x * other.x, self.y * other.y, self.z * other.z)
        return Vec3(self.x * other, self.y * other, self.z * other)

    def __rmul__(self, other: float) -> Vec3:
        return Vec3(self.x * other, self.y * other, self.z * other)

    def __truediv__(self, t: float) -> Vec3:
        inv = 1.0 / t
        return Vec3(self.x * inv, self.y * inv, self.z * inv)

    def __getitem__(self, index: int) -> float:
        return (self.x, self.y, self.z)[index]

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vec3):
            return NotImplemented
        return self.x == other.x and self.y == other.y and self.z == other.z

    def __hash__(self) -> int:
        return hash((self.x, self.y, self.z))

    def __repr__(self) -> str:
        return f"Vec3({self.x!r}, {self.y!r}, {self.z!r})"

    def length_squared(self) -> float:
        return self.x * self.x + self.y * self.y + self.z * self.z

    def length(self) -> float:
        return math.sqrt(self.length_squared())

    def to_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)


# Aliases used where a vector plays a specific role
Point3 = Vec3
Color = Vec3
