"""Real-valued intervals for hit-parameter bounds and color clamping."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Interval:
    """A range [min, max] on the real line.

    An interval with min > max is empty. The default interval is empty.

    Attributes:
        min: Lower bound.
        max: Upper bound.
    """

    min: float = math.inf
    max: float = -math.inf

    def size(self) -> float:
        return self.max - self.min

    def contains(self, x: float) -> bool:
        """Return True if min <= x <= max."""
        return self.min <= x <= self.max

    def surrounds(self, x: float) -> bool:
        """Return True if min < x < max.

        Hit tests use the open form so a ray leaving a surface does not
        re-hit it at its own origin.
        """
        return self.min < x < self.max

    def clamp(self, x: float) -> float:
        if x < self.min:
            return self.min
        if x > self.max:
            return self.max
        return x

    def with_max(self, new_max: float) -> Interval:
        """Return a copy with the upper bound replaced."""
        return Interval(self.min, new_max)


EMPTY = Interval(math.inf, -math.inf)
UNIVERSE = Interval(-math.inf, math.inf)
