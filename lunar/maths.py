"""Math utilities for 2D vectors, segments, transforms, and spans."""

from __future__ import annotations

import math
from dataclasses import dataclass
from pygame.math import Vector2 as _Vector2

# Export Vector2 alias
Vector2 = _Vector2


def clamp(value, low, high):
    return max(low, min(high, value))


def wrap_angle(angle: float) -> float:
    """Wrap an angle in radians to [-pi, pi]."""
    return math.remainder(angle, math.tau)


@dataclass(frozen=True)
class Range1D:
    min: float
    max: float

    @classmethod
    def from_center(cls, center: float, radius: float) -> "Range1D":
        return cls(center - radius, center + radius)

    def integer_steps(self) -> range:
        """Integers from floor(min) through floor(max), inclusive."""
        return range(math.floor(self.min), math.floor(self.max) + 1)


@dataclass(frozen=True)
class Segment:
    """Closed line segment between two points."""

    a: Vector2
    b: Vector2

    def bounds(self) -> tuple[float, float, float, float]:
        return (
            min(self.a.x, self.b.x),
            max(self.a.x, self.b.x),
            min(self.a.y, self.b.y),
            max(self.a.y, self.b.y),
        )

    def contains_in_bounds(self, point: Vector2) -> bool:
        min_x, max_x, min_y, max_y = self.bounds()
        return min_x <= point.x <= max_x and min_y <= point.y <= max_y


class RigidTransform2:
    """2D rigid transform (position + counter-clockwise rotation), y-up."""

    def __init__(self, pos: Vector2, angle: float):
        self.pos = Vector2(pos)
        self.angle = angle
        self._cos = math.cos(angle)
        self._sin = math.sin(angle)

    def apply(self, local_point: Vector2) -> Vector2:
        wx = self.pos.x + local_point.x * self._cos - local_point.y * self._sin
        wy = self.pos.y + local_point.x * self._sin + local_point.y * self._cos
        return Vector2(wx, wy)
