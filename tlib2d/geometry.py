"""Small 2D value types: vectors, axis-aligned rectangles and circles."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator, Union

Number = Union[int, float]


def _round_half_away(value: float) -> float:
    return math.copysign(math.floor(abs(value) + 0.5), value)


@dataclass(frozen=True)
class Vec2:
    """An immutable 2D vector."""

    x: float = 0.0
    y: float = 0.0

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y

    def __add__(self, other: Vec2) -> Vec2:
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vec2) -> Vec2:
        return Vec2(self.x - other.x, self.y - other.y)

    def __neg__(self) -> Vec2:
        return Vec2(-self.x, -self.y)

    def __mul__(self, other: Union[Vec2, Number]) -> Vec2:
        if isinstance(other, Vec2):
            return Vec2(self.x * other.x, self.y * other.y)
        return Vec2(self.x * other, self.y * other)

    __rmul__ = __mul__

    def __truediv__(self, other: Union[Vec2, Number]) -> Vec2:
        if isinstance(other, Vec2):
            return Vec2(self.x / other.x, self.y / other.y)
        return Vec2(self.x / other, self.y / other)

    def rotated(self, radians: float) -> Vec2:
        """Return this vector rotated counter-clockwise by ``radians``."""
        s, c = math.sin(radians), math.cos(radians)
        return Vec2(self.x * c - self.y * s, self.x * s + self.y * c)

    def reflect(self, normal: Vec2) -> Vec2:
        """Mirror this vector across the line through the origin along ``normal``."""
        length_sq = normal.x * normal.x + normal.y * normal.y
        if length_sq == 0:
            raise ValueError("cannot reflect across a zero-length vector")
        scale = 2.0 * (self.x * normal.x + self.y * normal.y) / length_sq
        return Vec2(normal.x * scale - self.x, normal.y * scale - self.y)

    def rounded(self) -> Vec2:
        """Round each component to the nearest whole number, halves away from zero."""
        return Vec2(_round_half_away(self.x), _round_half_away(self.y))

    def distance_to(self, other: Vec2) -> float:
        return math.sqrt(self.distance_to_squared(other))

    def distance_to_squared(self, other: Vec2) -> float:
        dx, dy = other.x - self.x, other.y - self.y
        return dx * dx + dy * dy


@dataclass
class Circle:
    """A circle given by its centre and radius."""

    x: float = 0.0
    y: float = 0.0
    radius: float = 0.0


@dataclass
class Rect:
    """An axis-aligned rectangle given by its top-left corner and size."""

    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0

    @classmethod
    def from_ltrb(cls, left_top: Vec2, right_bottom: Vec2) -> Rect:
        """Build a rectangle from its top-left and bottom-right corners."""
        return cls(
            left_top.x,
            left_top.y,
            right_bottom.x - left_top.x,
            right_bottom.y - left_top.y,
        )

    def pos(self) -> Vec2:
        return Vec2(self.x, self.y)

    def size(self) -> Vec2:
        return Vec2(self.width, self.height)

    def right(self) -> float:
        return self.x + self.width

    def bottom(self) -> float:
        return self.y + self.height

    def center(self) -> Vec2:
        return Vec2(self.x + self.width / 2, self.y + self.height / 2)

    def contains(self, point: Vec2) -> bool:
        """True if ``point`` lies inside; the right and bottom edges are excluded."""
        return self.x <= point.x < self.right() and self.y <= point.y < self.bottom()

    def intersects_circle(self, circle: Circle) -> bool:
        """True if the circle touches or overlaps this rectangle."""
        nearest_x = min(max(circle.x, self.x), self.right())
        nearest_y = min(max(circle.y, self.y), self.bottom())
        dx, dy = circle.x - nearest_x, circle.y - nearest_y
        return dx * dx + dy * dy <= circle.radius * circle.radius