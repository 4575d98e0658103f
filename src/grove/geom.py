from __future__ import annotations

"""Plain 2D value types for board-space geometry.

Board space has its origin in the top-left corner with y growing downwards,
matching raylib screen space, so `to_rl()` needs no flips.
"""

from dataclasses import dataclass
import math
from typing import TYPE_CHECKING, Iterable

from .math import clamp, clamp_inset

if TYPE_CHECKING:
    import pyray as rl


@dataclass(slots=True, frozen=True)
class Vec2:
    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Vec2) -> Vec2:
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vec2) -> Vec2:
        return Vec2(self.x - other.x, self.y - other.y)

    def __mul__(self, factor: float) -> Vec2:
        return Vec2(self.x * factor, self.y * factor)

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def distance_to(self, other: Vec2) -> float:
        return math.hypot(other.x - self.x, other.y - self.y)

    def direction_to(self, other: Vec2, *, epsilon: float = 1e-6) -> Vec2:
        """Unit vector towards `other`; the zero vector when the points coincide."""
        dx = other.x - self.x
        dy = other.y - self.y
        span = math.hypot(dx, dy)
        if span <= epsilon:
            return Vec2()
        return Vec2(dx / span, dy / span)

    def with_x(self, x: float) -> Vec2:
        return Vec2(float(x), self.y)

    def with_y(self, y: float) -> Vec2:
        return Vec2(self.x, float(y))

    def clamp_inside(self, width: float, height: float, *, inset: float = 0.0) -> Vec2:
        """Clamp into a `width x height` board, keeping `inset` away from every edge."""
        return Vec2(clamp_inset(self.x, inset, width), clamp_inset(self.y, inset, height))

    def offset(self, dx: float = 0.0, dy: float = 0.0) -> Vec2:
        return Vec2(self.x + dx, self.y + dy)

    def to_rl(self) -> rl.Vector2:
        import pyray as rl

        return rl.Vector2(self.x, self.y)


@dataclass(slots=True, frozen=True)
class Rect:
    """Axis-aligned rectangle given by its top-left corner and size."""

    x: float = 0.0
    y: float = 0.0
    w: float = 0.0
    h: float = 0.0

    @property
    def right(self) -> float:
        return self.x + self.w

    @property
    def bottom(self) -> float:
        return self.y + self.h

    def contains(self, point: Vec2) -> bool:
        return self.x <= point.x <= self.right and self.y <= point.y <= self.bottom

    def closest_point(self, point: Vec2) -> Vec2:
        return Vec2(clamp(point.x, self.x, self.right), clamp(point.y, self.y, self.bottom))

    def overlaps_circle(self, center: Vec2, radius: float) -> bool:
        """Closest-point test; a circle that only touches the edge counts as overlapping."""
        nearest = self.closest_point(center)
        dx = center.x - nearest.x
        dy = center.y - nearest.y
        return dx * dx + dy * dy <= radius * radius

    def offset(self, dx: float = 0.0, dy: float = 0.0) -> Rect:
        return Rect(self.x + dx, self.y + dy, self.w, self.h)

    def to_rl(self) -> rl.Rectangle:
        import pyray as rl

        return rl.Rectangle(self.x, self.y, self.w, self.h)


def circle_overlaps_any(center: Vec2, radius: float, rects: Iterable[Rect]) -> bool:
    return any(rect.overlaps_circle(center, radius) for rect in rects)


def circles_overlap(a: Vec2, radius_a: float, b: Vec2, radius_b: float, *, margin: float = 0.0) -> bool:
    """True when the centers are closer than the summed radii minus `margin`."""
    reach = float(radius_a) + float(radius_b) - float(margin)
    if reach <= 0.0:
        return False
    dx = b.x - a.x
    dy = b.y - a.y
    return dx * dx + dy * dy < reach * reach
