"""Axis-aligned rectangle vs. circle overlap."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle, (x, y) is the top-left corner."""

    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height


@dataclass(frozen=True)
class Circle:
    """Circle by center and radius."""

    x: float
    y: float
    radius: float


def clamp(value: float, low: float, high: float) -> float:
    """Clamp value into [low, high]."""
    return max(low, min(high, value))


def rect_circle_overlap(rect: Rect, circle: Circle) -> bool:
    """Check whether a circle overlaps a rectangle.

    The circle center is clamped into the rectangle to find the nearest
    rectangle point. Touching exactly at the radius is not an overlap.
    """
    closest_x = clamp(circle.x, rect.x, rect.right)
    closest_y = clamp(circle.y, rect.y, rect.bottom)
    dx = circle.x - closest_x
    dy = circle.y - closest_y
    return dx * dx + dy * dy < circle.radius * circle.radius
