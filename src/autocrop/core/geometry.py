"""Integer points and rectangles in raster coordinates.

Rectangles follow the usual raster convention: ``min`` is inclusive and
``max`` is exclusive on both axes. A rectangle whose ``min`` is not
strictly below ``max`` on either axis is empty.
"""

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Point:
    """A 2D integer coordinate or direction vector."""

    x: int
    y: int

    def __add__(self, other: "Point") -> "Point":
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Point") -> "Point":
        return Point(self.x - other.x, self.y - other.y)

    def transpose(self) -> "Point":
        """Swap the axes, turning a travel direction into its sweep direction."""
        return Point(self.y, self.x)

    def is_backward(self) -> bool:
        """True for vectors pointing towards lower coordinates."""
        return self.x < 0 or self.y < 0


# Directions of border advance.
RIGHTWARD = Point(1, 0)
LEFTWARD = Point(-1, 0)
DOWNWARD = Point(0, 1)
UPWARD = Point(0, -1)

DIRECTIONS = (RIGHTWARD, LEFTWARD, DOWNWARD, UPWARD)


@dataclass(frozen=True)
class Rectangle:
    """Axis-aligned integer rectangle, min inclusive and max exclusive."""

    min: Point
    max: Point

    @classmethod
    def from_coords(cls, x0: int, y0: int, x1: int, y1: int) -> "Rectangle":
        return cls(Point(x0, y0), Point(x1, y1))

    @classmethod
    def from_shape(cls, height: int, width: int, origin: Point = Point(0, 0)) -> "Rectangle":
        """Build the bounds of an ``height x width`` array placed at ``origin``."""
        return cls(origin, Point(origin.x + width, origin.y + height))

    @property
    def width(self) -> int:
        return self.max.x - self.min.x

    @property
    def height(self) -> int:
        return self.max.y - self.min.y

    @property
    def area(self) -> int:
        if self.empty:
            return 0
        return self.width * self.height

    @property
    def empty(self) -> bool:
        return self.min.x >= self.max.x or self.min.y >= self.max.y

    def contains(self, point: Point) -> bool:
        return (self.min.x <= point.x < self.max.x
                and self.min.y <= point.y < self.max.y)

    def intersect(self, other: "Rectangle") -> "Rectangle":
        """Return the overlap of two rectangles (possibly empty)."""
        return Rectangle(
            Point(max(self.min.x, other.min.x), max(self.min.y, other.min.y)),
            Point(min(self.max.x, other.max.x), min(self.max.y, other.max.y)),
        )

    def is_within(self, other: "Rectangle") -> bool:
        """True if this rectangle lies entirely inside ``other``."""
        if self.empty:
            return True
        return self.intersect(other) == self

    def as_tuple(self) -> Tuple[int, int, int, int]:
        """Return ``(x0, y0, x1, y1)``."""
        return (self.min.x, self.min.y, self.max.x, self.max.y)

    def __str__(self) -> str:
        return f"({self.min.x},{self.min.y})-({self.max.x},{self.max.y})"
