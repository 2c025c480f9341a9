"""Core geometric value types.

This module defines the fundamental geometric types used throughout speechbubble:
- Point: A 2D point (also used as a vector)
- Polar: A polar coordinate relative to some origin
- Extents: Axis-aligned min/max reduction of a point set
- Rect: Axis-aligned rectangle given by origin and size
- Intersection: A segment hit together with its distance from the segment start

Coordinates follow SVG conventions: x grows to the right, y grows downwards.
"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class Point:
    """A point in 2D space.

    Immutable and hashable for use in sets/dicts. Vectors share this type;
    a vector is simply the difference of two points.

    Attributes:
        x: X coordinate
        y: Y coordinate
    """

    x: float
    y: float

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple.

        Returns:
            Tuple of (x, y) coordinates
        """
        return (self.x, self.y)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC.

        Returns:
            Dictionary with x and y fields
        """
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Point":
        """Deserialize from dictionary.

        Args:
            data: Dictionary with x and y fields

        Returns:
            Point instance
        """
        return cls(x=float(data["x"]), y=float(data["y"]))


Segment = tuple[Point, Point]


@dataclass(frozen=True, slots=True)
class Polar:
    """A polar coordinate.

    Angles are in degrees, 0 pointing "up" (towards negative y) and
    increasing clockwise on screen.

    Attributes:
        angle: Angle in degrees
        radius: Distance from the origin
    """

    angle: float
    radius: float


@dataclass(frozen=True, slots=True)
class Extents:
    """Axis-aligned extents of a point set."""

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y


@dataclass(frozen=True, slots=True)
class Rect:
    """Axis-aligned rectangle.

    Attributes:
        x: Left edge
        y: Top edge
        width: Horizontal size
        height: Vertical size
    """

    x: float
    y: float
    width: float
    height: float

    def corners(self) -> list[Point]:
        """Return the four corners clockwise from the top-left corner."""
        return [
            Point(self.x, self.y),
            Point(self.x + self.width, self.y),
            Point(self.x + self.width, self.y + self.height),
            Point(self.x, self.y + self.height),
        ]

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC."""
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Rect":
        """Deserialize from dictionary."""
        return cls(
            x=data["x"],
            y=data["y"],
            width=data["width"],
            height=data["height"],
        )


@dataclass(frozen=True, slots=True)
class Intersection:
    """A point where a segment crosses a polygon edge.

    Attributes:
        point: Location of the crossing
        distance: Distance from the probing segment's first endpoint
    """

    point: Point
    distance: float
