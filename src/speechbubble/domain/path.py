"""Path directives: a serializable intermediate form between geometry and SVG.

Each directive is a small frozen dataclass tagged with its SVG command letter.
`to_path` joins a directive list into an SVG path `d` string.
"""

from dataclasses import dataclass
from typing import Any, ClassVar, Union

from speechbubble.domain.geometry import Point


def _fmt(point: Point) -> str:
    return f"{point.x:.2f},{point.y:.2f}"


@dataclass(frozen=True, slots=True)
class MoveTo:
    """Start a new subpath at `point`."""

    type: ClassVar[str] = "M"

    point: Point

    def to_svg(self) -> str:
        return f"M{_fmt(self.point)}"

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "point": self.point.to_dict()}


@dataclass(frozen=True, slots=True)
class LineTo:
    """Straight line to `point`."""

    type: ClassVar[str] = "L"

    point: Point

    def to_svg(self) -> str:
        return f"L{_fmt(self.point)}"

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "point": self.point.to_dict()}


@dataclass(frozen=True, slots=True)
class CurveTo:
    """Cubic Bezier to `end` using two control points."""

    type: ClassVar[str] = "C"

    control1: Point
    control2: Point
    end: Point

    def to_svg(self) -> str:
        return f"C{_fmt(self.control1)} {_fmt(self.control2)} {_fmt(self.end)}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "points": [p.to_dict() for p in (self.control1, self.control2, self.end)],
        }


@dataclass(frozen=True, slots=True)
class ArcTo:
    """Elliptical arc to `end`.

    Reserved for true-arc output; the current shape generators approximate
    arcs with polygons and never emit it.
    """

    type: ClassVar[str] = "A"

    rx: float
    ry: float
    rotation: float
    large_arc: bool
    sweep: bool
    end: Point

    def to_svg(self) -> str:
        return (
            f"A{self.rx},{self.ry} {self.rotation},{int(self.large_arc)},{int(self.sweep)} "
            f"{self.end.x},{self.end.y}"
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "rx": self.rx,
            "ry": self.ry,
            "rotation": self.rotation,
            "large_arc": self.large_arc,
            "sweep": self.sweep,
            "end": self.end.to_dict(),
        }


PathDirective = Union[MoveTo, LineTo, CurveTo, ArcTo]


def to_path(directives: list[PathDirective]) -> str:
    """Serialize directives to an SVG path string.

    Examples:
        >>> to_path([MoveTo(Point(0, 0)), LineTo(Point(10, 5))])
        'M0.00,0.00 L10.00,5.00'
    """
    return " ".join(directive.to_svg() for directive in directives)


def directive_from_dict(data: dict[str, Any]) -> PathDirective:
    """Deserialize a directive produced by `to_dict`.

    Raises:
        ValueError: If the type tag is unknown
    """
    kind = data["type"]
    if kind == "M":
        return MoveTo(Point.from_dict(data["point"]))
    if kind == "L":
        return LineTo(Point.from_dict(data["point"]))
    if kind == "C":
        c1, c2, end = (Point.from_dict(p) for p in data["points"])
        return CurveTo(c1, c2, end)
    if kind == "A":
        return ArcTo(
            rx=data["rx"],
            ry=data["ry"],
            rotation=data["rotation"],
            large_arc=data["large_arc"],
            sweep=data["sweep"],
            end=Point.from_dict(data["end"]),
        )
    raise ValueError(f"Unknown path directive type: {kind!r}")
