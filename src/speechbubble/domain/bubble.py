"""Bubble input and output models.

This module defines the models that flow through the rendering pipeline:
- Tail: Waypoints of a bubble's tail towards the speaker
- BubbleSpec: Everything needed to render one bubble
- BubbleOutline: Synthesized outline directives and text bounds
- TextSize / TextLine / TextLayout: Measured and flowed text
- BubbleRender: Final output of the pipeline
"""

from dataclasses import dataclass, field
from typing import Any

from speechbubble.config.settings import BubbleShape, BubbleStyle
from speechbubble.domain.geometry import Point, Rect
from speechbubble.domain.path import PathDirective, directive_from_dict


@dataclass(frozen=True)
class Tail:
    """A bubble tail.

    The polyline [bubble center, *corners, tip] is the tail's medial axis.

    Attributes:
        corners: Waypoints from the bubble center towards the tip
        tip: Point the tail ends at
    """

    corners: tuple[Point, ...]
    tip: Point

    def medial_axis(self, center: Point) -> list[Point]:
        """Return the medial axis polyline starting at `center`."""
        return [center, *self.corners, self.tip]

    def to_dict(self) -> dict[str, Any]:
        return {
            "corners": [p.to_dict() for p in self.corners],
            "tip": self.tip.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Tail":
        return cls(
            corners=tuple(Point.from_dict(p) for p in data["corners"]),
            tip=Point.from_dict(data["tip"]),
        )


@dataclass
class BubbleSpec:
    """Specification of a bubble to render.

    Attributes:
        center: Logical center of the bubble body
        width: Nominal width (before padding)
        height: Nominal height (before padding)
        tail: Tail geometry
        text: Dialogue text
        shape: Body shape variant
        seed: Seed for jittered shapes
        style: Styling (padding, corner radius, fonts, ...)
        bubble_id: Identifier used in batch results and logs
    """

    center: Point
    width: float
    height: float
    tail: Tail
    text: str = ""
    shape: BubbleShape = BubbleShape.ROUNDED_RECT
    seed: int | str = 12345
    style: BubbleStyle = field(default_factory=BubbleStyle)
    bubble_id: str = "bubble"

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC.

        Returns:
            Dictionary representation of the spec
        """
        return {
            "id": self.bubble_id,
            "center": self.center.to_dict(),
            "width": self.width,
            "height": self.height,
            "tail": self.tail.to_dict(),
            "text": self.text,
            "shape": self.shape.value,
            "seed": self.seed,
            "style": self.style.model_dump(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BubbleSpec":
        """Deserialize from dictionary.

        Args:
            data: Dictionary representation of a spec

        Returns:
            BubbleSpec instance
        """
        return cls(
            center=Point.from_dict(data["center"]),
            width=data["width"],
            height=data["height"],
            tail=Tail.from_dict(data["tail"]),
            text=data.get("text", ""),
            shape=BubbleShape(data.get("shape", BubbleShape.ROUNDED_RECT.value)),
            seed=data.get("seed", 12345),
            style=BubbleStyle(**data.get("style", {})),
            bubble_id=data.get("id", "bubble"),
        )


@dataclass
class BubbleOutline:
    """Synthesized bubble outline.

    Attributes:
        outline: Path directives of the closed body-plus-tail outline
        text_bounds: Body bounding box inset by the text padding
        body: Body polygon the outline was built from
    """

    outline: list[PathDirective]
    text_bounds: Rect
    body: list[Point]


@dataclass(frozen=True, slots=True)
class TextSize:
    """Measured size of a single unwrapped line of text."""

    width: float
    height: float


@dataclass(frozen=True)
class TextLine:
    """One flowed line of text.

    Attributes:
        from_point: Left end of the usable row
        to_point: Right end of the usable row
        center: Midpoint of the row, where the line is anchored
        text: Words packed into this row
    """

    from_point: Point
    to_point: Point
    center: Point
    text: str

    @property
    def x(self) -> float:
        return self.center.x

    @property
    def y(self) -> float:
        return self.center.y

    def to_dict(self) -> dict[str, Any]:
        return {"x": self.x, "y": self.y, "text": self.text}


@dataclass
class TextLayout:
    """Result of flowing text into a bubble.

    Attributes:
        lines: Emitted lines, top to bottom
        rows: Estimated row budget
        truncated: True if words were dropped for lack of rows
    """

    lines: list[TextLine] = field(default_factory=list)
    rows: int = 0
    truncated: bool = False


@dataclass
class BubbleRender:
    """Rendered bubble: the output contract of the engine.

    Attributes:
        path: SVG path string of the outline
        interior_rect: Rectangle available to text
        lines: Flowed text lines
        truncated: True if the text did not fit
        outline: Path directives the path string was built from
    """

    path: str
    interior_rect: Rect
    lines: list[TextLine]
    truncated: bool = False
    outline: list[PathDirective] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC.

        Returns:
            Dictionary representation of the render
        """
        return {
            "path": self.path,
            "interior_rect": self.interior_rect.to_dict(),
            "lines": [
                {
                    "from": line.from_point.to_dict(),
                    "to": line.to_point.to_dict(),
                    "center": line.center.to_dict(),
                    "text": line.text,
                }
                for line in self.lines
            ],
            "truncated": self.truncated,
            "outline": [d.to_dict() for d in self.outline],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BubbleRender":
        """Deserialize from dictionary.

        Args:
            data: Dictionary representation of a render

        Returns:
            BubbleRender instance
        """
        lines = [
            TextLine(
                from_point=Point.from_dict(line["from"]),
                to_point=Point.from_dict(line["to"]),
                center=Point.from_dict(line["center"]),
                text=line["text"],
            )
            for line in data["lines"]
        ]
        return cls(
            path=data["path"],
            interior_rect=Rect.from_dict(data["interior_rect"]),
            lines=lines,
            truncated=data["truncated"],
            outline=[directive_from_dict(d) for d in data.get("outline", [])],
        )
