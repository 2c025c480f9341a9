"""Domain models for speechbubble.

This module contains the core domain models representing points, polygons,
path directives, bubbles and flowed text. All models are designed to be:

- Immutable where possible (using frozen dataclasses)
- Serializable for inter-process communication (batch rendering)
- Independent of any rendering surface

Key classes:
- Point: A 2D point or vector
- Polar: A polar coordinate
- Rect / Extents: Axis-aligned boxes
- MoveTo / LineTo / CurveTo / ArcTo: Path directives
- Tail: Tail waypoints and tip
- BubbleSpec: Input to the renderer
- BubbleOutline: Outline directives and text bounds
- TextLine / TextLayout: Flowed text
- BubbleRender: Output of the renderer
"""

from speechbubble.domain.bubble import (
    BubbleOutline,
    BubbleRender,
    BubbleSpec,
    Tail,
    TextLayout,
    TextLine,
    TextSize,
)
from speechbubble.domain.geometry import Extents, Intersection, Point, Polar, Rect, Segment
from speechbubble.domain.path import (
    ArcTo,
    CurveTo,
    LineTo,
    MoveTo,
    PathDirective,
    directive_from_dict,
    to_path,
)

__all__: list[str] = [
    # Geometry
    "Point",
    "Polar",
    "Segment",
    "Extents",
    "Rect",
    "Intersection",
    # Path
    "ArcTo",
    "CurveTo",
    "LineTo",
    "MoveTo",
    "PathDirective",
    "directive_from_dict",
    "to_path",
    # Bubble
    "Tail",
    "BubbleSpec",
    "BubbleOutline",
    "BubbleRender",
    "TextSize",
    "TextLine",
    "TextLayout",
]
