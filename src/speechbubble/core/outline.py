"""Bubble outline synthesis.

Builds the body polygon for a shape, synthesizes both tail edges, fits smooth
curves through them and stitches tail and body into a single closed path.
No boolean path operations are involved: the tail edges start inside the
body, and the body walk begins at the vertex nearest to where the tail's
medial axis leaves the body.
"""

import logging
from dataclasses import dataclass

from speechbubble.config import BubbleShape, GeometryConfig
from speechbubble.core._bezier import CubicBezier, fit_curve
from speechbubble.core.geometry import MARGIN_OF_ERROR, distance
from speechbubble.core.polygon import get_extents, segment_intersects_polygon
from speechbubble.core.shapes import ShapeParams, build_body
from speechbubble.core.tail import medial_pairs, tail_sides
from speechbubble.domain import (
    BubbleOutline,
    CurveTo,
    LineTo,
    MoveTo,
    PathDirective,
    Point,
    Rect,
    Tail,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OutlineParams:
    """Inputs to outline synthesis.

    Attributes:
        center: Bubble center
        width: Nominal width
        height: Nominal height
        shape: Body shape variant
        tail: Tail geometry
        corner_radius: Corner radius for rounded rectangles
        tail_width_factor: Tail half-width per medial segment
        padding: Text padding; shrinks the body and insets the text bounds
        seed: Seed for jittered shapes
    """

    center: Point
    width: float
    height: float
    shape: BubbleShape
    tail: Tail
    corner_radius: float
    tail_width_factor: float
    padding: float
    seed: int | str = 12345


def _curve_directives(curves: list[CubicBezier]) -> list[PathDirective]:
    return [CurveTo(control1=c1, control2=c2, end=end) for _, c1, c2, end in curves]


def tail_entry_point(
    center: Point,
    tail: Tail,
    body: list[Point],
    margin: float = MARGIN_OF_ERROR,
) -> Point:
    """Find where the tail's medial axis first crosses the body boundary.

    Falls back to the tip when the whole tail lies inside the body.
    """
    for segment in medial_pairs(center, tail):
        hits = segment_intersects_polygon(segment, body, margin)
        if hits:
            return hits[0].point
    return tail.tip


def body_walk(body: list[Point], entry: Point) -> list[PathDirective]:
    """Walk the body once, starting and closing at the vertex nearest `entry`."""
    start = min(range(len(body)), key=lambda i: distance(body[i], entry))
    ordered = body[start:] + body[:start]
    return [LineTo(p) for p in ordered] + [LineTo(ordered[0])]


def build_outline(params: OutlineParams, geometry: GeometryConfig | None = None) -> BubbleOutline:
    """Synthesize the outline of a bubble with its tail.

    Args:
        params: Bubble geometry
        geometry: Tolerances and sampling settings (defaults if None)

    Returns:
        BubbleOutline with path directives, text bounds and body polygon

    Raises:
        DegenerateGeometryError: If the padded body is empty or the tail has
            a zero-length segment
    """
    geometry = geometry or GeometryConfig()

    body = build_body(
        params.shape,
        ShapeParams(
            center=params.center,
            width=params.width - params.padding * 2,
            height=params.height - params.padding * 2,
            corner_radius=params.corner_radius,
            seed=params.seed,
            geometry=geometry,
        ),
    )

    sides = tail_sides(params.center, params.tail, params.tail_width_factor)
    from_tip = fit_curve(sides.from_tip, geometry.curve_fit_error)
    to_tip = fit_curve([*sides.to_tip, params.tail.tip], geometry.curve_fit_error)

    entry = tail_entry_point(params.center, params.tail, body, geometry.margin_of_error)

    directives: list[PathDirective] = [MoveTo(sides.from_tip[0])]
    directives += _curve_directives(from_tip)
    directives.append(LineTo(sides.to_tip[0]))
    directives += _curve_directives(to_tip)
    directives += body_walk(body, entry)

    logger.debug(
        "Outline built: shape=%s body_points=%d tail_curves=%d",
        params.shape.value,
        len(body),
        len(from_tip) + len(to_tip),
    )

    extents = get_extents(body)
    text_bounds = Rect(
        x=extents.min_x + params.padding,
        y=extents.min_y + params.padding,
        width=extents.width - params.padding * 2,
        height=extents.height - params.padding * 2,
    )

    return BubbleOutline(outline=directives, text_bounds=text_bounds, body=body)
