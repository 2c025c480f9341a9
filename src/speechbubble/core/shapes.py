"""Bubble body generators.

Each shape variant maps to one generator through `SHAPE_GENERATORS`. A
generator receives the already padded body size and returns the body polygon.
Adding a shape means adding one generator and one table entry.
"""

import math
from collections.abc import Callable
from dataclasses import dataclass

from speechbubble.config import BubbleShape, GeometryConfig
from speechbubble.core.jitter import Random
from speechbubble.core.polygon import approximate_rounded_rect, calculate_area
from speechbubble.domain import Point
from speechbubble.exceptions import DegenerateGeometryError


@dataclass(frozen=True)
class ShapeParams:
    """Inputs shared by all body generators.

    Attributes:
        center: Body center
        width: Body width (padding already removed)
        height: Body height (padding already removed)
        corner_radius: Corner radius for rounded rectangles
        seed: Seed for jittered shapes
        geometry: Sampling resolution settings
    """

    center: Point
    width: float
    height: float
    corner_radius: float
    seed: int | str
    geometry: GeometryConfig


def rounded_rect_shape(params: ShapeParams) -> list[Point]:
    """Rounded rectangle; the radius is clamped so opposite corners never overlap."""
    radius = min(params.corner_radius, params.width / 2, params.height / 2)
    return approximate_rounded_rect(
        c=params.center,
        w=params.width,
        h=params.height,
        rx=radius,
        ry=radius,
        inc_degrees=params.geometry.arc_increment_degrees,
    )


def oval_shape(params: ShapeParams) -> list[Point]:
    return approximate_rounded_rect(
        c=params.center,
        w=params.width,
        h=params.height,
        rx=params.width / 2,
        ry=params.height / 2,
        inc_degrees=params.geometry.arc_increment_degrees,
    )


def sketch_shape(params: ShapeParams) -> list[Point]:
    """Hand-drawn looking oval: each sample's radii vary by +/-10%."""
    rnd = Random(params.seed)
    steps = params.geometry.sketch_steps
    c = params.center

    points = []
    for i in range(steps):
        angle = i / steps * math.pi * 2
        radius_x = params.width / 2 * (0.9 + rnd.next_float() * 0.2)
        radius_y = params.height / 2 * (0.9 + rnd.next_float() * 0.2)
        points.append(Point(c.x + math.cos(angle) * radius_x, c.y + math.sin(angle) * radius_y))
    return points


def oval_cloud_shape(params: ShapeParams) -> list[Point]:
    """Cloud-like oval: both radii of a sample share one noise draw."""
    rnd = Random(params.seed)
    steps = params.geometry.cloud_steps
    c = params.center
    base_x = params.width / 2
    base_y = params.height / 2

    points = []
    for i in range(steps):
        angle = i / steps * math.pi * 2
        noise = 0.2 + 0.3 * rnd.next_float()
        radius_x = base_x * (0.7 + noise)
        radius_y = base_y * (0.7 + noise)
        points.append(Point(c.x + math.cos(angle) * radius_x, c.y + math.sin(angle) * radius_y))
    return points


SHAPE_GENERATORS: dict[BubbleShape, Callable[[ShapeParams], list[Point]]] = {
    BubbleShape.ROUNDED_RECT: rounded_rect_shape,
    BubbleShape.OVAL: oval_shape,
    BubbleShape.SKETCH: sketch_shape,
    BubbleShape.OVAL_CLOUD: oval_cloud_shape,
}


def build_body(shape: BubbleShape, params: ShapeParams) -> list[Point]:
    """Build the body polygon for a shape variant.

    Raises:
        DegenerateGeometryError: If the size is not positive or the generated
            polygon has fewer than 3 points or no area
    """
    if params.width <= 0 or params.height <= 0:
        raise DegenerateGeometryError(
            f"body size {params.width:g}x{params.height:g} is not positive"
        )

    body = SHAPE_GENERATORS[shape](params)

    if len(body) < 3 or calculate_area(body) == 0:
        raise DegenerateGeometryError(f"{shape.value} body has no area")
    return body
