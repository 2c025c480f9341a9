"""Tail synthesis.

The tail is described by its medial axis, the polyline from the bubble
center through the tail corners to the tip. Each side of the tail is the
medial axis pushed out along one of its normals by an amount that shrinks
linearly towards the tip, so the tail tapers to a point.
"""

from collections.abc import Callable
from dataclasses import dataclass

from speechbubble.core.geometry import (
    add_vectors,
    magnitude,
    midpoint,
    mult,
    normal_ccw,
    normal_cw,
    segments_from_corners,
    unit,
    vector,
)
from speechbubble.domain import Point, Segment, Tail
from speechbubble.exceptions import DegenerateGeometryError


@dataclass(frozen=True)
class TailSides:
    """Corner lists of both tail edges.

    Attributes:
        from_tip: Corners from the tip back towards the bubble (clockwise side)
        to_tip: Corners from the bubble towards the tip, tip excluded
            (counter-clockwise side)
    """

    from_tip: list[Point]
    to_tip: list[Point]


def medial_pairs(center: Point, tail: Tail) -> list[Segment]:
    """Return consecutive medial-axis segments from the center to the tip.

    Raises:
        DegenerateGeometryError: If any segment has zero length
    """
    pairs = segments_from_corners(tail.medial_axis(center))[:-1]
    for a, b in pairs:
        if magnitude(vector(a, b)) == 0:
            raise DegenerateGeometryError(
                f"tail has a zero-length segment at {a.to_tuple()}"
            )
    return pairs


def _offset_side(
    pairs: list[Segment],
    normal: Callable[[Point], Point],
    width_factor: float,
) -> list[Point]:
    """Offset each medial segment and collapse neighbours into corners."""
    n = len(pairs)
    offset_points: list[Point] = []
    for idx, (a, b) in enumerate(pairs):
        side = unit(normal(vector(a, b)))
        # Fractional first index keeps the body/tail junction free of a kink
        i = 0.75 if idx == 0 else idx
        offset_points.append(add_vectors(a, mult(side, width_factor * (n - i))))
        offset_points.append(
            add_vectors(b, mult(side, width_factor * (n - (i + width_factor / (n * 2)))))
        )

    inner = offset_points[1:-1]
    midpoints = [midpoint(a, b) for a, b in segments_from_corners(inner)][::2]
    return [offset_points[0], *midpoints]


def tail_sides(center: Point, tail: Tail, width_factor: float) -> TailSides:
    """Compute the corner lists of both tail edges.

    Args:
        center: Bubble center, where the medial axis starts
        tail: Tail corners and tip
        width_factor: Half-width added per medial segment

    Returns:
        TailSides with the clockwise side running from the tip and the
        counter-clockwise side running towards it
    """
    pairs = medial_pairs(center, tail)
    cw_side = _offset_side(pairs, normal_cw, width_factor)
    ccw_side = _offset_side(pairs, normal_ccw, width_factor)
    return TailSides(
        from_tip=[*cw_side, tail.tip][::-1],
        to_tip=ccw_side,
    )
