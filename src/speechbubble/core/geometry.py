"""Geometric primitives for bubble and text-flow calculations.

This module provides core mathematical utilities for:
- Vector algebra (difference, sum, scaling, normalization, normals)
- Polar/cartesian conversion
- Line and segment intersection
- Circle intersections and nearest-point helpers

All functions are pure, stateless, and designed for use in parallel processing.

Angles are in degrees. Polar angle 0 points "up" (towards negative y, which
is up on screen) and increases clockwise.
"""

import math
from collections.abc import Sequence

from speechbubble.domain import Point, Polar, Segment

MARGIN_OF_ERROR = 1e-9
HUGE_DISTANCE = 1e9
REFERENCE_DIRECTION = -90.0


def degrees_to_radians(degrees: float) -> float:
    return degrees * math.pi / 180.0


def radians_to_degrees(radians: float) -> float:
    return radians * (180.0 / math.pi)


def vector(a: Point, b: Point) -> Point:
    """Return the vector pointing from `b` to `a` (that is, `a - b`)."""
    return Point(a.x - b.x, a.y - b.y)


def add_vectors(a: Point, b: Point) -> Point:
    return Point(a.x + b.x, a.y + b.y)


def mult(v: Point, scalar: float) -> Point:
    return Point(v.x * scalar, v.y * scalar)


def magnitude(v: Point) -> float:
    return math.hypot(v.x, v.y)


def distance(a: Point, b: Point) -> float:
    """Euclidean distance between two points."""
    return magnitude(vector(a, b))


def unit(v: Point) -> Point:
    """Normalize a vector to length 1.

    A zero-length vector has no direction; the result is then a NaN vector.
    Callers that cannot accept NaN must check the length first.
    """
    mag = magnitude(v)
    if mag == 0:
        return Point(math.nan, math.nan)
    return Point(v.x / mag, v.y / mag)


def normal_ccw(v: Point) -> Point:
    """Rotate a vector by 90 degrees: (x, y) -> (-y, x)."""
    return Point(-v.y, v.x)


def normal_cw(v: Point) -> Point:
    """Rotate a vector by 90 degrees the other way: (x, y) -> (y, -x)."""
    return Point(v.y, -v.x)


def midpoint(a: Point, b: Point) -> Point:
    return Point((a.x + b.x) / 2, (a.y + b.y) / 2)


def points_are_equal(a: Point, b: Point) -> bool:
    return a.x == b.x and a.y == b.y


def polar_to_cartesian(polar: Polar, origin: Point = Point(0.0, 0.0)) -> Point:
    """Convert a polar coordinate around `origin` to a cartesian point.

    Examples:
        >>> p = polar_to_cartesian(Polar(angle=90.0, radius=10.0))
        >>> round(p.x, 6), round(p.y, 6)
        (10.0, 0.0)
    """
    angle = degrees_to_radians(REFERENCE_DIRECTION + polar.angle)
    return Point(
        origin.x + polar.radius * math.cos(angle),
        origin.y + polar.radius * math.sin(angle),
    )


def cartesian_to_polar(point: Point, origin: Point = Point(0.0, 0.0)) -> Polar:
    """Convert a cartesian point to a polar coordinate around `origin`.

    The returned angle lies in [0, 360).
    """
    v = vector(point, origin)
    angle = radians_to_degrees(math.atan2(v.y, v.x)) - REFERENCE_DIRECTION
    angle %= 360.0
    if angle >= 360.0:
        angle = 0.0
    return Polar(angle=angle, radius=magnitude(v))


def is_clockwise(a: float, b: float) -> bool:
    """Return True if turning from angle `a` to angle `b` is a clockwise turn."""
    return b > a or a - b > 180


def point_is_on_segment(point: Point, segment: Segment, margin: float = MARGIN_OF_ERROR) -> bool:
    """Test whether a point lies within the bounding box of a segment.

    Used on points already known to lie on the segment's line, where the
    bounding-box test is equivalent to an on-segment test.

    Args:
        point: The point to test
        segment: The segment
        margin: Tolerance added around the bounding box

    Returns:
        True if the point is within the (tolerant) bounding box
    """
    a, b = segment
    return (
        point.x - margin <= max(a.x, b.x)
        and point.x + margin >= min(a.x, b.x)
        and point.y - margin <= max(a.y, b.y)
        and point.y + margin >= min(a.y, b.y)
    )


def line_intersects_line(l1: Segment, l2: Segment) -> Point | None:
    """Intersect the infinite lines through two segments.

    Args:
        l1: Two points on the first line
        l2: Two points on the second line

    Returns:
        The intersection point, or None if the lines are parallel

    Examples:
        >>> line_intersects_line((Point(0, 0), Point(2, 2)), (Point(0, 2), Point(2, 0)))
        Point(x=1.0, y=1.0)
    """
    a, b = l1
    c, d = l2

    a1 = b.y - a.y
    b1 = a.x - b.x
    c1 = a1 * a.x + b1 * a.y

    a2 = d.y - c.y
    b2 = c.x - d.x
    c2 = a2 * c.x + b2 * c.y

    determinant = a1 * b2 - a2 * b1

    # Parallel or coincident lines
    if determinant == 0:
        return None

    x = (b2 * c1 - b1 * c2) / determinant
    y = (a1 * c2 - a2 * c1) / determinant
    return Point(x, y)


def segment_intersects_segment(
    l1: Segment, l2: Segment, margin: float = MARGIN_OF_ERROR
) -> Point | None:
    """Find the intersection point of two line segments.

    Returns:
        Point at intersection if the segments cross, None otherwise
    """
    intersection = line_intersects_line(l1, l2)
    if (
        intersection is not None
        and point_is_on_segment(intersection, l1, margin)
        and point_is_on_segment(intersection, l2, margin)
    ):
        return intersection
    return None


def create_rect(center: Point, width: float, height: float) -> list[Point]:
    """Return the corners of a rectangle centred on `center`."""
    half_w = width / 2
    half_h = height / 2
    return [
        Point(center.x - half_w, center.y - half_h),
        Point(center.x + half_w, center.y - half_h),
        Point(center.x + half_w, center.y + half_h),
        Point(center.x - half_w, center.y + half_h),
    ]


def segments_from_corners(points: Sequence[Point]) -> list[Segment]:
    """Pair each point with its successor, wrapping around at the end."""
    n = len(points)
    return [(points[i], points[(i + 1) % n]) for i in range(n)]


def translate_all(points: Sequence[Point], offset: Point) -> list[Point]:
    return [Point(p.x + offset.x, p.y + offset.y) for p in points]


def sort_nearest_to(points: Sequence[Point], to: Point) -> list[Point]:
    """Sort points by ascending distance to `to`."""
    return sorted(points, key=lambda p: distance(p, to))


def nearest_point(segments: Sequence[Segment], point: Point) -> tuple[Point | None, float]:
    """Find the segment endpoint closest to `point`.

    Returns:
        Tuple of (nearest endpoint, distance); (None, inf) if there are no segments
    """
    best: Point | None = None
    best_distance = math.inf
    for a, b in segments:
        for candidate in (a, b):
            d = distance(candidate, point)
            if d < best_distance:
                best, best_distance = candidate, d
    return best, best_distance


def segment_intersects_circle(segment: Segment, center: Point, radius: float) -> list[Point]:
    """Intersect a segment with a circle.

    Projects the circle's center onto the segment's line and walks the
    half-chord length either side of the projection.

    Returns:
        Intersection points on the segment (two, one for a tangent, or none)
    """
    a, b = segment
    length = distance(a, b)
    if length == 0:
        return []
    d = Point((b.x - a.x) / length, (b.y - a.y) / length)

    t = d.x * (center.x - a.x) + d.y * (center.y - a.y)
    projection = Point(t * d.x + a.x, t * d.y + a.y)
    to_center = distance(projection, center)

    if to_center > radius:
        return []
    if to_center == radius:
        return [projection] if point_is_on_segment(projection, segment) else []

    dt = math.sqrt(radius**2 - to_center**2)
    candidates = [
        Point((t - dt) * d.x + a.x, (t - dt) * d.y + a.y),
        Point((t + dt) * d.x + a.x, (t + dt) * d.y + a.y),
    ]
    return [p for p in candidates if point_is_on_segment(p, segment)]


def circle_intersects_circle(
    c1: Point, r1: float, c2: Point, r2: float
) -> list[Point]:
    """Intersect two circles.

    Returns:
        The two crossing points (identical for tangent circles), or an empty
        list when the circles are apart, nested or concentric
    """
    dx = c2.x - c1.x
    dy = c2.y - c1.y
    d = math.hypot(dx, dy)

    if d == 0 or d > r1 + r2 or d < abs(r1 - r2):
        return []

    a = (r1 * r1 - r2 * r2 + d * d) / (2.0 * d)
    x3 = c1.x + dx * a / d
    y3 = c1.y + dy * a / d
    h = math.sqrt(max(r1 * r1 - a * a, 0.0))

    rx = -dy * (h / d)
    ry = dx * (h / d)
    return [Point(x3 + rx, y3 + ry), Point(x3 - rx, y3 - ry)]


def circular_arc_centre(start: Point, end: Point, radius: float) -> Point:
    """Find the centre of a circular arc of `radius` through `start` and `end`.

    Raises:
        ValueError: If the chord is longer than the arc's diameter
    """
    chord = distance(start, end)
    if chord > 2 * radius:
        raise ValueError("Chord is longer than the arc's diameter")
    theta = radians_to_degrees(math.acos(chord / 2 / radius))
    source_target_angle = cartesian_to_polar(start, end).angle
    return polar_to_cartesian(Polar(angle=source_target_angle + theta, radius=radius), end)
