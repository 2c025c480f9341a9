"""Polygon and visibility algorithms.

This module provides:
- Signed and absolute area (shoelace formula)
- Even-odd containment by ray casting
- Segment-vs-polygon intersection sorted by distance
- Polygon inset (parallel offset of every edge)
- Radial-sweep visibility polygons
- Extents, bounding boxes and rounded-rectangle approximation

Polygons are sequences of points, implicitly closed. Winding direction is
never assumed: shape generators produce both clockwise and counter-clockwise
outlines.
"""

import logging
import math
from collections.abc import Sequence

from speechbubble.core.geometry import (
    HUGE_DISTANCE,
    MARGIN_OF_ERROR,
    cartesian_to_polar,
    degrees_to_radians,
    distance,
    line_intersects_line,
    magnitude,
    mult,
    normal_cw,
    polar_to_cartesian,
    segment_intersects_segment,
    segments_from_corners,
    translate_all,
    unit,
    vector,
)
from speechbubble.core.jitter import Random
from speechbubble.domain import Extents, Intersection, Point, Polar, Segment
from speechbubble.exceptions import DegenerateGeometryError

logger = logging.getLogger(__name__)

# Cross product of unit edge directions below which two edges count as parallel
_PARALLEL_TOLERANCE = 1e-12

# Irrational slope of the containment ray, away from axis and diagonal directions
_REFERENCE_SLOPE = 0.7548776662466927


def signed_area(points: Sequence[Point]) -> float:
    """Calculate signed area of a polygon using the shoelace formula.

    The sign of the area indicates winding direction. In y-up coordinates a
    positive area is counter-clockwise; on screen (y-down) it is clockwise.

    Args:
        points: List of points forming the polygon boundary

    Returns:
        Signed area in square units. Returns 0.0 for fewer than 3 points.

    Examples:
        >>> square = [Point(0, 0), Point(1, 0), Point(1, 1), Point(0, 1)]
        >>> signed_area(square)
        1.0
        >>> signed_area(list(reversed(square)))
        -1.0
    """
    n = len(points)
    if n < 3:
        return 0.0

    area = 0.0
    for i in range(n):
        j = (i + 1) % n
        area += points[i].x * points[j].y
        area -= points[j].x * points[i].y

    return area / 2.0


def calculate_area(points: Sequence[Point]) -> float:
    """Return the absolute area of a polygon (0.0 for fewer than 3 points)."""
    if len(points) > 2:
        return abs(signed_area(points))
    return 0.0


def is_inside_boundary(
    point: Point,
    boundary_segments: Sequence[Segment],
    far_distance: float = HUGE_DISTANCE,
) -> bool:
    """Determine if a point is inside a boundary using the even-odd rule.

    Casts a segment from the point to a reference point far outside any
    realistic boundary and counts crossings. The reference point lies off
    the axes and diagonals and gets a sub-unit jitter, so the ray is very
    unlikely to pass exactly through a boundary corner, which would be
    counted twice. The jitter is seeded from the query point, so repeated
    calls give the same answer.

    Args:
        point: The point to test
        boundary_segments: Edges of the boundary
        far_distance: x offset of the reference point; its y offset is
            far_distance scaled by the irrational reference slope

    Returns:
        True if point is inside the boundary, False otherwise

    Examples:
        >>> square = [Point(0, 0), Point(1, 0), Point(1, 1), Point(0, 1)]
        >>> edges = segments_from_corners(square)
        >>> is_inside_boundary(Point(0.5, 0.5), edges)
        True
        >>> is_inside_boundary(Point(2, 2), edges)
        False
    """
    rnd = Random(f"{point.x!r},{point.y!r}")
    outside = Point(
        far_distance + rnd.random(),
        far_distance * _REFERENCE_SLOPE + rnd.random(),
    )
    ray = (point, outside)

    crossings = sum(
        1 for edge in boundary_segments if segment_intersects_segment(ray, edge) is not None
    )
    return crossings % 2 != 0


def segment_intersects_polygon(
    segment: Segment,
    polygon: Sequence[Point],
    margin: float = MARGIN_OF_ERROR,
) -> list[Intersection]:
    """Intersect a segment with every edge of a polygon.

    Args:
        segment: The probing segment
        polygon: Polygon corners
        margin: Tolerance for accepting an intersection as on-segment

    Returns:
        Intersections sorted by ascending distance from segment[0]
    """
    hits: list[Intersection] = []
    for edge in segments_from_corners(polygon):
        point = segment_intersects_segment(segment, edge, margin)
        if point is not None:
            hits.append(Intersection(point=point, distance=distance(point, segment[0])))

    hits.sort(key=lambda hit: hit.distance)
    return hits


def get_inset_boundary(boundary: Sequence[Point], inset_distance: float) -> list[Point]:
    """Offset every edge of a polygon and re-intersect neighbouring edges.

    Each edge moves by `inset_distance` along its clockwise normal; corner i
    of the result is where offset edge i meets offset edge i + 1. Whether the
    polygon grows or shrinks depends on its winding.

    Args:
        boundary: Polygon corners
        inset_distance: Offset distance

    Returns:
        Corners of the offset polygon

    Raises:
        DegenerateGeometryError: If an edge has zero length or two
            neighbouring edges are parallel (their offset lines never meet)
    """
    n = len(boundary)
    if n < 3:
        raise DegenerateGeometryError(f"inset needs at least 3 corners, got {n}")

    offset_edges: list[Segment] = []
    directions: list[Point] = []
    for p1, p2 in segments_from_corners(boundary):
        direction = vector(p1, p2)
        if magnitude(direction) == 0:
            raise DegenerateGeometryError(f"zero-length edge at {p1.to_tuple()}")
        direction = unit(direction)
        offset = mult(normal_cw(direction), inset_distance)
        directions.append(direction)
        offset_edges.append(
            (
                Point(p1.x + offset.x, p1.y + offset.y),
                Point(p2.x + offset.x, p2.y + offset.y),
            )
        )

    corners: list[Point] = []
    for i in range(n):
        j = (i + 1) % n
        cross = directions[i].x * directions[j].y - directions[i].y * directions[j].x
        corner = None
        if abs(cross) > _PARALLEL_TOLERANCE:
            corner = line_intersects_line(offset_edges[i], offset_edges[j])
        if corner is None:
            raise DegenerateGeometryError(
                f"edges {i} and {j} are parallel; remove the intermediate corner "
                f"{boundary[j].to_tuple()}"
            )
        corners.append(corner)

    return corners


def nearest_intersection(
    origin: Point,
    angle: float,
    polygon: Sequence[Point],
    far_distance: float = HUGE_DISTANCE,
) -> Point | None:
    """Cast a ray from `origin` at polar `angle` and return the first wall hit.

    Returns:
        The nearest intersection, or None if the ray hits no wall
    """
    target = polar_to_cartesian(Polar(angle=angle, radius=far_distance), origin)
    hits = segment_intersects_polygon((origin, target), polygon)
    return hits[0].point if hits else None


def get_visibility_polygon(
    origin: Point,
    corners: Sequence[Point],
    epsilon: float = 0.01,
    far_distance: float = HUGE_DISTANCE,
) -> list[Point]:
    """Compute the region of a polygon visible from an interior point.

    Radial sweep: every corner is converted to a polar angle around the
    origin; for each unique angle three rays are cast (slightly
    counter-clockwise, exactly, slightly clockwise) so walls that end at a
    corner and walls that continue behind it are both captured.

    Args:
        origin: Viewpoint, expected strictly inside the polygon
        corners: Polygon corners
        epsilon: Angular offset of the side rays in degrees
        far_distance: Ray length

    Returns:
        Visibility polygon corners in clockwise angular order, or an empty
        list if any ray fails to hit a wall
    """
    angles = sorted({cartesian_to_polar(c, origin).angle for c in corners})

    polygon: list[Point] = []
    for angle in angles:
        for probe in (angle - epsilon, angle, angle + epsilon):
            hit = nearest_intersection(origin, probe, corners, far_distance)
            if hit is None:
                logger.debug("Visibility ray missed every wall at angle %.4f", probe)
                return []
            polygon.append(hit)

    return polygon


def get_extents(points: Sequence[Point]) -> Extents:
    """Return the axis-aligned extents of a point set.

    Raises:
        DegenerateGeometryError: If the point set is empty
    """
    if not points:
        raise DegenerateGeometryError("cannot compute extents of an empty point set")

    xs = [p.x for p in points]
    ys = [p.y for p in points]
    return Extents(min_x=min(xs), min_y=min(ys), max_x=max(xs), max_y=max(ys))


def get_bounding_box(points: Sequence[Point]) -> list[Point]:
    """Return the corners of the axis-aligned bounding box of a point set."""
    extents = get_extents(points)
    return [
        Point(extents.min_x, extents.min_y),
        Point(extents.max_x, extents.min_y),
        Point(extents.max_x, extents.max_y),
        Point(extents.min_x, extents.max_y),
    ]


def _points_on_ellipse(
    from_degrees: float, to_degrees: float, rx: float, ry: float, inc_degrees: float
) -> list[Point]:
    steps = math.floor((to_degrees - from_degrees) / inc_degrees + 1e-9)
    points = []
    for k in range(steps + 1):
        angle = degrees_to_radians(from_degrees + k * inc_degrees)
        points.append(Point(rx * math.cos(angle), ry * math.sin(angle)))
    return points


def approximate_rounded_rect(
    c: Point,
    w: float,
    h: float,
    rx: float,
    ry: float,
    inc_degrees: float = 5.0,
) -> list[Point]:
    """Approximate a rounded rectangle with a polygon.

    Samples one quarter-ellipse per corner every `inc_degrees` and
    concatenates them in traversal order: bottom-left to mid-left, mid-left
    to top-left, top-right to mid-right, mid-right to bottom-right. With
    rx = w/2 and ry = h/2 the result is an ellipse.

    Args:
        c: Center of the rectangle
        w: Width
        h: Height
        rx: Horizontal corner radius
        ry: Vertical corner radius
        inc_degrees: Angular sampling step; smaller is smoother

    Returns:
        Polygon corners
    """
    bottom_left = translate_all(
        _points_on_ellipse(90, 181, rx, ry, inc_degrees),
        Point(c.x + (rx - w / 2), c.y + h / 2 - ry),
    )
    top_left = translate_all(
        _points_on_ellipse(180, 271, rx, ry, inc_degrees),
        Point(c.x + (rx - w / 2), c.y - h / 2 + ry),
    )
    top_right = translate_all(
        _points_on_ellipse(270, 361, rx, ry, inc_degrees),
        Point(c.x + (w / 2 - rx), c.y - h / 2 + ry),
    )
    bottom_right = translate_all(
        _points_on_ellipse(0, 91, rx, ry, inc_degrees),
        Point(c.x + (w / 2 - rx), c.y + h / 2 - ry),
    )
    return [*bottom_left, *top_left, *top_right, *bottom_right]
