"""Internal cubic Bezier curve fitting.

Piecewise least-squares fitting of cubic Bezier curves through a sequence of
points (Schneider, "An Algorithm for Automatically Fitting Digitized
Curves", Graphics Gems, 1990). This is an internal module used by the tail
synthesis; not intended for public use.
"""

import math

from speechbubble.domain import Point

CubicBezier = tuple[Point, Point, Point, Point]

MAX_ITERATIONS = 20


def _sub(a: Point, b: Point) -> Point:
    return Point(a.x - b.x, a.y - b.y)


def _add(a: Point, b: Point) -> Point:
    return Point(a.x + b.x, a.y + b.y)


def _scale(a: Point, s: float) -> Point:
    return Point(a.x * s, a.y * s)


def _dot(a: Point, b: Point) -> float:
    return a.x * b.x + a.y * b.y


def _normalize(v: Point) -> Point:
    length = math.hypot(v.x, v.y)
    if length == 0:
        return v
    return Point(v.x / length, v.y / length)


def evaluate(bez: CubicBezier, t: float) -> Point:
    """Evaluate a cubic Bezier at parameter t."""
    p0, p1, p2, p3 = bez
    mt = 1.0 - t
    b0 = mt * mt * mt
    b1 = 3 * mt * mt * t
    b2 = 3 * mt * t * t
    b3 = t * t * t
    return Point(
        b0 * p0.x + b1 * p1.x + b2 * p2.x + b3 * p3.x,
        b0 * p0.y + b1 * p1.y + b2 * p2.y + b3 * p3.y,
    )


def _first_derivative(bez: CubicBezier, t: float) -> Point:
    p0, p1, p2, p3 = bez
    mt = 1.0 - t
    a = 3 * mt * mt
    b = 6 * mt * t
    c = 3 * t * t
    return Point(
        a * (p1.x - p0.x) + b * (p2.x - p1.x) + c * (p3.x - p2.x),
        a * (p1.y - p0.y) + b * (p2.y - p1.y) + c * (p3.y - p2.y),
    )


def _second_derivative(bez: CubicBezier, t: float) -> Point:
    p0, p1, p2, p3 = bez
    a = 6 * (1.0 - t)
    b = 6 * t
    return Point(
        a * (p2.x - 2 * p1.x + p0.x) + b * (p3.x - 2 * p2.x + p1.x),
        a * (p2.y - 2 * p1.y + p0.y) + b * (p3.y - 2 * p2.y + p1.y),
    )


def _chord_length_parameterize(points: list[Point]) -> list[float]:
    lengths = [0.0]
    for prev, curr in zip(points, points[1:]):
        lengths.append(lengths[-1] + math.hypot(curr.x - prev.x, curr.y - prev.y))
    total = lengths[-1]
    return [length / total for length in lengths]


def _generate_bezier(
    points: list[Point],
    parameters: list[float],
    left_tangent: Point,
    right_tangent: Point,
) -> CubicBezier:
    """Least-squares fit of the two inner control points along fixed tangents."""
    first, last = points[0], points[-1]

    c00 = c01 = c11 = 0.0
    x0 = x1 = 0.0
    for point, u in zip(points, parameters):
        a0 = _scale(left_tangent, 3 * (1 - u) * (1 - u) * u)
        a1 = _scale(right_tangent, 3 * (1 - u) * u * u)
        c00 += _dot(a0, a0)
        c01 += _dot(a0, a1)
        c11 += _dot(a1, a1)
        tmp = _sub(point, evaluate((first, first, last, last), u))
        x0 += _dot(a0, tmp)
        x1 += _dot(a1, tmp)

    det_c0_c1 = c00 * c11 - c01 * c01
    det_c0_x = c00 * x1 - c01 * x0
    det_x_c1 = x0 * c11 - x1 * c01

    alpha_l = 0.0 if det_c0_c1 == 0 else det_x_c1 / det_c0_c1
    alpha_r = 0.0 if det_c0_c1 == 0 else det_c0_x / det_c0_c1

    seg_length = math.hypot(last.x - first.x, last.y - first.y)
    epsilon = 1.0e-6 * seg_length

    # Fall back to the Wu/Barsky heuristic when the fit is degenerate
    if alpha_l < epsilon or alpha_r < epsilon:
        alpha_l = alpha_r = seg_length / 3.0

    return (
        first,
        _add(first, _scale(left_tangent, alpha_l)),
        _add(last, _scale(right_tangent, alpha_r)),
        last,
    )


def _max_error(
    points: list[Point], bez: CubicBezier, parameters: list[float]
) -> tuple[float, int]:
    """Return the largest squared distance of a point from the curve and its index."""
    max_dist = 0.0
    split_point = len(points) // 2
    for i, (point, u) in enumerate(zip(points, parameters)):
        diff = _sub(evaluate(bez, u), point)
        dist = diff.x * diff.x + diff.y * diff.y
        if dist > max_dist:
            max_dist = dist
            split_point = i
    return max_dist, split_point


def _reparameterize(bez: CubicBezier, points: list[Point], parameters: list[float]) -> list[float]:
    """Improve parameters with one Newton-Raphson step per point."""
    result = []
    for point, u in zip(points, parameters):
        d = _sub(evaluate(bez, u), point)
        q1 = _first_derivative(bez, u)
        q2 = _second_derivative(bez, u)
        numerator = _dot(d, q1)
        denominator = _dot(q1, q1) + _dot(d, q2)
        result.append(u if denominator == 0 else u - numerator / denominator)
    return result


def _fit_cubic(
    points: list[Point],
    left_tangent: Point,
    right_tangent: Point,
    error: float,
) -> list[CubicBezier]:
    if len(points) == 2:
        dist = math.hypot(points[1].x - points[0].x, points[1].y - points[0].y) / 3.0
        return [
            (
                points[0],
                _add(points[0], _scale(left_tangent, dist)),
                _add(points[1], _scale(right_tangent, dist)),
                points[1],
            )
        ]

    squared_error = error * error
    parameters = _chord_length_parameterize(points)
    bez = _generate_bezier(points, parameters, left_tangent, right_tangent)
    max_error, split_point = _max_error(points, bez, parameters)
    if max_error < squared_error:
        return [bez]

    # Close misses are worth a few rounds of reparameterization before splitting
    if max_error < squared_error * 16:
        for _ in range(MAX_ITERATIONS):
            parameters = _reparameterize(bez, points, parameters)
            bez = _generate_bezier(points, parameters, left_tangent, right_tangent)
            max_error, split_point = _max_error(points, bez, parameters)
            if max_error < squared_error:
                return [bez]

    split_point = max(1, min(split_point, len(points) - 2))
    center_vector = _sub(points[split_point - 1], points[split_point + 1])
    if center_vector.x == 0 and center_vector.y == 0:
        # Symmetric neighbours: use the normal of the incoming edge instead
        edge = _sub(points[split_point - 1], points[split_point])
        center_vector = Point(-edge.y, edge.x)
    to_center = _normalize(center_vector)
    from_center = _scale(to_center, -1.0)

    left = _fit_cubic(points[: split_point + 1], left_tangent, to_center, error)
    right = _fit_cubic(points[split_point:], from_center, right_tangent, error)
    return left + right


def fit_curve(points: list[Point], max_error: float) -> list[CubicBezier]:
    """Fit a piecewise cubic Bezier curve through points.

    Args:
        points: Points to pass through, in order
        max_error: Maximum allowed distance of any point from the curve

    Returns:
        List of cubic Bezier segments (start, control1, control2, end), joined
        end to start. Empty if fewer than two distinct points are given.
    """
    deduped: list[Point] = []
    for point in points:
        if not deduped or point != deduped[-1]:
            deduped.append(point)

    if len(deduped) < 2:
        return []

    left_tangent = _normalize(_sub(deduped[1], deduped[0]))
    right_tangent = _normalize(_sub(deduped[-2], deduped[-1]))
    return _fit_cubic(deduped, left_tangent, right_tangent, max_error)
