"""Tests for geometric primitives."""

import math

import pytest

from speechbubble.core.geometry import (
    add_vectors,
    cartesian_to_polar,
    circle_intersects_circle,
    circular_arc_centre,
    create_rect,
    distance,
    is_clockwise,
    line_intersects_line,
    magnitude,
    midpoint,
    nearest_point,
    normal_ccw,
    normal_cw,
    point_is_on_segment,
    polar_to_cartesian,
    segment_intersects_circle,
    segment_intersects_segment,
    segments_from_corners,
    sort_nearest_to,
    unit,
    vector,
)
from speechbubble.domain import Point, Polar


class TestVectors:
    """Tests for vector algebra."""

    def test_vector_is_difference(self):
        assert vector(Point(5, 7), Point(2, 3)) == Point(3, 4)

    def test_add_vectors(self):
        assert add_vectors(Point(1, 2), Point(3, 4)) == Point(4, 6)

    def test_magnitude(self):
        assert magnitude(Point(3, 4)) == 5.0

    def test_unit_has_length_one(self):
        u = unit(Point(3, 4))
        assert u == Point(0.6, 0.8)
        assert math.isclose(magnitude(u), 1.0)

    def test_unit_of_zero_vector_is_nan(self):
        u = unit(Point(0, 0))
        assert math.isnan(u.x) and math.isnan(u.y)

    def test_normals(self):
        assert normal_ccw(Point(1, 0)) == Point(0, 1)
        assert normal_cw(Point(1, 0)) == Point(0, -1)

    def test_midpoint(self):
        assert midpoint(Point(0, 0), Point(10, 4)) == Point(5, 2)


class TestDistance:
    """Tests for distance properties."""

    @pytest.mark.parametrize(
        "a,b",
        [
            (Point(0, 0), Point(3, 4)),
            (Point(-7.5, 2), Point(11, -3.25)),
            (Point(1e6, 1e6), Point(-1e6, 0)),
        ],
    )
    def test_symmetric(self, a, b):
        assert distance(a, b) == distance(b, a)

    def test_zero_to_self(self):
        p = Point(12.5, -3)
        assert distance(p, p) == 0

    @pytest.mark.parametrize(
        "a,b,c",
        [
            (Point(0, 0), Point(3, 4), Point(10, -2)),
            (Point(1, 1), Point(2, 2), Point(3, 3)),
            (Point(-5, 0), Point(5, 0), Point(0, 100)),
        ],
    )
    def test_triangle_inequality(self, a, b, c):
        assert distance(a, c) <= distance(a, b) + distance(b, c) + 1e-9


class TestPolar:
    """Tests for polar/cartesian conversion."""

    def test_zero_angle_points_up(self):
        p = polar_to_cartesian(Polar(angle=0, radius=10))
        assert math.isclose(p.x, 0.0, abs_tol=1e-9)
        assert math.isclose(p.y, -10.0)

    def test_ninety_degrees_points_right(self):
        p = polar_to_cartesian(Polar(angle=90, radius=10), Point(5, 5))
        assert math.isclose(p.x, 15.0)
        assert math.isclose(p.y, 5.0)

    @pytest.mark.parametrize("angle", [0.0, 0.5, 45.0, 90.0, 179.9, 180.0, 270.0, 359.5])
    @pytest.mark.parametrize("radius", [0.001, 1.0, 250.0])
    def test_round_trip(self, angle, radius):
        origin = Point(13, -7)
        polar = cartesian_to_polar(polar_to_cartesian(Polar(angle, radius), origin), origin)

        diff = (polar.angle - angle + 180.0) % 360.0 - 180.0
        assert abs(diff) < 1e-6
        assert math.isclose(polar.radius, radius, rel_tol=1e-6)

    def test_angle_normalized(self):
        polar = cartesian_to_polar(Point(-1, 0))
        assert 0.0 <= polar.angle < 360.0
        assert math.isclose(polar.angle, 270.0)

    def test_is_clockwise(self):
        assert is_clockwise(10, 20)
        assert not is_clockwise(20, 10)
        assert is_clockwise(350, 10)


class TestIntersections:
    """Tests for line and segment intersections."""

    def test_crossing_segments(self):
        p = segment_intersects_segment(
            (Point(0, 0), Point(2, 2)),
            (Point(0, 2), Point(2, 0)),
        )
        assert p == Point(1, 1)

    def test_parallel_segments(self):
        p = segment_intersects_segment(
            (Point(0, 0), Point(1, 0)),
            (Point(0, 1), Point(1, 1)),
        )
        assert p is None

    def test_lines_meet_outside_segments(self):
        l1 = (Point(0, 0), Point(1, 0))
        l2 = (Point(5, -1), Point(5, 1))
        assert line_intersects_line(l1, l2) == Point(5, 0)
        assert segment_intersects_segment(l1, l2) is None

    def test_touching_endpoint_counts(self):
        p = segment_intersects_segment(
            (Point(0, 0), Point(1, 0)),
            (Point(1, -1), Point(1, 1)),
        )
        assert p == Point(1, 0)

    def test_point_is_on_segment_margin(self):
        seg = (Point(0, 0), Point(10, 0))
        assert point_is_on_segment(Point(10 + 1e-10, 0), seg)
        assert not point_is_on_segment(Point(10.1, 0), seg)
        assert point_is_on_segment(Point(10.1, 0), seg, margin=0.2)


class TestCircles:
    """Tests for circle intersections."""

    def test_segment_through_circle(self):
        hits = segment_intersects_circle((Point(-10, 0), Point(10, 0)), Point(0, 0), 5)
        assert sorted(p.x for p in hits) == [-5.0, 5.0]

    def test_segment_misses_circle(self):
        assert segment_intersects_circle((Point(-10, 10), Point(10, 10)), Point(0, 0), 5) == []

    def test_tangent_segment(self):
        hits = segment_intersects_circle((Point(-10, 5), Point(10, 5)), Point(0, 0), 5)
        assert hits == [Point(0, 5)]

    def test_segment_ends_inside_circle(self):
        hits = segment_intersects_circle((Point(0, 0), Point(10, 0)), Point(0, 0), 5)
        assert hits == [Point(5, 0)]

    def test_circle_circle(self):
        hits = circle_intersects_circle(Point(0, 0), 5, Point(8, 0), 5)
        assert len(hits) == 2
        for p in hits:
            assert math.isclose(p.x, 4.0)
            assert math.isclose(abs(p.y), 3.0)

    def test_circles_apart(self):
        assert circle_intersects_circle(Point(0, 0), 1, Point(10, 0), 1) == []

    def test_concentric_circles(self):
        assert circle_intersects_circle(Point(0, 0), 1, Point(0, 0), 2) == []

    def test_arc_centre_equidistant(self):
        start, end = Point(0, 0), Point(6, 0)
        centre = circular_arc_centre(start, end, 5)
        assert math.isclose(distance(centre, start), 5.0)
        assert math.isclose(distance(centre, end), 5.0)

    def test_arc_centre_chord_too_long(self):
        with pytest.raises(ValueError):
            circular_arc_centre(Point(0, 0), Point(20, 0), 5)


class TestPointSets:
    """Tests for corner list helpers."""

    def test_create_rect(self):
        assert create_rect(Point(0, 0), 4, 2) == [
            Point(-2, -1),
            Point(2, -1),
            Point(2, 1),
            Point(-2, 1),
        ]

    def test_segments_wrap(self):
        pts = [Point(0, 0), Point(1, 0), Point(1, 1)]
        segs = segments_from_corners(pts)
        assert len(segs) == 3
        assert segs[-1] == (Point(1, 1), Point(0, 0))

    def test_sort_nearest_to(self):
        pts = [Point(10, 0), Point(1, 0), Point(5, 0)]
        assert sort_nearest_to(pts, Point(0, 0)) == [Point(1, 0), Point(5, 0), Point(10, 0)]

    def test_nearest_point(self):
        segs = [(Point(0, 0), Point(10, 0)), (Point(10, 0), Point(10, 10))]
        point, dist = nearest_point(segs, Point(9, 1))
        assert point == Point(10, 0)
        assert math.isclose(dist, math.sqrt(2))

    def test_nearest_point_empty(self):
        point, dist = nearest_point([], Point(0, 0))
        assert point is None
        assert dist == math.inf
