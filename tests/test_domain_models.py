"""Tests for domain models to verify they work correctly."""

import pytest

from speechbubble.config import BubbleShape, BubbleStyle
from speechbubble.domain import (
    ArcTo,
    BubbleRender,
    BubbleSpec,
    CurveTo,
    LineTo,
    MoveTo,
    Point,
    Rect,
    Tail,
    TextLine,
    directive_from_dict,
    to_path,
)


class TestPoint:
    """Tests for Point class."""

    def test_point_creation(self) -> None:
        """Test basic point creation."""
        p = Point(100.0, 200.0)
        assert p.x == 100.0
        assert p.y == 200.0

    def test_point_to_tuple(self) -> None:
        """Test point to tuple conversion."""
        assert Point(100.0, 200.0).to_tuple() == (100.0, 200.0)

    def test_point_serialization(self) -> None:
        """Test point serialization and deserialization."""
        p1 = Point(100.0, 200.0)
        p2 = Point.from_dict(p1.to_dict())
        assert p2 == p1

    def test_point_immutable(self) -> None:
        """Test that point is immutable."""
        p = Point(100.0, 200.0)
        with pytest.raises(AttributeError):
            p.x = 300.0  # type: ignore

    def test_point_hashable(self) -> None:
        """Test that equal points collapse in a set."""
        assert len({Point(1, 2), Point(1, 2), Point(2, 1)}) == 2


class TestRect:
    """Tests for Rect class."""

    def test_corners_clockwise_from_top_left(self) -> None:
        rect = Rect(x=10, y=20, width=100, height=50)
        assert rect.corners() == [
            Point(10, 20),
            Point(110, 20),
            Point(110, 70),
            Point(10, 70),
        ]

    def test_serialization(self) -> None:
        rect = Rect(x=1, y=2, width=3, height=4)
        assert Rect.from_dict(rect.to_dict()) == rect


class TestPathDirectives:
    """Tests for path directives and path strings."""

    def test_move_and_line_use_two_decimals(self) -> None:
        assert MoveTo(Point(1, 2.346)).to_svg() == "M1.00,2.35"
        assert LineTo(Point(-3.5, 0)).to_svg() == "L-3.50,0.00"

    def test_curve_to(self) -> None:
        curve = CurveTo(Point(1, 1), Point(2, 2), Point(3, 3))
        assert curve.to_svg() == "C1.00,1.00 2.00,2.00 3.00,3.00"

    def test_arc_to(self) -> None:
        arc = ArcTo(rx=5, ry=6, rotation=0, large_arc=True, sweep=False, end=Point(7, 8))
        assert arc.to_svg().startswith("A5,6 0,1,0 ")

    def test_to_path_joins_with_spaces(self) -> None:
        path = to_path([MoveTo(Point(0, 0)), LineTo(Point(10, 0)), LineTo(Point(0, 0))])
        assert path == "M0.00,0.00 L10.00,0.00 L0.00,0.00"

    def test_directive_serialization(self) -> None:
        directives = [
            MoveTo(Point(0, 0)),
            LineTo(Point(1, 0)),
            CurveTo(Point(1, 1), Point(2, 2), Point(3, 3)),
            ArcTo(rx=5, ry=6, rotation=0, large_arc=False, sweep=True, end=Point(7, 8)),
        ]
        restored = [directive_from_dict(d.to_dict()) for d in directives]
        assert restored == directives

    def test_unknown_directive_type(self) -> None:
        with pytest.raises(ValueError, match="Unknown path directive"):
            directive_from_dict({"type": "Q"})


class TestTail:
    """Tests for Tail class."""

    def test_medial_axis_runs_center_to_tip(self) -> None:
        tail = Tail(corners=(Point(30, 30),), tip=Point(60, 160))
        assert tail.medial_axis(Point(0, 0)) == [Point(0, 0), Point(30, 30), Point(60, 160)]

    def test_serialization(self) -> None:
        tail = Tail(corners=(Point(1, 2), Point(3, 4)), tip=Point(5, 6))
        assert Tail.from_dict(tail.to_dict()) == tail


class TestBubbleSpec:
    """Tests for BubbleSpec class."""

    def test_defaults(self) -> None:
        spec = BubbleSpec(center=Point(0, 0), width=200, height=120, tail=Tail((), Point(0, 200)))
        assert spec.shape == BubbleShape.ROUNDED_RECT
        assert spec.seed == 12345
        assert spec.style.text_padding == 20.0
        assert spec.text == ""

    def test_serialization(self) -> None:
        spec = BubbleSpec(
            center=Point(10, 20),
            width=200,
            height=120,
            tail=Tail((Point(30, 30),), Point(60, 160)),
            text="Hi & bye",
            shape=BubbleShape.OVAL_CLOUD,
            seed="panel-1",
            style=BubbleStyle(font_size=24, line_height=30),
            bubble_id="b1",
        )
        data = spec.to_dict()
        assert data["id"] == "b1"
        assert data["shape"] == "oval_cloud"

        restored = BubbleSpec.from_dict(data)
        assert restored == spec

    def test_from_dict_minimal(self) -> None:
        spec = BubbleSpec.from_dict(
            {
                "center": {"x": 0, "y": 0},
                "width": 100,
                "height": 100,
                "tail": {"corners": [], "tip": {"x": 0, "y": 150}},
            }
        )
        assert spec.bubble_id == "bubble"
        assert spec.style == BubbleStyle()


class TestBubbleRender:
    """Tests for BubbleRender class."""

    def test_serialization(self) -> None:
        line = TextLine(
            from_point=Point(10, 30),
            to_point=Point(190, 30),
            center=Point(100, 30),
            text="Hello world",
        )
        render = BubbleRender(
            path="M0.00,0.00 L1.00,0.00",
            interior_rect=Rect(0, 0, 200, 100),
            lines=[line],
            truncated=True,
            outline=[MoveTo(Point(0, 0)), LineTo(Point(1, 0))],
        )
        restored = BubbleRender.from_dict(render.to_dict())
        assert restored == render

    def test_line_output_shape(self) -> None:
        line = TextLine(Point(10, 30), Point(190, 30), Point(100, 30), "Hello")
        assert line.to_dict() == {"x": 100, "y": 30, "text": "Hello"}
