"""Core algorithms for speechbubble.

This module contains the rendering engine:

- Geometry kernel (vectors, polar coordinates, intersections)
- Polygon algorithms (containment, inset, visibility, extents)
- Deterministic jitter for hand-drawn shapes
- Outline synthesis (body shapes, tapered tail, curve fitting)
- Text flow through non-rectangular interiors

All services are designed to be:
- Stateless (safe for use in worker processes)
- Pure (no side effects beyond debug logging)

Key classes:
- BubbleRenderer: Renders a bubble spec into path and text lines
- BubbleProcessor: Renders batches of bubbles in parallel
- Random: Seeded pseudo-random generator
- EstimatedTextMeasurer: Font-free text measurement
"""

from speechbubble.core.geometry import (
    cartesian_to_polar,
    circle_intersects_circle,
    line_intersects_line,
    polar_to_cartesian,
    segment_intersects_circle,
    segment_intersects_segment,
)
from speechbubble.core.jitter import Random, xmur3
from speechbubble.core.outline import OutlineParams, build_outline
from speechbubble.core.polygon import (
    calculate_area,
    get_bounding_box,
    get_extents,
    get_inset_boundary,
    get_visibility_polygon,
    is_inside_boundary,
    segment_intersects_polygon,
)
from speechbubble.core.processor import BubbleProcessor, process_bubble
from speechbubble.core.renderer import BubbleRenderer, render_bubble
from speechbubble.core.shapes import SHAPE_GENERATORS, ShapeParams, build_body
from speechbubble.core.text_flow import EstimatedTextMeasurer, TextMeasurer, layout_text

__all__ = [
    # Renderer
    "BubbleRenderer",
    "render_bubble",
    # Processor
    "BubbleProcessor",
    "process_bubble",
    # Outline
    "OutlineParams",
    "build_outline",
    "SHAPE_GENERATORS",
    "ShapeParams",
    "build_body",
    # Text flow
    "EstimatedTextMeasurer",
    "TextMeasurer",
    "layout_text",
    # Jitter
    "Random",
    "xmur3",
    # Geometry
    "cartesian_to_polar",
    "circle_intersects_circle",
    "line_intersects_line",
    "polar_to_cartesian",
    "segment_intersects_circle",
    "segment_intersects_segment",
    # Polygon
    "calculate_area",
    "get_bounding_box",
    "get_extents",
    "get_inset_boundary",
    "get_visibility_polygon",
    "is_inside_boundary",
    "segment_intersects_polygon",
]
