"""Text flow through non-rectangular bubble interiors.

The text is measured once as a single unwrapped line. That width gives an
estimate of the number of rows and an average character width. Each row is
then probed with a horizontal segment against the interior polygon to find
its usable extent, and words are packed greedily into it.

Key functions:
- layout_text: Flow text into bounds, optionally following a shape
- pack_words: Greedy word packing for a single row
"""

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

from speechbubble.core.geometry import MARGIN_OF_ERROR
from speechbubble.core.polygon import get_extents, segment_intersects_polygon
from speechbubble.domain import Intersection, Point, Rect, TextLayout, TextLine, TextSize

logger = logging.getLogger(__name__)


class TextMeasurer(Protocol):
    """Measures a single unwrapped line of text."""

    def __call__(self, text: str, font_size: float, font_family: str) -> TextSize: ...


@dataclass(frozen=True)
class EstimatedTextMeasurer:
    """Measure text from fixed per-character ratios of the font size.

    Useful when no font file is at hand. Picklable, so it can be handed to
    worker processes.

    Attributes:
        char_width_ratio: Average advance width as a fraction of font size
        line_height_ratio: Line box height as a fraction of font size
    """

    char_width_ratio: float = 0.6
    line_height_ratio: float = 1.2

    def __call__(self, text: str, font_size: float, font_family: str = "sans-serif") -> TextSize:
        return TextSize(
            width=len(text) * font_size * self.char_width_ratio,
            height=font_size * self.line_height_ratio if text else 0.0,
        )


def pack_words(words: Sequence[str], max_chars: int) -> tuple[str, list[str]]:
    """Greedily pack words into a line of at most `max_chars` characters.

    Packing stops at the first word that would overflow, even if a later,
    shorter word would still fit.

    Args:
        words: Word queue
        max_chars: Character budget, counting single spaces between words

    Returns:
        Tuple of (packed line text, remaining words)

    Examples:
        >>> pack_words(["one", "two", "three"], 7)
        ('one two', ['three'])
    """
    line: list[str] = []
    char_count = 0
    for i, word in enumerate(words):
        new_length = char_count + (1 if line else 0) + len(word)
        if new_length > max_chars:
            return " ".join(line), list(words[i:])
        line.append(word)
        char_count = new_length
    return " ".join(line), []


def _distinct(hits: list[Intersection], margin: float) -> list[Intersection]:
    """Drop hits repeated where the probe passes through a shared vertex."""
    result: list[Intersection] = []
    for hit in hits:
        if not result or hit.distance - result[-1].distance > margin:
            result.append(hit)
    return result


def layout_text(
    bounds: Rect,
    text: str,
    font_size: float,
    line_height: float,
    measured: TextSize,
    shape: Sequence[Point] | None = None,
    margin: float = MARGIN_OF_ERROR,
) -> TextLayout:
    """Flow text into a bubble interior.

    Args:
        bounds: Rectangle available to text
        text: Text to flow; split into words on whitespace
        font_size: Font size (half of it is used as padding)
        line_height: Distance between baselines
        measured: Size of the whole text set on one line
        shape: Interior polygon to clip rows against; the corners of
            `bounds` are used when None
        margin: Tolerance for scanline intersections

    Returns:
        TextLayout whose `truncated` flag is set when words were left over
        after the estimated rows were filled
    """
    words = text.split()
    if not words:
        return TextLayout()

    padding = font_size / 2
    simple_bounds = bounds.corners()
    extents = get_extents(simple_bounds)
    row_width = extents.width - padding * 2

    if row_width <= 0 or measured.width <= 0:
        logger.debug("No room for text: row_width=%.2f measured=%.2f", row_width, measured.width)
        return TextLayout(truncated=True)

    rows = math.ceil(measured.width / row_width)
    char_width = measured.width / len(text)

    probe = list(shape) if shape else simple_bounds
    probe_extents = get_extents(probe)
    y_start = extents.min_y + padding + font_size

    lines: list[TextLine] = []
    queue = words
    for row in range(rows):
        if not queue:
            break

        y = y_start + row * line_height
        if y > extents.max_y:
            continue

        hits = _distinct(
            segment_intersects_polygon(
                (Point(probe_extents.min_x, y), Point(probe_extents.max_x, y)),
                probe,
                margin,
            ),
            margin,
        )
        if len(hits) < 2:
            continue

        a, b = hits[0].point, hits[1].point
        from_point = Point(max(extents.min_x, a.x) + padding, y)
        to_point = Point(min(extents.max_x, b.x) - padding, y)
        max_chars = math.floor((to_point.x - from_point.x) / char_width)

        line_text, queue = pack_words(queue, max_chars)
        lines.append(
            TextLine(
                from_point=from_point,
                to_point=to_point,
                center=Point((from_point.x + to_point.x) / 2, y),
                text=line_text,
            )
        )

    truncated = bool(queue)
    if truncated:
        logger.debug("Text truncated: %d words dropped after %d rows", len(queue), rows)

    return TextLayout(lines=lines, rows=rows, truncated=truncated)
