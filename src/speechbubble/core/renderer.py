"""Bubble rendering pipeline.

Composes outline synthesis and text flow behind a single call:

    spec + text measurer -> BubbleRender(path, interior_rect, lines, truncated)

Key components:
- BubbleRenderer: Renders specs with fixed settings
- render_bubble: Functional shortcut with default settings
"""

import logging

from speechbubble.config import SpeechBubbleSettings, get_default_settings
from speechbubble.core.outline import OutlineParams, build_outline
from speechbubble.core.text_flow import TextMeasurer, layout_text
from speechbubble.domain import BubbleRender, BubbleSpec, to_path

logger = logging.getLogger(__name__)


class BubbleRenderer:
    """Renders bubble specs into outline paths and flowed text.

    The renderer holds only settings; every call recomputes from scratch, so
    one instance can be shared freely.

    Example:
        renderer = BubbleRenderer(SpeechBubbleSettings())
        result = renderer.render(spec, EstimatedTextMeasurer())
        print(result.path)
    """

    def __init__(self, settings: SpeechBubbleSettings | None = None) -> None:
        """Initialize renderer with settings.

        Args:
            settings: Application settings (defaults if None)
        """
        self.settings = settings or get_default_settings()

    def render(self, spec: BubbleSpec, measure: TextMeasurer) -> BubbleRender:
        """Render a bubble.

        Args:
            spec: Bubble to render
            measure: Callable measuring unwrapped text at the spec's font

        Returns:
            BubbleRender with the outline path, interior rectangle and lines

        Raises:
            DegenerateGeometryError: If the bubble geometry is degenerate
        """
        style = spec.style
        width = max(spec.width, style.min_width)
        height = max(spec.height, style.min_height)

        outline = build_outline(
            OutlineParams(
                center=spec.center,
                width=width,
                height=height,
                shape=spec.shape,
                tail=spec.tail,
                corner_radius=style.corner_radius,
                tail_width_factor=style.tail_width_factor,
                padding=style.text_padding,
                seed=spec.seed,
            ),
            self.settings.geometry,
        )

        measured = measure(spec.text, style.font_size, style.font_family)
        layout = layout_text(
            bounds=outline.text_bounds,
            text=spec.text,
            font_size=style.font_size,
            line_height=style.line_height,
            measured=measured,
            shape=outline.body if self.settings.text_flow.follow_shape else None,
            margin=self.settings.geometry.margin_of_error,
        )

        logger.debug(
            "Rendered bubble %s: lines=%d truncated=%s",
            spec.bubble_id,
            len(layout.lines),
            layout.truncated,
        )

        return BubbleRender(
            path=to_path(outline.outline),
            interior_rect=outline.text_bounds,
            lines=layout.lines,
            truncated=layout.truncated,
            outline=outline.outline,
        )


def render_bubble(
    spec: BubbleSpec,
    measure: TextMeasurer,
    settings: SpeechBubbleSettings | None = None,
) -> BubbleRender:
    """Render a single bubble.

    Args:
        spec: Bubble to render
        measure: Text measurer
        settings: Application settings (defaults if None)

    Returns:
        BubbleRender for the spec
    """
    return BubbleRenderer(settings).render(spec, measure)
