"""SVG writer for rendered bubbles.

This module provides the SvgWriter class, which assembles rendered bubbles
into a standalone SVG document: one outline path per bubble and one centred
text element per flowed line.
"""

import xml.etree.ElementTree as ET
from collections.abc import Iterable, Mapping
from pathlib import Path

from speechbubble.config import BubbleStyle
from speechbubble.domain import BubbleRender
from speechbubble.exceptions import RenderSaveError

SVG_NAMESPACE = "http://www.w3.org/2000/svg"


def _fmt(value: float) -> str:
    return f"{value:.2f}".rstrip("0").rstrip(".")


class SvgWriter:
    """Writes rendered bubbles to SVG.

    The outline path runs its tail edges through the body, so the stroke is
    painted beneath the fill (`paint-order="stroke"`) and only the outer
    half of it shows.

    Example:
        writer = SvgWriter(BubbleStyle())
        writer.save(Path("page.svg"), [render], width=800, height=600)
    """

    def __init__(self, style: BubbleStyle | None = None) -> None:
        """Initialize the writer.

        Args:
            style: Stroke, fill and font styling for bubbles without their
                own style (defaults if None)
        """
        self.style = style or BubbleStyle()

    def _bubble_element(
        self,
        render: BubbleRender,
        bubble_id: str | None,
        style: BubbleStyle,
    ) -> ET.Element:
        group = ET.Element("g")
        if bubble_id is not None:
            group.set("id", bubble_id)

        ET.SubElement(
            group,
            "path",
            {
                "d": render.path,
                "fill": style.fill_color,
                "stroke": style.stroke_color,
                "stroke-width": _fmt(style.stroke_width),
                "stroke-linejoin": "round",
                "stroke-linecap": "round",
                "paint-order": "stroke",
            },
        )

        for line in render.lines:
            text = ET.SubElement(
                group,
                "text",
                {
                    "x": _fmt(line.x),
                    "y": _fmt(line.y),
                    "text-anchor": "middle",
                    "font-family": style.font_family,
                    "font-size": _fmt(style.font_size),
                    "fill": style.text_color,
                },
            )
            text.text = line.text

        return group

    def document(
        self,
        renders: Iterable[BubbleRender] | Mapping[str, BubbleRender],
        width: float,
        height: float,
        styles: Mapping[str, BubbleStyle] | None = None,
    ) -> str:
        """Build an SVG document.

        Args:
            renders: Rendered bubbles, optionally keyed by bubble id
            width: Document width
            height: Document height
            styles: Per-bubble styles keyed by bubble id; bubbles missing
                from it use the writer's style

        Returns:
            SVG markup; text content and attributes are XML-escaped
        """
        styles = styles or {}
        root = ET.Element(
            "svg",
            {
                "xmlns": SVG_NAMESPACE,
                "width": _fmt(width),
                "height": _fmt(height),
                "viewBox": f"0 0 {_fmt(width)} {_fmt(height)}",
            },
        )

        items = renders.items() if isinstance(renders, Mapping) else ((None, r) for r in renders)
        for bubble_id, render in items:
            style = styles.get(bubble_id, self.style) if bubble_id is not None else self.style
            root.append(self._bubble_element(render, bubble_id, style))

        return ET.tostring(root, encoding="unicode")

    def save(
        self,
        path: Path,
        renders: Iterable[BubbleRender] | Mapping[str, BubbleRender],
        width: float,
        height: float,
        styles: Mapping[str, BubbleStyle] | None = None,
    ) -> None:
        """Write an SVG document to a file.

        Raises:
            RenderSaveError: If the file cannot be written
        """
        markup = self.document(renders, width, height, styles)
        try:
            path.write_text(markup, encoding="utf-8")
        except OSError as e:
            raise RenderSaveError(str(path), str(e)) from e
