"""I/O layer for speechbubble.

This module handles the boundaries of the engine: font files used to
measure text (via fonttools) and SVG documents written from renders.

Key classes:
- FontReader: Load fonts and measure text advances
- FontTextMeasurer: Picklable text measurer backed by a font file
- SvgWriter: Write rendered bubbles as SVG
"""

from speechbubble.io.reader import FontReader, FontTextMeasurer
from speechbubble.io.writer import SvgWriter

__all__ = [
    "FontReader",
    "FontTextMeasurer",
    "SvgWriter",
]
