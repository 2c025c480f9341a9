"""Font reader for measuring text with TTF/OTF metrics.

This module provides the FontReader class for loading font files and
measuring horizontal advances, and FontTextMeasurer, which adapts a font
file to the text measurement callable used by the renderer.
"""

from pathlib import Path
from typing import Any

from fontTools.ttLib import TTFont

from speechbubble.domain import TextSize
from speechbubble.exceptions import FontLoadError


class FontReader:
    """Loads TTF/OTF fonts and measures text.

    Example:
        with FontReader(Path("font.ttf")) as reader:
            size = reader.measure_text("Hello", font_size=40)
    """

    def __init__(self, font_path: Path) -> None:
        """Initialize the font reader.

        Args:
            font_path: Path to the TTF or OTF font file
        """
        self._font_path = font_path
        self._font: TTFont | None = None
        self._cmap: dict[int, str] = {}

    def load(self) -> None:
        """Load the font file.

        Raises:
            FontLoadError: If the file does not exist or is not a valid font
        """
        if not self._font_path.exists():
            raise FontLoadError(str(self._font_path), "file not found")

        try:
            self._font = TTFont(str(self._font_path))
            self._cmap = self._font.getBestCmap() or {}
        except Exception as e:
            self._font = None
            raise FontLoadError(str(self._font_path), str(e)) from e

    def _require_font(self) -> TTFont:
        if self._font is None:
            raise RuntimeError("Font not loaded. Call load() first.")
        return self._font

    @property
    def format(self) -> str:
        """Return font format.

        Returns:
            'TrueType' for TTF fonts, 'OpenType' for OTF fonts

        Raises:
            RuntimeError: If font has not been loaded yet
        """
        font = self._require_font()
        if "CFF " in font or "CFF2" in font:
            return "OpenType"
        return "TrueType"

    @property
    def units_per_em(self) -> int:
        """Return font's units per em.

        Raises:
            RuntimeError: If font has not been loaded yet
        """
        return self._require_font()["head"].unitsPerEm  # type: ignore[attr-defined]

    @property
    def family_name(self) -> str:
        """Return the font family name, or the file stem if the name table has none."""
        font = self._require_font()
        name = font["name"].getDebugName(1) if "name" in font else None
        return name or self._font_path.stem

    def advance_width(self, char: str) -> int:
        """Return the horizontal advance of a character in font units.

        Characters missing from the cmap use the advance of `.notdef`.
        """
        font = self._require_font()
        hmtx = font["hmtx"]
        glyph_name = self._cmap.get(ord(char), ".notdef")
        if glyph_name not in hmtx.metrics:
            glyph_name = ".notdef"
        if glyph_name not in hmtx.metrics:
            return 0
        return hmtx[glyph_name][0]

    def measure_text(self, text: str, font_size: float) -> TextSize:
        """Measure a single unwrapped line of text.

        Args:
            text: Text to measure
            font_size: Font size in drawing units

        Returns:
            TextSize scaled from font units by font_size / units_per_em

        Raises:
            RuntimeError: If font has not been loaded yet
        """
        font = self._require_font()
        scale = font_size / self.units_per_em
        width = sum(self.advance_width(char) for char in text) * scale

        hhea = font["hhea"]
        height = (hhea.ascent - hhea.descent) * scale if text else 0.0
        return TextSize(width=width, height=height)

    def close(self) -> None:
        """Close the font file and free resources."""
        if self._font is not None:
            self._font.close()
            self._font = None
            self._cmap = {}

    def __enter__(self) -> "FontReader":
        """Context manager entry."""
        self.load()
        return self

    def __exit__(self, _exc_type: object, _exc_val: object, _exc_tb: object) -> None:
        """Context manager exit."""
        self.close()


class FontTextMeasurer:
    """Text measurer backed by a font file.

    The font is loaded on first use in each process, so instances can be
    pickled and handed to batch workers. The requested font family is
    ignored; metrics always come from the file.
    """

    def __init__(self, font_path: Path) -> None:
        self.font_path = Path(font_path)
        self._reader: FontReader | None = None

    def __call__(self, text: str, font_size: float, font_family: str = "") -> TextSize:
        if self._reader is None:
            reader = FontReader(self.font_path)
            reader.load()
            self._reader = reader
        return self._reader.measure_text(text, font_size)

    def close(self) -> None:
        if self._reader is not None:
            self._reader.close()
            self._reader = None

    def __getstate__(self) -> dict[str, Any]:
        return {"font_path": self.font_path, "_reader": None}

    def __setstate__(self, state: dict[str, Any]) -> None:
        self.__dict__.update(state)
