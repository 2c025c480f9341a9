"""Unit tests for the I/O layer.

Tests for FontReader, FontTextMeasurer and SvgWriter.
"""

import pickle
import xml.etree.ElementTree as ET
from pathlib import Path
from unittest.mock import MagicMock, Mock, patch

import pytest

from speechbubble.config import BubbleStyle
from speechbubble.domain import BubbleRender, Point, Rect, TextLine, TextSize
from speechbubble.exceptions import FontLoadError, RenderSaveError
from speechbubble.io.reader import FontReader, FontTextMeasurer
from speechbubble.io.writer import SvgWriter

SVG = "{http://www.w3.org/2000/svg}"


def _mock_font(tables: tuple[str, ...] = ("glyf", "hmtx", "hhea", "head", "name")) -> MagicMock:
    """Font with 1000 UPM where 'A' is 600 units wide and .notdef 500."""
    hmtx = MagicMock()
    hmtx.metrics = {"A": (600, 0), ".notdef": (500, 0), "space": (250, 0)}
    hmtx.__getitem__ = Mock(side_effect=lambda name: hmtx.metrics[name])

    head = Mock(unitsPerEm=1000)
    hhea = Mock(ascent=800, descent=-200)
    name = Mock()
    name.getDebugName = Mock(return_value="Test Sans")

    by_tag = {"hmtx": hmtx, "head": head, "hhea": hhea, "name": name}

    font = MagicMock()
    font.__contains__ = Mock(side_effect=lambda tag: tag in tables)
    font.__getitem__ = Mock(side_effect=lambda tag: by_tag[tag])
    font.getBestCmap = Mock(return_value={ord("A"): "A", ord(" "): "space"})
    return font


class TestFontReader:
    """Tests for FontReader class."""

    def test_init(self):
        """Test FontReader initialization."""
        path = Path("test.ttf")
        reader = FontReader(path)
        assert reader._font_path == path
        assert reader._font is None

    def test_load_nonexistent_file(self):
        """Test loading a nonexistent file raises FontLoadError."""
        reader = FontReader(Path("nonexistent.ttf"))
        with pytest.raises(FontLoadError, match="file not found"):
            reader.load()

    @patch("speechbubble.io.reader.TTFont", side_effect=Exception("bad table"))
    @patch.object(Path, "exists", return_value=True)
    def test_load_invalid_font(self, _mock_exists, _mock_ttfont):  # noqa: ARG002
        reader = FontReader(Path("broken.ttf"))
        with pytest.raises(FontLoadError, match="bad table"):
            reader.load()
        assert reader._font is None

    def test_properties_before_load(self):
        """Test accessing metrics before loading raises RuntimeError."""
        reader = FontReader(Path("test.ttf"))
        with pytest.raises(RuntimeError, match="Font not loaded"):
            _ = reader.format
        with pytest.raises(RuntimeError, match="Font not loaded"):
            _ = reader.units_per_em
        with pytest.raises(RuntimeError, match="Font not loaded"):
            reader.measure_text("A", 10)

    @patch("speechbubble.io.reader.TTFont")
    @patch.object(Path, "exists", return_value=True)
    def test_format_truetype(self, _mock_exists, mock_ttfont):  # noqa: ARG002
        mock_ttfont.return_value = _mock_font()
        reader = FontReader(Path("test.ttf"))
        reader.load()
        assert reader.format == "TrueType"

    @patch("speechbubble.io.reader.TTFont")
    @patch.object(Path, "exists", return_value=True)
    def test_format_opentype(self, _mock_exists, mock_ttfont):  # noqa: ARG002
        mock_ttfont.return_value = _mock_font(("CFF ", "hmtx", "hhea", "head", "name"))
        reader = FontReader(Path("test.otf"))
        reader.load()
        assert reader.format == "OpenType"

    @patch("speechbubble.io.reader.TTFont")
    @patch.object(Path, "exists", return_value=True)
    def test_metrics(self, _mock_exists, mock_ttfont):  # noqa: ARG002
        mock_ttfont.return_value = _mock_font()
        with FontReader(Path("test.ttf")) as reader:
            assert reader.units_per_em == 1000
            assert reader.family_name == "Test Sans"
            assert reader.advance_width("A") == 600
            assert reader.advance_width(" ") == 250

    @patch("speechbubble.io.reader.TTFont")
    @patch.object(Path, "exists", return_value=True)
    def test_missing_glyph_uses_notdef(self, _mock_exists, mock_ttfont):  # noqa: ARG002
        mock_ttfont.return_value = _mock_font()
        with FontReader(Path("test.ttf")) as reader:
            assert reader.advance_width("Z") == 500

    @patch("speechbubble.io.reader.TTFont")
    @patch.object(Path, "exists", return_value=True)
    def test_measure_text(self, _mock_exists, mock_ttfont):  # noqa: ARG002
        mock_ttfont.return_value = _mock_font()
        with FontReader(Path("test.ttf")) as reader:
            size = reader.measure_text("A A", 20)
        # (600 + 250 + 600) * 20 / 1000; height (800 + 200) * 20 / 1000
        assert size.width == pytest.approx(29.0)
        assert size.height == pytest.approx(20.0)

    @patch("speechbubble.io.reader.TTFont")
    @patch.object(Path, "exists", return_value=True)
    def test_measure_empty_text(self, _mock_exists, mock_ttfont):  # noqa: ARG002
        mock_ttfont.return_value = _mock_font()
        with FontReader(Path("test.ttf")) as reader:
            assert reader.measure_text("", 20) == TextSize(0.0, 0.0)

    @patch("speechbubble.io.reader.TTFont")
    @patch.object(Path, "exists", return_value=True)
    def test_close(self, _mock_exists, mock_ttfont):  # noqa: ARG002
        font = _mock_font()
        mock_ttfont.return_value = font
        reader = FontReader(Path("test.ttf"))
        reader.load()
        reader.close()
        font.close.assert_called_once()
        assert reader._font is None


class TestFontTextMeasurer:
    """Tests for FontTextMeasurer class."""

    @patch("speechbubble.io.reader.TTFont")
    @patch.object(Path, "exists", return_value=True)
    def test_loads_lazily_once(self, _mock_exists, mock_ttfont):  # noqa: ARG002
        mock_ttfont.return_value = _mock_font()
        measure = FontTextMeasurer(Path("test.ttf"))
        mock_ttfont.assert_not_called()

        assert measure("AA", 10, "ignored").width == pytest.approx(12.0)
        measure("A", 10, "ignored")
        mock_ttfont.assert_called_once()

    @patch("speechbubble.io.reader.TTFont")
    @patch.object(Path, "exists", return_value=True)
    def test_picklable_after_use(self, _mock_exists, mock_ttfont):  # noqa: ARG002
        mock_ttfont.return_value = _mock_font()
        measure = FontTextMeasurer(Path("test.ttf"))
        measure("A", 10)

        restored = pickle.loads(pickle.dumps(measure))
        assert restored.font_path == Path("test.ttf")
        assert restored._reader is None

    def test_missing_file(self):
        with pytest.raises(FontLoadError):
            FontTextMeasurer(Path("nonexistent.ttf"))("A", 10)


@pytest.fixture
def render() -> BubbleRender:
    """Minimal render with one line of text that needs escaping."""
    return BubbleRender(
        path="M0.00,0.00 L100.00,0.00 L100.00,50.00 L0.00,0.00",
        interior_rect=Rect(10, 10, 80, 30),
        lines=[TextLine(Point(10, 30), Point(90, 30), Point(50, 30), "Tom & Jerry <3")],
    )


class TestSvgWriter:
    """Tests for SvgWriter class."""

    def test_document_structure(self, render):
        markup = SvgWriter().document({"b1": render}, 200, 100)
        root = ET.fromstring(markup)

        assert root.tag == f"{SVG}svg"
        assert root.get("viewBox") == "0 0 200 100"

        group = root.find(f"{SVG}g")
        assert group is not None
        assert group.get("id") == "b1"
        assert group.find(f"{SVG}path").get("d") == render.path

    def test_text_is_escaped(self, render):
        markup = SvgWriter().document([render], 200, 100)
        assert "Tom &amp; Jerry &lt;3" in markup

        text = ET.fromstring(markup).find(f"{SVG}g/{SVG}text")
        assert text.text == "Tom & Jerry <3"
        assert text.get("x") == "50"
        assert text.get("text-anchor") == "middle"

    def test_style_applied(self, render):
        style = BubbleStyle(fill_color="#ffeeaa", stroke_width=3, font_family="Comic Neue")
        root = ET.fromstring(SvgWriter(style).document([render], 200, 100))
        path = root.find(f"{SVG}g/{SVG}path")
        assert path.get("fill") == "#ffeeaa"
        assert path.get("stroke-width") == "3"
        assert root.find(f"{SVG}g/{SVG}text").get("font-family") == "Comic Neue"

    def test_save(self, render, tmp_path):
        output = tmp_path / "page.svg"
        SvgWriter().save(output, [render], 200, 100)
        assert output.read_text(encoding="utf-8").startswith("<svg")

    def test_save_failure(self, render, tmp_path):
        output = tmp_path / "missing-dir" / "page.svg"
        with pytest.raises(RenderSaveError):
            SvgWriter().save(output, [render], 200, 100)

    def test_stroke_painted_under_fill(self, render):
        path = ET.fromstring(SvgWriter().document([render], 200, 100)).find(f"{SVG}g/{SVG}path")
        assert path.get("paint-order") == "stroke"
        assert path.get("stroke-linecap") == "round"
        assert path.get("stroke-linejoin") == "round"

    def test_per_bubble_styles(self, render):
        styles = {
            "small": BubbleStyle(font_size=14, fill_color="#eeeeee"),
            "large": BubbleStyle(font_size=30, text_color="red"),
        }
        markup = SvgWriter().document(
            {"small": render, "large": render, "plain": render}, 200, 100, styles=styles
        )
        groups = {g.get("id"): g for g in ET.fromstring(markup).findall(f"{SVG}g")}

        assert groups["small"].find(f"{SVG}text").get("font-size") == "14"
        assert groups["small"].find(f"{SVG}path").get("fill") == "#eeeeee"
        assert groups["large"].find(f"{SVG}text").get("font-size") == "30"
        assert groups["large"].find(f"{SVG}text").get("fill") == "red"
        assert groups["plain"].find(f"{SVG}text").get("font-size") == "40"
