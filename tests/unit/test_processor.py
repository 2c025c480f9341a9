"""Tests for parallel batch rendering."""

from unittest.mock import Mock, patch

import pytest

from speechbubble.config import BubbleShape, BubbleStyle, SpeechBubbleSettings
from speechbubble.core.processor import BubbleProcessor, process_bubble
from speechbubble.core.text_flow import EstimatedTextMeasurer
from speechbubble.domain import BubbleRender, BubbleSpec, Point, Tail
from speechbubble.exceptions import BubbleRenderError


def _spec(bubble_id: str, **overrides) -> BubbleSpec:
    values = {
        "center": Point(200, 150),
        "width": 240,
        "height": 160,
        "tail": Tail(corners=(Point(230, 200),), tip=Point(260, 320)),
        "text": "Where did everybody go?",
        "style": BubbleStyle(font_size=20, line_height=24),
        "bubble_id": bubble_id,
    }
    values.update(overrides)
    return BubbleSpec(**values)


@pytest.fixture
def settings() -> SpeechBubbleSettings:
    """Create test settings."""
    return SpeechBubbleSettings()


@pytest.fixture
def degenerate_spec() -> BubbleSpec:
    """Bubble whose padding swallows its whole body."""
    return _spec("broken", style=BubbleStyle(text_padding=120))


class TestProcessBubble:
    """Tests for process_bubble function."""

    def test_success(self, settings):
        result = process_bubble(_spec("a").to_dict(), settings.model_dump(), EstimatedTextMeasurer())

        assert "error" not in result
        assert "duration_ms" in result
        render = BubbleRender.from_dict(result["render"])
        assert render.path.startswith("M")
        assert render.lines

    def test_handles_degenerate_geometry(self, settings, degenerate_spec):
        result = process_bubble(
            degenerate_spec.to_dict(), settings.model_dump(), EstimatedTextMeasurer()
        )

        assert result["bubble_id"] == "broken"
        assert "Degenerate geometry" in result["error"]
        assert "traceback" in result

    def test_handles_invalid_dict(self, settings):
        result = process_bubble({"id": "bad"}, settings.model_dump(), EstimatedTextMeasurer())
        assert "error" in result
        assert result["bubble_id"] == "bad"

    def test_matches_direct_render(self, settings):
        from speechbubble.core.renderer import BubbleRenderer

        spec = _spec("a", shape=BubbleShape.OVAL_CLOUD, seed="cloud")
        measure = EstimatedTextMeasurer()
        result = process_bubble(spec.to_dict(), settings.model_dump(), measure)
        assert result["render"]["path"] == BubbleRenderer(settings).render(spec, measure).path


class TestBubbleProcessor:
    """Tests for BubbleProcessor class."""

    def test_init(self, settings):
        """Test BubbleProcessor initialization."""
        with patch("speechbubble.core.processor.configure_logging") as mock_logging:
            mock_logging.return_value = Mock()
            processor = BubbleProcessor(settings)

            assert processor.settings == settings
            assert processor.last_stats is None
            mock_logging.assert_called_once()

    def test_process_batch(self, settings):
        specs = [_spec("a"), _spec("b", shape=BubbleShape.OVAL), _spec("c", shape=BubbleShape.SKETCH)]
        progress = Mock()

        processor = BubbleProcessor(settings)
        renders, stats = processor.process(
            specs, EstimatedTextMeasurer(), max_workers=2, progress_callback=progress
        )

        assert set(renders) == {"a", "b", "c"}
        assert stats.processed_count == 3
        assert stats.error_count == 0
        assert len(stats.timings_ms) == 3
        assert stats.duration_seconds >= 0
        assert progress.call_count == 3
        assert processor.last_stats is stats

    def test_failures_are_isolated(self, settings, degenerate_spec):
        processor = BubbleProcessor(settings)
        renders, stats = processor.process(
            [_spec("ok"), degenerate_spec], EstimatedTextMeasurer(), max_workers=2
        )

        assert set(renders) == {"ok"}
        assert stats.processed_count == 1
        assert stats.error_count == 1
        assert stats.errors[0][0] == "broken"

    def test_truncation_counted(self, settings):
        long_text = " ".join(["talking"] * 200)
        processor = BubbleProcessor(settings)
        renders, stats = processor.process(
            [_spec("chatty", text=long_text)], EstimatedTextMeasurer(), max_workers=1
        )

        assert renders["chatty"].truncated
        assert stats.truncated_count == 1

    def test_empty_batch(self, settings):
        renders, stats = BubbleProcessor(settings).process([], EstimatedTextMeasurer())
        assert renders == {}
        assert stats.processed_count == 0

    def test_duplicate_ids_rejected(self, settings):
        processor = BubbleProcessor(settings)
        with pytest.raises(BubbleRenderError, match="duplicate"):
            processor.process([_spec("same"), _spec("same")], EstimatedTextMeasurer())
