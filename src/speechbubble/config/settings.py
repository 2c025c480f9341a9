"""Configuration settings for Speechbubble."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field


class BubbleShape(str, Enum):
    """Bubble body shape variant."""

    ROUNDED_RECT = "rounded_rect"
    OVAL = "oval"
    SKETCH = "sketch"
    OVAL_CLOUD = "oval_cloud"


class GeometryConfig(BaseModel):
    """Configuration for geometry operations.

    Values are expressed in the caller's drawing units (typically SVG user
    units / pixels).
    """

    margin_of_error: float = Field(
        default=1e-9,
        gt=0.0,
        le=1e-3,
        description="Tolerance when accepting a line intersection as lying on a segment",
    )
    curve_fit_error: float = Field(
        default=0.01,
        gt=0.0,
        le=10.0,
        description="Maximum deviation of fitted tail curves from their corner points",
    )
    arc_increment_degrees: float = Field(
        default=5.0,
        ge=0.5,
        le=45.0,
        description="Angular sampling step for rounded rectangle and oval corners",
    )
    sketch_steps: int = Field(
        default=20,
        ge=3,
        le=360,
        description="Number of radius samples for sketch bubbles",
    )
    cloud_steps: int = Field(
        default=36,
        ge=3,
        le=360,
        description="Number of radius samples for cloud bubbles",
    )


class BubbleStyle(BaseModel):
    """Per-bubble shape and text styling."""

    corner_radius: float = Field(
        default=20.0,
        ge=0.0,
        description="Corner radius of rounded rectangle bubbles",
    )
    tail_width_factor: float = Field(
        default=4.0,
        gt=0.0,
        le=50.0,
        description="Tail half-width contributed by each medial segment",
    )
    text_padding: float = Field(
        default=20.0,
        ge=0.0,
        description="Padding between nominal bubble size and body, and body and text",
    )
    font_size: float = Field(
        default=40.0,
        gt=0.0,
        description="Font size used for text layout",
    )
    line_height: float = Field(
        default=50.0,
        gt=0.0,
        description="Distance between consecutive text baselines",
    )
    font_family: str = Field(
        default="sans-serif",
        description="Font family passed to the text measurer and SVG output",
    )
    min_width: float = Field(
        default=100.0,
        ge=0.0,
        description="Bubbles narrower than this are widened",
    )
    min_height: float = Field(
        default=100.0,
        ge=0.0,
        description="Bubbles shorter than this are heightened",
    )
    stroke_width: float = Field(default=10.0, ge=0.0, description="Outline stroke width")
    stroke_color: str = Field(default="black", description="Outline stroke color")
    fill_color: str = Field(default="white", description="Bubble fill color")
    text_color: str = Field(default="black", description="Text color")


class TextFlowConfig(BaseModel):
    """Configuration for text flow."""

    follow_shape: bool = Field(
        default=True,
        description="Clip rows against the bubble body instead of its bounding rectangle",
    )


class ProcessingConfig(BaseModel):
    """Configuration for batch rendering."""

    max_workers: int | None = Field(
        default=None,
        description="Max worker processes (None = auto)",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class SpeechBubbleSettings(BaseModel):
    """Main application settings."""

    style: BubbleStyle = Field(default_factory=BubbleStyle)
    geometry: GeometryConfig = Field(default_factory=GeometryConfig)
    text_flow: TextFlowConfig = Field(default_factory=TextFlowConfig)
    processing: ProcessingConfig = Field(default_factory=ProcessingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> SpeechBubbleSettings:
    """Get default application settings."""
    return SpeechBubbleSettings()
