"""Configuration management for speechbubble.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- BubbleStyle: Shape and text styling of a bubble
- GeometryConfig: Tolerances and sampling resolution
- TextFlowConfig: Text flow settings
- ProcessingConfig: Batch rendering settings
- LoggingConfig: Logging settings
- SpeechBubbleSettings: Main application settings
"""

from speechbubble.config.settings import (
    BubbleShape,
    BubbleStyle,
    GeometryConfig,
    LoggingConfig,
    ProcessingConfig,
    SpeechBubbleSettings,
    TextFlowConfig,
    get_default_settings,
)

__all__ = [
    "BubbleShape",
    "BubbleStyle",
    "GeometryConfig",
    "LoggingConfig",
    "ProcessingConfig",
    "SpeechBubbleSettings",
    "TextFlowConfig",
    "get_default_settings",
]
