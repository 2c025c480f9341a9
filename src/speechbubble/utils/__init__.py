"""Utility functions for speechbubble.

This module provides:

- Logging setup and configuration
- Render statistics tracking
"""

from speechbubble.utils.logging import (
    RenderLogger,
    RenderStats,
    configure_logging,
)

__all__ = [
    "RenderLogger",
    "RenderStats",
    "configure_logging",
]
