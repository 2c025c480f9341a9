"""Command-line interface for speechbubble.

This module provides the CLI using Typer with rich output for
user-friendly feedback and progress reporting.

Key features:
- Single bubble rendering with a line table
- Parallel batch rendering with a progress bar
- Verbose/quiet output modes
- SVG output
"""

from speechbubble.cli.app import cli, main

__all__ = ["cli", "main"]
