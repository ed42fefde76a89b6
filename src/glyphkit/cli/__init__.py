"""Command-line interface for glyphkit.

This module provides the CLI using Typer with rich output.

Commands:
- info: Header values, cmap details and table directory
- glyph: One glyph's structure and outline
- shape: Pen positions for a string
"""

from glyphkit.cli.app import cli, main

__all__ = ["cli", "main"]
