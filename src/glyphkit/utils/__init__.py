"""Utility functions for glyphkit.

This module provides utility functions including:

- Logging setup and configuration
"""

from glyphkit.utils.logging import configure_logging, get_logger

__all__ = [
    "configure_logging",
    "get_logger",
]
