"""Configuration management for glyphkit.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- ParserConfig: Font parsing settings
- ShaperConfig: Text shaping settings
- LoggingConfig: Logging settings
- GlyphkitSettings: Main application settings
"""

from glyphkit.config.settings import (
    FallbackPolicy,
    GlyphkitSettings,
    LoggingConfig,
    ParserConfig,
    ShaperConfig,
    get_default_settings,
)

__all__ = [
    "FallbackPolicy",
    "GlyphkitSettings",
    "LoggingConfig",
    "ParserConfig",
    "ShaperConfig",
    "get_default_settings",
]
