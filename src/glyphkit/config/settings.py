"""Configuration settings for glyphkit."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field


class FallbackPolicy(str, Enum):
    """What the shaper does when a glyph fails to decode."""

    NOTDEF = "notdef"
    EMPTY = "empty"
    RAISE = "raise"


class ParserConfig(BaseModel):
    """Configuration for font parsing and glyph decoding."""

    max_compound_depth: int = Field(
        default=8,
        ge=1,
        le=64,
        description="Maximum nesting of compound glyph references",
    )
    verify_checksums: bool = Field(
        default=False,
        description="Verify table checksums while parsing and log mismatches",
    )
    strict_checksums: bool = Field(
        default=False,
        description="Raise on checksum mismatch instead of logging (implies verification)",
    )


class ShaperConfig(BaseModel):
    """Configuration for text shaping."""

    fallback: FallbackPolicy = Field(
        default=FallbackPolicy.NOTDEF,
        description="Substitution used when a glyph fails to decode",
    )
    origin_x: int = Field(
        default=0,
        description="Initial pen X in font units",
    )
    origin_y: int = Field(
        default=0,
        description="Pen Y in font units (baseline)",
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


class GlyphkitSettings(BaseModel):
    """Main application settings."""

    parser: ParserConfig = Field(default_factory=ParserConfig)
    shaper: ShaperConfig = Field(default_factory=ShaperConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> GlyphkitSettings:
    """Get default application settings."""
    return GlyphkitSettings()
