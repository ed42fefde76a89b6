"""glyphkit - Read TrueType fonts and lay out text.

glyphkit parses a TrueType (glyf-flavored sfnt) binary into an immutable
font value, decodes glyph outlines into drawable path commands and shapes
strings into rows of positioned glyphs.

Example:
    from glyphkit import Shaper, parse

    font = parse(Path("Lato-Regular.ttf").read_bytes())
    for shaped in Shaper(font).shape("AB"):
        print(shaped.glyph_id, shaped.pen_x)
"""

__version__ = "0.1.0"

from glyphkit.core import Font, Shaper, outline_path, parse
from glyphkit.exceptions import (
    FormatError,
    GlyphkitError,
    InvalidGlyphIndexError,
    MalformedGlyphError,
    MalformedTableError,
    MissingTableError,
)

__all__ = [
    "__version__",
    "Font",
    "FormatError",
    "GlyphkitError",
    "InvalidGlyphIndexError",
    "MalformedGlyphError",
    "MalformedTableError",
    "MissingTableError",
    "Shaper",
    "outline_path",
    "parse",
]
