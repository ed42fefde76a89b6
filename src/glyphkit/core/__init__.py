"""Core decoding and shaping for glyphkit.

This module contains the algorithms that turn font bytes into outlines:

- Glyph decoding (loca resolution, simple and compound glyf records)
- Curve reconstruction (implied points, path commands, compound flattening)
- The immutable Font value and parse()
- Text shaping

Key functions:
- parse: Build a Font from a TrueType binary
- decode_glyph: Decode one glyf record
- midpoint: Implied on-curve point between two control points
- contour_path: Path commands for one contour
- outline_path: Path commands for a whole glyph
- check_components: Validate a compound glyph reference graph
- flatten_path: Replace curves with line segments

Key classes:
- Font: Parsed font with on-demand glyph access
- Shaper: String to positioned glyphs
"""

from glyphkit.core.font import Font, parse
from glyphkit.core.glyf import decode_glyph, glyph_bytes
from glyphkit.core.outline import (
    check_components,
    contour_path,
    flatten_path,
    midpoint,
    outline_path,
    resolve_contours,
)
from glyphkit.core.shaper import Shaper

__all__ = [
    # Font
    "Font",
    "parse",
    # Glyph decoding
    "decode_glyph",
    "glyph_bytes",
    # Curve reconstruction
    "check_components",
    "contour_path",
    "flatten_path",
    "midpoint",
    "outline_path",
    "resolve_contours",
    # Shaping
    "Shaper",
]
