"""Domain models for glyphkit.

This module contains the value types produced by parsing: points, glyph
descriptions, the three glyph data variants, glyphs, path commands and
shaped glyphs. All models are frozen dataclasses so a parsed font and
everything derived from it can be shared freely.

Key classes:
- Point: A coordinate with its on-curve flag
- GlyphDescription: Bounding box from the glyph header
- SimpleGlyphData / CompoundGlyphData / EmptyGlyphData: glyf entry variants
- Glyph: A glyph with its metrics
- MoveTo / LineTo / QuadraticCurveTo: Path commands for renderers
- ShapedGlyph: A glyph at a pen position
"""

from glyphkit.domain.contour import Point
from glyphkit.domain.glyph import (
    Component,
    ComponentTransform,
    CompoundGlyphData,
    EmptyGlyphData,
    Glyph,
    GlyphData,
    GlyphDescription,
    ShapedGlyph,
    SimpleGlyphData,
)
from glyphkit.domain.path import Coordinate, LineTo, MoveTo, PathCommand, QuadraticCurveTo

__all__: list[str] = [
    # Geometry
    "Point",
    "Coordinate",
    # Glyph data
    "GlyphDescription",
    "ComponentTransform",
    "Component",
    "SimpleGlyphData",
    "CompoundGlyphData",
    "EmptyGlyphData",
    "GlyphData",
    "Glyph",
    "ShapedGlyph",
    # Path commands
    "MoveTo",
    "LineTo",
    "QuadraticCurveTo",
    "PathCommand",
]
