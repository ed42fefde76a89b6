"""Glyph representation.

This module defines the glyph domain model: the bounding box from the glyph
header, the three kinds of glyph data a glyf entry can decode to, and the
Glyph value that combines them with horizontal metrics.
"""

from dataclasses import dataclass, field
from typing import Any, ClassVar

from glyphkit.domain.contour import Point

# Component record flags (glyf compound glyphs)
ARG_1_AND_2_ARE_WORDS = 0x0001
ARGS_ARE_XY_VALUES = 0x0002
ROUND_XY_TO_GRID = 0x0004
WE_HAVE_A_SCALE = 0x0008
MORE_COMPONENTS = 0x0020
WE_HAVE_AN_X_AND_Y_SCALE = 0x0040
WE_HAVE_A_TWO_BY_TWO = 0x0080
WE_HAVE_INSTRUCTIONS = 0x0100
USE_MY_METRICS = 0x0200
OVERLAP_COMPOUND = 0x0400
SCALED_COMPONENT_OFFSET = 0x0800
UNSCALED_COMPONENT_OFFSET = 0x1000


@dataclass(frozen=True, slots=True)
class GlyphDescription:
    """Bounding box from the glyph header, in font units."""

    x_min: int
    y_min: int
    x_max: int
    y_max: int

    EMPTY: ClassVar["GlyphDescription"]

    @property
    def width(self) -> int:
        return self.x_max - self.x_min

    @property
    def height(self) -> int:
        return self.y_max - self.y_min

    def to_dict(self) -> dict[str, Any]:
        return {
            "x_min": self.x_min,
            "y_min": self.y_min,
            "x_max": self.x_max,
            "y_max": self.y_max,
        }


GlyphDescription.EMPTY = GlyphDescription(0, 0, 0, 0)


@dataclass(frozen=True, slots=True)
class ComponentTransform:
    """2x2 scale/skew matrix of a compound component.

    Maps (x, y) to (xx*x + yx*y, xy*x + yy*y), following the glyf
    component layout (xscale, scale01, scale10, yscale).
    """

    xx: float = 1.0
    xy: float = 0.0
    yx: float = 0.0
    yy: float = 1.0

    IDENTITY: ClassVar["ComponentTransform"]

    def apply(self, x: float, y: float) -> tuple[float, float]:
        return (self.xx * x + self.yx * y, self.xy * x + self.yy * y)


ComponentTransform.IDENTITY = ComponentTransform()


@dataclass(frozen=True, slots=True)
class Component:
    """One positioned reference inside a compound glyph.

    Attributes:
        glyph_id: Referenced glyph id
        dx: Horizontal offset in font units
        dy: Vertical offset in font units
        transform: Optional 2x2 matrix applied before the offset
        flags: Raw component flags
    """

    glyph_id: int
    dx: int
    dy: int
    transform: ComponentTransform | None = None
    flags: int = ARGS_ARE_XY_VALUES

    @property
    def round_xy_to_grid(self) -> bool:
        return bool(self.flags & ROUND_XY_TO_GRID)

    @property
    def use_my_metrics(self) -> bool:
        return bool(self.flags & USE_MY_METRICS)

    @property
    def scaled_offset(self) -> bool:
        """Whether the offset is transformed along with the outline.

        Unscaled is the default when neither or both offset flags are set.
        """
        return bool(self.flags & SCALED_COMPONENT_OFFSET) and not (
            self.flags & UNSCALED_COMPONENT_OFFSET
        )

    @property
    def overlap(self) -> bool:
        return bool(self.flags & OVERLAP_COMPOUND)


@dataclass(frozen=True, slots=True)
class SimpleGlyphData:
    """Outline described directly by contours of points.

    Attributes:
        end_points_of_contours: Index of the last point of each contour
        coordinates: All points of all contours, in contour order
        instructions: Hinting bytecode, kept verbatim and never executed
    """

    end_points_of_contours: tuple[int, ...]
    coordinates: tuple[Point, ...]
    instructions: bytes = b""

    @property
    def number_of_contours(self) -> int:
        return len(self.end_points_of_contours)

    def contours(self) -> list[tuple[Point, ...]]:
        """Split coordinates into one point sequence per contour."""
        result = []
        start = 0
        for end in self.end_points_of_contours:
            result.append(self.coordinates[start : end + 1])
            start = end + 1
        return result


@dataclass(frozen=True, slots=True)
class CompoundGlyphData:
    """Outline built by positioning and transforming other glyphs."""

    components: tuple[Component, ...]
    instructions: bytes = b""


@dataclass(frozen=True, slots=True)
class EmptyGlyphData:
    """Zero-length glyf entry (space and other blank glyphs)."""


GlyphData = SimpleGlyphData | CompoundGlyphData | EmptyGlyphData


@dataclass(frozen=True, slots=True)
class Glyph:
    """A decoded glyph with its horizontal metrics.

    Attributes:
        id: Glyph id within the owning font
        description: Bounding box from the glyph header
        data: Simple, compound or empty outline data
        advance_width: Horizontal advance in font units
        left_side_bearing: Left side bearing in font units
    """

    id: int
    description: GlyphDescription
    data: GlyphData
    advance_width: int
    left_side_bearing: int

    def is_simple(self) -> bool:
        return isinstance(self.data, SimpleGlyphData)

    def is_compound(self) -> bool:
        return isinstance(self.data, CompoundGlyphData)

    def is_empty(self) -> bool:
        """Check if glyph has no outline.

        Zero-length glyf entries and simple glyphs with zero contours
        both count as empty.
        """
        if isinstance(self.data, EmptyGlyphData):
            return True
        return isinstance(self.data, SimpleGlyphData) and not self.data.coordinates

    @property
    def kind(self) -> str:
        if isinstance(self.data, SimpleGlyphData):
            return "simple"
        if isinstance(self.data, CompoundGlyphData):
            return "compound"
        return "empty"

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary.

        Returns:
            Dictionary representation of the glyph
        """
        result: dict[str, Any] = {
            "id": self.id,
            "kind": self.kind,
            "description": self.description.to_dict(),
            "advance_width": self.advance_width,
            "left_side_bearing": self.left_side_bearing,
        }
        if isinstance(self.data, SimpleGlyphData):
            result["end_points_of_contours"] = list(self.data.end_points_of_contours)
            result["coordinates"] = [p.to_dict() for p in self.data.coordinates]
        elif isinstance(self.data, CompoundGlyphData):
            result["components"] = [
                {"glyph_id": c.glyph_id, "dx": c.dx, "dy": c.dy, "flags": c.flags}
                for c in self.data.components
            ]
        return result


@dataclass(frozen=True, slots=True)
class ShapedGlyph:
    """A glyph placed at a pen position by the shaper.

    Attributes:
        glyph: The decoded glyph (or its substitute)
        pen_x: Pen X in font units where the glyph origin sits
        pen_y: Pen Y in font units (baseline)
        char: Source character
        fallback: True when the glyph was substituted after a decode error
    """

    glyph: Glyph
    pen_x: int
    pen_y: int
    char: str = field(default="")
    fallback: bool = False

    @property
    def glyph_id(self) -> int:
        return self.glyph.id
