"""Text shaping: string to positioned glyphs.

Each character maps to one glyph through the cmap and the pen advances by
that glyph's advance width. No kerning, ligatures or bidi reordering.
"""

from glyphkit.config import FallbackPolicy, ShaperConfig
from glyphkit.core.font import Font
from glyphkit.domain.glyph import EmptyGlyphData, Glyph, GlyphDescription, ShapedGlyph
from glyphkit.exceptions import FormatError
from glyphkit.io.cmap import NOTDEF_GLYPH_ID
from glyphkit.utils.logging import get_logger

logger = get_logger(__name__)


class Shaper:
    """Lays out a string as a row of glyphs in font units.

    Glyphs that fail to decode never abort the pass: they are logged and
    replaced according to the configured fallback policy.

    Example:
        shaper = Shaper(font)
        for shaped in shaper.shape("AB"):
            print(shaped.glyph_id, shaped.pen_x)
    """

    def __init__(self, font: Font, config: ShaperConfig | None = None) -> None:
        """Initialize the shaper.

        Args:
            font: Font to shape with
            config: Shaper settings (defaults if None)
        """
        self.font = font
        self.config = config or ShaperConfig()

    def shape(self, text: str) -> list[ShapedGlyph]:
        """Shape a string.

        Args:
            text: Characters to lay out

        Returns:
            One ShapedGlyph per character, in input order, with
            non-decreasing pen X

        Raises:
            FormatError: Only when the fallback policy is "raise"
        """
        shaped: list[ShapedGlyph] = []
        pen_x = self.config.origin_x
        pen_y = self.config.origin_y
        for char in text:
            glyph, fallback = self._glyph_for(char)
            shaped.append(ShapedGlyph(glyph=glyph, pen_x=pen_x, pen_y=pen_y, char=char, fallback=fallback))
            pen_x += glyph.advance_width
        return shaped

    def measure(self, text: str) -> int:
        """Total advance of a string in font units."""
        return sum(shaped.glyph.advance_width for shaped in self.shape(text))

    def scale_factor(self, size: float) -> float:
        """Multiplier from font units to a target em size."""
        return size / self.font.units_per_em

    def _glyph_for(self, char: str) -> tuple[Glyph, bool]:
        glyph_id = self.font.glyph_id(char)
        try:
            return self.font.glyph(glyph_id), False
        except FormatError as e:
            if self.config.fallback == FallbackPolicy.RAISE:
                raise
            logger.warning(
                "Substituting glyph",
                char=char,
                glyph_id=glyph_id,
                error=str(e),
                error_type=type(e).__name__,
                fallback=self.config.fallback.value,
            )
        if self.config.fallback == FallbackPolicy.NOTDEF:
            return self.font.glyph(NOTDEF_GLYPH_ID), True
        return self._empty_glyph(glyph_id), True

    def _empty_glyph(self, glyph_id: int) -> Glyph:
        metrics_id = glyph_id if glyph_id < self.font.num_glyphs else NOTDEF_GLYPH_ID
        advance_width, left_side_bearing = self.font.metrics.lookup(metrics_id)
        return Glyph(
            id=glyph_id,
            description=GlyphDescription.EMPTY,
            data=EmptyGlyphData(),
            advance_width=advance_width,
            left_side_bearing=left_side_bearing,
        )
