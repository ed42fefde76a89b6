"""Font reader for loading TrueType files from disk.

The parser itself works on bytes; FontReader is the one place that touches
the filesystem.
"""

from collections.abc import Iterator
from pathlib import Path
from typing import TYPE_CHECKING

from glyphkit.config import ParserConfig
from glyphkit.domain.glyph import Glyph
from glyphkit.exceptions import FormatError
from glyphkit.utils.logging import get_logger

if TYPE_CHECKING:
    from glyphkit.core.font import Font

logger = get_logger(__name__)


class FontReader:
    """Loads a TTF file and exposes its glyphs.

    Example:
        with FontReader(Path("font.ttf")) as reader:
            for glyph in reader.iter_glyphs():
                print(glyph.id, glyph.kind)
    """

    def __init__(self, font_path: Path, config: ParserConfig | None = None) -> None:
        """Initialize the font reader.

        Args:
            font_path: Path to the TTF font file
            config: Parser settings (defaults if None)
        """
        self._font_path = font_path
        self._config = config
        self._font: "Font | None" = None

    def load(self) -> None:
        """Read and parse the font file.

        Raises:
            FileNotFoundError: If font file does not exist
            FormatError: If the file is not a valid TrueType font
        """
        from glyphkit.core.font import parse

        if not self._font_path.exists():
            raise FileNotFoundError(f"Font file not found: {self._font_path}")

        self._font = parse(self._font_path.read_bytes(), self._config)
        logger.info("Font loaded", path=str(self._font_path), glyphs=self._font.num_glyphs)

    @property
    def font(self) -> "Font":
        """The parsed font.

        Raises:
            RuntimeError: If font has not been loaded yet
        """
        if self._font is None:
            raise RuntimeError("Font not loaded. Call load() first.")
        return self._font

    @property
    def format(self) -> str:
        """Outline flavor; only glyf-based fonts parse, so always 'TrueType'."""
        if self._font is None:
            raise RuntimeError("Font not loaded. Call load() first.")
        return "TrueType"

    @property
    def units_per_em(self) -> int:
        return self.font.units_per_em

    @property
    def glyph_count(self) -> int:
        return self.font.glyph_count()

    def iter_glyphs(self) -> Iterator[Glyph]:
        """Iterate over all decodable glyphs in glyph id order.

        Raises:
            RuntimeError: If font has not been loaded yet
        """
        return self.font.glyphs()

    def get_glyph(self, glyph_id: int) -> Glyph | None:
        """Get a specific glyph by id.

        Returns:
            Glyph, or None if the id is out of range or the glyph is malformed

        Raises:
            RuntimeError: If font has not been loaded yet
        """
        try:
            return self.font.glyph(glyph_id)
        except FormatError as e:
            logger.debug("Glyph unavailable", glyph_id=glyph_id, error=str(e))
            return None

    def close(self) -> None:
        """Drop the parsed font."""
        self._font = None

    def __enter__(self) -> "FontReader":
        """Context manager entry."""
        self.load()
        return self

    def __exit__(self, _exc_type: object, _exc_val: object, _exc_tb: object) -> None:
        """Context manager exit."""
        self.close()
