"""Parsed font value.

parse() reads the table directory and every fixed-layout table once and
returns an immutable Font. Glyphs are decoded on demand from the raw glyf
bytes the Font keeps.
"""

from collections.abc import Iterator
from dataclasses import dataclass

from glyphkit.config import ParserConfig
from glyphkit.core.glyf import decode_glyph, glyph_bytes
from glyphkit.core.outline import check_components, outline_path
from glyphkit.domain.glyph import CompoundGlyphData, Glyph
from glyphkit.domain.path import PathCommand
from glyphkit.exceptions import ChecksumMismatchError, FormatError, MalformedTableError
from glyphkit.io.cmap import NOTDEF_GLYPH_ID, CharacterMap, parse_cmap
from glyphkit.io.directory import REQUIRED_TABLES, TableDirectory, parse_table_directory
from glyphkit.io.tables import (
    HeadTable,
    HheaTable,
    HorizontalMetrics,
    LocaFormat,
    MaxpTable,
    parse_head,
    parse_hhea,
    parse_hmtx,
    parse_loca,
    parse_maxp,
)
from glyphkit.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True, eq=False)
class Font:
    """An immutable TrueType font.

    Safe to share between threads: nothing is mutated after parse().

    Attributes:
        directory: Table directory of the source buffer
        head: Font header
        maxp: Maximum profile (glyph count)
        hhea: Horizontal header
        metrics: Horizontal metrics per glyph id
        loca: numGlyphs + 1 absolute offsets into glyf
        glyf: Raw glyf table bytes
        cmap: Unicode to glyph id mapping
        max_compound_depth: Bound on compound glyph nesting
    """

    directory: TableDirectory
    head: HeadTable
    maxp: MaxpTable
    hhea: HheaTable
    metrics: HorizontalMetrics
    loca: tuple[int, ...]
    glyf: bytes
    cmap: CharacterMap
    max_compound_depth: int = 8

    @property
    def units_per_em(self) -> int:
        return self.head.units_per_em

    @property
    def num_glyphs(self) -> int:
        return self.maxp.num_glyphs

    @property
    def index_to_loc_format(self) -> LocaFormat:
        return self.head.index_to_loc_format

    def glyph_count(self) -> int:
        return self.maxp.num_glyphs

    def raw_glyph(self, glyph_id: int) -> Glyph:
        """Decode a glyph without following its component references.

        Raises:
            InvalidGlyphIndexError: If glyph_id is out of range
            MalformedGlyphError, MalformedTableError, TruncatedBufferError,
            UnsupportedCompoundEncodingError: If the glyph record is bad
        """
        description, data = decode_glyph(glyph_bytes(self.loca, self.glyf, glyph_id), glyph_id)

        metrics_id = glyph_id
        if isinstance(data, CompoundGlyphData):
            for component in data.components:
                if component.use_my_metrics and component.glyph_id < self.num_glyphs:
                    metrics_id = component.glyph_id
                    break
        advance_width, left_side_bearing = self.metrics.lookup(metrics_id)

        return Glyph(
            id=glyph_id,
            description=description,
            data=data,
            advance_width=advance_width,
            left_side_bearing=left_side_bearing,
        )

    def glyph(self, glyph_id: int) -> Glyph:
        """Decode a glyph.

        Compound glyphs have their whole reference graph checked, so a glyph
        returned here always resolves to an outline.

        Raises:
            InvalidGlyphIndexError: If glyph_id or a component id is out of range
            CompoundCycleError: If a component chain refers back to itself
            CompoundDepthError: If components nest deeper than max_compound_depth
            FormatError: For any other defect in the glyph record
        """
        glyph = self.raw_glyph(glyph_id)
        if isinstance(glyph.data, CompoundGlyphData):
            check_components(self, glyph)
        return glyph

    def glyph_id(self, char: str) -> int:
        """Glyph id for a single character, 0 when unmapped."""
        return self.cmap.lookup(ord(char))

    def glyph_for_char(self, char: str) -> Glyph:
        return self.glyph(self.glyph_id(char))

    def outline_path(self, glyph: Glyph | int) -> list[PathCommand]:
        """Path commands for a glyph or glyph id, resolving components."""
        if isinstance(glyph, int):
            glyph = self.glyph(glyph)
        return outline_path(glyph, self)

    def glyphs(self) -> Iterator[Glyph]:
        """Iterate over every glyph that decodes, in glyph id order.

        Glyphs that fail to decode are logged and skipped.
        """
        for glyph_id in range(self.num_glyphs):
            try:
                yield self.glyph(glyph_id)
            except FormatError as e:
                logger.warning(
                    "Skipping undecodable glyph",
                    glyph_id=glyph_id,
                    error=str(e),
                    error_type=type(e).__name__,
                )


def parse(data: bytes, config: ParserConfig | None = None) -> Font:
    """Parse a TrueType font binary.

    Args:
        data: Complete sfnt font file
        config: Parser settings (defaults if None)

    Returns:
        Immutable Font

    Raises:
        BadMagicError: If the sfnt version is not TrueType
        MissingTableError: If a required table is absent
        TruncatedBufferError: If a table is shorter than its layout requires
        MalformedTableError: If a table violates a structural invariant,
            including a .notdef glyph that does not decode
        ChecksumMismatchError: If strict checksum verification fails
    """
    if config is None:
        config = ParserConfig()
    data = bytes(data)

    directory = parse_table_directory(data)
    directory.require(*REQUIRED_TABLES)

    if config.verify_checksums or config.strict_checksums:
        failed = directory.verify_checksums(data)
        if failed:
            if config.strict_checksums:
                raise ChecksumMismatchError(failed)
            logger.warning("Table checksum mismatch", tables=failed)

    head = parse_head(directory.cursor(data, "head"))
    maxp = parse_maxp(directory.cursor(data, "maxp"))
    hhea = parse_hhea(directory.cursor(data, "hhea"), maxp.num_glyphs)
    metrics = parse_hmtx(directory.cursor(data, "hmtx"), hhea.number_of_h_metrics, maxp.num_glyphs)
    loca = parse_loca(directory.cursor(data, "loca"), head.index_to_loc_format, maxp.num_glyphs)
    cmap = parse_cmap(directory.cursor(data, "cmap"))

    font = Font(
        directory=directory,
        head=head,
        maxp=maxp,
        hhea=hhea,
        metrics=metrics,
        loca=loca,
        glyf=directory.table_bytes(data, "glyf"),
        cmap=cmap,
        max_compound_depth=config.max_compound_depth,
    )

    try:
        font.glyph(NOTDEF_GLYPH_ID)
    except FormatError as e:
        raise MalformedTableError("glyf", f".notdef glyph does not decode: {e}") from e

    logger.debug(
        "Font parsed",
        tables=directory.tags,
        num_glyphs=font.num_glyphs,
        units_per_em=font.units_per_em,
        loca_format=font.index_to_loc_format.name,
        cmap_format=cmap.format,
        mapped_chars=len(cmap),
    )
    return font
