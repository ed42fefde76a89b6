"""Character to glyph mapping (cmap table).

The table holds several encoding subtables. The first Unicode subtable in
SUBTABLE_PREFERENCE that decodes becomes the font's character map.
Formats 0, 4, 6 and 12 are supported; format 4 covers the Basic
Multilingual Plane and format 12 the supplementary planes.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from glyphkit.exceptions import FormatError, MalformedTableError
from glyphkit.io.cursor import ByteCursor
from glyphkit.utils.logging import get_logger

logger = get_logger(__name__)

NOTDEF_GLYPH_ID = 0

SUBTABLE_PREFERENCE: tuple[tuple[int, int], ...] = (
    (3, 10),
    (0, 6),
    (0, 4),
    (3, 1),
    (0, 3),
    (0, 2),
    (0, 1),
    (0, 0),
    (3, 0),
)

MAX_UNICODE = 0x10FFFF


@dataclass(frozen=True)
class CharacterMap:
    """Decoded Unicode scalar to glyph id mapping.

    Attributes:
        mapping: Code point to glyph id for every mapped scalar
        format: Subtable format the mapping was decoded from
        platform: (platformID, encodingID) of that subtable
    """

    mapping: Mapping[int, int] = field(default_factory=dict)
    format: int = 4
    platform: tuple[int, int] = (3, 1)

    def __post_init__(self) -> None:
        # Exposed read-only
        object.__setattr__(self, "mapping", MappingProxyType(dict(self.mapping)))

    def lookup(self, codepoint: int) -> int:
        """Resolve a code point to a glyph id, 0 (.notdef) when unmapped."""
        return self.mapping.get(codepoint, NOTDEF_GLYPH_ID)

    def __contains__(self, codepoint: object) -> bool:
        return codepoint in self.mapping

    def __len__(self) -> int:
        return len(self.mapping)


def parse_cmap(cursor: ByteCursor) -> CharacterMap:
    """Decode the preferred Unicode subtable of a cmap table.

    Args:
        cursor: Cursor over the complete cmap table

    Returns:
        CharacterMap built from the first supported subtable

    Raises:
        MalformedTableError: If no Unicode subtable decodes
        TruncatedBufferError: If the subtable index is short
    """
    cursor.u16()  # version
    num_subtables = cursor.u16()
    offsets: dict[tuple[int, int], int] = {}
    for _ in range(num_subtables):
        platform_id = cursor.u16()
        encoding_id = cursor.u16()
        offsets.setdefault((platform_id, encoding_id), cursor.u32())

    last_error: FormatError | None = None
    for platform in SUBTABLE_PREFERENCE:
        if platform not in offsets:
            continue
        offset = offsets[platform]
        try:
            sub = cursor.sub(offset, len(cursor) - offset)
            fmt = sub.u16()
            decoder = _DECODERS.get(fmt)
            if decoder is None:
                logger.debug("Skipping unsupported cmap subtable", platform=platform, format=fmt)
                continue
            mapping = decoder(sub)
        except FormatError as e:
            logger.warning(
                "Skipping undecodable cmap subtable",
                platform=platform,
                error=str(e),
                error_type=type(e).__name__,
            )
            last_error = e
            continue
        return CharacterMap(mapping=mapping, format=fmt, platform=platform)

    if last_error is not None:
        raise MalformedTableError("cmap", f"no Unicode subtable decodes ({last_error})") from last_error
    raise MalformedTableError("cmap", "no supported Unicode subtable")


def _decode_format_0(cursor: ByteCursor) -> dict[int, int]:
    cursor.skip(4)  # length, language
    return {code: glyph for code, glyph in enumerate(cursor.read(256)) if glyph}


def _decode_format_4(cursor: ByteCursor) -> dict[int, int]:
    cursor.skip(4)  # length, language
    seg_count = cursor.u16() // 2
    cursor.skip(6)  # searchRange, entrySelector, rangeShift
    end_codes = cursor.array_u16(seg_count)
    cursor.skip(2)  # reservedPad
    start_codes = cursor.array_u16(seg_count)
    id_deltas = cursor.array_u16(seg_count)
    id_range_offsets_pos = cursor.position
    id_range_offsets = cursor.array_u16(seg_count)

    mapping: dict[int, int] = {}
    for seg in range(seg_count):
        start, end = start_codes[seg], end_codes[seg]
        delta, range_offset = id_deltas[seg], id_range_offsets[seg]
        if start > end:
            raise MalformedTableError("cmap", f"format 4 segment {seg} has start > end")
        for code in range(start, end + 1):
            if code == 0xFFFF:
                break
            if range_offset == 0:
                glyph = (code + delta) & 0xFFFF
            else:
                # idRangeOffset is relative to its own position in the array
                pos = id_range_offsets_pos + 2 * seg + range_offset + 2 * (code - start)
                cursor.seek(pos)
                glyph = cursor.u16()
                if glyph != 0:
                    glyph = (glyph + delta) & 0xFFFF
            if glyph:
                mapping[code] = glyph
    return mapping


def _decode_format_6(cursor: ByteCursor) -> dict[int, int]:
    cursor.skip(4)  # length, language
    first_code = cursor.u16()
    entry_count = cursor.u16()
    glyphs = cursor.array_u16(entry_count)
    return {first_code + i: glyph for i, glyph in enumerate(glyphs) if glyph}


def _decode_format_12(cursor: ByteCursor) -> dict[int, int]:
    cursor.skip(10)  # reserved, length, language
    num_groups = cursor.u32()
    mapping: dict[int, int] = {}
    for _ in range(num_groups):
        start_code = cursor.u32()
        end_code = cursor.u32()
        start_glyph = cursor.u32()
        if start_code > end_code or end_code > MAX_UNICODE:
            raise MalformedTableError(
                "cmap", f"format 12 group 0x{start_code:X}-0x{end_code:X} is invalid"
            )
        for code in range(start_code, end_code + 1):
            glyph = start_glyph + (code - start_code)
            if glyph:
                mapping[code] = glyph
    return mapping


_DECODERS = {
    0: _decode_format_0,
    4: _decode_format_4,
    6: _decode_format_6,
    12: _decode_format_12,
}
