"""Fixed-layout metrics tables: head, maxp, hhea, hmtx and loca."""

from dataclasses import dataclass
from enum import IntEnum

from glyphkit.exceptions import MalformedTableError
from glyphkit.io.cursor import ByteCursor

HEAD_MAGIC_NUMBER = 0x5F0F3CF5
MIN_UNITS_PER_EM = 16
MAX_UNITS_PER_EM = 16384


class LocaFormat(IntEnum):
    """head.indexToLocFormat values."""

    SHORT = 0  # uint16 offsets stored divided by two
    LONG = 1  # uint32 offsets


@dataclass(frozen=True, slots=True)
class HeadTable:
    """Font header fields the decoder needs."""

    units_per_em: int
    index_to_loc_format: LocaFormat
    flags: int
    x_min: int
    y_min: int
    x_max: int
    y_max: int
    mac_style: int
    magic_number: int
    glyph_data_format: int


@dataclass(frozen=True, slots=True)
class MaxpTable:
    version: int
    num_glyphs: int


@dataclass(frozen=True, slots=True)
class HheaTable:
    ascender: int
    descender: int
    line_gap: int
    advance_width_max: int
    number_of_h_metrics: int


@dataclass(frozen=True, slots=True)
class HorizontalMetrics:
    """Decoded hmtx table.

    Attributes:
        long_metrics: (advance_width, left_side_bearing) per glyph below numberOfHMetrics
        left_side_bearings: Trailing bearings for the remaining glyph ids
    """

    long_metrics: tuple[tuple[int, int], ...]
    left_side_bearings: tuple[int, ...]

    def lookup(self, glyph_id: int) -> tuple[int, int]:
        """Return (advance_width, left_side_bearing) for a glyph id.

        Glyph ids past the long metrics reuse the last advance width. Their
        bearing comes from the trailing array, or 0 when the array stops short.
        """
        if glyph_id < len(self.long_metrics):
            return self.long_metrics[glyph_id]
        advance = self.long_metrics[-1][0]
        index = glyph_id - len(self.long_metrics)
        if index < len(self.left_side_bearings):
            return (advance, self.left_side_bearings[index])
        return (advance, 0)


def parse_head(cursor: ByteCursor) -> HeadTable:
    """Decode the head table.

    Raises:
        TruncatedBufferError: If the table is shorter than 54 bytes
        MalformedTableError: On a bad magic number, loca format or unitsPerEm
    """
    cursor.skip(12)  # version, fontRevision, checkSumAdjustment
    magic_number = cursor.u32()
    flags = cursor.u16()
    units_per_em = cursor.u16()
    cursor.skip(16)  # created, modified
    x_min = cursor.i16()
    y_min = cursor.i16()
    x_max = cursor.i16()
    y_max = cursor.i16()
    mac_style = cursor.u16()
    cursor.skip(4)  # lowestRecPPEM, fontDirectionHint
    index_to_loc_format = cursor.i16()
    glyph_data_format = cursor.i16()

    if magic_number != HEAD_MAGIC_NUMBER:
        raise MalformedTableError("head", f"bad magic number 0x{magic_number:08X}")
    if index_to_loc_format not in (LocaFormat.SHORT, LocaFormat.LONG):
        raise MalformedTableError("head", f"unknown indexToLocFormat {index_to_loc_format}")
    if not MIN_UNITS_PER_EM <= units_per_em <= MAX_UNITS_PER_EM:
        raise MalformedTableError("head", f"unitsPerEm {units_per_em} out of range")

    return HeadTable(
        units_per_em=units_per_em,
        index_to_loc_format=LocaFormat(index_to_loc_format),
        flags=flags,
        x_min=x_min,
        y_min=y_min,
        x_max=x_max,
        y_max=y_max,
        mac_style=mac_style,
        magic_number=magic_number,
        glyph_data_format=glyph_data_format,
    )


def parse_maxp(cursor: ByteCursor) -> MaxpTable:
    """Decode numGlyphs from maxp (version 0.5 and 1.0 share the prefix)."""
    version = cursor.u32()
    num_glyphs = cursor.u16()
    if num_glyphs == 0:
        raise MalformedTableError("maxp", "font has no glyphs")
    return MaxpTable(version=version, num_glyphs=num_glyphs)


def parse_hhea(cursor: ByteCursor, num_glyphs: int) -> HheaTable:
    """Decode the horizontal header.

    Raises:
        MalformedTableError: If numberOfHMetrics is 0 or exceeds numGlyphs
    """
    cursor.skip(4)  # version
    ascender = cursor.i16()
    descender = cursor.i16()
    line_gap = cursor.i16()
    advance_width_max = cursor.u16()
    cursor.skip(22)  # minLSB .. metricDataFormat
    number_of_h_metrics = cursor.u16()

    if number_of_h_metrics == 0:
        raise MalformedTableError("hhea", "numberOfHMetrics is 0")
    if number_of_h_metrics > num_glyphs:
        raise MalformedTableError(
            "hhea",
            f"numberOfHMetrics {number_of_h_metrics} exceeds numGlyphs {num_glyphs}",
        )

    return HheaTable(
        ascender=ascender,
        descender=descender,
        line_gap=line_gap,
        advance_width_max=advance_width_max,
        number_of_h_metrics=number_of_h_metrics,
    )


def parse_hmtx(cursor: ByteCursor, number_of_h_metrics: int, num_glyphs: int) -> HorizontalMetrics:
    """Decode longHorMetric records and the trailing bearing array.

    The long records must be present in full. The trailing array may be
    shorter than numGlyphs - numberOfHMetrics; missing entries read as 0.
    """
    raw = cursor.array_u16(2 * number_of_h_metrics)
    long_metrics = tuple(
        (raw[2 * i], _to_int16(raw[2 * i + 1])) for i in range(number_of_h_metrics)
    )
    trailing = min(num_glyphs - number_of_h_metrics, cursor.remaining // 2)
    left_side_bearings = cursor.array_i16(trailing)
    return HorizontalMetrics(long_metrics=long_metrics, left_side_bearings=left_side_bearings)


def parse_loca(cursor: ByteCursor, loca_format: LocaFormat, num_glyphs: int) -> tuple[int, ...]:
    """Decode numGlyphs + 1 absolute glyf offsets.

    Short offsets are stored halved and come back doubled.
    """
    count = num_glyphs + 1
    if loca_format == LocaFormat.SHORT:
        return tuple(offset * 2 for offset in cursor.array_u16(count))
    return cursor.array_u32(count)


def _to_int16(value: int) -> int:
    return value - 0x10000 if value & 0x8000 else value
