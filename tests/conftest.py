"""Shared fixtures: compiled sample fonts and a raw sfnt assembler.

Two kinds of font are built here. FontBuilder fonts are realistic binaries
compiled by fontTools, so decoded values can be cross-checked against
fontTools' own reading. Hand-assembled fonts let tests place exactly the
bytes a malformed font would contain.
"""

import io
import struct
from pathlib import Path

import pytest
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen
from fontTools.ttLib import TTFont

from glyphkit.core import parse
from glyphkit.core.glyf import encode_simple_glyph
from glyphkit.domain import Point, SimpleGlyphData
from glyphkit.domain.glyph import (
    ARG_1_AND_2_ARE_WORDS,
    ARGS_ARE_XY_VALUES,
    MORE_COMPONENTS,
    USE_MY_METRICS,
    WE_HAVE_A_SCALE,
    WE_HAVE_A_TWO_BY_TWO,
)

UNITS_PER_EM = 1000

# Glyph order of the compiled sample font
SAMPLE_GLYPH_ORDER = [
    ".notdef",
    "space",
    "A",
    "B",
    "O",
    "Aring",
    "Bmetrics",
    "T",
    "t",
]

SAMPLE_CMAP = {
    0x20: "space",
    0x41: "A",
    0x42: "B",
    0x4F: "O",
    0xC5: "Aring",
    0x54: "T",
    0x74: "t",
}

# advance widths; lsb is taken from each glyph's xMin
SAMPLE_ADVANCES = {
    ".notdef": 500,
    "space": 250,
    "A": 600,
    "B": 620,
    "O": 700,
    "Aring": 600,
    "Bmetrics": 999,
    "T": 640,
    "t": 640,
}


def _draw_sample_glyphs() -> dict:
    glyphs = {}

    pen = TTGlyphPen(None)
    pen.moveTo((50, 0))
    pen.lineTo((50, 700))
    pen.lineTo((450, 700))
    pen.lineTo((450, 0))
    pen.closePath()
    glyphs[".notdef"] = pen.glyph()

    glyphs["space"] = TTGlyphPen(None).glyph()

    pen = TTGlyphPen(None)
    pen.moveTo((0, 0))
    pen.lineTo((300, 700))
    pen.lineTo((600, 0))
    pen.closePath()
    glyphs["A"] = pen.glyph()

    # Stored points: (100,0) (100,700) (500,700)off (500,350) (500,0)off
    pen = TTGlyphPen(None)
    pen.moveTo((100, 0))
    pen.lineTo((100, 700))
    pen.qCurveTo((500, 700), (500, 350))
    pen.qCurveTo((500, 0), (100, 0))
    pen.closePath()
    glyphs["B"] = pen.glyph()

    # A contour made only of off-curve points
    pen = TTGlyphPen(None)
    pen.qCurveTo((0, 350), (350, 700), (700, 350), (350, 0), None)
    pen.closePath()
    glyphs["O"] = pen.glyph()

    pen = TTGlyphPen(glyphs)
    pen.addComponent("A", (1, 0, 0, 1, 100, 50))
    pen.addComponent("O", (0.5, 0, 0, 0.5, 10, 800))
    glyphs["Aring"] = pen.glyph()

    pen = TTGlyphPen(glyphs)
    pen.addComponent("B", (1, 0, 0, 1, 0, 0))
    glyphs["Bmetrics"] = pen.glyph(componentFlags=0x04 | USE_MY_METRICS)

    for name, x in (("T", 20), ("t", 40)):
        pen = TTGlyphPen(None)
        pen.moveTo((x, 0))
        pen.lineTo((x, 500))
        pen.lineTo((x + 100, 500))
        pen.lineTo((x + 100, 0))
        pen.closePath()
        glyphs[name] = pen.glyph()

    return glyphs


def build_sample_font(cmap: dict[int, str] | None = None, glyf_padding: int = 1) -> bytes:
    """Compile the sample font with fontTools' FontBuilder.

    Args:
        cmap: Code point to glyph name mapping (SAMPLE_CMAP if None)
        glyf_padding: Byte alignment of glyph records (4 forces short loca)

    Returns:
        The compiled font binary
    """
    fb = FontBuilder(UNITS_PER_EM, isTTF=True)
    fb.setupGlyphOrder(SAMPLE_GLYPH_ORDER)
    fb.setupCharacterMap(cmap if cmap is not None else SAMPLE_CMAP)
    fb.setupGlyf(_draw_sample_glyphs())
    fb.font["glyf"].padding = glyf_padding

    glyph_table = fb.font["glyf"]
    metrics = {
        name: (advance, getattr(glyph_table[name], "xMin", 0))
        for name, advance in SAMPLE_ADVANCES.items()
    }
    fb.setupHorizontalMetrics(metrics)
    fb.setupHorizontalHeader(ascent=800, descent=-200)
    fb.setupNameTable({"familyName": "Glyphkit Sample", "styleName": "Regular"})
    fb.setupOS2(sTypoAscender=800, usWinAscent=800, usWinDescent=200)
    fb.setupPost()

    buf = io.BytesIO()
    fb.save(buf)
    return buf.getvalue()


# ---------------------------------------------------------------------------
# Raw sfnt assembly
# ---------------------------------------------------------------------------


class RawFont:
    """Builders for hand-assembled font tables.

    Every builder returns bytes laid out exactly as in a font file, so a
    test can replace one table with a broken variant.
    """

    @staticmethod
    def head(units_per_em: int = UNITS_PER_EM, loca_format: int = 1, magic: int = 0x5F0F3CF5) -> bytes:
        return struct.pack(
            ">IIIIHHqqhhhhHHhhh",
            0x00010000,  # version
            0x00010000,  # fontRevision
            0,  # checkSumAdjustment
            magic,
            0,  # flags
            units_per_em,
            0,  # created
            0,  # modified
            0,
            0,
            600,
            700,
            0,  # macStyle
            8,  # lowestRecPPEM
            2,  # fontDirectionHint
            loca_format,
            0,  # glyphDataFormat
        )

    @staticmethod
    def maxp(num_glyphs: int) -> bytes:
        return struct.pack(">IH", 0x00005000, num_glyphs)

    @staticmethod
    def hhea(number_of_h_metrics: int, ascender: int = 800, descender: int = -200) -> bytes:
        return struct.pack(
            ">IhhhH11hH",
            0x00010000,
            ascender,
            descender,
            0,  # lineGap
            1000,  # advanceWidthMax
            *([0] * 11),
            number_of_h_metrics,
        )

    @staticmethod
    def hmtx(long_metrics: list[tuple[int, int]], left_side_bearings: list[int] = ()) -> bytes:
        data = b"".join(struct.pack(">Hh", adv, lsb) for adv, lsb in long_metrics)
        return data + b"".join(struct.pack(">h", lsb) for lsb in left_side_bearings)

    @staticmethod
    def loca(offsets: list[int], loca_format: int = 1) -> bytes:
        if loca_format == 0:
            return b"".join(struct.pack(">H", offset // 2) for offset in offsets)
        return b"".join(struct.pack(">I", offset) for offset in offsets)

    @staticmethod
    def glyf(records: list[bytes]) -> tuple[bytes, list[int]]:
        """Concatenate glyph records padded to 4 bytes; return (glyf, loca offsets)."""
        data = bytearray()
        offsets = []
        for record in records:
            offsets.append(len(data))
            data += record + b"\0" * (-len(record) % 4)
        offsets.append(len(data))
        return bytes(data), offsets

    @staticmethod
    def simple_glyph(contours: list[list[tuple[int, int, bool]]], instructions: bytes = b"") -> bytes:
        points = [Point(x, y, on) for contour in contours for x, y, on in contour]
        end_points = []
        total = 0
        for contour in contours:
            total += len(contour)
            end_points.append(total - 1)
        return encode_simple_glyph(
            SimpleGlyphData(tuple(end_points), tuple(points), instructions)
        )

    @staticmethod
    def compound_glyph(
        components: list[dict],
        bbox: tuple[int, int, int, int] = (0, 0, 0, 0),
    ) -> bytes:
        """Encode a compound glyph record.

        Each component dict takes glyph_id, dx, dy and optionally flags,
        scale (uniform) or matrix (xx, xy, yx, yy) and byte_args.
        """
        data = bytearray(struct.pack(">hhhhh", -1, *bbox))
        for index, component in enumerate(components):
            flags = component.get("flags", ARGS_ARE_XY_VALUES)
            if index < len(components) - 1:
                flags |= MORE_COMPONENTS
            byte_args = component.get("byte_args", False)
            if not byte_args:
                flags |= ARG_1_AND_2_ARE_WORDS
            if "scale" in component:
                flags |= WE_HAVE_A_SCALE
            elif "matrix" in component:
                flags |= WE_HAVE_A_TWO_BY_TWO

            data += struct.pack(">HH", flags, component["glyph_id"])
            if byte_args:
                data += struct.pack(">bb", component["dx"], component["dy"])
            else:
                data += struct.pack(">hh", component["dx"], component["dy"])
            if "scale" in component:
                data += struct.pack(">h", round(component["scale"] * 16384))
            elif "matrix" in component:
                data += struct.pack(">4h", *(round(v * 16384) for v in component["matrix"]))
        return bytes(data)

    @staticmethod
    def cmap_format4(segments: list[tuple[int, int, int, list[int] | None]]) -> bytes:
        """Encode a (3, 1) format 4 cmap.

        Each segment is (start, end, id_delta, glyph_ids); glyph_ids, when
        given, are reached through idRangeOffset. The 0xFFFF terminator is
        appended automatically.
        """
        segments = [*segments, (0xFFFF, 0xFFFF, 1, None)]
        seg_count = len(segments)
        glyph_array: list[int] = []
        range_offsets = []
        for index, (_, _, _, glyph_ids) in enumerate(segments):
            if glyph_ids is None:
                range_offsets.append(0)
            else:
                range_offsets.append(2 * (seg_count - index) + 2 * len(glyph_array))
                glyph_array.extend(glyph_ids)

        body = b"".join(
            [
                struct.pack(f">{seg_count}H", *(s[1] for s in segments)),
                b"\0\0",
                struct.pack(f">{seg_count}H", *(s[0] for s in segments)),
                struct.pack(f">{seg_count}H", *(s[2] & 0xFFFF for s in segments)),
                struct.pack(f">{seg_count}H", *range_offsets),
                struct.pack(f">{len(glyph_array)}H", *glyph_array),
            ]
        )
        subtable = struct.pack(">HHHHHHH", 4, 14 + len(body), 0, seg_count * 2, 0, 0, 0) + body
        return RawFont.cmap([((3, 1), subtable)])

    @staticmethod
    def cmap_format0(glyph_ids: dict[int, int]) -> bytes:
        table = bytearray(256)
        for code, glyph in glyph_ids.items():
            table[code] = glyph
        return struct.pack(">HHH", 0, 262, 0) + bytes(table)

    @staticmethod
    def cmap_format6(first_code: int, glyph_ids: list[int]) -> bytes:
        count = len(glyph_ids)
        return struct.pack(f">HHHHH{count}H", 6, 10 + 2 * count, 0, first_code, count, *glyph_ids)

    @staticmethod
    def cmap_format12(groups: list[tuple[int, int, int]]) -> bytes:
        data = struct.pack(">HHIII", 12, 0, 16 + 12 * len(groups), 0, len(groups))
        return data + b"".join(struct.pack(">III", *group) for group in groups)

    @staticmethod
    def cmap(subtables: list[tuple[tuple[int, int], bytes]]) -> bytes:
        """Wrap encoded subtables in a cmap header with encoding records."""
        header = struct.pack(">HH", 0, len(subtables))
        offset = 4 + 8 * len(subtables)
        records = b""
        bodies = b""
        for (platform_id, encoding_id), subtable in subtables:
            records += struct.pack(">HHI", platform_id, encoding_id, offset + len(bodies))
            bodies += subtable
        return header + records + bodies

    @staticmethod
    def checksum(table: bytes) -> int:
        padded = table + b"\0" * (-len(table) % 4)
        return sum(struct.unpack(f">{len(padded) // 4}I", padded)) & 0xFFFFFFFF

    @staticmethod
    def sfnt(tables: dict[str, bytes], version: int = 0x00010000) -> bytes:
        """Assemble a font file from table bytes, in the given tag order."""
        num_tables = len(tables)
        offset = 12 + 16 * num_tables
        header = struct.pack(">IHHHH", version, num_tables, 0, 0, 0)
        records = b""
        bodies = b""
        for tag, table in tables.items():
            records += struct.pack(
                ">4sIII", tag.encode("latin-1"), RawFont.checksum(table), offset + len(bodies), len(table)
            )
            bodies += table + b"\0" * (-len(table) % 4)
        return header + records + bodies

    @staticmethod
    def notdef_glyph() -> bytes:
        return RawFont.simple_glyph([[(50, 0, True), (50, 700, True), (450, 700, True), (450, 0, True)]])

    @staticmethod
    def triangle_glyph() -> bytes:
        return RawFont.simple_glyph([[(0, 0, True), (300, 700, True), (600, 0, True)]])

    @classmethod
    def tables(
        cls,
        records: list[bytes] | None = None,
        cmap: bytes | None = None,
        loca_format: int = 1,
        long_metrics: list[tuple[int, int]] | None = None,
        left_side_bearings: list[int] = (),
    ) -> dict[str, bytes]:
        """A complete table set: .notdef plus a triangle mapped to 'A' by default."""
        if records is None:
            records = [cls.notdef_glyph(), cls.triangle_glyph()]
        if cmap is None:
            cmap = cls.cmap_format4([(0x41, 0x41, 1 - 0x41, None)])
        if long_metrics is None:
            long_metrics = [(500, 50)] + [(600, 0)] * (len(records) - 1)

        glyf, offsets = cls.glyf(records)
        return {
            "cmap": cmap,
            "glyf": glyf,
            "head": cls.head(loca_format=loca_format),
            "hhea": cls.hhea(len(long_metrics)),
            "hmtx": cls.hmtx(long_metrics, left_side_bearings),
            "loca": cls.loca(offsets, loca_format),
            "maxp": cls.maxp(len(records)),
        }


@pytest.fixture(scope="session")
def sample_font_bytes() -> bytes:
    """Compiled sample font binary."""
    return build_sample_font()


@pytest.fixture
def sample_font(sample_font_bytes):
    """Parsed sample font."""
    return parse(sample_font_bytes)


@pytest.fixture
def sample_ttfont(sample_font_bytes) -> TTFont:
    """The sample font as read by fontTools."""
    return TTFont(io.BytesIO(sample_font_bytes))


@pytest.fixture
def sample_font_path(sample_font_bytes, tmp_path) -> Path:
    """The sample font written to disk."""
    path = tmp_path / "GlyphkitSample-Regular.ttf"
    path.write_bytes(sample_font_bytes)
    return path


@pytest.fixture
def raw_font() -> type[RawFont]:
    """Table builders for hand-assembled fonts."""
    return RawFont

