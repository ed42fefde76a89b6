"""Binary reading layer for glyphkit.

This module reads the sfnt container and the fixed-layout tables. It also
holds the only filesystem access in the package and the bridge to
fontTools pens.

Key responsibilities:
- Bounds-checked big-endian reads
- Table directory parsing and checksum verification
- head, maxp, hhea, hmtx, loca and cmap decoding
- Loading fonts from disk
- Replaying outlines onto fontTools pens

Key classes:
- ByteCursor: Bounds-checked reader over a byte buffer
- TableDirectory: Tag to table record lookup
- CharacterMap: Unicode to glyph id mapping
- FontReader: Load a font file and iterate its glyphs
"""

from glyphkit.io.cmap import CharacterMap, parse_cmap
from glyphkit.io.cursor import ByteCursor
from glyphkit.io.directory import TableDirectory, TableRecord, parse_table_directory
from glyphkit.io.pens import draw_path, svg_path
from glyphkit.io.reader import FontReader
from glyphkit.io.tables import HorizontalMetrics, LocaFormat

__all__ = [
    "ByteCursor",
    "CharacterMap",
    "FontReader",
    "HorizontalMetrics",
    "LocaFormat",
    "TableDirectory",
    "TableRecord",
    "draw_path",
    "parse_cmap",
    "parse_table_directory",
    "svg_path",
]
