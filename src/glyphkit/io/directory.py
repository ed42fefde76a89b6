"""sfnt header and table directory.

The directory maps each four-byte table tag to its (offset, length) range
inside the font buffer.
"""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from glyphkit.exceptions import BadMagicError, MissingTableError, TruncatedBufferError
from glyphkit.io.cursor import ByteCursor

SFNT_VERSION_TRUETYPE = 0x00010000
SFNT_VERSION_TRUE = 0x74727565  # 'true'
SFNT_VERSION_TYP1 = 0x74797031  # 'typ1'

TRUETYPE_VERSIONS = frozenset({SFNT_VERSION_TRUETYPE, SFNT_VERSION_TRUE, SFNT_VERSION_TYP1})

REQUIRED_TABLES = ("head", "maxp", "hhea", "loca", "glyf", "hmtx", "cmap")

HEAD_CHECKSUM_ADJUSTMENT_OFFSET = 8


@dataclass(frozen=True, slots=True)
class TableRecord:
    """One table directory entry."""

    tag: str
    checksum: int
    offset: int
    length: int


@dataclass(frozen=True)
class TableDirectory:
    """Parsed sfnt header plus its table records.

    Attributes:
        sfnt_version: Version tag from the offset subtable
        records: Table records keyed by tag, in directory order
    """

    sfnt_version: int
    records: Mapping[str, TableRecord]

    def __post_init__(self) -> None:
        # Exposed read-only
        object.__setattr__(self, "records", MappingProxyType(dict(self.records)))

    @property
    def tags(self) -> list[str]:
        return list(self.records)

    def __contains__(self, tag: object) -> bool:
        return tag in self.records

    def __iter__(self) -> Iterator[TableRecord]:
        return iter(self.records.values())

    def __len__(self) -> int:
        return len(self.records)

    def record(self, tag: str) -> TableRecord:
        """Get the record for a table.

        Raises:
            MissingTableError: If the table is absent
        """
        try:
            return self.records[tag]
        except KeyError:
            raise MissingTableError(tag) from None

    def require(self, *tags: str) -> None:
        """Raise MissingTableError for the first absent tag."""
        for tag in tags:
            self.record(tag)

    def table_bytes(self, data: bytes, tag: str) -> bytes:
        """Slice a table's bytes out of the font buffer."""
        rec = self.record(tag)
        return data[rec.offset : rec.offset + rec.length]

    def cursor(self, data: bytes, tag: str) -> ByteCursor:
        """Open a cursor over one table."""
        rec = self.record(tag)
        return ByteCursor(data, table=tag).sub(rec.offset, rec.length)

    def verify_checksums(self, data: bytes) -> list[str]:
        """Return the tags whose stored checksum does not match their data."""
        failed = []
        for rec in self:
            table = self.table_bytes(data, rec.tag)
            if rec.tag == "head" and len(table) >= HEAD_CHECKSUM_ADJUSTMENT_OFFSET + 4:
                end = HEAD_CHECKSUM_ADJUSTMENT_OFFSET + 4
                table = table[:HEAD_CHECKSUM_ADJUSTMENT_OFFSET] + b"\0\0\0\0" + table[end:]
            if checksum(table) != rec.checksum:
                failed.append(rec.tag)
        return failed


def checksum(table: bytes) -> int:
    """Sum of big-endian uint32 words, zero padded, modulo 2**32."""
    padded = table + b"\0" * (-len(table) % 4)
    cursor = ByteCursor(padded)
    return sum(cursor.array_u32(len(padded) // 4)) & 0xFFFFFFFF


def parse_table_directory(data: bytes) -> TableDirectory:
    """Parse the offset subtable and table records.

    Args:
        data: Complete font file

    Returns:
        TableDirectory with one record per table

    Raises:
        BadMagicError: If the sfnt version is not a TrueType flavor
        TruncatedBufferError: If the directory or any table range exceeds the buffer
    """
    cursor = ByteCursor(data, table="sfnt")
    version = cursor.u32()
    if version not in TRUETYPE_VERSIONS:
        raise BadMagicError(version)

    num_tables = cursor.u16()
    cursor.skip(6)  # searchRange, entrySelector, rangeShift

    records: dict[str, TableRecord] = {}
    for _ in range(num_tables):
        tag = cursor.tag()
        table_checksum = cursor.u32()
        offset = cursor.u32()
        length = cursor.u32()
        if offset + length > len(data):
            raise TruncatedBufferError(
                tag,
                offset=offset,
                needed=length,
                available=max(len(data) - offset, 0),
            )
        records[tag] = TableRecord(tag, table_checksum, offset, length)

    return TableDirectory(sfnt_version=version, records=records)
