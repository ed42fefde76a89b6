"""Unit tests for sfnt table directory parsing."""

import struct

import pytest

from glyphkit.exceptions import BadMagicError, MissingTableError, TruncatedBufferError
from glyphkit.io.directory import REQUIRED_TABLES, checksum, parse_table_directory


class TestParseTableDirectory:
    """Tests for parse_table_directory."""

    def test_records(self, raw_font):
        """Test each table gets a record with its offset and length."""
        tables = raw_font.tables()
        data = raw_font.sfnt(tables)

        directory = parse_table_directory(data)

        assert directory.sfnt_version == 0x00010000
        assert directory.tags == list(tables)
        assert len(directory) == len(tables)
        for tag, table in tables.items():
            assert directory.table_bytes(data, tag) == table
            assert directory.record(tag).length == len(table)

    @pytest.mark.parametrize("version", [0x00010000, 0x74727565, 0x74797031])
    def test_accepted_versions(self, raw_font, version):
        """Test 1.0, 'true' and 'typ1' versions are accepted."""
        data = raw_font.sfnt(raw_font.tables(), version=version)
        assert parse_table_directory(data).sfnt_version == version

    @pytest.mark.parametrize("version", [0x4F54544F, 0x74746366, 0x00020000])
    def test_bad_magic(self, raw_font, version):
        """Test CFF, collection and unknown versions are rejected."""
        data = raw_font.sfnt(raw_font.tables(), version=version)
        with pytest.raises(BadMagicError) as exc_info:
            parse_table_directory(data)
        assert exc_info.value.version == version

    def test_record_past_end(self, raw_font):
        """Test a record whose range exceeds the file raises for that tag."""
        data = raw_font.sfnt({"head": raw_font.head()})
        truncated = data[:-8]

        with pytest.raises(TruncatedBufferError) as exc_info:
            parse_table_directory(truncated)
        assert exc_info.value.table == "head"

    def test_truncated_header(self):
        """Test a buffer shorter than the offset subtable raises."""
        with pytest.raises(TruncatedBufferError):
            parse_table_directory(struct.pack(">IH", 0x00010000, 3))

    def test_truncated_record_array(self):
        """Test a directory cut off inside its records raises."""
        data = struct.pack(">IHHHH", 0x00010000, 2, 0, 0, 0) + b"head"
        with pytest.raises(TruncatedBufferError):
            parse_table_directory(data)


class TestTableDirectory:
    """Tests for TableDirectory lookups."""

    def test_missing_table(self, raw_font):
        """Test looking up an absent tag raises MissingTableError."""
        tables = raw_font.tables()
        del tables["hmtx"]
        directory = parse_table_directory(raw_font.sfnt(tables))

        assert "hmtx" not in directory
        with pytest.raises(MissingTableError) as exc_info:
            directory.require(*REQUIRED_TABLES)
        assert exc_info.value.tag == "hmtx"

    def test_cursor_is_scoped_to_table(self, raw_font):
        """Test a table cursor cannot read into the next table."""
        data = raw_font.sfnt(raw_font.tables())
        directory = parse_table_directory(data)

        cursor = directory.cursor(data, "maxp")
        assert len(cursor) == 6
        assert cursor.table == "maxp"


class TestChecksums:
    """Tests for table checksum verification."""

    def test_checksum_pads_with_zeros(self):
        """Test the checksum sums zero-padded big-endian words."""
        assert checksum(b"\x00\x00\x00\x01\x00\x00\x00\x02") == 3
        assert checksum(b"\x01") == 0x01000000
        assert checksum(b"\xff\xff\xff\xff\x00\x00\x00\x02") == 1

    def test_valid_font_has_no_mismatches(self, raw_font):
        """Test freshly assembled tables all verify."""
        data = raw_font.sfnt(raw_font.tables())
        assert parse_table_directory(data).verify_checksums(data) == []

    def test_head_adjustment_is_ignored(self, raw_font):
        """Test head's checkSumAdjustment field is excluded from its checksum."""
        tables = raw_font.tables()
        data = bytearray(raw_font.sfnt(tables))
        directory = parse_table_directory(bytes(data))
        head_offset = directory.record("head").offset
        data[head_offset + 8 : head_offset + 12] = b"\x12\x34\x56\x78"

        assert directory.verify_checksums(bytes(data)) == []

    def test_corrupted_table_is_reported(self, raw_font):
        """Test a changed byte makes its table fail verification."""
        data = bytearray(raw_font.sfnt(raw_font.tables()))
        directory = parse_table_directory(bytes(data))
        glyf = directory.record("glyf")
        data[glyf.offset] ^= 0xFF

        assert directory.verify_checksums(bytes(data)) == ["glyf"]
