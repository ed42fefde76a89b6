"""Unit tests for the bounds-checked byte cursor."""

import struct

import pytest

from glyphkit.exceptions import FormatError, TruncatedBufferError
from glyphkit.io.cursor import ByteCursor


class TestByteCursorReads:
    """Tests for big-endian scalar reads."""

    def test_integer_reads(self):
        """Test every integer width reads big-endian and advances."""
        data = struct.pack(">BbHhIi", 0xFE, -2, 0xBEEF, -300, 0xDEADBEEF, -70000)
        cursor = ByteCursor(data)

        assert cursor.u8() == 0xFE
        assert cursor.i8() == -2
        assert cursor.u16() == 0xBEEF
        assert cursor.i16() == -300
        assert cursor.u32() == 0xDEADBEEF
        assert cursor.i32() == -70000
        assert cursor.remaining == 0

    def test_f2dot14(self):
        """Test 2.14 fixed-point decoding of common transform values."""
        data = struct.pack(">4h", 0x4000, 0x2000, -0x4000, 0x7FFF)
        cursor = ByteCursor(data)

        assert cursor.f2dot14() == 1.0
        assert cursor.f2dot14() == 0.5
        assert cursor.f2dot14() == -1.0
        assert cursor.f2dot14() == pytest.approx(1.99994, abs=1e-5)

    def test_fixed(self):
        """Test 16.16 fixed-point decoding."""
        cursor = ByteCursor(struct.pack(">i", 0x00018000))
        assert cursor.fixed() == 1.5

    def test_tag(self):
        """Test four-byte tags decode as text."""
        assert ByteCursor(b"glyf").tag() == "glyf"

    def test_arrays(self):
        """Test array reads return tuples of the right signedness."""
        cursor = ByteCursor(struct.pack(">2H2h2I", 1, 65535, -1, 2, 7, 0xFFFFFFFF))

        assert cursor.array_u16(2) == (1, 65535)
        assert cursor.array_i16(2) == (-1, 2)
        assert cursor.array_u32(2) == (7, 0xFFFFFFFF)

    def test_read_bytes(self):
        """Test raw byte reads copy out of the buffer."""
        cursor = ByteCursor(b"abcdef")
        cursor.skip(2)
        assert cursor.read(3) == b"cde"
        assert cursor.position == 5


class TestByteCursorBounds:
    """Tests for truncation handling."""

    def test_read_past_end(self):
        """Test a read past the end raises with the table tag and counts."""
        cursor = ByteCursor(b"\x00\x01\x02", table="maxp")
        cursor.u16()

        with pytest.raises(TruncatedBufferError) as exc_info:
            cursor.u16()

        error = exc_info.value
        assert error.table == "maxp"
        assert error.offset == 2
        assert error.needed == 2
        assert error.available == 1

    def test_failed_read_does_not_advance(self):
        """Test the position is unchanged after a failed read."""
        cursor = ByteCursor(b"\x00")
        with pytest.raises(TruncatedBufferError):
            cursor.u32()
        assert cursor.position == 0
        assert cursor.u8() == 0

    def test_truncation_is_format_error(self):
        """Test truncation is part of the format error family."""
        with pytest.raises(FormatError):
            ByteCursor(b"").u8()

    def test_seek_out_of_range(self):
        """Test seeking outside the buffer raises."""
        cursor = ByteCursor(b"abcd")
        cursor.seek(4)
        with pytest.raises(TruncatedBufferError):
            cursor.seek(5)

    def test_array_too_long(self):
        """Test an array longer than the buffer raises."""
        with pytest.raises(TruncatedBufferError):
            ByteCursor(b"\x00\x01\x00").array_u16(2)


class TestSubCursor:
    """Tests for sub-range cursors."""

    def test_sub_reads_slice(self):
        """Test a sub cursor starts at the slice and keeps the absolute base."""
        cursor = ByteCursor(b"\x00\x00\x00\x2a\x00\x07", table="cmap")
        sub = cursor.sub(2, 4)

        assert len(sub) == 4
        assert sub.u16() == 0x2A
        assert sub.base == 2
        assert sub.table == "cmap"

    def test_sub_errors_report_absolute_offset(self):
        """Test errors from a sub cursor report file offsets."""
        sub = ByteCursor(b"\x00" * 8, table="head").sub(4, 2)
        sub.u16()
        with pytest.raises(TruncatedBufferError) as exc_info:
            sub.u8()
        assert exc_info.value.offset == 6

    def test_sub_out_of_range(self):
        """Test a sub range past the buffer raises for the named table."""
        with pytest.raises(TruncatedBufferError) as exc_info:
            ByteCursor(b"\x00" * 8).sub(4, 8, table="glyf")
        assert exc_info.value.table == "glyf"

    def test_does_not_mutate_buffer(self):
        """Test reading never changes the source bytes."""
        data = bytearray(b"\x01\x02\x03\x04")
        cursor = ByteCursor(bytes(data))
        cursor.u32()
        assert data == bytearray(b"\x01\x02\x03\x04")
