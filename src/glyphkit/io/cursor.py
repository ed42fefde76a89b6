"""Bounds-checked big-endian reader over a font buffer."""

import struct

from glyphkit.exceptions import TruncatedBufferError

_U8 = struct.Struct(">B")
_I8 = struct.Struct(">b")
_U16 = struct.Struct(">H")
_I16 = struct.Struct(">h")
_U32 = struct.Struct(">I")
_I32 = struct.Struct(">i")


class ByteCursor:
    """Sequential reader over an immutable byte buffer.

    Every read checks the remaining length first and raises
    TruncatedBufferError naming the table being read, so a short buffer
    never surfaces as a bare struct.error.

    Example:
        cursor = ByteCursor(data, table="head")
        cursor.skip(18)
        units_per_em = cursor.u16()
    """

    __slots__ = ("_data", "_pos", "table", "base")

    def __init__(self, data: bytes, table: str = "", offset: int = 0, base: int = 0) -> None:
        """Initialize the cursor.

        Args:
            data: Buffer to read from
            table: Table tag used in error messages
            offset: Initial read position
            base: Absolute offset of `data` within the font file, for error messages
        """
        self._data = memoryview(data)
        self._pos = offset
        self.table = table
        self.base = base

    @property
    def position(self) -> int:
        return self._pos

    @property
    def remaining(self) -> int:
        return max(len(self._data) - self._pos, 0)

    def __len__(self) -> int:
        return len(self._data)

    def _require(self, size: int) -> int:
        pos = self._pos
        if size < 0 or pos + size > len(self._data):
            raise TruncatedBufferError(
                self.table,
                offset=self.base + pos,
                needed=size,
                available=self.remaining,
            )
        self._pos = pos + size
        return pos

    def seek(self, position: int) -> None:
        if position < 0 or position > len(self._data):
            raise TruncatedBufferError(
                self.table,
                offset=self.base + position,
                needed=0,
                available=len(self._data),
            )
        self._pos = position

    def skip(self, size: int) -> None:
        self._require(size)

    def u8(self) -> int:
        return _U8.unpack_from(self._data, self._require(1))[0]

    def i8(self) -> int:
        return _I8.unpack_from(self._data, self._require(1))[0]

    def u16(self) -> int:
        return _U16.unpack_from(self._data, self._require(2))[0]

    def i16(self) -> int:
        return _I16.unpack_from(self._data, self._require(2))[0]

    def u32(self) -> int:
        return _U32.unpack_from(self._data, self._require(4))[0]

    def i32(self) -> int:
        return _I32.unpack_from(self._data, self._require(4))[0]

    def f2dot14(self) -> float:
        """Signed 2.14 fixed-point number."""
        return self.i16() / (1 << 14)

    def fixed(self) -> float:
        """Signed 16.16 fixed-point number."""
        return self.i32() / (1 << 16)

    def tag(self) -> str:
        """Four-byte table tag decoded as latin-1."""
        return self.read(4).decode("latin-1")

    def read(self, size: int) -> bytes:
        pos = self._require(size)
        return self._data[pos : pos + size].tobytes()

    def array_u16(self, count: int) -> tuple[int, ...]:
        pos = self._require(2 * count)
        return struct.unpack_from(f">{count}H", self._data, pos)

    def array_i16(self, count: int) -> tuple[int, ...]:
        pos = self._require(2 * count)
        return struct.unpack_from(f">{count}h", self._data, pos)

    def array_u32(self, count: int) -> tuple[int, ...]:
        pos = self._require(4 * count)
        return struct.unpack_from(f">{count}I", self._data, pos)

    def sub(self, offset: int, length: int, table: str | None = None) -> "ByteCursor":
        """Return a cursor over data[offset:offset+length].

        Raises:
            TruncatedBufferError: If the range runs past the buffer
        """
        if offset < 0 or length < 0 or offset + length > len(self._data):
            raise TruncatedBufferError(
                table or self.table,
                offset=self.base + offset,
                needed=length,
                available=max(len(self._data) - offset, 0),
            )
        return ByteCursor(
            self._data[offset : offset + length],
            table=table or self.table,
            base=self.base + offset,
        )
