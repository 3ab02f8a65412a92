"""
Bounds-checked little-endian reads over an immutable byte buffer.

Every SNSS field position is computed from length counters and relative
pointers found in the data itself, so each read checks its range first and
raises ``OutOfBoundsError`` instead of slicing short.
"""

from __future__ import annotations

import struct

from .exceptions import OutOfBoundsError

_U16 = struct.Struct("<H")
_I32 = struct.Struct("<i")
_U32 = struct.Struct("<I")
_I64 = struct.Struct("<q")


def align_up_4(n: int) -> int:
    """Round ``n`` up to the next multiple of 4."""
    return n if n % 4 == 0 else n + (4 - n % 4)


def align_up_8(n: int) -> int:
    """Round ``n`` up to the next multiple of 8."""
    return n if n % 8 == 0 else n + (8 - n % 8)


class ByteView:
    """Read-only view with absolute-offset accessors."""

    __slots__ = ("_data",)

    def __init__(self, data: bytes):
        self._data = bytes(data)

    def __len__(self) -> int:
        return len(self._data)

    @property
    def data(self) -> bytes:
        return self._data

    def check(self, offset: int, size: int) -> None:
        """Raise ``OutOfBoundsError`` unless ``[offset, offset + size)`` is inside the buffer."""
        if offset < 0 or size < 0 or offset + size > len(self._data):
            raise OutOfBoundsError(offset, size, len(self._data))

    def has(self, offset: int, size: int) -> bool:
        return offset >= 0 and size >= 0 and offset + size <= len(self._data)

    def read_u8(self, offset: int) -> int:
        self.check(offset, 1)
        return self._data[offset]

    def read_u16(self, offset: int) -> int:
        self.check(offset, 2)
        return _U16.unpack_from(self._data, offset)[0]

    def read_i32(self, offset: int) -> int:
        self.check(offset, 4)
        return _I32.unpack_from(self._data, offset)[0]

    def read_u32(self, offset: int) -> int:
        self.check(offset, 4)
        return _U32.unpack_from(self._data, offset)[0]

    def read_i64(self, offset: int) -> int:
        self.check(offset, 8)
        return _I64.unpack_from(self._data, offset)[0]

    def read_bytes(self, offset: int, size: int) -> bytes:
        self.check(offset, size)
        return self._data[offset:offset + size]

    def read_ascii(self, offset: int, size: int) -> str:
        """Decode ``size`` bytes as ASCII; non-ASCII bytes become U+FFFD."""
        return self.read_bytes(offset, size).decode("ascii", errors="replace")

    def read_utf16(self, offset: int, char_count: int) -> str:
        """Decode ``char_count`` UTF-16LE code units."""
        if char_count < 0:
            raise OutOfBoundsError(offset, char_count * 2, len(self._data))
        return self.read_bytes(offset, char_count * 2).decode("utf-16-le", errors="replace")

    def tail(self, offset: int) -> bytes:
        """Return everything from ``offset`` to the end (empty past the end)."""
        return self._data[max(offset, 0):]
