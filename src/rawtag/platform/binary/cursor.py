"""Bounds-checked reader over a seekable byte source.

Where: src/rawtag/platform/binary/cursor.py
What: Provide ``ByteCursor`` with explicit endianness per read and window slicing.
Why: Every container reader walks nested, length-prefixed structures; centralising
     the bounds checks keeps short reads from ever being silently zero-filled.
"""

from __future__ import annotations

import io
import struct
from enum import StrEnum
from typing import BinaryIO, Final, final


class Endian(StrEnum):
    """Byte order markers understood by ``struct``."""

    BIG = ">"
    LITTLE = "<"


class TruncatedReadError(EOFError):
    """Raised when a read or skip asks for more bytes than the window holds."""

    def __init__(self, requested: int, available: int, offset: int) -> None:
        super().__init__(
            f"Requested {requested} bytes at offset {offset}, only {available} available"
        )
        self.requested: int = requested
        self.available: int = available
        self.offset: int = offset


_WIDTH_FORMATS: Final[dict[int, str]] = {1: "B", 2: "H", 4: "I", 8: "Q"}


@final
class ByteCursor:
    """Seekable view over ``[start, end)`` of a binary stream.

    Offsets are relative to the window start. Several cursors may share one
    stream: each keeps its own position and seeks before every read.
    """

    def __init__(
        self,
        stream: BinaryIO,
        *,
        start: int = 0,
        end: int | None = None,
        endian: Endian = Endian.BIG,
    ) -> None:
        if end is None:
            end = stream.seek(0, io.SEEK_END)
        if start < 0 or end < start:
            raise ValueError(f"Invalid cursor window: [{start}, {end})")
        self._stream: BinaryIO = stream
        self._start: int = start
        self._end: int = end
        self._position: int = 0
        self.endian: Endian = endian

    @classmethod
    def from_bytes(cls, data: bytes | bytearray | memoryview, *, endian: Endian = Endian.BIG) -> ByteCursor:
        """Wrap an in-memory buffer."""

        return cls(io.BytesIO(bytes(data)), endian=endian)

    @property
    def size(self) -> int:
        """Total length of the window."""
        return self._end - self._start

    @property
    def position(self) -> int:
        """Current offset within the window."""
        return self._position

    @property
    def remaining(self) -> int:
        """Bytes left between the current position and the window end."""
        return self.size - self._position

    @property
    def at_end(self) -> bool:
        return self._position >= self.size

    def seek(self, offset: int) -> None:
        """Move to an absolute offset within the window."""

        if offset < 0 or offset > self.size:
            raise TruncatedReadError(offset, self.size, self._position)
        self._position = offset

    def skip(self, count: int) -> None:
        """Advance ``count`` bytes without reading them."""

        if count < 0:
            raise ValueError(f"Cannot skip a negative length ({count})")
        if count > self.remaining:
            raise TruncatedReadError(count, self.remaining, self._position)
        self._position += count

    def read(self, count: int) -> bytes:
        """Read exactly ``count`` bytes or raise ``TruncatedReadError``."""

        if count < 0:
            raise ValueError(f"Cannot read a negative length ({count})")
        if count > self.remaining:
            raise TruncatedReadError(count, self.remaining, self._position)
        _ = self._stream.seek(self._start + self._position)
        data = self._stream.read(count)
        if len(data) != count:
            # The stream shrank underneath the window.
            raise TruncatedReadError(count, len(data), self._position)
        self._position += count
        return data

    def peek(self, count: int) -> bytes:
        """Return up to ``count`` bytes without moving; may be shorter near the end."""

        count = max(0, min(count, self.remaining))
        _ = self._stream.seek(self._start + self._position)
        return self._stream.read(count)

    def read_all(self) -> bytes:
        """Consume the rest of the window."""
        return self.read(self.remaining)

    def _read_int(self, width: int, endian: Endian | None) -> int:
        order = endian or self.endian
        value: int = struct.unpack(f"{order}{_WIDTH_FORMATS[width]}", self.read(width))[0]
        return value

    def read_u8(self) -> int:
        return self.read(1)[0]

    def read_u16(self, endian: Endian | None = None) -> int:
        return self._read_int(2, endian)

    def read_u24(self, endian: Endian | None = None) -> int:
        raw = self.read(3)
        order = "big" if (endian or self.endian) is Endian.BIG else "little"
        return int.from_bytes(raw, order)

    def read_u32(self, endian: Endian | None = None) -> int:
        return self._read_int(4, endian)

    def read_u64(self, endian: Endian | None = None) -> int:
        return self._read_int(8, endian)

    def read_synchsafe(self) -> int:
        """Read a 28-bit synchsafe integer (ID3v2)."""
        return decode_synchsafe(self.read(4))

    def read_fourcc(self) -> bytes:
        return self.read(4)

    def window(self, length: int) -> ByteCursor:
        """Return a cursor over the next ``length`` bytes and move past them."""

        if length < 0:
            raise ValueError(f"Cannot open a negative-length window ({length})")
        if length > self.remaining:
            raise TruncatedReadError(length, self.remaining, self._position)
        absolute = self._start + self._position
        child = ByteCursor(self._stream, start=absolute, end=absolute + length, endian=self.endian)
        self._position += length
        return child


def decode_synchsafe(raw: bytes) -> int:
    """Reassemble four 7-bit groups, dropping the high bit of every byte."""

    if len(raw) != 4:
        raise ValueError("Synchsafe integers are exactly four bytes")
    return (raw[0] & 0x7F) << 21 | (raw[1] & 0x7F) << 14 | (raw[2] & 0x7F) << 7 | (raw[3] & 0x7F)


def decode_uint32_be(raw: bytes) -> int:
    """Plain 32-bit big-endian decoding (ID3v2.3 frame sizes)."""

    if len(raw) != 4:
        raise ValueError("32-bit integers are exactly four bytes")
    return int.from_bytes(raw, "big")


__all__ = [
    "ByteCursor",
    "Endian",
    "TruncatedReadError",
    "decode_synchsafe",
    "decode_uint32_be",
]
