"""Character decoding for tag payloads.

Where: src/rawtag/features/metadata/usecases/decoding/text_decoder.py
What: Decode ID3 self-describing text payloads and plain UTF-8 values.
Why: ID3 frames carry a leading encoding byte while Vorbis comments and M4A
     values are bare UTF-8; both paths share the terminator handling.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Final

_BOM_BIG: Final[bytes] = b"\xfe\xff"
_BOM_LITTLE: Final[bytes] = b"\xff\xfe"


class TextEncoding(IntEnum):
    """ID3v2 text encoding flag values."""

    LATIN_1 = 0
    UTF_16 = 1
    UTF_16_BE = 2
    UTF_8 = 3

    @property
    def terminator(self) -> bytes:
        """NUL terminator for this encoding."""
        if self in (TextEncoding.UTF_16, TextEncoding.UTF_16_BE):
            return b"\x00\x00"
        return b"\x00"


def find_terminator(body: bytes, encoding: TextEncoding) -> int:
    """Return the offset of the first terminator, or -1.

    UTF-16 terminators only count on an even offset so a NUL high byte of one
    code unit never pairs with the next.
    """

    if len(encoding.terminator) == 1:
        return body.find(b"\x00")

    index = body.find(b"\x00\x00")
    while index != -1:
        if index % 2 == 0:
            return index
        index = body.find(b"\x00\x00", index + 1)
    return -1


def split_at_terminator(body: bytes, encoding: TextEncoding) -> tuple[bytes, bytes]:
    """Split ``body`` into the terminated head and whatever follows it.

    Without a terminator the whole body is the head and the tail is empty.
    """

    index = find_terminator(body, encoding)
    if index == -1:
        return body, b""
    return body[:index], body[index + len(encoding.terminator):]


def _strip_terminator(body: bytes, encoding: TextEncoding) -> bytes:
    terminator = encoding.terminator
    if not body.endswith(terminator):
        return body
    if len(terminator) == 2 and len(body) % 2:
        return body
    return body[: -len(terminator)]


def decode_with(encoding: TextEncoding, body: bytes) -> str:
    """Decode ``body`` (without its flag byte) and drop one trailing terminator."""

    body = _strip_terminator(body, encoding)
    match encoding:
        case TextEncoding.LATIN_1:
            return body.decode("latin-1")
        case TextEncoding.UTF_16:
            if body.startswith(_BOM_LITTLE):
                return body[2:].decode("utf-16-le", errors="replace")
            if body.startswith(_BOM_BIG):
                return body[2:].decode("utf-16-be", errors="replace")
            return body.decode("utf-16-be", errors="replace")
        case TextEncoding.UTF_16_BE:
            return body.decode("utf-16-be", errors="replace")
        case TextEncoding.UTF_8:
            return body.decode("utf-8", errors="replace")


def decode_values(encoding: TextEncoding, body: bytes) -> list[str]:
    """Decode a NUL separated list of strings (ID3v2.4 multi-valued text)."""

    values: list[str] = []
    rest = body
    while rest:
        head, rest = split_at_terminator(rest, encoding)
        values.append(decode_with(encoding, head))
    return values


def decode_plain(data: bytes) -> str:
    """UTF-8 without a flag byte; nothing is stripped."""
    return data.decode("utf-8", errors="replace")


def decode_latin1(data: bytes) -> str:
    """Single-byte decoding for identifiers such as ``©nam`` and URL frames."""
    return data.decode("latin-1")


def decode_text(data: bytes) -> str:
    """Decode an ID3 style payload whose first byte may be an encoding flag.

    A leading byte of 0-3 selects the encoding and is removed together with a
    trailing terminator. Any other leading byte means the payload is UTF-8 in
    full and is decoded without stripping anything.
    """

    if not data:
        return ""
    flag = data[0]
    if flag <= TextEncoding.UTF_8:
        return decode_with(TextEncoding(flag), data[1:])
    return decode_plain(data)


__all__ = [
    "TextEncoding",
    "decode_latin1",
    "decode_plain",
    "decode_text",
    "decode_values",
    "decode_with",
    "find_terminator",
    "split_at_terminator",
]
