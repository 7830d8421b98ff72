"""Binary access primitives shared by every container reader."""

from .cursor import ByteCursor, Endian, TruncatedReadError, decode_synchsafe, decode_uint32_be

__all__ = [
    "ByteCursor",
    "Endian",
    "TruncatedReadError",
    "decode_synchsafe",
    "decode_uint32_be",
]
