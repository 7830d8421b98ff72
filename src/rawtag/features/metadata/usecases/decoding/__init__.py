"""Decoders shared by every container reader."""

from .image_sniffer import extract_image
from .text_decoder import (
    TextEncoding,
    decode_latin1,
    decode_plain,
    decode_text,
    decode_values,
    decode_with,
    split_at_terminator,
)

__all__ = [
    "TextEncoding",
    "decode_latin1",
    "decode_plain",
    "decode_text",
    "decode_values",
    "decode_with",
    "extract_image",
    "split_at_terminator",
]
