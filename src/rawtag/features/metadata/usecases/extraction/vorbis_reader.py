"""Vorbis comment and FLAC picture block parsing.

Where: src/rawtag/features/metadata/usecases/extraction/vorbis_reader.py
What: Parse Vorbis comment packets and ``METADATA_BLOCK_PICTURE`` structures.
Why: FLAC and OGG carry the same comment layout, so both readers share it.
"""

from __future__ import annotations

import base64
import binascii
import logging
from typing import Final

from rawtag.platform.binary import ByteCursor, Endian, TruncatedReadError
from rawtag.shared.metadata import CoverArt, Metadata

from ...domain.tag_dictionary import VORBIS_TAGS, canonical_name
from ..decoding.text_decoder import decode_latin1, decode_plain
from .parse_types import ParseEvent, ParseLogger, ReaderOptions

PICTURE_COMMENT: Final[str] = "METADATA_BLOCK_PICTURE"


def read_picture_block(cursor: ByteCursor) -> CoverArt:
    """Parse a FLAC picture structure; the MIME type and length are explicit."""

    _ = cursor.read_u32(Endian.BIG)  # picture type
    mime_type = decode_latin1(cursor.read(cursor.read_u32(Endian.BIG)))
    cursor.skip(cursor.read_u32(Endian.BIG))  # description
    _ = cursor.read_u32(Endian.BIG)  # width
    _ = cursor.read_u32(Endian.BIG)  # height
    _ = cursor.read_u32(Endian.BIG)  # colour depth
    _ = cursor.read_u32(Endian.BIG)  # palette size
    data = cursor.read(cursor.read_u32(Endian.BIG))
    return CoverArt(mime_type, data)


def _read_encoded_picture(value: bytes) -> CoverArt | None:
    try:
        raw = base64.b64decode(value, validate=False)
        return read_picture_block(ByteCursor.from_bytes(raw))
    except (binascii.Error, TruncatedReadError, ValueError):
        return None


def read_vorbis_comments(
    cursor: ByteCursor,
    metadata: Metadata,
    options: ReaderOptions,
    log: ParseLogger,
) -> None:
    """Parse a Vorbis comment list (little-endian lengths) into ``metadata``.

    Comments without ``=`` are dropped; the rest of the list is still read.
    """

    cursor.skip(cursor.read_u32(Endian.LITTLE))  # vendor string
    count = cursor.read_u32(Endian.LITTLE)

    for index in range(count):
        comment = cursor.read(cursor.read_u32(Endian.LITTLE))
        name, separator, value = comment.partition(b"=")
        if not separator:
            log(
                logging.DEBUG,
                ParseEvent.FRAME_SKIPPED,
                "Dropped Vorbis comment %d without '='",
                index,
                detail=f"comment {index} has no '='",
            )
            continue

        key = decode_plain(name).upper()
        if key == PICTURE_COMMENT:
            if options.extract_images:
                image = _read_encoded_picture(value)
                if image is None:
                    log(
                        logging.DEBUG,
                        ParseEvent.STRUCTURE_MALFORMED,
                        "Undecodable %s comment",
                        PICTURE_COMMENT,
                        detail="invalid picture payload",
                    )
                else:
                    metadata.add_image(image)
            continue

        _ = metadata.add_text_field(canonical_name(VORBIS_TAGS, key), decode_plain(value))


__all__ = ["PICTURE_COMMENT", "read_picture_block", "read_vorbis_comments"]
