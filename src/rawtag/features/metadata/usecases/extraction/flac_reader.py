"""FLAC metadata block reader.

Where: src/rawtag/features/metadata/usecases/extraction/flac_reader.py
What: Walk the metadata blocks after the ``fLaC`` marker.
Why: Comments and pictures live in blocks 4 and 6; everything else is skipped.
"""

from __future__ import annotations

import logging
from enum import IntEnum
from typing import Final, override

from rawtag.features.detection import AudioFormat
from rawtag.platform.binary import ByteCursor, Endian, TruncatedReadError
from rawtag.shared.metadata import Metadata

from ._base_readers import ContainerReader
from .parse_types import MalformedStructureError, ParseEvent
from .vorbis_reader import read_picture_block, read_vorbis_comments

FLAC_MARKER: Final[bytes] = b"fLaC"
LAST_BLOCK_FLAG: Final[int] = 0x80
BLOCK_TYPE_MASK: Final[int] = 0x7F
INVALID_BLOCK_TYPE: Final[int] = 127


class BlockType(IntEnum):
    STREAMINFO = 0
    PADDING = 1
    APPLICATION = 2
    SEEKTABLE = 3
    VORBIS_COMMENT = 4
    CUESHEET = 5
    PICTURE = 6


class FlacReader(ContainerReader):
    """Reads Vorbis comments and pictures from FLAC files."""

    AUDIO_FORMAT = AudioFormat.FLAC

    @override
    def _parse(self, cursor: ByteCursor, metadata: Metadata) -> None:
        marker = cursor.read(4)
        if marker != FLAC_MARKER:
            raise MalformedStructureError(f"Expected fLaC marker, found {marker!r}")

        last = False
        while not last:
            header = cursor.read_u8()
            last = bool(header & LAST_BLOCK_FLAG)
            block_type = header & BLOCK_TYPE_MASK
            if block_type == INVALID_BLOCK_TYPE:
                raise MalformedStructureError("Invalid FLAC metadata block type 127")

            block = cursor.window(cursor.read_u24(Endian.BIG))
            if block_type == BlockType.VORBIS_COMMENT:
                self._read_unit(block, metadata, comments=True)
            elif block_type == BlockType.PICTURE:
                if self.options.extract_images:
                    self._read_unit(block, metadata, comments=False)
            # Remaining block types carry no tags; the window already moved past them.

    def _read_unit(self, block: ByteCursor, metadata: Metadata, *, comments: bool) -> None:
        """Parse one block, containing any damage to that block."""

        try:
            if comments:
                read_vorbis_comments(block, metadata, self.options, self.log)
            else:
                metadata.add_image(read_picture_block(block))
        except (TruncatedReadError, MalformedStructureError) as exc:
            self._log(
                logging.DEBUG,
                ParseEvent.STRUCTURE_MALFORMED,
                "Skipped damaged %s block: %s",
                "VORBIS_COMMENT" if comments else "PICTURE",
                exc,
                detail=str(exc),
            )


__all__ = ["BlockType", "FLAC_MARKER", "FlacReader"]
