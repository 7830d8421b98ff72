"""OGG page reader for Vorbis streams.

Where: src/rawtag/features/metadata/usecases/extraction/ogg_reader.py
What: Reassemble logical packets from OGG pages and parse the Vorbis comment header.
Why: The comment header is the second packet of a Vorbis stream and may span
     several segments or pages.
"""

from __future__ import annotations

import logging
from typing import Final, override

from rawtag.features.detection import AudioFormat
from rawtag.platform.binary import ByteCursor, Endian, TruncatedReadError
from rawtag.shared.metadata import Metadata

from ._base_readers import ContainerReader
from .parse_types import MalformedStructureError, ParseEvent
from .vorbis_reader import read_vorbis_comments

CAPTURE_PATTERN: Final[bytes] = b"OggS"
PAGE_HEADER_SIZE: Final[int] = 27
LACING_CONTINUES: Final[int] = 255

VORBIS_IDENTIFICATION: Final[bytes] = b"\x01vorbis"
VORBIS_COMMENT: Final[bytes] = b"\x03vorbis"

# First-packet signatures of codecs whose comment layout is not read.
_OTHER_CODECS: Final[tuple[tuple[bytes, str], ...]] = (
    (b"OpusHead", "Opus"),
    (b"Speex   ", "Speex"),
    (b"\x80theora", "Theora"),
    (b"\x7fFLAC", "OGG FLAC"),
)


class OggReader(ContainerReader):
    """Reads Vorbis comments from OGG Vorbis files."""

    AUDIO_FORMAT = AudioFormat.OGG

    @override
    def _parse(self, cursor: ByteCursor, metadata: Metadata) -> None:
        serial: int | None = None
        pending = bytearray()
        packet_index = 0

        while cursor.remaining >= PAGE_HEADER_SIZE:
            if cursor.read(4) != CAPTURE_PATTERN:
                raise MalformedStructureError(f"Missing OggS capture pattern at offset {cursor.position - 4}")
            cursor.skip(2)  # version, header type
            _ = cursor.read_u64(Endian.LITTLE)  # granule position
            page_serial = cursor.read_u32(Endian.LITTLE)
            cursor.skip(8)  # sequence number, checksum
            lacing = cursor.read(cursor.read_u8())

            if serial is None:
                serial = page_serial
            if page_serial != serial:
                # Another logical stream multiplexed into the file.
                cursor.skip(sum(lacing))
                continue

            for value in lacing:
                pending += cursor.read(value)
                if value == LACING_CONTINUES:
                    continue
                packet = bytes(pending)
                pending.clear()
                if not packet:
                    continue
                if not self._handle_packet(packet, packet_index, metadata):
                    return
                packet_index += 1

    def _handle_packet(self, packet: bytes, index: int, metadata: Metadata) -> bool:
        """Process one packet; False once nothing more needs reading."""

        if index == 0 and not packet.startswith(VORBIS_IDENTIFICATION):
            codec = next((name for magic, name in _OTHER_CODECS if packet.startswith(magic)), "unknown codec")
            self._log(
                logging.INFO,
                ParseEvent.FORMAT_UNSUPPORTED,
                "OGG stream carries %s; comments not read",
                codec,
                detail=codec,
            )
            return False

        if not packet.startswith(VORBIS_COMMENT):
            return True

        try:
            read_vorbis_comments(
                ByteCursor.from_bytes(packet[len(VORBIS_COMMENT):]),
                metadata,
                self.options,
                self.log,
            )
        except (TruncatedReadError, MalformedStructureError) as exc:
            # Encoders sometimes write an inconsistent comment length; keep what was read.
            self._log(
                logging.DEBUG,
                ParseEvent.STRUCTURE_MALFORMED,
                "Vorbis comment packet ended early: %s",
                exc,
                detail=str(exc),
            )
        return False


__all__ = ["OggReader", "VORBIS_COMMENT", "VORBIS_IDENTIFICATION"]
