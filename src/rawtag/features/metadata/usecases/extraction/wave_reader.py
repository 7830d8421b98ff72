"""WAVE/RIFF reader.

Where: src/rawtag/features/metadata/usecases/extraction/wave_reader.py
What: Walk the RIFF chunk list, reading ``LIST``/``INFO`` entries and embedded
      ``id3 `` chunks.
Why: WAVE files carry tags either as INFO text or as a full ID3v2 tag.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Final, override

from rawtag.features.detection import AudioFormat
from rawtag.platform.binary import ByteCursor, Endian, TruncatedReadError
from rawtag.shared.metadata import Metadata

from ...domain.tag_dictionary import RIFF_INFO_TAGS, canonical_name
from ..decoding.text_decoder import TextEncoding, decode_latin1, decode_with
from ._base_readers import ContainerReader
from .id3_reader import Id3Reader
from .parse_types import MalformedStructureError, ParseEvent

RIFF_MARKER: Final[bytes] = b"RIFF"
WAVE_MARKER: Final[bytes] = b"WAVE"
CHUNK_HEADER_SIZE: Final[int] = 8
FMT_MIN_SIZE: Final[int] = 16
ID3_CHUNK_IDS: Final[frozenset[bytes]] = frozenset({b"id3 ", b"ID3 "})


@dataclass(frozen=True, slots=True)
class WaveFormat:
    """Fields of the ``fmt `` chunk; consumed for structure, not surfaced as tags."""

    format_tag: int
    channels: int
    sample_rate: int
    byte_rate: int
    block_align: int
    bits_per_sample: int


def consume_pad_byte(cursor: ByteCursor, size: int) -> bool:
    """Step over the pad byte after an odd-sized chunk when one is present.

    A non-zero byte already belongs to the next chunk header and is left alone.
    """

    if size % 2 == 0:
        return False
    if cursor.peek(1) == b"\x00":
        cursor.skip(1)
        return True
    return False


class WaveReader(ContainerReader):
    """Reads INFO text and embedded ID3v2 tags from WAVE files."""

    AUDIO_FORMAT = AudioFormat.WAV

    @override
    def _parse(self, cursor: ByteCursor, metadata: Metadata) -> None:
        if cursor.read_fourcc() != RIFF_MARKER:
            raise MalformedStructureError("Missing RIFF marker")
        _ = cursor.read_u32(Endian.LITTLE)  # RIFF size, often wrong in practice
        if cursor.read_fourcc() != WAVE_MARKER:
            raise MalformedStructureError("RIFF form type is not WAVE")

        while cursor.remaining >= CHUNK_HEADER_SIZE:
            chunk_id = cursor.read_fourcc()
            size = cursor.read_u32(Endian.LITTLE)

            if chunk_id == b"data":
                cursor.skip(size)
            elif chunk_id == b"fmt ":
                _ = self._read_format(cursor.window(size))
            elif chunk_id == b"LIST":
                self._read_list(cursor.window(size), metadata)
            elif chunk_id in ID3_CHUNK_IDS:
                self._read_id3(cursor.window(size), metadata)
            else:
                self._log(
                    logging.DEBUG,
                    ParseEvent.FRAME_SKIPPED,
                    "Skipped RIFF chunk %r (%d bytes)",
                    chunk_id,
                    size,
                    detail=f"chunk {decode_latin1(chunk_id)!r}",
                )
                cursor.skip(size)

            _ = consume_pad_byte(cursor, size)

    def _read_format(self, chunk: ByteCursor) -> WaveFormat | None:
        if chunk.size < FMT_MIN_SIZE:
            self._log(
                logging.DEBUG,
                ParseEvent.STRUCTURE_MALFORMED,
                "fmt chunk is %d bytes, expected at least %d",
                chunk.size,
                FMT_MIN_SIZE,
                detail=f"fmt chunk size {chunk.size}",
            )
            return None
        # Extension bytes of 18/40-byte chunks are left unread inside the window.
        return WaveFormat(
            format_tag=chunk.read_u16(Endian.LITTLE),
            channels=chunk.read_u16(Endian.LITTLE),
            sample_rate=chunk.read_u32(Endian.LITTLE),
            byte_rate=chunk.read_u32(Endian.LITTLE),
            block_align=chunk.read_u16(Endian.LITTLE),
            bits_per_sample=chunk.read_u16(Endian.LITTLE),
        )

    def _read_list(self, chunk: ByteCursor, metadata: Metadata) -> None:
        list_type = chunk.read_fourcc()
        if list_type != b"INFO":
            return

        try:
            while chunk.remaining >= CHUNK_HEADER_SIZE:
                entry_id = decode_latin1(chunk.read_fourcc())
                length = chunk.read_u32(Endian.LITTLE)
                value = decode_with(TextEncoding.UTF_8, chunk.read(length))
                # Some writers pad the value with several NULs.
                self._add_text(metadata, canonical_name(RIFF_INFO_TAGS, entry_id), value.rstrip("\x00"))
                _ = consume_pad_byte(chunk, length)
        except TruncatedReadError as exc:
            self._log(
                logging.DEBUG,
                ParseEvent.STRUCTURE_TRUNCATED,
                "INFO list ended early: %s",
                exc,
                detail=str(exc),
            )

    def _read_id3(self, chunk: ByteCursor, metadata: Metadata) -> None:
        id3 = Id3Reader(self.options, source_name=self.source_name, audio_format=self.audio_format)
        try:
            id3.extract_tag(chunk, metadata)
        except (TruncatedReadError, MalformedStructureError) as exc:
            self._log(
                logging.DEBUG,
                ParseEvent.STRUCTURE_MALFORMED,
                "Skipped embedded ID3 chunk: %s",
                exc,
                detail=str(exc),
            )


__all__ = ["WaveFormat", "WaveReader", "consume_pad_byte"]
