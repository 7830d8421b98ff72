"""ID3v2 tag reader with ID3v1 fallback.

Where: src/rawtag/features/metadata/usecases/extraction/id3_reader.py
What: Parse ID3v2.2, v2.3 and v2.4 frames (plus the ID3v1 trailer) into metadata.
Why: MP3 files and WAVE ``id3 `` chunks share this frame walk.
"""

from __future__ import annotations

import logging
import re
import zlib
from dataclasses import dataclass
from typing import Final, override

from rawtag.features.detection import AudioFormat
from rawtag.platform.binary import ByteCursor, Endian, TruncatedReadError, decode_synchsafe
from rawtag.shared.metadata import Metadata
from rawtag.shared.tag_fields import TagField

from ...domain.tag_dictionary import (
    ID3_TAGS,
    ID3V22_FRAME_IDS,
    canonical_name,
    id3v1_genre,
    resolve_genre,
)
from ..decoding.image_sniffer import extract_image
from ..decoding.text_decoder import (
    TextEncoding,
    decode_latin1,
    decode_text,
    decode_values,
    decode_with,
    split_at_terminator,
)
from ._base_readers import ContainerReader
from .parse_types import MalformedStructureError, ParseEvent

ID3_MAGIC: Final[bytes] = b"ID3"
ID3V1_MAGIC: Final[bytes] = b"TAG"
ID3V1_SIZE: Final[int] = 128
TAG_HEADER_SIZE: Final[int] = 10

# Tag header flags.
TAG_UNSYNCHRONISED: Final[int] = 0x80
TAG_EXTENDED_HEADER: Final[int] = 0x40

_FRAME_ID_PATTERN: Final[re.Pattern[bytes]] = re.compile(rb"[A-Z0-9]{3,4}")


@dataclass(frozen=True, slots=True)
class FrameFlags:
    """Per-frame format flags normalised across v2.3 and v2.4."""

    compressed: bool = False
    encrypted: bool = False
    grouped: bool = False
    unsynchronised: bool = False
    data_length: bool = False

    @classmethod
    def from_raw(cls, version: int, raw: int) -> FrameFlags:
        if version == 3:
            return cls(
                compressed=bool(raw & 0x0080),
                encrypted=bool(raw & 0x0040),
                grouped=bool(raw & 0x0020),
            )
        if version == 4:
            return cls(
                grouped=bool(raw & 0x0040),
                compressed=bool(raw & 0x0008),
                encrypted=bool(raw & 0x0004),
                unsynchronised=bool(raw & 0x0002),
                data_length=bool(raw & 0x0001),
            )
        return cls()


def remove_unsynchronisation(data: bytes) -> bytes:
    """Undo the ``FF 00`` byte stuffing of the unsynchronisation scheme."""
    return data.replace(b"\xff\x00", b"\xff")


class Id3Reader(ContainerReader):
    """Reads ID3v2 tags from the start of MP3 files."""

    AUDIO_FORMAT = AudioFormat.MP3

    @override
    def _parse(self, cursor: ByteCursor, metadata: Metadata) -> None:
        self.extract_tag(cursor, metadata)
        if self.options.id3v1_fallback:
            self._read_id3v1(cursor, metadata)

    def extract_tag(self, cursor: ByteCursor, metadata: Metadata) -> None:
        """Parse one ID3v2 tag starting at the cursor's current position.

        A tag that ends early keeps the frames read so far.
        """

        header = cursor.read(TAG_HEADER_SIZE)
        if header[:3] != ID3_MAGIC:
            raise MalformedStructureError(f"Expected ID3 marker, found {header[:3]!r}")

        version = header[3]
        flags = header[5]
        declared = decode_synchsafe(header[6:10])
        if version not in (2, 3, 4):
            raise MalformedStructureError(f"Unsupported ID3v2 version 2.{version}")

        if declared > cursor.remaining:
            self._log(
                logging.DEBUG,
                ParseEvent.STRUCTURE_TRUNCATED,
                "ID3v2 tag declares %d bytes but only %d remain",
                declared,
                cursor.remaining,
                detail=f"tag size {declared} > {cursor.remaining}",
            )
        body = cursor.window(min(declared, cursor.remaining))

        if version == 2 and flags & TAG_EXTENDED_HEADER:
            # In v2.2 this bit means the whole tag is compressed.
            self._log(
                logging.INFO,
                ParseEvent.FORMAT_UNSUPPORTED,
                "Compressed ID3v2.2 tag skipped",
                detail="compressed ID3v2.2 tag",
            )
            return

        if version < 4 and flags & TAG_UNSYNCHRONISED:
            body = ByteCursor.from_bytes(remove_unsynchronisation(body.read_all()))

        try:
            if version > 2 and flags & TAG_EXTENDED_HEADER:
                self._skip_extended_header(body, version)
            self._read_frames(body, metadata, version)
        except TruncatedReadError as exc:
            self._log(
                logging.WARNING,
                ParseEvent.STRUCTURE_TRUNCATED,
                "ID3v2 frame list ended early: %s",
                exc,
                detail=str(exc),
            )

    @staticmethod
    def _skip_extended_header(body: ByteCursor, version: int) -> None:
        if version == 3:
            # Size excludes the four size bytes themselves.
            body.skip(body.read_u32(Endian.BIG))
            return
        size = body.read_synchsafe()
        if size < 4:
            raise MalformedStructureError(f"Extended header size {size} is too small")
        body.skip(size - 4)

    def _read_frames(self, body: ByteCursor, metadata: Metadata, version: int) -> None:
        id_length = 3 if version == 2 else 4
        header_length = 6 if version == 2 else 10

        while body.remaining >= header_length:
            raw_id = body.peek(id_length)
            if raw_id == b"\x00" * id_length:
                break  # padding
            if _FRAME_ID_PATTERN.fullmatch(raw_id) is None or len(raw_id) != id_length:
                self._log(
                    logging.DEBUG,
                    ParseEvent.FRAME_SKIPPED,
                    "Invalid frame ID %r; treating the rest of the tag as padding",
                    raw_id,
                    detail=f"invalid frame id {raw_id!r}",
                )
                break

            body.skip(id_length)
            if version == 2:
                size = body.read_u24(Endian.BIG)
                raw_flags = 0
            else:
                size = body.read_synchsafe() if version == 4 else body.read_u32(Endian.BIG)
                raw_flags = body.read_u16(Endian.BIG)
            payload = body.read(size)

            frame_id = decode_latin1(raw_id)
            if version == 2:
                frame_id = ID3V22_FRAME_IDS.get(frame_id, frame_id)

            try:
                data = self._unpack_payload(payload, FrameFlags.from_raw(version, raw_flags), version)
                if data is None:
                    self._log(
                        logging.DEBUG,
                        ParseEvent.FRAME_SKIPPED,
                        "Skipped encrypted frame %s",
                        frame_id,
                        detail=f"{frame_id} is encrypted",
                    )
                    continue
                self._store_frame(metadata, frame_id, data, version)
            except MalformedStructureError as exc:
                self._log(
                    logging.DEBUG,
                    ParseEvent.STRUCTURE_MALFORMED,
                    "Skipped frame %s: %s",
                    frame_id,
                    exc,
                    detail=f"{frame_id}: {exc}",
                )

    @staticmethod
    def _unpack_payload(payload: bytes, flags: FrameFlags, version: int) -> bytes | None:
        """Strip frame format extras; None for frames we cannot decrypt."""

        data = payload
        if version == 4:
            # Group id, encryption method, then the data length indicator.
            prefix = int(flags.grouped) + int(flags.encrypted) + (4 if flags.data_length else 0)
            data = data[prefix:]
            if flags.encrypted:
                return None
            if flags.unsynchronised:
                data = remove_unsynchronisation(data)
        else:
            # Decompressed size, encryption method, then the group id.
            if flags.compressed:
                data = data[4:]
            if flags.encrypted:
                return None
            if flags.grouped:
                data = data[1:]

        if flags.compressed:
            try:
                data = zlib.decompress(data)
            except zlib.error as exc:
                raise MalformedStructureError(f"Cannot decompress frame: {exc}") from exc
        return data

    def _store_frame(self, metadata: Metadata, frame_id: str, data: bytes, version: int) -> None:
        field = canonical_name(ID3_TAGS, frame_id)

        if not data:
            return

        if frame_id == "APIC":
            self._add_image(metadata, extract_image(data))
            return

        if frame_id == "TXXX":
            encoding = self._encoding(data[0])
            description, value = split_at_terminator(data[1:], encoding)
            name = decode_with(encoding, description) or field
            for text in self._text_values(encoding, value, version):
                self._add_text(metadata, name, text)
            return

        if frame_id in ("COMM", "USLT"):
            encoding = self._encoding(data[0])
            # Three-byte language code, then the content descriptor.
            _, text = split_at_terminator(data[4:], encoding)
            self._add_text(metadata, field, decode_with(encoding, text))
            return

        if frame_id == "WXXX":
            encoding = self._encoding(data[0])
            _, url = split_at_terminator(data[1:], encoding)
            self._add_text(metadata, field, decode_with(TextEncoding.LATIN_1, url))
            return

        if frame_id.startswith("W"):
            self._add_text(metadata, field, decode_with(TextEncoding.LATIN_1, data))
            return

        if frame_id.startswith("T") and data[0] <= TextEncoding.UTF_8:
            values = self._text_values(TextEncoding(data[0]), data[1:], version)
            if frame_id == "TCON":
                values = [resolve_genre(value) for value in values]
            for value in values:
                self._add_text(metadata, field, value)
            return

        self._add_text(metadata, field, decode_text(data))

    @staticmethod
    def _encoding(flag: int) -> TextEncoding:
        if flag > TextEncoding.UTF_8:
            raise MalformedStructureError(f"Unknown text encoding {flag}")
        return TextEncoding(flag)

    @staticmethod
    def _text_values(encoding: TextEncoding, body: bytes, version: int) -> list[str]:
        if version == 4:
            return decode_values(encoding, body)
        return [decode_with(encoding, body)]

    def _read_id3v1(self, cursor: ByteCursor, metadata: Metadata) -> None:
        """Fill fields missing from the ID3v2 tag from an ID3v1 trailer."""

        if cursor.size < ID3V1_SIZE:
            return
        cursor.seek(cursor.size - ID3V1_SIZE)
        trailer = cursor.read(ID3V1_SIZE)
        if trailer[:3] != ID3V1_MAGIC:
            return

        def text(raw: bytes) -> str:
            return decode_latin1(raw.split(b"\x00", 1)[0]).strip()

        comment_raw = trailer[97:127]
        track = ""
        if trailer[125] == 0 and trailer[126] != 0:
            # ID3v1.1 keeps the track number in the last comment byte.
            comment_raw = trailer[97:125]
            track = str(trailer[126])

        candidates: list[tuple[str, str]] = [
            (TagField.TITLE, text(trailer[3:33])),
            (TagField.ARTIST_NAME, text(trailer[33:63])),
            (TagField.ALBUM_NAME, text(trailer[63:93])),
            (TagField.YEAR, text(trailer[93:97])),
            (TagField.COMMENTS, text(comment_raw)),
            (TagField.TRACK_NUMBER, track),
            (TagField.GENRE, id3v1_genre(trailer[127]) or ""),
        ]
        for field, value in candidates:
            if value and not metadata.has_field(field):
                self._add_text(metadata, field, value)


__all__ = ["FrameFlags", "Id3Reader", "remove_unsynchronisation"]
