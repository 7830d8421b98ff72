"""ISO-BMFF atom reader for M4A and MP4 files.

Where: src/rawtag/features/metadata/usecases/extraction/m4a_reader.py
What: Walk ``moov`` > ``udta`` > ``meta`` > ``ilst`` and decode the item atoms.
Why: iTunes style tags live in item lists; everything else in the tree is
     skipped by its declared size.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Final, override

from rawtag.features.detection import AudioFormat
from rawtag.platform.binary import ByteCursor, Endian, TruncatedReadError
from rawtag.shared.metadata import Metadata

from ...domain.tag_dictionary import M4A_TAGS, canonical_name, id3v1_genre
from ..decoding.image_sniffer import extract_image
from ..decoding.text_decoder import decode_latin1, decode_plain
from ._base_readers import ContainerReader
from .parse_types import MalformedStructureError, ParseEvent

ATOM_HEADER_SIZE: Final[int] = 8
EXTENDED_HEADER_SIZE: Final[int] = 16
FREEFORM_ITEM: Final[bytes] = b"----"
COVER_ITEM: Final[bytes] = b"covr"
PAIR_ITEMS: Final[frozenset[bytes]] = frozenset({b"trkn", b"trck", b"disk"})
GENRE_ITEM: Final[bytes] = b"gnre"

# ``data`` atom well-known types.
DATA_TYPE_IMPLICIT: Final[int] = 0
DATA_TYPE_INTEGER: Final[int] = 21

# Children that may directly follow ``meta`` when it lacks version/flags.
_META_CHILDREN: Final[frozenset[bytes]] = frozenset({b"hdlr", b"ilst", b"keys", b"free", b"xml "})


@dataclass(frozen=True, slots=True)
class AtomHeader:
    kind: bytes
    payload_size: int


def read_atom_header(cursor: ByteCursor) -> AtomHeader:
    """Read a size/type header, handling 64-bit and to-end-of-parent sizes."""

    size = cursor.read_u32(Endian.BIG)
    kind = cursor.read_fourcc()
    if size == 1:
        size = cursor.read_u64(Endian.BIG)
        header_size = EXTENDED_HEADER_SIZE
    elif size == 0:
        return AtomHeader(kind, cursor.remaining)
    else:
        header_size = ATOM_HEADER_SIZE

    if size < header_size:
        raise MalformedStructureError(f"Atom {kind!r} declares {size} bytes, smaller than its header")
    return AtomHeader(kind, size - header_size)


def iter_atoms(cursor: ByteCursor) -> Iterator[tuple[AtomHeader, ByteCursor]]:
    """Yield ``(header, payload cursor)`` pairs until the cursor is exhausted."""

    while cursor.remaining >= ATOM_HEADER_SIZE:
        header = read_atom_header(cursor)
        yield header, cursor.window(header.payload_size)


def _render_pair(value: bytes) -> str:
    if len(value) < 6:
        return ""
    number = int.from_bytes(value[2:4], "big")
    total = int.from_bytes(value[4:6], "big")
    if not number:
        return ""
    return f"{number}/{total}" if total else str(number)


def _render_genre(value: bytes) -> str:
    if len(value) < 2:
        return ""
    # Stored one-based.
    return id3v1_genre(int.from_bytes(value[:2], "big") - 1) or ""


class M4aReader(ContainerReader):
    """Reads item-list tags and cover art from M4A and MP4 files."""

    AUDIO_FORMAT = AudioFormat.M4A

    @override
    def _parse(self, cursor: ByteCursor, metadata: Metadata) -> None:
        if self.audio_format is AudioFormat.MP4:
            self._log(
                logging.INFO,
                ParseEvent.FORMAT_UNSUPPORTED,
                "MP4 brand read with the M4A item-list walker; tags may be incomplete",
                detail="partial MP4 support",
            )
        for header, payload in iter_atoms(cursor):
            if header.kind == b"ftyp":
                self._read_file_type(payload)
            elif header.kind == b"moov":
                self._read_movie(payload, metadata)
            # ``free``, ``mdat`` and friends are skipped by their window.

    def _read_file_type(self, payload: ByteCursor) -> None:
        brand = payload.read_fourcc()
        self._log(
            logging.DEBUG,
            ParseEvent.FORMAT_DETECTED,
            "ftyp brand %r",
            brand,
            detail=f"brand {decode_latin1(brand).strip()!r}",
        )

    def _read_movie(self, moov: ByteCursor, metadata: Metadata) -> None:
        for header, payload in iter_atoms(moov):
            if header.kind == b"udta":
                self._read_user_data(payload, metadata)
            elif header.kind == b"meta":
                self._read_meta(payload, metadata)

    def _read_user_data(self, udta: ByteCursor, metadata: Metadata) -> None:
        # Other user data atoms (Xtra, chpl, ...) precede ``meta`` in some files.
        for header, payload in iter_atoms(udta):
            if header.kind == b"meta":
                self._read_meta(payload, metadata)

    def _read_meta(self, meta: ByteCursor, metadata: Metadata) -> None:
        try:
            self._read_meta_children(meta, metadata)
        except (TruncatedReadError, MalformedStructureError) as exc:
            self._log(
                logging.DEBUG,
                ParseEvent.STRUCTURE_MALFORMED,
                "Skipped meta atom: %s",
                exc,
                detail=f"meta: {exc}",
            )

    def _read_meta_children(self, meta: ByteCursor, metadata: Metadata) -> None:
        probe = meta.peek(ATOM_HEADER_SIZE)
        if probe[4:8] not in _META_CHILDREN:
            meta.skip(4)  # version and flags
        for header, payload in iter_atoms(meta):
            if header.kind == b"ilst":
                self._read_item_list(payload, metadata)

    def _read_item_list(self, ilst: ByteCursor, metadata: Metadata) -> None:
        while ilst.remaining >= ATOM_HEADER_SIZE:
            header = read_atom_header(ilst)
            item = ilst.window(header.payload_size)
            try:
                self._read_item(header.kind, item, metadata)
            except (TruncatedReadError, MalformedStructureError) as exc:
                self._log(
                    logging.DEBUG,
                    ParseEvent.STRUCTURE_MALFORMED,
                    "Skipped item %r: %s",
                    header.kind,
                    exc,
                    detail=f"{decode_latin1(header.kind)}: {exc}",
                )

    def _read_item(self, kind: bytes, item: ByteCursor, metadata: Metadata) -> None:
        # ``©`` is the single byte 0xA9, so the identifier is decoded as Latin-1.
        field = canonical_name(M4A_TAGS, decode_latin1(kind))

        for header, payload in iter_atoms(item):
            if header.kind == b"name" and kind == FREEFORM_ITEM:
                payload.skip(4)
                field = decode_plain(payload.read_all())
                continue
            if header.kind != b"data":
                continue

            data_type = payload.read_u32(Endian.BIG) & 0x00FFFFFF
            payload.skip(4)  # locale
            value = payload.read_all()

            if kind == COVER_ITEM:
                self._add_image(metadata, extract_image(value))
            elif kind in PAIR_ITEMS and data_type == DATA_TYPE_IMPLICIT:
                self._add_text(metadata, field, _render_pair(value))
            elif kind == GENRE_ITEM:
                self._add_text(metadata, field, _render_genre(value))
            elif data_type == DATA_TYPE_INTEGER and 0 < len(value) <= 8:
                self._add_text(metadata, field, str(int.from_bytes(value, "big", signed=True)))
            else:
                self._add_text(metadata, field, decode_plain(value))


__all__ = ["AtomHeader", "M4aReader", "iter_atoms", "read_atom_header"]
