"""
Summary: Byte-level builders for ID3, FLAC, WAVE, M4A and OGG fixtures.
Why: Readers are exercised against exact layouts without shipping binary files.
"""

from __future__ import annotations

import struct
import zlib
from collections.abc import Iterable, Sequence

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


# --- images -----------------------------------------------------------------


def _png_chunk(kind: bytes, data: bytes) -> bytes:
    crc = zlib.crc32(kind + data) & 0xFFFFFFFF
    return struct.pack(">I", len(data)) + kind + data + struct.pack(">I", crc)


def tiny_png() -> bytes:
    """A complete one-pixel PNG ending in the IEND chunk."""

    header = struct.pack(">IIBBBBB", 1, 1, 8, 2, 0, 0, 0)
    pixels = zlib.compress(b"\x00\xff\x00\x00")
    return (
        PNG_SIGNATURE
        + _png_chunk(b"IHDR", header)
        + _png_chunk(b"IDAT", pixels)
        + _png_chunk(b"IEND", b"")
    )


def tiny_jpeg() -> bytes:
    """JPEG-shaped bytes: SOI, an APP0/JFIF segment, filler and EOI."""
    return b"\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00" + b"\x11" * 24 + b"\xff\xd9"


# --- ID3 --------------------------------------------------------------------


def synchsafe(value: int) -> bytes:
    return bytes(((value >> 21) & 0x7F, (value >> 14) & 0x7F, (value >> 7) & 0x7F, value & 0x7F))


def id3_frame(frame_id: str, payload: bytes, *, version: int = 3, flags: int = 0) -> bytes:
    raw_id = frame_id.encode("latin-1")
    if version == 2:
        return raw_id + len(payload).to_bytes(3, "big") + payload
    size = synchsafe(len(payload)) if version == 4 else struct.pack(">I", len(payload))
    return raw_id + size + struct.pack(">H", flags) + payload


def id3_text(text: str, encoding: int = 3) -> bytes:
    """Text frame payload with its leading encoding byte."""

    codec = {0: "latin-1", 1: "utf-16", 2: "utf-16-be", 3: "utf-8"}[encoding]
    return bytes([encoding]) + text.encode(codec)


def id3_tag(frames: Iterable[bytes], *, version: int = 3, flags: int = 0, padding: int = 0) -> bytes:
    body = b"".join(frames) + b"\x00" * padding
    return b"ID3" + bytes([version, 0, flags]) + synchsafe(len(body)) + body


def id3v1_trailer(
    *,
    title: str = "",
    artist: str = "",
    album: str = "",
    year: str = "",
    comment: str = "",
    track: int | None = None,
    genre: int = 255,
) -> bytes:
    def field(value: str, width: int) -> bytes:
        return value.encode("latin-1")[:width].ljust(width, b"\x00")

    if track is None:
        comment_bytes = field(comment, 30)
    else:
        comment_bytes = field(comment, 28) + b"\x00" + bytes([track])
    return (
        b"TAG"
        + field(title, 30)
        + field(artist, 30)
        + field(album, 30)
        + field(year, 4)
        + comment_bytes
        + bytes([genre])
    )


# --- FLAC / Vorbis ----------------------------------------------------------


def vorbis_comment_body(comments: Sequence[bytes], vendor: bytes = b"rawtag tests") -> bytes:
    parts = [struct.pack("<I", len(vendor)), vendor, struct.pack("<I", len(comments))]
    for comment in comments:
        parts.append(struct.pack("<I", len(comment)))
        parts.append(comment)
    return b"".join(parts)


def flac_block(block_type: int, payload: bytes, *, last: bool = False) -> bytes:
    header = (0x80 if last else 0) | block_type
    return bytes([header]) + len(payload).to_bytes(3, "big") + payload


def flac_file(*blocks: bytes, streaminfo: bool = True) -> bytes:
    prefix = flac_block(0, b"\x00" * 34) if streaminfo else b""
    return b"fLaC" + prefix + b"".join(blocks) + b"\xff\xf8audio"


def flac_picture(mime: str, data: bytes, *, description: bytes = b"") -> bytes:
    mime_bytes = mime.encode("ascii")
    return (
        struct.pack(">I", 3)
        + struct.pack(">I", len(mime_bytes))
        + mime_bytes
        + struct.pack(">I", len(description))
        + description
        + struct.pack(">IIII", 1, 1, 24, 0)
        + struct.pack(">I", len(data))
        + data
    )


# --- WAVE -------------------------------------------------------------------


def riff_chunk(fourcc: bytes, payload: bytes, *, pad: bool = True) -> bytes:
    chunk = fourcc + struct.pack("<I", len(payload)) + payload
    if pad and len(payload) % 2:
        chunk += b"\x00"
    return chunk


def fmt_chunk(size: int = 16) -> bytes:
    body = struct.pack("<HHIIHH", 1, 2, 44100, 176400, 4, 16)
    return riff_chunk(b"fmt ", body + b"\x00" * (size - 16))


def info_list(entries: Sequence[tuple[bytes, bytes]], *, pad: bool = True) -> bytes:
    body = b"INFO" + b"".join(riff_chunk(key, value, pad=pad) for key, value in entries)
    return riff_chunk(b"LIST", body, pad=pad)


def wave_file(*chunks: bytes, samples: bytes = b"\x00\x00\x00\x00") -> bytes:
    body = b"WAVE" + fmt_chunk() + riff_chunk(b"data", samples) + b"".join(chunks)
    return b"RIFF" + struct.pack("<I", len(body)) + body


# --- M4A --------------------------------------------------------------------


def atom(kind: bytes, payload: bytes) -> bytes:
    return struct.pack(">I", len(payload) + 8) + kind + payload


def data_atom(value: bytes, data_type: int = 1) -> bytes:
    return atom(b"data", struct.pack(">I", data_type) + b"\x00\x00\x00\x00" + value)


def ilst_item(kind: bytes, *values: bytes, data_type: int = 1) -> bytes:
    return atom(kind, b"".join(data_atom(value, data_type) for value in values))


def m4a_file(
    items: Iterable[bytes],
    *,
    brand: bytes = b"M4A ",
    meta_version_flags: bool = True,
    udta_prefix: bytes = b"",
) -> bytes:
    ilst = atom(b"ilst", b"".join(items))
    hdlr = atom(b"hdlr", b"\x00" * 8 + b"mdirappl" + b"\x00" * 9)
    meta = atom(b"meta", (b"\x00\x00\x00\x00" if meta_version_flags else b"") + hdlr + ilst)
    udta = atom(b"udta", udta_prefix + meta)
    moov = atom(b"moov", atom(b"mvhd", b"\x00" * 100) + udta)
    ftyp = atom(b"ftyp", brand + b"\x00\x00\x00\x00" + b"M4A mp42isom")
    return ftyp + atom(b"free", b"\x00" * 8) + atom(b"mdat", b"\x00" * 16) + moov


# --- OGG --------------------------------------------------------------------


def lacing_values(length: int) -> list[int]:
    return [255] * (length // 255) + [length % 255]


def ogg_page(lacing: Sequence[int], body: bytes, *, serial: int = 1, sequence: int = 0) -> bytes:
    return (
        b"OggS"
        + bytes([0, 0])
        + struct.pack("<QII", 0, serial, sequence)
        + b"\x00\x00\x00\x00"
        + bytes([len(lacing)])
        + bytes(lacing)
        + body
    )


def ogg_stream(packets: Sequence[bytes], *, serial: int = 1, segments_per_page: int = 255) -> bytes:
    """Lay ``packets`` out over as many pages as the segment limit needs."""

    segments: list[tuple[int, bytes]] = []
    for packet in packets:
        offset = 0
        for value in lacing_values(len(packet)):
            segments.append((value, packet[offset:offset + value]))
            offset += value

    pages: list[bytes] = []
    for sequence, start in enumerate(range(0, len(segments), segments_per_page)):
        group = segments[start:start + segments_per_page]
        pages.append(
            ogg_page(
                [value for value, _ in group],
                b"".join(data for _, data in group),
                serial=serial,
                sequence=sequence,
            )
        )
    return b"".join(pages)


def vorbis_identification_packet() -> bytes:
    return b"\x01vorbis" + b"\x00" * 23


def vorbis_comment_packet(comments: Sequence[bytes]) -> bytes:
    return b"\x03vorbis" + vorbis_comment_body(comments) + b"\x01"


def vorbis_setup_packet() -> bytes:
    return b"\x05vorbis" + b"\x42" * 40
