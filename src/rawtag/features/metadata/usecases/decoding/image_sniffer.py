"""Carve embedded images out of opaque picture payloads.

Where: src/rawtag/features/metadata/usecases/decoding/image_sniffer.py
What: Locate the real image bytes inside ID3 ``APIC``/``PIC`` frames and M4A
      ``covr`` values using MIME tokens, magic headers and the PNG footer.
Why: Those payloads do not isolate the image with a declared length.

JPEG and WEBP have no terminator we can scan for reliably, so their data runs
to the end of the blob. PNG ends at its ``IEND`` chunk.
"""

from __future__ import annotations

from typing import Final

from rawtag.shared.metadata import IMAGE_MIME_PREFIX, CoverArt

PNG_TOKEN: Final[bytes] = b"png"
JPEG_TOKEN: Final[bytes] = b"jpeg"
WEBP_TOKEN: Final[bytes] = b"webp"
PNG_HEADER: Final[bytes] = b"\x89PNG\r\n\x1a\n"
PNG_FOOTER: Final[bytes] = b"IEND\xaeB`\x82"
JPEG_SOI: Final[bytes] = b"\xff\xd8\xff"
RIFF_MARKER: Final[bytes] = b"RIFF"

# Token, separator, picture type and separator precede the image data.
TOKEN_SKIP: Final[int] = 7

# Equal offsets resolve in this order.
_PATTERNS: Final[tuple[tuple[str, bytes], ...]] = (
    ("png", PNG_TOKEN),
    ("jpeg", JPEG_TOKEN),
    ("soi", JPEG_SOI),
    ("webp", WEBP_TOKEN),
    ("png-header", PNG_HEADER),
)


def _earliest_match(blob: bytes) -> tuple[int, str] | None:
    best: tuple[int, int, str] | None = None
    for priority, (kind, pattern) in enumerate(_PATTERNS):
        index = blob.find(pattern)
        if index == -1:
            continue
        # A "png" token with no PNG header after it is just text, e.g. a description.
        if kind == "png" and blob.find(PNG_HEADER, index) == -1:
            continue
        candidate = (index, priority, kind)
        if best is None or candidate < best:
            best = candidate
    if best is None:
        return None
    return best[0], best[2]


def _png_bounds(blob: bytes, match: int) -> tuple[int, int]:
    start = blob.find(PNG_HEADER, match)
    footer = blob.find(PNG_FOOTER, start)
    end = footer + len(PNG_FOOTER) if footer != -1 else len(blob)
    return start, end


def _token_start(blob: bytes, match: int, token: bytes, marker: bytes) -> int:
    marker_index = blob.find(marker, match + len(token))
    if marker_index != -1:
        return marker_index
    return min(match + TOKEN_SKIP, len(blob))


def extract_image(blob: bytes) -> CoverArt:
    """Return the image carried by ``blob``.

    Unrecognised payloads come back whole with the bare ``image/`` MIME type;
    that is a best-effort result, not an error.
    """

    data = bytes(blob)
    found = _earliest_match(data)
    if found is None:
        return CoverArt(IMAGE_MIME_PREFIX, data)

    index, kind = found
    match kind:
        case "png" | "png-header":
            start, end = _png_bounds(data, index)
            subtype = "png"
        case "jpeg":
            start, end = _token_start(data, index, JPEG_TOKEN, JPEG_SOI), len(data)
            subtype = "jpeg"
        case "webp":
            start, end = _token_start(data, index, WEBP_TOKEN, RIFF_MARKER), len(data)
            subtype = "webp"
        case _:
            start, end = index, len(data)
            subtype = "jpeg"

    return CoverArt(IMAGE_MIME_PREFIX + subtype, data[start:end])


__all__ = [
    "JPEG_SOI",
    "PNG_FOOTER",
    "PNG_HEADER",
    "TOKEN_SKIP",
    "extract_image",
]
