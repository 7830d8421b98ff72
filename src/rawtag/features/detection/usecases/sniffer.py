"""Header-based container detection.

Where: src/rawtag/features/detection/usecases/sniffer.py
What: Classify a file from its leading bytes into an ``AudioFormat``.
Why: Extensions lie; the first 32 bytes identify every supported container.
"""

from __future__ import annotations

from typing import Final

from rawtag.platform.binary import ByteCursor

from ..domain.formats import AudioFormat

HEADER_WINDOW: Final[int] = 32

# ASF Header Object GUID 75B22630-668E-11CF-A6D9-00AA0062CE6C in on-disk order.
ASF_HEADER_GUID: Final[bytes] = bytes.fromhex("3026b2758e66cf11a6d900aa0062ce6c")

_FTYP_BRANDS: Final[tuple[tuple[bytes, AudioFormat], ...]] = (
    (b"M4A", AudioFormat.M4A),
    # Audiobook and protected iTunes audio share the M4A atom layout.
    (b"M4B", AudioFormat.M4A),
    (b"M4P", AudioFormat.M4A),
    (b"dash", AudioFormat.DASH),
    (b"mp4", AudioFormat.MP4),
)


def classify(header: bytes) -> AudioFormat:
    """Classify a header window; short or unknown input yields ``UNKNOWN``."""

    if header[0:3] == b"ID3":
        return AudioFormat.MP3

    if header[0:4] == b"RIFF":
        if header[8:12] == b"WAVE":
            return AudioFormat.WAV
        return AudioFormat.UNKNOWN

    if header[4:8] == b"ftyp":
        brand = header[8:12]
        for prefix, audio_format in _FTYP_BRANDS:
            if brand.startswith(prefix):
                return audio_format
        return AudioFormat.UNKNOWN

    if header[0:16] == ASF_HEADER_GUID:
        return AudioFormat.WMA

    if header[0:4] == b"fLaC":
        return AudioFormat.FLAC

    if header[0:4] == b"OggS":
        return AudioFormat.OGG

    return AudioFormat.UNKNOWN


def sniff(cursor: ByteCursor, window: int = HEADER_WINDOW) -> AudioFormat:
    """Classify the source behind ``cursor`` without moving it."""

    saved = cursor.position
    cursor.seek(0)
    try:
        header = cursor.peek(max(window, HEADER_WINDOW))
    finally:
        cursor.seek(saved)
    return classify(header)


__all__ = ["ASF_HEADER_GUID", "HEADER_WINDOW", "classify", "sniff"]
