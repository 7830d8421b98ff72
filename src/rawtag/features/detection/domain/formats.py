"""
Summary: Enumeration of recognised container kinds.
Why: Detection runs once per file and every later decision keys off this value.
"""

from __future__ import annotations

from enum import StrEnum


class AudioFormat(StrEnum):
    """Container kinds the sniffer can tell apart."""

    MP3 = "mp3"
    WAV = "wav"
    FLAC = "flac"
    OGG = "ogg"
    M4A = "m4a"
    MP4 = "mp4"
    DASH = "dash"
    WMA = "wma"
    UNKNOWN = "unknown"


__all__ = ["AudioFormat"]
