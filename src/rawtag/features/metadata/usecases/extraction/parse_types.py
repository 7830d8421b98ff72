"""src/rawtag/features/metadata/usecases/extraction/parse_types.py
Where: Metadata feature extraction layer.
What: Structured log events, reader options and the recoverable error types.
Why: Keep the container readers lean by centralising shared definitions.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Protocol


class ParseEvent(StrEnum):
    """Structured event identifiers for parser diagnostics."""

    FORMAT_DETECTED = "parse.format.detected"
    FORMAT_UNSUPPORTED = "parse.format.unsupported"
    STRUCTURE_TRUNCATED = "parse.structure.truncated"
    STRUCTURE_MALFORMED = "parse.structure.malformed"
    FRAME_SKIPPED = "parse.frame.skipped"
    FILE_COMPLETE = "parse.file.complete"


class UnrecognizedFormatError(ValueError):
    """Raised when a header matches no known container signature."""


class MalformedStructureError(ValueError):
    """Raised when a container unit violates its own framing rules."""


@dataclass(frozen=True, slots=True)
class ReaderOptions:
    """Switches handed to every reader for one parse call."""

    extract_images: bool = True
    id3v1_fallback: bool = True


class ParseLogger(Protocol):
    """Signature for structured parse log emitters."""

    def __call__(
        self,
        level: int,
        event: ParseEvent,
        message: str,
        *message_args: object,
        **context: object,
    ) -> None:
        ...


__all__ = [
    "MalformedStructureError",
    "ParseEvent",
    "ParseLogger",
    "ReaderOptions",
    "UnrecognizedFormatError",
]
