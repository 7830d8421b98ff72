"""Shared base classes for container readers.

Where: src/rawtag/features/metadata/usecases/extraction/_base_readers.py
What: Define the ``ContainerReader`` template that owns the result, the error
      recovery and the structured logging for one parse call.
Why: Every format recovers from short reads and broken units the same way, so
     the individual readers only describe how to walk their structure.
"""

from __future__ import annotations

import abc
import logging
from typing import Any, ClassVar, override

from rawtag.features.detection import AudioFormat
from rawtag.platform.binary import ByteCursor, TruncatedReadError
from rawtag.platform.logging import logger
from rawtag.shared.metadata import CoverArt, Metadata

from .parse_types import MalformedStructureError, ParseEvent, ReaderOptions

__all__ = [
    "ContainerReader",
    "UnsupportedReader",
]


class ContainerReader(abc.ABC):
    """Parse one container kind from a cursor into a ``Metadata`` aggregate."""

    AUDIO_FORMAT: ClassVar[AudioFormat] = AudioFormat.UNKNOWN

    def __init__(
        self,
        options: ReaderOptions | None = None,
        *,
        source_name: str | None = None,
        audio_format: AudioFormat | None = None,
    ) -> None:
        self.options: ReaderOptions = options or ReaderOptions()
        self.source_name: str | None = source_name
        self.audio_format: AudioFormat = audio_format or self.AUDIO_FORMAT

    def read(self, cursor: ByteCursor) -> Metadata:
        """Parse ``cursor`` and return whatever could be extracted.

        Short reads and structural violations end the walk early; the fields
        and images gathered up to that point are still returned.
        """

        metadata = Metadata()
        try:
            self._parse(cursor, metadata)
        except TruncatedReadError as exc:
            self._log(
                logging.WARNING,
                ParseEvent.STRUCTURE_TRUNCATED,
                "Stopped reading %s data early: %s",
                self.audio_format,
                exc,
                detail=str(exc),
            )
        except MalformedStructureError as exc:
            self._log(
                logging.WARNING,
                ParseEvent.STRUCTURE_MALFORMED,
                "Stopped reading %s data at a malformed unit: %s",
                self.audio_format,
                exc,
                detail=str(exc),
            )
        return metadata

    @abc.abstractmethod
    def _parse(self, cursor: ByteCursor, metadata: Metadata) -> None:
        """Walk the container and populate ``metadata``."""
        raise NotImplementedError

    def _add_image(self, metadata: Metadata, image: CoverArt) -> None:
        if self.options.extract_images:
            metadata.add_image(image)

    def _add_text(self, metadata: Metadata, tag: str, value: str) -> None:
        """Store non-empty values; empty ones carry no information."""
        if value:
            _ = metadata.add_text_field(tag, value)

    def log(
        self,
        level: int,
        event: ParseEvent,
        message: str,
        *message_args: object,
        **context: object,
    ) -> None:
        """Public forwarding API used by helper modules."""

        self._log(level, event, message, *message_args, **context)

    def _log(
        self,
        level: int,
        event: ParseEvent,
        message: str,
        *message_args: object,
        **context: object,
    ) -> None:
        extra: dict[str, Any] = {
            "parse_event": event.value,
            "audio_format": self.audio_format.value,
        }
        if self.source_name is not None:
            extra["source_path"] = self.source_name
        extra.update(context)
        logger.log(level, message, *message_args, extra=extra, stacklevel=3)


class UnsupportedReader(ContainerReader):
    """Recognised container whose tag layout is not implemented."""

    @override
    def _parse(self, cursor: ByteCursor, metadata: Metadata) -> None:
        self._log(
            logging.INFO,
            ParseEvent.FORMAT_UNSUPPORTED,
            "No tag reader for %s containers; returning empty metadata",
            self.audio_format,
            detail="tags not read",
        )
