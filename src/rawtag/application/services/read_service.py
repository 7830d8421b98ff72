"""Application service that reads tags from a path, buffer or stream.

Where: src/rawtag/application/services/read_service.py
What: Open the source, sniff its format, dispatch to the matching reader and
      log the outcome.
Why: Callers need "give me the metadata for this file" without touching cursors.
"""

from __future__ import annotations

import io
import logging
import os
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO, TypeAlias

from rawtag.config.config import Config
from rawtag.features.detection import AudioFormat, sniff
from rawtag.features.metadata.usecases.extraction import (
    ParseEvent,
    ReaderOptions,
    ReaderRegistry,
)
from rawtag.platform.binary import ByteCursor
from rawtag.platform.logging import logger
from rawtag.shared.metadata import CoverArt, Metadata

Source: TypeAlias = str | os.PathLike[str] | bytes | bytearray | memoryview | BinaryIO


def _source_name(source: Source) -> str | None:
    if isinstance(source, (str, os.PathLike)):
        return str(Path(source))
    name = getattr(source, "name", None)
    return name if isinstance(name, str) else None


@contextmanager
def _open_source(source: Source) -> Iterator[ByteCursor]:
    """Yield a cursor over ``source``; only streams opened here are closed."""

    if isinstance(source, (str, os.PathLike)):
        with open(source, "rb") as handle:
            yield ByteCursor(handle)
        return

    if isinstance(source, (bytes, bytearray, memoryview)):
        with io.BytesIO(bytes(source)) as buffer:
            yield ByteCursor(buffer)
        return

    # Caller-owned stream: the window starts at its current position.
    start = source.tell()
    yield ByteCursor(source, start=start)


def reader_options(config: Config) -> ReaderOptions:
    """Project configuration switches onto reader options."""
    return ReaderOptions(extract_images=config.extract_images, id3v1_fallback=config.id3v1_fallback)


def detect_format(source: Source, *, config: Config | None = None) -> AudioFormat:
    """Classify ``source`` from its leading bytes."""

    settings = config or Config()
    with _open_source(source) as cursor:
        return sniff(cursor, settings.sniff_window)


def read(source: Source, *, config: Config | None = None) -> Metadata:
    """Read every tag and embedded image from ``source``.

    Raises:
        UnrecognizedFormatError: If the header matches no known container.
        OSError: If a path cannot be opened.
    """

    settings = config or Config()
    name = _source_name(source)

    with _open_source(source) as cursor:
        audio_format = sniff(cursor, settings.sniff_window)
        logger.debug(
            "Detected %s container",
            audio_format,
            extra={
                "parse_event": ParseEvent.FORMAT_DETECTED.value,
                "audio_format": audio_format.value,
                "source_path": name,
            },
        )
        reader = ReaderRegistry.create(audio_format, reader_options(settings), source_name=name)
        metadata = reader.read(cursor)

    logger.log(
        logging.DEBUG,
        "Parsed %d fields and %d images",
        len(metadata.text_fields),
        len(metadata.images),
        extra={
            "parse_event": ParseEvent.FILE_COMPLETE.value,
            "audio_format": audio_format.value,
            "source_path": name,
            "field_count": len(metadata.text_fields),
            "image_count": len(metadata.images),
        },
    )
    return metadata


def fields(metadata: Metadata) -> dict[str, list[str]]:
    """Return a copy of the canonical field mapping in insertion order."""
    return {name: list(values) for name, values in metadata.text_fields.items()}


def images(metadata: Metadata) -> list[CoverArt]:
    """Return the embedded images in encounter order."""
    return list(metadata.images)


__all__ = ["Source", "detect_format", "fields", "images", "read", "reader_options"]
