"""Tests for reader selection."""

from __future__ import annotations

import logging

import pytest

from rawtag.features.detection import AudioFormat
from rawtag.features.metadata.usecases.extraction import (
    ContainerReader,
    FlacReader,
    Id3Reader,
    M4aReader,
    OggReader,
    ParseEvent,
    ReaderOptions,
    ReaderRegistry,
    UnrecognizedFormatError,
    UnsupportedReader,
    WaveReader,
)
from rawtag.platform.binary import ByteCursor


@pytest.mark.parametrize(
    ("audio_format", "reader_class"),
    [
        (AudioFormat.MP3, Id3Reader),
        (AudioFormat.FLAC, FlacReader),
        (AudioFormat.WAV, WaveReader),
        (AudioFormat.OGG, OggReader),
        (AudioFormat.M4A, M4aReader),
        (AudioFormat.MP4, M4aReader),
        (AudioFormat.DASH, UnsupportedReader),
        (AudioFormat.WMA, UnsupportedReader),
    ],
)
def test_create_selects_reader(audio_format: AudioFormat, reader_class: type[ContainerReader]) -> None:
    reader = ReaderRegistry.create(audio_format, source_name="file")

    assert type(reader) is reader_class
    assert reader.audio_format is audio_format
    assert reader.source_name == "file"


def test_unknown_format_raises() -> None:
    with pytest.raises(UnrecognizedFormatError, match="Unrecognized file format"):
        _ = ReaderRegistry.create(AudioFormat.UNKNOWN)


def test_supported_formats_exclude_unknown() -> None:
    assert AudioFormat.UNKNOWN not in ReaderRegistry.supported_formats()
    assert set(ReaderRegistry.supported_formats()) == set(AudioFormat) - {AudioFormat.UNKNOWN}


def test_options_are_passed_through() -> None:
    options = ReaderOptions(extract_images=False)

    assert ReaderRegistry.create(AudioFormat.FLAC, options).options is options


def test_unsupported_reader_returns_empty_metadata(caplog: pytest.LogCaptureFixture) -> None:
    reader = ReaderRegistry.create(AudioFormat.WMA, source_name="clip.wma")

    with caplog.at_level(logging.INFO, logger="rawtag"):
        metadata = reader.read(ByteCursor.from_bytes(b"\x00" * 64))

    assert metadata.is_empty
    record = next(r for r in caplog.records if getattr(r, "parse_event", None) == ParseEvent.FORMAT_UNSUPPORTED)
    assert getattr(record, "audio_format", None) == "wma"
    assert getattr(record, "source_path", None) == "clip.wma"
