"""Tests for CLI report rendering."""

from __future__ import annotations

from io import StringIO
from pathlib import Path

from rich.console import Console

from rawtag.features.detection import AudioFormat
from rawtag.shared.metadata import CoverArt, Metadata
from rawtag.ui.cli.display.report import ReportDisplay
from rawtag.ui.cli.models import FileReport


def _render(display_call: str, *args: object) -> str:
    buffer = StringIO()
    display = ReportDisplay(Console(file=buffer, width=120))
    getattr(display, display_call)(*args)
    return buffer.getvalue()


def test_table_lists_every_value() -> None:
    metadata = Metadata()
    _ = metadata.add_text_field("Artist", "One")
    _ = metadata.add_text_field("Artist", "Two")
    report = FileReport(path=Path("song.mp3"), audio_format=AudioFormat.MP3, metadata=metadata)

    table = ReportDisplay.build_table(report, metadata)

    assert str(table.title) == "song.mp3 [mp3]"
    assert table.row_count == 1
    output = _render("show_reports", [report])
    assert "One" in output
    assert "Two" in output


def test_empty_metadata_shows_placeholder() -> None:
    report = FileReport(path=Path("blank.wav"), audio_format=AudioFormat.WAV, metadata=Metadata())

    assert "no text fields found" in _render("show_reports", [report])


def test_unknown_image_type_is_flagged() -> None:
    metadata = Metadata(images=[CoverArt("image/", b"\x00" * 2048)])
    report = FileReport(path=Path("a.m4a"), audio_format=AudioFormat.M4A, metadata=metadata)

    output = _render("show_reports", [report])

    assert "image/ (unknown type)" in output
    assert "2,048 bytes" in output


def test_failed_reports_are_counted() -> None:
    reports = [
        FileReport(path=Path("bad.bin"), audio_format=AudioFormat.UNKNOWN, error="Unrecognized file format"),
        FileReport(path=Path("ok.flac"), audio_format=AudioFormat.FLAC, metadata=Metadata()),
    ]

    output = _render("show_reports", reports)

    assert "Unrecognized file format" in output
    assert "1 of 2 files could not be read" in output


def test_written_summary() -> None:
    reports = [FileReport(path=Path("ok.flac"), metadata=Metadata())]

    output = _render("show_written", [Path("out/ok_cover1.png")], reports)

    assert "out/ok_cover1.png" in output
    assert "Wrote 1 image(s) from 1 file(s)" in output


def test_quiet_suppresses_output() -> None:
    reports = [FileReport(path=Path("ok.flac"), metadata=Metadata())]

    assert _render("show_reports", reports, True) == ""
    assert _render("show_written", [], reports, True) == ""
