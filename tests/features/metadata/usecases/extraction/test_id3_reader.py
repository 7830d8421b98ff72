"""Tests for the ID3v2 frame walk and the ID3v1 fallback."""

from __future__ import annotations

import logging
import zlib
from pathlib import Path

import pytest
from mutagen.id3 import APIC, COMM, ID3, TIT2, TPE1, TXXX

from rawtag.features.metadata.usecases.extraction import Id3Reader, ParseEvent, ReaderOptions
from rawtag.platform.binary import ByteCursor
from rawtag.shared.metadata import Metadata
from rawtag.shared.tag_fields import TagField
from support.builders import (
    id3_frame,
    id3_tag,
    id3_text,
    id3v1_trailer,
    tiny_jpeg,
    tiny_png,
)

AUDIO = b"\xff\xfb\x90\x00" + b"\x00" * 60


def _read(data: bytes, options: ReaderOptions | None = None) -> Metadata:
    return Id3Reader(options, source_name="track.mp3").read(ByteCursor.from_bytes(data))


def _events(caplog: pytest.LogCaptureFixture) -> list[str]:
    return [str(getattr(record, "parse_event", "")) for record in caplog.records]


def _comment(text: str, description: str = "") -> bytes:
    return b"\x00eng" + description.encode("latin-1") + b"\x00" + text.encode("latin-1")


def test_v23_title() -> None:
    data = id3_tag([id3_frame("TIT2", id3_text("Hello", 0))]) + AUDIO

    metadata = _read(data)

    assert metadata.text_fields == {TagField.TITLE: ["Hello"]}


def test_v24_frame_sizes_are_synchsafe() -> None:
    title = "x" * 200
    data = id3_tag(
        [
            id3_frame("TIT2", id3_text(title), version=4),
            id3_frame("TALB", id3_text("Album"), version=4),
        ],
        version=4,
    )

    metadata = _read(data)

    assert metadata.first(TagField.TITLE) == title
    assert metadata.first(TagField.ALBUM_NAME) == "Album"


def test_v24_multi_valued_text() -> None:
    data = id3_tag([id3_frame("TPE1", id3_text("A\x00B"), version=4)], version=4)

    assert _read(data).text_fields[TagField.ARTIST_NAME] == ["A", "B"]


def test_comments_accumulate_in_order_and_duplicates_collapse() -> None:
    data = id3_tag(
        [
            id3_frame("COMM", _comment("first")),
            id3_frame("COMM", _comment("second", "other")),
            id3_frame("COMM", _comment("first", "again")),
        ]
    )

    assert _read(data).text_fields[TagField.COMMENTS] == ["first", "second"]


def test_user_text_frame_uses_description_as_field() -> None:
    data = id3_tag([id3_frame("TXXX", b"\x00MOOD\x00calm")])

    assert _read(data).text_fields == {"MOOD": ["calm"]}


@pytest.mark.parametrize(
    ("version", "payload", "expected"),
    [
        (3, b"\x00(17)", ["Rock"]),
        (3, b"\x00(17)Indie", ["Indie"]),
        (4, b"\x0317\x00Shoegaze", ["Rock", "Shoegaze"]),
    ],
)
def test_genre_references_resolve(version: int, payload: bytes, expected: list[str]) -> None:
    data = id3_tag([id3_frame("TCON", payload, version=version)], version=version)

    assert _read(data).text_fields[TagField.GENRE] == expected


def test_url_frames_are_latin1() -> None:
    data = id3_tag(
        [
            id3_frame("WOAR", b"http://artist.example"),
            id3_frame("WXXX", b"\x00home\x00http://home.example"),
        ]
    )

    fields = _read(data).text_fields

    assert fields[TagField.ARTIST_WEBPAGE] == ["http://artist.example"]
    assert fields["User defined URL link frame"] == ["http://home.example"]


def test_attached_pictures_are_carved() -> None:
    png = tiny_png()
    jpeg = tiny_jpeg()
    data = id3_tag(
        [
            id3_frame("APIC", b"\x00image/png\x00\x03front\x00" + png),
            id3_frame("APIC", b"\x00image/jpeg\x00\x04\x00" + jpeg),
        ]
    )

    images = _read(data).images

    assert [image.mime_type for image in images] == ["image/png", "image/jpeg"]
    assert images[0].data == png
    assert images[1].data == jpeg


def test_images_skipped_when_disabled() -> None:
    data = id3_tag(
        [
            id3_frame("TIT2", id3_text("Song", 0)),
            id3_frame("APIC", b"\x00image/png\x00\x03\x00" + tiny_png()),
        ]
    )

    metadata = _read(data, ReaderOptions(extract_images=False))

    assert metadata.images == []
    assert metadata.first(TagField.TITLE) == "Song"


def test_v22_frames_are_mapped() -> None:
    png = tiny_png()
    data = id3_tag(
        [
            id3_frame("TT2", id3_text("Old", 0), version=2),
            id3_frame("TP1", id3_text("Band", 0), version=2),
            id3_frame("PIC", b"\x00PNG\x03\x00" + png, version=2),
        ],
        version=2,
    )

    metadata = _read(data)

    assert metadata.first(TagField.TITLE) == "Old"
    assert metadata.first(TagField.ARTIST_NAME) == "Band"
    assert [image.data for image in metadata.images] == [png]


def test_tag_level_unsynchronisation_is_reversed() -> None:
    frames = id3_frame("TIT2", b"\x00A\xffB")
    stuffed = frames.replace(b"\xff", b"\xff\x00")
    data = id3_tag([stuffed], flags=0x80)

    assert _read(data).first(TagField.TITLE) == "A\xffB"


def test_extended_header_is_skipped() -> None:
    extended = b"\x00\x00\x00\x06" + b"\x00" * 6
    data = id3_tag([extended, id3_frame("TIT2", id3_text("After", 0))], flags=0x40)

    assert _read(data).first(TagField.TITLE) == "After"


def test_compressed_frame_is_inflated() -> None:
    body = id3_text("Zipped", 0)
    payload = len(body).to_bytes(4, "big") + zlib.compress(body)
    data = id3_tag([id3_frame("TIT2", payload, flags=0x0080)])

    assert _read(data).first(TagField.TITLE) == "Zipped"


def test_encrypted_frame_is_skipped(caplog: pytest.LogCaptureFixture) -> None:
    data = id3_tag(
        [
            id3_frame("TIT2", b"\x80secret", flags=0x0040),
            id3_frame("TALB", id3_text("Open", 0)),
        ]
    )

    with caplog.at_level(logging.DEBUG, logger="rawtag"):
        metadata = _read(data)

    assert metadata.text_fields == {TagField.ALBUM_NAME: ["Open"]}
    assert ParseEvent.FRAME_SKIPPED in _events(caplog)


def test_bad_encoding_flag_skips_only_that_frame() -> None:
    data = id3_tag(
        [
            id3_frame("TXXX", b"\x07desc\x00value"),
            id3_frame("TIT2", id3_text("Kept", 0)),
        ]
    )

    assert _read(data).text_fields == {TagField.TITLE: ["Kept"]}


def test_invalid_frame_id_ends_frame_list() -> None:
    data = id3_tag([id3_frame("TIT2", id3_text("One", 0)), b"tit2\x00\x00\x00\x02\x00\x00ab"])

    assert _read(data).text_fields == {TagField.TITLE: ["One"]}


def test_truncated_tag_keeps_frames_read_so_far(caplog: pytest.LogCaptureFixture) -> None:
    data = id3_tag(
        [
            id3_frame("TIT2", id3_text("Complete", 0)),
            id3_frame("TALB", id3_text("Cut short by the end of file", 0)),
        ]
    )

    with caplog.at_level(logging.DEBUG, logger="rawtag"):
        metadata = _read(data[:-10])

    assert metadata.text_fields == {TagField.TITLE: ["Complete"]}
    assert ParseEvent.STRUCTURE_TRUNCATED in _events(caplog)


def test_wrong_version_is_malformed(caplog: pytest.LogCaptureFixture) -> None:
    data = b"ID3\x05\x00\x00\x00\x00\x00\x00" + AUDIO

    with caplog.at_level(logging.WARNING, logger="rawtag"):
        metadata = _read(data)

    assert metadata.is_empty
    assert ParseEvent.STRUCTURE_MALFORMED in _events(caplog)


def test_id3v1_fills_missing_fields_only() -> None:
    data = (
        id3_tag([id3_frame("TIT2", id3_text("V2 Title", 0))])
        + AUDIO
        + id3v1_trailer(title="V1 Title", artist="V1 Artist", year="1999", track=7, genre=17)
    )

    fields = _read(data).text_fields

    assert fields[TagField.TITLE] == ["V2 Title"]
    assert fields[TagField.ARTIST_NAME] == ["V1 Artist"]
    assert fields[TagField.YEAR] == ["1999"]
    assert fields[TagField.TRACK_NUMBER] == ["7"]
    assert fields[TagField.GENRE] == ["Rock"]


def test_id3v1_without_track_keeps_full_comment() -> None:
    comment = "c" * 30
    data = id3_tag([], padding=16) + AUDIO + id3v1_trailer(comment=comment)

    fields = _read(data).text_fields

    assert fields[TagField.COMMENTS] == [comment]
    assert TagField.TRACK_NUMBER not in fields


def test_id3v1_fallback_can_be_disabled() -> None:
    data = id3_tag([], padding=16) + AUDIO + id3v1_trailer(artist="Ignored")

    assert _read(data, ReaderOptions(id3v1_fallback=False)).is_empty


@pytest.mark.parametrize("v2_version", [3, 4])
def test_reads_tags_written_by_mutagen(tmp_path: Path, v2_version: int) -> None:
    png = tiny_png()
    path = tmp_path / "tagged.mp3"
    _ = path.write_bytes(AUDIO * 4)

    tags = ID3()
    tags.add(TIT2(encoding=3, text="Hello"))
    tags.add(TPE1(encoding=3, text="Artist"))
    tags.add(COMM(encoding=3, lang="eng", desc="", text="nice"))
    tags.add(TXXX(encoding=3, desc="MOOD", text="calm"))
    tags.add(APIC(encoding=3, mime="image/png", type=3, desc="Cover", data=png))
    tags.save(path, v2_version=v2_version)

    metadata = _read(path.read_bytes())

    assert metadata.first(TagField.TITLE) == "Hello"
    assert metadata.first(TagField.ARTIST_NAME) == "Artist"
    assert metadata.first(TagField.COMMENTS) == "nice"
    assert metadata.first("MOOD") == "calm"
    assert [image.data for image in metadata.images] == [png]
