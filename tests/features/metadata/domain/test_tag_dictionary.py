"""Tests for native identifier normalisation and genre lookups."""

from __future__ import annotations

import pytest

from rawtag.features.metadata.domain.tag_dictionary import (
    ID3_TAGS,
    ID3V1_GENRES,
    ID3V22_FRAME_IDS,
    M4A_TAGS,
    RIFF_INFO_TAGS,
    VORBIS_TAGS,
    canonical_name,
    id3v1_genre,
    resolve_genre,
)
from rawtag.shared.tag_fields import TagField


def test_known_identifiers_map_to_canonical_fields() -> None:
    assert canonical_name(ID3_TAGS, "TIT2") == TagField.TITLE
    assert canonical_name(ID3_TAGS, "COMM") == TagField.COMMENTS
    assert canonical_name(VORBIS_TAGS, "ARTIST") == TagField.ARTIST_NAME
    assert canonical_name(RIFF_INFO_TAGS, "INAM") == TagField.TITLE
    assert canonical_name(M4A_TAGS, "\xa9nam") == TagField.TITLE


def test_vorbis_totals_have_their_own_fields() -> None:
    assert canonical_name(VORBIS_TAGS, "TRACKTOTAL") == TagField.TRACK_TOTAL
    assert canonical_name(VORBIS_TAGS, "TOTALTRACKS") == TagField.TRACK_TOTAL
    assert canonical_name(VORBIS_TAGS, "DISCTOTAL") == TagField.DISC_TOTAL


def test_unknown_identifiers_pass_through() -> None:
    assert canonical_name(ID3_TAGS, "XSOP") == "XSOP"
    assert canonical_name(VORBIS_TAGS, "REPLAYGAIN_TRACK_GAIN") == "REPLAYGAIN_TRACK_GAIN"


def test_tables_are_read_only() -> None:
    with pytest.raises(TypeError):
        ID3_TAGS["TIT2"] = "Changed"  # pyright: ignore[reportIndexIssue]


def test_v22_identifiers_map_to_v23_frames() -> None:
    assert ID3V22_FRAME_IDS["TT2"] == "TIT2"
    assert ID3V22_FRAME_IDS["PIC"] == "APIC"
    assert ID3V22_FRAME_IDS["COM"] == "COMM"


def test_id3v1_genre_bounds() -> None:
    assert ID3V1_GENRES[0] == "Blues"
    assert id3v1_genre(17) == "Rock"
    assert id3v1_genre(255) is None
    assert id3v1_genre(-1) is None


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("17", "Rock"),
        ("(17)", "Rock"),
        ("(17)Indie Rock", "Indie Rock"),
        ("Shoegaze", "Shoegaze"),
        ("(999)", "(999)"),
    ],
)
def test_resolve_genre(raw: str, expected: str) -> None:
    assert resolve_genre(raw) == expected
