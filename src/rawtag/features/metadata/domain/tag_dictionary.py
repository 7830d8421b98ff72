"""Native tag identifier to canonical field tables.

Where: src/rawtag/features/metadata/domain/tag_dictionary.py
What: Read-only lookup tables for ID3v2, ID3v2.2, Vorbis comments, RIFF INFO and
      M4A item atoms, plus the ID3v1 genre list.
Why: Normalise disparate vocabularies onto ``TagField``; unmapped identifiers
     pass through unchanged.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from types import MappingProxyType
from typing import Final

from rawtag.shared.tag_fields import TagField

ID3_TAGS: Final[Mapping[str, str]] = MappingProxyType(
    {
        "AENC": "Audio encryption",
        "APIC": "Attached picture",
        "COMM": TagField.COMMENTS,
        "COMR": "Commercial frame",
        "ENCR": "Encryption method registration",
        "EQUA": "Equalization",
        "ETCO": "Event timing codes",
        "GEOB": "General encapsulated object",
        "GRID": "Group identification registration",
        "IPLS": "Involved people list",
        "LINK": "Linked information",
        "MCDI": "Music CD identifier",
        "MLLT": "MPEG location lookup table",
        "OWNE": "Ownership frame",
        "PRIV": "Private frame",
        "PCNT": "Play counter",
        "POPM": "Popularimeter",
        "POSS": "Position synchronisation frame",
        "RBUF": "Recommended buffer size",
        "RVAD": "Relative volume adjustment",
        "RVRB": "Reverb",
        "SYLT": "Synchronized lyric",
        "SYTC": "Synchronized tempo codes",
        "TALB": TagField.ALBUM_NAME,
        "TBPM": TagField.BPM,
        "TCOM": TagField.COMPOSER,
        "TCON": TagField.GENRE,
        "TCOP": TagField.COPYRIGHT,
        "TDAT": TagField.DATE,
        "TDLY": "Playlist delay",
        "TDRC": TagField.DATE,
        "TENC": TagField.ENCODED_BY,
        "TEXT": TagField.LYRICIST,
        "TFLT": "File type",
        "TIME": "Time",
        "TIT1": "Content group description",
        "TIT2": TagField.TITLE,
        "TIT3": TagField.SUBTITLE,
        "TKEY": "Initial key",
        "TLAN": "Language(s)",
        "TLEN": "Length",
        "TMED": "Media type",
        "TOAL": "Original album",
        "TOFN": "Original filename",
        "TOLY": "Original lyricist(s)",
        "TOPE": "Original artist(s)",
        "TORY": "Original release year",
        "TOWN": "File owner",
        "TPE1": TagField.ARTIST_NAME,
        "TPE2": TagField.ACCOMPANIMENT,
        "TPE3": TagField.CONDUCTOR,
        "TPE4": "Modified by",
        "TPOS": TagField.DISC_NUMBER,
        "TPUB": TagField.PUBLISHER,
        "TRCK": TagField.TRACK_NUMBER,
        "TRDA": "Recording dates",
        "TRSN": "Internet radio station name",
        "TRSO": "Internet radio station owner",
        "TSIZ": "Size",
        "TSRC": TagField.ISRC,
        "TSSE": TagField.ENCODING_INFO,
        "TYER": TagField.YEAR,
        "TXXX": "User defined text information frame",
        "UFID": "Unique file identifier",
        "USER": "Terms of use",
        "USLT": TagField.LYRICS,
        "WCOM": "Commercial information",
        "WCOP": TagField.COPYRIGHT_WEBPAGE,
        "WOAF": TagField.FILE_WEBPAGE,
        "WOAR": TagField.ARTIST_WEBPAGE,
        "WOAS": "Official audio source webpage",
        "WORS": "Official internet radio station homepage",
        "WPAY": "Payment",
        "WPUB": TagField.PUBLISHER_WEBPAGE,
        "WXXX": "User defined URL link frame",
    }
)

# ID3v2.2 three-character frame IDs and their v2.3 equivalents.
ID3V22_FRAME_IDS: Final[Mapping[str, str]] = MappingProxyType(
    {
        "BUF": "RBUF",
        "CNT": "PCNT",
        "COM": "COMM",
        "CRA": "AENC",
        "ETC": "ETCO",
        "EQU": "EQUA",
        "GEO": "GEOB",
        "IPL": "IPLS",
        "LNK": "LINK",
        "MCI": "MCDI",
        "MLL": "MLLT",
        "PIC": "APIC",
        "POP": "POPM",
        "REV": "RVRB",
        "RVA": "RVAD",
        "SLT": "SYLT",
        "STC": "SYTC",
        "TAL": "TALB",
        "TBP": "TBPM",
        "TCM": "TCOM",
        "TCO": "TCON",
        "TCR": "TCOP",
        "TDA": "TDAT",
        "TDY": "TDLY",
        "TEN": "TENC",
        "TFT": "TFLT",
        "TIM": "TIME",
        "TKE": "TKEY",
        "TLA": "TLAN",
        "TLE": "TLEN",
        "TMT": "TMED",
        "TOA": "TOPE",
        "TOF": "TOFN",
        "TOL": "TOLY",
        "TOR": "TORY",
        "TOT": "TOAL",
        "TP1": "TPE1",
        "TP2": "TPE2",
        "TP3": "TPE3",
        "TP4": "TPE4",
        "TPA": "TPOS",
        "TPB": "TPUB",
        "TRC": "TSRC",
        "TRD": "TRDA",
        "TRK": "TRCK",
        "TSI": "TSIZ",
        "TSS": "TSSE",
        "TT1": "TIT1",
        "TT2": "TIT2",
        "TT3": "TIT3",
        "TXT": "TEXT",
        "TXX": "TXXX",
        "TYE": "TYER",
        "UFI": "UFID",
        "ULT": "USLT",
        "WAF": "WOAF",
        "WAR": "WOAR",
        "WAS": "WOAS",
        "WCM": "WCOM",
        "WCP": "WCOP",
        "WPB": "WPUB",
        "WXX": "WXXX",
    }
)

# There is no official Vorbis field set; these are the proposed names.
VORBIS_TAGS: Final[Mapping[str, str]] = MappingProxyType(
    {
        "TITLE": TagField.TITLE,
        "VERSION": TagField.SUBTITLE,
        "ALBUM": TagField.ALBUM_NAME,
        "ALBUMARTIST": TagField.ALBUM_ARTIST_NAME,
        "ALBUM ARTIST": TagField.ALBUM_ARTIST_NAME,
        "TRACKNUMBER": TagField.TRACK_NUMBER,
        "TRACKTOTAL": TagField.TRACK_TOTAL,
        "TOTALTRACKS": TagField.TRACK_TOTAL,
        "DISCNUMBER": TagField.DISC_NUMBER,
        "DISCTOTAL": TagField.DISC_TOTAL,
        "TOTALDISCS": TagField.DISC_TOTAL,
        "ARTIST": TagField.ARTIST_NAME,
        "PERFORMER": TagField.ACCOMPANIMENT,
        "COMPOSER": TagField.COMPOSER,
        "CONDUCTOR": TagField.CONDUCTOR,
        "LYRICIST": TagField.LYRICIST,
        "COPYRIGHT": TagField.COPYRIGHT,
        "ORGANIZATION": TagField.PUBLISHER,
        "LABEL": TagField.PUBLISHER,
        "GENRE": TagField.GENRE,
        "DATE": TagField.DATE,
        "YEAR": TagField.YEAR,
        "ISRC": TagField.ISRC,
        "COMMENT": TagField.COMMENTS,
        "DESCRIPTION": TagField.COMMENTS,
        "LYRICS": TagField.LYRICS,
        "UNSYNCEDLYRICS": TagField.LYRICS,
        "ENCODER": TagField.ENCODING_INFO,
        "ENCODED-BY": TagField.ENCODED_BY,
        "ENCODEDBY": TagField.ENCODED_BY,
        "BPM": TagField.BPM,
    }
)

RIFF_INFO_TAGS: Final[Mapping[str, str]] = MappingProxyType(
    {
        "INAM": TagField.TITLE,
        "IART": TagField.ARTIST_NAME,
        "IPRD": TagField.ALBUM_NAME,
        "ICMT": TagField.COMMENTS,
        "ICRD": TagField.DATE,
        "IGNR": TagField.GENRE,
        "ICOP": TagField.COPYRIGHT,
        "ISFT": TagField.ENCODING_INFO,
        "IPRT": TagField.TRACK_NUMBER,
        "ITRK": TagField.TRACK_NUMBER,
        "IENG": "Engineer",
        "ICMS": "Commissioned",
        "ISBJ": "Subject",
        "IKEY": "Keywords",
        "ISRC": "Source",
        "ILNG": "Language(s)",
        "IMED": "Media type",
        "ITCH": "Technician",
    }
)

M4A_TAGS: Final[Mapping[str, str]] = MappingProxyType(
    {
        "©ART": TagField.ARTIST_NAME,
        "aART": TagField.ALBUM_ARTIST_NAME,
        "©alb": TagField.ALBUM_NAME,
        "©wrt": TagField.COMPOSER,
        "©nam": TagField.TITLE,
        "trkn": TagField.TRACK_NUMBER,
        "trck": TagField.TRACK_NUMBER,
        "disk": TagField.DISC_NUMBER,
        "cprt": TagField.COPYRIGHT,
        "©too": TagField.ENCODING_INFO,
        "©day": TagField.YEAR,
        "gnre": TagField.GENRE,
        "©gen": TagField.GENRE,
        "©cmt": TagField.COMMENTS,
        "©lyr": TagField.LYRICS,
        "©enc": TagField.ENCODED_BY,
        "tmpo": TagField.BPM,
        "©grp": "Content group description",
        "desc": "Description",
    }
)

ID3V1_GENRES: Final[tuple[str, ...]] = (
    "Blues", "Classic Rock", "Country", "Dance", "Disco", "Funk", "Grunge",
    "Hip-Hop", "Jazz", "Metal", "New Age", "Oldies", "Other", "Pop", "R&B",
    "Rap", "Reggae", "Rock", "Techno", "Industrial", "Alternative", "Ska",
    "Death Metal", "Pranks", "Soundtrack", "Euro-Techno", "Ambient",
    "Trip-Hop", "Vocal", "Jazz+Funk", "Fusion", "Trance", "Classical",
    "Instrumental", "Acid", "House", "Game", "Sound Clip", "Gospel", "Noise",
    "Alt. Rock", "Bass", "Soul", "Punk", "Space", "Meditative",
    "Instrumental Pop", "Instrumental Rock", "Ethnic", "Gothic", "Darkwave",
    "Techno-Industrial", "Electronic", "Pop-Folk", "Eurodance", "Dream",
    "Southern Rock", "Comedy", "Cult", "Gangsta Rap", "Top 40",
    "Christian Rap", "Pop/Funk", "Jungle", "Native American", "Cabaret",
    "New Wave", "Psychedelic", "Rave", "Showtunes", "Trailer", "Lo-Fi",
    "Tribal", "Acid Punk", "Acid Jazz", "Polka", "Retro", "Musical",
    "Rock & Roll", "Hard Rock", "Folk", "Folk-Rock", "National Folk", "Swing",
    "Fast-Fusion", "Bebop", "Latin", "Revival", "Celtic", "Bluegrass",
    "Avantgarde", "Gothic Rock", "Progressive Rock", "Psychedelic Rock",
    "Symphonic Rock", "Slow Rock", "Big Band", "Chorus", "Easy Listening",
    "Acoustic", "Humour", "Speech", "Chanson", "Opera", "Chamber Music",
    "Sonata", "Symphony", "Booty Bass", "Primus", "Porn Groove", "Satire",
    "Slow Jam", "Club", "Tango", "Samba", "Folklore", "Ballad",
    "Power Ballad", "Rhythmic Soul", "Freestyle", "Duet", "Punk Rock",
    "Drum Solo", "A Cappella", "Euro-House", "Dance Hall", "Goa",
    "Drum & Bass", "Club-House", "Hardcore", "Terror", "Indie", "BritPop",
    "Afro-Punk", "Polsk Punk", "Beat", "Christian Gangsta Rap", "Heavy Metal",
    "Black Metal", "Crossover", "Contemporary Christian", "Christian Rock",
    "Merengue", "Salsa", "Thrash Metal", "Anime", "JPop", "Synthpop",
)

_GENRE_REFERENCE = re.compile(r"^\((\d+)\)(.*)$")


def canonical_name(table: Mapping[str, str], native: str) -> str:
    """Map a native identifier onto its canonical field, or pass it through."""

    mapped = table.get(native)
    return str(mapped) if mapped is not None else native


def id3v1_genre(index: int) -> str | None:
    """Return the ID3v1 genre name for ``index`` or None when out of range."""

    if 0 <= index < len(ID3V1_GENRES):
        return ID3V1_GENRES[index]
    return None


def resolve_genre(value: str) -> str:
    """Resolve ``"(17)"``, ``"17"`` and ``"(17)Rock"`` genre references.

    Free text is returned unchanged; a refinement after the reference wins.
    """

    stripped = value.strip()
    if stripped.isdigit():
        return id3v1_genre(int(stripped)) or value

    match = _GENRE_REFERENCE.match(stripped)
    if match is None:
        return value
    refinement = match.group(2).strip()
    if refinement:
        return refinement
    return id3v1_genre(int(match.group(1))) or value


__all__ = [
    "ID3_TAGS",
    "ID3V1_GENRES",
    "ID3V22_FRAME_IDS",
    "M4A_TAGS",
    "RIFF_INFO_TAGS",
    "VORBIS_TAGS",
    "canonical_name",
    "id3v1_genre",
    "resolve_genre",
]
