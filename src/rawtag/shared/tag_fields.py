# Where: rawtag.shared.tag_fields
# What: Closed catalog of canonical, format-independent field names.
# Why: Every container's native tag identifiers are normalised onto these names.

from enum import StrEnum


class TagField(StrEnum):
    """Canonical field names used as keys of ``Metadata.text_fields``."""

    ARTIST_NAME = "Artist"
    ALBUM_ARTIST_NAME = "Album Artist"
    ALBUM_NAME = "Album"
    TITLE = "Title"
    SUBTITLE = "Subtitle"
    COMPOSER = "Composer"
    CONDUCTOR = "Conductor"
    ACCOMPANIMENT = "Accompaniment"
    LYRICIST = "Lyricist"
    GENRE = "Genre"
    YEAR = "Year"
    DATE = "Date"
    DISC_NUMBER = "Disc Number"
    TRACK_NUMBER = "Track Number"
    TRACK_TOTAL = "Track Total"
    DISC_TOTAL = "Disc Total"
    COPYRIGHT = "Copyright"
    COPYRIGHT_WEBPAGE = "Copyright Site"
    ISRC = "ISRC"
    ENCODING_INFO = "Encoding Software/Hardware"
    PUBLISHER = "Publisher"
    ARTIST_WEBPAGE = "Artist Site"
    ALBUM_WEBPAGE = "Album Site"
    FILE_WEBPAGE = "File Site"
    PUBLISHER_WEBPAGE = "Publisher Site"
    COMMENTS = "Comments"
    LYRICS = "Lyrics"
    ENCODED_BY = "Encoded by"
    BPM = "BPM"


__all__ = ["TagField"]
