"""Container readers and their registry."""

from ._base_readers import ContainerReader, UnsupportedReader
from .flac_reader import FlacReader
from .id3_reader import Id3Reader
from .m4a_reader import M4aReader
from .ogg_reader import OggReader
from .parse_types import (
    MalformedStructureError,
    ParseEvent,
    ParseLogger,
    ReaderOptions,
    UnrecognizedFormatError,
)
from .registry import ReaderRegistry
from .vorbis_reader import read_picture_block, read_vorbis_comments
from .wave_reader import WaveReader

__all__ = [
    "ContainerReader",
    "FlacReader",
    "Id3Reader",
    "M4aReader",
    "MalformedStructureError",
    "OggReader",
    "ParseEvent",
    "ParseLogger",
    "ReaderOptions",
    "ReaderRegistry",
    "UnrecognizedFormatError",
    "UnsupportedReader",
    "WaveReader",
    "read_picture_block",
    "read_vorbis_comments",
]
