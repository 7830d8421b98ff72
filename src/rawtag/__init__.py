"""rawtag: read audio tags and cover art directly from container bytes."""

from rawtag.application.services.read_service import detect_format, fields, images, read
from rawtag.features.detection import AudioFormat
from rawtag.features.metadata.usecases.extraction import (
    MalformedStructureError,
    UnrecognizedFormatError,
)
from rawtag.platform.binary import TruncatedReadError
from rawtag.shared import CoverArt, Metadata, TagField

__all__ = [
    "AudioFormat",
    "CoverArt",
    "MalformedStructureError",
    "Metadata",
    "TagField",
    "TruncatedReadError",
    "UnrecognizedFormatError",
    "detect_format",
    "fields",
    "images",
    "read",
]
