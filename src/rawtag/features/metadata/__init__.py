# Where: rawtag.features.metadata.__init__
# What: Expose the container readers, registry and decoders.
# Why: Provide a cohesive import surface for the application and UI layers.

from rawtag.shared.metadata import CoverArt, Metadata
from .usecases.decoding import decode_text, extract_image
from .usecases.extraction import (
    ContainerReader,
    MalformedStructureError,
    ParseEvent,
    ReaderOptions,
    ReaderRegistry,
    UnrecognizedFormatError,
)

__all__ = [
    "ContainerReader",
    "CoverArt",
    "MalformedStructureError",
    "Metadata",
    "ParseEvent",
    "ReaderOptions",
    "ReaderRegistry",
    "UnrecognizedFormatError",
    "decode_text",
    "extract_image",
]
