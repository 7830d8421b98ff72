"""Reader selection for detected container formats.

Where: src/rawtag/features/metadata/usecases/extraction/registry.py
What: Map each ``AudioFormat`` to the reader class that parses it.
Why: A single dispatch table keeps format selection out of the readers.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import ClassVar, final

from rawtag.features.detection import AudioFormat

from ._base_readers import ContainerReader, UnsupportedReader
from .flac_reader import FlacReader
from .id3_reader import Id3Reader
from .m4a_reader import M4aReader
from .ogg_reader import OggReader
from .parse_types import ReaderOptions, UnrecognizedFormatError
from .wave_reader import WaveReader


@final
class ReaderRegistry:
    """Factory for container readers."""

    _READERS: ClassVar[Mapping[AudioFormat, type[ContainerReader]]] = MappingProxyType(
        {
            AudioFormat.MP3: Id3Reader,
            AudioFormat.FLAC: FlacReader,
            AudioFormat.WAV: WaveReader,
            AudioFormat.OGG: OggReader,
            AudioFormat.M4A: M4aReader,
            AudioFormat.MP4: M4aReader,
            AudioFormat.DASH: UnsupportedReader,
            AudioFormat.WMA: UnsupportedReader,
        }
    )

    @classmethod
    def supported_formats(cls) -> list[AudioFormat]:
        """Return every format a reader is registered for."""
        return list(cls._READERS)

    @classmethod
    def create(
        cls,
        audio_format: AudioFormat,
        options: ReaderOptions | None = None,
        *,
        source_name: str | None = None,
    ) -> ContainerReader:
        """Create the reader for ``audio_format``.

        Raises:
            UnrecognizedFormatError: If no reader exists for the format.
        """

        reader_class = cls._READERS.get(audio_format)
        if reader_class is None:
            raise UnrecognizedFormatError("Unrecognized file format")
        return reader_class(options, source_name=source_name, audio_format=audio_format)


__all__ = ["ReaderRegistry"]
