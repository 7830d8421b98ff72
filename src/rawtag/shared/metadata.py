"""
Summary: Parse result dataclasses shared by every container reader.
Why: One aggregate regardless of the container the tags came from.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Final

IMAGE_MIME_PREFIX: Final[str] = "image/"


@dataclass(frozen=True, slots=True)
class CoverArt:
    """One embedded image."""

    mime_type: str
    data: bytes

    @property
    def subtype(self) -> str:
        """MIME subtype, empty when the image type could not be determined."""
        return self.mime_type.partition("/")[2]

    @property
    def extension(self) -> str:
        """File extension suitable for writing the image to disk."""
        subtype = self.subtype.lower()
        if subtype == "jpeg":
            return "jpg"
        return subtype or "bin"


@dataclass(slots=True)
class Metadata:
    """Text fields and images extracted from one file.

    ``text_fields`` keeps insertion order; exact duplicate values of one field
    are dropped while distinct values accumulate.
    """

    text_fields: dict[str, list[str]] = field(default_factory=dict)
    images: list[CoverArt] = field(default_factory=list)

    def add_text_field(self, tag: str, value: str) -> bool:
        """Append ``value`` to ``tag``; return False when it was already present."""

        values = self.text_fields.setdefault(str(tag), [])
        if value in values:
            return False
        values.append(value)
        return True

    def add_image(self, image: CoverArt) -> None:
        self.images.append(image)

    def has_field(self, tag: str) -> bool:
        return bool(self.text_fields.get(str(tag)))

    def first(self, tag: str, default: str | None = None) -> str | None:
        """Return the first value stored for ``tag``."""
        values = self.text_fields.get(str(tag))
        return values[0] if values else default

    @property
    def is_empty(self) -> bool:
        return not self.text_fields and not self.images


__all__ = ["CoverArt", "IMAGE_MIME_PREFIX", "Metadata"]
