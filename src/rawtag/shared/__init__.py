# Where: rawtag.shared.__init__
# What: Provide a concise import surface for shared dataclasses and the field catalog.
# Why: Readers, the facade and the CLI all speak in these types.

"""Shared cross-cutting types exposed at the package level."""

from .metadata import IMAGE_MIME_PREFIX, CoverArt, Metadata
from .tag_fields import TagField

__all__ = ["CoverArt", "IMAGE_MIME_PREFIX", "Metadata", "TagField"]
