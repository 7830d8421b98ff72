"""Application service exports."""

from .read_service import Source, detect_format, fields, images, read, reader_options

__all__ = ["Source", "detect_format", "fields", "images", "read", "reader_options"]
