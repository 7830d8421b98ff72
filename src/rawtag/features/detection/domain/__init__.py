"""Detection domain types."""

from .formats import AudioFormat

__all__ = ["AudioFormat"]
