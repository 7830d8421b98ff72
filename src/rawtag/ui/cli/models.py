"""src/rawtag/ui/cli/models.py
What: Shared UI-facing data structures for CLI presentation layers.
Why: Provide lightweight value objects without introducing import cycles.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from rawtag.features.detection import AudioFormat
from rawtag.shared.metadata import Metadata


@dataclass(slots=True, frozen=True)
class FileReport:
    """Outcome of reading one file."""

    path: Path
    audio_format: AudioFormat | None = None
    metadata: Metadata | None = None
    error: str | None = None

    @property
    def success(self) -> bool:
        return self.error is None and self.metadata is not None


__all__ = ["FileReport"]
