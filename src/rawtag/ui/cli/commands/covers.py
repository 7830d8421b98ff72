"""src/rawtag/ui/cli/commands/covers.py
What: Write embedded cover art of each input file into an output directory.
Why: Pictures are only useful once they exist as image files.
"""

from collections.abc import Sequence
from pathlib import Path
from typing import override

from rawtag.application.services import read_service
from rawtag.platform.logging import logger
from rawtag.shared.metadata import CoverArt
from rawtag.ui.cli.args.options import CoversArgs
from rawtag.ui.cli.commands.executor import CommandExecutor
from rawtag.ui.cli.models import FileReport


def cover_file_name(source: Path, index: int, image: CoverArt, *, stem: str | None = None) -> str:
    """Return ``<stem>_cover<N>.<ext>`` with a one-based ``N``."""
    return f"{stem or source.stem}_cover{index}.{image.extension}"


def unique_stems(sources: Sequence[Path]) -> list[str]:
    """Name each source by its stem, suffixing ``-2``, ``-3``... on repeats.

    ``a.mp3`` and ``dir/a.flac`` in one run would otherwise write the same files.
    """

    used: set[str] = set()
    stems: list[str] = []
    for source in sources:
        stem = source.stem
        occurrence = 1
        while stem in used:
            occurrence += 1
            stem = f"{source.stem}-{occurrence}"
        used.add(stem)
        stems.append(stem)
    return stems


class CoversCommand(CommandExecutor):
    """Command for extracting cover art."""

    args: CoversArgs

    @override
    def execute(self) -> list[FileReport]:
        reports = self.read_all()
        output_dir = self.args.output_dir
        written: list[Path] = []

        stems = unique_stems([report.path for report in reports])
        for report, stem in zip(reports, stems, strict=True):
            if report.metadata is None:
                continue
            for index, image in enumerate(read_service.images(report.metadata), start=1):
                target = output_dir / cover_file_name(report.path, index, image, stem=stem)
                output_dir.mkdir(parents=True, exist_ok=True)
                _ = target.write_bytes(image.data)
                logger.debug("Wrote %s (%d bytes)", target, len(image.data))
                written.append(target)

        self.report_display.show_written(written, reports, quiet=self.args.quiet)
        return reports
