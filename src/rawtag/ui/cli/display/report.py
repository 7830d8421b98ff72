"""src/rawtag/ui/cli/display/report.py
What: Render per-file tag tables and cover extraction summaries.
Why: Keep console output formatting consistent across the commands.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import final

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from rawtag.shared.metadata import Metadata
from rawtag.ui.cli.models import FileReport


@final
class ReportDisplay:
    """Handles report display in CLI."""

    console: Console

    def __init__(self, console: Console | None = None) -> None:
        """Initialize report display."""
        self.console = console or Console()

    def show_reports(self, reports: Sequence[FileReport], quiet: bool = False) -> None:
        """Display one tag table per successfully read file.

        Args:
            reports: Reports to render.
            quiet: Whether to suppress non-error output.
        """
        if quiet:
            return

        for report in reports:
            if report.metadata is None:
                self.console.print(f"[red]✗ {escape(str(report.path))}:[/red] {escape(report.error or 'unreadable')}")
                continue
            self.console.print(self.build_table(report, report.metadata))
            for index, image in enumerate(report.metadata.images, start=1):
                mime = image.mime_type if image.subtype else f"{image.mime_type} (unknown type)"
                self.console.print(f"  🖼  cover {index}: {mime}, {len(image.data):,} bytes")

        failed = sum(1 for report in reports if not report.success)
        if failed:
            self.console.print(f"\n[red]{failed} of {len(reports)} files could not be read[/red]")

    def show_written(
        self,
        written: Sequence[Path],
        reports: Sequence[FileReport],
        quiet: bool = False,
    ) -> None:
        """Summarise the images written by the ``covers`` command."""

        if quiet:
            return

        for path in written:
            self.console.print(f"  • {escape(str(path))}")
        failed = sum(1 for report in reports if not report.success)
        self.console.print(
            f"Wrote {len(written)} image(s) from {len(reports) - failed} file(s)"
            + (f", [red]{failed} failed[/red]" if failed else "")
        )

    @staticmethod
    def build_table(report: FileReport, metadata: Metadata) -> Table:
        caption = f"{report.path.name} [{report.audio_format}]" if report.audio_format else report.path.name
        # Tag text may contain brackets; keep it out of markup parsing.
        table = Table(
            title=Text(caption),
            show_header=True,
            header_style="bold magenta",
            box=box.SIMPLE_HEAD,
        )
        _ = table.add_column("Field", style="bold cyan", no_wrap=True)
        _ = table.add_column("Value")

        if not metadata.text_fields:
            table.add_row(Text("(none)", style="dim"), Text("no text fields found", style="dim"))
        for name, values in metadata.text_fields.items():
            table.add_row(Text(name), Text("\n".join(values)))
        return table


__all__ = ["ReportDisplay"]
