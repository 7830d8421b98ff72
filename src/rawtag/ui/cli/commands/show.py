"""src/rawtag/ui/cli/commands/show.py
What: Print tags and embedded image summaries for each input file.
Why: Give users a quick look at what the readers extract.
"""

from typing import override

from rawtag.ui.cli.commands.executor import CommandExecutor
from rawtag.ui.cli.models import FileReport


class ShowCommand(CommandExecutor):
    """Command for displaying file tags."""

    @override
    def execute(self) -> list[FileReport]:
        reports = self.read_all()
        self.report_display.show_reports(reports, quiet=self.args.quiet)
        return reports
