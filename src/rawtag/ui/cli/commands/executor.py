"""src/rawtag/ui/cli/commands/executor.py
What: Provide shared wiring for CLI command executors.
Why: Reuse reading and presentation helpers across the file commands.
"""

from abc import ABC, abstractmethod
from pathlib import Path

from rawtag.application.services import read_service
from rawtag.config.config import Config
from rawtag.features.detection import AudioFormat
from rawtag.features.metadata.usecases.extraction import UnrecognizedFormatError
from rawtag.platform.logging import logger
from rawtag.ui.cli.args.options import CoversArgs, ShowArgs
from rawtag.ui.cli.display.report import ReportDisplay
from rawtag.ui.cli.models import FileReport


class CommandExecutor(ABC):
    """Base class for commands that read audio files."""

    args: ShowArgs | CoversArgs
    config: Config
    report_display: ReportDisplay

    def __init__(
        self,
        args: ShowArgs | CoversArgs,
        *,
        config: Config | None = None,
        report_display: ReportDisplay | None = None,
    ) -> None:
        """Initialize command executor.

        Args:
            args: Command line arguments.
            config: Configuration; loaded from the default location when omitted.
            report_display: Display used for console output.
        """
        self.args = args
        self.config = config or Config.load()
        self.report_display = report_display or ReportDisplay()

    @abstractmethod
    def execute(self) -> list[FileReport]:
        """Execute the command.

        Returns:
            One report per input file.
        """
        pass

    def read_file(self, path: Path) -> FileReport:
        """Read one file, turning expected failures into a failed report."""

        try:
            audio_format = read_service.detect_format(path, config=self.config)
            metadata = read_service.read(path, config=self.config)
        except UnrecognizedFormatError as exc:
            logger.error("%s: %s", path, exc)
            return FileReport(path=path, audio_format=AudioFormat.UNKNOWN, error=str(exc))
        except OSError as exc:
            logger.error("Cannot read %s: %s", path, exc)
            return FileReport(path=path, error=str(exc))
        return FileReport(path=path, audio_format=audio_format, metadata=metadata)

    def read_all(self) -> list[FileReport]:
        return [self.read_file(path) for path in self.args.files]
