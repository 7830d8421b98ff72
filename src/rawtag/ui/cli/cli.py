"""Command dispatch and exit codes for the rawtag CLI."""

import sys
from typing import final

from rawtag.platform.logging import logger
from rawtag.ui.cli.args import ArgumentParser
from rawtag.ui.cli.args.options import CLIArgs, ConfigArgs, CoversArgs, ShowArgs
from rawtag.ui.cli.commands import ConfigCommand, CoversCommand, ShowCommand
from rawtag.ui.cli.models import FileReport


@final
class CommandProcessor:
    """Route parsed arguments to the matching command."""

    @staticmethod
    def process_command(args_list: list[str] | None = None) -> None:
        """Run one CLI invocation.

        Args:
            args_list: Argument vector to parse instead of ``sys.argv`` (tests).

        Exits with 1 when any file could not be read, 130 on Ctrl-C.
        """
        try:
            args: CLIArgs = ArgumentParser.process_args(args_list)

            reports: list[FileReport]
            if isinstance(args, ShowArgs):
                reports = ShowCommand(args).execute()
            elif isinstance(args, CoversArgs):
                reports = CoversCommand(args).execute()
            else:
                assert isinstance(args, ConfigArgs)
                _ = ConfigCommand(args).execute()
                return

            failed = sum(1 for report in reports if not report.success)
            if failed:
                logger.debug("%d of %d files failed", failed, len(reports))
                sys.exit(1)

        except KeyboardInterrupt:
            logger.info("\nOperation cancelled by user")
            sys.exit(130)
        except Exception as e:
            logger.error("An unexpected error occurred: %s", str(e))
            sys.exit(1)


def main() -> int:
    """Console script and ``python -m rawtag`` entry point.

    Returns:
        int: 0 on success. Failures leave through ``sys.exit`` above.
    """
    CommandProcessor.process_command()
    return 0
