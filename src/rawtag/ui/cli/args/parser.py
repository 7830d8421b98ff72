"""Command line argument parser."""

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import final

from rawtag.config.config import Config
from rawtag.platform.logging import DEFAULT_LOG_FILE, logger, setup_logger
from rawtag.ui.cli.args.options import CLIArgs, ConfigArgs, CoversArgs, ShowArgs


@final
class ArgumentParser:
    """Command line argument parser."""

    @staticmethod
    def create_parser() -> argparse.ArgumentParser:
        """Create argument parser.

        Returns:
            argparse.ArgumentParser: Configured argument parser.
        """
        parser = argparse.ArgumentParser(
            prog="rawtag",
            description="rawtag - read audio tags and cover art straight from container bytes.",
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        subparsers = parser.add_subparsers(dest="command", required=True)

        show_parser = subparsers.add_parser(
            "show",
            help="Print the tags and embedded images of one or more files",
        )
        ArgumentParser._configure_file_parser(show_parser)

        covers_parser = subparsers.add_parser(
            "covers",
            help="Write embedded cover art to a directory",
        )
        ArgumentParser._configure_file_parser(covers_parser)
        _ = covers_parser.add_argument(
            "--output",
            "-o",
            type=str,
            required=True,
            help="Directory that receives the extracted images",
            metavar="DIR",
        )

        config_parser = subparsers.add_parser(
            "config",
            help="Show or create the configuration file",
        )
        _ = config_parser.add_argument(
            "--init",
            action="store_true",
            help="Write a default configuration file",
        )

        return parser

    @staticmethod
    def process_args(args_list: Sequence[str] | None = None) -> CLIArgs:
        """Process command line arguments.

        Args:
            args_list: List of command line arguments (for testing).

        Returns:
            CLIArgs: Processed command line arguments.

        Raises:
            SystemExit: If a required path doesn't exist or other validation fails.
        """
        parser = ArgumentParser.create_parser()
        parsed_args = parser.parse_args(args_list)

        # Set log level based on verbosity flags
        is_quiet = bool(getattr(parsed_args, "quiet", False))
        is_verbose = bool(getattr(parsed_args, "verbose", False))

        if is_quiet:
            log_level = logging.ERROR
        elif is_verbose:
            log_level = logging.DEBUG
        else:
            log_level = logging.INFO

        configuration = Config.load()
        log_file_path = configuration.log_file or DEFAULT_LOG_FILE
        _ = setup_logger(log_file=log_file_path, console_level=log_level)

        command: str = parsed_args.command

        if command == "show":
            return ShowArgs(
                command="show",
                files=ArgumentParser._existing_files(parsed_args.files),
                verbose=is_verbose,
                quiet=is_quiet,
            )

        if command == "covers":
            return CoversArgs(
                command="covers",
                files=ArgumentParser._existing_files(parsed_args.files),
                output_dir=Path(parsed_args.output).expanduser(),
                verbose=is_verbose,
                quiet=is_quiet,
            )

        if command == "config":
            return ConfigArgs(command="config", init=bool(parsed_args.init))

        logger.error("Unsupported command: %s", command)
        sys.exit(2)

    @staticmethod
    def _configure_file_parser(parser: argparse.ArgumentParser) -> None:
        """Apply the shared file and verbosity arguments."""

        _ = parser.add_argument(
            "files",
            type=str,
            nargs="+",
            help="Audio files to read",
            metavar="FILE",
        )
        verbosity = parser.add_mutually_exclusive_group()
        _ = verbosity.add_argument(
            "--verbose",
            action="store_true",
            help="Show parser diagnostics",
        )
        _ = verbosity.add_argument(
            "--quiet",
            action="store_true",
            help="Suppress all output except errors",
        )

    @staticmethod
    def _existing_files(raw_paths: Sequence[str]) -> list[Path]:
        files: list[Path] = []
        for raw in raw_paths:
            path = Path(raw).expanduser()
            if not path.is_file():
                logger.error("File does not exist: %s", path)
                sys.exit(1)
            files.append(path)
        return files
