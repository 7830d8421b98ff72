"""Command line argument options."""

from dataclasses import dataclass
from pathlib import Path
from typing import Literal, final


@final
@dataclass(slots=True)
class ShowArgs:
    """Command line arguments for the ``show`` subcommand."""

    command: Literal["show"]
    files: list[Path]
    verbose: bool
    quiet: bool


@final
@dataclass(slots=True)
class CoversArgs:
    """Command line arguments for the ``covers`` subcommand."""

    command: Literal["covers"]
    files: list[Path]
    output_dir: Path
    verbose: bool
    quiet: bool


@final
@dataclass(slots=True)
class ConfigArgs:
    """Command line arguments for the ``config`` subcommand."""

    command: Literal["config"]
    init: bool


CLIArgs = ShowArgs | CoversArgs | ConfigArgs

__all__ = ["CLIArgs", "ConfigArgs", "CoversArgs", "ShowArgs"]
