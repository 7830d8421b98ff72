"""Command execution package for CLI."""

from rawtag.ui.cli.commands.executor import CommandExecutor
from rawtag.ui.cli.commands.config import ConfigCommand
from rawtag.ui.cli.commands.covers import CoversCommand
from rawtag.ui.cli.commands.show import ShowCommand

__all__ = [
    "CommandExecutor",
    "ConfigCommand",
    "CoversCommand",
    "ShowCommand",
]
