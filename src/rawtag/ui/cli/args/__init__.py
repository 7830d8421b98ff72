"""Command line argument handling package."""

from rawtag.ui.cli.args.parser import ArgumentParser
from rawtag.ui.cli.args.options import CLIArgs, ConfigArgs, CoversArgs, ShowArgs

__all__ = ["ArgumentParser", "CLIArgs", "ConfigArgs", "CoversArgs", "ShowArgs"]
