"""Command line interface package."""

from rawtag.ui.cli.cli import main

__all__ = ["main"]
