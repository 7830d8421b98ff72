"""Display management for CLI interface."""

from rawtag.ui.cli.display.report import ReportDisplay

__all__ = ["ReportDisplay"]
