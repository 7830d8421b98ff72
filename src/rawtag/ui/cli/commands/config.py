"""src/rawtag/ui/cli/commands/config.py
What: Report or create the configuration file.
Why: Users need to know where settings live before editing them.
"""

from __future__ import annotations

from pathlib import Path
from typing import final

from rich.console import Console

from rawtag.config.config import Config
from rawtag.config.paths import default_config_path
from rawtag.ui.cli.args.options import ConfigArgs


@final
class ConfigCommand:
    """Show the configuration location, optionally writing the defaults."""

    def __init__(
        self,
        args: ConfigArgs,
        *,
        config_path: Path | None = None,
        console: Console | None = None,
    ) -> None:
        self._args = args
        self._config_path = config_path or default_config_path()
        self._console = console or Console()

    def execute(self) -> Path:
        """Return the configuration path after optionally initialising it."""

        if self._args.init:
            if self._config_path.exists():
                self._console.print(f"[yellow]Configuration already exists:[/yellow] {self._config_path}")
            else:
                _ = Config().save(self._config_path)
                self._console.print(f"[green]Wrote default configuration:[/green] {self._config_path}")
            return self._config_path

        state = "exists" if self._config_path.exists() else "not created yet"
        self._console.print(f"Configuration file: {self._config_path} ({state})")
        return self._config_path
