"""Rich console handler for parser diagnostics.

Where: src/rawtag/platform/logging/handlers.py
What: Render structured ``parse_event`` log records with icons, colours and compact paths.
Why: Keep per-file diagnostics readable when many files are inspected in one run.
"""

from __future__ import annotations

import logging
from pathlib import PurePath, PurePosixPath, PureWindowsPath
from typing import Any, ClassVar, override

from rich.console import ConsoleRenderable
from rich.logging import RichHandler
from rich.style import Style
from rich.text import Text


class TagRichHandler(RichHandler):
    """Rich handler that styles parse events and abbreviates file paths."""

    _PARSE_STYLES: ClassVar[dict[str, tuple[str, str]]] = {
        "parse.format.detected": ("🔍", "cyan"),
        "parse.format.unsupported": ("ℹ️", "yellow"),
        "parse.structure.truncated": ("✂️", "yellow"),
        "parse.structure.malformed": ("⚠️", "yellow"),
        "parse.frame.skipped": ("↪️", "blue"),
        "parse.file.complete": ("✅", "green"),
    }
    _PREFIXES: ClassVar[dict[str, str]] = {
        "parse.format.detected": "Detected ",
        "parse.format.unsupported": "Unsupported ",
        "parse.structure.truncated": "Truncated ",
        "parse.structure.malformed": "Malformed ",
        "parse.frame.skipped": "Skipped ",
        "parse.file.complete": "Parsed ",
    }
    _PATH_SEGMENT_LIMIT: ClassVar[int] = 3

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        """Initialize the handler with custom settings.

        Args:
            *args: Positional arguments to pass to RichHandler.
            **kwargs: Keyword arguments to pass to RichHandler.
        """
        kwargs["show_time"] = False
        kwargs["show_path"] = False
        kwargs["show_level"] = False
        kwargs["rich_tracebacks"] = True
        kwargs["markup"] = False
        kwargs["omit_repeated_times"] = False
        super().__init__(*args, **kwargs)

    @staticmethod
    def _to_pure_path(raw_path: str) -> PurePath:
        """Return a platform-aware ``PurePath`` for the given raw string."""

        if "\\" in raw_path:
            return PureWindowsPath(raw_path)
        return PurePosixPath(raw_path)

    def _format_path(self, path: str) -> Text:
        """Keep the last few path segments, prefixed with an ellipsis when cut."""

        pure_path = self._to_pure_path(path)
        separator = "\\" if isinstance(pure_path, PureWindowsPath) else "/"
        anchor = pure_path.anchor
        parts = [part for part in pure_path.parts if part and part != anchor]

        if len(parts) > self._PATH_SEGMENT_LIMIT:
            display = "…" + separator + separator.join(parts[-self._PATH_SEGMENT_LIMIT:])
        else:
            display = str(pure_path)

        text = Text()
        for char in display:
            if char in {separator, "…"}:
                _ = text.append(char, style=Style(color="magenta"))
            else:
                _ = text.append(char, style=Style(color="white"))
        return text

    def _render_parse_message(self, record: logging.LogRecord, message: str) -> Text | None:
        """Render structured parse events with dedicated styling."""

        event = getattr(record, "parse_event", None)
        if not isinstance(event, str):
            return None

        icon, color = self._PARSE_STYLES.get(event, ("ℹ️", "blue"))
        text = Text()
        _ = text.append(f"{icon} ", style=Style(color=color, bold=True))

        body = Text(style=Style(color=color))
        _ = body.append(self._PREFIXES.get(event, ""))

        audio_format = getattr(record, "audio_format", None)
        if audio_format:
            _ = body.append(f"[{audio_format}] ")

        source_path = getattr(record, "source_path", None)
        if source_path:
            _ = body.append_text(self._format_path(str(source_path)))
        else:
            _ = body.append(message)

        details: list[str] = []
        detail = getattr(record, "detail", None)
        if detail:
            details.append(str(detail))
        field_count = getattr(record, "field_count", None)
        if isinstance(field_count, int):
            details.append(f"fields={field_count}")
        image_count = getattr(record, "image_count", None)
        if isinstance(image_count, int):
            details.append(f"images={image_count}")
        if details and source_path:
            _ = body.append(" (" + ", ".join(details) + ")")

        _ = text.append_text(body)
        return text

    @override
    def render_message(self, record: logging.LogRecord, message: str) -> ConsoleRenderable:
        """Render message with custom styling for parse events."""

        parse_text = self._render_parse_message(record, message)
        if parse_text is not None:
            return parse_text

        return super().render_message(record, message)


__all__ = ["TagRichHandler"]
