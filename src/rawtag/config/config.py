"""Configuration management for rawtag."""

import tomllib
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, ClassVar, Final

from rawtag.config.file_ops import write_text_file
from rawtag.config.paths import default_config_path
from rawtag.platform.logging import logger

SNIFF_WINDOW_DEFAULT: Final[int] = 32


def _path_field(default: Path | None = None) -> Any:
    """Create a field for Path objects with proper conversion.

    Args:
        default: Default value for the field.

    Returns:
        Field with proper metadata for path handling.
    """
    return field(default=default, metadata={"path": True})


@dataclass
class Config:
    """Runtime configuration for readers, the facade and the CLI."""

    # Log file path; the CLI falls back to the default log location
    log_file: Path | None = _path_field()

    # Carve embedded cover art (disable for text-only scans)
    extract_images: bool = True

    # Header bytes inspected by the format sniffer
    sniff_window: int = SNIFF_WINDOW_DEFAULT

    # Fill missing fields from a trailing ID3v1 tag
    id3v1_fallback: bool = True

    _instance: ClassVar["Config | None"] = None
    _loaded_from: ClassVar[Path | None] = None

    def __post_init__(self) -> None:
        """Convert string paths and clamp numeric settings."""
        for f in fields(self):
            if not f.metadata.get("path", False):
                continue
            value = getattr(self, f.name)
            if isinstance(value, str):
                setattr(self, f.name, Path(value) if value.strip() else None)

        if not isinstance(self.sniff_window, int) or self.sniff_window < SNIFF_WINDOW_DEFAULT:
            logger.warning(
                "sniff_window=%r is below the minimum header size, using %d",
                self.sniff_window,
                SNIFF_WINDOW_DEFAULT,
            )
            self.sniff_window = SNIFF_WINDOW_DEFAULT

    def save(self, path: Path | None = None) -> Path:
        """Save configuration to file and return the written path."""
        config_dict = asdict(self)

        for key, value in config_dict.items():
            if isinstance(value, Path):
                config_dict[key] = str(value)

        target = path or default_config_path()
        try:
            write_text_file(target, self._render_toml(config_dict))
            logger.info("Configuration saved to %s", target)
        except OSError as e:
            logger.error("Failed to save configuration: %s", e)
            raise
        return target

    def _render_toml(self, config: dict[str, Any]) -> str:
        """Render configuration as TOML with inline guidance."""

        lines: list[str] = []

        lines.append("# rawtag Configuration File")
        lines.append("")

        lines.append("# Log file path (optional)")
        lines.append('# Example: log_file = "/path/to/logs/rawtag.log"')
        if config["log_file"] is not None:
            lines.append(f"log_file = {self._format_toml_value(config['log_file'])}")
        lines.append("")

        lines.append("# Extract embedded cover art (default true)")
        lines.append(f"extract_images = {self._format_toml_value(config['extract_images'])}")
        lines.append("")

        lines.append("# Number of leading bytes used for format detection (minimum 32)")
        lines.append(f"sniff_window = {self._format_toml_value(config['sniff_window'])}")
        lines.append("")

        lines.append("# Fill fields missing from ID3v2 with a trailing ID3v1 tag (default true)")
        lines.append(f"id3v1_fallback = {self._format_toml_value(config['id3v1_fallback'])}")
        lines.append("")

        return "\n".join(lines)

    def _format_toml_value(self, value: Any) -> str:
        """Format a value for TOML serialization."""
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (str, Path)):
            return f'"{str(value)}"'
        return str(value)

    @classmethod
    def load(cls, path: Path | None = None) -> "Config":
        """Load configuration from file.

        Args:
            path: Explicit config file. When omitted the cached instance or the
                default location is used.

        Returns:
            Config: Loaded configuration object; defaults when no file exists.
        """
        if path is None and cls._instance is not None:
            return cls._instance

        config_file = path or default_config_path()

        if not config_file.exists():
            logger.debug("No configuration at %s, using defaults", config_file)
            instance = cls()
        else:
            try:
                with open(config_file, "rb") as f:
                    config_dict = tomllib.load(f)
            except tomllib.TOMLDecodeError as e:
                logger.error("Failed to load configuration from %s: %s", config_file, e)
                raise

            known = {f.name for f in fields(cls)}
            for key in list(config_dict):
                if key not in known:
                    logger.warning("Ignoring unknown configuration key %r", key)
                    del config_dict[key]

            logger.info("Configuration loaded from %s", config_file)
            instance = cls(**config_dict)

        if path is None:
            cls._instance = instance
            cls._loaded_from = config_file
        return instance


__all__ = ["Config", "SNIFF_WINDOW_DEFAULT"]
