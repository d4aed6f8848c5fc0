"""Configuration management for sharaku."""

from __future__ import annotations

import tomllib
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any

from sharaku.config.file_ops import write_text_file
from sharaku.config.paths import default_config_path
from sharaku.config.settings import DEFAULT_TYPE_LABEL_FOLDER, DEFAULT_TYPE_LABEL_IMAGE
from sharaku.platform.logging import logger
from sharaku.shared.app_settings import AppSettings
from sharaku.shared.errors import SharakuError


class ConfigFileError(SharakuError):
    """Raised when the configuration file cannot be parsed."""


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
    """Application configuration."""

    # Root directory of managed storage
    library_root: Path | None = _path_field()

    # Directory layout template (None selects the default layout)
    directory_template: str | None = None

    # Labels substituted for the {type} placeholder
    type_label_image: str = DEFAULT_TYPE_LABEL_IMAGE
    type_label_folder: str = DEFAULT_TYPE_LABEL_FOLDER

    # Log file path
    log_file: Path | None = _path_field()

    # Catalog database path (None selects <data dir>/sharaku.db)
    database_path: Path | None = _path_field()

    def __post_init__(self) -> None:
        """Convert string paths to ``Path`` objects using field metadata."""

        for f in fields(self):
            if not f.metadata.get("path", False):
                continue
            value = getattr(self, f.name)
            if isinstance(value, str):
                setattr(self, f.name, Path(value).expanduser() if value.strip() else None)
        if self.directory_template is not None and not self.directory_template.strip():
            self.directory_template = None

    def get_settings(self) -> AppSettings:
        """Return a read-only snapshot consumed by the synchronization engine."""

        return AppSettings(
            library_root=self.library_root,
            directory_template=self.directory_template,
            type_label_image=self.type_label_image,
            type_label_folder=self.type_label_folder,
        )

    def save(self, config_path: Path | None = None) -> Path:
        """Save configuration to file.

        Args:
            config_path: Destination file. Defaults to ``default_config_path()``.

        Returns:
            Path: File the configuration was written to.
        """
        config_dict = asdict(self)

        for key, value in config_dict.items():
            if isinstance(value, Path):
                config_dict[key] = str(value)

        target = config_path or default_config_path()
        try:
            write_text_file(target, self._render_toml(config_dict))
        except OSError as e:
            logger.error("Failed to save configuration: %s", e)
            raise
        logger.debug("Configuration saved to %s", target)
        return target

    def _render_toml(self, config: dict[str, Any]) -> str:
        """Render configuration as TOML with inline guidance."""

        lines: list[str] = []

        lines.append("# sharaku configuration file")
        lines.append("")

        lines.append("# Root directory of the managed library (required for sync operations)")
        lines.append('# Example: library_root = "/path/to/library"')
        if config["library_root"] is not None:
            lines.append(f"library_root = {self._format_toml_value(config['library_root'])}")
        lines.append("")

        lines.append("# Directory layout template (optional)")
        lines.append("# Placeholders: {title} {artist} {year} {genre} {circle} {origin} {type}")
        lines.append('# Example: directory_template = "{artist}/{title}"')
        if config["directory_template"] is not None:
            lines.append(
                f"directory_template = {self._format_toml_value(config['directory_template'])}"
            )
        lines.append("")

        lines.append("# Labels used by the {type} placeholder")
        lines.append(f"type_label_image = {self._format_toml_value(config['type_label_image'])}")
        lines.append(f"type_label_folder = {self._format_toml_value(config['type_label_folder'])}")
        lines.append("")

        lines.append("# Log file path (optional)")
        lines.append('# Example: log_file = "/path/to/logs/sharaku.log"')
        if config["log_file"] is not None:
            lines.append(f"log_file = {self._format_toml_value(config['log_file'])}")
        lines.append("")

        lines.append("# Catalog database path (optional)")
        if config["database_path"] is not None:
            lines.append(f"database_path = {self._format_toml_value(config['database_path'])}")
        lines.append("")

        return "\n".join(lines)

    def _format_toml_value(self, value: Any) -> str:
        """Format a value for TOML serialization.

        Args:
            value: Value to format

        Returns:
            str: Formatted value
        """
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (str, Path)):
            escaped = str(value).replace("\\", "\\\\").replace('"', '\\"')
            return f'"{escaped}"'
        return str(value)

    @classmethod
    def load(cls, config_path: Path | None = None) -> Config:
        """Load configuration from file, creating a default one when absent.

        Args:
            config_path: Source file. Defaults to ``default_config_path()``.

        Returns:
            Config: Loaded configuration object.

        Raises:
            ConfigFileError: If the file is not valid TOML.
        """
        config_file = config_path or default_config_path()

        if not config_file.exists():
            config = cls()
            _ = config.save(config_file)
            logger.info("Created default configuration at %s", config_file)
            return config

        try:
            with open(config_file, "rb") as f:
                config_dict = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            logger.error("Failed to load configuration: %s", e)
            raise ConfigFileError(f"Invalid configuration file {config_file}: {e}") from e

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(config_dict) - known)
        if unknown:
            logger.warning("Ignoring unknown configuration keys: %s", ", ".join(unknown))

        logger.debug("Configuration loaded from %s", config_file)
        return cls(**{key: value for key, value in config_dict.items() if key in known})


__all__ = ["Config", "ConfigFileError"]
