# Where: sharaku.shared.app_settings
# What: Read-only settings snapshot consumed by the synchronization engine.
# Why: Decouple use cases from the TOML configuration object.

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from sharaku.config.settings import DEFAULT_TYPE_LABEL_FOLDER, DEFAULT_TYPE_LABEL_IMAGE


@dataclass(frozen=True, slots=True)
class AppSettings:
    """Library root, layout template and type labels."""

    library_root: Path | None = None
    directory_template: str | None = None
    type_label_image: str = DEFAULT_TYPE_LABEL_IMAGE
    type_label_folder: str = DEFAULT_TYPE_LABEL_FOLDER


__all__ = ["AppSettings"]
