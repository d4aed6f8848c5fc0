"""Settings helpers shared by the library use cases."""

from __future__ import annotations

from pathlib import Path

from sharaku.features.path import TypeLabels
from sharaku.shared import AppSettings

from ..domain.errors import ConfigurationError


def require_library_root(settings: AppSettings) -> Path:
    """Return the absolute library root or raise ``ConfigurationError``."""

    if settings.library_root is None:
        raise ConfigurationError("No library root configured; set one with `sharaku config --library-root`")
    return settings.library_root.expanduser().resolve()


def type_labels(settings: AppSettings) -> TypeLabels:
    return TypeLabels(image=settings.type_label_image, folder=settings.type_label_folder)


__all__ = ["require_library_root", "type_labels"]
