"""Helpers recognising image-like files (pages)."""

from __future__ import annotations

from pathlib import Path

from sharaku.config.settings import IMAGE_EXTENSIONS, RESERVED_DIR_NAMES

from .ports import FileSystemGateway


def is_image_name(path: Path) -> bool:
    """Return True when the file name has a supported image extension."""

    return path.suffix.lower().lstrip(".") in IMAGE_EXTENSIONS and not path.name.startswith(".")


def is_reserved_directory(path: Path) -> bool:
    """Return True for system and hidden directories never treated as works."""

    return path.name in RESERVED_DIR_NAMES or path.name.startswith(".")


def count_images(filesystem: FileSystemGateway, directory: Path) -> int:
    """Count image files directly inside ``directory`` (no recursion).

    Raises:
        OSError: If the directory cannot be listed.
    """

    return sum(
        1
        for entry in filesystem.list_directory(directory)
        if is_image_name(entry) and filesystem.is_file(entry)
    )


__all__ = ["count_images", "is_image_name", "is_reserved_directory"]
