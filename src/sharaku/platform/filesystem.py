"""Filesystem helpers reused across multiple layers."""

from __future__ import annotations

from pathlib import Path


def ensure_directory(directory: Path) -> Path:
    """Ensure ``directory`` exists as a folder and return it."""

    if directory.exists():
        if not directory.is_dir():
            raise NotADirectoryError(f"Path exists but is not a directory: {directory}")
        return directory

    directory.mkdir(parents=True, exist_ok=True)
    return directory


def ensure_parent_directory(path: Path) -> Path:
    """Ensure the parent directory for ``path`` exists and return it."""

    parent = path.parent
    return ensure_directory(parent)


def prune_empty_ancestors(start: Path, stop: Path) -> list[Path]:
    """Remove ``start`` and its parents while they are empty, never touching ``stop``.

    Args:
        start: First directory to consider (typically the parent of a moved tree).
        stop: Boundary directory; it and anything outside it are left alone.

    Returns:
        list[Path]: Directories that were removed, innermost first.
    """

    removed: list[Path] = []
    current = start
    while current != stop and current.is_relative_to(stop):
        try:
            if not current.is_dir() or any(current.iterdir()):
                break
            current.rmdir()
        except OSError:
            break
        removed.append(current)
        current = current.parent
    return removed


__all__ = ["ensure_directory", "ensure_parent_directory", "prune_empty_ancestors"]
