"""Ports for the library synchronization feature."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from sharaku.shared import AppSettings


class SourceCleanupError(OSError):
    """A move copied and verified the tree but could not delete the source.

    The destination is complete; ``filename`` names the leftover source.
    """


@runtime_checkable
class SettingsPort(Protocol):
    """Read-only access to the application settings."""

    def get_settings(self) -> AppSettings:
        """Return the current settings snapshot."""

        ...


class FileSystemGateway(Protocol):
    """Abstract filesystem operations needed by the use cases."""

    def exists(self, path: Path) -> bool:
        """Return True if the path exists."""

        ...

    def is_dir(self, path: Path) -> bool:
        """Return True when the path is a directory (symlinks are not followed)."""

        ...

    def is_file(self, path: Path) -> bool:
        """Return True when the path points to a regular file."""

        ...

    def list_directory(self, path: Path) -> list[Path]:
        """Return the immediate entries within ``path``; raises ``OSError`` when unreadable."""

        ...

    def copy_tree(self, source: Path, destination: Path) -> None:
        """Duplicate ``source`` at ``destination``; the source is untouched."""

        ...

    def move_tree(self, source: Path, destination: Path) -> None:
        """Rename ``source`` to ``destination``, falling back to copy, verify and delete.

        Raises ``SourceCleanupError`` when only the final delete failed.
        """

        ...

    def prune_empty_ancestors(self, start: Path, stop: Path) -> None:
        """Remove empty directories from ``start`` upward, stopping at ``stop``."""

        ...
