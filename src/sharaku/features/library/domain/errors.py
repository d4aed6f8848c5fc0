"""Errors raised by library synchronization use cases."""

from __future__ import annotations

from pathlib import Path

from sharaku.shared import SharakuError


class LibraryError(SharakuError):
    """Base class for library synchronization failures."""


class ConfigurationError(LibraryError):
    """No managed storage is configured; raised before any progress is emitted."""


class InvalidSourceError(LibraryError):
    """Import source is missing, not a directory, holds no images or overlaps the destination."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Invalid source {path}: {reason}")
        self.path: Path = path
        self.reason: str = reason


class DestinationExistsError(LibraryError):
    """Target directory already exists; nothing is overwritten."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"Destination already exists: {path}")
        self.path: Path = path


class FilesystemError(LibraryError):
    """Copy, move or delete failed at the OS level."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        super().__init__(message)
        self.path: Path | None = path


class PartialCommitError(LibraryError):
    """Files were transferred but the catalog was not updated.

    Nothing is rolled back; the attributes identify what needs reconciling.
    """

    def __init__(
        self,
        message: str,
        *,
        destination_path: Path,
        work_id: int | None = None,
        old_path: Path | None = None,
    ) -> None:
        super().__init__(message)
        self.destination_path: Path = destination_path
        self.work_id: int | None = work_id
        self.old_path: Path | None = old_path


class OperationCancelledError(LibraryError):
    """A long-running operation stopped at a cancellation checkpoint.

    ``partial`` carries what was produced before stopping (a summary or list).
    """

    def __init__(self, operation: str, partial: object = None) -> None:
        super().__init__(f"{operation} cancelled")
        self.operation: str = operation
        self.partial: object = partial


__all__ = [
    "ConfigurationError",
    "DestinationExistsError",
    "FilesystemError",
    "InvalidSourceError",
    "LibraryError",
    "OperationCancelledError",
    "PartialCommitError",
]
