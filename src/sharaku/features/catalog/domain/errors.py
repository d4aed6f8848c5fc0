"""Errors raised by catalog store adapters."""

from __future__ import annotations

from pathlib import Path

from sharaku.shared import SharakuError


class CatalogError(SharakuError):
    """Base class for catalog store failures."""


class DuplicatePathError(CatalogError):
    """Raised when a work is already registered at the requested path."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"A work is already registered at {path}")
        self.path: Path = path


class WorkNotFoundError(CatalogError):
    """Raised when no work exists for the given identifier."""

    def __init__(self, work_id: int) -> None:
        super().__init__(f"Work {work_id} not found")
        self.work_id: int = work_id


__all__ = ["CatalogError", "DuplicatePathError", "WorkNotFoundError"]
