"""Ports for the catalog feature."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from ..domain.models import NewWork, Work


@runtime_checkable
class CatalogStorePort(Protocol):
    """Persistent store of works. Every call is atomic."""

    def create_work(self, new_work: NewWork) -> Work:
        """Register a work; raises ``DuplicatePathError`` when the path is taken."""

        ...

    def get_work(self, work_id: int) -> Work:
        """Return the work; raises ``WorkNotFoundError`` when absent."""

        ...

    def list_works(self) -> list[Work]:
        """Return every registered work."""

        ...

    def update_work_path(self, work_id: int, new_path: Path) -> None:
        """Point a work at a new directory.

        Raises ``WorkNotFoundError`` or ``DuplicatePathError``.
        """

        ...

    def delete_work(self, work_id: int) -> None:
        """Remove a work record; raises ``WorkNotFoundError`` when absent."""

        ...
