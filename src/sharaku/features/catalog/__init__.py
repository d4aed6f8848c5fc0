"""Catalog feature public API."""

from __future__ import annotations

from .adapters.sqlite_catalog import SqliteCatalogStore
from .domain.errors import CatalogError, DuplicatePathError, WorkNotFoundError
from .domain.models import NewWork, Work
from .usecases.ports import CatalogStorePort

__all__ = [
    "CatalogError",
    "CatalogStorePort",
    "DuplicatePathError",
    "NewWork",
    "SqliteCatalogStore",
    "Work",
    "WorkNotFoundError",
]
