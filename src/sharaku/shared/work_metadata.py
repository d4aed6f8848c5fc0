# Where: sharaku.shared.work_metadata
# What: Descriptive metadata of a work, shared by templates, imports and the catalog.
# Why: Keep a single definition of the optional fields across features.

from __future__ import annotations

from dataclasses import dataclass

from sharaku.config.settings import WORK_TYPE_FOLDER


@dataclass(frozen=True, slots=True)
class WorkMetadata:
    """Metadata for a work. ``None`` means absent; empty strings are distinct."""

    title: str
    artist: str | None = None
    year: int | None = None
    genre: str | None = None
    circle: str | None = None
    origin: str | None = None
    work_type: str = WORK_TYPE_FOLDER


__all__ = ["WorkMetadata"]
