"""Catalog records for page-based works."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from sharaku.shared import WorkMetadata


@dataclass(slots=True, frozen=True)
class Work:
    """A registered work and its managed location."""

    id: int
    title: str
    path: Path
    work_type: str
    page_count: int
    created_at: datetime
    artist: str | None = None
    year: int | None = None
    genre: str | None = None
    circle: str | None = None
    origin: str | None = None

    def metadata(self) -> WorkMetadata:
        """Project the descriptive fields used for path rendering."""

        return WorkMetadata(
            title=self.title,
            artist=self.artist,
            year=self.year,
            genre=self.genre,
            circle=self.circle,
            origin=self.origin,
            work_type=self.work_type,
        )


@dataclass(slots=True, frozen=True)
class NewWork:
    """Fields required to register a work; the store assigns id and timestamp."""

    title: str
    path: Path
    work_type: str
    page_count: int
    artist: str | None = None
    year: int | None = None
    genre: str | None = None
    circle: str | None = None
    origin: str | None = None

    @classmethod
    def from_metadata(cls, metadata: WorkMetadata, *, path: Path, page_count: int) -> NewWork:
        """Build registration fields from import metadata."""

        return cls(
            title=metadata.title,
            path=path,
            work_type=metadata.work_type,
            page_count=page_count,
            artist=metadata.artist,
            year=metadata.year,
            genre=metadata.genre,
            circle=metadata.circle,
            origin=metadata.origin,
        )


__all__ = ["NewWork", "Work"]
