"""SQLite implementation of the catalog store port."""

from __future__ import annotations

import sqlite3
import threading
from datetime import UTC, datetime
from pathlib import Path
from typing import final

from sharaku.platform.db.daos.works_dao import WorkRow, WorksDAO
from sharaku.platform.db.db_manager import DatabaseManager

from ..domain.errors import DuplicatePathError, WorkNotFoundError
from ..domain.models import NewWork, Work


def _is_unique_violation(exc: sqlite3.IntegrityError) -> bool:
    return "UNIQUE" in str(exc).upper()


def _parse_timestamp(raw: str) -> datetime:
    parsed = datetime.fromisoformat(raw)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def _row_to_work(row: WorkRow) -> Work:
    work_id, title, path, work_type, page_count, created_at, artist, year, genre, circle, origin = row
    return Work(
        id=work_id,
        title=title,
        path=Path(path),
        work_type=work_type,
        page_count=page_count,
        created_at=_parse_timestamp(created_at),
        artist=artist,
        year=year,
        genre=genre,
        circle=circle,
        origin=origin,
    )


@final
class SqliteCatalogStore:
    """Catalog store backed by the ``works`` table of a connected ``DatabaseManager``."""

    def __init__(self, db_manager: DatabaseManager) -> None:
        self._dao: WorksDAO = WorksDAO(db_manager.require_connection())
        # one connection shared across worker threads
        self._lock: threading.Lock = threading.Lock()

    def create_work(self, new_work: NewWork) -> Work:
        with self._lock:
            try:
                work_id = self._dao.insert_work(
                    title=new_work.title,
                    path=str(new_work.path),
                    work_type=new_work.work_type,
                    page_count=new_work.page_count,
                    artist=new_work.artist,
                    year=new_work.year,
                    genre=new_work.genre,
                    circle=new_work.circle,
                    origin=new_work.origin,
                )
            except sqlite3.IntegrityError as exc:
                if _is_unique_violation(exc):
                    raise DuplicatePathError(new_work.path) from exc
                raise
            row = self._dao.get_work(work_id)
        if row is None:
            raise WorkNotFoundError(work_id)
        return _row_to_work(row)

    def get_work(self, work_id: int) -> Work:
        with self._lock:
            row = self._dao.get_work(work_id)
        if row is None:
            raise WorkNotFoundError(work_id)
        return _row_to_work(row)

    def list_works(self) -> list[Work]:
        with self._lock:
            rows = self._dao.list_works()
        return [_row_to_work(row) for row in rows]

    def update_work_path(self, work_id: int, new_path: Path) -> None:
        with self._lock:
            try:
                updated = self._dao.update_path(work_id, str(new_path))
            except sqlite3.IntegrityError as exc:
                if _is_unique_violation(exc):
                    raise DuplicatePathError(new_path) from exc
                raise
        if not updated:
            raise WorkNotFoundError(work_id)

    def delete_work(self, work_id: int) -> None:
        with self._lock:
            deleted = self._dao.delete_work(work_id)
        if not deleted:
            raise WorkNotFoundError(work_id)


__all__ = ["SqliteCatalogStore"]
