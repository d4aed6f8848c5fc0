"""src/sharaku/platform/db/daos/works_dao.py
What: SQL access to the ``works`` table.
Why: Keep SQL text and transaction handling out of the catalog adapter.
"""

from __future__ import annotations

import sqlite3
from typing import Final

from sharaku.platform.logging import logger

# id, title, path, work_type, page_count, created_at, artist, year, genre, circle, origin
WorkRow = tuple[int, str, str, str, int, str, str | None, int | None, str | None, str | None, str | None]


class WorksDAO:
    """Data access object for the works table.

    Write methods commit on success, roll back and re-raise on ``sqlite3.Error``.
    """

    _COLUMNS: Final[str] = (
        "id, title, path, work_type, page_count, created_at, artist, year, genre, circle, origin"
    )
    _INSERT_SQL: Final[str] = (
        """
        INSERT INTO works (
            title,
            path,
            work_type,
            page_count,
            artist,
            year,
            genre,
            circle,
            origin
        ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
        """
    )
    _UPDATE_PATH_SQL: Final[str] = (
        """
        UPDATE works
        SET path = ?, updated_at = CURRENT_TIMESTAMP
        WHERE id = ?
        """
    )

    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn: sqlite3.Connection = conn

    def insert_work(
        self,
        *,
        title: str,
        path: str,
        work_type: str,
        page_count: int,
        artist: str | None,
        year: int | None,
        genre: str | None,
        circle: str | None,
        origin: str | None,
    ) -> int:
        """Insert a work and return its new identifier."""

        try:
            cursor = self.conn.cursor()
            _ = cursor.execute(
                self._INSERT_SQL,
                (title, path, work_type, page_count, artist, year, genre, circle, origin),
            )
            self.conn.commit()
        except sqlite3.Error as exc:
            logger.error("Failed to insert work at %s: %s", path, exc)
            self._rollback()
            raise
        work_id = cursor.lastrowid
        if work_id is None:
            raise sqlite3.DatabaseError(f"No row id returned for work at {path}")
        return work_id

    def get_work(self, work_id: int) -> WorkRow | None:
        """Fetch one work row by id."""

        cursor = self.conn.cursor()
        _ = cursor.execute(f"SELECT {self._COLUMNS} FROM works WHERE id = ?", (work_id,))
        row: WorkRow | None = cursor.fetchone()
        return row

    def list_works(self) -> list[WorkRow]:
        """Fetch every work row ordered by id."""

        cursor = self.conn.cursor()
        _ = cursor.execute(f"SELECT {self._COLUMNS} FROM works ORDER BY id")
        rows: list[WorkRow] = cursor.fetchall()
        return rows

    def update_path(self, work_id: int, path: str) -> bool:
        """Set a new path; returns False when no row matched."""

        try:
            cursor = self.conn.cursor()
            _ = cursor.execute(self._UPDATE_PATH_SQL, (path, work_id))
            self.conn.commit()
        except sqlite3.Error as exc:
            logger.error("Failed to update path of work %s to %s: %s", work_id, path, exc)
            self._rollback()
            raise
        return cursor.rowcount > 0

    def delete_work(self, work_id: int) -> bool:
        """Delete a work row; returns False when no row matched."""

        try:
            cursor = self.conn.cursor()
            _ = cursor.execute("DELETE FROM works WHERE id = ?", (work_id,))
            self.conn.commit()
        except sqlite3.Error as exc:
            logger.error("Failed to delete work %s: %s", work_id, exc)
            self._rollback()
            raise
        return cursor.rowcount > 0

    def _rollback(self) -> None:
        try:
            self.conn.rollback()
        except sqlite3.Error:
            logger.debug("Rollback failed after works table error", exc_info=True)


__all__ = ["WorkRow", "WorksDAO"]
