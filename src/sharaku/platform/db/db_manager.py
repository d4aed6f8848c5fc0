"""Database manager for the sharaku catalog."""

from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Any, final

from sharaku.config.paths import default_database_path
from sharaku.platform.filesystem import ensure_parent_directory
from sharaku.platform.logging import logger


@final
class DatabaseManager:
    """Owns the SQLite connection backing the catalog.

    The manager is constructed explicitly and handed to adapters; connections
    are acquired with ``connect()`` (or ``with``) and released with ``close()``.
    """

    db_path: str | Path
    conn: sqlite3.Connection | None

    def __init__(self, db_path: Path | str | None = None) -> None:
        """Initialize database manager.

        Args:
            db_path: Path to database file. If None, use the default data directory.
                   If ":memory:", use in-memory database.
        """
        if db_path == ":memory:":
            self.db_path = ":memory:"
        elif db_path is None:
            self.db_path = default_database_path()
        else:
            self.db_path = Path(db_path) if isinstance(db_path, str) else db_path
        self.conn = None

    def connect(self) -> None:
        """Connect to database and initialize schema."""
        try:
            if isinstance(self.db_path, Path):
                _ = ensure_parent_directory(self.db_path)

            try:
                self.conn = sqlite3.connect(
                    self.db_path,
                    timeout=30.0,
                    isolation_level="IMMEDIATE",
                    check_same_thread=False,  # operations run on worker threads
                )
            except sqlite3.OperationalError as e:
                if "unable to open database file" in str(e):
                    raise PermissionError(f"Unable to open database at {self.db_path}") from e
                raise

            _ = self.conn.execute("PRAGMA foreign_keys = ON")
            _ = self.conn.execute("PRAGMA synchronous = NORMAL")
            _ = self.conn.execute("PRAGMA journal_mode = WAL")
            _ = self.conn.execute("PRAGMA busy_timeout = 30000")

            self._init_schema()

        except sqlite3.Error as e:
            logger.error("Failed to connect to database: %s", e)
            raise

    def _init_schema(self) -> None:
        """Initialize database schema."""
        if self.conn is None:
            return

        try:
            cursor = self.conn.cursor()
            _ = cursor.execute(
                """
                CREATE TABLE IF NOT EXISTS works (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    title TEXT NOT NULL CHECK (length(title) > 0),
                    path TEXT NOT NULL UNIQUE,
                    work_type TEXT NOT NULL,
                    page_count INTEGER NOT NULL DEFAULT 0 CHECK (page_count >= 0),
                    artist TEXT,
                    year INTEGER,
                    genre TEXT,
                    circle TEXT,
                    origin TEXT,
                    created_at DATETIME DEFAULT CURRENT_TIMESTAMP,
                    updated_at DATETIME DEFAULT CURRENT_TIMESTAMP
                )
                """
            )
            _ = cursor.execute("CREATE INDEX IF NOT EXISTS idx_works_title ON works(title)")
            self.conn.commit()
            logger.debug("Catalog schema ready at %s", self.db_path)

        except sqlite3.Error as e:
            logger.error("Failed to initialize schema: %s", e)
            self.conn.rollback()
            raise

    def close(self) -> None:
        """Close database connection."""
        if self.conn:
            try:
                self.conn.close()
                self.conn = None
            except sqlite3.Error as e:
                logger.error("Failed to close database connection: %s", e)

    def __enter__(self) -> DatabaseManager:
        """Enter context manager."""
        self.connect()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any | None,
    ) -> None:
        """Exit context manager."""
        self.close()

    def require_connection(self) -> sqlite3.Connection:
        """Return the open connection or fail loudly when not connected."""
        if self.conn is None:
            raise RuntimeError("Database connection is not open")
        return self.conn


__all__ = ["DatabaseManager"]
