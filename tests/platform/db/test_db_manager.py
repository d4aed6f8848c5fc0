"""Test database functionality."""

import sqlite3
from collections.abc import Generator
from pathlib import Path

import pytest

from sharaku.platform.db.db_manager import DatabaseManager


@pytest.fixture
def db_manager() -> Generator[DatabaseManager, None, None]:
    """Create a database manager with in-memory database.

    Yields:
        DatabaseManager: Database manager instance.
    """
    manager = DatabaseManager(":memory:")  # Use in-memory database for isolation
    manager.connect()
    yield manager
    manager.close()


def test_schema_creates_works_table(db_manager: DatabaseManager) -> None:
    """The works table and its title index exist after connecting."""
    conn = db_manager.require_connection()
    tables = {row[0] for row in conn.execute("SELECT name FROM sqlite_master WHERE type='table'")}
    indexes = {row[0] for row in conn.execute("SELECT name FROM sqlite_master WHERE type='index'")}

    assert "works" in tables
    assert "idx_works_title" in indexes


def test_path_uniqueness_enforced(db_manager: DatabaseManager) -> None:
    """Two works cannot share a path."""
    conn = db_manager.require_connection()
    _ = conn.execute(
        "INSERT INTO works (title, path, work_type, page_count) VALUES (?, ?, ?, ?)",
        ("A", "/library/A", "folder", 1),
    )
    conn.commit()

    with pytest.raises(sqlite3.IntegrityError):
        _ = conn.execute(
            "INSERT INTO works (title, path, work_type, page_count) VALUES (?, ?, ?, ?)",
            ("B", "/library/A", "folder", 2),
        )


@pytest.mark.parametrize(
    ("title", "page_count"),
    [("", 1), ("Valid", -1)],
)
def test_check_constraints(db_manager: DatabaseManager, title: str, page_count: int) -> None:
    """Empty titles and negative page counts are rejected by the schema."""
    conn = db_manager.require_connection()
    with pytest.raises(sqlite3.IntegrityError):
        _ = conn.execute(
            "INSERT INTO works (title, path, work_type, page_count) VALUES (?, ?, ?, ?)",
            (title, "/library/x", "folder", page_count),
        )


def test_file_database_creates_parent(tmp_path: Path) -> None:
    """A file-backed manager creates missing parent directories."""
    db_path = tmp_path / "nested" / "catalog.db"
    with DatabaseManager(db_path) as manager:
        assert manager.conn is not None
    assert db_path.exists()
    assert manager.conn is None


def test_require_connection_fails_when_closed() -> None:
    """Using a manager before connecting is an error."""
    manager = DatabaseManager(":memory:")
    with pytest.raises(RuntimeError):
        _ = manager.require_connection()


def test_string_path_is_converted(tmp_path: Path) -> None:
    """String paths other than ':memory:' are turned into Path objects."""
    manager = DatabaseManager(str(tmp_path / "catalog.db"))
    assert manager.db_path == tmp_path / "catalog.db"
