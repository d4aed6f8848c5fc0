"""Shared fixtures for library synchronization tests."""

from __future__ import annotations

from collections.abc import Callable, Generator
from pathlib import Path

import pytest

from sharaku.config.config import Config
from sharaku.features.catalog import NewWork, SqliteCatalogStore, Work
from sharaku.features.library import LocalFileSystemGateway
from sharaku.platform.db.db_manager import DatabaseManager
from sharaku.shared import WorkMetadata

MakeWorkDir = Callable[..., Path]
RegisterWork = Callable[..., Work]


@pytest.fixture
def library_root(tmp_path: Path) -> Path:
    """Empty managed storage directory."""

    root = tmp_path.resolve() / "library"
    root.mkdir()
    return root


@pytest.fixture
def inbox(tmp_path: Path) -> Path:
    """Directory holding import sources, outside the library root."""

    root = tmp_path.resolve() / "inbox"
    root.mkdir()
    return root


@pytest.fixture
def config(library_root: Path) -> Config:
    """In-memory configuration pointing at ``library_root`` (never saved)."""

    return Config(library_root=library_root)


@pytest.fixture
def catalog() -> Generator[SqliteCatalogStore, None, None]:
    """Catalog store over an in-memory database."""

    manager = DatabaseManager(":memory:")
    manager.connect()
    yield SqliteCatalogStore(manager)
    manager.close()


@pytest.fixture
def filesystem() -> LocalFileSystemGateway:
    return LocalFileSystemGateway()


@pytest.fixture
def make_work_dir() -> MakeWorkDir:
    """Factory creating a directory with ``pages`` images plus a non-image file."""

    def _make(path: Path, pages: int = 3, *, extension: str = "jpg") -> Path:
        path.mkdir(parents=True, exist_ok=True)
        for index in range(1, pages + 1):
            _ = (path / f"page_{index:03d}.{extension}").write_bytes(b"\xff\xd8" + bytes([index % 256]))
        _ = (path / "info.txt").write_text("not a page", encoding="utf-8")
        return path

    return _make


@pytest.fixture
def register_work(catalog: SqliteCatalogStore, make_work_dir: MakeWorkDir) -> RegisterWork:
    """Factory creating a work directory and its catalog entry."""

    def _register(path: Path, title: str, *, artist: str | None = None, pages: int = 3) -> Work:
        _ = make_work_dir(path, pages)
        return catalog.create_work(
            NewWork.from_metadata(WorkMetadata(title=title, artist=artist), path=path, page_count=pages)
        )

    return _register
