"""Tests for the library synchronization application service."""

from __future__ import annotations

import tomllib
from collections.abc import Callable, Generator, Sequence
from pathlib import Path

import pytest
from pytest_mock import MockerFixture

from sharaku.application.services.library_service import LibrarySyncService
from sharaku.config.config import Config
from sharaku.features.catalog import SqliteCatalogStore, WorkNotFoundError
from sharaku.features.library import (
    ConfigurationError,
    DestinationExistsError,
    ImportRequest,
    InvalidSourceError,
)
from sharaku.features.library.domain.progress import RelocationAborted
from sharaku.features.path import TemplateError
from sharaku.platform.db.db_manager import DatabaseManager
from sharaku.shared import WorkMetadata


@pytest.fixture
def library_root(tmp_path: Path) -> Path:
    root = tmp_path.resolve() / "library"
    root.mkdir()
    return root


@pytest.fixture
def inbox(tmp_path: Path) -> Path:
    """Three importable folders and one without images."""
    root = tmp_path.resolve() / "inbox"
    for name, pages in (("[Alpha] First", 2), ("Beta - Second", 3), ("Third", 1), ("notes", 0)):
        folder = root / name
        folder.mkdir(parents=True)
        for index in range(pages):
            _ = (folder / f"{index:02d}.png").write_bytes(b"\x89PNG")
        _ = (folder / "readme.txt").write_text("x", encoding="utf-8")
    return root


@pytest.fixture
def db_manager() -> Generator[DatabaseManager, None, None]:
    manager = DatabaseManager(":memory:")
    manager.connect()
    yield manager
    manager.close()


@pytest.fixture
def config(library_root: Path) -> Config:
    return Config(library_root=library_root)


@pytest.fixture
def written_templates() -> list[str]:
    return []


@pytest.fixture
def service(
    config: Config, db_manager: DatabaseManager, written_templates: list[str]
) -> LibrarySyncService:
    return LibrarySyncService(
        settings=config,
        catalog=SqliteCatalogStore(db_manager),
        template_writer=written_templates.append,
    )


def _assert_well_formed(events: Sequence[object]) -> None:
    """Started first, exactly one terminal event last, counters monotonic and bounded."""

    assert events, "expected at least one event"
    assert getattr(events[0], "kind") == "started"
    terminal = [event for event in events if getattr(event, "terminal")]
    assert terminal == [events[-1]]

    last_current = 0
    for event in events:
        current = getattr(event, "current", None)
        if current is None:
            continue
        assert current >= last_current
        assert current <= getattr(event, "total")
        last_current = current


def test_operations_require_library_root(db_manager: DatabaseManager, inbox: Path) -> None:
    service = LibrarySyncService(settings=Config(), catalog=SqliteCatalogStore(db_manager))

    with pytest.raises(ConfigurationError):
        _ = service.discover(inbox)
    with pytest.raises(ConfigurationError):
        _ = service.import_bulk([])
    with pytest.raises(ConfigurationError):
        _ = service.commit_relocation("{title}")
    with pytest.raises(ConfigurationError):
        _ = service.rescan()


def test_discover_rejects_missing_root(service: LibrarySyncService, tmp_path: Path) -> None:
    with pytest.raises(InvalidSourceError):
        _ = service.discover(tmp_path / "missing")


def test_discover_then_bulk_import(service: LibrarySyncService, inbox: Path, library_root: Path) -> None:
    discovery = service.discover(inbox)
    discover_events = list(discovery)
    folders = discovery.result()
    _assert_well_formed(discover_events)

    assert [folder.folder_name for folder in folders] == ["Beta - Second", "Third", "[Alpha] First"]

    bulk = service.import_bulk([folder.to_import_request() for folder in folders])
    bulk_events = list(bulk)
    summary = bulk.result()
    _assert_well_formed(bulk_events)

    assert (summary.succeeded, summary.failed) == (3, 0)
    assert {work.path for work in service.list_works()} == {
        library_root / "Alpha" / "First",
        library_root / "Beta" / "Second",
        library_root / "Unknown" / "Third",
    }

    again = service.discover(inbox).result()
    assert all(folder.already_registered is False for folder in again)


def test_commit_relocation_persists_template(
    service: LibrarySyncService, inbox: Path, library_root: Path, written_templates: list[str]
) -> None:
    _ = service.import_one(ImportRequest(source=inbox / "Third", metadata=WorkMetadata(title="Third", year=2001)))

    handle = service.commit_relocation("{year}/{title}")
    events = list(handle)
    summary = handle.result()

    _assert_well_formed(events)
    assert summary.relocated == 1
    assert written_templates == ["{year}/{title}"]
    assert service.list_works()[0].path == library_root / "2001" / "Third"
    assert not (library_root / "Unknown").exists()


def test_commit_relocation_from_preview_keeps_template(
    service: LibrarySyncService, inbox: Path, written_templates: list[str]
) -> None:
    _ = service.import_one(ImportRequest(source=inbox / "Third", metadata=WorkMetadata(title="Third")))
    previews = service.preview_relocation("{title}")

    summary = service.commit_relocation(previews).result()

    assert summary.relocated == 1
    assert written_templates == []


def test_commit_relocation_with_invalid_template(
    service: LibrarySyncService, written_templates: list[str]
) -> None:
    handle = service.commit_relocation("{bogus}")
    events = list(handle)

    assert len(events) == 1
    assert isinstance(events[0], RelocationAborted)
    with pytest.raises(TemplateError):
        _ = handle.result()
    assert written_templates == []


def test_rescan_through_service(
    service: LibrarySyncService, library_root: Path
) -> None:
    orphan = library_root / "Someone" / "Someone - Lost Work"
    orphan.mkdir(parents=True)
    _ = (orphan / "01.jpg").write_bytes(b"\xff\xd8")

    handle = service.rescan()
    events = list(handle)
    summary = handle.result()

    _assert_well_formed(events)
    assert summary.registered == 1
    work = service.list_works()[0]
    assert (work.title, work.artist) == ("Lost Work", "Someone")


def test_import_one_and_catalog_helpers(service: LibrarySyncService, inbox: Path, library_root: Path) -> None:
    metadata = WorkMetadata(title="Second", artist="Beta")
    assert service.preview_import_path(metadata) == library_root / "Beta" / "Second"

    result = service.import_one(ImportRequest(source=inbox / "Beta - Second", metadata=metadata))
    assert result.page_count == 3

    with pytest.raises(DestinationExistsError):
        _ = service.import_one(ImportRequest(source=inbox / "Third", metadata=metadata))

    work = service.get_work(result.work_id)
    assert work.path == result.destination_path

    service.delete_work(result.work_id)
    assert service.list_works() == []
    assert result.destination_path.is_dir()
    with pytest.raises(WorkNotFoundError):
        _ = service.get_work(result.work_id)


def test_template_helpers_use_configured_labels(
    config: Config, db_manager: DatabaseManager
) -> None:
    config.type_label_folder = "Book"
    service = LibrarySyncService(settings=config, catalog=SqliteCatalogStore(db_manager))

    assert service.validate_template("{title}").valid
    assert not service.validate_template("{nope}").valid
    assert service.preview_template("{type}/{title}") == "Book/My Artwork"


def test_from_config_saves_committed_template(
    config: Config, db_manager: DatabaseManager, inbox: Path, tmp_path: Path
) -> None:
    config_path = tmp_path / "config" / "config.toml"
    service = LibrarySyncService.from_config(config, db_manager, config_path=config_path)
    _ = service.import_one(ImportRequest(source=inbox / "Third", metadata=WorkMetadata(title="Third")))

    _ = service.commit_relocation("{title}").result()

    saved = tomllib.loads(config_path.read_text(encoding="utf-8"))
    assert saved["directory_template"] == "{title}"
    assert config.directory_template == "{title}"


def test_template_write_failure_is_logged_not_raised(
    config: Config,
    db_manager: DatabaseManager,
    inbox: Path,
    mocker: MockerFixture,
) -> None:
    writer: Callable[[str], None] = mocker.Mock(side_effect=OSError("read-only"))
    service = LibrarySyncService(
        settings=config, catalog=SqliteCatalogStore(db_manager), template_writer=writer
    )
    _ = service.import_one(ImportRequest(source=inbox / "Third", metadata=WorkMetadata(title="Third")))

    summary = service.commit_relocation("{title}").result()

    assert summary.relocated == 1
