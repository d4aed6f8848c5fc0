"""Tests for relocation preview and commit."""

from __future__ import annotations

import errno
from collections.abc import Callable
from pathlib import Path

import pytest
from pytest_mock import MockerFixture

from sharaku.config.config import Config
from sharaku.features.catalog import SqliteCatalogStore, Work
from sharaku.features.library import (
    CancellationToken,
    LocalFileSystemGateway,
    OperationCancelledError,
    RelocationEngine,
)
from sharaku.features.library.domain.progress import (
    RelocationAborted,
    RelocationCompleted,
    RelocationMoving,
    RelocationProgress,
    RelocationStarted,
)
from sharaku.features.path import TemplateError


@pytest.fixture
def engine(
    config: Config, catalog: SqliteCatalogStore, filesystem: LocalFileSystemGateway
) -> RelocationEngine:
    return RelocationEngine(filesystem=filesystem, catalog=catalog, settings=config)


@pytest.fixture
def four_works(library_root: Path, register_work: Callable[..., Work]) -> list[Work]:
    """Works laid out as ``{artist}/{title}`` under the library root."""
    return [
        register_work(library_root / f"A{index}" / f"Title {index}", f"Title {index}", artist=f"A{index}")
        for index in range(1, 5)
    ]


def test_preview_lists_every_work_in_id_order(
    engine: RelocationEngine, four_works: list[Work], library_root: Path
) -> None:
    previews = engine.preview("{title}")

    assert [preview.work_id for preview in previews] == [work.id for work in four_works]
    assert [preview.new_path for preview in previews] == [
        library_root / f"Title {index}" for index in range(1, 5)
    ]
    assert all(not preview.is_noop for preview in previews)


def test_preview_is_pure_and_idempotent(
    engine: RelocationEngine, four_works: list[Work], catalog: SqliteCatalogStore
) -> None:
    first = engine.preview("{title}")
    second = engine.preview("{title}")

    assert first == second
    assert [work.path for work in catalog.list_works()] == [work.path for work in four_works]
    assert all(work.path.is_dir() for work in four_works)


def test_preview_with_current_layout_is_all_noop(engine: RelocationEngine, four_works: list[Work]) -> None:
    previews = engine.preview("{artist}/{title}")
    assert all(preview.is_noop for preview in previews)


def test_preview_suffixes_colliding_targets(
    engine: RelocationEngine, library_root: Path, register_work: Callable[..., Work]
) -> None:
    _ = register_work(library_root / "X" / "Same", "Same", artist="X")
    _ = register_work(library_root / "Y" / "Same", "Same", artist="Y")

    previews = engine.preview("{title}")

    assert [preview.new_path for preview in previews] == [
        library_root / "Same",
        library_root / "Same_0001",
    ]


def test_preview_noop_targets_are_claimed_first(
    engine: RelocationEngine, library_root: Path, register_work: Callable[..., Work]
) -> None:
    mover = register_work(library_root / "X" / "T", "T", artist="X")
    stayer = register_work(library_root / "T", "T")

    previews = {preview.work_id: preview for preview in engine.preview("{title}")}

    assert previews[stayer.id].is_noop
    assert previews[mover.id].new_path == library_root / "T_0001"


def test_preview_collision_suffix_counts_in_hex(
    engine: RelocationEngine, library_root: Path, register_work: Callable[..., Work]
) -> None:
    for index in range(12):
        _ = register_work(library_root / f"A{index:02d}" / "Same", "Same", artist=f"A{index:02d}")

    previews = engine.preview("{title}")

    assert [preview.new_path.name for preview in previews][9:] == ["Same_0009", "Same_000a", "Same_000b"]


def test_preview_rejects_invalid_template(engine: RelocationEngine, four_works: list[Work]) -> None:
    with pytest.raises(TemplateError):
        _ = engine.preview("{artist}")


def test_commit_moves_works_and_counts_failures(
    engine: RelocationEngine,
    catalog: SqliteCatalogStore,
    four_works: list[Work],
    library_root: Path,
) -> None:
    # A stray directory occupies the target of the third work.
    blocker = library_root / "Title 3"
    blocker.mkdir()
    events: list[RelocationProgress] = []

    summary = engine.commit("{title}", emit=events.append, token=CancellationToken())

    assert (summary.relocated, summary.skipped, summary.failed) == (3, 0, 1)
    assert summary.template == "{title}"
    assert summary.failures[0].work_id == four_works[2].id
    assert summary.failures[0].moved_on_disk is False

    for index, work in enumerate(four_works, start=1):
        stored = catalog.get_work(work.id)
        if index == 3:
            assert stored.path == work.path
            assert work.path.is_dir()
            continue
        assert stored.path == library_root / f"Title {index}"
        assert (stored.path / "page_001.jpg").is_file()
        assert not (library_root / f"A{index}").exists()

    assert events[0] == RelocationStarted(total=4)
    assert [event.current for event in events if isinstance(event, RelocationMoving)] == [1, 2, 3, 4]
    assert events[-1] == RelocationCompleted(relocated=3, skipped=0, failed=1)


def test_commit_is_idempotent(engine: RelocationEngine, four_works: list[Work]) -> None:
    _ = engine.commit("{title}", emit=lambda _e: None, token=CancellationToken())

    summary = engine.commit("{title}", emit=lambda _e: None, token=CancellationToken())

    assert summary.relocated == 0
    assert summary.skipped == len(four_works)
    assert all(preview.is_noop for preview in engine.preview("{title}"))


def test_commit_skips_missing_directories(
    engine: RelocationEngine, four_works: list[Work], library_root: Path
) -> None:
    for child in four_works[0].path.iterdir():
        child.unlink()
    four_works[0].path.rmdir()

    summary = engine.commit("{title}", emit=lambda _e: None, token=CancellationToken())

    assert summary.skipped == 1
    assert summary.relocated == 3
    assert not (library_root / "Title 1").exists()


def test_commit_with_invalid_template_aborts(engine: RelocationEngine, four_works: list[Work]) -> None:
    events: list[RelocationProgress] = []

    with pytest.raises(TemplateError):
        _ = engine.commit("{nope}/{title}", emit=events.append, token=CancellationToken())

    assert len(events) == 1
    assert isinstance(events[0], RelocationAborted)
    assert "nope" in events[0].message
    assert all(work.path.is_dir() for work in four_works)


def test_commit_preview_list_detects_stale_entries(
    engine: RelocationEngine,
    catalog: SqliteCatalogStore,
    four_works: list[Work],
    library_root: Path,
) -> None:
    previews = engine.preview("{title}")
    catalog.update_work_path(four_works[0].id, library_root / "elsewhere")

    summary = engine.commit(previews, emit=lambda _e: None, token=CancellationToken())

    assert summary.template is None
    assert summary.failed == 1
    assert summary.relocated == 3
    assert four_works[0].path.is_dir()


def test_catalog_failure_after_move_is_partial_commit(
    engine: RelocationEngine,
    catalog: SqliteCatalogStore,
    four_works: list[Work],
    library_root: Path,
    mocker: MockerFixture,
) -> None:
    _ = mocker.patch.object(catalog, "update_work_path", side_effect=RuntimeError("database is locked"))

    summary = engine.commit("{title}", emit=lambda _e: None, token=CancellationToken())

    assert summary.failed == 4
    assert all(failure.moved_on_disk for failure in summary.failures)
    # Files are not moved back.
    assert (library_root / "Title 1").is_dir()
    assert not four_works[0].path.exists()


def test_undeletable_source_still_updates_catalog(
    engine: RelocationEngine,
    catalog: SqliteCatalogStore,
    four_works: list[Work],
    library_root: Path,
    mocker: MockerFixture,
) -> None:
    _ = mocker.patch.object(Path, "rename", side_effect=OSError(errno.EXDEV, "Invalid cross-device link"))
    _ = mocker.patch(
        "sharaku.features.library.adapters.filesystem.local.shutil.rmtree",
        side_effect=PermissionError(errno.EACCES, "Permission denied"),
    )

    summary = engine.commit("{title}", emit=lambda _e: None, token=CancellationToken())

    assert summary.relocated == 4
    assert summary.failed == 0
    assert summary.leftover_sources == [work.path for work in four_works]
    assert catalog.get_work(four_works[0].id).path == library_root / "Title 1"
    assert (library_root / "Title 1" / "page_001.jpg").is_file()
    assert four_works[0].path.is_dir()


def test_cancellation_keeps_moved_works(
    engine: RelocationEngine, catalog: SqliteCatalogStore, four_works: list[Work], library_root: Path
) -> None:
    token = CancellationToken()
    events: list[RelocationProgress] = []

    def _emit(event: RelocationProgress) -> None:
        events.append(event)
        if isinstance(event, RelocationMoving) and event.current == 1:
            token.cancel()

    with pytest.raises(OperationCancelledError) as exc_info:
        _ = engine.commit("{title}", emit=_emit, token=token)

    assert getattr(exc_info.value.partial, "relocated") == 1
    assert catalog.get_work(four_works[0].id).path == library_root / "Title 1"
    assert catalog.get_work(four_works[1].id).path == four_works[1].path
    assert not any(event.terminal for event in events)
