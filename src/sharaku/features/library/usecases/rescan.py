"""Reconcile the catalog with what exists under the library root."""

from __future__ import annotations

from collections.abc import Callable
from logging import Logger, getLogger
from pathlib import Path

from sharaku.config.settings import WORK_TYPE_FOLDER
from sharaku.features.catalog import CatalogStorePort, NewWork, Work
from sharaku.features.metadata import parse_folder_name

from ..domain.errors import OperationCancelledError
from ..domain.models import FlaggedWork, RescanSummary
from ..domain.progress import ScanCompleted, ScanProcessing, ScanProgress, ScanStarted
from .cancellation import CancellationToken
from .discovery import walk_candidates
from .image_files import count_images
from .library_root import require_library_root
from .log_events import LibraryEvent
from .ports import FileSystemGateway, SettingsPort


class LibraryRescanner:
    """Register orphaned work directories and flag catalog entries without pages.

    Flagged records are kept; deleting them is left to the caller.
    """

    _filesystem: FileSystemGateway
    _catalog: CatalogStorePort
    _settings: SettingsPort
    _logger: Logger

    def __init__(
        self,
        *,
        filesystem: FileSystemGateway,
        catalog: CatalogStorePort,
        settings: SettingsPort,
        logger: Logger | None = None,
    ) -> None:
        self._filesystem = filesystem
        self._catalog = catalog
        self._settings = settings
        self._logger = logger or getLogger(__name__)

    def run(
        self,
        *,
        emit: Callable[[ScanProgress], None],
        token: CancellationToken,
    ) -> RescanSummary:
        library_root = require_library_root(self._settings.get_settings())
        summary = RescanSummary()

        works_by_path: dict[Path, Work] = {
            work.path: work
            for work in self._catalog.list_works()
            if work.path.is_relative_to(library_root)
        }
        try:
            candidates = self._collect_candidates(library_root, works_by_path, token)
        except OperationCancelledError:
            raise OperationCancelledError("rescan", summary) from None

        total = len(candidates)
        emit(ScanStarted(total=total))

        for index, path in enumerate(candidates, start=1):
            token.checkpoint("rescan", summary)
            emit(ScanProcessing(current=index, total=total, file_name=path.name))
            work = works_by_path.get(path)
            if work is not None:
                self._verify_registered(work, library_root, summary)
            else:
                self._register_orphan(path, index, total, library_root, summary)

        token.checkpoint("rescan", summary)
        emit(
            ScanCompleted(
                registered=summary.registered,
                failed=summary.failed,
                flagged=len(summary.flagged),
            )
        )
        return summary

    def _collect_candidates(
        self,
        library_root: Path,
        works_by_path: dict[Path, Work],
        token: CancellationToken,
    ) -> list[Path]:
        """Union of image directories on disk and catalog paths, sorted.

        Only the outermost image directory of a tree becomes a work: anything
        nested inside a registered work or an earlier orphan belongs to it.
        A directory that contains a registered work is never an orphan.
        """
        registered = set(works_by_path)
        orphans: set[Path] = set()
        on_disk = sorted(
            candidate.path
            for candidate in walk_candidates(
                self._filesystem,
                library_root,
                exclude=None,
                token=token,
                on_scanned=lambda _count: None,
                logger=self._logger,
            )
        )
        for path in on_disk:
            if path == library_root or path in registered:
                continue
            if any(parent in registered or parent in orphans for parent in path.parents):
                continue
            if any(work_path.is_relative_to(path) for work_path in registered):
                self._logger.debug("Skipping %s: it contains a registered work", path)
                continue
            orphans.add(path)
        return sorted(registered | orphans)

    def _verify_registered(self, work: Work, library_root: Path, summary: RescanSummary) -> None:
        reason: str | None = None
        if not self._filesystem.is_dir(work.path):
            reason = "directory missing"
        else:
            try:
                if count_images(self._filesystem, work.path) == 0:
                    reason = "no image files"
            except OSError as exc:
                reason = f"unreadable ({exc})"

        if reason is None:
            return
        summary.flagged.append(FlaggedWork(work_id=work.id, path=work.path, reason=reason))
        self._logger.warning(
            "Work %d needs attention: %s",
            work.id,
            reason,
            extra={
                "library_event": LibraryEvent.RESCAN_MISSING,
                "source_path": str(work.path),
                "library_root": str(library_root),
                "title": work.title,
                "error_message": reason,
            },
        )

    def _register_orphan(
        self,
        path: Path,
        index: int,
        total: int,
        library_root: Path,
        summary: RescanSummary,
    ) -> None:
        parsed = parse_folder_name(path.name)
        try:
            page_count = count_images(self._filesystem, path)
            work = self._catalog.create_work(
                NewWork(
                    title=parsed.title,
                    path=path,
                    work_type=WORK_TYPE_FOLDER,
                    page_count=page_count,
                    artist=parsed.artist,
                )
            )
        except Exception as exc:
            summary.failed += 1
            self._logger.error(
                "Failed to register orphan %s: %s",
                path,
                exc,
                extra={
                    "library_event": LibraryEvent.IMPORT_ERROR,
                    "source_path": str(path),
                    "current": index,
                    "total": total,
                    "error_message": str(exc),
                },
            )
            return

        summary.registered += 1
        summary.registered_paths.append(path)
        self._logger.info(
            "Registered orphan %s",
            path,
            extra={
                "library_event": LibraryEvent.RESCAN_ORPHAN,
                "source_path": str(path),
                "library_root": str(library_root),
                "current": index,
                "total": total,
                "title": work.title,
                "page_count": page_count,
            },
        )


__all__ = ["LibraryRescanner"]
