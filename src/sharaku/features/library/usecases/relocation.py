"""Use cases previewing and committing a directory layout change.

Where: src/sharaku/features/library/usecases/relocation.py
What: Render new paths for every work, then move directories and update the catalog.
Why: Moves are destructive; the preview shows the full plan before anything changes.

Per item the filesystem move happens first and the catalog update second. A
catalog failure after a successful move is reported as a partial commit and
the files are never moved back.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from logging import Logger, getLogger
from pathlib import Path

from sharaku.config.settings import COLLISION_SUFFIX_WIDTH
from sharaku.features.catalog import CatalogError, CatalogStorePort, Work
from sharaku.features.path import TemplateError, resolve_destination, validate_template

from ..domain.errors import DestinationExistsError, PartialCommitError
from ..domain.models import RelocationFailure, RelocationPreview, RelocationSummary
from ..domain.progress import (
    RelocationAborted,
    RelocationCompleted,
    RelocationMoving,
    RelocationProgress,
    RelocationStarted,
)
from .cancellation import CancellationToken
from .library_root import require_library_root, type_labels
from .log_events import LibraryEvent
from .ports import FileSystemGateway, SettingsPort, SourceCleanupError


def _with_suffix(path: Path, counter: int) -> Path:
    return path.with_name(f"{path.name}_{counter:0{COLLISION_SUFFIX_WIDTH}x}")


class RelocationEngine:
    """Two-phase relocation of managed works."""

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

    def preview(self, template: str) -> list[RelocationPreview]:
        """Return one entry per work, ordered by id, including no-op entries.

        Works rendering to a path already claimed in the plan get a numbered
        suffix so no two entries target the same directory. Nothing is mutated.

        Raises:
            ConfigurationError: No library root configured.
            TemplateError: Template invalid or degenerate for some work.
        """
        validation = validate_template(template)
        if not validation.valid:
            raise TemplateError(validation.error or "Invalid template")

        settings = self._settings.get_settings()
        library_root = require_library_root(settings)
        labels = type_labels(settings)
        works = sorted(self._catalog.list_works(), key=lambda work: work.id)

        rendered: list[tuple[Work, Path]] = []
        for work in works:
            try:
                target = resolve_destination(library_root, template, work.metadata(), labels)
            except TemplateError as exc:
                raise TemplateError(f"Work {work.id} ('{work.title}'): {exc}") from exc
            rendered.append((work, target))

        claimed = {target for work, target in rendered if target == work.path}
        previews: list[RelocationPreview] = []
        for work, target in rendered:
            new_path = target
            if target != work.path:
                counter = 1
                while new_path in claimed:
                    new_path = _with_suffix(target, counter)
                    counter += 1
                claimed.add(new_path)
            previews.append(
                RelocationPreview(
                    work_id=work.id,
                    title=work.title,
                    old_path=work.path,
                    new_path=new_path,
                )
            )
        return previews

    def commit(
        self,
        plan: str | Sequence[RelocationPreview],
        *,
        emit: Callable[[RelocationProgress], None],
        token: CancellationToken,
    ) -> RelocationSummary:
        """Execute a relocation from a template or an explicit preview list.

        When the plan cannot be built, a single ``RelocationAborted`` event is
        emitted and the error is raised.
        """
        template = plan if isinstance(plan, str) else None
        summary = RelocationSummary(template=template)

        try:
            previews = self.preview(plan) if isinstance(plan, str) else list(plan)
            library_root = require_library_root(self._settings.get_settings())
        except (TemplateError, CatalogError) as exc:
            emit(RelocationAborted(message=str(exc)))
            self._logger.error(
                "Relocation could not start: %s",
                exc,
                extra={
                    "library_event": LibraryEvent.OPERATION_ERROR,
                    "operation": "relocation",
                    "error_message": str(exc),
                },
            )
            raise

        ordered = sorted(previews, key=lambda preview: preview.work_id)
        total = len(ordered)
        emit(RelocationStarted(total=total))

        for index, preview in enumerate(ordered, start=1):
            token.checkpoint("relocation", summary)
            emit(RelocationMoving(current=index, total=total, title=preview.title))
            self._relocate_one(preview, index, total, library_root, summary)

        token.checkpoint("relocation", summary)
        emit(
            RelocationCompleted(
                relocated=summary.relocated,
                skipped=summary.skipped,
                failed=summary.failed,
            )
        )
        return summary

    def _relocate_one(
        self,
        preview: RelocationPreview,
        index: int,
        total: int,
        library_root: Path,
        summary: RelocationSummary,
    ) -> None:
        log_extra: dict[str, object] = {
            "source_path": str(preview.old_path),
            "target_path": str(preview.new_path),
            "library_root": str(library_root),
            "current": index,
            "total": total,
            "title": preview.title,
        }

        if preview.is_noop:
            summary.skipped += 1
            return

        if not self._filesystem.exists(preview.old_path):
            summary.skipped += 1
            self._logger.warning(
                "Current directory missing for work %d; skipping",
                preview.work_id,
                extra={**log_extra, "library_event": LibraryEvent.RELOCATE_SKIP},
            )
            return

        try:
            current = self._catalog.get_work(preview.work_id)
            if current.path != preview.old_path:
                raise CatalogError(
                    f"Catalog path {current.path} no longer matches preview {preview.old_path}"
                )
            if self._filesystem.exists(preview.new_path):
                raise DestinationExistsError(preview.new_path)
            self._filesystem.move_tree(preview.old_path, preview.new_path)
        except SourceCleanupError as exc:
            summary.leftover_sources.append(preview.old_path)
            self._logger.warning(
                "Moved work %d but could not delete %s: %s",
                preview.work_id,
                preview.old_path,
                exc,
                extra={
                    **log_extra,
                    "library_event": LibraryEvent.SOURCE_LEFTOVER,
                    "error_message": str(exc),
                },
            )
        except (CatalogError, DestinationExistsError, OSError) as exc:
            self._record_failure(summary, preview, str(exc), moved=False, log_extra=log_extra)
            return

        try:
            self._catalog.update_work_path(preview.work_id, preview.new_path)
        except Exception as exc:
            error = PartialCommitError(
                f"Work {preview.work_id} moved from {preview.old_path} to {preview.new_path} "
                f"but the catalog update failed: {exc}",
                destination_path=preview.new_path,
                work_id=preview.work_id,
                old_path=preview.old_path,
            )
            self._record_failure(summary, preview, str(error), moved=True, log_extra=log_extra)
            return

        self._filesystem.prune_empty_ancestors(preview.old_path.parent, library_root)
        summary.relocated += 1
        self._logger.info(
            "Relocated work %d",
            preview.work_id,
            extra={**log_extra, "library_event": LibraryEvent.RELOCATE_MOVE},
        )

    def _record_failure(
        self,
        summary: RelocationSummary,
        preview: RelocationPreview,
        message: str,
        *,
        moved: bool,
        log_extra: dict[str, object],
    ) -> None:
        summary.failed += 1
        summary.failures.append(
            RelocationFailure(
                work_id=preview.work_id,
                old_path=preview.old_path,
                new_path=preview.new_path,
                message=message,
                moved_on_disk=moved,
            )
        )
        event = LibraryEvent.PARTIAL_COMMIT if moved else LibraryEvent.RELOCATE_ERROR
        self._logger.error(
            "Relocation failed for work %d: %s",
            preview.work_id,
            message,
            extra={**log_extra, "library_event": event, "error_message": message},
        )


__all__ = ["RelocationEngine"]
