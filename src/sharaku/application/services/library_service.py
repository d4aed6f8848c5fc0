"""Application service exposing the library synchronization entry points."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from logging import Logger, getLogger
from pathlib import Path
from typing import final

from sharaku.config.config import Config
from sharaku.features.catalog import CatalogStorePort, SqliteCatalogStore, Work
from sharaku.features.library import (
    BulkImportOrchestrator,
    BulkImportSummary,
    CancellationToken,
    DiscoveredFolder,
    DiscoveryScanner,
    FileSystemGateway,
    ImportPipeline,
    ImportRequest,
    ImportResult,
    InvalidSourceError,
    LibraryRescanner,
    LocalFileSystemGateway,
    RelocationEngine,
    RelocationPreview,
    RelocationSummary,
    RescanSummary,
    SettingsPort,
)
from sharaku.features.library.domain.progress import (
    BulkImportProgress,
    DiscoverProgress,
    RelocationProgress,
    ScanProgress,
)
from sharaku.features.library.usecases.library_root import require_library_root, type_labels
from sharaku.features.path import TemplateValidation, preview_template, validate_template
from sharaku.platform.db.db_manager import DatabaseManager
from sharaku.shared import WorkMetadata

from .operation import OperationHandle, root_lock


@final
class LibrarySyncService:
    """Application façade wiring adapters into the library use cases.

    Long-running operations return an ``OperationHandle``; a missing library
    root raises ``ConfigurationError`` before any worker starts.
    """

    _settings: SettingsPort
    _catalog: CatalogStorePort
    _filesystem: FileSystemGateway
    _template_writer: Callable[[str], None] | None
    _logger: Logger

    def __init__(
        self,
        *,
        settings: SettingsPort,
        catalog: CatalogStorePort,
        filesystem: FileSystemGateway | None = None,
        template_writer: Callable[[str], None] | None = None,
        logger: Logger | None = None,
    ) -> None:
        self._settings = settings
        self._catalog = catalog
        self._filesystem = filesystem or LocalFileSystemGateway()
        self._template_writer = template_writer
        self._logger = logger or getLogger(__name__)

        self._scanner: DiscoveryScanner = DiscoveryScanner(
            filesystem=self._filesystem, catalog=catalog, logger=self._logger
        )
        self._pipeline: ImportPipeline = ImportPipeline(
            filesystem=self._filesystem, catalog=catalog, settings=settings, logger=self._logger
        )
        self._bulk: BulkImportOrchestrator = BulkImportOrchestrator(
            pipeline=self._pipeline, logger=self._logger
        )
        self._relocation: RelocationEngine = RelocationEngine(
            filesystem=self._filesystem, catalog=catalog, settings=settings, logger=self._logger
        )
        self._rescanner: LibraryRescanner = LibraryRescanner(
            filesystem=self._filesystem, catalog=catalog, settings=settings, logger=self._logger
        )

    @classmethod
    def from_config(
        cls,
        config: Config,
        db_manager: DatabaseManager,
        *,
        config_path: Path | None = None,
        logger: Logger | None = None,
    ) -> LibrarySyncService:
        """Build a service whose committed templates are saved back to ``config``."""

        def _persist_template(template: str) -> None:
            config.directory_template = template
            _ = config.save(config_path)

        return cls(
            settings=config,
            catalog=SqliteCatalogStore(db_manager),
            template_writer=_persist_template,
            logger=logger,
        )

    # Long-running operations ------------------------------------------------

    def discover(self, root: Path) -> OperationHandle[DiscoverProgress, list[DiscoveredFolder]]:
        library_root = require_library_root(self._settings.get_settings())
        scan_root = root.expanduser().resolve()
        if not self._filesystem.is_dir(scan_root):
            raise InvalidSourceError(scan_root, "is not a directory")

        def _run(emit: Callable[[DiscoverProgress], None], token: CancellationToken) -> list[DiscoveredFolder]:
            return self._scanner.scan(scan_root, library_root=library_root, emit=emit, token=token)

        return OperationHandle(
            "discovery",
            _run,
            lock=root_lock(library_root),
            library_root=library_root,
            logger=self._logger,
        )

    def import_bulk(
        self, requests: Sequence[ImportRequest]
    ) -> OperationHandle[BulkImportProgress, BulkImportSummary]:
        library_root = require_library_root(self._settings.get_settings())
        batch = list(requests)
        return OperationHandle(
            "bulk import",
            lambda emit, token: self._bulk.run(batch, emit=emit, token=token),
            lock=root_lock(library_root),
            library_root=library_root,
            logger=self._logger,
        )

    def commit_relocation(
        self, plan: str | Sequence[RelocationPreview]
    ) -> OperationHandle[RelocationProgress, RelocationSummary]:
        """Move works to the layout of ``plan`` (a template or a preview list).

        A template is saved as the configured layout once the commit completes.
        """
        library_root = require_library_root(self._settings.get_settings())
        frozen_plan: str | list[RelocationPreview] = plan if isinstance(plan, str) else list(plan)

        def _run(emit: Callable[[RelocationProgress], None], token: CancellationToken) -> RelocationSummary:
            summary = self._relocation.commit(frozen_plan, emit=emit, token=token)
            if summary.template is not None:
                self._store_template(summary.template)
            return summary

        return OperationHandle(
            "relocation",
            _run,
            lock=root_lock(library_root),
            library_root=library_root,
            logger=self._logger,
        )

    def rescan(self) -> OperationHandle[ScanProgress, RescanSummary]:
        library_root = require_library_root(self._settings.get_settings())
        return OperationHandle(
            "rescan",
            lambda emit, token: self._rescanner.run(emit=emit, token=token),
            lock=root_lock(library_root),
            library_root=library_root,
            logger=self._logger,
        )

    # Single-call operations -------------------------------------------------

    def import_one(self, request: ImportRequest) -> ImportResult:
        """Import one work, waiting for any running operation on the same root."""

        library_root = require_library_root(self._settings.get_settings())
        with root_lock(library_root):
            return self._pipeline.import_one(request)

    def preview_relocation(self, template: str) -> list[RelocationPreview]:
        return self._relocation.preview(template)

    def validate_template(self, template: str) -> TemplateValidation:
        return validate_template(template)

    def preview_template(self, template: str) -> str:
        """Render ``template`` against sample metadata."""

        return preview_template(template, type_labels(self._settings.get_settings()))

    def preview_import_path(self, metadata: WorkMetadata) -> Path:
        """Absolute destination an import of ``metadata`` would use; disk is untouched."""

        return self._pipeline.destination_for(metadata)

    # Catalog ----------------------------------------------------------------

    def list_works(self) -> list[Work]:
        return self._catalog.list_works()

    def get_work(self, work_id: int) -> Work:
        return self._catalog.get_work(work_id)

    def delete_work(self, work_id: int) -> None:
        """Forget a work; its files stay on disk."""

        self._catalog.delete_work(work_id)

    def _store_template(self, template: str) -> None:
        if self._template_writer is None:
            return
        try:
            self._template_writer(template)
        except OSError as exc:
            self._logger.error("Failed to persist directory template %r: %s", template, exc)
            return
        self._logger.info("Directory template set to %s", template)


__all__ = ["LibrarySyncService"]
