"""Use case materializing one source directory into managed storage."""

from __future__ import annotations

from logging import Logger, getLogger
from pathlib import Path

from sharaku.features.catalog import CatalogStorePort, NewWork
from sharaku.features.path import resolve_destination
from sharaku.shared import WorkMetadata

from ..domain.errors import (
    DestinationExistsError,
    FilesystemError,
    InvalidSourceError,
    PartialCommitError,
)
from ..domain.models import ImportMode, ImportRequest, ImportResult
from .image_files import count_images
from .library_root import require_library_root, type_labels
from .log_events import LibraryEvent
from .ports import FileSystemGateway, SettingsPort, SourceCleanupError


class ImportPipeline:
    """Validate, transfer and register a single work.

    Steps run in order and each must succeed before the next one commits:
    source check, destination render, existence check, transfer, registration.
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

    def destination_for(self, metadata: WorkMetadata) -> Path:
        """Return the absolute destination an import of ``metadata`` would use."""

        settings = self._settings.get_settings()
        library_root = require_library_root(settings)
        return resolve_destination(
            library_root,
            settings.directory_template,
            metadata,
            type_labels(settings),
        )

    def import_one(self, request: ImportRequest) -> ImportResult:
        """Import ``request`` and return where it landed.

        Raises:
            ConfigurationError: No library root configured.
            InvalidSourceError: Source missing, not a directory, without images,
                or overlapping the destination.
            TemplateError: Destination cannot be rendered.
            DestinationExistsError: Destination already present.
            FilesystemError: Transfer failed; no partial destination is left behind.
            PartialCommitError: Files transferred but registration failed.
        """
        source = request.source.expanduser().resolve()
        self._validate_source(source)

        library_root = require_library_root(self._settings.get_settings())
        destination = self.destination_for(request.metadata)

        if (
            source == destination
            or destination.is_relative_to(source)
            or source.is_relative_to(destination)
        ):
            raise InvalidSourceError(source, f"overlaps destination {destination}")
        if self._filesystem.exists(destination):
            raise DestinationExistsError(destination)

        self._logger.info(
            "Importing %s → %s",
            source,
            destination,
            extra={
                "library_event": LibraryEvent.IMPORT_START,
                "source_path": str(source),
                "target_path": str(destination),
                "library_root": str(library_root),
                "title": request.metadata.title,
            },
        )
        leftover_source = self._transfer(source, destination, request.mode)

        try:
            page_count = count_images(self._filesystem, destination)
            work = self._catalog.create_work(
                NewWork.from_metadata(request.metadata, path=destination, page_count=page_count)
            )
        except Exception as exc:
            message = (
                f"Files were transferred to {destination} but registration failed: {exc}"
            )
            self._logger.error(
                "Registration failed after transfer to %s: %s",
                destination,
                exc,
                extra={
                    "library_event": LibraryEvent.PARTIAL_COMMIT,
                    "source_path": str(source),
                    "target_path": str(destination),
                    "error_message": str(exc),
                },
            )
            raise PartialCommitError(message, destination_path=destination) from exc

        self._logger.info(
            "Imported %s (%d pages)",
            destination,
            page_count,
            extra={
                "library_event": LibraryEvent.IMPORT_SUCCESS,
                "target_path": str(destination),
                "library_root": str(library_root),
                "title": work.title,
                "page_count": page_count,
            },
        )
        return ImportResult(
            destination_path=destination,
            page_count=page_count,
            work_id=work.id,
            leftover_source=leftover_source,
        )

    def _validate_source(self, source: Path) -> None:
        if not self._filesystem.exists(source):
            raise InvalidSourceError(source, "does not exist")
        if not self._filesystem.is_dir(source):
            raise InvalidSourceError(source, "is not a directory")
        try:
            images = count_images(self._filesystem, source)
        except OSError as exc:
            raise InvalidSourceError(source, f"cannot be read ({exc})") from exc
        if images == 0:
            raise InvalidSourceError(source, "contains no image files")

    def _transfer(self, source: Path, destination: Path, mode: ImportMode) -> Path | None:
        """Copy or move ``source``; return the source when a move left it behind."""

        try:
            if mode is ImportMode.MOVE:
                self._filesystem.move_tree(source, destination)
            else:
                self._filesystem.copy_tree(source, destination)
        except SourceCleanupError as exc:
            self._logger.warning(
                "Moved %s to %s but could not delete the source: %s",
                source,
                destination,
                exc,
                extra={
                    "library_event": LibraryEvent.SOURCE_LEFTOVER,
                    "source_path": str(source),
                    "target_path": str(destination),
                    "error_message": str(exc),
                },
            )
            return source
        except OSError as exc:
            raise FilesystemError(
                f"Failed to {mode.value} {source} to {destination}: {exc}",
                path=destination,
            ) from exc
        return None


__all__ = ["ImportPipeline"]
