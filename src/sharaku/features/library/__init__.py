"""Library synchronization feature public API."""

from __future__ import annotations

from .adapters.filesystem.local import LocalFileSystemGateway
from .domain.errors import (
    ConfigurationError,
    DestinationExistsError,
    FilesystemError,
    InvalidSourceError,
    LibraryError,
    OperationCancelledError,
    PartialCommitError,
)
from .domain.models import (
    BulkImportSummary,
    DiscoveredFolder,
    FlaggedWork,
    ImportFailure,
    ImportMode,
    ImportRequest,
    ImportResult,
    RelocationFailure,
    RelocationPreview,
    RelocationSummary,
    RescanSummary,
)
from .usecases.bulk_import import BulkImportOrchestrator
from .usecases.cancellation import CancellationToken
from .usecases.discovery import DiscoveryScanner
from .usecases.importer import ImportPipeline
from .usecases.log_events import LibraryEvent
from .usecases.ports import FileSystemGateway, SettingsPort, SourceCleanupError
from .usecases.relocation import RelocationEngine
from .usecases.rescan import LibraryRescanner

__all__ = [
    "BulkImportOrchestrator",
    "BulkImportSummary",
    "CancellationToken",
    "ConfigurationError",
    "DestinationExistsError",
    "DiscoveredFolder",
    "DiscoveryScanner",
    "FileSystemGateway",
    "FilesystemError",
    "FlaggedWork",
    "ImportFailure",
    "ImportMode",
    "ImportPipeline",
    "ImportRequest",
    "ImportResult",
    "InvalidSourceError",
    "LibraryError",
    "LibraryEvent",
    "LibraryRescanner",
    "LocalFileSystemGateway",
    "OperationCancelledError",
    "PartialCommitError",
    "RelocationEngine",
    "RelocationFailure",
    "RelocationPreview",
    "RelocationSummary",
    "RescanSummary",
    "SettingsPort",
    "SourceCleanupError",
]
