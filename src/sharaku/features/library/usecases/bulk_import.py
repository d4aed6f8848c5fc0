"""Sequential batch import with aggregate progress."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from logging import Logger, getLogger

from ..domain.models import BulkImportSummary, ImportFailure, ImportRequest
from ..domain.progress import (
    BulkImportCompleted,
    BulkImportImporting,
    BulkImportProgress,
    BulkImportStarted,
)
from .cancellation import CancellationToken
from .importer import ImportPipeline
from .log_events import LibraryEvent


class BulkImportOrchestrator:
    """Drive ``ImportPipeline`` over a batch; item failures are counted, never escalated."""

    _pipeline: ImportPipeline
    _logger: Logger

    def __init__(self, *, pipeline: ImportPipeline, logger: Logger | None = None) -> None:
        self._pipeline = pipeline
        self._logger = logger or getLogger(__name__)

    def run(
        self,
        requests: Sequence[ImportRequest],
        *,
        emit: Callable[[BulkImportProgress], None],
        token: CancellationToken,
    ) -> BulkImportSummary:
        summary = BulkImportSummary()
        total = len(requests)
        emit(BulkImportStarted(total=total))

        for index, request in enumerate(requests, start=1):
            token.checkpoint("bulk import", summary)
            emit(BulkImportImporting(current=index, total=total, title=request.metadata.title))
            try:
                result = self._pipeline.import_one(request)
            except Exception as exc:
                message = str(exc) or exc.__class__.__name__
                self._logger.error(
                    "Import failed for %s: %s",
                    request.source,
                    message,
                    extra={
                        "library_event": LibraryEvent.IMPORT_ERROR,
                        "source_path": str(request.source),
                        "current": index,
                        "total": total,
                        "error_message": message,
                    },
                )
                summary.failed += 1
                summary.failures.append(ImportFailure(request=request, message=message))
                continue
            summary.succeeded += 1
            summary.results.append(result)

        token.checkpoint("bulk import", summary)
        emit(BulkImportCompleted(succeeded=summary.succeeded, failed=summary.failed))
        return summary


__all__ = ["BulkImportOrchestrator"]
