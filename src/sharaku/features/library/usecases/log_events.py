"""src/sharaku/features/library/usecases/log_events.py
What: Structured event identifiers for library synchronization logs.
Why: Let the Rich console handler style records without parsing messages.
"""

from __future__ import annotations

from enum import StrEnum


class LibraryEvent(StrEnum):
    """Values attached to log records as ``extra={"library_event": ...}``."""

    OPERATION_START = "library.operation.start"
    OPERATION_COMPLETE = "library.operation.complete"
    OPERATION_CANCELLED = "library.operation.cancelled"
    OPERATION_ERROR = "library.operation.error"
    IMPORT_START = "library.import.start"
    IMPORT_SUCCESS = "library.import.success"
    IMPORT_ERROR = "library.import.error"
    RELOCATE_MOVE = "library.relocate.move"
    RELOCATE_SKIP = "library.relocate.skip"
    RELOCATE_ERROR = "library.relocate.error"
    RESCAN_ORPHAN = "library.rescan.orphan"
    RESCAN_MISSING = "library.rescan.missing"
    PARTIAL_COMMIT = "library.partial_commit"
    SOURCE_LEFTOVER = "library.source.leftover"


__all__ = ["LibraryEvent"]
