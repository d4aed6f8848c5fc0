"""Progress event unions streamed by long-running library operations.

Where: features/library/domain/progress.py
What: Frozen dataclasses tagged by ``kind``, grouped into one union per operation.
Why: Callers match on the concrete class; ``terminal`` marks the last event of a stream.

Every stream starts with a ``started`` event and ends with exactly one terminal
event. ``current`` never decreases and never exceeds ``total``.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import ClassVar


# Discovery ------------------------------------------------------------------


@dataclass(slots=True, frozen=True)
class DiscoverStarted:
    """Start of a walk; ``total`` stays ``None`` because the tree size is unknown."""

    kind: ClassVar[str] = "started"
    terminal: ClassVar[bool] = False

    root: Path
    total: int | None = None


@dataclass(slots=True, frozen=True)
class DiscoverScanning:
    kind: ClassVar[str] = "scanning"
    terminal: ClassVar[bool] = False

    scanned_dirs: int


@dataclass(slots=True, frozen=True)
class DiscoverCompleted:
    kind: ClassVar[str] = "completed"
    terminal: ClassVar[bool] = True

    found: int


DiscoverProgress = DiscoverStarted | DiscoverScanning | DiscoverCompleted


# Bulk import ----------------------------------------------------------------


@dataclass(slots=True, frozen=True)
class BulkImportStarted:
    kind: ClassVar[str] = "started"
    terminal: ClassVar[bool] = False

    total: int


@dataclass(slots=True, frozen=True)
class BulkImportImporting:
    kind: ClassVar[str] = "importing"
    terminal: ClassVar[bool] = False

    current: int
    total: int
    title: str


@dataclass(slots=True, frozen=True)
class BulkImportCompleted:
    kind: ClassVar[str] = "completed"
    terminal: ClassVar[bool] = True

    succeeded: int
    failed: int


BulkImportProgress = BulkImportStarted | BulkImportImporting | BulkImportCompleted


# Relocation -----------------------------------------------------------------


@dataclass(slots=True, frozen=True)
class RelocationStarted:
    kind: ClassVar[str] = "started"
    terminal: ClassVar[bool] = False

    total: int


@dataclass(slots=True, frozen=True)
class RelocationMoving:
    kind: ClassVar[str] = "moving"
    terminal: ClassVar[bool] = False

    current: int
    total: int
    title: str


@dataclass(slots=True, frozen=True)
class RelocationCompleted:
    kind: ClassVar[str] = "completed"
    terminal: ClassVar[bool] = True

    relocated: int
    skipped: int
    failed: int


@dataclass(slots=True, frozen=True)
class RelocationAborted:
    """Relocation could not begin (e.g. invalid template)."""

    kind: ClassVar[str] = "error"
    terminal: ClassVar[bool] = True

    message: str


RelocationProgress = RelocationStarted | RelocationMoving | RelocationCompleted | RelocationAborted


# Rescan ---------------------------------------------------------------------


@dataclass(slots=True, frozen=True)
class ScanStarted:
    kind: ClassVar[str] = "started"
    terminal: ClassVar[bool] = False

    total: int


@dataclass(slots=True, frozen=True)
class ScanProcessing:
    kind: ClassVar[str] = "processing"
    terminal: ClassVar[bool] = False

    current: int
    total: int
    file_name: str


@dataclass(slots=True, frozen=True)
class ScanCompleted:
    kind: ClassVar[str] = "completed"
    terminal: ClassVar[bool] = True

    registered: int
    failed: int
    flagged: int


ScanProgress = ScanStarted | ScanProcessing | ScanCompleted


ProgressEvent = DiscoverProgress | BulkImportProgress | RelocationProgress | ScanProgress


__all__ = [
    "BulkImportCompleted",
    "BulkImportImporting",
    "BulkImportProgress",
    "BulkImportStarted",
    "DiscoverCompleted",
    "DiscoverProgress",
    "DiscoverScanning",
    "DiscoverStarted",
    "ProgressEvent",
    "RelocationAborted",
    "RelocationCompleted",
    "RelocationMoving",
    "RelocationProgress",
    "RelocationStarted",
    "ScanCompleted",
    "ScanProcessing",
    "ScanProgress",
    "ScanStarted",
]
