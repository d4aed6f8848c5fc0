"""Data structures exchanged by the library synchronization use cases."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Final

from sharaku.features.metadata import ParsedMetadata
from sharaku.shared import WorkMetadata


class ImportMode(str, Enum):
    """How an import materializes the source directory."""

    COPY = "copy"
    MOVE = "move"

    @staticmethod
    def from_user_input(value: str) -> ImportMode:
        """Translate raw CLI input into the matching mode."""

        normalized = value.strip().lower()
        for mode in ImportMode:
            if mode.value == normalized:
                return mode
        valid: Final[str] = ", ".join(m.value for m in ImportMode)
        msg = f"Unsupported import mode '{value}'. Valid options: {valid}"
        raise ValueError(msg)


@dataclass(slots=True, frozen=True)
class DiscoveredFolder:
    """A directory that looks like an importable work."""

    path: Path
    folder_name: str
    image_count: int
    parsed_metadata: ParsedMetadata
    already_registered: bool

    def to_import_request(self, mode: ImportMode = ImportMode.COPY) -> ImportRequest:
        """Build an import request from the parsed name guess."""

        return ImportRequest(
            source=self.path,
            metadata=WorkMetadata(
                title=self.parsed_metadata.title,
                artist=self.parsed_metadata.artist,
            ),
            mode=mode,
        )


@dataclass(slots=True, frozen=True)
class ImportRequest:
    """One explicit import: source directory, full metadata and mode."""

    source: Path
    metadata: WorkMetadata
    mode: ImportMode = ImportMode.COPY


@dataclass(slots=True, frozen=True)
class ImportResult:
    """Outcome of a successful import.

    ``leftover_source`` is set when a move completed but the source could not be deleted.
    """

    destination_path: Path
    page_count: int
    work_id: int
    leftover_source: Path | None = None


@dataclass(slots=True, frozen=True)
class ImportFailure:
    """A batch item that did not import."""

    request: ImportRequest
    message: str


@dataclass(slots=True)
class BulkImportSummary:
    """Aggregate result of a bulk import."""

    succeeded: int = 0
    failed: int = 0
    results: list[ImportResult] = field(default_factory=list)
    failures: list[ImportFailure] = field(default_factory=list)


@dataclass(slots=True, frozen=True)
class RelocationPreview:
    """Planned move of one work."""

    work_id: int
    title: str
    old_path: Path
    new_path: Path

    @property
    def is_noop(self) -> bool:
        return self.old_path == self.new_path


@dataclass(slots=True, frozen=True)
class RelocationFailure:
    """A relocation item that was not completed."""

    work_id: int
    old_path: Path
    new_path: Path
    message: str
    moved_on_disk: bool = False


@dataclass(slots=True)
class RelocationSummary:
    """Aggregate result of a relocation commit."""

    template: str | None = None
    relocated: int = 0
    skipped: int = 0
    failed: int = 0
    failures: list[RelocationFailure] = field(default_factory=list)
    leftover_sources: list[Path] = field(default_factory=list)


@dataclass(slots=True, frozen=True)
class FlaggedWork:
    """A catalog entry whose directory needs attention."""

    work_id: int
    path: Path
    reason: str


@dataclass(slots=True)
class RescanSummary:
    """Aggregate result of a library rescan."""

    registered: int = 0
    failed: int = 0
    flagged: list[FlaggedWork] = field(default_factory=list)
    registered_paths: list[Path] = field(default_factory=list)


__all__ = [
    "BulkImportSummary",
    "DiscoveredFolder",
    "FlaggedWork",
    "ImportFailure",
    "ImportMode",
    "ImportRequest",
    "ImportResult",
    "RelocationFailure",
    "RelocationPreview",
    "RelocationSummary",
    "RescanSummary",
]
