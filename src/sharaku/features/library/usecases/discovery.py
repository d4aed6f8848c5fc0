"""Discovery of importable work directories.

Where: src/sharaku/features/library/usecases/discovery.py
What: Walk a root, yield directories that directly hold images, classify them against the catalog.
Why: Feed bulk import and rescan with candidates while reporting liveness per directory.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass
from logging import Logger, getLogger
from pathlib import Path

from sharaku.features.catalog import CatalogStorePort
from sharaku.features.metadata import parse_folder_name

from ..domain.errors import OperationCancelledError
from ..domain.models import DiscoveredFolder
from ..domain.progress import DiscoverCompleted, DiscoverProgress, DiscoverScanning, DiscoverStarted
from .cancellation import CancellationToken
from .image_files import is_image_name, is_reserved_directory
from .ports import FileSystemGateway


@dataclass(slots=True, frozen=True)
class CandidateDirectory:
    """A visited directory with at least one direct image child."""

    path: Path
    image_count: int


def walk_candidates(
    filesystem: FileSystemGateway,
    root: Path,
    *,
    exclude: Path | None,
    token: CancellationToken,
    on_scanned: Callable[[int], None],
    logger: Logger,
) -> Iterator[CandidateDirectory]:
    """Depth-first walk in name order yielding candidate directories.

    ``exclude`` and everything below it are neither candidates nor descended into.
    Unreadable directories are logged and skipped without counting as scanned.
    ``on_scanned`` receives the running number of directories read.
    """
    scanned = 0
    stack: list[Path] = [root]
    while stack:
        token.checkpoint("discovery")
        directory = stack.pop()
        try:
            entries = filesystem.list_directory(directory)
        except OSError as exc:
            logger.warning("Skipping unreadable directory %s: %s", directory, exc)
            continue

        scanned += 1
        on_scanned(scanned)

        subdirectories: list[Path] = []
        image_count = 0
        for entry in entries:
            if filesystem.is_dir(entry):
                if is_reserved_directory(entry):
                    continue
                if exclude is not None and entry.is_relative_to(exclude):
                    continue
                subdirectories.append(entry)
            elif is_image_name(entry) and filesystem.is_file(entry):
                image_count += 1

        if image_count > 0:
            yield CandidateDirectory(path=directory, image_count=image_count)

        stack.extend(sorted(subdirectories, key=lambda p: p.name, reverse=True))


class DiscoveryScanner:
    """Find candidate work directories below a root."""

    _filesystem: FileSystemGateway
    _catalog: CatalogStorePort
    _logger: Logger

    def __init__(
        self,
        *,
        filesystem: FileSystemGateway,
        catalog: CatalogStorePort,
        logger: Logger | None = None,
    ) -> None:
        self._filesystem = filesystem
        self._catalog = catalog
        self._logger = logger or getLogger(__name__)

    def scan(
        self,
        root: Path,
        *,
        library_root: Path,
        emit: Callable[[DiscoverProgress], None],
        token: CancellationToken,
        include_library_root: bool = False,
    ) -> list[DiscoveredFolder]:
        """Walk ``root`` and return discovered folders in walk order.

        The managed subtree is skipped unless ``include_library_root`` is set;
        the library root itself is never a candidate.
        """
        registered = {work.path for work in self._catalog.list_works()}
        exclude = None if include_library_root else library_root

        found: list[DiscoveredFolder] = []
        emit(DiscoverStarted(root=root))

        if exclude is not None and root.is_relative_to(exclude):
            self._logger.warning("Root %s lies inside the library root; nothing to discover", root)
        else:
            candidates = walk_candidates(
                self._filesystem,
                root,
                exclude=exclude,
                token=token,
                on_scanned=lambda count: emit(DiscoverScanning(scanned_dirs=count)),
                logger=self._logger,
            )
            try:
                for candidate in candidates:
                    if candidate.path == library_root:
                        continue
                    found.append(
                        DiscoveredFolder(
                            path=candidate.path,
                            folder_name=candidate.path.name,
                            image_count=candidate.image_count,
                            parsed_metadata=parse_folder_name(candidate.path.name),
                            already_registered=candidate.path in registered,
                        )
                    )
            except OperationCancelledError as exc:
                raise OperationCancelledError(exc.operation, found) from None

        token.checkpoint("discovery", found)
        emit(DiscoverCompleted(found=len(found)))
        self._logger.info(
            "Discovered %d candidate folder(s) under %s (%d new)",
            len(found),
            root,
            sum(1 for folder in found if not folder.already_registered),
        )
        return found


__all__ = ["CandidateDirectory", "DiscoveryScanner", "walk_candidates"]
