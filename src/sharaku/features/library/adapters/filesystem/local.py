"""Filesystem adapter for library use cases."""

from __future__ import annotations

import errno
import os
import shutil
from pathlib import Path

from sharaku.platform.filesystem import ensure_parent_directory, prune_empty_ancestors
from sharaku.platform.logging import logger

from ...usecases.ports import FileSystemGateway, SourceCleanupError


def _tree_manifest(root: Path) -> dict[str, int]:
    """Map every file below ``root`` (relative posix path) to its size."""

    manifest: dict[str, int] = {}
    for current, _dirs, files in os.walk(root):
        for name in files:
            file_path = Path(current) / name
            manifest[file_path.relative_to(root).as_posix()] = file_path.stat().st_size
    return manifest


class LocalFileSystemGateway(FileSystemGateway):
    """Thin wrapper around the local filesystem."""

    def exists(self, path: Path) -> bool:
        return path.exists()

    def is_dir(self, path: Path) -> bool:
        return path.is_dir() and not path.is_symlink()

    def is_file(self, path: Path) -> bool:
        return path.is_file()

    def list_directory(self, path: Path) -> list[Path]:
        return [entry for entry in path.iterdir()]

    def copy_tree(self, source: Path, destination: Path) -> None:
        if destination.exists():
            raise FileExistsError(errno.EEXIST, "Destination already exists", str(destination))
        _ = ensure_parent_directory(destination)
        try:
            _ = shutil.copytree(source, destination, symlinks=True)
            self._verify_copy(source, destination)
        except OSError:
            self._discard_partial(destination)
            raise

    def move_tree(self, source: Path, destination: Path) -> None:
        if destination.exists():
            raise FileExistsError(errno.EEXIST, "Destination already exists", str(destination))
        _ = ensure_parent_directory(destination)
        try:
            _ = source.rename(destination)
            return
        except OSError as exc:
            if exc.errno != errno.EXDEV:
                raise
            logger.debug("Cross-device move for %s; copying instead", source)

        self.copy_tree(source, destination)
        try:
            shutil.rmtree(source)
        except OSError as exc:
            raise SourceCleanupError(
                exc.errno, f"Copied to {destination} but could not remove the source: {exc}", str(source)
            ) from exc

    def prune_empty_ancestors(self, start: Path, stop: Path) -> None:
        removed = prune_empty_ancestors(start, stop)
        for directory in removed:
            logger.debug("Removed empty directory %s", directory)

    def _verify_copy(self, source: Path, destination: Path) -> None:
        if _tree_manifest(source) != _tree_manifest(destination):
            raise OSError(errno.EIO, f"Copy verification failed for {destination}")

    @staticmethod
    def _discard_partial(destination: Path) -> None:
        if destination.exists():
            shutil.rmtree(destination, ignore_errors=True)


__all__ = ["LocalFileSystemGateway"]
