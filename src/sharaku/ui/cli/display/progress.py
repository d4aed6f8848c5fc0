"""Progress display functionality for CLI."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any, Protocol, TypeVar, final, runtime_checkable

from rich.console import Console
from rich.progress import Progress, TaskID

from sharaku.platform.logging import LibraryRichHandler, logger

R_co = TypeVar("R_co", covariant=True)


@runtime_checkable
class OperationLike(Protocol[R_co]):
    """Protocol for running operations that stream progress events."""

    def __iter__(self) -> Iterator[object]: ...

    def cancel(self) -> None: ...

    def result(self) -> R_co: ...


def progress_console() -> Console | None:
    """Console shared with the Rich log handler, when one is installed."""

    for handler in logger.handlers:
        if isinstance(handler, LibraryRichHandler):
            return handler.console
    return None


@final
class ProgressDisplay:
    """Handles progress display in CLI."""

    def run(self, handle: OperationLike[R_co], description: str, *, quiet: bool = False) -> R_co:
        """Consume the events of ``handle`` behind a progress bar.

        Ctrl+C requests cancellation; the operation stops after its current
        item and ``result()`` raises ``OperationCancelledError``.

        Args:
            handle: Running operation.
            description: Label shown next to the bar.
            quiet: Consume events without rendering anything.

        Returns:
            The operation result.
        """
        if quiet:
            return self._drain(handle)

        progress_kwargs: dict[str, Any] = {
            "transient": True,
            "redirect_stdout": False,
            "redirect_stderr": False,
        }
        console = progress_console()
        if console is not None:
            progress_kwargs["console"] = console

        with Progress(**progress_kwargs) as progress:
            task_id: TaskID = progress.add_task(f"[cyan]{description}...", total=None)
            try:
                for event in handle:
                    self._apply(progress, task_id, description, event)
            except KeyboardInterrupt:
                logger.warning("Cancelling %s after the current item...", description.lower())
                handle.cancel()

        return handle.result()

    @staticmethod
    def _drain(handle: OperationLike[R_co]) -> R_co:
        try:
            for _ in handle:
                pass
        except KeyboardInterrupt:
            handle.cancel()
        return handle.result()

    @staticmethod
    def _apply(progress: Progress, task_id: TaskID, description: str, event: object) -> None:
        current = getattr(event, "current", None)
        total = getattr(event, "total", None)
        scanned = getattr(event, "scanned_dirs", None)

        if current is not None and total is not None:
            label = getattr(event, "title", None) or getattr(event, "file_name", "")
            _ = progress.update(
                task_id,
                total=total,
                completed=current,
                description=f"[cyan]{description}... {current}/{total} [white]{label}",
            )
        elif total is not None:
            _ = progress.update(task_id, total=total, completed=0)
        elif scanned is not None:
            _ = progress.update(
                task_id,
                description=f"[cyan]{description}... {scanned} directories scanned",
            )
