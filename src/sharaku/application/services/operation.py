"""Background execution of long-running library operations.

Where: src/sharaku/application/services/operation.py
What: Run a use case on its own worker thread and stream its progress events to the caller.
Why: Callers consume progress independently while a bounded queue applies backpressure.

Operations against the same library root are serialized by a root-scoped lock
acquired on the worker thread. Iterating a handle yields every event exactly
once, in emission order; ``result()`` drains whatever was not consumed and
returns (or raises) the use case outcome.
"""

from __future__ import annotations

import queue
import threading
from collections.abc import Callable, Iterator
from concurrent.futures import Future, ThreadPoolExecutor
from logging import Logger, getLogger
from pathlib import Path
from typing import Final, Generic, TypeVar, final

from sharaku.config.settings import EVENT_QUEUE_SIZE
from sharaku.features.library import CancellationToken, LibraryEvent, OperationCancelledError

E = TypeVar("E")
R = TypeVar("R")

_registry_lock: Final[threading.Lock] = threading.Lock()
_root_locks: dict[Path, threading.Lock] = {}


def root_lock(library_root: Path) -> threading.Lock:
    """Return the process-wide exclusivity lock for ``library_root``."""

    key = library_root.expanduser().resolve()
    with _registry_lock:
        lock = _root_locks.get(key)
        if lock is None:
            lock = threading.Lock()
            _root_locks[key] = lock
        return lock


class _EndOfStream:
    pass


_END: Final[_EndOfStream] = _EndOfStream()


@final
class OperationHandle(Generic[E, R]):
    """Caller-side view of one running operation."""

    def __init__(
        self,
        name: str,
        run: Callable[[Callable[[E], None], CancellationToken], R],
        *,
        lock: threading.Lock,
        library_root: Path,
        queue_size: int = EVENT_QUEUE_SIZE,
        logger: Logger | None = None,
    ) -> None:
        self.name: str = name
        self._run: Callable[[Callable[[E], None], CancellationToken], R] = run
        self._lock: threading.Lock = lock
        self._library_root: Path = library_root
        self._events: queue.Queue[E | _EndOfStream] = queue.Queue(maxsize=queue_size)
        self._token: CancellationToken = CancellationToken()
        self._logger: Logger = logger or getLogger(__name__)
        self._drained: bool = False
        self._executor: ThreadPoolExecutor = ThreadPoolExecutor(
            max_workers=1, thread_name_prefix=f"sharaku-{name}"
        )
        self._future: Future[R] = self._executor.submit(self._worker)
        self._executor.shutdown(wait=False)

    def _worker(self) -> R:
        try:
            with self._lock:
                self._logger.debug(
                    "%s started",
                    self.name,
                    extra={
                        "library_event": LibraryEvent.OPERATION_START,
                        "operation": self.name,
                        "library_root": str(self._library_root),
                    },
                )
                outcome = self._run(self._events.put, self._token)
            self._logger.debug(
                "%s complete",
                self.name,
                extra={"library_event": LibraryEvent.OPERATION_COMPLETE, "operation": self.name},
            )
            return outcome
        except OperationCancelledError:
            self._logger.warning(
                "%s cancelled",
                self.name,
                extra={"library_event": LibraryEvent.OPERATION_CANCELLED, "operation": self.name},
            )
            raise
        except Exception as exc:
            self._logger.error(
                "%s failed: %s",
                self.name,
                exc,
                extra={
                    "library_event": LibraryEvent.OPERATION_ERROR,
                    "operation": self.name,
                    "error_message": str(exc),
                },
            )
            raise
        finally:
            self._events.put(_END)

    def __iter__(self) -> Iterator[E]:
        """Yield events until the stream ends; later iterations yield nothing."""

        while not self._drained:
            item = self._events.get()
            if isinstance(item, _EndOfStream):
                self._drained = True
                return
            yield item

    def cancel(self) -> None:
        """Request cooperative cancellation; the current item finishes first."""

        self._token.cancel()

    @property
    def cancelled(self) -> bool:
        return self._token.cancelled

    def done(self) -> bool:
        return self._future.done()

    def result(self) -> R:
        """Drain unconsumed events and return the outcome.

        Raises:
            OperationCancelledError: The operation stopped at a checkpoint.
            Exception: Whatever the use case raised.
        """
        for _ in self:
            pass
        return self._future.result()


__all__ = ["OperationHandle", "root_lock"]
