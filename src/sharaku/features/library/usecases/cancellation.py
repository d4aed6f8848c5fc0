"""Cooperative cancellation shared between a caller and a worker thread."""

from __future__ import annotations

import threading

from ..domain.errors import OperationCancelledError


class CancellationToken:
    """Flag checked by use cases before each item and before the terminal event."""

    def __init__(self) -> None:
        self._event: threading.Event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def checkpoint(self, operation: str, partial: object = None) -> None:
        """Raise ``OperationCancelledError`` carrying ``partial`` when cancelled."""

        if self._event.is_set():
            raise OperationCancelledError(operation, partial)


__all__ = ["CancellationToken"]
