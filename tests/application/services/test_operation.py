"""Tests for background operation handles."""

from __future__ import annotations

import threading
import time
from collections.abc import Callable
from pathlib import Path

import pytest

from sharaku.application.services.operation import OperationHandle, root_lock
from sharaku.features.library import CancellationToken, OperationCancelledError

Emit = Callable[[int], None]


def _handle(
    run: Callable[[Emit, CancellationToken], object],
    root: Path,
    *,
    queue_size: int = 16,
) -> OperationHandle[int, object]:
    return OperationHandle("test op", run, lock=root_lock(root), library_root=root, queue_size=queue_size)


def test_events_are_yielded_in_order_then_result(tmp_path: Path) -> None:
    def _run(emit: Emit, _token: CancellationToken) -> str:
        for value in (1, 2, 3):
            emit(value)
        return "done"

    handle = _handle(_run, tmp_path)

    assert list(handle) == [1, 2, 3]
    assert list(handle) == []
    assert handle.result() == "done"
    assert handle.done()


def test_result_drains_unconsumed_events(tmp_path: Path) -> None:
    def _run(emit: Emit, _token: CancellationToken) -> int:
        for value in range(50):
            emit(value)
        return 50

    handle = _handle(_run, tmp_path, queue_size=4)

    assert handle.result() == 50


def test_worker_exception_is_raised_by_result(tmp_path: Path) -> None:
    def _run(emit: Emit, _token: CancellationToken) -> None:
        emit(1)
        raise ValueError("boom")

    handle = _handle(_run, tmp_path)

    assert list(handle) == [1]
    with pytest.raises(ValueError, match="boom"):
        _ = handle.result()


def test_cancel_stops_at_next_checkpoint(tmp_path: Path) -> None:
    proceed = threading.Event()

    def _run(emit: Emit, token: CancellationToken) -> int:
        processed = 0
        for value in range(1, 6):
            token.checkpoint("test op", processed)
            emit(value)
            if value == 1:
                _ = proceed.wait(timeout=5)
            processed += 1
        return processed

    handle = _handle(_run, tmp_path)
    events = iter(handle)
    assert next(events) == 1

    handle.cancel()
    proceed.set()

    with pytest.raises(OperationCancelledError) as exc_info:
        _ = handle.result()
    assert exc_info.value.partial == 1
    assert handle.cancelled


def test_queue_applies_backpressure(tmp_path: Path) -> None:
    emitted: list[int] = []

    def _run(emit: Emit, _token: CancellationToken) -> None:
        for value in range(5):
            emit(value)
            emitted.append(value)

    handle = _handle(_run, tmp_path, queue_size=1)
    time.sleep(0.1)

    assert len(emitted) <= 1
    assert list(handle) == [0, 1, 2, 3, 4]
    _ = handle.result()
    assert emitted == [0, 1, 2, 3, 4]


def test_operations_on_same_root_are_serialized(tmp_path: Path) -> None:
    release_first = threading.Event()
    second_started = threading.Event()

    def _first(_emit: Emit, _token: CancellationToken) -> str:
        _ = release_first.wait(timeout=5)
        return "first"

    def _second(_emit: Emit, _token: CancellationToken) -> str:
        second_started.set()
        return "second"

    first = _handle(_first, tmp_path)
    time.sleep(0.05)
    second = _handle(_second, tmp_path)

    assert not second_started.wait(timeout=0.2)
    release_first.set()

    assert first.result() == "first"
    assert second.result() == "second"
    assert second_started.is_set()


def test_operations_on_different_roots_run_concurrently(tmp_path: Path) -> None:
    release_first = threading.Event()
    second_started = threading.Event()

    def _first(_emit: Emit, _token: CancellationToken) -> None:
        _ = release_first.wait(timeout=5)

    def _second(_emit: Emit, _token: CancellationToken) -> None:
        second_started.set()

    first = _handle(_first, tmp_path / "one")
    second = _handle(_second, tmp_path / "two")

    assert second_started.wait(timeout=5)
    release_first.set()
    _ = first.result()
    _ = second.result()


def test_root_lock_is_shared_for_equivalent_paths(tmp_path: Path) -> None:
    assert root_lock(tmp_path) is root_lock(tmp_path / "sub" / "..")
    assert root_lock(tmp_path / "a") is not root_lock(tmp_path / "b")
