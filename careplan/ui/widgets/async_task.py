from __future__ import annotations

import asyncio
from collections.abc import Callable, Coroutine
from typing import Any

from PySide6.QtCore import QObject, QRunnable, QThreadPool, Signal


class TaskSignals(QObject):
    success = Signal(object)
    error = Signal(Exception)
    finished = Signal()


class AsyncTask(QRunnable):
    """Pool job whose signals are owned by the caller's widget.

    Parenting the signals keeps queued results deliverable after the pool
    has dropped the runnable.
    """

    def __init__(self, fn: Callable[[], Any], parent: QObject | None = None) -> None:
        super().__init__()
        self.fn = fn
        self.signals = TaskSignals(parent)
        self.signals.finished.connect(self.signals.deleteLater)

    def run(self) -> None:
        try:
            result = self.fn()
        except Exception as exc:  # noqa: BLE001
            self.signals.error.emit(exc)
        else:
            self.signals.success.emit(result)
        finally:
            self.signals.finished.emit()


def run_async(
    parent: QObject,
    fn: Callable[[], Any],
    on_success: Callable[[Any], None] | None = None,
    on_error: Callable[[Exception], None] | None = None,
    on_finished: Callable[[], None] | None = None,
) -> AsyncTask:
    task = AsyncTask(fn, parent)
    if on_success:
        task.signals.success.connect(on_success)
    if on_error:
        task.signals.error.connect(on_error)
    if on_finished:
        task.signals.finished.connect(on_finished)
    QThreadPool.globalInstance().start(task)
    return task


def run_coroutine(
    parent: QObject,
    coro_factory: Callable[[], Coroutine[Any, Any, Any]],
    on_success: Callable[[Any], None] | None = None,
    on_error: Callable[[Exception], None] | None = None,
    on_finished: Callable[[], None] | None = None,
) -> AsyncTask:
    """Run one coroutine to completion on a pool thread with its own event loop."""
    return run_async(
        parent,
        lambda: asyncio.run(coro_factory()),
        on_success=on_success,
        on_error=on_error,
        on_finished=on_finished,
    )
