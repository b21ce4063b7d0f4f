from __future__ import annotations

from collections.abc import Callable
from typing import Any

from PySide6.QtCore import QObject, QRunnable, QThreadPool, Signal

SuccessFn = Callable[[Any], None]
ErrorFn = Callable[[Exception], None]
# (fn, on_success, on_error): controllers take one of these so tests can
# swap the thread pool for a synchronous or manually-resolved runner.
TaskRunner = Callable[[Callable[[], Any], SuccessFn, ErrorFn], None]


class TaskSignals(QObject):
    success = Signal(object)
    error = Signal(Exception)
    finished = Signal()


class AsyncTask(QRunnable):
    def __init__(self, fn: Callable[[], Any]) -> None:
        super().__init__()
        self.fn = fn
        self.signals = TaskSignals()

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
    on_success: SuccessFn | None = None,
    on_error: ErrorFn | None = None,
    on_finished: Callable[[], None] | None = None,
) -> AsyncTask:
    task = AsyncTask(fn)
    if on_success:
        task.signals.success.connect(on_success)
    if on_error:
        task.signals.error.connect(on_error)
    if on_finished:
        task.signals.finished.connect(on_finished)
    QThreadPool.globalInstance().start(task)
    return task


def thread_pool_runner(parent: QObject) -> TaskRunner:
    def _run(fn: Callable[[], Any], on_success: SuccessFn, on_error: ErrorFn) -> None:
        run_async(parent, fn, on_success=on_success, on_error=on_error)

    return _run
