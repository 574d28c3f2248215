"""
Background Completion Handling
==============================
Runs blocking requests on a Qt thread pool and bridges their
``concurrent.futures.Future`` completions back onto the GUI thread.

Why is this file needed?
------------------------
1. Responsiveness: HTTP requests block, so they run as `QRunnable` workers on
   a `QThreadPool` instead of the GUI thread.
2. Thread safety: their futures complete on pool threads, but widgets may
   only be touched from the GUI thread.
3. Signals: a Qt signal with an auto connection runs the slot directly when
   emitted on the GUI thread and queues it otherwise.

Classes:
    RequestWorker: Runs one request and settles its Future.
    MainThreadDispatcher: Runs callables on the thread it lives in.
"""
from __future__ import annotations

import logging
from concurrent.futures import Future
from typing import Any, Callable, Optional

from PySide6.QtCore import QObject, QRunnable, Signal, Slot

logger = logging.getLogger(__name__)


class WorkerSignals(QObject):
    error_occurred = Signal(str, str)  # (request path, message)


class RequestWorker(QRunnable):
    """
    Runs `fn` on a pool thread and settles `future` with its outcome.

    A failure is signalled before the future settles, so a caller woken by
    the future finds the queued signal already posted.
    """

    def __init__(self, fn: Callable[[], Any], future: Future, path: str) -> None:
        super().__init__()
        self.fn = fn
        self.future = future
        self.path = path
        self.signals = WorkerSignals()

    def run(self) -> None:
        if not self.future.set_running_or_notify_cancel():
            return
        try:
            result = self.fn()
        except Exception as e:
            self.signals.error_occurred.emit(self.path, str(e))
            self.future.set_exception(e)
            return
        self.future.set_result(result)


class MainThreadDispatcher(QObject):
    _invoke = Signal(object)

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._invoke.connect(self._run)

    def call(self, fn: Callable[[], Any]) -> None:
        self._invoke.emit(fn)

    @Slot(object)
    def _run(self, fn: Callable[[], Any]) -> None:
        fn()

    def when_done(
        self,
        future: Future,
        on_result: Callable[[Any], Any],
        on_error: Optional[Callable[[BaseException], Any]] = None,
    ) -> None:
        """Calls `on_result` (or `on_error`) on the GUI thread once `future` settles."""
        def settle(f: Future) -> None:
            error = f.exception()
            if error is not None:
                if on_error is None:
                    logger.warning(f"Request failed: {error}")
                    return
                self.call(lambda: on_error(error))
                return
            result = f.result()
            self.call(lambda: on_result(result))

        future.add_done_callback(settle)
