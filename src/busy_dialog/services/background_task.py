"""Task handles observed by the busy dialog."""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Optional, Protocol, runtime_checkable

from PySide6.QtCore import QObject, QThread

from busy_dialog.models.busy_state import clamp_progress

logger = logging.getLogger(__name__)


@runtime_checkable
class TaskHandle(Protocol):
    """Minimal contract the dialog polls while it is visible."""

    def start(self) -> None:
        ...

    def is_finished(self) -> bool:
        ...

    def progress(self) -> int:
        ...

    def result(self) -> Any:
        ...


class TaskError(RuntimeError):
    """Base class for task result retrieval errors."""


class TaskNotFinishedError(TaskError):
    """Raised when a result is requested before the task has finished."""


class TaskFailedError(TaskError):
    """Raised by ``result()`` when the work callable raised an exception."""


class TaskContext:
    """Handle passed to the work callable for reporting progress."""

    def __init__(self, task: "BackgroundTask") -> None:
        self._task = task

    def set_progress(self, value: int) -> None:
        self._task._publish_progress(value)

    def is_cancelled(self) -> bool:
        return self._task.is_cancelled()


class BackgroundTask(QThread):
    """Runs a callable on a worker thread and exposes polling queries.

    The callable receives a :class:`TaskContext`. Exceptions raised by the
    callable do not escape the worker thread; they are kept and re-raised as
    :class:`TaskFailedError` from :meth:`result`.
    """

    def __init__(
        self,
        work: Callable[[TaskContext], Any],
        parent: Optional[QObject] = None,
        *,
        name: Optional[str] = None,
    ) -> None:
        super().__init__(parent)
        self._work = work
        self._name = name or getattr(work, "__name__", "task")
        self.setObjectName(self._name)
        self._lock = threading.Lock()
        self._progress = 0
        self._cancelled = False
        self._value: Any = None
        self._error: Optional[BaseException] = None

    @property
    def name(self) -> str:
        return self._name

    def run(self) -> None:
        logger.debug("Task %s started", self._name)
        try:
            value = self._work(TaskContext(self))
        except Exception as exc:
            logger.warning("Task %s failed: %s", self._name, exc, exc_info=True)
            with self._lock:
                self._error = exc
            return
        with self._lock:
            self._value = value
        logger.debug("Task %s completed", self._name)

    def is_finished(self) -> bool:
        return self.isFinished()

    def progress(self) -> int:
        with self._lock:
            return self._progress

    def cancel(self) -> None:
        """Ask the work callable to stop; it decides when to honour the request."""
        with self._lock:
            self._cancelled = True

    def is_cancelled(self) -> bool:
        with self._lock:
            return self._cancelled

    def error(self) -> Optional[BaseException]:
        with self._lock:
            return self._error

    def result(self) -> Any:
        if not self.isFinished():
            raise TaskNotFinishedError(f"Task '{self._name}' has not finished")
        with self._lock:
            error = self._error
            value = self._value
        if error is not None:
            raise TaskFailedError(f"Task '{self._name}' failed: {error}") from error
        return value

    def _publish_progress(self, value: int) -> None:
        with self._lock:
            self._progress = clamp_progress(value)


__all__ = [
    "BackgroundTask",
    "TaskContext",
    "TaskError",
    "TaskFailedError",
    "TaskHandle",
    "TaskNotFinishedError",
]
