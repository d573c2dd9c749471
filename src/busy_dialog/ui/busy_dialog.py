"""Modal dialog that tracks a background task until it finishes."""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from PySide6.QtCore import QTimer, Qt, Signal
from PySide6.QtGui import QCloseEvent, QPixmap
from PySide6.QtWidgets import (
    QDialog,
    QHBoxLayout,
    QLabel,
    QProgressBar,
    QVBoxLayout,
    QWidget,
)

from busy_dialog.constants import (
    CONTENT_MARGIN,
    DEFAULT_MESSAGE,
    PROGRESS_MAXIMUM,
    TICK_INTERVAL_MS,
)
from busy_dialog.models.busy_state import BusyState, Phase, advance
from busy_dialog.services.background_task import TaskHandle

logger = logging.getLogger(__name__)


class BusyDialogError(RuntimeError):
    """Raised when the dialog is driven out of order."""


class NoTaskAttachedError(BusyDialogError):
    """Raised when the dialog is started before a task was attached."""


class BusyDialog(QDialog):
    """Message, optional animated icon and optional progress bar for a running task.

    Usage:

    * build the task handle and the dialog,
    * ``attach_task(task)``,
    * ``start()`` shows the dialog and returns once a timer tick observes the
      task as finished (or use ``start_async()`` and listen to ``taskFinished``),
    * read the outcome from the task, e.g. ``task.result()``.

    The dialog never cancels or times out the task. A task that never finishes
    keeps the dialog open.
    """

    taskFinished = Signal(object)

    def __init__(
        self,
        parent: Optional[QWidget],
        title: str,
        progress_enabled: bool = False,
        icon_frames: Optional[Sequence[QPixmap]] = None,
        *,
        message: str = DEFAULT_MESSAGE,
        tick_interval: int = TICK_INTERVAL_MS,
    ) -> None:
        super().__init__(parent)
        self.setWindowTitle(title)
        self.setModal(True)
        self.setWindowFlag(Qt.WindowType.WindowContextHelpButtonHint, False)
        self.setWindowFlag(Qt.WindowType.WindowCloseButtonHint, False)

        self._frames: tuple[QPixmap, ...] = tuple(icon_frames or ())
        self._task: Optional[TaskHandle] = None
        self._timer: Optional[QTimer] = None
        self._tick_interval = tick_interval
        self._state = BusyState.initial(len(self._frames), progress_enabled)

        self._icon_label = QLabel(self)
        self._icon_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        if self._frames:
            self._icon_label.setPixmap(self._frames[0])
        else:
            self._icon_label.hide()

        self._message_label = QLabel(message, self)

        message_row = QHBoxLayout()
        message_row.setSpacing(CONTENT_MARGIN)
        message_row.addWidget(self._icon_label)
        message_row.addWidget(self._message_label, stretch=1)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(CONTENT_MARGIN, CONTENT_MARGIN, CONTENT_MARGIN, CONTENT_MARGIN)
        layout.addLayout(message_row)

        self._progress_bar: Optional[QProgressBar] = None
        if progress_enabled:
            self._progress_bar = QProgressBar(self)
            self._progress_bar.setOrientation(Qt.Orientation.Horizontal)
            self._progress_bar.setContentsMargins(CONTENT_MARGIN, CONTENT_MARGIN, CONTENT_MARGIN, CONTENT_MARGIN)
            layout.addWidget(self._progress_bar)
            self._render_progress()

        self.adjustSize()

    # Public API --------------------------------------------------------

    def attach_task(self, task: TaskHandle) -> None:
        """Assign the task to monitor. Must happen before ``start()``."""
        self._task = task

    def task(self) -> Optional[TaskHandle]:
        return self._task

    def start(self) -> None:
        """Start the task and block in the modal loop until it has finished."""
        self._begin()
        self.exec()

    def start_async(self) -> None:
        """Start the task, show the dialog and return immediately.

        Completion is reported through ``taskFinished`` once the dialog hides.
        """
        self._begin()
        self.show()

    def set_message(self, text: str) -> None:
        self._message_label.setText(text)
        self.adjustSize()

    def message(self) -> str:
        return self._message_label.text()

    def set_icon(self, frame: QPixmap) -> None:
        """Replace the displayed icon without touching the animation counter."""
        self._icon_label.setPixmap(frame)
        self._icon_label.show()
        self.adjustSize()

    def set_progress(self, value: int) -> None:
        """Show ``value`` percent, or an indeterminate bar when ``value`` is 0."""
        if self._progress_bar is None:
            return
        self._state = self._state.with_progress(value)
        self._render_progress()

    def state(self) -> BusyState:
        return self._state

    def current_frame_index(self) -> int:
        return self._state.frame_index

    def is_running(self) -> bool:
        return self._timer is not None and self._timer.isActive()

    def is_progress_enabled(self) -> bool:
        return self._progress_bar is not None

    def is_indeterminate(self) -> bool:
        return self._progress_bar is not None and self._progress_bar.maximum() == 0

    def progress_value(self) -> Optional[int]:
        """Displayed percentage, or ``None`` when no number is shown."""
        if self._progress_bar is None or self.is_indeterminate():
            return None
        return self._progress_bar.value()

    # Qt overrides ------------------------------------------------------

    def reject(self) -> None:
        # Escape must not dismiss the dialog while the task is still running.
        if self._state.phase is Phase.RUNNING:
            return
        super().reject()

    def closeEvent(self, event: QCloseEvent) -> None:
        if self._state.phase is Phase.RUNNING:
            event.ignore()
            return
        super().closeEvent(event)

    # Internal API ------------------------------------------------------

    def _begin(self) -> None:
        if self._task is None:
            raise NoTaskAttachedError("attach_task() must be called before start()")
        if self._state.phase is Phase.RUNNING:
            raise BusyDialogError("Dialog is already running a task")

        self._timer = QTimer(self)
        self._timer.setInterval(self._tick_interval)
        self._timer.timeout.connect(self._on_tick)
        self._task.start()
        self._timer.start()
        self._state = self._state.running()
        logger.debug("Busy dialog '%s' started (tick %d ms)", self.windowTitle(), self._tick_interval)

    def _on_tick(self) -> None:
        task = self._task
        if task is None or self._state.phase is not Phase.RUNNING:
            return

        finished = task.is_finished()
        progress = task.progress() if self._state.progress_enabled and not finished else 0
        self._state = advance(self._state, finished=finished, progress=progress)

        if self._state.phase is Phase.FINISHED:
            self._stop_timer()
            self.accept()
            logger.debug("Busy dialog '%s' finished", self.windowTitle())
            self.taskFinished.emit(task)
            return

        if not self.isVisible():
            self.show()
        if self._state.animated:
            self._icon_label.setPixmap(self._frames[self._state.frame_index])
        if self._progress_bar is not None:
            self._render_progress()
        self.adjustSize()

    def _render_progress(self) -> None:
        bar = self._progress_bar
        if bar is None:
            return
        if self._state.indeterminate:
            bar.setRange(0, 0)
            bar.setTextVisible(False)
        else:
            bar.setRange(0, PROGRESS_MAXIMUM)
            bar.setValue(self._state.progress)
            bar.setTextVisible(True)

    def _stop_timer(self) -> None:
        if self._timer is None:
            return
        self._timer.stop()
        self._timer.timeout.disconnect(self._on_tick)
        self._timer.deleteLater()
        self._timer = None


__all__ = ["BusyDialog", "BusyDialogError", "NoTaskAttachedError"]
