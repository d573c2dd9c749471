"""Utility helpers for showing modal progress while background tasks run."""

from __future__ import annotations

from typing import Any, Callable, Optional, Sequence

from PySide6.QtGui import QPixmap
from PySide6.QtWidgets import QWidget

from busy_dialog.constants import DEFAULT_MESSAGE, TICK_INTERVAL_MS
from busy_dialog.services.background_task import BackgroundTask, TaskContext
from busy_dialog.ui.busy_dialog import BusyDialog


def run_with_busy_dialog(
    parent: Optional[QWidget],
    title: str,
    work: Callable[[TaskContext], Any],
    *,
    message: str = DEFAULT_MESSAGE,
    progress_enabled: bool = True,
    icon_frames: Optional[Sequence[QPixmap]] = None,
    tick_interval: int = TICK_INTERVAL_MS,
) -> Any:
    """Run ``work`` on a worker thread behind a modal busy dialog.

    Returns the value produced by ``work``. If ``work`` raised, the dialog still
    closes normally and ``TaskFailedError`` is raised here afterwards.
    """

    task = BackgroundTask(work)
    dialog = BusyDialog(
        parent,
        title,
        progress_enabled,
        icon_frames,
        message=message,
        tick_interval=tick_interval,
    )
    dialog.attach_task(task)
    try:
        dialog.start()
    finally:
        dialog.deleteLater()
    task.wait()
    return task.result()


__all__ = ["run_with_busy_dialog"]
