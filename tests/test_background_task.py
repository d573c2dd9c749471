"""Tests for the QThread-backed task handle."""

from __future__ import annotations

import os
import threading

import pytest
from PySide6.QtWidgets import QApplication

from busy_dialog.services.background_task import (
    BackgroundTask,
    TaskFailedError,
    TaskHandle,
    TaskNotFinishedError,
)

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
app = QApplication.instance() or QApplication([])


def test_background_task_satisfies_task_handle_protocol():
    task = BackgroundTask(lambda context: None)
    assert isinstance(task, TaskHandle)


def test_result_before_completion_raises():
    task = BackgroundTask(lambda context: 1)

    assert not task.is_finished()
    with pytest.raises(TaskNotFinishedError):
        task.result()


def test_task_reports_progress_and_result():
    def work(context):
        context.set_progress(25)
        context.set_progress(180)
        return "catalogue"

    task = BackgroundTask(work)
    task.start()
    assert task.wait(5000)

    assert task.is_finished()
    assert task.progress() == 100
    assert task.result() == "catalogue"
    assert task.error() is None
    assert task.name == "work"


def test_failure_is_kept_until_result_is_requested():
    def work(context):
        raise ValueError("missing part list")

    task = BackgroundTask(work, name="import")
    task.start()
    assert task.wait(5000)

    assert task.is_finished()
    assert isinstance(task.error(), ValueError)
    with pytest.raises(TaskFailedError) as excinfo:
        task.result()
    assert isinstance(excinfo.value.__cause__, ValueError)
    assert "import" in str(excinfo.value)


def test_cancel_is_cooperative():
    entered = threading.Event()

    def work(context):
        entered.set()
        while not context.is_cancelled():
            threading.Event().wait(0.01)
        return "stopped"

    task = BackgroundTask(work)
    task.start()
    assert entered.wait(5)
    assert not task.is_finished()

    task.cancel()
    assert task.wait(5000)
    assert task.is_cancelled()
    assert task.result() == "stopped"
