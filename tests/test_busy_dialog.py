"""Widget tests for BusyDialog driven by manual timer ticks."""

from __future__ import annotations

import os

import pytest
from PySide6.QtWidgets import QApplication, QProgressBar

from busy_dialog.models.busy_state import Phase
from busy_dialog.ui.busy_dialog import BusyDialog, BusyDialogError, NoTaskAttachedError
from busy_dialog.ui.icon_frames import spinner_frames

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
app = QApplication.instance() or QApplication([])


class FakeTask:
    """Task handle whose state is set directly by the test."""

    def __init__(self) -> None:
        self.started = 0
        self.finished = False
        self.percent = 0
        self.value = "done"

    def start(self) -> None:
        self.started += 1

    def is_finished(self) -> bool:
        return self.finished

    def progress(self) -> int:
        return self.percent

    def result(self) -> str:
        return self.value


def _started_dialog(progress_enabled: bool = False, frames=None) -> tuple[BusyDialog, FakeTask]:
    dialog = BusyDialog(None, "Working", progress_enabled, frames)
    task = FakeTask()
    dialog.attach_task(task)
    dialog.start_async()
    return dialog, task


def test_start_without_task_raises():
    dialog = BusyDialog(None, "Working")
    with pytest.raises(NoTaskAttachedError):
        dialog.start_async()
    assert not dialog.is_running()


def test_start_launches_task_and_timer():
    dialog, task = _started_dialog()

    assert task.started == 1
    assert dialog.is_running()
    assert dialog.isVisible()
    assert dialog.state().phase is Phase.RUNNING

    with pytest.raises(BusyDialogError):
        dialog.start_async()
    assert task.started == 1
    task.finished = True
    dialog._on_tick()


def test_dialog_stays_open_until_task_finishes():
    dialog, task = _started_dialog()

    for _ in range(5):
        dialog._on_tick()
        assert dialog.isVisible()
        assert dialog.is_running()

    task.finished = True
    dialog._on_tick()

    assert not dialog.isVisible()
    assert not dialog.is_running()
    assert dialog.state().phase is Phase.FINISHED


def test_finished_tick_emits_task_finished_once():
    dialog, task = _started_dialog()
    received = []
    dialog.taskFinished.connect(received.append)

    task.finished = True
    dialog._on_tick()
    dialog._on_tick()

    assert received == [task]
    assert not dialog.isVisible()


def test_progress_scenario_indeterminate_then_value_then_closed():
    dialog, task = _started_dialog(progress_enabled=True)

    task.percent = 0
    dialog._on_tick()
    assert dialog.is_indeterminate()
    assert dialog.progress_value() is None

    task.percent = 50
    dialog._on_tick()
    assert not dialog.is_indeterminate()
    assert dialog.progress_value() == 50

    task.finished = True
    dialog._on_tick()
    assert not dialog.isVisible()
    assert not dialog.is_running()


def test_icon_scenario_cycles_frames_without_progress_ui():
    frames = spinner_frames(count=3)
    dialog, task = _started_dialog(progress_enabled=False, frames=frames)
    assert dialog.current_frame_index() == 0

    seen = []
    for _ in range(5):
        dialog._on_tick()
        seen.append(dialog.current_frame_index())

    assert seen == [1, 2, 0, 1, 2]
    assert not dialog.is_progress_enabled()
    assert dialog.findChildren(QProgressBar) == []

    task.finished = True
    dialog._on_tick()
    assert not dialog.isVisible()


def test_each_dialog_keeps_its_own_animation_counter():
    first, first_task = _started_dialog(frames=spinner_frames(count=4))
    second, second_task = _started_dialog(frames=spinner_frames(count=4))

    first._on_tick()
    first._on_tick()
    second._on_tick()

    assert first.current_frame_index() == 2
    assert second.current_frame_index() == 1

    first_task.finished = second_task.finished = True
    first._on_tick()
    second._on_tick()


def test_empty_icon_sequence_degrades_to_no_icon():
    dialog = BusyDialog(None, "Working", False, [])

    assert not dialog.state().animated
    assert dialog._icon_label.isHidden()


def test_initial_frame_is_shown_when_frames_given():
    dialog = BusyDialog(None, "Working", False, spinner_frames(count=2))

    assert not dialog._icon_label.isHidden()
    assert dialog.current_frame_index() == 0


def test_set_progress_is_noop_without_progress_bar():
    dialog = BusyDialog(None, "Working", progress_enabled=False)

    dialog.set_progress(40)

    assert dialog.progress_value() is None
    assert not dialog.is_indeterminate()
    assert dialog.state().progress == 0


def test_set_progress_switches_between_modes():
    dialog = BusyDialog(None, "Working", progress_enabled=True)
    assert dialog.is_indeterminate()

    dialog.set_progress(30)
    assert dialog.progress_value() == 30

    dialog.set_progress(100)
    assert dialog.progress_value() == 100

    dialog.set_progress(0)
    assert dialog.is_indeterminate()


def test_set_message_and_icon():
    frames = spinner_frames(count=3)
    dialog = BusyDialog(None, "Working")

    dialog.set_message("Loading parts")
    dialog.set_icon(frames[1])

    assert dialog.message() == "Loading parts"
    assert not dialog._icon_label.isHidden()
    assert dialog.current_frame_index() == 0


def test_hidden_dialog_is_shown_again_on_next_tick():
    dialog, task = _started_dialog()
    dialog.hide()

    dialog._on_tick()
    assert dialog.isVisible()

    task.finished = True
    dialog._on_tick()


def test_escape_does_not_dismiss_running_dialog():
    dialog, task = _started_dialog()

    dialog.reject()
    assert dialog.isVisible()
    assert dialog.is_running()

    task.finished = True
    dialog._on_tick()
    assert not dialog.isVisible()
