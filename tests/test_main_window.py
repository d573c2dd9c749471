"""Smoke tests for the demo window."""

from __future__ import annotations

import os

from PySide6.QtWidgets import QApplication

from busy_dialog.services.demo_scenario import DEFAULT_SCENARIOS, DemoScenario
from busy_dialog.ui.main_window import MainWindow

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
app = QApplication.instance() or QApplication([])


def test_run_menu_lists_default_scenarios():
    window = MainWindow()

    titles = [action.text() for action in window._scenario_actions]
    assert titles == [scenario.title for scenario in DEFAULT_SCENARIOS]


def test_run_scenario_reports_completed_steps():
    window = MainWindow()
    scenario = DemoScenario(title="Quick job", steps=2, step_delay=0.0, animate=True)

    completed = window.run_scenario(scenario)

    assert completed == 2
    assert "2/2" in window.statusBar().currentMessage()
