"""Demo window that runs simulated jobs behind the busy dialog."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Sequence

from PySide6.QtCore import Qt
from PySide6.QtGui import QAction, QPixmap
from PySide6.QtWidgets import (
    QFileDialog,
    QLabel,
    QMainWindow,
    QMessageBox,
    QStatusBar,
    QVBoxLayout,
    QWidget,
)

from busy_dialog.constants import DEFAULT_WINDOW_HEIGHT, DEFAULT_WINDOW_WIDTH
from busy_dialog.services.background_task import TaskFailedError
from busy_dialog.services.demo_scenario import (
    DEFAULT_SCENARIOS,
    DemoScenario,
    ScenarioError,
    load_demo_scenario,
)
from busy_dialog.ui.icon_frames import IconFramesError, frames_from_movie, spinner_frames
from busy_dialog.ui.progress import run_with_busy_dialog

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """Top-level window listing demo jobs in its Run menu."""

    def __init__(self, scenarios: Sequence[DemoScenario] = DEFAULT_SCENARIOS) -> None:
        super().__init__()
        self.setWindowTitle("Busy Dialog Demo")
        self.resize(DEFAULT_WINDOW_WIDTH, DEFAULT_WINDOW_HEIGHT)

        self._scenarios = list(scenarios)
        self._spinner = spinner_frames()

        self._init_status_bar()
        self._init_central_widget()
        self._create_actions()
        self._create_menus()

    def _init_status_bar(self) -> None:
        status = QStatusBar(self)
        status.showMessage("Ready")
        self.setStatusBar(status)

    def _init_central_widget(self) -> None:
        container = QWidget(self)
        layout = QVBoxLayout(container)
        hint = QLabel("Pick a job from the Run menu to start it behind a busy dialog.", container)
        hint.setAlignment(Qt.AlignmentFlag.AlignCenter)
        hint.setWordWrap(True)
        layout.addWidget(hint)
        self.setCentralWidget(container)

    def _create_actions(self) -> None:
        self._scenario_actions: list[QAction] = []
        for scenario in self._scenarios:
            action = QAction(scenario.title, self)
            action.triggered.connect(lambda _checked=False, s=scenario: self.run_scenario(s))
            self._scenario_actions.append(action)

        self._action_open = QAction("&Open Scenario…", self)
        self._action_open.setShortcut("Ctrl+O")
        self._action_open.triggered.connect(self._open_scenario)
        self._action_open.setToolTip("Load a job description from a YAML file and run it.")

        self._action_exit = QAction("E&xit", self)
        self._action_exit.setShortcut("Ctrl+Q")
        self._action_exit.triggered.connect(self.close)

    def _create_menus(self) -> None:
        menu_bar = self.menuBar()
        file_menu = menu_bar.addMenu("&File")
        file_menu.addAction(self._action_open)
        file_menu.addSeparator()
        file_menu.addAction(self._action_exit)

        run_menu = menu_bar.addMenu("&Run")
        for action in self._scenario_actions:
            run_menu.addAction(action)

    def run_scenario(self, scenario: DemoScenario) -> Optional[int]:
        """Run ``scenario`` behind a busy dialog and report the outcome."""
        try:
            frames = self._frames_for(scenario)
        except IconFramesError as exc:
            QMessageBox.warning(self, "Invalid icon", str(exc))
            frames = self._spinner

        self.statusBar().showMessage(f"Running {scenario.title}…")
        try:
            completed = run_with_busy_dialog(
                self,
                scenario.title,
                scenario.run,
                message=scenario.message,
                progress_enabled=scenario.progress,
                icon_frames=frames,
            )
        except TaskFailedError as exc:
            self.statusBar().showMessage("Job failed")
            QMessageBox.critical(self, "Job failed", str(exc))
            return None

        logger.info("%s completed %d of %d steps", scenario.title, completed, scenario.steps)
        self.statusBar().showMessage(f"{scenario.title}: {completed}/{scenario.steps} steps done", 5000)
        return completed

    def _frames_for(self, scenario: DemoScenario) -> Sequence[QPixmap]:
        if not scenario.animate:
            return ()
        if scenario.icon is not None:
            return frames_from_movie(scenario.icon)
        return self._spinner

    def _open_scenario(self) -> None:
        path, _ = QFileDialog.getOpenFileName(
            self,
            "Select scenario YAML",
            str(Path.cwd()),
            "YAML files (*.yaml *.yml);;All files (*)",
        )
        if not path:
            return
        try:
            scenario = load_demo_scenario(Path(path))
        except ScenarioError as exc:
            QMessageBox.critical(self, "Invalid scenario", str(exc))
            return
        self.run_scenario(scenario)


__all__ = ["MainWindow"]
