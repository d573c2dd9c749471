"""Application bootstrap for the busy dialog demo."""

from __future__ import annotations

import logging
import sys
from typing import Iterable, Optional

from PySide6.QtWidgets import QApplication

from busy_dialog.services.demo_scenario import DemoScenario


def configure_logging(verbose: bool = False) -> None:
    """Install a console handler for the ``busy_dialog`` loggers."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s.%(msecs)03d [%(levelname)s][%(name)s] %(message)s",
        datefmt="%H:%M:%S",
    )


def create_application(argv: Optional[Iterable[str]] = None) -> QApplication:
    """Create and configure the QApplication instance."""
    args = list(argv) if argv is not None else sys.argv
    app = QApplication(args)
    QApplication.setApplicationName("Busy Dialog Demo")
    QApplication.setOrganizationName("BusyDialog")
    QApplication.setOrganizationDomain("busydialog.local")
    return app


def main(argv: Optional[Iterable[str]] = None, scenario: Optional[DemoScenario] = None) -> int:
    """Entry point that boots the GUI event loop.

    With ``scenario`` the job runs once the window is up and the application
    exits when it completes.
    """
    app = create_application(argv)

    from busy_dialog.ui.main_window import MainWindow  # Lazy import to avoid cycles during bootstrap

    window = MainWindow()
    window.show()

    if scenario is not None:
        from PySide6.QtCore import QTimer

        def _run_once() -> None:
            window.run_scenario(scenario)
            app.quit()

        QTimer.singleShot(0, _run_once)

    return app.exec()


if __name__ == "__main__":
    configure_logging()
    raise SystemExit(main())
