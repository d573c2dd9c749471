#!/usr/bin/env python3
"""CLI launcher for the busy dialog demo application."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from busy_dialog.app import configure_logging, main
from busy_dialog.services.demo_scenario import ScenarioError, load_demo_scenario


def run(argv: list[str]) -> int:
    """Parse CLI options and invoke the GUI entry point."""
    parser = argparse.ArgumentParser(description="Busy dialog demo.")
    parser.add_argument(
        "--scenario",
        type=Path,
        default=None,
        help="YAML job description to run immediately; the app exits when it completes.",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    args, qt_args = parser.parse_known_args(argv[1:])

    configure_logging(args.verbose)
    scenario = None
    if args.scenario is not None:
        try:
            scenario = load_demo_scenario(args.scenario)
        except ScenarioError as exc:
            print(f"Invalid scenario: {exc}", file=sys.stderr)
            return 1

    return main([argv[0], *qt_args], scenario=scenario)


if __name__ == "__main__":
    raise SystemExit(run(sys.argv))
