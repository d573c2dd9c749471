"""Demo job descriptions loaded from YAML."""

from __future__ import annotations

import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml

from busy_dialog.services.background_task import TaskContext


@dataclass(frozen=True)
class DemoScenario:
    """Simulated job shown through the busy dialog."""

    title: str = "Working…"
    message: str = "Please wait…"
    steps: int = 10
    step_delay: float = 0.3  # seconds slept per step
    progress: bool = True
    animate: bool = True
    indeterminate_steps: int = 0  # leading steps that report 0 percent
    icon: Optional[Path] = None

    def run(self, context: TaskContext) -> int:
        """Sleep through each step, publishing progress; return steps completed."""
        completed = 0
        for step in range(1, self.steps + 1):
            if context.is_cancelled():
                break
            time.sleep(self.step_delay)
            completed = step
            if step <= self.indeterminate_steps:
                context.set_progress(0)
            else:
                context.set_progress(step * 100 // self.steps)
        return completed


class ScenarioError(ValueError):
    """Raised when a demo scenario file is invalid."""


DEFAULT_SCENARIOS: tuple[DemoScenario, ...] = (
    DemoScenario(title="Determinate job", message="Crunching numbers…", animate=False),
    DemoScenario(
        title="Indeterminate job",
        message="Waiting for the server…",
        steps=8,
        indeterminate_steps=8,
        animate=False,
    ),
    DemoScenario(title="Animated job", message="Indexing files…", steps=12, progress=False),
)


def load_demo_scenario(path: Path) -> DemoScenario:
    """Load a demo scenario from YAML."""
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ScenarioError(f"Unable to read scenario: {path}") from exc
    except yaml.YAMLError as exc:
        raise ScenarioError(f"Scenario is not valid YAML: {exc}") from exc
    if not isinstance(data, dict):
        raise ScenarioError("Scenario must be a YAML mapping.")

    defaults = DemoScenario()
    steps = _read_int(data, "steps", default=defaults.steps, min_value=1)
    icon = data.get("icon")
    if icon is not None:
        if not isinstance(icon, str) or not icon.strip():
            raise ScenarioError("'icon' must be a path string.")
        icon_path = Path(icon)
        if not icon_path.is_absolute():
            icon_path = path.parent / icon_path
    else:
        icon_path = None

    return DemoScenario(
        title=_read_str(data, "title", default=defaults.title),
        message=_read_str(data, "message", default=defaults.message),
        steps=steps,
        step_delay=_read_float(data, "step_delay", default=defaults.step_delay, min_value=0.0),
        progress=_read_bool(data, "progress", default=defaults.progress),
        animate=_read_bool(data, "animate", default=defaults.animate),
        indeterminate_steps=_read_int(
            data, "indeterminate_steps", default=0, min_value=0, max_value=steps
        ),
        icon=icon_path,
    )


def _read_str(data: dict, key: str, *, default: str) -> str:
    raw = data.get(key, default)
    if not isinstance(raw, str) or not raw.strip():
        raise ScenarioError(f"'{key}' must be a non-empty string.")
    return raw.strip()


def _read_bool(data: dict, key: str, *, default: bool) -> bool:
    raw = data.get(key, default)
    if not isinstance(raw, bool):
        raise ScenarioError(f"'{key}' must be true or false.")
    return raw


def _read_float(
    data: dict,
    key: str,
    *,
    default: float,
    min_value: float | None = None,
) -> float:
    raw = data.get(key, default)
    try:
        value = float(raw)
    except (TypeError, ValueError) as exc:
        raise ScenarioError(f"'{key}' must be a number.") from exc
    if min_value is not None and value < min_value:
        raise ScenarioError(f"'{key}' must be >= {min_value}.")
    return value


def _read_int(
    data: dict,
    key: str,
    *,
    default: int,
    min_value: int | None = None,
    max_value: int | None = None,
) -> int:
    raw = data.get(key, default)
    if isinstance(raw, bool):
        raise ScenarioError(f"'{key}' must be an integer.")
    try:
        value = int(raw)
    except (TypeError, ValueError) as exc:
        raise ScenarioError(f"'{key}' must be an integer.") from exc
    if min_value is not None and value < min_value:
        raise ScenarioError(f"'{key}' must be >= {min_value}.")
    if max_value is not None and value > max_value:
        raise ScenarioError(f"'{key}' must be <= {max_value}.")
    return value


__all__ = [
    "DEFAULT_SCENARIOS",
    "DemoScenario",
    "ScenarioError",
    "load_demo_scenario",
]
