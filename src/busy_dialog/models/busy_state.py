"""Pure state model driven by the busy dialog's polling timer."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

from busy_dialog.constants import PROGRESS_MAXIMUM


class Phase(Enum):
    """Lifecycle of a single dialog run."""

    IDLE = "idle"
    RUNNING = "running"
    FINISHED = "finished"


def clamp_progress(value: int) -> int:
    """Clamp a reported progress value into ``[0, PROGRESS_MAXIMUM]``."""
    return max(0, min(PROGRESS_MAXIMUM, int(value)))


@dataclass(frozen=True)
class BusyState:
    """Snapshot of what the dialog should display."""

    phase: Phase = Phase.IDLE
    frame_count: int = 0
    frame_index: int = 0
    progress_enabled: bool = False
    progress: int = 0  # 0 means indeterminate

    @classmethod
    def initial(cls, frame_count: int = 0, progress_enabled: bool = False) -> "BusyState":
        return cls(frame_count=max(0, frame_count), progress_enabled=progress_enabled)

    @property
    def indeterminate(self) -> bool:
        return self.progress_enabled and self.progress == 0

    @property
    def animated(self) -> bool:
        return self.frame_count > 0

    def running(self) -> "BusyState":
        return replace(self, phase=Phase.RUNNING)

    def with_progress(self, value: int) -> "BusyState":
        """Apply a progress update; ignored when the progress row is disabled."""
        if not self.progress_enabled:
            return self
        return replace(self, progress=clamp_progress(value))


def advance(state: BusyState, *, finished: bool, progress: int) -> BusyState:
    """Compute the state after one timer tick.

    ``finished`` and ``progress`` are read from the task handle for this tick.
    Only a running state changes; once finished, further ticks are no-ops.
    """
    if state.phase is not Phase.RUNNING:
        return state
    if finished:
        return replace(state, phase=Phase.FINISHED)

    frame_index = (state.frame_index + 1) % state.frame_count if state.animated else 0
    return replace(state, frame_index=frame_index).with_progress(progress)


__all__ = ["BusyState", "Phase", "advance", "clamp_progress"]
