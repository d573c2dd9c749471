"""Service layer for background tasks and demo scenarios."""

__all__ = [
    "background_task",
    "demo_scenario",
]
