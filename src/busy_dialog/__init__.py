"""Modal busy indicator dialog for long-running background tasks."""

__all__ = [
    "app",
    "constants",
    "models",
    "services",
    "ui",
]
