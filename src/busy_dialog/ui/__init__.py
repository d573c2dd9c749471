"""UI components for the busy dialog."""

__all__ = [
    "busy_dialog",
    "icon_frames",
    "main_window",
    "progress",
]
