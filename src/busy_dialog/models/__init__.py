"""Plain data models shared by the dialog and its services."""

__all__ = ["busy_state"]
