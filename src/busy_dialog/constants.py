"""Application-wide constants and default values."""

# Busy dialog polling and layout
TICK_INTERVAL_MS = 300  # three animation frames per second
CONTENT_MARGIN = 6  # pixels around dialog content and progress row
DEFAULT_MESSAGE = "...                "
PROGRESS_MAXIMUM = 100

# Generated spinner frames
SPINNER_SIZE = 24  # pixels
SPINNER_FRAME_COUNT = 8
SPINNER_DOT_RATIO = 0.14  # dot radius relative to spinner size

# Hard stop when extracting frames from animations that report no frame count
MAX_MOVIE_FRAMES = 256

# Default window dimensions (pixels)
DEFAULT_WINDOW_WIDTH = 640
DEFAULT_WINDOW_HEIGHT = 360
