"""Sources of icon frames for the busy dialog animation."""

from __future__ import annotations

import math
from pathlib import Path
from typing import Iterable, Optional

from PySide6.QtCore import QPointF, Qt
from PySide6.QtGui import QColor, QMovie, QPainter, QPixmap

from busy_dialog.constants import (
    MAX_MOVIE_FRAMES,
    SPINNER_DOT_RATIO,
    SPINNER_FRAME_COUNT,
    SPINNER_SIZE,
)


class IconFramesError(ValueError):
    """Raised when icon frames cannot be loaded."""


def spinner_frames(
    size: int = SPINNER_SIZE,
    count: int = SPINNER_FRAME_COUNT,
    color: Optional[QColor] = None,
) -> list[QPixmap]:
    """Draw a ring of dots whose bright dot moves one step per frame."""
    if size <= 0 or count <= 0:
        return []

    base = QColor(color) if color is not None else QColor(Qt.GlobalColor.darkGray)
    dot_radius = max(1.0, size * SPINNER_DOT_RATIO)
    ring_radius = size / 2.0 - dot_radius
    center = QPointF(size / 2.0, size / 2.0)

    frames: list[QPixmap] = []
    for frame in range(count):
        pixmap = QPixmap(size, size)
        pixmap.fill(Qt.GlobalColor.transparent)
        painter = QPainter(pixmap)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        painter.setPen(Qt.PenStyle.NoPen)
        for dot in range(count):
            # Dots trailing the head fade out.
            age = (frame - dot) % count
            dot_color = QColor(base)
            dot_color.setAlphaF(1.0 - age / count * 0.85)
            painter.setBrush(dot_color)
            angle = 2.0 * math.pi * dot / count - math.pi / 2.0
            position = center + QPointF(math.cos(angle) * ring_radius, math.sin(angle) * ring_radius)
            painter.drawEllipse(position, dot_radius, dot_radius)
        painter.end()
        frames.append(pixmap)
    return frames


def frames_from_files(paths: Iterable[Path]) -> list[QPixmap]:
    """Load one frame per image file, in the given order."""
    frames: list[QPixmap] = []
    for path in paths:
        pixmap = QPixmap(str(path))
        if pixmap.isNull():
            raise IconFramesError(f"Unable to load icon frame: {path}")
        frames.append(pixmap)
    return frames


def frames_from_movie(path: Path) -> list[QPixmap]:
    """Extract every frame of an animated image (GIF, APNG, WebP…)."""
    if not path.exists():
        raise IconFramesError(f"Animation does not exist: {path}")

    movie = QMovie(str(path))
    if not movie.isValid():
        raise IconFramesError(f"Unsupported animation: {path}")

    frames: list[QPixmap] = []
    frame_count = movie.frameCount()
    if frame_count > 0:
        for index in range(min(frame_count, MAX_MOVIE_FRAMES)):
            if movie.jumpToFrame(index):
                frames.append(movie.currentPixmap())
    elif movie.jumpToFrame(0):
        frames.append(movie.currentPixmap())
        while len(frames) < MAX_MOVIE_FRAMES and movie.jumpToNextFrame():
            frames.append(movie.currentPixmap())

    if not frames:
        raise IconFramesError(f"Animation has no frames: {path}")
    return frames


__all__ = [
    "IconFramesError",
    "frames_from_files",
    "frames_from_movie",
    "spinner_frames",
]
