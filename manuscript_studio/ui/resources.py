"""Embedded resources for the Manuscript Studio GUI."""

from __future__ import annotations

from functools import lru_cache

from PySide6.QtCore import QLineF, QRectF
from PySide6.QtGui import QColor, QIcon, QPainter, QPixmap


@lru_cache(maxsize=1)
def app_icon() -> QIcon:
    """Return a generated icon: a page with a few ruled text lines."""

    size = 96
    pixmap = QPixmap(size, size)
    pixmap.fill(QColor("#1f2a44"))

    painter = QPainter(pixmap)
    painter.setRenderHint(QPainter.Antialiasing)
    painter.setBrush(QColor("#f4efe1"))
    painter.setPen(QColor("#f4efe1"))
    left, top = size * 0.24, size * 0.14
    painter.drawRoundedRect(QRectF(left, top, size * 0.52, size * 0.72), size * 0.05, size * 0.05)
    painter.setPen(QColor("#8a6d3b"))
    for row in range(5):
        y = top + size * (0.16 + row * 0.11)
        indent = size * 0.06 if row == 0 else 0
        painter.drawLine(QLineF(left + size * 0.07 + indent, y, left + size * 0.45, y))
    painter.end()

    return QIcon(pixmap)


__all__ = ["app_icon"]
