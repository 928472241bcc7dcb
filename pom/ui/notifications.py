from __future__ import annotations

import logging

from PyQt6.QtCore import QObject, Qt
from PyQt6.QtGui import QBrush, QColor, QIcon, QPainter, QPixmap
from PyQt6.QtWidgets import QApplication, QSystemTrayIcon

from pom.core.timer import NotifyEvent


LOGGER = logging.getLogger(__name__)

MESSAGE_TIMEOUT_MS = 4000

_EVENT_ICONS = {
    NotifyEvent.FINISHED: QSystemTrayIcon.MessageIcon.Warning,
    NotifyEvent.BREAK_STARTED: QSystemTrayIcon.MessageIcon.Information,
}


def _make_icon(color: str = "#64c864") -> QIcon:
    pixmap = QPixmap(16, 16)
    pixmap.fill(Qt.GlobalColor.transparent)
    painter = QPainter(pixmap)
    painter.setRenderHint(QPainter.RenderHint.Antialiasing)
    painter.setBrush(QBrush(QColor(color)))
    painter.setPen(Qt.PenStyle.NoPen)
    painter.drawEllipse(0, 0, 16, 16)
    painter.end()
    return QIcon(pixmap)


class TrayNotifier:
    """Desktop notification sink backed by the system tray balloon."""

    def __init__(self, parent: QObject | None = None) -> None:
        self._tray: QSystemTrayIcon | None = None
        if QSystemTrayIcon.isSystemTrayAvailable():
            self._tray = QSystemTrayIcon(_make_icon(), parent)
            self._tray.setToolTip("Pom")
            self._tray.show()
        else:
            LOGGER.info("System tray unavailable, notifications fall back to beep")

    def notify(self, event: NotifyEvent, title: str, message: str) -> None:
        if self._tray is None or not QSystemTrayIcon.supportsMessages():
            QApplication.beep()
            LOGGER.info("%s (%s): %s", title, event.value, message)
            return
        icon = _EVENT_ICONS.get(event, QSystemTrayIcon.MessageIcon.NoIcon)
        self._tray.showMessage(title, message, icon, MESSAGE_TIMEOUT_MS)

    def hide(self) -> None:
        if self._tray is not None:
            self._tray.hide()
