from __future__ import annotations

import logging
import sqlite3

from PyQt6.QtCore import QByteArray, QPointF, QRectF, QTimer, Qt
from PyQt6.QtGui import QAction, QColor, QFont, QKeySequence, QPainter, QPen, QPolygonF
from PyQt6.QtWidgets import (
    QFormLayout,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPushButton,
    QSpinBox,
    QVBoxLayout,
    QWidget,
)

from pom.core.notify import NotificationSink, dispatch
from pom.core.progress import ProgressView, RenderMode, arc_points, render
from pom.core.settings import MAX_MINUTES, MIN_MINUTES, TimerSettings
from pom.core.timer import Notification, PomodoroTimer, TimerState
from pom.data.storage import Storage


LOGGER = logging.getLogger(__name__)

FRAME_INTERVAL_MS = 33
RING_WIDTH = 10
RING_MARGIN = 40


class ProgressDial(QWidget):
    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setMinimumSize(420, 420)
        self._view = ProgressView(label="00:00", angle_fraction=0.0, mode=RenderMode.NORMAL, color="#64c864")

    def set_view(self, view: ProgressView) -> None:
        if view == self._view:
            return
        self._view = view
        self.update()

    def paintEvent(self, event) -> None:  # noqa: N802
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        rect = QRectF(self.rect())
        center = rect.center()
        radius = min(rect.width(), rect.height()) / 2 - RING_MARGIN
        if radius <= 0:
            return

        painter.setPen(QPen(QColor(80, 80, 80), RING_WIDTH))
        painter.drawEllipse(center, radius, radius)

        color = QColor(self._view.color)
        if self._view.angle_fraction > 0:
            points = arc_points(center.x(), center.y(), radius, self._view.angle_fraction)
            pen = QPen(color, RING_WIDTH, Qt.PenStyle.SolidLine, Qt.PenCapStyle.RoundCap)
            painter.setPen(pen)
            painter.drawPolyline(QPolygonF([QPointF(x, y) for x, y in points]))

        font = QFont(self.font())
        font.setPointSize(40 if self._view.mode == RenderMode.NORMAL else 24)
        font.setBold(True)
        painter.setFont(font)
        painter.setPen(QColor("#ffffff") if self._view.mode == RenderMode.NORMAL else color)
        painter.drawText(rect, Qt.AlignmentFlag.AlignCenter, self._view.label)


class MainWindow(QMainWindow):
    def __init__(self, storage: Storage, sink: NotificationSink, settings: TimerSettings | None = None) -> None:
        super().__init__()
        self.setWindowTitle("Pom")
        self.resize(682, 782)

        self.storage = storage
        self.sink = sink
        if settings is None:
            settings = storage.load_timer_settings()
        self.timer = PomodoroTimer(settings.focus_minutes, settings.break_minutes)

        self._build_ui()
        self._connect_signals()
        self._restore_geometry()

        self.frame_timer = QTimer(self)
        self.frame_timer.setInterval(FRAME_INTERVAL_MS)
        self.frame_timer.timeout.connect(self._on_frame)
        self.frame_timer.start()

        self._on_frame()
        self._update_buttons()

    def _build_ui(self) -> None:
        central = QWidget(self)
        self.setCentralWidget(central)
        layout = QVBoxLayout(central)

        heading = QLabel("Pomodoro Timer")
        heading.setObjectName("Heading")
        layout.addWidget(heading)

        self.dial = ProgressDial()
        layout.addWidget(self.dial, 1)

        self.sessions_label = QLabel()
        self.sessions_label.setObjectName("SessionsLabel")
        layout.addWidget(self.sessions_label)

        form = QFormLayout()
        self.focus_spin = QSpinBox()
        self.focus_spin.setRange(MIN_MINUTES, MAX_MINUTES)
        self.focus_spin.setValue(self.timer.focus_minutes)
        self.break_spin = QSpinBox()
        self.break_spin.setRange(MIN_MINUTES, MAX_MINUTES)
        self.break_spin.setValue(self.timer.break_minutes)
        form.addRow("Pomodoro Timer (min):", self.focus_spin)
        form.addRow("Break Time (min):", self.break_spin)
        layout.addLayout(form)

        controls = QHBoxLayout()
        self.start_btn = QPushButton("Start")
        self.pause_btn = QPushButton("Pause")
        self.resume_btn = QPushButton("Resume")
        self.reset_btn = QPushButton("Reset")
        for button in (self.start_btn, self.pause_btn, self.resume_btn, self.reset_btn):
            controls.addWidget(button)
        layout.addLayout(controls)

        space_action = QAction(self)
        space_action.setShortcut(QKeySequence(Qt.Key.Key_Space))
        space_action.triggered.connect(self._space_toggle)
        self.addAction(space_action)

    def _connect_signals(self) -> None:
        self.start_btn.clicked.connect(self.start_session)
        self.pause_btn.clicked.connect(self.pause_session)
        self.resume_btn.clicked.connect(self.resume_session)
        self.reset_btn.clicked.connect(self.reset_session)
        self.focus_spin.valueChanged.connect(self._on_focus_changed)
        self.break_spin.valueChanged.connect(self._on_break_changed)

    def _restore_geometry(self) -> None:
        geometry = self.storage.load_geometry()
        if geometry and not self.restoreGeometry(QByteArray(geometry)):
            LOGGER.info("Stored window geometry could not be restored")

    def _on_focus_changed(self, value: int) -> None:
        self.timer.focus_minutes = value

    def _on_break_changed(self, value: int) -> None:
        self.timer.break_minutes = value

    def _space_toggle(self) -> None:
        state = self.timer.state
        if state == TimerState.RUNNING:
            self.pause_session()
        elif state == TimerState.PAUSED:
            self.resume_session()
        elif state != TimerState.ON_BREAK:
            self.start_session()

    def start_session(self) -> None:
        self._handle(self.timer.start())

    def pause_session(self) -> None:
        self._handle(self.timer.pause())

    def resume_session(self) -> None:
        self._handle(self.timer.resume())

    def reset_session(self) -> None:
        self._handle(self.timer.reset())

    def _handle(self, notifications: list[Notification]) -> None:
        dispatch(self.sink, notifications)
        self._refresh()
        self._update_buttons()

    def _on_frame(self) -> None:
        notifications = self.timer.advance()
        if notifications:
            self._handle(notifications)
        else:
            self._refresh()

    def _refresh(self) -> None:
        snapshot = self.timer.snapshot()
        self.dial.set_view(render(snapshot))
        self.sessions_label.setText(f"Sessions Completed: {snapshot.sessions_completed}")

    def _update_buttons(self) -> None:
        state = self.timer.state
        self.pause_btn.setEnabled(state == TimerState.RUNNING)
        self.resume_btn.setEnabled(state == TimerState.PAUSED)
        self.reset_btn.setEnabled(state != TimerState.READY)

    def closeEvent(self, event) -> None:  # noqa: N802
        self.frame_timer.stop()
        try:
            self.storage.save_geometry(self.saveGeometry().data())
            self.storage.save_timer_settings(TimerSettings(self.timer.focus_minutes, self.timer.break_minutes))
        except sqlite3.Error:
            LOGGER.exception("Failed to persist window state")
        event.accept()
