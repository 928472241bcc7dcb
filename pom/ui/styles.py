from __future__ import annotations

from PyQt6.QtWidgets import QApplication


THEME_QSS = """
QWidget {
    background: #0c0c0c;
    color: #e0e0e0;
    font-size: 13px;
}

QMainWindow {
    background: #0c0c0c;
}

QLabel {
    background: transparent;
}

QLabel#Heading {
    font-size: 20px;
    font-weight: 700;
    color: #f5f5f5;
}

QLabel#SessionsLabel {
    font-size: 14px;
    font-weight: 600;
    color: #9e9e9e;
}

QPushButton {
    background: #2b2b2b;
    border: none;
    border-radius: 8px;
    min-height: 40px;
    min-width: 120px;
    font-weight: 600;
}

QPushButton:hover {
    background: #3a3a3a;
}

QPushButton:pressed {
    background: #64c864;
    color: #0c0c0c;
}

QPushButton:disabled {
    color: #5f5f5f;
}

QSpinBox {
    background: #1f1f1f;
    border: none;
    border-radius: 8px;
    padding: 4px 8px;
    min-height: 28px;
}

QToolTip {
    background-color: #1f1f1f;
    color: #e0e0e0;
    border: none;
    border-radius: 8px;
    padding: 6px 8px;
}
"""


def apply_theme(app: QApplication) -> None:
    app.setStyleSheet(THEME_QSS)
