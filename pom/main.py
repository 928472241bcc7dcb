from __future__ import annotations

"""Точка входа приложения Pom.

Модуль разбирает аргументы командной строки, настраивает логирование,
подключает хранилище настроек и запускает главное окно.
"""

import argparse
import logging
import sys
from pathlib import Path

from PyQt6.QtWidgets import QApplication

from pom.core.settings import TimerSettings
from pom.data.storage import Storage
from pom.ui.main_window import MainWindow
from pom.ui.notifications import TrayNotifier
from pom.ui.styles import apply_theme


LOGGER = logging.getLogger("pom")
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def default_db_path() -> Path:
    """Возвращает стандартный путь к SQLite-файлу в текущей директории."""
    return Path.cwd() / "pom.db"


def setup_logging(log_path: str | Path | None = None, level: int = logging.INFO) -> logging.Handler:
    """Подключает обработчик к логгеру `pom`: файл, если путь задан, иначе stderr."""
    if log_path is not None:
        handler: logging.Handler = logging.FileHandler(log_path, encoding="utf-8")
    else:
        handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    LOGGER.setLevel(level)
    LOGGER.addHandler(handler)
    LOGGER.propagate = False
    return handler


def log_unhandled_exception(exc_type, exc, tb) -> None:
    LOGGER.error("Unhandled exception", exc_info=(exc_type, exc, tb))


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="pom", description="Pomodoro countdown timer")
    parser.add_argument("--focus", type=int, default=None, metavar="MIN", help="focus length in minutes (0-60)")
    parser.add_argument("--break", dest="break_minutes", type=int, default=None, metavar="MIN", help="break length in minutes (0-60)")
    parser.add_argument("--db", type=Path, default=None, help="settings database path")
    parser.add_argument("--log-file", type=Path, default=None, help="write logs to this file instead of stderr")
    parser.add_argument("--debug", action="store_true", help="log timer transitions")
    return parser.parse_args(argv)


def resolve_settings(args: argparse.Namespace, stored: TimerSettings) -> TimerSettings:
    """Командная строка перекрывает сохраненные значения."""
    focus = stored.focus_minutes if args.focus is None else args.focus
    brk = stored.break_minutes if args.break_minutes is None else args.break_minutes
    return TimerSettings.clamped(focus, brk)


def main(argv: list[str] | None = None) -> int:
    """Создает зависимости приложения и запускает главный UI-цикл."""
    args = parse_args(argv)
    setup_logging(args.log_file, logging.DEBUG if args.debug else logging.INFO)
    sys.excepthook = log_unhandled_exception

    app = QApplication(sys.argv[:1])
    app.setApplicationName("Pom")
    apply_theme(app)

    storage = Storage(args.db or default_db_path())
    storage.init_db()
    settings = resolve_settings(args, storage.load_timer_settings())
    LOGGER.info("Starting with %d/%d min", settings.focus_minutes, settings.break_minutes)

    window = MainWindow(storage=storage, sink=TrayNotifier(app), settings=settings)
    window.show()
    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
