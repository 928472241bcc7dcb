from __future__ import annotations

"""SQLite-слой хранения настроек таймера и геометрии окна."""

import binascii
import json
import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator

from pom.core.settings import DEFAULT_BREAK_MINUTES, DEFAULT_FOCUS_MINUTES, TimerSettings


LOGGER = logging.getLogger(__name__)

SCHEMA_VERSION = 1
TIMER_SETTINGS_KEY = "timer"
GEOMETRY_KEY = "window_geometry"


class Storage:
    """Инкапсулирует подключение к SQLite и транзакционные операции."""
    def __init__(self, db_path: str | Path) -> None:
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    @contextmanager
    def _transaction(self) -> Iterator[sqlite3.Connection]:
        conn = self._connect()
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def init_db(self) -> None:
        """Создает таблицы при первом запуске."""
        with self._transaction() as conn:
            conn.execute("CREATE TABLE IF NOT EXISTS schema_version (version INTEGER NOT NULL)")
            row = conn.execute("SELECT version FROM schema_version LIMIT 1").fetchone()
            if not row:
                conn.execute("INSERT INTO schema_version(version) VALUES (?)", (SCHEMA_VERSION,))
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS settings(
                    key TEXT PRIMARY KEY,
                    value TEXT
                )
                """
            )
        LOGGER.debug("Storage ready at %s", self.db_path)

    def get_setting(self, key: str, default: Any = None) -> Any:
        conn = self._connect()
        try:
            row = conn.execute("SELECT value FROM settings WHERE key = ?", (key,)).fetchone()
        finally:
            conn.close()
        if not row:
            return default
        raw = row["value"]
        try:
            return json.loads(raw)
        except (TypeError, json.JSONDecodeError):
            return raw

    def set_setting(self, key: str, value: Any) -> None:
        payload = json.dumps(value)
        with self._transaction() as conn:
            conn.execute(
                "INSERT INTO settings(key, value) VALUES(?, ?) ON CONFLICT(key) DO UPDATE SET value=excluded.value",
                (key, payload),
            )

    def load_timer_settings(self) -> TimerSettings:
        """Читает длительности фаз; битые значения заменяются значениями по умолчанию."""
        raw = self.get_setting(TIMER_SETTINGS_KEY, {})
        if not isinstance(raw, dict):
            LOGGER.warning("Ignoring malformed timer settings: %r", raw)
            raw = {}
        return TimerSettings.clamped(
            raw.get("focus_minutes", DEFAULT_FOCUS_MINUTES),
            raw.get("break_minutes", DEFAULT_BREAK_MINUTES),
        )

    def save_timer_settings(self, settings: TimerSettings) -> None:
        clamped = TimerSettings.clamped(settings.focus_minutes, settings.break_minutes)
        self.set_setting(TIMER_SETTINGS_KEY, clamped.to_dict())

    def load_geometry(self) -> bytes | None:
        raw = self.get_setting(GEOMETRY_KEY)
        if not isinstance(raw, str) or not raw:
            return None
        try:
            return binascii.unhexlify(raw)
        except (binascii.Error, ValueError):
            LOGGER.warning("Ignoring malformed window geometry")
            return None

    def save_geometry(self, geometry: bytes) -> None:
        self.set_setting(GEOMETRY_KEY, binascii.hexlify(bytes(geometry)).decode("ascii"))
