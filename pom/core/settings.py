from __future__ import annotations

"""Настройки длительности фаз с ограничением диапазона."""

from dataclasses import dataclass
from typing import Any


MIN_MINUTES = 0
MAX_MINUTES = 60
DEFAULT_FOCUS_MINUTES = 25
DEFAULT_BREAK_MINUTES = 5


def clamp_minutes(value: Any) -> int:
    """Приводит значение к целому числу минут в диапазоне 0..60."""
    try:
        minutes = int(value)
    except OverflowError:
        # Бесконечность: прижимаем к границе по знаку.
        return MAX_MINUTES if value > 0 else MIN_MINUTES
    except (TypeError, ValueError):
        return MIN_MINUTES
    return max(MIN_MINUTES, min(MAX_MINUTES, minutes))


@dataclass(frozen=True)
class TimerSettings:
    focus_minutes: int = DEFAULT_FOCUS_MINUTES
    break_minutes: int = DEFAULT_BREAK_MINUTES

    @classmethod
    def clamped(cls, focus_minutes: Any, break_minutes: Any) -> "TimerSettings":
        return cls(
            focus_minutes=clamp_minutes(focus_minutes),
            break_minutes=clamp_minutes(break_minutes),
        )

    def to_dict(self) -> dict[str, int]:
        return {"focus_minutes": self.focus_minutes, "break_minutes": self.break_minutes}
