from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from enum import Enum

from pom.core.settings import DEFAULT_BREAK_MINUTES, DEFAULT_FOCUS_MINUTES, clamp_minutes


LOGGER = logging.getLogger(__name__)

NOTIFICATION_TITLE = "Pomodoro Timer"


class TimerState(str, Enum):
    READY = "ready"
    RUNNING = "running"
    PAUSED = "paused"
    FINISHED = "finished"
    ON_BREAK = "on_break"


class NotifyEvent(str, Enum):
    STARTED = "started"
    PAUSED = "paused"
    RESUMED = "resumed"
    FINISHED = "finished"
    BREAK_STARTED = "break_started"


NOTIFY_MESSAGES = {
    NotifyEvent.STARTED: "Timer started.",
    NotifyEvent.PAUSED: "Timer paused.",
    NotifyEvent.RESUMED: "Timer resumed.",
    NotifyEvent.FINISHED: "Time's up!",
    NotifyEvent.BREAK_STARTED: "Break started. Relax!",
}


@dataclass(frozen=True)
class Notification:
    event: NotifyEvent
    message: str
    title: str = NOTIFICATION_TITLE

    @classmethod
    def of(cls, event: NotifyEvent) -> "Notification":
        return cls(event=event, message=NOTIFY_MESSAGES[event])


@dataclass(frozen=True)
class TimerSnapshot:
    state: TimerState
    total_seconds: float
    remaining_seconds: float
    elapsed_seconds: float
    progress: float
    focus_minutes: int
    break_minutes: int
    sessions_completed: int
    is_break: bool


class PomodoroTimer:
    """Self-driving focus/break countdown, detached from any UI framework.

    Remaining time is derived from the delta between successive polls, so the
    host only has to call :meth:`advance` once per frame. Every command and
    every poll returns the notifications it produced, in order.
    """

    def __init__(
        self,
        focus_minutes: int = DEFAULT_FOCUS_MINUTES,
        break_minutes: int = DEFAULT_BREAK_MINUTES,
        now: float | None = None,
    ) -> None:
        if now is None:
            now = time.monotonic()
        self._focus_minutes = clamp_minutes(focus_minutes)
        self._break_minutes = clamp_minutes(break_minutes)
        self._state = TimerState.READY
        self._total_sec = float(self._focus_minutes * 60)
        self._remaining_sec = self._total_sec
        self._sessions_completed = 0
        self._last_poll = now

    @property
    def state(self) -> TimerState:
        return self._state

    @property
    def total_seconds(self) -> float:
        return self._total_sec

    @property
    def remaining_seconds(self) -> float:
        return self._remaining_sec

    @property
    def sessions_completed(self) -> int:
        return self._sessions_completed

    @property
    def focus_minutes(self) -> int:
        return self._focus_minutes

    @focus_minutes.setter
    def focus_minutes(self, value: int) -> None:
        # Read at the next focus start only.
        self._focus_minutes = clamp_minutes(value)

    @property
    def break_minutes(self) -> int:
        return self._break_minutes

    @break_minutes.setter
    def break_minutes(self, value: int) -> None:
        self._break_minutes = clamp_minutes(value)

    @property
    def is_active(self) -> bool:
        return self._state in {TimerState.RUNNING, TimerState.PAUSED, TimerState.ON_BREAK}

    def configure(self, focus_minutes: int, break_minutes: int) -> None:
        self.focus_minutes = focus_minutes
        self.break_minutes = break_minutes

    def start(self, now: float | None = None) -> list[Notification]:
        if now is None:
            now = time.monotonic()
        self._start_focus(now)
        return [Notification.of(NotifyEvent.STARTED)]

    def pause(self, now: float | None = None) -> list[Notification]:
        """Freeze the countdown; `now` is unused and kept so every command takes it."""
        if self._state != TimerState.RUNNING:
            return []
        self._state = TimerState.PAUSED
        LOGGER.debug("Paused with %.1fs remaining", self._remaining_sec)
        return [Notification.of(NotifyEvent.PAUSED)]

    def resume(self, now: float | None = None) -> list[Notification]:
        if self._state != TimerState.PAUSED:
            return []
        if now is None:
            now = time.monotonic()
        self._state = TimerState.RUNNING
        self._last_poll = now
        LOGGER.debug("Resumed with %.1fs remaining", self._remaining_sec)
        return [Notification.of(NotifyEvent.RESUMED)]

    def reset(self) -> list[Notification]:
        self._remaining_sec = self._total_sec
        self._state = TimerState.READY
        LOGGER.debug("Reset to %.0fs", self._total_sec)
        return []

    def advance(self, now: float | None = None) -> list[Notification]:
        if self._state not in {TimerState.RUNNING, TimerState.ON_BREAK}:
            return []
        if now is None:
            now = time.monotonic()

        elapsed = max(0.0, now - self._last_poll)
        self._last_poll = now
        if elapsed == 0.0:
            return []
        if self._remaining_sec > elapsed:
            self._remaining_sec -= elapsed
            return []

        self._remaining_sec = 0.0
        if self._state == TimerState.RUNNING:
            self._sessions_completed += 1
            self._state = TimerState.FINISHED
            LOGGER.debug("Focus phase finished, %d completed", self._sessions_completed)
            self._start_break(now)
            return [Notification.of(NotifyEvent.FINISHED), Notification.of(NotifyEvent.BREAK_STARTED)]

        self._state = TimerState.READY
        LOGGER.debug("Break finished")
        self._start_focus(now)
        return [Notification.of(NotifyEvent.FINISHED), Notification.of(NotifyEvent.STARTED)]

    def snapshot(self) -> TimerSnapshot:
        total = self._total_sec
        remaining = min(total, max(0.0, self._remaining_sec))
        progress = ((total - remaining) / total) if total > 0 else 1.0
        return TimerSnapshot(
            state=self._state,
            total_seconds=total,
            remaining_seconds=remaining,
            elapsed_seconds=total - remaining,
            progress=max(0.0, min(1.0, progress)),
            focus_minutes=self._focus_minutes,
            break_minutes=self._break_minutes,
            sessions_completed=self._sessions_completed,
            is_break=self._state == TimerState.ON_BREAK,
        )

    def _start_focus(self, now: float) -> None:
        self._start_phase(TimerState.RUNNING, self._focus_minutes, now)

    def _start_break(self, now: float) -> None:
        self._start_phase(TimerState.ON_BREAK, self._break_minutes, now)

    def _start_phase(self, state: TimerState, minutes: int, now: float) -> None:
        self._state = state
        self._total_sec = float(minutes * 60)
        self._remaining_sec = self._total_sec
        self._last_poll = now
        LOGGER.debug("Phase %s started for %d min", state.value, minutes)
