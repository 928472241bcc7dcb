from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from math import cos, pi, sin

from pom.core.timer import TimerSnapshot, TimerState


ARC_SEGMENTS = 100
ARC_START_ANGLE = -pi / 2


class RenderMode(str, Enum):
    NORMAL = "normal"
    PAUSED = "paused"
    FINISHED = "finished"
    ON_BREAK = "on_break"


MODE_CAPTIONS = {
    RenderMode.PAUSED: "Paused",
    RenderMode.FINISHED: "Time's up!",
    RenderMode.ON_BREAK: "On Break",
}

MODE_COLORS = {
    RenderMode.NORMAL: "#64c864",
    RenderMode.PAUSED: "#ffff00",
    RenderMode.FINISHED: "#8b0000",
    RenderMode.ON_BREAK: "#add8e6",
}

_STATE_MODES = {
    TimerState.READY: RenderMode.NORMAL,
    TimerState.RUNNING: RenderMode.NORMAL,
    TimerState.PAUSED: RenderMode.PAUSED,
    TimerState.FINISHED: RenderMode.FINISHED,
    TimerState.ON_BREAK: RenderMode.ON_BREAK,
}


@dataclass(frozen=True)
class ProgressView:
    label: str
    angle_fraction: float
    mode: RenderMode
    color: str


def format_duration(seconds: float) -> str:
    whole = int(max(0.0, seconds))
    return f"{whole // 60:02d}:{whole % 60:02d}"


def progress_fraction(total_seconds: float, remaining_seconds: float) -> float:
    # A zero-length phase counts as already complete.
    if total_seconds <= 0:
        return 1.0
    fraction = (total_seconds - remaining_seconds) / total_seconds
    return max(0.0, min(1.0, fraction))


def mode_for_state(state: TimerState) -> RenderMode:
    return _STATE_MODES[state]


def render(snapshot: TimerSnapshot) -> ProgressView:
    """Map a timer snapshot to the text, arc fraction and color the dial draws."""
    mode = mode_for_state(snapshot.state)
    if mode == RenderMode.NORMAL:
        label = format_duration(snapshot.remaining_seconds)
    else:
        label = MODE_CAPTIONS[mode]
    return ProgressView(
        label=label,
        angle_fraction=progress_fraction(snapshot.total_seconds, snapshot.remaining_seconds),
        mode=mode,
        color=MODE_COLORS[mode],
    )


def arc_points(
    cx: float,
    cy: float,
    radius: float,
    fraction: float,
    segments: int = ARC_SEGMENTS,
    start_angle: float = ARC_START_ANGLE,
) -> list[tuple[float, float]]:
    """Sample the progress arc as a polyline of ``segments + 1`` points.

    The sweep runs clockwise in screen coordinates (y grows downwards) from
    ``start_angle`` over ``fraction`` of a full turn.
    """
    if segments < 1:
        raise ValueError("segments must be at least 1")
    fraction = max(0.0, min(1.0, fraction))
    step = fraction * 2 * pi / segments
    return [
        (cx + radius * cos(start_angle + i * step), cy + radius * sin(start_angle + i * step))
        for i in range(segments + 1)
    ]
