from math import isclose

import pytest

from pom.core.progress import (
    ARC_SEGMENTS,
    MODE_COLORS,
    RenderMode,
    arc_points,
    format_duration,
    progress_fraction,
    render,
)
from pom.core.timer import PomodoroTimer, TimerSnapshot, TimerState


def _snapshot(state: TimerState, total: float, remaining: float) -> TimerSnapshot:
    return TimerSnapshot(
        state=state,
        total_seconds=total,
        remaining_seconds=remaining,
        elapsed_seconds=total - remaining,
        progress=0.0,
        focus_minutes=25,
        break_minutes=5,
        sessions_completed=0,
        is_break=state == TimerState.ON_BREAK,
    )


def test_format_duration() -> None:
    assert format_duration(754) == "12:34"
    assert format_duration(0) == "00:00"
    assert format_duration(59.9) == "00:59"
    assert format_duration(3600) == "60:00"
    assert format_duration(-5) == "00:00"


def test_progress_fraction() -> None:
    assert progress_fraction(1500, 1500) == 0.0
    assert progress_fraction(1500, 750) == 0.5
    assert progress_fraction(1500, 0) == 1.0


def test_progress_fraction_zero_total_is_complete() -> None:
    assert progress_fraction(0, 0) == 1.0


def test_render_running_shows_remaining_time() -> None:
    view = render(_snapshot(TimerState.RUNNING, 1500, 754))

    assert view.mode == RenderMode.NORMAL
    assert view.label == "12:34"
    assert isclose(view.angle_fraction, (1500 - 754) / 1500)
    assert view.color == MODE_COLORS[RenderMode.NORMAL]


def test_render_ready_is_normal_mode() -> None:
    view = render(PomodoroTimer(focus_minutes=25, now=0.0).snapshot())

    assert view.mode == RenderMode.NORMAL
    assert view.label == "25:00"
    assert view.angle_fraction == 0.0


@pytest.mark.parametrize(
    ("state", "mode", "caption"),
    [
        (TimerState.PAUSED, RenderMode.PAUSED, "Paused"),
        (TimerState.FINISHED, RenderMode.FINISHED, "Time's up!"),
        (TimerState.ON_BREAK, RenderMode.ON_BREAK, "On Break"),
    ],
)
def test_render_captions(state: TimerState, mode: RenderMode, caption: str) -> None:
    view = render(_snapshot(state, 300, 120))

    assert view.mode == mode
    assert view.label == caption
    assert view.color == MODE_COLORS[mode]


def test_render_zero_length_phase() -> None:
    timer = PomodoroTimer(focus_minutes=0, now=0.0)
    timer.start(now=0.0)

    view = render(timer.snapshot())

    assert view.angle_fraction == 1.0
    assert view.label == "00:00"


def test_arc_points_default_segments() -> None:
    points = arc_points(0.0, 0.0, 10.0, 0.5)

    assert len(points) == ARC_SEGMENTS + 1
    start_x, start_y = points[0]
    end_x, end_y = points[-1]
    # Starts at 12 o'clock, half a turn ends at 6 o'clock.
    assert isclose(start_x, 0.0, abs_tol=1e-9) and isclose(start_y, -10.0)
    assert isclose(end_x, 0.0, abs_tol=1e-9) and isclose(end_y, 10.0)


def test_arc_points_lie_on_circle() -> None:
    for x, y in arc_points(50.0, 40.0, 20.0, 0.8, segments=16):
        assert isclose((x - 50.0) ** 2 + (y - 40.0) ** 2, 400.0)


def test_arc_points_clamps_fraction_and_rejects_bad_segments() -> None:
    full = arc_points(0.0, 0.0, 1.0, 3.0, segments=4)
    assert isclose(full[-1][0], full[0][0], abs_tol=1e-9)
    assert isclose(full[-1][1], full[0][1], abs_tol=1e-9)

    empty = arc_points(0.0, 0.0, 1.0, 0.0, segments=4)
    assert len(set(empty)) == 1

    with pytest.raises(ValueError):
        arc_points(0.0, 0.0, 1.0, 0.5, segments=0)
