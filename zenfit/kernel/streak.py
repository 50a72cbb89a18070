"""Pure streak transitions — no I/O, no clock.

Dates are local calendar days formatted ``YYYY-MM-DD``. Continuity is
decided by plain string equality against "today" and "yesterday".
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo

DAY_FORMAT = "%Y-%m-%d"


def format_day(day: date) -> str:
    return day.strftime(DAY_FORMAT)


def parse_day(value: str) -> date:
    return datetime.strptime(value, DAY_FORMAT).date()


def previous_day(day: date) -> date:
    return day - timedelta(days=1)


def local_today(tz_name: str) -> date:
    """Current calendar date in the given zone."""
    return datetime.now(ZoneInfo(tz_name)).date()


@dataclass(frozen=True, slots=True)
class StreakState:
    streak: int = 0
    best_streak: int = 0
    last_activity_date: str | None = None
    today_completed: bool = False


def complete_day(state: StreakState, today: date) -> StreakState:
    """Record a completion on `today`.

    - already completed today: unchanged
    - last completion yesterday: streak + 1
    - anything else: streak restarts at 1
    """
    today_str = format_day(today)
    if state.last_activity_date == today_str:
        return replace(state, today_completed=True)

    if state.last_activity_date == format_day(previous_day(today)):
        streak = state.streak + 1
    else:
        streak = 1

    return StreakState(
        streak=streak,
        best_streak=max(state.best_streak, streak),
        last_activity_date=today_str,
        today_completed=True,
    )


def reconcile(state: StreakState, today: date) -> StreakState:
    """Recompute derived fields against `today`.

    The streak survives while the last completion is today or yesterday
    (grace window) and lapses to 0 otherwise. best_streak is never lowered.
    """
    today_str = format_day(today)
    alive = state.last_activity_date in (today_str, format_day(previous_day(today)))
    streak = state.streak if alive else 0
    return StreakState(
        streak=streak,
        best_streak=max(state.best_streak, streak),
        last_activity_date=state.last_activity_date,
        today_completed=state.last_activity_date == today_str,
    )
