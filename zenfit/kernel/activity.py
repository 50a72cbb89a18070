"""Activity log summaries — pure, never raises."""

from __future__ import annotations

from collections.abc import Sequence

from zenfit.kernel.models import ActivityLogEntry, MonthlySummary


def total_activity_count(log: Sequence[ActivityLogEntry]) -> int:
    """Every log entry counts, duplicates on the same date included."""
    return len(log)


def active_days(log: Sequence[ActivityLogEntry]) -> list[str]:
    """Distinct dates with a completed entry, sorted."""
    return sorted({entry.date for entry in log if entry.completed})


def monthly_summary(log: Sequence[ActivityLogEntry], year: int, month: int) -> MonthlySummary:
    prefix = f"{year:04d}-{month:02d}-"
    entries = [e for e in log if e.date.startswith(prefix)]
    return MonthlySummary(
        year=year,
        month=month,
        workouts=len(entries),
        minutes=sum(e.duration_minutes for e in entries),
        calories=sum(e.calories_burned for e in entries),
        active_dates=active_days(entries),
    )
