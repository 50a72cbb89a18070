"""Tests for activity log summaries."""

from zenfit.kernel.activity import active_days, monthly_summary, total_activity_count
from tests.conftest import make_entry

LOG = [
    make_entry("2026-02-27", duration_minutes=20.0, calories_burned=200.0),
    make_entry("2026-03-01", duration_minutes=30.0, calories_burned=300.0),
    make_entry("2026-03-01", duration_minutes=15.0, calories_burned=100.0),
    make_entry("2026-03-04", completed=False, duration_minutes=5.0, calories_burned=40.0),
]


class TestActivitySummaries:
    def test_total_counts_duplicates(self):
        assert total_activity_count(LOG) == 4

    def test_active_days_distinct_completed(self):
        assert active_days(LOG) == ["2026-02-27", "2026-03-01"]

    def test_monthly(self):
        summary = monthly_summary(LOG, 2026, 3)
        assert summary.workouts == 3
        assert summary.minutes == 50.0
        assert summary.calories == 440.0
        assert summary.active_dates == ["2026-03-01"]

    def test_empty_month(self):
        summary = monthly_summary(LOG, 2026, 4)
        assert summary.workouts == 0
        assert summary.minutes == 0
        assert summary.active_dates == []

    def test_empty_log(self):
        assert total_activity_count([]) == 0
        assert active_days([]) == []
