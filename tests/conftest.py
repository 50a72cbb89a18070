"""Shared fixtures for the test suite."""

from __future__ import annotations

from datetime import date, timedelta

import pytest
from httpx import ASGITransport, AsyncClient

from zenfit.kernel.engine import HabitEngine
from zenfit.kernel.models import ActivityLogEntry, UserProfile
from zenfit.kernel.router import get_engine
from zenfit.main import app


# ---------------------------------------------------------------------------
# In-memory stand-ins (no database needed)
# ---------------------------------------------------------------------------

class FakeStore:
    """Minimal stand-in for StateStore that keeps the payload in memory."""

    def __init__(self, payload: str | None = None):
        self.payload = payload
        self.saves: list[str] = []
        self.fail_saves = False
        self.fail_loads = False

    async def load(self) -> str | None:
        if self.fail_loads:
            return None
        return self.payload

    async def save(self, payload: str) -> bool:
        if self.fail_saves:
            return False
        self.payload = payload
        self.saves.append(payload)
        return True


class FakeClock:
    """Callable clock pinned to a settable date."""

    def __init__(self, today: date):
        self.today = today

    def __call__(self) -> date:
        return self.today

    def advance(self, days: int = 1) -> date:
        self.today += timedelta(days=days)
        return self.today


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def clock():
    return FakeClock(date(2026, 3, 10))


@pytest.fixture()
def store():
    return FakeStore()


@pytest.fixture()
async def engine(store, clock):
    habit = HabitEngine(store, clock=clock)
    await habit.init()
    yield habit
    await habit.dispose()


@pytest.fixture()
async def client(engine):
    app.dependency_overrides[get_engine] = lambda: engine
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


def make_profile(**overrides) -> UserProfile:
    """Helper to build the reference profile (75 kg → 70 kg, male, 175 cm, 25 y)."""
    defaults = dict(
        name="Minji",
        gender="male",
        age=25,
        height=175.0,
        weight=75.0,
        target_weight=70.0,
        goal="lose",
        experience="beginner",
        workout_days=[1, 3, 5],
    )
    defaults.update(overrides)
    return UserProfile(**defaults)


def make_entry(day: str, **overrides) -> ActivityLogEntry:
    defaults = dict(date=day, completed=True, exercise_count=5, duration_minutes=30.0, calories_burned=400.0)
    defaults.update(overrides)
    return ActivityLogEntry(**defaults)
