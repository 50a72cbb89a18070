"""Habit engine — owns profile, streak and activity log for one user.

An explicit context object: create it with a store, ``await init()`` once
at startup, ``await dispose()`` at shutdown. Mutators are synchronous and
update memory first; the resulting snapshot is handed to the persistence
queue. In-memory state is authoritative; storage is a best-effort copy.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Callable
from datetime import date
from functools import partial

from zenfit.config import settings
from zenfit.kernel import activity, projection, streak as streak_rules
from zenfit.kernel.models import (
    ActivityLogEntry,
    AppSnapshot,
    ChartProjection,
    EngineState,
    ProjectionInput,
    ProjectionResult,
    StreakView,
    UserProfile,
)
from zenfit.kernel.persistence import PersistenceQueue
from zenfit.kernel.snapshot import dump_snapshot, load_snapshot
from zenfit.kernel.store import StateStore
from zenfit.kernel.streak import StreakState

logger = logging.getLogger(__name__)


class ProfileMissingError(LookupError):
    """Raised by operations that need a profile before onboarding finished."""


class HabitEngine:
    def __init__(
        self,
        store: StateStore,
        clock: Callable[[], date] | None = None,
    ) -> None:
        self._store = store
        self._queue = PersistenceQueue(store)
        self._clock = clock or partial(streak_rules.local_today, settings.default_tz)
        self._initialized = False

        self._onboarded = False
        self._profile: UserProfile | None = None
        self._streak = StreakState()
        self._log: list[ActivityLogEntry] = []

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def init(self) -> None:
        """Hydrate from storage and reconcile against today. Safe to call twice."""
        if self._initialized:
            return
        if self._queue.closed:
            self._queue = PersistenceQueue(self._store)
        self._apply(load_snapshot(await self._store.load()))
        self.reconcile()
        self._initialized = True
        logger.info(
            "Habit engine ready: onboarded=%s streak=%d best=%d entries=%d",
            self._onboarded,
            self._streak.streak,
            self._streak.best_streak,
            len(self._log),
        )

    async def dispose(self) -> None:
        await self._queue.close()
        self._initialized = False

    async def flush(self) -> bool:
        return await self._queue.flush()

    @property
    def initialized(self) -> bool:
        return self._initialized

    @property
    def queue(self) -> PersistenceQueue:
        return self._queue

    # ------------------------------------------------------------------
    # Selectors
    # ------------------------------------------------------------------

    @property
    def onboarded(self) -> bool:
        return self._onboarded

    @property
    def profile(self) -> UserProfile | None:
        return self._profile

    @property
    def streak(self) -> int:
        return self._streak.streak

    @property
    def best_streak(self) -> int:
        return self._streak.best_streak

    @property
    def last_activity_date(self) -> str | None:
        return self._streak.last_activity_date

    @property
    def today_completed(self) -> bool:
        return self._streak.today_completed

    @property
    def activity_log(self) -> tuple[ActivityLogEntry, ...]:
        return tuple(self._log)

    @property
    def total_activity_count(self) -> int:
        return activity.total_activity_count(self._log)

    def streak_view(self) -> StreakView:
        return StreakView(
            streak=self.streak,
            best_streak=self.best_streak,
            last_activity_date=self.last_activity_date,
            today_completed=self.today_completed,
        )

    def state(self) -> EngineState:
        return EngineState(
            onboarded=self._onboarded,
            profile=self._profile,
            streak=self.streak,
            best_streak=self.best_streak,
            last_activity_date=self.last_activity_date,
            today_completed=self.today_completed,
            total_activity_count=self.total_activity_count,
        )

    def snapshot(self) -> AppSnapshot:
        return AppSnapshot(
            onboarded=self._onboarded,
            profile=self._profile,
            streak=self._streak.streak,
            best_streak=self._streak.best_streak,
            last_activity_date=self._streak.last_activity_date,
            activity_log=list(self._log),
        )

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def complete_today(self) -> StreakView:
        """Mark today done. A second call on the same day changes nothing."""
        today = self._clock()
        before = self._streak
        self._streak = streak_rules.complete_day(before, today)
        if self._streak.last_activity_date != before.last_activity_date:
            logger.info("Completed %s: streak %d → %d", self._streak.last_activity_date, before.streak, self.streak)
            self._persist()
        return self.streak_view()

    def reconcile(self) -> StreakView:
        """Re-check the streak against the clock. Does not persist."""
        before = self._streak
        self._streak = streak_rules.reconcile(before, self._clock())
        if before.streak and not self._streak.streak:
            logger.info("Streak of %d lapsed (last activity %s)", before.streak, before.last_activity_date)
        return self.streak_view()

    def add_activity_entry(self, entry: ActivityLogEntry, replace_same_date: bool = False) -> None:
        """Append to the log. Does not affect the streak.

        With ``replace_same_date`` the new entry supersedes existing entries
        for that date (last write per date wins) instead of being appended
        alongside them.
        """
        if replace_same_date:
            self._log = [e for e in self._log if e.date != entry.date]
        self._log.append(entry)
        self._persist()

    def set_profile(self, profile: UserProfile) -> None:
        self._profile = profile
        self._persist()

    def set_onboarded(self, flag: bool) -> None:
        self._onboarded = flag
        self._persist()

    def reset(self) -> None:
        """Back to fresh-install state; the stored snapshot is overwritten."""
        logger.warning("Resetting habit state (had %d log entries)", len(self._log))
        self._apply(AppSnapshot())
        self._persist()

    # ------------------------------------------------------------------
    # Projections
    # ------------------------------------------------------------------

    def _projection_input(self) -> ProjectionInput:
        if self._profile is None:
            raise ProfileMissingError("No profile set; finish onboarding first")
        return projection.input_from_profile(self._profile, self.streak, self.total_activity_count)

    def project(self) -> ProjectionResult:
        return projection.simulate_body_composition(self._projection_input())

    def project_chart(self, rng: random.Random | None = None) -> ChartProjection:
        return projection.chart_body_composition(self._projection_input(), rng)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _apply(self, snap: AppSnapshot) -> None:
        self._onboarded = snap.onboarded
        self._profile = snap.profile
        self._streak = StreakState(
            streak=snap.streak,
            best_streak=snap.best_streak,
            last_activity_date=snap.last_activity_date,
        )
        self._log = list(snap.activity_log)

    def _persist(self) -> None:
        self._queue.submit(dump_snapshot(self.snapshot()))
