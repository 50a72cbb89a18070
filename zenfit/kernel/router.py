"""Habit HTTP router — streak, activity log, profile."""

from __future__ import annotations

from fastapi import APIRouter, Body, Depends, HTTPException, Query, Request

from zenfit.auth import require_api_key
from zenfit.kernel import activity
from zenfit.kernel.engine import HabitEngine
from zenfit.kernel.models import (
    ActivityLogEntry,
    EngineState,
    MonthlySummary,
    MotivationCard,
    StreakView,
    UserProfile,
)
from zenfit.kernel.motivation import motivation_card
from zenfit.kernel.streak import parse_day

router = APIRouter(prefix="/habit", tags=["habit"], dependencies=[Depends(require_api_key)])


def get_engine(request: Request) -> HabitEngine:
    return request.app.state.engine


# ---------------------------------------------------------------------------
# State & streak
# ---------------------------------------------------------------------------


@router.get("/state", response_model=EngineState)
async def read_state(engine: HabitEngine = Depends(get_engine)) -> EngineState:
    return engine.state()


@router.post("/complete", response_model=StreakView)
async def complete_today(engine: HabitEngine = Depends(get_engine)) -> StreakView:
    return engine.complete_today()


@router.post("/reconcile", response_model=StreakView)
async def reconcile(engine: HabitEngine = Depends(get_engine)) -> StreakView:
    """Re-check the streak against today's date (e.g. on app resume)."""
    return engine.reconcile()


@router.post("/reset", response_model=EngineState)
async def reset(engine: HabitEngine = Depends(get_engine)) -> EngineState:
    engine.reset()
    return engine.state()


# ---------------------------------------------------------------------------
# Activity log
# ---------------------------------------------------------------------------


@router.get("/activity", response_model=list[ActivityLogEntry])
async def list_activity(engine: HabitEngine = Depends(get_engine)) -> list[ActivityLogEntry]:
    return list(engine.activity_log)


@router.post("/activity", response_model=EngineState, status_code=201)
async def add_activity(
    entry: ActivityLogEntry,
    engine: HabitEngine = Depends(get_engine),
    replace_same_date: bool = Query(default=False, description="Replace entries already logged for this date"),
) -> EngineState:
    try:
        parse_day(entry.date)
    except ValueError:
        raise HTTPException(status_code=422, detail=f"Invalid date: {entry.date}")
    engine.add_activity_entry(entry, replace_same_date=replace_same_date)
    return engine.state()


@router.get("/activity/summary", response_model=MonthlySummary)
async def activity_summary(
    engine: HabitEngine = Depends(get_engine),
    year: int = Query(..., ge=1970, le=9999),
    month: int = Query(..., ge=1, le=12),
) -> MonthlySummary:
    return activity.monthly_summary(engine.activity_log, year, month)


# ---------------------------------------------------------------------------
# Profile & onboarding
# ---------------------------------------------------------------------------


@router.put("/profile", response_model=UserProfile)
async def put_profile(profile: UserProfile, engine: HabitEngine = Depends(get_engine)) -> UserProfile:
    engine.set_profile(profile)
    return profile


@router.put("/onboarded", response_model=EngineState)
async def put_onboarded(
    onboarded: bool = Body(..., embed=True),
    engine: HabitEngine = Depends(get_engine),
) -> EngineState:
    engine.set_onboarded(onboarded)
    return engine.state()


@router.get("/motivation", response_model=MotivationCard)
async def motivation(engine: HabitEngine = Depends(get_engine)) -> MotivationCard:
    profile = engine.profile
    if profile is None:
        raise HTTPException(status_code=409, detail="No profile set; finish onboarding first")
    return motivation_card(
        engine.streak,
        engine.today_completed,
        profile.goal,
        profile.weight,
        profile.target_weight,
    )
