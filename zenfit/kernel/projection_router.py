"""Projection HTTP router — body-composition trajectories."""

from __future__ import annotations

import random

from fastapi import APIRouter, Depends, HTTPException, Query

from zenfit.auth import require_api_key
from zenfit.kernel import projection
from zenfit.kernel.engine import HabitEngine, ProfileMissingError
from zenfit.kernel.models import ChartProjection, ProjectionInput, ProjectionResult
from zenfit.kernel.router import get_engine

router = APIRouter(prefix="/projection", tags=["projection"], dependencies=[Depends(require_api_key)])


def _rng(seed: int | None) -> random.Random | None:
    return random.Random(seed) if seed is not None else None


@router.get("/simulation", response_model=ProjectionResult)
async def simulation_for_user(engine: HabitEngine = Depends(get_engine)) -> ProjectionResult:
    try:
        return engine.project()
    except ProfileMissingError as exc:
        raise HTTPException(status_code=409, detail=str(exc))


@router.get("/chart", response_model=ChartProjection)
async def chart_for_user(
    engine: HabitEngine = Depends(get_engine),
    seed: int | None = Query(default=None, description="Seed for the maintain-goal weight jitter"),
) -> ChartProjection:
    try:
        return engine.project_chart(_rng(seed))
    except ProfileMissingError as exc:
        raise HTTPException(status_code=409, detail=str(exc))


@router.post("/simulation", response_model=ProjectionResult)
async def simulation(params: ProjectionInput) -> ProjectionResult:
    return projection.simulate_body_composition(params)


@router.post("/chart", response_model=ChartProjection)
async def chart(
    params: ProjectionInput,
    seed: int | None = Query(default=None, description="Seed for the maintain-goal weight jitter"),
) -> ChartProjection:
    return projection.chart_body_composition(params, _rng(seed))
