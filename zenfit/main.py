from contextlib import asynccontextmanager

from fastapi import FastAPI

from zenfit.db import make_engine, make_sessionmaker
from zenfit.kernel.engine import HabitEngine
from zenfit.kernel.projection_router import router as projection_router
from zenfit.kernel.router import router as habit_router
from zenfit.kernel.store import StateStore
from zenfit.logs import setup_logging

logger = setup_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    db_engine = make_engine()
    store = StateStore(make_sessionmaker(db_engine))
    if not await store.ensure_schema():
        logger.warning("State storage unavailable; starting from defaults and retrying on the next change")

    habit = HabitEngine(store)
    await habit.init()
    app.state.engine = habit
    try:
        yield
    finally:
        await habit.dispose()
        await db_engine.dispose()
        logger.info("Habit engine disposed")


app = FastAPI(title="ZenFit Habit Kernel", version="0.1.0", lifespan=lifespan)
app.include_router(habit_router)
app.include_router(projection_router)


@app.get("/")
async def root() -> dict:
    return {
        "status": "ok",
        "docs": "/docs",
        "health": "/health",
        "habit": {
            "state": "/habit/state",
            "complete": "/habit/complete",
            "reconcile": "/habit/reconcile",
            "activity": "/habit/activity",
            "activity_summary": "/habit/activity/summary",
            "profile": "/habit/profile",
            "onboarded": "/habit/onboarded",
            "motivation": "/habit/motivation",
        },
        "projection": {
            "simulation": "/projection/simulation",
            "chart": "/projection/chart",
        },
    }


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}
