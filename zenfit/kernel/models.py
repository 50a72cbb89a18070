"""Habit kernel contract — Pydantic v2 models.

Wire names are camelCase (the persisted snapshot format); Python attributes
are snake_case. Both spellings are accepted on input.
"""

from __future__ import annotations

import re
from enum import Enum

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

DAY_PATTERN = r"^\d{4}-\d{2}-\d{2}$"
_DAY_RE = re.compile(DAY_PATTERN)


class Gender(str, Enum):
    male = "male"
    female = "female"


class Goal(str, Enum):
    lose = "lose"
    gain = "gain"
    maintain = "maintain"


class Experience(str, Enum):
    beginner = "beginner"
    intermediate = "intermediate"
    advanced = "advanced"


class WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class UserProfile(WireModel):
    name: str
    gender: Gender
    age: int = Field(gt=0)
    height: float = Field(gt=0)  # cm
    weight: float = Field(gt=0)  # kg, current
    target_weight: float  # kg
    goal: Goal
    experience: Experience = Experience.beginner
    workout_days: list[int] = Field(default_factory=list)  # 0=Sunday

    @field_validator("workout_days")
    @classmethod
    def _normalize_days(cls, value: list[int]) -> list[int]:
        for day in value:
            if not 0 <= day <= 6:
                raise ValueError(f"workout day out of range 0-6: {day}")
        return sorted(set(value))


class ActivityLogEntry(WireModel):
    date: str = Field(pattern=DAY_PATTERN)
    completed: bool = True
    exercise_count: int = Field(
        default=0,
        ge=0,
        validation_alias=AliasChoices("exerciseCount", "exercise_count", "exercises"),
    )
    duration_minutes: float = Field(
        default=0.0,
        ge=0,
        validation_alias=AliasChoices("durationMinutes", "duration_minutes", "duration"),
    )
    calories_burned: float = Field(
        default=0.0,
        ge=0,
        validation_alias=AliasChoices("caloriesBurned", "calories_burned", "calories"),
    )


class AppSnapshot(WireModel):
    """Everything that is persisted, as one unit. todayCompleted is derived, never stored."""

    onboarded: bool = False
    profile: UserProfile | None = None
    streak: int = Field(default=0, ge=0)
    best_streak: int = Field(default=0, ge=0)
    last_activity_date: str | None = None
    activity_log: list[ActivityLogEntry] = Field(default_factory=list)

    @field_validator("last_activity_date")
    @classmethod
    def _check_day(cls, value: str | None) -> str | None:
        if value is not None and not _DAY_RE.match(value):
            raise ValueError(f"expected YYYY-MM-DD, got {value!r}")
        return value


class StreakView(WireModel):
    streak: int
    best_streak: int
    last_activity_date: str | None = None
    today_completed: bool = False


class EngineState(WireModel):
    """Read-only view handed to clients."""

    onboarded: bool
    profile: UserProfile | None = None
    streak: int
    best_streak: int
    last_activity_date: str | None = None
    today_completed: bool
    total_activity_count: int


# ---------------------------------------------------------------------------
# Projection
# ---------------------------------------------------------------------------

class ProjectionInput(WireModel):
    current_weight_kg: float = Field(gt=0)
    target_weight_kg: float
    height_cm: float = Field(gt=0)
    age_years: int = Field(gt=0)
    gender: Gender
    goal: Goal
    streak_days: int = Field(default=0, ge=0)
    total_activity_count: int = Field(default=0, ge=0)


class ProjectionPoint(WireModel):
    month: int
    weight: float
    body_fat_percent: float
    muscle_mass_kg: float
    narrative: str


class ProjectionResult(WireModel):
    effort_factor: float
    points: list[ProjectionPoint] = Field(default_factory=list)


class ChartPoint(WireModel):
    month: int
    label: str
    weight: float
    body_fat_percent: float
    muscle_mass_kg: float


class ChartProjection(WireModel):
    deterministic: bool = True
    points: list[ChartPoint] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Motivation & activity summaries
# ---------------------------------------------------------------------------

class SkipRisk(WireModel):
    days: int
    next_skip_chance: int  # percent
    label: str


class SkipConsequences(WireModel):
    skip_chain: list[SkipRisk] = Field(default_factory=list)
    streak_loss: int
    habit_reset_days: int


class KeepGoingBenefits(WireModel):
    new_streak: int
    projected_weight_1w: float
    projected_weight_1m: float
    projected_weight_3m: float
    strength_gain_1w: int  # percent
    endurance_1m: int  # percent
    days_to_goal: int | None = None


class MotivationCard(WireModel):
    today_completed: bool
    do_message: str
    skip_message: str
    skip: SkipConsequences
    keep_going: KeepGoingBenefits


class MonthlySummary(WireModel):
    year: int
    month: int
    workouts: int = 0
    minutes: float = 0.0
    calories: float = 0.0
    active_dates: list[str] = Field(default_factory=list)
