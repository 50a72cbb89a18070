"""Body-composition projection — pure math, no I/O.

Two independent models live here:

- ``simulate_body_composition``: additive monthly deltas scaled by an
  effort factor derived from streak and activity history.
- ``chart_body_composition``: linear interpolation toward the target
  weight with percentage-based body-fat decay. Its ``maintain`` branch
  adds a random weight jitter and is therefore not deterministic unless a
  seeded ``random.Random`` is passed in.

Both are approximations for motivation, not medical estimates.
"""

from __future__ import annotations

import math
import random

from zenfit.kernel.milestones import PROJECTION_MONTHS, chart_label, narrative_for
from zenfit.kernel.models import (
    ChartPoint,
    ChartProjection,
    Gender,
    Goal,
    ProjectionInput,
    ProjectionPoint,
    ProjectionResult,
    UserProfile,
)

BODY_FAT_MIN = 5.0
BODY_FAT_MAX = 45.0

# goal → (Δweight kg, Δbody-fat points, Δmuscle kg) per month at effort 1.0
MONTHLY_RATES: dict[Goal, tuple[float, float, float]] = {
    Goal.lose: (-0.8, -0.7, 0.15),
    Goal.gain: (0.4, -0.3, 0.35),
    Goal.maintain: (-0.2, -0.4, 0.2),
}

# Chart variant: goal → (body-fat decay share, muscle growth share) over 6 months
CHART_RATES: dict[Goal, tuple[float, float]] = {
    Goal.lose: (0.25, 0.05),
    Goal.gain: (0.10, 0.15),
    Goal.maintain: (0.15, 0.08),
}
CHART_BODY_FAT_BOUNDS: dict[Gender, tuple[float, float]] = {
    Gender.male: (5.0, 40.0),
    Gender.female: (10.0, 50.0),
}
MAINTAIN_JITTER_KG = 0.5


def round1(value: float) -> float:
    """Round half up to one decimal place."""
    return math.floor(value * 10 + 0.5) / 10


def bmi(weight_kg: float, height_cm: float) -> float:
    return weight_kg / (height_cm / 100) ** 2


def estimate_body_fat(bmi_value: float, age_years: int, gender: Gender | str) -> float:
    """Adult BMI-based body-fat estimate, clamped to [5, 45]."""
    offset = 16.2 if Gender(gender) is Gender.male else 5.4
    body_fat = 1.20 * bmi_value + 0.23 * age_years - offset
    return min(BODY_FAT_MAX, max(BODY_FAT_MIN, body_fat))


def estimate_muscle_mass(weight_kg: float, body_fat_pct: float) -> float:
    return weight_kg * (1 - body_fat_pct / 100) * 0.75


def consistency_score(streak_days: int, total_activity_count: int) -> float:
    """Habit consistency in [0, 1]."""
    return min(1.0, streak_days * 0.05 + total_activity_count * 0.02)


def effort_factor(consistency: float) -> float:
    """Progress multiplier in [0.5, 1.0]."""
    return 0.5 + consistency * 0.5


def simulate_body_composition(params: ProjectionInput) -> ProjectionResult:
    """Seven monthly points (month 0 = today) of projected weight, body fat and muscle."""
    base_fat = estimate_body_fat(bmi(params.current_weight_kg, params.height_cm), params.age_years, params.gender)
    base_muscle = estimate_muscle_mass(params.current_weight_kg, base_fat)
    effort = effort_factor(consistency_score(params.streak_days, params.total_activity_count))

    weight_rate, fat_rate, muscle_rate = MONTHLY_RATES[Goal(params.goal)]
    weight_delta = weight_rate * effort
    fat_delta = fat_rate * effort
    muscle_delta = muscle_rate * effort

    points: list[ProjectionPoint] = []
    for month in range(PROJECTION_MONTHS + 1):
        weight = params.current_weight_kg + month * weight_delta
        body_fat = max(BODY_FAT_MIN, base_fat + month * fat_delta)
        muscle = base_muscle + month * muscle_delta
        points.append(
            ProjectionPoint(
                month=month,
                weight=round1(weight),
                body_fat_percent=round1(body_fat),
                muscle_mass_kg=round1(muscle),
                narrative=narrative_for(month),
            )
        )
    return ProjectionResult(effort_factor=effort, points=points)


# ---------------------------------------------------------------------------
# Chart variant
# ---------------------------------------------------------------------------

def chart_body_fat(bmi_value: float, gender: Gender | str) -> float:
    gender = Gender(gender)
    low, high = CHART_BODY_FAT_BOUNDS[gender]
    raw = bmi_value * 1.2 - (10.8 if gender is Gender.male else 1.8)
    return max(low, min(high, raw))


def chart_body_composition(
    params: ProjectionInput,
    rng: random.Random | None = None,
) -> ChartProjection:
    """Seven chart points interpolated toward the target weight.

    ``goal=maintain`` perturbs weight by up to ±0.25 kg per point using
    ``rng`` (module-level random when omitted).
    """
    goal = Goal(params.goal)
    current = params.current_weight_kg
    base_fat = chart_body_fat(bmi(current, params.height_cm), params.gender)
    base_muscle = current * (1 - base_fat / 100) * 0.45
    fat_share, muscle_share = CHART_RATES[goal]
    draw = rng.random if rng is not None else random.random

    points: list[ChartPoint] = []
    for month in range(PROJECTION_MONTHS + 1):
        progress = month / PROJECTION_MONTHS
        if goal is Goal.maintain:
            weight = current + (draw() - 0.5) * MAINTAIN_JITTER_KG
        else:
            weight = current + (params.target_weight_kg - current) * progress
        body_fat = base_fat - base_fat * fat_share * progress
        muscle = base_muscle + base_muscle * muscle_share * progress
        points.append(
            ChartPoint(
                month=month,
                label=chart_label(month),
                weight=round1(weight),
                body_fat_percent=round1(body_fat),
                muscle_mass_kg=round1(muscle),
            )
        )
    return ChartProjection(deterministic=goal is not Goal.maintain, points=points)


def input_from_profile(profile: UserProfile, streak_days: int = 0, total_activity_count: int = 0) -> ProjectionInput:
    return ProjectionInput(
        current_weight_kg=profile.weight,
        target_weight_kg=profile.target_weight,
        height_cm=profile.height,
        age_years=profile.age,
        gender=profile.gender,
        goal=profile.goal,
        streak_days=streak_days,
        total_activity_count=total_activity_count,
    )
