"""Skip-vs-continue habit simulation shown next to the streak."""

from __future__ import annotations

import math

from zenfit.kernel.milestones import SKIP_CHAIN, motivation_for
from zenfit.kernel.models import (
    Goal,
    KeepGoingBenefits,
    MotivationCard,
    SkipConsequences,
    SkipRisk,
)
from zenfit.kernel.projection import round1

WEEKLY_WEIGHT_CHANGE: dict[Goal, float] = {
    Goal.lose: -0.5,
    Goal.gain: 0.3,
    Goal.maintain: 0.0,
}
STRENGTH_GAIN_PER_WEEK = 3  # percent, beginner gains
ENDURANCE_GAIN_PER_MONTH = 15  # percent
MIN_HABIT_REBUILD_DAYS = 21


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def skip_consequences(streak: int) -> SkipConsequences:
    """What skipping today costs: the whole streak plus weeks of rebuilding."""
    return SkipConsequences(
        skip_chain=[SkipRisk(days=s.days, next_skip_chance=s.next_skip_chance, label=s.label) for s in SKIP_CHAIN],
        streak_loss=streak,
        habit_reset_days=max(MIN_HABIT_REBUILD_DAYS, _round_half_up(streak * 0.7)),
    )


def days_to_goal(current_weight: float, target_weight: float, weekly_change: float) -> int | None:
    """Days until target at the weekly rate. None when the rate never gets there."""
    diff = target_weight - current_weight
    if diff == 0:
        return 0
    if weekly_change == 0:
        return None
    return abs(_round_half_up(diff / (weekly_change / 7)))


def keep_going_benefits(streak: int, goal: Goal | str, current_weight: float, target_weight: float) -> KeepGoingBenefits:
    weekly = WEEKLY_WEIGHT_CHANGE[Goal(goal)]
    monthly = weekly * 4
    return KeepGoingBenefits(
        new_streak=streak + 1,
        projected_weight_1w=round1(current_weight + weekly),
        projected_weight_1m=round1(current_weight + monthly),
        projected_weight_3m=round1(current_weight + monthly * 3),
        strength_gain_1w=STRENGTH_GAIN_PER_WEEK,
        endurance_1m=ENDURANCE_GAIN_PER_MONTH,
        days_to_goal=days_to_goal(current_weight, target_weight, weekly),
    )


def motivation_card(
    streak: int,
    today_completed: bool,
    goal: Goal | str,
    current_weight: float,
    target_weight: float,
) -> MotivationCard:
    message = motivation_for(streak)
    return MotivationCard(
        today_completed=today_completed,
        do_message=message.do,
        skip_message=message.skip,
        skip=skip_consequences(streak),
        keep_going=keep_going_benefits(streak, goal, current_weight, target_weight),
    )
