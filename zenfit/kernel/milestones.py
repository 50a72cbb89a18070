"""Static copy tables — configuration only.

Narratives are indexed by projection month (0–6); the order is fixed.
"""

from __future__ import annotations

from dataclasses import dataclass

PROJECTION_MONTHS = 6

MONTH_NARRATIVES: tuple[str, ...] = (
    "Today: your starting point.",
    "Month 1: the routine starts to feel automatic.",
    "Month 2: strength and stamina are noticeably up.",
    "Month 3: clothes fit differently; others start to notice.",
    "Month 4: body shape is visibly changing.",
    "Month 5: training is part of who you are.",
    "Month 6: a new body built on six months of habit.",
)

CHART_LABELS: tuple[str, ...] = ("Now", "1 mo", "2 mo", "3 mo", "4 mo", "5 mo", "6 mo")


@dataclass(frozen=True, slots=True)
class MotivationMessage:
    do: str
    skip: str


MOTIVATION_MESSAGES: tuple[MotivationMessage, ...] = (
    MotivationMessage(
        do="Start now and tomorrow's you will thank you.",
        skip="Skip today and your streak resets!",
    ),
    MotivationMessage(
        do="Give it 30 minutes. That's all it takes.",
        skip="Muscle fades while you rest, but habits fade faster.",
    ),
    MotivationMessage(
        do="It doesn't have to be perfect. Just start.",
        skip="Yesterday's effort could go to waste.",
    ),
    MotivationMessage(
        do="Today's workout builds next month's body.",
        skip="Quitting starts with a single skip.",
    ),
    MotivationMessage(
        do="A little every day, that's the secret.",
        skip="People who keep their streak reach their goals.",
    ),
)


@dataclass(frozen=True, slots=True)
class SkipRiskStep:
    days: int
    next_skip_chance: int  # percent
    label: str


# Missing once roughly doubles the chance of missing again
SKIP_CHAIN: tuple[SkipRiskStep, ...] = (
    SkipRiskStep(days=1, next_skip_chance=62, label="Chance of skipping tomorrow too"),
    SkipRiskStep(days=3, next_skip_chance=78, label="Chance of skipping 3 days in a row"),
    SkipRiskStep(days=7, next_skip_chance=91, label="Chance of giving up for a week"),
)


def narrative_for(month: int) -> str:
    return MONTH_NARRATIVES[month]


def chart_label(month: int) -> str:
    return CHART_LABELS[month]


def motivation_for(streak: int) -> MotivationMessage:
    return MOTIVATION_MESSAGES[streak % len(MOTIVATION_MESSAGES)]
