"""Tests for the skip-vs-continue habit simulation."""

from zenfit.kernel.milestones import MOTIVATION_MESSAGES
from zenfit.kernel.motivation import (
    days_to_goal,
    keep_going_benefits,
    motivation_card,
    skip_consequences,
)


class TestSkipConsequences:
    def test_chain(self):
        result = skip_consequences(4)
        assert [(r.days, r.next_skip_chance) for r in result.skip_chain] == [(1, 62), (3, 78), (7, 91)]

    def test_streak_loss_is_whole_streak(self):
        assert skip_consequences(17).streak_loss == 17

    def test_rebuild_floor(self):
        assert skip_consequences(5).habit_reset_days == 21

    def test_rebuild_scales_with_streak(self):
        assert skip_consequences(50).habit_reset_days == 35


class TestKeepGoing:
    def test_lose(self):
        b = keep_going_benefits(3, "lose", 75.0, 70.0)
        assert b.new_streak == 4
        assert b.projected_weight_1w == 74.5
        assert b.projected_weight_1m == 73.0
        assert b.projected_weight_3m == 69.0
        assert b.days_to_goal == 70

    def test_gain(self):
        b = keep_going_benefits(0, "gain", 60.0, 63.0)
        assert b.projected_weight_1w == 60.3
        assert b.projected_weight_1m == 61.2
        assert b.days_to_goal == 70

    def test_maintain_has_no_eta(self):
        b = keep_going_benefits(0, "maintain", 70.0, 68.0)
        assert b.projected_weight_3m == 70.0
        assert b.days_to_goal is None

    def test_fixed_fitness_gains(self):
        b = keep_going_benefits(0, "lose", 80.0, 75.0)
        assert (b.strength_gain_1w, b.endurance_1m) == (3, 15)


class TestDaysToGoal:
    def test_already_there(self):
        assert days_to_goal(70.0, 70.0, -0.5) == 0

    def test_wrong_direction_is_absolute(self):
        assert days_to_goal(70.0, 72.0, -0.5) == 28


class TestMotivationCard:
    def test_rotates_messages(self):
        first = motivation_card(0, False, "lose", 75.0, 70.0)
        wrapped = motivation_card(len(MOTIVATION_MESSAGES), False, "lose", 75.0, 70.0)
        assert first.do_message == wrapped.do_message
        assert first.do_message != motivation_card(1, False, "lose", 75.0, 70.0).do_message

    def test_carries_completion(self):
        assert motivation_card(2, True, "gain", 60.0, 65.0).today_completed is True
