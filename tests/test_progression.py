"""Tests for the XP curve, level titles and reward table."""
from __future__ import annotations

import pytest

from fitcoach.core.progression import (
    cumulative_xp_for_level,
    level_for_xp,
    title_for_level,
    xp_for_level,
    xp_in_current_level,
    xp_to_next_level,
)
from fitcoach.core.rewards import REWARDS, Reward, RewardEvent, total_reward


def test_xp_for_level_is_per_step_cost() -> None:
    assert xp_for_level(1) == 0
    assert xp_for_level(0) == 0
    assert xp_for_level(2) == 240
    assert xp_for_level(3) == 360
    assert xp_for_level(10) == 1200


@pytest.mark.parametrize(
    ("xp", "level"),
    [(0, 1), (239, 1), (240, 2), (599, 2), (600, 3), (1079, 3), (1080, 4)],
)
def test_level_for_xp_thresholds(xp: int, level: int) -> None:
    assert level_for_xp(xp) == level


def test_level_for_xp_is_monotonic_and_deterministic() -> None:
    previous = 1
    for xp in range(0, 20_000, 37):
        level = level_for_xp(xp)
        assert level == level_for_xp(xp)
        assert level >= previous
        previous = level


def test_cumulative_xp_matches_level_boundaries() -> None:
    for level in range(1, 30):
        threshold = cumulative_xp_for_level(level)
        assert level_for_xp(threshold) == level
        if threshold:
            assert level_for_xp(threshold - 1) == level - 1


@pytest.mark.parametrize(
    ("level", "title"),
    [
        (1, "Beginner Lifter"),
        (5, "Beginner Lifter"),
        (6, "Dedicated Athlete"),
        (10, "Dedicated Athlete"),
        (20, "Iron Warrior"),
        (35, "Elite Performer"),
        (36, "Legendary"),
    ],
)
def test_title_for_level(level: int, title: str) -> None:
    assert title_for_level(level) == title


def test_display_fields() -> None:
    assert xp_to_next_level(1) == 240
    assert xp_in_current_level(300, 2) == 60
    assert xp_in_current_level(100, 3) == 0


def test_reward_table_amounts() -> None:
    assert REWARDS[RewardEvent.EXERCISE_COMPLETE] == Reward(coins=10, xp=15)
    assert REWARDS[RewardEvent.STREAK_7] == Reward(coins=100, xp=150)
    assert total_reward(
        [RewardEvent.WORKOUT_COMPLETE, RewardEvent.FIRST_WORKOUT_OF_WEEK]
    ) == Reward(coins=70, xp=105)
    assert total_reward([]) == Reward(coins=0, xp=0)
