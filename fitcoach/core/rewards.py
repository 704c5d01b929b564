"""Coin and XP amounts granted per reward event."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Iterable, Mapping


class RewardEvent(str, Enum):
    EXERCISE_COMPLETE = "EXERCISE_COMPLETE"
    WORKOUT_COMPLETE = "WORKOUT_COMPLETE"
    PERSONAL_RECORD = "PERSONAL_RECORD"
    STREAK_3 = "STREAK_3"
    STREAK_7 = "STREAK_7"
    FIRST_WORKOUT_OF_WEEK = "FIRST_WORKOUT_OF_WEEK"
    RPE_LOGGED = "RPE_LOGGED"


@dataclass(frozen=True)
class Reward:
    coins: int
    xp: int

    def __add__(self, other: "Reward") -> "Reward":
        return Reward(coins=self.coins + other.coins, xp=self.xp + other.xp)


NO_REWARD = Reward(coins=0, xp=0)

REWARDS: Mapping[RewardEvent, Reward] = MappingProxyType(
    {
        RewardEvent.EXERCISE_COMPLETE: Reward(coins=10, xp=15),
        RewardEvent.WORKOUT_COMPLETE: Reward(coins=50, xp=75),
        RewardEvent.PERSONAL_RECORD: Reward(coins=25, xp=40),
        RewardEvent.STREAK_3: Reward(coins=30, xp=50),
        RewardEvent.STREAK_7: Reward(coins=100, xp=150),
        RewardEvent.FIRST_WORKOUT_OF_WEEK: Reward(coins=20, xp=30),
        RewardEvent.RPE_LOGGED: Reward(coins=5, xp=5),
    }
)


def total_reward(events: Iterable[RewardEvent]) -> Reward:
    """Sum the table entries for ``events``."""

    total = NO_REWARD
    for event in events:
        total = total + REWARDS[event]
    return total


__all__ = ["NO_REWARD", "REWARDS", "Reward", "RewardEvent", "total_reward"]
