"""Closed catalog of achievements and the predicates that unlock them."""
from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Literal, Mapping

Rarity = Literal["common", "rare", "epic", "legendary"]

FIRST_BLOOD = "first_blood"
FULL_SEND = "full_send"
WEEK_WARRIOR = "week_warrior"
STREAK_MASTER = "streak_master"
IRON_CENTURY = "iron_century"
PR_MACHINE = "pr_machine"
COIN_COLLECTOR = "coin_collector"
LEVEL_10 = "level_10"
CONSISTENCY_KING = "consistency_king"

PR_MACHINE_RECORDS = 5
COIN_COLLECTOR_COINS = 1000
LEVEL_10_LEVEL = 10
STREAK_MASTER_DAYS = 7
CONSISTENCY_KING_DAYS = 30
IRON_CENTURY_VOLUME = 10_000


@dataclass(frozen=True)
class AchievementDefinition:
    """Display metadata for an achievement."""

    key: str
    title: str
    description: str
    icon: str
    coin_bonus: int
    rarity: Rarity


ACHIEVEMENTS: Mapping[str, AchievementDefinition] = MappingProxyType(
    {
        defn.key: defn
        for defn in (
            AchievementDefinition(FIRST_BLOOD, "First Blood", "Complete your first exercise", "Sword", 10, "common"),
            AchievementDefinition(FULL_SEND, "Full Send", "Complete a full workout", "Rocket", 25, "common"),
            AchievementDefinition(WEEK_WARRIOR, "Week Warrior", "Work out 5 days in a week", "Shield", 50, "rare"),
            AchievementDefinition(STREAK_MASTER, "Streak Master", "Hit a 7-day workout streak", "Flame", 75, "rare"),
            AchievementDefinition(
                IRON_CENTURY, "Iron Century", "Lift 10,000 kg total volume in a week", "Anvil", 100, "epic"
            ),
            AchievementDefinition(PR_MACHINE, "PR Machine", "Hit 5 personal records", "TrendingUp", 75, "epic"),
            AchievementDefinition(
                COIN_COLLECTOR, "Coin Collector", "Earn 1,000 lifetime coins", "Coins", 50, "rare"
            ),
            AchievementDefinition(LEVEL_10, "Double Digits", "Reach level 10", "Crown", 100, "epic"),
            AchievementDefinition(
                CONSISTENCY_KING, "Consistency King", "Maintain a 30-day workout streak", "Trophy", 200, "legendary"
            ),
        )
    }
)


def exercise_achievements(
    *, total_exercises: int, personal_records: int, coins: int, level: int
) -> list[str]:
    """Achievements earned by the profile state after an exercise completion."""

    earned: list[str] = []
    if total_exercises == 1:
        earned.append(FIRST_BLOOD)
    if personal_records >= PR_MACHINE_RECORDS:
        earned.append(PR_MACHINE)
    if coins >= COIN_COLLECTOR_COINS:
        earned.append(COIN_COLLECTOR)
    if level >= LEVEL_10_LEVEL:
        earned.append(LEVEL_10)
    return earned


def workout_achievements(
    *, total_workouts: int, streak: int, weekly_volume: float | None = None
) -> list[str]:
    """Achievements earned by the profile state after a workout completion.

    ``iron_century`` is only considered when the caller supplied a volume.
    """

    earned: list[str] = []
    if total_workouts == 1:
        earned.append(FULL_SEND)
    if streak >= STREAK_MASTER_DAYS:
        earned.append(STREAK_MASTER)
    if streak >= CONSISTENCY_KING_DAYS:
        earned.append(CONSISTENCY_KING)
    if weekly_volume is not None and weekly_volume >= IRON_CENTURY_VOLUME:
        earned.append(IRON_CENTURY)
    return earned


__all__ = [
    "ACHIEVEMENTS",
    "AchievementDefinition",
    "exercise_achievements",
    "workout_achievements",
]
