"""Pydantic schemas for game profiles, rewards and achievements."""
from __future__ import annotations

from datetime import date as date_type
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class GameProfileRead(BaseModel):
    """Game profile with derived display fields."""

    coins: int
    xp: int
    level: int
    current_streak: int
    longest_streak: int
    total_workouts: int
    total_exercises: int
    personal_records: int
    last_active_date: Optional[date_type] = None
    title: str
    xp_to_next_level: int
    xp_in_current_level: int

    model_config = ConfigDict(from_attributes=True)


class AchievementDefinitionRead(BaseModel):
    key: str
    title: str
    description: str
    icon: str
    coin_bonus: int
    rarity: str

    model_config = ConfigDict(from_attributes=True)


class UnlockedAchievementRead(AchievementDefinitionRead):
    unlocked_at: datetime


class ExerciseRewardRequest(BaseModel):
    exercise_name: str = Field(..., min_length=1, max_length=255)
    weight_used: float = Field(0, ge=0)
    had_rpe: bool = False


class WorkoutRewardRequest(BaseModel):
    date: date_type
    weekly_volume: Optional[float] = Field(default=None, ge=0)


class ExerciseRewardResponse(BaseModel):
    coins_earned: int
    xp_earned: int
    is_pr: bool
    leveled_up: bool
    new_level: int
    new_achievements: list[str] = Field(default_factory=list)
    total_coins: int

    model_config = ConfigDict(from_attributes=True)


class WorkoutRewardResponse(BaseModel):
    coins_earned: int
    xp_earned: int
    leveled_up: bool
    new_level: int
    new_streak: int
    new_achievements: list[str] = Field(default_factory=list)
    total_coins: int
    total_xp: int

    model_config = ConfigDict(from_attributes=True)


__all__ = [
    "AchievementDefinitionRead",
    "ExerciseRewardRequest",
    "ExerciseRewardResponse",
    "GameProfileRead",
    "UnlockedAchievementRead",
    "WorkoutRewardRequest",
    "WorkoutRewardResponse",
]
