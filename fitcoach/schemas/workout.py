"""Pydantic models for workout plans and exercise logging."""
from __future__ import annotations

import uuid
from datetime import date as date_type
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from fitcoach.schemas.game import ExerciseRewardResponse, WorkoutRewardResponse


class WorkoutExercise(BaseModel):
    """A single planned exercise within a workout."""

    name: str = Field(..., min_length=1, max_length=255)
    sets: int = Field(..., ge=0)
    reps: str = Field(..., description='Rep target, e.g. "8-12"')
    weight: Optional[str] = Field(default=None, description='Load, e.g. "20kg" or "RPE 8"')
    notes: Optional[str] = None
    completed: bool = False
    type: Optional[str] = None
    tip: Optional[str] = None
    visualization_prompt: Optional[str] = None


class WorkoutSave(BaseModel):
    """Payload for storing a generated workout plan for a day."""

    date: date_type
    title: str = Field(..., min_length=1, max_length=255)
    exercises: list[WorkoutExercise]


class WorkoutRead(BaseModel):
    id: uuid.UUID
    user_id: uuid.UUID
    date: date_type
    title: str
    exercises: list[WorkoutExercise]
    status: Literal["generated", "completed"]

    model_config = ConfigDict(from_attributes=True)


class ExerciseCompletionRequest(BaseModel):
    """Toggle an exercise and optionally log what was actually performed."""

    exercise_name: str = Field(..., min_length=1)
    completed: bool = True
    date: date_type
    sets_completed: Optional[int] = Field(default=None, ge=0)
    reps_completed: Optional[int] = Field(default=None, ge=0)
    weight_used: Optional[float] = Field(default=None, ge=0)
    rpe: Optional[float] = Field(default=None, ge=1, le=10)


class ExerciseReplaceRequest(BaseModel):
    old_exercise_name: str = Field(..., min_length=1)
    new_exercise: WorkoutExercise


class ExerciseLogRead(BaseModel):
    id: uuid.UUID
    workout_id: uuid.UUID
    exercise_name: str
    date: date_type
    sets_completed: int
    reps_completed: int
    weight_used: float
    rpe: Optional[float] = None

    model_config = ConfigDict(from_attributes=True)


class ExerciseCompletionResponse(BaseModel):
    """Result of logging an exercise.

    Reward fields are ``None`` when no reward applied or the reward step failed;
    the workout state is authoritative either way.
    """

    workout: WorkoutRead
    exercise_log: Optional[ExerciseLogRead] = None
    exercise_reward: Optional[ExerciseRewardResponse] = None
    workout_reward: Optional[WorkoutRewardResponse] = None


class ExerciseProgressPoint(BaseModel):
    date: date_type
    volume: int
    weight: float
    reps: int


class WeeklyVolumeRead(BaseModel):
    week_start: date_type
    week_end: date_type
    volume: float
