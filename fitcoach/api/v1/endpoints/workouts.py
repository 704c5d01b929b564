"""Workout plan endpoints."""
from __future__ import annotations

import uuid
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from fitcoach.api import deps
from fitcoach.db.models.user import User
from fitcoach.db.models.workout import Workout
from fitcoach.schemas.game import ExerciseRewardResponse, WorkoutRewardResponse
from fitcoach.schemas.workout import (
    ExerciseCompletionRequest,
    ExerciseCompletionResponse,
    ExerciseLogRead,
    ExerciseReplaceRequest,
    WorkoutRead,
    WorkoutSave,
)
from fitcoach.services.completion import ExerciseCompletionFlow
from fitcoach.services.workouts import WorkoutNotFoundError, WorkoutService
from fitcoach.utils.exceptions import ValidationError

router = APIRouter(prefix="/users/{user_id}/workouts", tags=["workouts"])


@router.put("", response_model=WorkoutRead)
def save_workout(
    *,
    payload: WorkoutSave,
    user: User = Depends(deps.get_user),
    db: Session = Depends(deps.get_db),
) -> Workout:
    """Store the generated plan for a day, replacing any earlier plan."""

    return WorkoutService(db).save_workout(
        user_id=user.id,
        workout_date=payload.date,
        title=payload.title,
        exercises=[exercise.model_dump() for exercise in payload.exercises],
    )


@router.get("", response_model=list[WorkoutRead])
def list_workouts(
    *,
    limit: int = Query(5, ge=1, le=100),
    start: Optional[date] = Query(None, description="First day of a date range"),
    end: Optional[date] = Query(None, description="Last day of a date range"),
    user: User = Depends(deps.get_user),
    db: Session = Depends(deps.get_db),
) -> list[Workout]:
    """Most recent workouts, or every workout in ``start``..``end`` when both are given."""

    service = WorkoutService(db)
    if start is None and end is None:
        return service.recent_workouts(user_id=user.id, limit=limit)
    if start is None or end is None or start > end:
        raise ValidationError(
            "Both start and end are required and start must not be after end",
            {"start": str(start), "end": str(end)},
        )
    return service.workouts_in_range(user_id=user.id, start=start, end=end)


@router.get("/{workout_date}", response_model=WorkoutRead)
def read_workout(
    *,
    workout_date: date,
    user: User = Depends(deps.get_user),
    db: Session = Depends(deps.get_db),
) -> Workout:
    workout = WorkoutService(db).get_workout(user_id=user.id, workout_date=workout_date)
    if workout is None:
        raise WorkoutNotFoundError("Workout not found", {"date": workout_date.isoformat()})
    return workout


@router.post("/{workout_id}/exercises/complete", response_model=ExerciseCompletionResponse)
def complete_exercise(
    *,
    workout_id: uuid.UUID,
    payload: ExerciseCompletionRequest,
    user: User = Depends(deps.get_user),
    db: Session = Depends(deps.get_db),
) -> ExerciseCompletionResponse:
    """Mark an exercise done or undone, log it, and pay out any rewards."""

    outcome = ExerciseCompletionFlow(db).complete(
        user_id=user.id,
        workout_id=workout_id,
        exercise_name=payload.exercise_name,
        completed=payload.completed,
        log_date=payload.date,
        sets_completed=payload.sets_completed,
        reps_completed=payload.reps_completed,
        weight_used=payload.weight_used,
        rpe=payload.rpe,
    )
    completion = outcome.completion
    return ExerciseCompletionResponse(
        workout=WorkoutRead.model_validate(completion.workout),
        exercise_log=(
            ExerciseLogRead.model_validate(completion.exercise_log)
            if completion.exercise_log is not None
            else None
        ),
        exercise_reward=(
            ExerciseRewardResponse.model_validate(outcome.exercise_reward)
            if outcome.exercise_reward is not None
            else None
        ),
        workout_reward=(
            WorkoutRewardResponse.model_validate(outcome.workout_reward)
            if outcome.workout_reward is not None
            else None
        ),
    )


@router.post("/{workout_id}/exercises/replace", response_model=WorkoutRead)
def replace_exercise(
    *,
    workout_id: uuid.UUID,
    payload: ExerciseReplaceRequest,
    user: User = Depends(deps.get_user),
    db: Session = Depends(deps.get_db),
) -> Workout:
    """Swap a planned exercise for an alternative."""

    return WorkoutService(db).replace_exercise(
        user_id=user.id,
        workout_id=workout_id,
        old_exercise_name=payload.old_exercise_name,
        new_exercise=payload.new_exercise.model_dump(),
    )
