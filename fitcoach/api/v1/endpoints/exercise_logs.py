"""Exercise history and training volume endpoints."""
from __future__ import annotations

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from fitcoach.api import deps
from fitcoach.core.streaks import week_bounds
from fitcoach.db.models.user import User
from fitcoach.schemas.workout import ExerciseProgressPoint, WeeklyVolumeRead
from fitcoach.services.exercise_log import ExerciseLogService

router = APIRouter(prefix="/users/{user_id}", tags=["exercise-logs"])


@router.get("/exercise-logs/{exercise_name}", response_model=list[ExerciseProgressPoint])
def read_exercise_progress(
    *,
    exercise_name: str,
    limit: int = Query(18, ge=1, le=100),
    user: User = Depends(deps.get_user),
    db: Session = Depends(deps.get_db),
) -> list[ExerciseProgressPoint]:
    """Chart points for one exercise, oldest first."""

    logs = ExerciseLogService(db).exercise_history(user.id, exercise_name, limit=limit)
    return [
        ExerciseProgressPoint(
            date=log.date,
            volume=round(log.volume),
            weight=log.weight_used,
            reps=log.reps_completed,
        )
        for log in logs
    ]


@router.get("/weekly-volume", response_model=WeeklyVolumeRead)
def read_weekly_volume(
    *,
    day: Optional[date] = Query(None, alias="date", description="Any day in the week"),
    user: User = Depends(deps.get_user),
    db: Session = Depends(deps.get_db),
) -> WeeklyVolumeRead:
    """Total volume for the Monday-to-Sunday week containing ``date`` (default today)."""

    start, end = week_bounds(day or date.today())
    volume = ExerciseLogService(db).weekly_volume(user.id, start, end)
    return WeeklyVolumeRead(week_start=start, week_end=end, volume=volume)
