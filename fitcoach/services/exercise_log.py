"""Queries and inserts over the exercise log history."""
from __future__ import annotations

import uuid
from datetime import date

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from fitcoach.db.models.exercise_log import ExerciseLog


class ExerciseLogService:
    """Append-only access to completed exercise performances."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def record(
        self,
        *,
        user_id: uuid.UUID,
        workout_id: uuid.UUID,
        exercise_name: str,
        log_date: date,
        sets_completed: int,
        reps_completed: int,
        weight_used: float,
        rpe: float | None = None,
    ) -> ExerciseLog | None:
        """Add a log row unless nothing was actually performed.

        Returns ``None`` when sets or reps are zero. The caller commits.
        """

        if sets_completed <= 0 or reps_completed <= 0:
            return None
        log = ExerciseLog(
            user_id=user_id,
            workout_id=workout_id,
            exercise_name=exercise_name,
            date=log_date,
            sets_completed=sets_completed,
            reps_completed=reps_completed,
            weight_used=weight_used,
            rpe=rpe,
        )
        self.db.add(log)
        return log

    def has_log(self, workout_id: uuid.UUID, exercise_name: str) -> bool:
        stmt = select(ExerciseLog.id).where(
            ExerciseLog.workout_id == workout_id,
            ExerciseLog.exercise_name == exercise_name,
        )
        return self.db.execute(stmt).first() is not None

    def previous_max_weight(self, user_id: uuid.UUID, exercise_name: str) -> tuple[float, int]:
        """Return the heaviest logged weight and the number of logs for an exercise."""

        stmt = select(
            func.coalesce(func.max(ExerciseLog.weight_used), 0.0),
            func.count(ExerciseLog.id),
        ).where(
            ExerciseLog.user_id == user_id,
            ExerciseLog.exercise_name == exercise_name,
        )
        max_weight, count = self.db.execute(stmt).one()
        return float(max_weight), int(count)

    def weekly_volume(self, user_id: uuid.UUID, start: date, end: date) -> float:
        """Total weight x reps x sets lifted between ``start`` and ``end`` inclusive."""

        stmt = select(
            func.coalesce(
                func.sum(
                    ExerciseLog.weight_used
                    * ExerciseLog.reps_completed
                    * ExerciseLog.sets_completed
                ),
                0.0,
            )
        ).where(
            ExerciseLog.user_id == user_id,
            ExerciseLog.date >= start,
            ExerciseLog.date <= end,
        )
        return float(self.db.execute(stmt).scalar_one())

    def exercise_history(
        self, user_id: uuid.UUID, exercise_name: str, *, limit: int = 18
    ) -> list[ExerciseLog]:
        """Most recent logs for an exercise, returned oldest first."""

        stmt = (
            select(ExerciseLog)
            .where(
                ExerciseLog.user_id == user_id,
                ExerciseLog.exercise_name == exercise_name,
            )
            .order_by(ExerciseLog.date.desc(), ExerciseLog.created_at.desc())
            .limit(limit)
        )
        logs = list(self.db.scalars(stmt))
        logs.reverse()
        return logs


__all__ = ["ExerciseLogService"]
