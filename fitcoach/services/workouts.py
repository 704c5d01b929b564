"""Workout plan storage and exercise completion."""
from __future__ import annotations

import re
import uuid
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any, Iterable

from sqlalchemy import select
from sqlalchemy.orm import Session

from fitcoach.db.models.exercise_log import ExerciseLog
from fitcoach.db.models.workout import Workout
from fitcoach.services.exercise_log import ExerciseLogService
from fitcoach.utils.exceptions import FitCoachException, NotFoundError

_NUMBER_RE = re.compile(r"([0-9]+(\.[0-9]+)?)")


class WorkoutNotFoundError(NotFoundError):
    """Raised when a workout does not exist or belongs to another user."""


class ExerciseNotFoundError(NotFoundError):
    """Raised when a workout has no exercise with the requested name."""


class RewardAlreadyClaimedError(FitCoachException):
    """Raised when a completion reward for a workout or exercise was already granted."""


def parse_weight(weight: str | None) -> float:
    """First number in a planned load ("20kg" -> 20.0); 0 when there is none."""

    if not weight:
        return 0.0
    match = _NUMBER_RE.search(weight)
    return float(match.group(1)) if match else 0.0


def parse_reps(reps: str | None) -> int:
    """Lower bound of a planned rep range ("8-12" -> 8)."""

    head = str(reps or "0").split("-")[0].strip()
    try:
        return int(float(head))
    except ValueError:
        return 0


@dataclass
class CompletionResult:
    workout: Workout
    exercise_log: ExerciseLog | None
    was_completed: bool
    workout_was_completed: bool

    @property
    def workout_just_completed(self) -> bool:
        return self.workout.is_completed and not self.workout_was_completed


class WorkoutService:
    """Persist generated plans and track which exercises were done."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.logs = ExerciseLogService(db)

    def save_workout(
        self, *, user_id: uuid.UUID, workout_date: date, title: str, exercises: Iterable[dict[str, Any]]
    ) -> Workout:
        """Create or overwrite the plan for ``workout_date``."""

        exercises = [dict(ex) for ex in exercises]
        workout = self.get_workout(user_id=user_id, workout_date=workout_date)
        if workout is None:
            workout = Workout(user_id=user_id, date=workout_date)
            self.db.add(workout)
        workout.title = title
        workout.exercises = exercises
        workout.status = "generated"
        self.db.commit()
        self.db.refresh(workout)
        return workout

    def get_workout(self, *, user_id: uuid.UUID, workout_date: date) -> Workout | None:
        stmt = select(Workout).where(Workout.user_id == user_id, Workout.date == workout_date)
        return self.db.scalars(stmt).first()

    def get_owned(self, *, user_id: uuid.UUID, workout_id: uuid.UUID) -> Workout:
        workout = self.db.get(Workout, workout_id)
        if workout is None or workout.user_id != user_id:
            raise WorkoutNotFoundError("Workout not found", {"workout_id": str(workout_id)})
        return workout

    def recent_workouts(self, *, user_id: uuid.UUID, limit: int = 5) -> list[Workout]:
        stmt = (
            select(Workout)
            .where(Workout.user_id == user_id)
            .order_by(Workout.date.desc())
            .limit(limit)
        )
        return list(self.db.scalars(stmt))

    def workouts_in_range(self, *, user_id: uuid.UUID, start: date, end: date) -> list[Workout]:
        stmt = (
            select(Workout)
            .where(Workout.user_id == user_id, Workout.date >= start, Workout.date <= end)
            .order_by(Workout.date)
        )
        return list(self.db.scalars(stmt))

    def mark_exercise_complete(
        self,
        *,
        user_id: uuid.UUID,
        workout_id: uuid.UUID,
        exercise_name: str,
        completed: bool,
        log_date: date,
        sets_completed: int | None = None,
        reps_completed: int | None = None,
        weight_used: float | None = None,
        rpe: float | None = None,
    ) -> CompletionResult:
        """Flip an exercise's completion flag and log the performance.

        Figures the client did not send fall back to the plan. A log row is
        written once per exercise and workout, when the exercise first turns
        completed with sets and reps.
        """

        workout = self.get_owned(user_id=user_id, workout_id=workout_id)
        planned = workout.find_exercise(exercise_name)
        if planned is None:
            raise ExerciseNotFoundError(
                "Exercise not found in workout", {"exercise_name": exercise_name}
            )
        was_completed = bool(planned.get("completed"))
        workout_was_completed = workout.is_completed

        workout.exercises = [
            {**ex, "completed": completed} if ex.get("name") == exercise_name else ex
            for ex in workout.exercises
        ]
        workout.status = "completed" if workout.is_completed else "generated"

        exercise_log = None
        if completed and not was_completed and not self.logs.has_log(workout.id, exercise_name):
            exercise_log = self.logs.record(
                user_id=user_id,
                workout_id=workout.id,
                exercise_name=exercise_name,
                log_date=log_date,
                sets_completed=sets_completed if sets_completed is not None else int(planned.get("sets") or 0),
                reps_completed=reps_completed if reps_completed is not None else parse_reps(planned.get("reps")),
                weight_used=weight_used if weight_used is not None else parse_weight(planned.get("weight")),
                rpe=rpe,
            )

        self.db.commit()
        self.db.refresh(workout)
        return CompletionResult(
            workout=workout,
            exercise_log=exercise_log,
            was_completed=was_completed,
            workout_was_completed=workout_was_completed,
        )

    def claim_exercise_reward(self, workout_id: uuid.UUID, exercise_name: str) -> Workout:
        """Mark the exercise's completion reward as granted.

        Runs inside the reward transaction and leaves the commit to it, so
        the marker and the payout land together.
        """

        workout = self._lock(workout_id)
        if workout.exercise_rewarded(exercise_name):
            raise RewardAlreadyClaimedError(
                "Exercise reward already granted",
                {"workout_id": str(workout_id), "exercise_name": exercise_name},
            )
        workout.rewarded_exercises = [*(workout.rewarded_exercises or []), exercise_name]
        self.db.flush([workout])
        return workout

    def claim_workout_reward(self, workout_id: uuid.UUID) -> Workout:
        """Mark the workout's completion reward as granted; see ``claim_exercise_reward``."""

        workout = self._lock(workout_id)
        if workout.rewarded_at is not None:
            raise RewardAlreadyClaimedError(
                "Workout reward already granted", {"workout_id": str(workout_id)}
            )
        workout.rewarded_at = datetime.now(timezone.utc)
        self.db.flush([workout])
        return workout

    def _lock(self, workout_id: uuid.UUID) -> Workout:
        stmt = (
            select(Workout)
            .where(Workout.id == workout_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        workout = self.db.scalars(stmt).first()
        if workout is None:
            raise WorkoutNotFoundError("Workout not found", {"workout_id": str(workout_id)})
        return workout

    def replace_exercise(
        self,
        *,
        user_id: uuid.UUID,
        workout_id: uuid.UUID,
        old_exercise_name: str,
        new_exercise: dict[str, Any],
    ) -> Workout:
        workout = self.get_owned(user_id=user_id, workout_id=workout_id)
        if workout.find_exercise(old_exercise_name) is None:
            raise ExerciseNotFoundError(
                "Exercise not found in workout", {"exercise_name": old_exercise_name}
            )
        workout.exercises = [
            dict(new_exercise) if ex.get("name") == old_exercise_name else ex
            for ex in workout.exercises
        ]
        workout.status = "completed" if workout.is_completed else "generated"
        self.db.commit()
        self.db.refresh(workout)
        return workout


__all__ = [
    "CompletionResult",
    "ExerciseNotFoundError",
    "RewardAlreadyClaimedError",
    "WorkoutNotFoundError",
    "WorkoutService",
    "parse_reps",
    "parse_weight",
]
