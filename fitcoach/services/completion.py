"""Exercise logging flow: workout mutation plus best-effort rewards."""
from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import date
from typing import Callable, TypeVar

from loguru import logger
from sqlalchemy.orm import Session

from fitcoach.core.streaks import week_bounds
from fitcoach.services.exercise_log import ExerciseLogService
from fitcoach.services.reward_engine import ExerciseReward, RewardEngine, WorkoutReward
from fitcoach.services.workouts import (
    CompletionResult,
    ExerciseNotFoundError,
    RewardAlreadyClaimedError,
    WorkoutService,
    parse_weight,
)
from fitcoach.utils.exceptions import FitCoachException, NotFoundError

T = TypeVar("T")


@dataclass
class ExerciseCompletionOutcome:
    completion: CompletionResult
    exercise_reward: ExerciseReward | None = None
    workout_reward: WorkoutReward | None = None


def _best_effort(label: str, user_id: uuid.UUID, grant: Callable[[], T]) -> T | None:
    """Run a reward grant; failures are logged and never block the workout update."""

    try:
        return grant()
    except NotFoundError:
        raise
    except RewardAlreadyClaimedError:
        logger.info(f"{label} reward already granted", user_id=str(user_id))
        return None
    except FitCoachException as exc:
        logger.warning(f"{label} reward failed", user_id=str(user_id), error=exc.message)
        return None


class ExerciseCompletionFlow:
    """Log an exercise the way the dashboard does.

    The exercise reward is granted before the log row is written so PR
    detection only sees earlier sessions. Each exercise of a workout pays out
    once, and the workout bonus is paid once when its last exercise is done.
    The markers recording both payouts commit in the reward transaction.
    """

    def __init__(self, db: Session, *, engine: RewardEngine | None = None) -> None:
        self.db = db
        self.workouts = WorkoutService(db)
        self.logs = ExerciseLogService(db)
        self.engine = engine or RewardEngine(db)

    def complete(
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
    ) -> ExerciseCompletionOutcome:
        workout = self.workouts.get_owned(user_id=user_id, workout_id=workout_id)
        planned = workout.find_exercise(exercise_name)
        if planned is None:
            raise ExerciseNotFoundError(
                "Exercise not found in workout", {"exercise_name": exercise_name}
            )

        exercise_reward = None
        newly_done = completed and not planned.get("completed")
        if newly_done and not workout.exercise_rewarded(exercise_name):
            load = weight_used if weight_used is not None else parse_weight(planned.get("weight"))
            exercise_reward = _best_effort(
                "Exercise",
                user_id,
                lambda: self.engine.award_exercise_complete(
                    user_id,
                    exercise_name,
                    load,
                    had_rpe=rpe is not None,
                    claim=lambda: self.workouts.claim_exercise_reward(workout_id, exercise_name),
                ),
            )

        completion = self.workouts.mark_exercise_complete(
            user_id=user_id,
            workout_id=workout_id,
            exercise_name=exercise_name,
            completed=completed,
            log_date=log_date,
            sets_completed=sets_completed,
            reps_completed=reps_completed,
            weight_used=weight_used,
            rpe=rpe,
        )

        workout_reward = None
        finished = completion.workout
        if completion.workout_just_completed and finished.rewarded_at is None:
            day = finished.date
            start, end = week_bounds(day)
            volume = self.logs.weekly_volume(user_id, start, end)
            workout_reward = _best_effort(
                "Workout",
                user_id,
                lambda: self.engine.award_workout_complete(
                    user_id, day, volume, claim=lambda: self.workouts.claim_workout_reward(workout_id)
                ),
            )

        return ExerciseCompletionOutcome(
            completion=completion,
            exercise_reward=exercise_reward,
            workout_reward=workout_reward,
        )


__all__ = ["ExerciseCompletionFlow", "ExerciseCompletionOutcome"]
