"""Reward engine: turns completion events into coins, XP, streaks and unlocks."""
from __future__ import annotations

import math
import uuid
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Callable, TypeVar

from loguru import logger
from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session
from tenacity import (
    RetryCallState,
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from fitcoach.config import settings
from fitcoach.core.achievements import exercise_achievements, workout_achievements
from fitcoach.core.progression import level_for_xp
from fitcoach.core.rewards import Reward, RewardEvent, total_reward
from fitcoach.core.streaks import advance_streak, is_first_workout_of_week, milestone_events
from fitcoach.db.models.game_profile import GameProfile
from fitcoach.services.achievement import AchievementLedger
from fitcoach.services.exercise_log import ExerciseLogService
from fitcoach.services.game_profile import GameProfileStore
from fitcoach.services.users import UserService
from fitcoach.utils.exceptions import DatabaseError, RewardError, ValidationError

# Lost races on the profile/ledger unique keys, serialization failures and deadlocks.
TRANSIENT_DB_ERRORS = (IntegrityError, OperationalError)

T = TypeVar("T")


class RewardValidationError(ValidationError):
    """Raised when a reward request carries malformed input."""


class RewardTransactionError(RewardError):
    """Raised when a reward transaction keeps conflicting after all retries."""


@dataclass
class ExerciseReward:
    """Outcome of an exercise completion."""

    coins_earned: int
    xp_earned: int
    is_pr: bool
    leveled_up: bool
    new_level: int
    total_coins: int
    new_achievements: list[str] = field(default_factory=list)


@dataclass
class WorkoutReward:
    """Outcome of a workout completion."""

    coins_earned: int
    xp_earned: int
    leveled_up: bool
    new_level: int
    new_streak: int
    total_coins: int
    total_xp: int
    new_achievements: list[str] = field(default_factory=list)


def _coerce_date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value)
        except ValueError as exc:
            raise RewardValidationError(
                "Workout date must be an ISO calendar date (YYYY-MM-DD)", {"date": value}
            ) from exc
    raise RewardValidationError("Workout date is required", {"date": repr(value)})


def _log_retry(retry_state: RetryCallState) -> None:
    error = retry_state.outcome.exception() if retry_state.outcome else None
    logger.warning(
        "Reward transaction conflict, retrying",
        attempt=retry_state.attempt_number,
        error=str(error),
    )


class RewardEngine:
    """Apply reward rules to a user's game profile in one transaction per event."""

    def __init__(
        self,
        db: Session,
        *,
        max_attempts: int | None = None,
        retry_wait_seconds: float | None = None,
    ) -> None:
        self.db = db
        self.profiles = GameProfileStore(db)
        self.ledger = AchievementLedger(db)
        self.logs = ExerciseLogService(db)
        self.max_attempts = max_attempts or settings.REWARD_TRANSACTION_MAX_ATTEMPTS
        self.retry_wait_seconds = (
            settings.REWARD_RETRY_WAIT_SECONDS if retry_wait_seconds is None else retry_wait_seconds
        )

    # ------------------------------------------------------------------
    # Public operations
    # ------------------------------------------------------------------
    def award_exercise_complete(
        self,
        user_id: uuid.UUID,
        exercise_name: str,
        weight_used: float = 0,
        had_rpe: bool = False,
        *,
        claim: Callable[[], Any] | None = None,
    ) -> ExerciseReward:
        """Grant the reward for one completed exercise.

        PR detection compares ``weight_used`` against logs recorded *before*
        this call, so the caller writes the matching exercise log afterwards.
        The name is matched against logs as given. ``claim`` runs first in the
        reward transaction; whatever it writes commits or rolls back with the
        payout.
        """

        if not exercise_name or not exercise_name.strip():
            raise RewardValidationError("Exercise name must not be empty")
        if weight_used is None or not math.isfinite(weight_used) or weight_used < 0:
            raise RewardValidationError(
                "Weight used must be a non-negative number", {"weight_used": weight_used}
            )

        return self._run_transaction(
            lambda: self._apply_exercise_complete(
                user_id, exercise_name, float(weight_used), had_rpe, claim
            )
        )

    def award_workout_complete(
        self,
        user_id: uuid.UUID,
        workout_date: date | str,
        weekly_volume: float | None = None,
        *,
        claim: Callable[[], Any] | None = None,
    ) -> WorkoutReward:
        """Grant the reward for a completed workout and advance the streak."""

        day = _coerce_date(workout_date)
        if weekly_volume is not None and (not math.isfinite(weekly_volume) or weekly_volume < 0):
            raise RewardValidationError(
                "Weekly volume must be a non-negative number", {"weekly_volume": weekly_volume}
            )

        return self._run_transaction(
            lambda: self._apply_workout_complete(user_id, day, weekly_volume, claim)
        )

    # ------------------------------------------------------------------
    # Rule application (runs inside the transaction)
    # ------------------------------------------------------------------
    def _apply_exercise_complete(
        self,
        user_id: uuid.UUID,
        exercise_name: str,
        weight_used: float,
        had_rpe: bool,
        claim: Callable[[], Any] | None = None,
    ) -> ExerciseReward:
        UserService(self.db).get(user_id)
        if claim is not None:
            claim()
        profile = self.profiles.ensure(user_id)

        events = [RewardEvent.EXERCISE_COMPLETE]
        if had_rpe:
            events.append(RewardEvent.RPE_LOGGED)

        previous_max_weight, prior_logs = self.logs.previous_max_weight(user_id, exercise_name)
        is_pr = prior_logs > 0 and weight_used > 0 and weight_used > previous_max_weight
        if is_pr:
            events.append(RewardEvent.PERSONAL_RECORD)

        reward = total_reward(events)
        previous_level = profile.level
        self._credit(profile, reward)
        profile.total_exercises += 1
        if is_pr:
            profile.personal_records += 1
        self.db.flush([profile])

        new_achievements = self._unlock_all(
            user_id,
            exercise_achievements(
                total_exercises=profile.total_exercises,
                personal_records=profile.personal_records,
                coins=profile.coins,
                level=profile.level,
            ),
        )

        logger.info(
            "Exercise reward granted",
            user_id=str(user_id),
            exercise=exercise_name,
            coins=reward.coins,
            xp=reward.xp,
            is_pr=is_pr,
        )
        return ExerciseReward(
            coins_earned=reward.coins,
            xp_earned=reward.xp,
            is_pr=is_pr,
            leveled_up=profile.level > previous_level,
            new_level=profile.level,
            total_coins=profile.coins,
            new_achievements=new_achievements,
        )

    def _apply_workout_complete(
        self,
        user_id: uuid.UUID,
        day: date,
        weekly_volume: float | None,
        claim: Callable[[], Any] | None = None,
    ) -> WorkoutReward:
        UserService(self.db).get(user_id)
        if claim is not None:
            claim()
        profile = self.profiles.ensure(user_id)
        last_active = profile.last_active_date

        events = [RewardEvent.WORKOUT_COMPLETE]
        streak = advance_streak(last_active, day, profile.current_streak, profile.longest_streak)
        events.extend(milestone_events(streak))
        if is_first_workout_of_week(last_active, day):
            events.append(RewardEvent.FIRST_WORKOUT_OF_WEEK)

        reward = total_reward(events)
        previous_level = profile.level
        self._credit(profile, reward)
        profile.current_streak = streak.current
        profile.longest_streak = streak.longest
        profile.total_workouts += 1
        profile.last_active_date = day
        self.db.flush([profile])

        new_achievements = self._unlock_all(
            user_id,
            workout_achievements(
                total_workouts=profile.total_workouts,
                streak=streak.current,
                weekly_volume=weekly_volume,
            ),
        )

        logger.info(
            "Workout reward granted",
            user_id=str(user_id),
            date=day.isoformat(),
            coins=reward.coins,
            xp=reward.xp,
            streak=streak.current,
        )
        return WorkoutReward(
            coins_earned=reward.coins,
            xp_earned=reward.xp,
            leveled_up=profile.level > previous_level,
            new_level=profile.level,
            new_streak=streak.current,
            total_coins=profile.coins,
            total_xp=profile.xp,
            new_achievements=new_achievements,
        )

    @staticmethod
    def _credit(profile: GameProfile, reward: Reward) -> None:
        profile.coins += reward.coins
        profile.xp += reward.xp
        profile.level = level_for_xp(profile.xp)

    def _unlock_all(self, user_id: uuid.UUID, achievement_ids: list[str]) -> list[str]:
        """Unlock each candidate; a failed insert is logged and skipped."""

        unlocked: list[str] = []
        for achievement_id in achievement_ids:
            try:
                if self.ledger.unlock(user_id, achievement_id):
                    unlocked.append(achievement_id)
            except SQLAlchemyError as exc:
                logger.warning(
                    "Achievement unlock failed",
                    user_id=str(user_id),
                    achievement_id=achievement_id,
                    error=str(exc),
                )
        return unlocked

    # ------------------------------------------------------------------
    # Transaction handling
    # ------------------------------------------------------------------
    def _run_transaction(self, operation: Callable[[], T]) -> T:
        retryer = Retrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_exponential(multiplier=self.retry_wait_seconds, max=1),
            retry=retry_if_exception_type(TRANSIENT_DB_ERRORS),
            before_sleep=_log_retry,
            reraise=True,
        )
        try:
            for attempt in retryer:
                with attempt:
                    try:
                        result = operation()
                        self.db.commit()
                    except Exception:
                        self.db.rollback()
                        raise
        except TRANSIENT_DB_ERRORS as exc:
            raise RewardTransactionError(
                "Reward transaction could not be committed",
                {"attempts": self.max_attempts},
            ) from exc
        except SQLAlchemyError as exc:
            raise DatabaseError("Reward transaction failed", {"error": str(exc)}) from exc
        return result


__all__ = [
    "ExerciseReward",
    "RewardEngine",
    "RewardTransactionError",
    "RewardValidationError",
    "WorkoutReward",
]
