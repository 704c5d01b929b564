"""Game profile, reward and achievement endpoints."""
from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from fitcoach.api import deps
from fitcoach.core.achievements import ACHIEVEMENTS
from fitcoach.db.models.user import User
from fitcoach.schemas.game import (
    AchievementDefinitionRead,
    ExerciseRewardRequest,
    ExerciseRewardResponse,
    GameProfileRead,
    UnlockedAchievementRead,
    WorkoutRewardRequest,
    WorkoutRewardResponse,
)
from fitcoach.services.achievement import AchievementLedger
from fitcoach.services.game_profile import GameProfileStore
from fitcoach.services.reward_engine import RewardEngine

router = APIRouter(tags=["game"])


@router.get("/achievements", response_model=list[AchievementDefinitionRead])
def list_achievement_catalog() -> list[AchievementDefinitionRead]:
    """Return every achievement definition, including display-only ones."""

    return [AchievementDefinitionRead.model_validate(item) for item in ACHIEVEMENTS.values()]


@router.get("/users/{user_id}/game-profile", response_model=GameProfileRead)
def read_game_profile(
    *,
    user: User = Depends(deps.get_user),
    db: Session = Depends(deps.get_db),
) -> GameProfileRead:
    """Return coins, XP, level and streaks; a blank profile before the first reward."""

    return GameProfileRead.model_validate(GameProfileStore(db).view(user.id))


@router.get("/users/{user_id}/achievements", response_model=list[UnlockedAchievementRead])
def list_unlocked_achievements(
    *,
    user: User = Depends(deps.get_user),
    db: Session = Depends(deps.get_db),
) -> list[UnlockedAchievementRead]:
    return [
        UnlockedAchievementRead(
            key=item.definition.key,
            title=item.definition.title,
            description=item.definition.description,
            icon=item.definition.icon,
            coin_bonus=item.definition.coin_bonus,
            rarity=item.definition.rarity,
            unlocked_at=item.unlocked_at,
        )
        for item in AchievementLedger(db).list_unlocked(user.id)
    ]


@router.post("/users/{user_id}/rewards/exercise", response_model=ExerciseRewardResponse)
def award_exercise(
    *,
    payload: ExerciseRewardRequest,
    user: User = Depends(deps.get_user),
    engine: RewardEngine = Depends(deps.get_reward_engine),
) -> ExerciseRewardResponse:
    """Grant coins and XP for one completed exercise."""

    result = engine.award_exercise_complete(
        user.id, payload.exercise_name, payload.weight_used, had_rpe=payload.had_rpe
    )
    return ExerciseRewardResponse.model_validate(result)


@router.post("/users/{user_id}/rewards/workout", response_model=WorkoutRewardResponse)
def award_workout(
    *,
    payload: WorkoutRewardRequest,
    user: User = Depends(deps.get_user),
    engine: RewardEngine = Depends(deps.get_reward_engine),
) -> WorkoutRewardResponse:
    """Grant the workout bonus and advance the daily streak."""

    result = engine.award_workout_complete(user.id, payload.date, payload.weekly_volume)
    return WorkoutRewardResponse.model_validate(result)
