"""Pydantic schemas package."""

from fitcoach.schemas.game import (
    AchievementDefinitionRead,
    ExerciseRewardRequest,
    ExerciseRewardResponse,
    GameProfileRead,
    UnlockedAchievementRead,
    WorkoutRewardRequest,
    WorkoutRewardResponse,
)
from fitcoach.schemas.user import (
    CoachProfileRead,
    StrengthTest,
    UserBase,
    UserCreate,
    UserRead,
    UserUpdate,
)
from fitcoach.schemas.workout import (
    ExerciseCompletionRequest,
    ExerciseCompletionResponse,
    ExerciseLogRead,
    ExerciseProgressPoint,
    ExerciseReplaceRequest,
    WeeklyVolumeRead,
    WorkoutExercise,
    WorkoutRead,
    WorkoutSave,
)

__all__ = [
    "AchievementDefinitionRead",
    "ExerciseRewardRequest",
    "ExerciseRewardResponse",
    "GameProfileRead",
    "UnlockedAchievementRead",
    "WorkoutRewardRequest",
    "WorkoutRewardResponse",
    "CoachProfileRead",
    "StrengthTest",
    "UserBase",
    "UserCreate",
    "UserRead",
    "UserUpdate",
    "ExerciseCompletionRequest",
    "ExerciseCompletionResponse",
    "ExerciseLogRead",
    "ExerciseProgressPoint",
    "ExerciseReplaceRequest",
    "WeeklyVolumeRead",
    "WorkoutExercise",
    "WorkoutRead",
    "WorkoutSave",
]
