"""Service layer package."""

from fitcoach.services.achievement import AchievementLedger
from fitcoach.services.coach_context import ProfileTextCache
from fitcoach.services.completion import ExerciseCompletionFlow
from fitcoach.services.exercise_log import ExerciseLogService
from fitcoach.services.game_profile import GameProfileStore
from fitcoach.services.reward_engine import RewardEngine
from fitcoach.services.users import UserService
from fitcoach.services.workouts import WorkoutService

__all__ = [
    "AchievementLedger",
    "ExerciseCompletionFlow",
    "ExerciseLogService",
    "GameProfileStore",
    "ProfileTextCache",
    "RewardEngine",
    "UserService",
    "WorkoutService",
]
