"""Database models package."""
from fitcoach.db.models.user import User
from fitcoach.db.models.workout import Workout
from fitcoach.db.models.exercise_log import ExerciseLog
from fitcoach.db.models.game_profile import GameProfile
from fitcoach.db.models.achievement import UserAchievement

__all__ = [
    "User",
    "Workout",
    "ExerciseLog",
    "GameProfile",
    "UserAchievement",
]
