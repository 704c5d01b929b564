"""API endpoint modules for v1."""

from fitcoach.api.v1.endpoints import exercise_logs, game, users, workouts

__all__ = [
    "exercise_logs",
    "game",
    "users",
    "workouts",
]
