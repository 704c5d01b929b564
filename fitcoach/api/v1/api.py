"""API router for version 1."""
from fastapi import APIRouter

from fitcoach.api.v1.endpoints import exercise_logs, game, users, workouts


api_router = APIRouter()
api_router.include_router(users.router)
api_router.include_router(workouts.router)
api_router.include_router(exercise_logs.router)
api_router.include_router(game.router)
