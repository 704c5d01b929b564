"""Coach prompt context: onboarding answers rendered as text, cached per user."""
from __future__ import annotations

import uuid
from typing import Callable

from fitcoach.db.models.user import User
from fitcoach.utils.cache import CacheBackend

PROFILE_TEXT_NAMESPACE = "coach:profile"
DEFAULT_PROFILE_TTL_SECONDS = 5 * 60


def format_user_profile(user: User) -> str:
    """Render the identity block the AI coach is briefed with."""

    diet = (
        "Vegetarian (No eggs, dairy ok)" if user.diet_type == "vegetarian" else user.diet_type
    )
    injuries = (
        f"Injuries/Flags: {', '.join(user.injury_flags)}."
        if user.injury_flags
        else "No major injuries."
    )
    strength_test = user.strength_test or {}
    strength = (
        f"Strength: Push-ups: {strength_test['pushups_count']}, "
        f"Bicep Curls: {strength_test['bicep_curl_weight']}kg."
        if strength_test
        else "Strength: Not tested."
    )
    objectives = ", ".join(user.additional_objectives or []) or "None"

    lines = [
        "USER IDENTITY:",
        f"- Age: {user.age}, Height: {user.height} cm, Weight: {user.weight} kg, Sex: {user.sex}.",
        f"- Diet: {diet}.",
        f"- Goal: {user.primary_goal} ({user.goal_aggressiveness} aggressiveness).",
        f"- Experience: {user.training_experience}. Frequency: {user.training_frequency}.",
        f"- Equipment: {user.equipment_access}.",
        f"- Activity Level: {user.daily_activity}.",
        f"- Recovery Capacity: {user.recovery_capacity}.",
        f"- {injuries}",
        f"- {strength}",
        f"- Additional Objectives: {objectives}.",
    ]
    return "\n".join(lines)


class ProfileTextCache:
    """Time-bounded cache of formatted profile text keyed by user id.

    Staleness up to ``ttl_seconds`` is acceptable; updates to the user call
    :meth:`invalidate`.
    """

    def __init__(
        self,
        backend: CacheBackend | None = None,
        *,
        ttl_seconds: int = DEFAULT_PROFILE_TTL_SECONDS,
    ) -> None:
        self.backend = backend or CacheBackend()
        self.ttl_seconds = ttl_seconds

    def get(self, user_id: uuid.UUID) -> str | None:
        return self.backend.get(PROFILE_TEXT_NAMESPACE, str(user_id))

    def get_or_build(self, user_id: uuid.UUID, builder: Callable[[], str]) -> str:
        cached = self.get(user_id)
        if cached is not None:
            return cached
        value = builder()
        self.backend.set(PROFILE_TEXT_NAMESPACE, str(user_id), value, ttl_seconds=self.ttl_seconds)
        return value

    def invalidate(self, user_id: uuid.UUID) -> None:
        self.backend.invalidate(PROFILE_TEXT_NAMESPACE, str(user_id))

    def clear(self) -> None:
        self.backend.clear()


__all__ = ["ProfileTextCache", "format_user_profile"]
