"""Per-user game profile storage and read projection."""
from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import date

from sqlalchemy import select
from sqlalchemy.orm import Session

from fitcoach.core.progression import (
    title_for_level,
    xp_in_current_level,
    xp_to_next_level,
)
from fitcoach.db.models.game_profile import GameProfile


@dataclass
class GameProfileView:
    """Profile counters plus the display fields derived from them."""

    coins: int
    xp: int
    level: int
    current_streak: int
    longest_streak: int
    total_workouts: int
    total_exercises: int
    personal_records: int
    last_active_date: date | None
    title: str
    xp_to_next_level: int
    xp_in_current_level: int

    @classmethod
    def from_profile(cls, profile: GameProfile) -> "GameProfileView":
        return cls(
            coins=profile.coins,
            xp=profile.xp,
            level=profile.level,
            current_streak=profile.current_streak,
            longest_streak=profile.longest_streak,
            total_workouts=profile.total_workouts,
            total_exercises=profile.total_exercises,
            personal_records=profile.personal_records,
            last_active_date=profile.last_active_date,
            title=title_for_level(profile.level),
            xp_to_next_level=xp_to_next_level(profile.level),
            xp_in_current_level=xp_in_current_level(profile.xp, profile.level),
        )


class GameProfileStore:
    """Read, lock and lazily create game profiles."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def get(self, user_id: uuid.UUID) -> GameProfile | None:
        return self.db.scalars(
            select(GameProfile).where(GameProfile.user_id == user_id)
        ).first()

    def ensure(self, user_id: uuid.UUID) -> GameProfile:
        """Return the user's profile locked for update, creating it if missing.

        A concurrent creator surfaces as ``IntegrityError`` on flush (unique
        ``user_id``); the reward engine retries the whole transaction.
        """

        stmt = (
            select(GameProfile)
            .where(GameProfile.user_id == user_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        profile = self.db.scalars(stmt).first()
        if profile is not None:
            return profile

        profile = GameProfile.blank(user_id)
        self.db.add(profile)
        self.db.flush([profile])
        return profile

    def view(self, user_id: uuid.UUID) -> GameProfileView:
        """Profile projection; users without a profile see level 1 and zero counters."""

        profile = self.get(user_id)
        return GameProfileView.from_profile(profile or GameProfile.blank(user_id))


__all__ = ["GameProfileStore", "GameProfileView"]
