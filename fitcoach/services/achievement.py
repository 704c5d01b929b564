"""Append-only ledger of unlocked achievements."""
from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime, timezone

from loguru import logger
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from fitcoach.core.achievements import ACHIEVEMENTS, AchievementDefinition
from fitcoach.db.models.achievement import UserAchievement


class UnknownAchievementError(ValueError):
    """Raised for identifiers outside the achievement catalog."""


@dataclass
class UnlockedAchievement:
    """A ledger row joined with its catalog definition."""

    definition: AchievementDefinition
    unlocked_at: datetime

    @property
    def key(self) -> str:
        return self.definition.key


class AchievementLedger:
    """Record achievement unlocks at most once per user."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def is_unlocked(self, user_id: uuid.UUID, achievement_id: str) -> bool:
        stmt = select(UserAchievement.id).where(
            UserAchievement.user_id == user_id,
            UserAchievement.achievement_id == achievement_id,
        )
        return self.db.execute(stmt).first() is not None

    def unlock(self, user_id: uuid.UUID, achievement_id: str) -> bool:
        """Insert the unlock if absent. Returns ``True`` only for a new row.

        The insert runs in a SAVEPOINT so a lost race on the unique pair only
        discards this row, not the surrounding transaction.
        """

        if achievement_id not in ACHIEVEMENTS:
            raise UnknownAchievementError(achievement_id)
        if self.is_unlocked(user_id, achievement_id):
            return False

        try:
            with self.db.begin_nested():
                self.db.add(
                    UserAchievement(
                        user_id=user_id,
                        achievement_id=achievement_id,
                        unlocked_at=datetime.now(timezone.utc),
                    )
                )
        except IntegrityError:
            logger.info(
                "Achievement already unlocked concurrently",
                user_id=str(user_id),
                achievement_id=achievement_id,
            )
            return False
        return True

    def list_unlocked(self, user_id: uuid.UUID) -> list[UnlockedAchievement]:
        stmt = (
            select(UserAchievement)
            .where(UserAchievement.user_id == user_id)
            .order_by(UserAchievement.unlocked_at, UserAchievement.achievement_id)
        )
        return [
            UnlockedAchievement(definition=ACHIEVEMENTS[row.achievement_id], unlocked_at=row.unlocked_at)
            for row in self.db.scalars(stmt)
            if row.achievement_id in ACHIEVEMENTS
        ]


__all__ = [
    "AchievementLedger",
    "UnknownAchievementError",
    "UnlockedAchievement",
]
