"""Per-user gamification aggregate."""
import uuid

from sqlalchemy import CheckConstraint, Column, Date, DateTime, ForeignKey, Integer
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.sql import func

from fitcoach.db.base import Base

COUNTER_FIELDS = (
    "coins",
    "xp",
    "current_streak",
    "longest_streak",
    "total_workouts",
    "total_exercises",
    "personal_records",
)


class GameProfile(Base):
    """Coins, XP, level and streak state for one user."""

    __tablename__ = "game_profiles"
    __table_args__ = tuple(
        CheckConstraint(f"{field} >= 0", name=f"ck_game_profiles_{field}_non_negative")
        for field in COUNTER_FIELDS
    ) + (CheckConstraint("level >= 1", name="ck_game_profiles_level_positive"),)

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
        index=True,
    )

    coins = Column(Integer, nullable=False, default=0)
    xp = Column(Integer, nullable=False, default=0)
    level = Column(Integer, nullable=False, default=1)
    current_streak = Column(Integer, nullable=False, default=0)
    longest_streak = Column(Integer, nullable=False, default=0)
    total_workouts = Column(Integer, nullable=False, default=0)
    total_exercises = Column(Integer, nullable=False, default=0)
    personal_records = Column(Integer, nullable=False, default=0)
    last_active_date = Column(Date)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    @classmethod
    def blank(cls, user_id: uuid.UUID) -> "GameProfile":
        """Return an unsaved profile with every counter at its starting value."""

        profile = cls(user_id=user_id, level=1, last_active_date=None)
        for field in COUNTER_FIELDS:
            setattr(profile, field, 0)
        return profile
