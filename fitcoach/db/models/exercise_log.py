"""Append-only history of completed exercise performances."""
import uuid

from sqlalchemy import (
    CheckConstraint,
    Column,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
)
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.sql import func

from fitcoach.db.base import Base


class ExerciseLog(Base):
    """One completed exercise within a workout."""

    __tablename__ = "exercise_logs"
    __table_args__ = (
        Index("ix_exercise_logs_user_exercise", "user_id", "exercise_name"),
        Index("ix_exercise_logs_user_date", "user_id", "date"),
        Index("ix_exercise_logs_workout_exercise", "workout_id", "exercise_name"),
        CheckConstraint("sets_completed > 0", name="ck_exercise_logs_sets_positive"),
        CheckConstraint("reps_completed > 0", name="ck_exercise_logs_reps_positive"),
        CheckConstraint("weight_used >= 0", name="ck_exercise_logs_weight_non_negative"),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(
        UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    workout_id = Column(
        UUID(as_uuid=True), ForeignKey("workouts.id", ondelete="CASCADE"), nullable=False
    )
    exercise_name = Column(String(255), nullable=False)
    date = Column(Date, nullable=False)
    sets_completed = Column(Integer, nullable=False)
    reps_completed = Column(Integer, nullable=False)
    weight_used = Column(Float, nullable=False, default=0.0)
    rpe = Column(Float)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    @property
    def volume(self) -> float:
        return (self.weight_used or 0.0) * self.reps_completed * self.sets_completed
