"""Daily workout plan model."""
import uuid

from sqlalchemy import Column, Date, DateTime, ForeignKey, String, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.sql import func

from fitcoach.db.base import Base
from fitcoach.db.types import JSONDocument


class Workout(Base):
    """A generated plan for one user and calendar day."""

    __tablename__ = "workouts"
    __table_args__ = (UniqueConstraint("user_id", "date", name="uq_workouts_user_date"),)

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(
        UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    date = Column(Date, nullable=False)
    title = Column(String(255), nullable=False)
    exercises = Column(JSONDocument, nullable=False, default=list)
    status = Column(String(20), nullable=False, default="generated")
    rewarded_at = Column(DateTime(timezone=True))  # set once the completion reward was granted
    # Names of exercises whose completion reward was granted.
    rewarded_exercises = Column(JSONDocument, nullable=False, default=list)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    def find_exercise(self, name: str) -> dict | None:
        """Return the planned exercise called ``name`` if present."""

        return next((ex for ex in self.exercises or [] if ex.get("name") == name), None)

    def exercise_rewarded(self, name: str) -> bool:
        return name in (self.rewarded_exercises or [])

    @property
    def is_completed(self) -> bool:
        exercises = self.exercises or []
        return bool(exercises) and all(ex.get("completed") for ex in exercises)
