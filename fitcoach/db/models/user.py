"""User database model."""
import uuid

from sqlalchemy import Column, DateTime, Float, Integer, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.sql import func

from fitcoach.db.base import Base
from fitcoach.db.types import JSONDocument, StringList


class User(Base):
    """Represents an athlete and their onboarding questionnaire answers."""

    __tablename__ = "users"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(255))
    email = Column(String(255), unique=True, index=True)

    # Onboarding
    age = Column(Integer, nullable=False)
    height = Column(Float, nullable=False)  # cm
    weight = Column(Float, nullable=False)  # kg
    sex = Column(String(20), nullable=False)
    training_experience = Column(String(50), nullable=False)
    training_frequency = Column(String(50), nullable=False)
    equipment_access = Column(String(50), nullable=False)
    primary_goal = Column(String(100), nullable=False)
    diet_type = Column(String(50), nullable=False)
    daily_activity = Column(String(50), nullable=False)
    injury_flags = Column(StringList(), default=list)
    medical_conditions = Column(Text)
    goal_aggressiveness = Column(String(50), nullable=False)
    timeline_expectation = Column(String(50), nullable=False)
    recovery_capacity = Column(String(50), nullable=False)
    workout_routine = Column(String(255), default="")
    body_type = Column(String(50), default="")
    strength_test = Column(JSONDocument)
    additional_objectives = Column(StringList(), default=list)

    # Metadata
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
