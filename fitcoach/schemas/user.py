"""Pydantic models for user API interactions."""
from __future__ import annotations

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, model_validator


class StrengthTest(BaseModel):
    """Baseline strength figures captured during onboarding."""

    bicep_curl_weight: float = Field(..., ge=0)
    pushups_count: int = Field(..., ge=0)


class UserBase(BaseModel):
    """Onboarding questionnaire answers."""

    name: Optional[str] = Field(default=None, max_length=255)
    email: Optional[EmailStr] = None
    age: int = Field(..., ge=10, le=120)
    height: float = Field(..., gt=0, description="Height in centimetres")
    weight: float = Field(..., gt=0, description="Body weight in kilograms")
    sex: str = Field(..., max_length=20)
    training_experience: str = Field(..., max_length=50)
    training_frequency: str = Field(..., max_length=50)
    equipment_access: str = Field(..., max_length=50)
    primary_goal: str = Field(..., max_length=100)
    diet_type: str = Field(..., max_length=50)
    daily_activity: str = Field(..., max_length=50)
    injury_flags: list[str] = Field(default_factory=list)
    medical_conditions: Optional[str] = None
    goal_aggressiveness: str = Field(..., max_length=50)
    timeline_expectation: str = Field(..., max_length=50)
    recovery_capacity: str = Field(..., max_length=50)
    workout_routine: str = Field(default="", max_length=255)
    body_type: str = Field(default="", max_length=50)
    strength_test: Optional[StrengthTest] = None
    additional_objectives: list[str] = Field(default_factory=list)


class UserCreate(UserBase):
    """Schema for completing onboarding."""


class UserRead(UserBase):
    """Schema returned after onboarding or retrieval."""

    id: uuid.UUID
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class UserUpdate(BaseModel):
    """Schema for partial updates to an athlete profile."""

    name: Optional[str] = Field(default=None, max_length=255)
    age: Optional[int] = Field(default=None, ge=10, le=120)
    height: Optional[float] = Field(default=None, gt=0)
    weight: Optional[float] = Field(default=None, gt=0)
    training_experience: Optional[str] = Field(default=None, max_length=50)
    training_frequency: Optional[str] = Field(default=None, max_length=50)
    equipment_access: Optional[str] = Field(default=None, max_length=50)
    primary_goal: Optional[str] = Field(default=None, max_length=100)
    diet_type: Optional[str] = Field(default=None, max_length=50)
    daily_activity: Optional[str] = Field(default=None, max_length=50)
    injury_flags: Optional[list[str]] = None
    medical_conditions: Optional[str] = None
    goal_aggressiveness: Optional[str] = Field(default=None, max_length=50)
    recovery_capacity: Optional[str] = Field(default=None, max_length=50)
    strength_test: Optional[StrengthTest] = None
    additional_objectives: Optional[list[str]] = None

    model_config = ConfigDict(extra="forbid")

    @model_validator(mode="after")
    def ensure_payload_not_empty(self) -> "UserUpdate":
        if not any(value is not None for value in self.model_dump().values()):
            raise ValueError("At least one field must be provided")
        return self


class CoachProfileRead(BaseModel):
    """Formatted onboarding summary used to brief the AI coach."""

    user_id: uuid.UUID
    profile: str
