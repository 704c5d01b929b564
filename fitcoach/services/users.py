"""Service layer for athlete profile operations."""
from __future__ import annotations

import uuid

from sqlalchemy.orm import Session

from fitcoach.db.models.user import User
from fitcoach.schemas.user import UserCreate, UserUpdate
from fitcoach.utils.exceptions import NotFoundError


class UserNotFoundError(NotFoundError):
    """Raised when a user lookup fails."""


class UserService:
    """Encapsulates reusable user-related data access operations."""

    def __init__(self, db: Session):
        self.db = db

    def get(self, user_id: uuid.UUID) -> User:
        """Return a user by identifier or raise ``UserNotFoundError``."""

        user = self.db.get(User, user_id)
        if not user:
            raise UserNotFoundError("User not found", {"user_id": str(user_id)})
        return user

    def create(self, payload: UserCreate) -> User:
        """Persist onboarding answers as a new user."""

        user = User(**payload.model_dump(mode="json"))
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user

    def update(self, user: User, payload: UserUpdate) -> User:
        """Persist user profile changes and return the updated entity."""

        update_data = payload.model_dump(exclude_unset=True, mode="json")
        for field, value in update_data.items():
            setattr(user, field, value)

        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user
