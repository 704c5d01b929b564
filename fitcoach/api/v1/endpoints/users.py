"""Athlete onboarding and profile endpoints."""
from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from fitcoach.api import deps
from fitcoach.db.models.user import User
from fitcoach.schemas.user import CoachProfileRead, UserCreate, UserRead, UserUpdate
from fitcoach.services.coach_context import ProfileTextCache, format_user_profile
from fitcoach.services.users import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def complete_onboarding(
    *,
    payload: UserCreate,
    db: Session = Depends(deps.get_db),
) -> User:
    """Store the onboarding questionnaire as a new athlete."""

    return UserService(db).create(payload)


@router.get("/{user_id}", response_model=UserRead)
def read_user(*, user: User = Depends(deps.get_user)) -> User:
    return user


@router.patch("/{user_id}", response_model=UserRead)
def update_user(
    *,
    payload: UserUpdate,
    user: User = Depends(deps.get_user),
    db: Session = Depends(deps.get_db),
    profile_cache: ProfileTextCache = Depends(deps.get_profile_text_cache),
) -> User:
    """Update onboarding answers and drop the cached coach briefing."""

    updated = UserService(db).update(user, payload)
    profile_cache.invalidate(updated.id)
    return updated


@router.get("/{user_id}/coach-profile", response_model=CoachProfileRead)
def read_coach_profile(
    *,
    user: User = Depends(deps.get_user),
    profile_cache: ProfileTextCache = Depends(deps.get_profile_text_cache),
) -> CoachProfileRead:
    """Return the profile text the coach is briefed with, cached for a few minutes."""

    text = profile_cache.get_or_build(user.id, lambda: format_user_profile(user))
    return CoachProfileRead(user_id=user.id, profile=text)
