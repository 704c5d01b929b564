"""Shared API dependencies."""
from __future__ import annotations

import uuid

from fastapi import Depends
from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from fitcoach.config import settings
from fitcoach.db.models.user import User
from fitcoach.db.session import SessionLocal
from fitcoach.services.coach_context import ProfileTextCache
from fitcoach.services.reward_engine import RewardEngine
from fitcoach.services.users import UserService
from fitcoach.utils.cache import CacheBackend

_profile_text_cache_singleton: ProfileTextCache | None = None


def get_db() -> Session:
    """Yield a database session for request lifetime."""

    db = SessionLocal()
    try:
        yield db
    except SQLAlchemyError as exc:
        logger.error("Database session error", error=str(exc))
        db.rollback()
        raise
    finally:
        db.close()


def get_user(user_id: uuid.UUID, db: Session = Depends(get_db)) -> User:
    """Resolve the user addressed by the path; identity is validated upstream."""

    return UserService(db).get(user_id)


def get_reward_engine(db: Session = Depends(get_db)) -> RewardEngine:
    return RewardEngine(db)


def get_profile_text_cache() -> ProfileTextCache:
    """Return the process-wide coach profile text cache."""

    global _profile_text_cache_singleton
    if _profile_text_cache_singleton is None:
        _profile_text_cache_singleton = ProfileTextCache(
            CacheBackend(settings.REDIS_URL),
            ttl_seconds=settings.PROFILE_TEXT_CACHE_TTL_SECONDS,
        )
    return _profile_text_cache_singleton
