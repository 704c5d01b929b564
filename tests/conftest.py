"""Pytest fixtures for service and API tests."""

import os
from collections.abc import Callable, Generator
from datetime import date

os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from fitcoach.api import deps
from fitcoach.db import models  # noqa: F401  # Imported for side effects
from fitcoach.db.base import Base
from fitcoach.db.models import User, Workout
from fitcoach.main import create_app
from fitcoach.services.workouts import WorkoutService


ONBOARDING_ANSWERS = {
    "name": "Test Athlete",
    "age": 29,
    "height": 178.0,
    "weight": 76.5,
    "sex": "female",
    "training_experience": "intermediate",
    "training_frequency": "4 days",
    "equipment_access": "full gym",
    "primary_goal": "build muscle",
    "diet_type": "omnivore",
    "daily_activity": "moderate",
    "injury_flags": [],
    "goal_aggressiveness": "balanced",
    "timeline_expectation": "6 months",
    "recovery_capacity": "good",
}


@pytest.fixture()
def db_engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(db_engine) -> Generator[Session, None, None]:
    TestingSessionLocal = sessionmaker(
        autocommit=False, autoflush=False, bind=db_engine, expire_on_commit=False
    )
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(autouse=True)
def clear_cache() -> Generator[None, None, None]:
    deps.get_profile_text_cache().clear()
    try:
        yield
    finally:
        deps.get_profile_text_cache().clear()


@pytest.fixture()
def client(db_session: Session) -> Generator[TestClient, None, None]:
    app = create_app()

    def override_get_db() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[deps.get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def make_user(db_session: Session) -> Callable[..., User]:
    counter = {"n": 0}

    def _make_user(**overrides) -> User:
        counter["n"] += 1
        answers = {**ONBOARDING_ANSWERS, "email": f"athlete{counter['n']}@example.com", **overrides}
        user = User(**answers)
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make_user


@pytest.fixture()
def user(make_user) -> User:
    return make_user()


@pytest.fixture()
def make_workout(db_session: Session) -> Callable[..., Workout]:
    def _make_workout(user: User, workout_date: date, *exercises: dict, title: str = "Push Day") -> Workout:
        if not exercises:
            exercises = (
                {"name": "Bench Press", "sets": 3, "reps": "8-12", "weight": "40kg", "completed": False},
                {"name": "Push-ups", "sets": 2, "reps": "15", "weight": None, "completed": False},
            )
        return WorkoutService(db_session).save_workout(
            user_id=user.id, workout_date=workout_date, title=title, exercises=exercises
        )

    return _make_workout


@pytest.fixture()
def onboarding_answers() -> dict:
    return dict(ONBOARDING_ANSWERS)
