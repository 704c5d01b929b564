"""Tests for the reward engine."""
from __future__ import annotations

import math
import threading
import uuid
from concurrent.futures import ThreadPoolExecutor
from datetime import date

import pytest
from sqlalchemy import create_engine, event, func, select
from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from fitcoach.db.base import Base
from fitcoach.db.models import GameProfile, User, UserAchievement
from fitcoach.services import reward_engine as reward_engine_module
from fitcoach.services.exercise_log import ExerciseLogService
from fitcoach.services.game_profile import GameProfileStore
from fitcoach.services.reward_engine import (
    RewardEngine,
    RewardTransactionError,
    RewardValidationError,
)
from fitcoach.services.users import UserNotFoundError
from fitcoach.utils.exceptions import DatabaseError


@pytest.fixture()
def engine(db_session) -> RewardEngine:
    return RewardEngine(db_session, max_attempts=3, retry_wait_seconds=0)


def seed_profile(db_session, user, **state) -> GameProfile:
    profile = GameProfile.blank(user.id)
    for field, value in state.items():
        setattr(profile, field, value)
    db_session.add(profile)
    db_session.commit()
    return profile


def log_lift(db_session, workout, exercise_name: str, weight: float) -> None:
    ExerciseLogService(db_session).record(
        user_id=workout.user_id,
        workout_id=workout.id,
        exercise_name=exercise_name,
        log_date=workout.date,
        sets_completed=3,
        reps_completed=8,
        weight_used=weight,
    )
    db_session.commit()


def test_new_user_end_to_end(engine, db_session, user) -> None:
    assert GameProfileStore(db_session).get(user.id) is None

    exercise = engine.award_exercise_complete(user.id, "Bench Press", 40, False)

    assert GameProfileStore(db_session).get(user.id) is not None
    assert exercise.coins_earned == 10
    assert exercise.xp_earned == 15
    assert exercise.is_pr is False
    assert exercise.new_achievements == ["first_blood"]
    assert exercise.total_coins == 10

    workout = engine.award_workout_complete(user.id, "2024-03-01")

    assert workout.new_streak == 1
    assert workout.coins_earned == 50 + 20
    assert workout.xp_earned == 75 + 30
    assert "full_send" in workout.new_achievements
    assert workout.total_coins == 80
    assert workout.total_xp == 120
    assert workout.new_level == 1
    assert workout.leveled_up is False


def test_personal_record_boundary(engine, db_session, user, make_workout) -> None:
    session = make_workout(user, date(2024, 3, 1))

    first = engine.award_exercise_complete(user.id, "Bench Press", 50)
    log_lift(db_session, session, "Bench Press", 50)
    assert first.is_pr is False

    second = engine.award_exercise_complete(user.id, "Bench Press", 60)
    log_lift(db_session, session, "Bench Press", 60)
    assert second.is_pr is True
    assert second.coins_earned == 10 + 25
    assert second.xp_earned == 15 + 40

    third = engine.award_exercise_complete(user.id, "Bench Press", 55)
    assert third.is_pr is False
    assert GameProfileStore(db_session).get(user.id).personal_records == 1


def test_bodyweight_exercise_is_never_a_record(engine, db_session, user, make_workout) -> None:
    session = make_workout(user, date(2024, 3, 1))
    log_lift(db_session, session, "Push-ups", 0)

    result = engine.award_exercise_complete(user.id, "Push-ups", 0)

    assert result.is_pr is False


def test_rpe_bonus(engine, user) -> None:
    result = engine.award_exercise_complete(user.id, "Bench Press", 40, had_rpe=True)

    assert result.coins_earned == 15
    assert result.xp_earned == 20


@pytest.mark.parametrize(
    ("workout_date", "expected"),
    [(date(2024, 1, 2), 5), (date(2024, 1, 1), 4), (date(2024, 1, 5), 1)],
)
def test_streak_continuation(engine, db_session, user, workout_date, expected) -> None:
    seed_profile(
        db_session, user, last_active_date=date(2024, 1, 1), current_streak=4, longest_streak=4
    )

    result = engine.award_workout_complete(user.id, workout_date)

    profile = GameProfileStore(db_session).get(user.id)
    assert result.new_streak == expected
    assert profile.current_streak == expected
    assert profile.longest_streak == max(4, expected)
    assert profile.last_active_date == workout_date


def test_streak_milestone_fires_once(engine, db_session, user) -> None:
    # 2024-01-01 is a Monday, so no weekly bonus muddies the totals.
    seed_profile(
        db_session, user, last_active_date=date(2024, 1, 1), current_streak=2, longest_streak=2
    )

    crossing = engine.award_workout_complete(user.id, date(2024, 1, 2))
    assert crossing.new_streak == 3
    assert crossing.coins_earned == 50 + 30
    assert crossing.xp_earned == 75 + 50

    continuing = engine.award_workout_complete(user.id, date(2024, 1, 3))
    assert continuing.new_streak == 4
    assert continuing.coins_earned == 50


def test_first_workout_of_week_bonus(engine, db_session, make_user) -> None:
    newcomer = make_user()
    regular = make_user()
    seed_profile(
        db_session, regular, last_active_date=date(2024, 2, 26), current_streak=1, longest_streak=1
    )

    assert engine.award_workout_complete(newcomer.id, date(2024, 3, 1)).coins_earned == 70
    assert engine.award_workout_complete(regular.id, date(2024, 3, 1)).coins_earned == 50


def test_week_boundary_grants_weekly_bonus(engine, db_session, user) -> None:
    seed_profile(
        db_session, user, last_active_date=date(2024, 3, 3), current_streak=5, longest_streak=5
    )

    result = engine.award_workout_complete(user.id, date(2024, 3, 4))

    assert result.new_streak == 6
    assert result.coins_earned == 50 + 20


def test_streak_seven_unlocks_streak_master(engine, db_session, user) -> None:
    seed_profile(
        db_session, user, last_active_date=date(2024, 1, 6), current_streak=6, longest_streak=6,
        total_workouts=6,
    )

    result = engine.award_workout_complete(user.id, date(2024, 1, 7))

    assert result.new_streak == 7
    assert result.coins_earned == 50 + 100
    assert result.new_achievements == ["streak_master"]


def test_weekly_volume_unlocks_iron_century(engine, user) -> None:
    without_volume = engine.award_workout_complete(user.id, date(2024, 3, 1))
    assert "iron_century" not in without_volume.new_achievements

    with_volume = engine.award_workout_complete(user.id, date(2024, 3, 2), weekly_volume=12_000)
    assert with_volume.new_achievements == ["iron_century"]


def test_level_up_is_reported(engine, db_session, user) -> None:
    seed_profile(db_session, user, xp=230, coins=100)

    result = engine.award_exercise_complete(user.id, "Deadlift", 100)

    assert result.leveled_up is True
    assert result.new_level == 2
    assert GameProfileStore(db_session).get(user.id).level == 2


def test_achievement_is_granted_once(engine, db_session, user) -> None:
    seed_profile(db_session, user, coins=995, total_exercises=3)

    first = engine.award_exercise_complete(user.id, "Squat", 80)
    second = engine.award_exercise_complete(user.id, "Squat", 80)

    assert first.new_achievements == ["coin_collector"]
    assert second.new_achievements == []
    rows = db_session.scalar(
        select(func.count(UserAchievement.id)).where(
            UserAchievement.user_id == user.id,
            UserAchievement.achievement_id == "coin_collector",
        )
    )
    assert rows == 1


def test_counters_never_decrease(engine, db_session, user, make_workout) -> None:
    session = make_workout(user, date(2024, 1, 1))
    calls = [
        lambda: engine.award_exercise_complete(user.id, "Bench Press", 40),
        lambda: engine.award_workout_complete(user.id, date(2024, 1, 1)),
        lambda: engine.award_exercise_complete(user.id, "Bench Press", 45),
        lambda: engine.award_workout_complete(user.id, date(2024, 1, 2)),
        lambda: engine.award_workout_complete(user.id, date(2024, 1, 9)),
        lambda: engine.award_exercise_complete(user.id, "Bench Press", 50, had_rpe=True),
    ]
    fields = ("coins", "xp", "total_workouts", "total_exercises", "personal_records", "longest_streak")

    previous = {field: 0 for field in fields}
    for call in calls:
        call()
        log_lift(db_session, session, "Bench Press", 40)
        profile = GameProfileStore(db_session).get(user.id)
        for field in fields:
            assert getattr(profile, field) >= previous[field]
            previous[field] = getattr(profile, field)

    assert previous["total_exercises"] == 3
    assert previous["total_workouts"] == 3
    assert previous["longest_streak"] == 2


@pytest.mark.parametrize("weight", [-1, math.nan, math.inf])
def test_invalid_weight_is_rejected(engine, user, weight) -> None:
    with pytest.raises(RewardValidationError):
        engine.award_exercise_complete(user.id, "Bench Press", weight)


def test_blank_exercise_name_is_rejected(engine, user) -> None:
    with pytest.raises(RewardValidationError):
        engine.award_exercise_complete(user.id, "   ", 20)


@pytest.mark.parametrize("bad_date", ["03/01/2024", "2024-13-01", None])
def test_malformed_workout_date_is_rejected(engine, user, bad_date) -> None:
    with pytest.raises(RewardValidationError):
        engine.award_workout_complete(user.id, bad_date)


def test_negative_weekly_volume_is_rejected(engine, user) -> None:
    with pytest.raises(RewardValidationError):
        engine.award_workout_complete(user.id, date(2024, 3, 1), weekly_volume=-5)


def test_unknown_user_is_rejected(engine, db_session) -> None:
    with pytest.raises(UserNotFoundError):
        engine.award_exercise_complete(uuid.uuid4(), "Bench Press", 20)
    with pytest.raises(UserNotFoundError):
        engine.award_workout_complete(uuid.uuid4(), date(2024, 3, 1))
    assert db_session.scalar(select(func.count(GameProfile.id))) == 0


def test_transient_conflict_is_retried(engine, db_session, user, monkeypatch) -> None:
    original = engine._apply_exercise_complete
    attempts = {"count": 0}

    def flaky(*args, **kwargs):
        attempts["count"] += 1
        if attempts["count"] == 1:
            raise OperationalError("UPDATE game_profiles", {}, Exception("database is locked"))
        return original(*args, **kwargs)

    monkeypatch.setattr(engine, "_apply_exercise_complete", flaky)

    result = engine.award_exercise_complete(user.id, "Bench Press", 40)

    assert attempts["count"] == 2
    assert result.total_coins == 10
    assert GameProfileStore(db_session).get(user.id).total_exercises == 1


def test_exhausted_retries_raise_transaction_error(engine, user, monkeypatch) -> None:
    attempts = {"count": 0}

    def conflicting(*args, **kwargs):
        attempts["count"] += 1
        raise IntegrityError("INSERT INTO game_profiles", {}, Exception("duplicate key"))

    monkeypatch.setattr(engine, "_apply_workout_complete", conflicting)

    with pytest.raises(RewardTransactionError):
        engine.award_workout_complete(user.id, date(2024, 3, 1))
    assert attempts["count"] == 3


def test_non_transient_database_error_is_not_retried(engine, user, monkeypatch) -> None:
    attempts = {"count": 0}

    def broken(*args, **kwargs):
        attempts["count"] += 1
        raise SQLAlchemyError("connection reset")

    monkeypatch.setattr(engine, "_apply_exercise_complete", broken)

    with pytest.raises(DatabaseError):
        engine.award_exercise_complete(user.id, "Bench Press", 40)
    assert attempts["count"] == 1


def test_failed_achievement_insert_keeps_profile_update(engine, db_session, user, monkeypatch) -> None:
    def failing_unlock(user_id, achievement_id):
        raise SQLAlchemyError("ledger unavailable")

    monkeypatch.setattr(engine.ledger, "unlock", failing_unlock)

    result = engine.award_exercise_complete(user.id, "Bench Press", 40)

    assert result.new_achievements == []
    profile = GameProfileStore(db_session).get(user.id)
    assert profile.coins == 10
    assert profile.total_exercises == 1


@pytest.fixture()
def file_db(tmp_path):
    """A file-backed SQLite database where every transaction takes the write lock."""

    db = create_engine(
        f"sqlite:///{tmp_path / 'rewards.db'}",
        connect_args={"check_same_thread": False, "timeout": 0.05},
    )

    @event.listens_for(db, "connect")
    def _autocommit_driver(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(db, "begin")
    def _begin_immediate(connection):
        connection.exec_driver_sql("BEGIN IMMEDIATE")

    Base.metadata.create_all(bind=db)
    try:
        yield db
    finally:
        db.dispose()


def test_concurrent_awards_wait_for_the_write_lock(file_db, onboarding_answers, monkeypatch) -> None:
    SessionFactory = sessionmaker(bind=file_db, autoflush=False, expire_on_commit=False)
    with SessionFactory() as setup:
        athlete = User(**{**onboarding_answers, "email": "racer@example.com"})
        setup.add(athlete)
        setup.commit()
        user_id = athlete.id

    first_holds_lock = threading.Event()
    second_retried = threading.Event()
    retries: list[int] = []
    log_retry = reward_engine_module._log_retry

    def counting_log_retry(retry_state) -> None:
        retries.append(retry_state.attempt_number)
        second_retried.set()
        log_retry(retry_state)

    monkeypatch.setattr(reward_engine_module, "_log_retry", counting_log_retry)

    first_session, second_session = SessionFactory(), SessionFactory()
    first_engine = RewardEngine(first_session, max_attempts=5, retry_wait_seconds=0.2)
    second_engine = RewardEngine(second_session, max_attempts=5, retry_wait_seconds=0.2)
    apply_first = first_engine._apply_exercise_complete

    def apply_and_hold(*args, **kwargs):
        result = apply_first(*args, **kwargs)
        first_holds_lock.set()
        second_retried.wait(timeout=5)
        return result

    monkeypatch.setattr(first_engine, "_apply_exercise_complete", apply_and_hold)

    try:
        with ThreadPoolExecutor(max_workers=1) as pool:
            pending = pool.submit(first_engine.award_exercise_complete, user_id, "Bench Press", 40)
            assert first_holds_lock.wait(timeout=5)
            second = second_engine.award_exercise_complete(user_id, "Squat", 60)
            first = pending.result(timeout=10)
    finally:
        first_session.close()
        second_session.close()

    assert retries
    assert first.total_coins == 10
    assert first.new_achievements == ["first_blood"]
    assert second.total_coins == 2 * 10
    assert second.new_achievements == []

    with SessionFactory() as check:
        profile = check.scalars(select(GameProfile).where(GameProfile.user_id == user_id)).one()
        assert profile.coins == 2 * 10
        assert profile.total_exercises == 2
        unlocked = check.scalar(
            select(func.count(UserAchievement.id)).where(
                UserAchievement.user_id == user_id,
                UserAchievement.achievement_id == "first_blood",
            )
        )
        assert unlocked == 1
