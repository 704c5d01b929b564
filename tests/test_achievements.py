"""Tests for the achievement catalog, predicates and ledger."""
from __future__ import annotations

import uuid

import pytest
from sqlalchemy import func, select

from fitcoach.core.achievements import (
    ACHIEVEMENTS,
    exercise_achievements,
    workout_achievements,
)
from fitcoach.db.models import UserAchievement
from fitcoach.services.achievement import AchievementLedger, UnknownAchievementError


def test_catalog_contains_display_only_week_warrior() -> None:
    assert len(ACHIEVEMENTS) == 9
    assert ACHIEVEMENTS["week_warrior"].rarity == "rare"
    assert ACHIEVEMENTS["consistency_king"].coin_bonus == 200
    assert all(key == definition.key for key, definition in ACHIEVEMENTS.items())


def test_exercise_predicates() -> None:
    assert exercise_achievements(total_exercises=1, personal_records=0, coins=10, level=1) == [
        "first_blood"
    ]
    assert exercise_achievements(total_exercises=40, personal_records=5, coins=1200, level=10) == [
        "pr_machine",
        "coin_collector",
        "level_10",
    ]
    assert exercise_achievements(total_exercises=2, personal_records=4, coins=999, level=9) == []


def test_workout_predicates() -> None:
    assert workout_achievements(total_workouts=1, streak=1) == ["full_send"]
    assert workout_achievements(total_workouts=30, streak=30, weekly_volume=10_000) == [
        "streak_master",
        "consistency_king",
        "iron_century",
    ]
    assert workout_achievements(total_workouts=2, streak=6, weekly_volume=9_999.5) == []


def test_unlock_is_idempotent(db_session, user) -> None:
    ledger = AchievementLedger(db_session)

    assert ledger.unlock(user.id, "first_blood") is True
    db_session.commit()
    assert ledger.unlock(user.id, "first_blood") is False
    db_session.commit()

    rows = db_session.scalar(
        select(func.count(UserAchievement.id)).where(UserAchievement.user_id == user.id)
    )
    assert rows == 1
    assert ledger.is_unlocked(user.id, "first_blood")


def test_lost_unlock_race_keeps_transaction_usable(db_session, user, monkeypatch) -> None:
    ledger = AchievementLedger(db_session)
    ledger.unlock(user.id, "full_send")
    db_session.commit()

    # Pretend another request inserted the row between the check and the insert.
    monkeypatch.setattr(ledger, "is_unlocked", lambda user_id, achievement_id: False)

    assert ledger.unlock(user.id, "full_send") is False
    assert ledger.unlock(user.id, "first_blood") is True
    db_session.commit()

    assert sorted(item.key for item in ledger.list_unlocked(user.id)) == ["first_blood", "full_send"]


def test_unknown_achievement_is_rejected(db_session, user) -> None:
    with pytest.raises(UnknownAchievementError):
        AchievementLedger(db_session).unlock(user.id, "made_up")


def test_list_unlocked_is_per_user(db_session, make_user) -> None:
    first, second = make_user(), make_user()
    ledger = AchievementLedger(db_session)
    ledger.unlock(first.id, "first_blood")
    db_session.commit()

    assert [item.key for item in ledger.list_unlocked(first.id)] == ["first_blood"]
    assert ledger.list_unlocked(second.id) == []
    assert ledger.list_unlocked(uuid.uuid4()) == []
