"""Calendar streak rules for workout completion."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta

from fitcoach.core.rewards import RewardEvent

# Streak length -> bonus granted on the day the streak first reaches it.
STREAK_MILESTONES: tuple[tuple[int, RewardEvent], ...] = (
    (3, RewardEvent.STREAK_3),
    (7, RewardEvent.STREAK_7),
)


@dataclass(frozen=True)
class StreakUpdate:
    previous: int
    current: int
    longest: int


def next_streak(last_active: date | None, activity_date: date, current_streak: int) -> int:
    """Return the streak after a workout completed on ``activity_date``.

    Only the distance to ``last_active`` matters: the next day extends, the
    same day keeps, anything else (a gap, or a date earlier than
    ``last_active``) starts over at 1.
    """
    if last_active is None:
        return 1
    diff_days = (activity_date - last_active).days
    if diff_days == 1:
        return current_streak + 1
    if diff_days == 0:
        return current_streak
    return 1


def advance_streak(
    last_active: date | None,
    activity_date: date,
    current_streak: int,
    longest_streak: int,
) -> StreakUpdate:
    new_streak = next_streak(last_active, activity_date, current_streak)
    return StreakUpdate(
        previous=current_streak,
        current=new_streak,
        longest=max(longest_streak, new_streak),
    )


def milestone_events(update: StreakUpdate) -> list[RewardEvent]:
    """Bonuses for milestones crossed by this update.

    The guard on the previous value relies on a streak moving by at most one
    per workout.
    """
    return [
        event
        for threshold, event in STREAK_MILESTONES
        if update.current == threshold and update.previous < threshold
    ]


def week_start(day: date) -> date:
    """Monday of the ISO week containing ``day``."""
    return day - timedelta(days=day.weekday())


def week_bounds(day: date) -> tuple[date, date]:
    start = week_start(day)
    return start, start + timedelta(days=6)


def is_first_workout_of_week(last_active: date | None, activity_date: date) -> bool:
    return last_active is None or last_active < week_start(activity_date)


__all__ = [
    "STREAK_MILESTONES",
    "StreakUpdate",
    "advance_streak",
    "is_first_workout_of_week",
    "milestone_events",
    "next_streak",
    "week_bounds",
    "week_start",
]
