"""XP curve and level titles."""
from __future__ import annotations

LEVEL_COST_BASE = 100
LEVEL_COST_MULTIPLIER = 1.2

# (upper level bound, title); anything above the last bound is "Legendary".
LEVEL_TITLES: tuple[tuple[int, str], ...] = (
    (5, "Beginner Lifter"),
    (10, "Dedicated Athlete"),
    (20, "Iron Warrior"),
    (35, "Elite Performer"),
)
TOP_TITLE = "Legendary"


def xp_for_level(level: int) -> int:
    """XP needed to step up into ``level`` from the level below it.

    Level 1 is free. This is a per-step cost, not a running total.
    """
    if level <= 1:
        return 0
    return round(LEVEL_COST_BASE * level * LEVEL_COST_MULTIPLIER)


def cumulative_xp_for_level(level: int) -> int:
    """Total XP spent to reach ``level`` starting from level 1."""
    return sum(xp_for_level(step) for step in range(2, level + 1))


def level_for_xp(total_xp: int) -> int:
    """Resolve the level reached with ``total_xp`` experience points."""
    level = 1
    accumulated = 0
    while True:
        step = xp_for_level(level + 1)
        if accumulated + step > total_xp:
            return level
        accumulated += step
        level += 1


def title_for_level(level: int) -> str:
    for upper_bound, title in LEVEL_TITLES:
        if level <= upper_bound:
            return title
    return TOP_TITLE


def xp_to_next_level(level: int) -> int:
    return xp_for_level(level + 1)


def xp_in_current_level(total_xp: int, level: int) -> int:
    """XP earned since the current level was reached, never negative."""
    return max(0, total_xp - cumulative_xp_for_level(level))


__all__ = [
    "cumulative_xp_for_level",
    "level_for_xp",
    "title_for_level",
    "xp_for_level",
    "xp_in_current_level",
    "xp_to_next_level",
]
