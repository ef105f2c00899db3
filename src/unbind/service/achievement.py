# SPDX-License-Identifier: MIT

from copy import deepcopy
from typing import Optional

import pendulum

from unbind.model.achievement import (
    Achievement,
    AchievementProgress,
    AchievementStats,
    Comparison,
    Level,
    LevelInfo,
)

LEVELS: list[Level] = [
    {"level": 1, "name": "Beginner", "xp_required": 0},
    {"level": 2, "name": "Explorer", "xp_required": 500},
    {"level": 3, "name": "Achiever", "xp_required": 1500},
    {"level": 4, "name": "Master", "xp_required": 3500},
    {"level": 5, "name": "Legend", "xp_required": 7000},
]

ACHIEVEMENTS: list[Achievement] = [
    {
        "id": "first_session",
        "name": "First Flame",
        "description": "Complete your first session",
        "xp": 200,
        "condition": {"type": "first", "value": 1},
    },
    {
        "id": "streak_3",
        "name": "Getting Started",
        "description": "3-day streak",
        "xp": 150,
        "condition": {"type": "streak", "value": 3, "comparison": "gte"},
    },
    {
        "id": "streak_7",
        "name": "Week Warrior",
        "description": "7-day streak",
        "xp": 500,
        "condition": {"type": "streak", "value": 7, "comparison": "gte"},
    },
    {
        "id": "streak_30",
        "name": "Monthly Master",
        "description": "30-day streak",
        "xp": 2000,
        "condition": {"type": "streak", "value": 30, "comparison": "gte"},
    },
    {
        "id": "tasks_10",
        "name": "Task Tackler",
        "description": "Complete 10 tasks",
        "xp": 300,
        "condition": {"type": "tasks", "value": 10, "comparison": "gte"},
    },
    {
        "id": "tasks_50",
        "name": "Productivity Pro",
        "description": "Complete 50 tasks",
        "xp": 800,
        "condition": {"type": "tasks", "value": 50, "comparison": "gte"},
    },
    {
        "id": "tasks_100",
        "name": "Century Club",
        "description": "Complete 100 tasks",
        "xp": 1500,
        "condition": {"type": "tasks", "value": 100, "comparison": "gte"},
    },
    {
        "id": "sessions_5",
        "name": "Regular",
        "description": "Complete 5 sessions",
        "xp": 250,
        "condition": {"type": "sessions", "value": 5, "comparison": "gte"},
    },
    {
        "id": "sessions_20",
        "name": "Committed",
        "description": "Complete 20 sessions",
        "xp": 600,
        "condition": {"type": "sessions", "value": 20, "comparison": "gte"},
    },
    {
        "id": "sessions_50",
        "name": "Devoted",
        "description": "Complete 50 sessions",
        "xp": 1200,
        "condition": {"type": "sessions", "value": 50, "comparison": "gte"},
    },
    {
        "id": "early_bird",
        "name": "Early Bird",
        "description": "Session before 7am",
        "xp": 100,
        "condition": {"type": "time", "value": 7, "comparison": "lte"},
    },
    {
        "id": "night_owl",
        "name": "Night Owl",
        "description": "Session after 10pm",
        "xp": 100,
        "condition": {"type": "time", "value": 22, "comparison": "gte"},
    },
]


def get_default_progress() -> AchievementProgress:
    return {"unlocked_achievements": [], "total_xp": 0, "level": 1}


def calculate_level(xp: int) -> LevelInfo:
    """The level reached with xp, and the fraction of the way to the next one."""
    current = LEVELS[0]
    following = LEVELS[1]
    for index in range(len(LEVELS) - 1, -1, -1):
        if xp >= LEVELS[index]["xp_required"]:
            current = LEVELS[index]
            following = LEVELS[index + 1] if index + 1 < len(LEVELS) else LEVELS[index]
            break

    span = following["xp_required"] - current["xp_required"]
    progress = (xp - current["xp_required"]) / span if span > 0 else 1.0

    return {"level": current["level"], "name": current["name"], "progress": progress}


def compare_value(actual: int, target: int, comparison: Comparison) -> bool:
    match comparison:
        case "gte":
            return actual >= target
        case "lte":
            return actual <= target
        case "eq":
            return actual == target
    return False


def is_achieved(achievement: Achievement, stats: AchievementStats) -> bool:
    condition = achievement["condition"]
    comparison = condition.get("comparison", "gte")
    match condition["type"]:
        case "first":
            return stats["sessions"] >= 1
        case "sessions":
            return compare_value(stats["sessions"], condition["value"], comparison)
        case "tasks":
            return compare_value(stats["tasks_completed"], condition["value"], comparison)
        case "streak":
            return compare_value(stats["streak"], condition["value"], comparison)
        case "time":
            if stats["session_hour"] is None:
                return False
            return compare_value(stats["session_hour"], condition["value"], comparison)
    return False


def unlock_achievements(
    progress: AchievementProgress,
    stats: AchievementStats,
    now: pendulum.DateTime,
) -> tuple[AchievementProgress, list[Achievement]]:
    """
    Unlock every achievement the stats satisfy that is not unlocked yet.

    Returns the updated progress and the newly unlocked achievements, stamped
    with now. Unlocked achievements are never re-checked, so an achievement
    stays unlocked after its stat drops (a broken streak, say).
    """
    updated = deepcopy(progress)
    newly_unlocked: list[Achievement] = []

    for achievement in ACHIEVEMENTS:
        if achievement["id"] in updated["unlocked_achievements"]:
            continue
        if not is_achieved(achievement, stats):
            continue

        updated["unlocked_achievements"].append(achievement["id"])
        updated["total_xp"] += achievement["xp"]
        unlocked = deepcopy(achievement)
        unlocked["unlocked_at"] = now
        newly_unlocked.append(unlocked)

    if len(newly_unlocked) > 0:
        updated["level"] = calculate_level(updated["total_xp"])["level"]
    return updated, newly_unlocked


def get_achievement(id: str) -> Optional[Achievement]:
    for achievement in ACHIEVEMENTS:
        if achievement["id"] == id:
            return deepcopy(achievement)
    return None


def get_unlocked_achievements(unlocked_ids: list[str]) -> list[Achievement]:
    return [deepcopy(a) for a in ACHIEVEMENTS if a["id"] in unlocked_ids]


def get_locked_achievements(unlocked_ids: list[str]) -> list[Achievement]:
    return [deepcopy(a) for a in ACHIEVEMENTS if a["id"] not in unlocked_ids]
