# SPDX-License-Identifier: MIT

from typing import Optional

import pendulum

from unbind.model.entry import JournalEntry
from unbind.model.weekly_summary import WeeklySummary
from unbind.service.entry import get_tasks
from unbind.time import whole_days_since

# Compared with planning a day by hand
MINUTES_SAVED_PER_TASK = 25
BLOCKER_KEYWORD_MIN_LENGTH = 5
DAYS_BETWEEN_SUMMARIES = 6


def get_top_blocker(entries: list[JournalEntry]) -> Optional[str]:
    """Most frequent long word across the entries' blockers, first seen wins ties."""
    blocker_counts: dict[str, int] = {}
    for entry in entries:
        blocker = entry.get("blocker")
        if not blocker:
            continue
        for word in blocker.lower().split(" "):
            if len(word) >= BLOCKER_KEYWORD_MIN_LENGTH:
                blocker_counts[word] = blocker_counts.get(word, 0) + 1

    top_blocker: Optional[str] = None
    max_count = 0
    for word, count in blocker_counts.items():
        if count > max_count:
            max_count = count
            top_blocker = word
    return top_blocker


def calculate_weekly_summary(
    entries: list[JournalEntry],
    streak: int,
    now: pendulum.DateTime,
) -> WeeklySummary:
    week_start = now.subtract(days=7)
    previous_week_start = week_start.subtract(days=7)

    week_entries = [entry for entry in entries if week_start <= entry["date"] <= now]
    previous_week_sessions = len(
        [
            entry
            for entry in entries
            if previous_week_start <= entry["date"] < week_start
        ]
    )

    sessions = len(week_entries)
    total_tasks = 0
    tasks_completed = 0
    for entry in week_entries:
        tasks = get_tasks(entry)
        total_tasks += len(tasks)
        tasks_completed += len([task for task in tasks if task["completed"]])

    top_blocker = get_top_blocker(week_entries)

    improvement = 0
    if previous_week_sessions > 0:
        improvement = round(
            (sessions - previous_week_sessions) / previous_week_sessions * 100
        )
    elif sessions > 0:
        improvement = 100

    insights: list[str] = []
    if sessions >= 5:
        insights.append("You're building a strong consistency habit!")
    if tasks_completed > total_tasks * 0.7:
        insights.append("Great job completing most of your tasks!")
    if streak >= 3:
        insights.append(f"You're on a {streak}-day streak. Keep it up!")
    if improvement > 0:
        insights.append(f"{improvement}% more sessions than last week!")
    if top_blocker is not None:
        insights.append(f'"{top_blocker}" came up often. Consider addressing it.')
    if len(insights) == 0:
        insights.append("Keep journaling to see more personalized insights!")

    return {
        "week_start": week_start,
        "week_end": now,
        "sessions": sessions,
        "tasks_completed": tasks_completed,
        "total_tasks": total_tasks,
        "minutes_saved": tasks_completed * MINUTES_SAVED_PER_TASK,
        "streak": streak,
        "previous_week_sessions": previous_week_sessions,
        "improvement": improvement,
        "top_blocker": top_blocker,
        "insights": insights,
    }


def should_show_weekly_summary(
    last_shown: Optional[pendulum.DateTime],
    now: pendulum.DateTime,
    tz: str = "local",
) -> bool:
    """Summaries appear on Sunday or Monday, at most once every DAYS_BETWEEN_SUMMARIES days."""
    is_start_of_week = now.in_tz(tz).day_of_week in [pendulum.SUNDAY, pendulum.MONDAY]

    if last_shown is None:
        return is_start_of_week

    if whole_days_since(last_shown, now) >= DAYS_BETWEEN_SUMMARIES:
        return is_start_of_week

    return False
