# SPDX-License-Identifier: MIT

from typing import Iterator

import pendulum

from unbind.model.entry import JournalEntry
from unbind.model.task import MicroTask, PendingTask, TaskStats
from unbind.time import datetime_to_date

MAX_STREAK_LOOKBACK_DAYS = 365


def get_tasks(entry: JournalEntry) -> list[MicroTask]:
    """Tasks of an entry, treating legacy entries without a task list as empty."""
    return entry.get("tasks") or []


def iter_pending_tasks(entries: list[JournalEntry]) -> Iterator[PendingTask]:
    """
    Yield every incomplete task across entries.

    Order follows the entries (newest first), then task order within each entry.
    """
    for entry in entries:
        for task in get_tasks(entry):
            if not task["completed"]:
                yield {
                    "task": task,
                    "entry_id": entry["id"],
                    "entry_date": entry["date"],
                }


def compute_task_stats(
    entries: list[JournalEntry],
    now: pendulum.DateTime,
    tz: str = "local",
) -> TaskStats:
    today = datetime_to_date(now, tz)

    total_tasks = 0
    completed_tasks = 0
    completed_today = 0

    for entry in entries:
        for task in get_tasks(entry):
            total_tasks += 1
            if task["completed"]:
                completed_tasks += 1
                completed_at = task.get("completed_at")
                if completed_at is not None and datetime_to_date(completed_at, tz) == today:
                    completed_today += 1

    return {
        "total_tasks": total_tasks,
        "completed_tasks": completed_tasks,
        "pending_tasks": total_tasks - completed_tasks,
        "completed_today": completed_today,
    }


def compute_streak(
    entries: list[JournalEntry],
    now: pendulum.DateTime,
    tz: str = "local",
) -> int:
    """
    Count consecutive calendar days with at least one entry, walking back from today.

    A missing entry today does not end the walk, it only goes uncounted, so a run
    ending yesterday still reports its full length. Any other gap ends the streak.
    Looks back at most MAX_STREAK_LOOKBACK_DAYS days.
    """
    if len(entries) == 0:
        return 0

    entry_days = {datetime_to_date(entry["date"], tz) for entry in entries}
    today = datetime_to_date(now, tz)

    streak = 0
    for i in range(MAX_STREAK_LOOKBACK_DAYS):
        check_day = today.subtract(days=i)
        if check_day in entry_days:
            streak += 1
        elif i > 0:
            break

    return streak


def filter_favorites(entries: list[JournalEntry]) -> list[JournalEntry]:
    return [entry for entry in entries if entry.get("is_favorite", False) is True]
