"""Tests for streak and task statistics over in-memory entries."""

import pendulum

from conftest import NOW, make_entry, make_task
from unbind.service.entry import (
    compute_streak,
    compute_task_stats,
    filter_favorites,
    get_tasks,
    iter_pending_tasks,
)


class TestStreak:
    """Consecutive journaling days, walking back from today."""

    def test_no_entries(self):
        """No entries means no streak."""
        assert compute_streak([], NOW, "UTC") == 0

    def test_today_only(self):
        """A single entry today is a one day streak."""
        assert compute_streak([make_entry("a", NOW)], NOW, "UTC") == 1

    def test_three_consecutive_days(self):
        """Today, yesterday and the day before make three."""
        entries = [
            make_entry("a", NOW),
            make_entry("b", NOW.subtract(days=1)),
            make_entry("c", NOW.subtract(days=2)),
        ]
        assert compute_streak(entries, NOW, "UTC") == 3

    def test_gap_ends_streak(self):
        """A missing day before today ends the streak."""
        entries = [make_entry("a", NOW), make_entry("b", NOW.subtract(days=3))]
        assert compute_streak(entries, NOW, "UTC") == 1

    def test_run_ending_yesterday_still_counts(self):
        """Not having journaled yet today does not break the streak."""
        entries = [
            make_entry("b", NOW.subtract(days=1)),
            make_entry("c", NOW.subtract(days=2)),
        ]
        assert compute_streak(entries, NOW, "UTC") == 2

    def test_run_ending_two_days_ago(self):
        """Missing both today and yesterday means no streak."""
        entries = [make_entry("c", NOW.subtract(days=2))]
        assert compute_streak(entries, NOW, "UTC") == 0

    def test_several_entries_on_one_day_count_once(self):
        """Days are counted, not entries."""
        entries = [
            make_entry("a", NOW),
            make_entry("b", NOW.subtract(hours=3)),
            make_entry("c", NOW.subtract(days=1)),
        ]
        assert compute_streak(entries, NOW, "UTC") == 2

    def test_days_follow_the_given_timezone(self):
        """Calendar days are taken in the configured timezone."""
        # 23:30 in New York on the 15th is already the 16th in UTC
        late_evening = pendulum.datetime(2026, 10, 16, 3, 30, tz="UTC")
        entries = [make_entry("a", late_evening), make_entry("b", late_evening.subtract(hours=1))]
        now = pendulum.datetime(2026, 10, 16, 14, 0, tz="UTC")

        assert compute_streak(entries, now, "UTC") == 1
        assert compute_streak(entries, now, "America/New_York") == 1
        assert (
            compute_streak([make_entry("a", late_evening)], now.add(days=1), "America/New_York")
            == 0
        )

    def test_streak_is_capped_at_a_year(self):
        """The walk stops after 365 days."""
        entries = [make_entry(str(i), NOW.subtract(days=i)) for i in range(400)]
        assert compute_streak(entries, NOW, "UTC") == 365


class TestTaskHelpers:
    """Task statistics and pending task listing."""

    def test_get_tasks_of_legacy_entry(self):
        """An entry without tasks has an empty task list."""
        assert get_tasks(make_entry("a", NOW)) == []

    def test_task_stats(self):
        """Totals add up across entries."""
        entries = [
            make_entry(
                "a",
                NOW,
                tasks=[
                    make_task("1", completed_at=NOW.subtract(hours=1)),
                    make_task("2"),
                ],
            ),
            make_entry(
                "b",
                NOW.subtract(days=2),
                tasks=[make_task("1", completed_at=NOW.subtract(days=2))],
            ),
            make_entry("c", NOW.subtract(days=3)),
        ]

        stats = compute_task_stats(entries, NOW, "UTC")

        assert stats == {
            "total_tasks": 3,
            "completed_tasks": 2,
            "pending_tasks": 1,
            "completed_today": 1,
        }
        assert stats["completed_tasks"] + stats["pending_tasks"] == stats["total_tasks"]

    def test_pending_tasks_order(self):
        """Pending tasks are listed by entry, then task order."""
        entries = [
            make_entry("new", NOW, tasks=[make_task("1", "x"), make_task("2", "y")]),
            make_entry(
                "old",
                NOW.subtract(days=1),
                tasks=[make_task("1", "z"), make_task("2", "done", completed_at=NOW)],
            ),
        ]

        pending = list(iter_pending_tasks(entries))

        assert [(item["entry_id"], item["task"]["title"]) for item in pending] == [
            ("new", "x"),
            ("new", "y"),
            ("old", "z"),
        ]

    def test_filter_favorites(self):
        """Only entries flagged as favorite are kept."""
        entries = [
            make_entry("a", NOW, is_favorite=True),
            make_entry("b", NOW),
        ]
        assert [entry["id"] for entry in filter_favorites(entries)] == ["a"]
