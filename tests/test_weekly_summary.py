"""Tests for weekly summaries and their history."""

import pendulum

from conftest import NOW, FrozenClock, make_entry, make_task
from unbind.repository.key_value import KeyValueStore
from unbind.repository.weekly_summary import MAX_STORED_SUMMARIES, WeeklySummaryRepository
from unbind.service.weekly_summary import (
    calculate_weekly_summary,
    get_top_blocker,
    should_show_weekly_summary,
)

# NOW is a Friday
SUNDAY = pendulum.datetime(2026, 10, 18, 9, 0, tz="UTC")
MONDAY = pendulum.datetime(2026, 10, 19, 9, 0, tz="UTC")


class TestTopBlocker:
    def test_most_frequent_long_word(self):
        """Words shorter than five letters are ignored."""
        entries = [
            make_entry("a", NOW, blocker="Too many meetings today"),
            make_entry("b", NOW, blocker="meetings and email"),
            make_entry("c", NOW, blocker=None),
        ]
        assert get_top_blocker(entries) == "meetings"

    def test_no_blockers(self):
        assert get_top_blocker([make_entry("a", NOW)]) is None


class TestCalculateWeeklySummary:
    """Summaries over the last seven days."""

    def test_summary_counts(self):
        """Sessions, tasks and time saved cover the last seven days only."""
        entries = [
            make_entry(
                "a",
                NOW.subtract(days=1),
                tasks=[make_task("1", completed_at=NOW), make_task("2")],
                blocker="procrastination",
            ),
            make_entry("b", NOW.subtract(days=2), tasks=[make_task("1", completed_at=NOW)]),
            make_entry("c", NOW.subtract(days=10), tasks=[make_task("1", completed_at=NOW)]),
        ]

        summary = calculate_weekly_summary(entries, 2, NOW)

        assert summary["week_start"] == NOW.subtract(days=7)
        assert summary["week_end"] == NOW
        assert summary["sessions"] == 2
        assert summary["previous_week_sessions"] == 1
        assert summary["improvement"] == 100
        assert summary["total_tasks"] == 3
        assert summary["tasks_completed"] == 2
        assert summary["minutes_saved"] == 50
        assert summary["top_blocker"] == "procrastination"
        assert "100% more sessions than last week!" in summary["insights"]

    def test_first_week_counts_as_full_improvement(self):
        """With no sessions the week before, any session is a 100% improvement."""
        summary = calculate_weekly_summary([make_entry("a", NOW)], 1, NOW)
        assert summary["improvement"] == 100

    def test_fewer_sessions_than_last_week(self):
        """A drop is reported as a negative percentage."""
        entries = [make_entry("a", NOW)] + [
            make_entry(str(i), NOW.subtract(days=8, hours=i)) for i in range(4)
        ]
        summary = calculate_weekly_summary(entries, 1, NOW)

        assert summary["sessions"] == 1
        assert summary["previous_week_sessions"] == 4
        assert summary["improvement"] == -75

    def test_empty_week_gets_default_insight(self):
        """Without activity there is a single encouraging insight."""
        summary = calculate_weekly_summary([], 0, NOW)

        assert summary["sessions"] == 0
        assert summary["improvement"] == 0
        assert summary["insights"] == ["Keep journaling to see more personalized insights!"]


class TestShouldShowWeeklySummary:
    """Summaries are offered at the start of the week, once."""

    def test_not_on_a_friday(self):
        assert should_show_weekly_summary(None, NOW, "UTC") is False

    def test_sunday_and_monday_when_never_shown(self):
        assert should_show_weekly_summary(None, SUNDAY, "UTC") is True
        assert should_show_weekly_summary(None, MONDAY, "UTC") is True

    def test_not_again_on_monday_after_sunday(self):
        """A summary shown on Sunday is not shown again on Monday."""
        assert should_show_weekly_summary(SUNDAY, MONDAY, "UTC") is False

    def test_again_the_following_week(self):
        """Six or more days later the next summary is due."""
        assert should_show_weekly_summary(SUNDAY, SUNDAY.add(days=7), "UTC") is True
        assert should_show_weekly_summary(MONDAY, SUNDAY.add(days=7), "UTC") is True


class TestWeeklySummaryRepository:
    """Last shown instant and the bounded history."""

    def test_mark_shown(self, store: KeyValueStore, clock: FrozenClock):
        repository = WeeklySummaryRepository(store, clock)
        assert repository.get_last_shown() is None

        repository.mark_shown()

        assert repository.get_last_shown() == NOW

    def test_history_keeps_latest_summaries(self, store: KeyValueStore, clock: FrozenClock):
        """Only the most recent summaries are kept."""
        repository = WeeklySummaryRepository(store, clock)
        for week in range(MAX_STORED_SUMMARIES + 3):
            summary = calculate_weekly_summary([], week, NOW.add(weeks=week))
            repository.save_summary(summary)

        summaries = repository.get_summaries()

        assert len(summaries) == MAX_STORED_SUMMARIES
        assert summaries[0]["streak"] == 3
        assert summaries[-1]["streak"] == MAX_STORED_SUMMARIES + 2
        assert summaries[-1]["week_end"] == NOW.add(weeks=MAX_STORED_SUMMARIES + 2)

    def test_corrupt_history_reads_as_empty(self, store: KeyValueStore, clock: FrozenClock):
        store.data_path.mkdir(parents=True, exist_ok=True)
        (store.data_path / "weekly_summaries.yaml").write_text("[unclosed")

        assert WeeklySummaryRepository(store, clock).get_summaries() == []
