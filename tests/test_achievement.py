"""Tests for levels, achievements and the lifetime session totals."""

import pytest

from conftest import NOW, FrozenClock
from unbind.configuration import ACHIEVEMENTS_KEY, USER_STATS_KEY
from unbind.model.achievement import AchievementStats
from unbind.repository.achievement import AchievementRepository
from unbind.repository.key_value import KeyValueStore
from unbind.repository.user_stats import UserStatsRepository
from unbind.service.achievement import (
    ACHIEVEMENTS,
    calculate_level,
    compare_value,
    get_achievement,
    get_default_progress,
    get_locked_achievements,
    get_unlocked_achievements,
    unlock_achievements,
)


def stats(
    sessions: int = 0,
    tasks_completed: int = 0,
    streak: int = 0,
    session_hour: int | None = None,
) -> AchievementStats:
    return {
        "sessions": sessions,
        "tasks_completed": tasks_completed,
        "streak": streak,
        "session_hour": session_hour,
    }


class TestLevels:
    @pytest.mark.parametrize(
        "xp, level, name",
        [
            (0, 1, "Beginner"),
            (499, 1, "Beginner"),
            (500, 2, "Explorer"),
            (1500, 3, "Achiever"),
            (3500, 4, "Master"),
            (7000, 5, "Legend"),
            (20000, 5, "Legend"),
        ],
    )
    def test_level_thresholds(self, xp: int, level: int, name: str):
        info = calculate_level(xp)
        assert info["level"] == level
        assert info["name"] == name

    def test_progress_towards_next_level(self):
        """Progress is the fraction of the gap between two levels."""
        assert calculate_level(1000)["progress"] == pytest.approx(0.5)

    def test_top_level_is_complete(self):
        assert calculate_level(9000)["progress"] == 1.0


class TestUnlocking:
    def test_compare_value(self):
        assert compare_value(3, 3, "gte")
        assert compare_value(6, 7, "lte")
        assert compare_value(2, 2, "eq")
        assert not compare_value(8, 7, "lte")

    def test_nothing_unlocks_without_activity(self):
        progress, unlocked = unlock_achievements(get_default_progress(), stats(), NOW)

        assert unlocked == []
        assert progress == get_default_progress()

    def test_thresholds_unlock_together(self):
        """Every satisfied achievement unlocks at once and its XP is added up."""
        progress, unlocked = unlock_achievements(
            get_default_progress(), stats(sessions=5, tasks_completed=10, streak=7), NOW
        )

        assert [a["id"] for a in unlocked] == [
            "first_session",
            "streak_3",
            "streak_7",
            "tasks_10",
            "sessions_5",
        ]
        assert all(a["unlocked_at"] == NOW for a in unlocked)
        assert progress["total_xp"] == 200 + 150 + 500 + 300 + 250
        assert progress["level"] == 2

    def test_unlocked_achievements_are_not_repeated(self):
        """An unlocked achievement stays unlocked and earns XP once."""
        progress, _ = unlock_achievements(get_default_progress(), stats(streak=3, sessions=1), NOW)

        again, unlocked = unlock_achievements(progress, stats(streak=0, sessions=2), NOW)

        assert unlocked == []
        assert again == progress
        assert "streak_3" in again["unlocked_achievements"]

    @pytest.mark.parametrize(
        "hour, expected",
        [(6, ["early_bird"]), (7, ["early_bird"]), (8, []), (22, ["night_owl"]), (None, [])],
    )
    def test_session_hour(self, hour: int | None, expected: list[str]):
        """Time achievements need the hour of a session."""
        _, unlocked = unlock_achievements(
            {"unlocked_achievements": ["first_session"], "total_xp": 200, "level": 1},
            stats(sessions=1, session_hour=hour),
            NOW,
        )

        assert [a["id"] for a in unlocked] == expected

    def test_catalog_queries(self):
        unlocked_ids = ["first_session", "night_owl"]

        assert get_achievement("tasks_100")["name"] == "Century Club"
        assert get_achievement("unknown") is None
        assert [a["id"] for a in get_unlocked_achievements(unlocked_ids)] == unlocked_ids
        assert len(get_locked_achievements(unlocked_ids)) == len(ACHIEVEMENTS) - 2

    def test_catalog_is_not_modified(self):
        """Unlocking stamps copies, not the catalog."""
        unlock_achievements(get_default_progress(), stats(sessions=1), NOW)

        assert all("unlocked_at" not in a for a in ACHIEVEMENTS)


class TestAchievementRepository:
    def test_progress_defaults_when_nothing_stored(self, achievements: AchievementRepository):
        assert achievements.get_progress() == get_default_progress()

    def test_unlocks_are_persisted(
        self, store: KeyValueStore, achievements: AchievementRepository, clock: FrozenClock
    ):
        achievements.check_and_unlock(stats(sessions=1))

        restored = AchievementRepository(store, clock).get_progress()
        assert restored["unlocked_achievements"] == ["first_session"]
        assert restored["total_xp"] == 200

    def test_no_write_without_new_unlocks(
        self, store: KeyValueStore, achievements: AchievementRepository
    ):
        assert achievements.check_and_unlock(stats()) == []
        assert not (store.data_path / f"{ACHIEVEMENTS_KEY}.yaml").exists()

    def test_malformed_progress_reads_as_default(
        self, store: KeyValueStore, achievements: AchievementRepository
    ):
        store.write(ACHIEVEMENTS_KEY, ["not", "progress"])

        assert achievements.get_progress() == get_default_progress()


class TestUserStatsRepository:
    def test_defaults(self, user_stats: UserStatsRepository):
        assert user_stats.get_stats() == {"session_count": 0, "first_session_date": None}
        assert user_stats.is_first_session()

    def test_increment_stamps_first_session_once(
        self, user_stats: UserStatsRepository, clock: FrozenClock
    ):
        assert user_stats.increment_session_count() == 1
        clock.advance(days=1)
        assert user_stats.increment_session_count() == 2

        assert user_stats.get_stats() == {"session_count": 2, "first_session_date": NOW}
        assert not user_stats.is_first_session()

    def test_malformed_stats_read_as_default(
        self, store: KeyValueStore, user_stats: UserStatsRepository
    ):
        store.write(USER_STATS_KEY, {"session_count": "many"})

        assert user_stats.get_session_count() == 0
