"""
Shared fixtures for the unbind tests.

Everything runs against a temporary data directory and a frozen clock;
no test touches the user's real config or the network.
"""

from pathlib import Path
from typing import Any, Optional

import pendulum
import pytest

from unbind.configuration import Configuration, get_default_configuration
from unbind.model.entry import JournalEntry
from unbind.model.task import MicroTask
from unbind.repository.achievement import AchievementRepository
from unbind.repository.entry import EntryRepository
from unbind.repository.key_value import KeyValueStore
from unbind.repository.profile import LocalProfileRepository
from unbind.repository.user_stats import UserStatsRepository
from unbind.service.access import AccessGate

NOW = pendulum.datetime(2026, 10, 16, 12, 0, 0, tz="UTC")


class FrozenClock:
    """A clock that only moves when a test moves it."""

    def __init__(self, now: pendulum.DateTime = NOW) -> None:
        self.now = now

    def __call__(self) -> pendulum.DateTime:
        return self.now

    def advance(self, **kwargs: Any) -> None:
        self.now = self.now.add(**kwargs)


def make_task(
    id: str,
    title: str = "task",
    duration: int = 5,
    completed_at: Optional[pendulum.DateTime] = None,
) -> MicroTask:
    return {
        "id": id,
        "title": title,
        "duration": duration,
        "completed": completed_at is not None,
        "completed_at": completed_at,
    }


def make_entry(
    id: str,
    date: pendulum.DateTime,
    tasks: Optional[list[MicroTask]] = None,
    blocker: Optional[str] = None,
    is_favorite: bool = False,
) -> JournalEntry:
    entry: JournalEntry = {
        "id": id,
        "date": date,
        "audio_uri": None,
        "transcript": None,
        "summary": None,
        "blocker": blocker,
        "mood": None,
        "is_favorite": is_favorite,
    }
    if tasks is not None:
        entry["tasks"] = tasks
    return entry


@pytest.fixture
def clock() -> FrozenClock:
    return FrozenClock()


@pytest.fixture
def store(tmp_path: Path) -> KeyValueStore:
    return KeyValueStore(tmp_path / "data")


@pytest.fixture
def entries(store: KeyValueStore, clock: FrozenClock) -> EntryRepository:
    return EntryRepository(store, clock, "UTC")


@pytest.fixture
def profiles(store: KeyValueStore, clock: FrozenClock) -> LocalProfileRepository:
    return LocalProfileRepository(store, clock)


@pytest.fixture
def access_gate(profiles: LocalProfileRepository, clock: FrozenClock) -> AccessGate:
    return AccessGate(profiles, clock, "UTC")


@pytest.fixture
def user_stats(store: KeyValueStore, clock: FrozenClock) -> UserStatsRepository:
    return UserStatsRepository(store, clock)


@pytest.fixture
def achievements(store: KeyValueStore, clock: FrozenClock) -> AchievementRepository:
    return AchievementRepository(store, clock)


@pytest.fixture
def config() -> Configuration:
    config = get_default_configuration()
    config["timezone"] = "UTC"
    return config
