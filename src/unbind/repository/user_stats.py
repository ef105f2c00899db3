# SPDX-License-Identifier: MIT

import logging
from typing import Any

from unbind import time
from unbind.configuration import USER_STATS_KEY
from unbind.model.result import Err
from unbind.model.user_stats import UserStats
from unbind.repository.key_value import KeyValueStore

logger = logging.getLogger(__name__)


def get_default_user_stats() -> UserStats:
    return {"session_count": 0, "first_session_date": None}


class UserStatsRepository:
    """
    Lifetime session bookkeeping for this device, separate from the daily
    counter the access gate keeps on the profile.
    """

    def __init__(self, store: KeyValueStore, clock: time.Clock = time.now_utc) -> None:
        self._store = store
        self._clock = clock

    def __convert_stats_for_deserialization(self, value: Any) -> UserStats:
        if not isinstance(value, dict):
            raise TypeError(f"user stats are a {type(value).__name__}, expected a mapping")
        stats = get_default_user_stats()
        stats["session_count"] = int(value.get("session_count", 0))
        stats["first_session_date"] = time.datetime_from_value_optional(
            value.get("first_session_date")
        )
        return stats

    def get_stats(self) -> UserStats:
        result = self._store.read(USER_STATS_KEY)
        if isinstance(result, Err):
            logger.error(
                "error reading user stats: %s", result.reason, exc_info=result.error
            )
            return get_default_user_stats()
        if result.value is None:
            return get_default_user_stats()
        try:
            return self.__convert_stats_for_deserialization(result.value)
        except (TypeError, ValueError):
            logger.exception("error reading user stats")
            return get_default_user_stats()

    def get_session_count(self) -> int:
        return self.get_stats()["session_count"]

    def is_first_session(self) -> bool:
        return self.get_session_count() == 0

    def increment_session_count(self) -> int:
        """Count one more session; the first one also stamps first_session_date."""
        stats = self.get_stats()
        stats["session_count"] += 1
        if stats["first_session_date"] is None:
            stats["first_session_date"] = self._clock()

        self._store.write(
            USER_STATS_KEY,
            {
                "session_count": stats["session_count"],
                "first_session_date": time.datetime_to_iso_str_optional(
                    stats["first_session_date"]
                ),
            },
        )
        return stats["session_count"]
