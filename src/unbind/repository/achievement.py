# SPDX-License-Identifier: MIT

import logging
from typing import Any

from unbind import time
from unbind.configuration import ACHIEVEMENTS_KEY
from unbind.errors import StorageError
from unbind.model.achievement import Achievement, AchievementProgress, AchievementStats
from unbind.model.result import Err
from unbind.repository.key_value import KeyValueStore
from unbind.service.achievement import get_default_progress, unlock_achievements

logger = logging.getLogger(__name__)


class AchievementRepository:
    """
    Unlocked achievements and accumulated XP. Failures are logged, never
    raised; unreadable progress reads as no progress.
    """

    def __init__(self, store: KeyValueStore, clock: time.Clock = time.now_utc) -> None:
        self._store = store
        self._clock = clock

    def __convert_progress_for_deserialization(self, value: Any) -> AchievementProgress:
        progress = get_default_progress()
        if not isinstance(value, dict):
            raise TypeError(f"progress is a {type(value).__name__}, expected a mapping")
        unlocked = value.get("unlocked_achievements", [])
        if not isinstance(unlocked, list):
            raise TypeError("unlocked achievements are not a list")
        progress["unlocked_achievements"] = [str(id) for id in unlocked]
        progress["total_xp"] = int(value.get("total_xp", 0))
        progress["level"] = int(value.get("level", 1))
        return progress

    def get_progress(self) -> AchievementProgress:
        result = self._store.read(ACHIEVEMENTS_KEY)
        if isinstance(result, Err):
            logger.error(
                "error loading achievements: %s", result.reason, exc_info=result.error
            )
            return get_default_progress()
        if result.value is None:
            return get_default_progress()
        try:
            return self.__convert_progress_for_deserialization(result.value)
        except (TypeError, ValueError):
            logger.exception("error loading achievements")
            return get_default_progress()

    def save_progress(self, progress: AchievementProgress) -> None:
        try:
            self._store.write(ACHIEVEMENTS_KEY, dict(progress))
        except StorageError:
            logger.exception("error saving achievements")

    def check_and_unlock(self, stats: AchievementStats) -> list[Achievement]:
        progress, newly_unlocked = unlock_achievements(
            self.get_progress(), stats, self._clock()
        )
        if len(newly_unlocked) > 0:
            for achievement in newly_unlocked:
                logger.info(
                    "achievement unlocked: %s (+%d xp, %d total)",
                    achievement["id"],
                    achievement["xp"],
                    progress["total_xp"],
                )
            self.save_progress(progress)
        return newly_unlocked
