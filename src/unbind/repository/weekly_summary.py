# SPDX-License-Identifier: MIT

import logging
from copy import deepcopy
from typing import Any, Optional, cast

import pendulum

from unbind import time
from unbind.configuration import WEEKLY_SUMMARIES_KEY, WEEKLY_SUMMARY_LAST_SHOWN_KEY
from unbind.errors import StorageError
from unbind.model.result import Err
from unbind.model.weekly_summary import WeeklySummary
from unbind.repository.key_value import KeyValueStore

logger = logging.getLogger(__name__)

MAX_STORED_SUMMARIES = 12


class WeeklySummaryRepository:
    """
    Bookkeeping for weekly summaries: when one was last shown, and a bounded
    history of past summaries. Failures are logged, never raised.
    """

    def __init__(self, store: KeyValueStore, clock: time.Clock = time.now_utc) -> None:
        self._store = store
        self._clock = clock

    def __convert_summary_for_serialization(
        self, summary: WeeklySummary
    ) -> dict[str, Any]:
        serializable_summary = cast(dict[str, Any], deepcopy(summary))
        serializable_summary["week_start"] = time.datetime_to_iso_str(
            serializable_summary["week_start"]
        )
        serializable_summary["week_end"] = time.datetime_to_iso_str(
            serializable_summary["week_end"]
        )
        return serializable_summary

    def __convert_summary_for_deserialization(
        self, summary: dict[str, Any]
    ) -> WeeklySummary:
        deserializable_summary = dict(summary)
        deserializable_summary["week_start"] = time.datetime_from_value(
            deserializable_summary["week_start"]
        )
        deserializable_summary["week_end"] = time.datetime_from_value(
            deserializable_summary["week_end"]
        )
        return cast(WeeklySummary, deserializable_summary)

    def get_last_shown(self) -> Optional[pendulum.DateTime]:
        result = self._store.read(WEEKLY_SUMMARY_LAST_SHOWN_KEY)
        if isinstance(result, Err):
            logger.error(
                "error checking weekly summary: %s", result.reason, exc_info=result.error
            )
            return None
        try:
            return time.datetime_from_value_optional(result.value)
        except (TypeError, ValueError):
            logger.exception("error checking weekly summary")
            return None

    def mark_shown(self) -> None:
        try:
            self._store.write(
                WEEKLY_SUMMARY_LAST_SHOWN_KEY, time.datetime_to_iso_str(self._clock())
            )
        except StorageError:
            logger.exception("error marking weekly summary shown")

    def get_summaries(self) -> list[WeeklySummary]:
        result = self._store.read(WEEKLY_SUMMARIES_KEY)
        if isinstance(result, Err):
            logger.error(
                "error getting weekly summaries: %s", result.reason, exc_info=result.error
            )
            return []
        if result.value is None:
            return []
        try:
            return [
                self.__convert_summary_for_deserialization(summary)
                for summary in result.value
            ]
        except (KeyError, TypeError, ValueError):
            logger.exception("error getting weekly summaries")
            return []

    def save_summary(self, summary: WeeklySummary) -> None:
        summaries = self.get_summaries()
        summaries.append(summary)
        trimmed = summaries[-MAX_STORED_SUMMARIES:]
        try:
            self._store.write(
                WEEKLY_SUMMARIES_KEY,
                [
                    self.__convert_summary_for_serialization(stored)
                    for stored in trimmed
                ],
            )
        except StorageError:
            logger.exception("error saving weekly summary")
