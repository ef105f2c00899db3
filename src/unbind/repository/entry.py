# SPDX-License-Identifier: MIT

import logging
from copy import deepcopy
from typing import Any, Iterator, Optional, cast

from unbind import time
from unbind.configuration import ENTRIES_KEY
from unbind.errors import StorageError
from unbind.model.entity_id import EntityId
from unbind.model.entry import JournalEntry, NewJournalEntry
from unbind.model.result import Err, Ok, Result
from unbind.model.task import MicroTask, NewMicroTask, PendingTask, TaskStats
from unbind.repository.key_value import KeyValueStore
from unbind.service.entry import (
    compute_streak,
    compute_task_stats,
    filter_favorites,
    get_tasks,
    iter_pending_tasks,
)
from unbind.template.entry import get_entry_template
from unbind.template.task import get_task_template

logger = logging.getLogger(__name__)

IMMUTABLE_ENTRY_FIELDS = ("id", "date")


class EntryRepository:
    """
    The journal: an ordered collection of entries, newest first.

    Every mutation reads the whole collection, changes it in memory and writes
    the whole collection back. Two interleaved mutations race and the later
    write wins; there is a single user on a single device.

    Read operations never raise: an unreadable store is logged and read as
    empty. Mutations raise StorageError so the caller can retry or warn.
    Single entries that cannot be decoded are skipped by reads and kept, as
    stored, at the end of the collection by mutations.
    """

    def __init__(
        self,
        store: KeyValueStore,
        clock: time.Clock = time.now_utc,
        tz: str = "local",
    ) -> None:
        self._store = store
        self._clock = clock
        self._tz = tz

    def load_entries(self) -> Result[list[JournalEntry]]:
        result = self.__load_raw_entries()
        if isinstance(result, Err):
            return result
        entries, _ = self.__decode_entries(result.value)
        return Ok(entries)

    def __load_raw_entries(self) -> Result[list[Any]]:
        result = self._store.read(ENTRIES_KEY)
        if isinstance(result, Err):
            return result

        raw_entries = result.value
        if raw_entries is None:
            return Ok([])
        if not isinstance(raw_entries, list):
            return Err(
                f"stored entries are a {type(raw_entries).__name__}, expected a list"
            )
        return Ok(raw_entries)

    def __decode_entries(
        self, raw_entries: list[Any]
    ) -> tuple[list[JournalEntry], list[Any]]:
        """
        Decode stored entries one by one.

        Returns the decoded entries and, separately, the raw entries that could
        not be decoded. Those are skipped on reads and written back untouched.
        """
        entries: list[JournalEntry] = []
        undecodable: list[Any] = []
        for position, raw_entry in enumerate(raw_entries):
            try:
                entries.append(self.__convert_entry_for_deserialization(raw_entry))
            except (KeyError, TypeError, ValueError) as e:
                logger.warning(
                    "skipping stored entry at position %d: %r", position, e
                )
                undecodable.append(raw_entry)
        return entries, undecodable

    def __read_for_mutation(self) -> tuple[list[JournalEntry], list[Any]]:
        result = self.__load_raw_entries()
        if isinstance(result, Err):
            raise StorageError(result.reason) from result.error
        return self.__decode_entries(result.value)

    def __save_entries(
        self, entries: list[JournalEntry], undecodable: list[Any]
    ) -> None:
        self._store.write(
            ENTRIES_KEY,
            [
                self.__convert_entry_for_serialization(deepcopy(entry))
                for entry in entries
            ]
            + undecodable,
        )

    def __convert_entry_for_serialization(self, entry: JournalEntry) -> dict[str, Any]:
        serializable_entry = cast(dict[str, Any], entry)
        serializable_entry["date"] = time.datetime_to_iso_str(serializable_entry["date"])
        if "tasks" in serializable_entry:
            for task in serializable_entry["tasks"]:
                task["completed_at"] = time.datetime_to_iso_str_optional(
                    task.get("completed_at")
                )
        return serializable_entry

    def __convert_entry_for_deserialization(self, entry: Any) -> JournalEntry:
        if not isinstance(entry, dict):
            raise TypeError(f"entry is a {type(entry).__name__}, expected a mapping")
        deserializable_entry = dict(entry)
        deserializable_entry["id"] = self.__convert_id(deserializable_entry["id"])
        deserializable_entry["date"] = time.datetime_from_value(
            deserializable_entry["date"]
        )
        for field in ("audio_uri", "transcript", "summary", "blocker", "mood"):
            deserializable_entry.setdefault(field, None)
        tasks = deserializable_entry.get("tasks")
        if tasks is None:
            deserializable_entry.pop("tasks", None)
        elif not isinstance(tasks, list):
            raise TypeError(f"tasks are a {type(tasks).__name__}, expected a list")
        else:
            deserializable_entry["tasks"] = [
                self.__convert_task_for_deserialization(task) for task in tasks
            ]
        return cast(JournalEntry, deserializable_entry)

    def __convert_task_for_deserialization(self, task: Any) -> MicroTask:
        if not isinstance(task, dict):
            raise TypeError(f"task is a {type(task).__name__}, expected a mapping")
        deserializable_task = dict(task)
        deserializable_task["id"] = self.__convert_id(deserializable_task["id"])
        if not isinstance(deserializable_task["title"], str):
            raise TypeError("task title is not a string")
        deserializable_task["completed"] = bool(deserializable_task.get("completed"))
        deserializable_task["completed_at"] = time.datetime_from_value_optional(
            deserializable_task.get("completed_at")
        )
        deserializable_task.setdefault("duration", 0)
        return cast(MicroTask, deserializable_task)

    def __convert_id(self, id: Any) -> str:
        # YAML reads numeric-looking ids as ints
        if isinstance(id, bool) or not isinstance(id, (str, int)):
            raise TypeError(f"id is a {type(id).__name__}, expected a string")
        if id == "":
            raise ValueError("id is empty")
        return str(id)

    def __find_entry_index(self, entries: list[JournalEntry], id: EntityId) -> int:
        for index, entry in enumerate(entries):
            if entry["id"] == id:
                return index
        return -1

    def save_entry(self, data: NewJournalEntry) -> JournalEntry:
        entries, undecodable = self.__read_for_mutation()

        entry = get_entry_template(data, self._clock())
        entries.insert(0, entry)
        self.__save_entries(entries, undecodable)

        logger.debug("saved entry %s", entry["id"])
        return deepcopy(entry)

    def update_entry(
        self, id: EntityId, updates: dict[str, Any]
    ) -> Optional[JournalEntry]:
        entries, undecodable = self.__read_for_mutation()
        index = self.__find_entry_index(entries, id)
        if index == -1:
            return None

        merged = cast(dict[str, Any], entries[index])
        for key, value in updates.items():
            if key in IMMUTABLE_ENTRY_FIELDS:
                continue
            merged[key] = deepcopy(value)
        self.__save_entries(entries, undecodable)

        return deepcopy(entries[index])

    def get_entries(self) -> list[JournalEntry]:
        result = self.load_entries()
        if isinstance(result, Err):
            logger.error("error reading entries: %s", result.reason, exc_info=result.error)
            return []
        return result.value

    def get_entry(self, id: EntityId) -> Optional[JournalEntry]:
        for entry in self.get_entries():
            if entry["id"] == id:
                return entry
        return None

    def delete_entry(self, id: EntityId) -> None:
        entries, undecodable = self.__read_for_mutation()
        self.__save_entries(
            [entry for entry in entries if entry["id"] != id], undecodable
        )

    def get_entry_count(self) -> int:
        return len(self.get_entries())

    def clear_all_entries(self) -> None:
        self._store.remove(ENTRIES_KEY)

    def toggle_task_complete(
        self, entry_id: EntityId, task_id: str
    ) -> Optional[JournalEntry]:
        entries, undecodable = self.__read_for_mutation()
        index = self.__find_entry_index(entries, entry_id)
        if index == -1:
            return None

        entry = entries[index]
        task = self.__find_task(entry, task_id)
        if task is None:
            return None

        task["completed"] = not task["completed"]
        task["completed_at"] = self._clock() if task["completed"] else None
        self.__save_entries(entries, undecodable)

        return deepcopy(entry)

    def add_task_to_entry(
        self, entry_id: EntityId, task: NewMicroTask
    ) -> Optional[JournalEntry]:
        entries, undecodable = self.__read_for_mutation()
        index = self.__find_entry_index(entries, entry_id)
        if index == -1:
            return None

        entry = entries[index]
        entry["tasks"] = get_tasks(entry) + [get_task_template(task, self._clock())]
        self.__save_entries(entries, undecodable)

        return deepcopy(entry)

    def remove_task_from_entry(
        self, entry_id: EntityId, task_id: str
    ) -> Optional[JournalEntry]:
        entries, undecodable = self.__read_for_mutation()
        index = self.__find_entry_index(entries, entry_id)
        if index == -1:
            return None

        entry = entries[index]
        tasks = get_tasks(entry)
        remaining = [task for task in tasks if task["id"] != task_id]
        if len(remaining) != len(tasks):
            entry["tasks"] = remaining
            self.__save_entries(entries, undecodable)

        return deepcopy(entry)

    def update_task(
        self, entry_id: EntityId, task_id: str, updates: dict[str, Any]
    ) -> Optional[JournalEntry]:
        entries, undecodable = self.__read_for_mutation()
        index = self.__find_entry_index(entries, entry_id)
        if index == -1:
            return None

        entry = entries[index]
        task = self.__find_task(entry, task_id)
        if task is None:
            return None

        was_completed = task["completed"]
        merged = cast(dict[str, Any], task)
        for key, value in updates.items():
            if key == "id":
                continue
            merged[key] = deepcopy(value)

        # completed_at is present iff completed
        if not task["completed"]:
            task["completed_at"] = None
        elif task.get("completed_at") is None or (
            not was_completed and "completed_at" not in updates
        ):
            task["completed_at"] = self._clock()
        self.__save_entries(entries, undecodable)

        return deepcopy(entry)

    def __find_task(self, entry: JournalEntry, task_id: str) -> Optional[MicroTask]:
        for task in get_tasks(entry):
            if task["id"] == task_id:
                return task
        return None

    def get_all_pending_tasks(self) -> Iterator[PendingTask]:
        return iter_pending_tasks(self.get_entries())

    def get_task_stats(self) -> TaskStats:
        return compute_task_stats(self.get_entries(), self._clock(), self._tz)

    def get_latest_entry(self) -> Optional[JournalEntry]:
        entries = self.get_entries()
        return entries[0] if len(entries) > 0 else None

    def calculate_streak(self) -> int:
        return compute_streak(self.get_entries(), self._clock(), self._tz)

    def toggle_favorite(self, entry_id: EntityId) -> Optional[JournalEntry]:
        entries, undecodable = self.__read_for_mutation()
        index = self.__find_entry_index(entries, entry_id)
        if index == -1:
            return None

        entry = entries[index]
        entry["is_favorite"] = not entry.get("is_favorite", False)
        self.__save_entries(entries, undecodable)

        return deepcopy(entry)

    def get_favorite_entries(self) -> list[JournalEntry]:
        return filter_favorites(self.get_entries())

    def get_favorite_count(self) -> int:
        return len(self.get_favorite_entries())
