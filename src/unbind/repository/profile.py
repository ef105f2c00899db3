# SPDX-License-Identifier: MIT

import logging
from copy import deepcopy
from typing import Any, Optional, Protocol, cast

from unbind import time
from unbind.configuration import PROFILES_KEY
from unbind.errors import ProfileError, StorageError
from unbind.model.profile import Profile, ProfilePatch
from unbind.model.result import Err
from unbind.repository.key_value import KeyValueStore

logger = logging.getLogger(__name__)


class ProfileRepository(Protocol):
    """Per-user gating state, held by the backend or cached locally."""

    def get_profile(self, user_id: str) -> Optional[Profile]: ...

    def update_profile(self, user_id: str, patch: ProfilePatch) -> None: ...


def convert_profile_for_serialization(profile: dict[str, Any]) -> dict[str, Any]:
    serializable_profile = deepcopy(profile)
    for field in ("trial_start_date", "created_at"):
        if field in serializable_profile:
            serializable_profile[field] = time.datetime_to_iso_str_optional(
                serializable_profile[field]
            )
    return serializable_profile


def convert_profile_for_deserialization(profile: dict[str, Any]) -> Profile:
    deserializable_profile = dict(profile)
    deserializable_profile["is_premium"] = deserializable_profile.get("is_premium") is True
    deserializable_profile["daily_sessions_count"] = int(
        deserializable_profile.get("daily_sessions_count") or 0
    )
    deserializable_profile.setdefault("last_session_date", None)
    deserializable_profile["trial_start_date"] = time.datetime_from_value_optional(
        deserializable_profile.get("trial_start_date")
    )
    if "created_at" in deserializable_profile:
        deserializable_profile["created_at"] = time.datetime_from_value_optional(
            deserializable_profile["created_at"]
        )
    return cast(Profile, deserializable_profile)


class LocalProfileRepository:
    """Profiles kept in the local key-value store, keyed by user id."""

    def __init__(self, store: KeyValueStore, clock: time.Clock = time.now_utc) -> None:
        self._store = store
        self._clock = clock

    def __load_data(self) -> dict[str, dict[str, Any]]:
        result = self._store.read(PROFILES_KEY)
        if isinstance(result, Err):
            raise ProfileError(result.reason) from result.error
        if result.value is None:
            return {}
        if not isinstance(result.value, dict):
            raise ProfileError("stored profiles are not a mapping")
        return cast(dict[str, dict[str, Any]], result.value)

    def __save_data(self, profiles: dict[str, dict[str, Any]]) -> None:
        try:
            self._store.write(PROFILES_KEY, profiles)
        except StorageError as e:
            raise ProfileError(str(e)) from e

    def get_profile(self, user_id: str) -> Optional[Profile]:
        raw_profile = self.__load_data().get(user_id)
        if raw_profile is None:
            return None
        try:
            return convert_profile_for_deserialization(raw_profile)
        except (TypeError, ValueError) as e:
            raise ProfileError(f"profile {user_id} could not be decoded") from e

    def update_profile(self, user_id: str, patch: ProfilePatch) -> None:
        profiles = self.__load_data()
        if user_id not in profiles:
            raise ProfileError(f"profile {user_id} does not exist")

        profiles[user_id].update(
            convert_profile_for_serialization(cast(dict[str, Any], patch))
        )
        self.__save_data(profiles)

    def start_trial(self, user_id: str) -> Profile:
        """
        Create the profile with the trial starting now, or start the trial on
        an existing profile that has none. An existing trial is left alone.
        """
        profiles = self.__load_data()
        now = self._clock()

        if user_id not in profiles:
            profile: Profile = {
                "id": user_id,
                "is_premium": False,
                "trial_start_date": now,
                "daily_sessions_count": 0,
                "last_session_date": None,
                "created_at": now,
            }
            profiles[user_id] = convert_profile_for_serialization(
                cast(dict[str, Any], profile)
            )
            self.__save_data(profiles)
            logger.info("started trial for new profile %s", user_id)
        elif profiles[user_id].get("trial_start_date") is None:
            profiles[user_id]["trial_start_date"] = time.datetime_to_iso_str(now)
            self.__save_data(profiles)
            logger.info("started trial for profile %s", user_id)

        return convert_profile_for_deserialization(profiles[user_id])

    def set_premium(self, user_id: str, is_premium: bool) -> None:
        self.update_profile(user_id, {"is_premium": is_premium})
