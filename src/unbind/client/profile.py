# SPDX-License-Identifier: MIT

import logging
from typing import Any, Optional, cast

import requests

from unbind.client.auth import AuthSession
from unbind.errors import AuthenticationError, ProfileError
from unbind.model.profile import Profile, ProfilePatch
from unbind.repository.profile import (
    convert_profile_for_deserialization,
    convert_profile_for_serialization,
)

logger = logging.getLogger(__name__)


class SupabaseProfileRepository:
    """Profiles read from and written to the backend's profiles table."""

    def __init__(
        self,
        http: requests.Session,
        base_url: str,
        auth: AuthSession,
        timeout: int = 60,
    ) -> None:
        self._http = http
        self._url = f"{base_url.rstrip('/')}/rest/v1/profiles"
        self._auth = auth
        self._timeout = timeout

    def __headers(self) -> dict[str, str]:
        try:
            session = self._auth.get_valid_session()
        except AuthenticationError as e:
            raise ProfileError(str(e)) from e
        return {
            "apikey": self._auth.anon_key,
            "Authorization": f"Bearer {session['access_token']}",
            "Accept": "application/json",
        }

    def get_profile(self, user_id: str) -> Optional[Profile]:
        try:
            response = self._http.get(
                self._url,
                params={"id": f"eq.{user_id}", "select": "*"},
                headers=self.__headers(),
                timeout=self._timeout,
            )
            response.raise_for_status()
            rows: list[dict[str, Any]] = response.json()
        except (requests.RequestException, ValueError) as e:
            logger.error("error fetching profile: %s", e)
            raise ProfileError(f"could not fetch profile {user_id}: {e}") from e

        if len(rows) == 0:
            return None
        try:
            return convert_profile_for_deserialization(rows[0])
        except (TypeError, ValueError) as e:
            raise ProfileError(f"profile {user_id} could not be decoded") from e

    def update_profile(self, user_id: str, patch: ProfilePatch) -> None:
        headers = self.__headers()
        headers["Prefer"] = "return=minimal"
        try:
            response = self._http.patch(
                self._url,
                params={"id": f"eq.{user_id}"},
                json=convert_profile_for_serialization(cast(dict[str, Any], patch)),
                headers=headers,
                timeout=self._timeout,
            )
            response.raise_for_status()
        except requests.RequestException as e:
            logger.error("error updating profile: %s", e)
            raise ProfileError(f"could not update profile {user_id}: {e}") from e
