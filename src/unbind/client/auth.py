# SPDX-License-Identifier: MIT

import logging
from typing import Any, Optional

import requests

from unbind.configuration import AUTH_SESSION_KEY
from unbind.errors import AuthenticationError, StorageError
from unbind.model.auth import AuthSessionData
from unbind.model.result import Err
from unbind.repository.key_value import KeyValueStore

logger = logging.getLogger(__name__)


def convert_session_for_deserialization(value: Any) -> Optional[AuthSessionData]:
    """The stored session, or None when it lacks a token or a user id."""
    if not isinstance(value, dict):
        return None
    access_token = value.get("access_token")
    user_id = value.get("user_id")
    if not isinstance(access_token, str) or not access_token:
        return None
    if not isinstance(user_id, str) or not user_id:
        return None
    refresh_token = value.get("refresh_token")
    return {
        "access_token": access_token,
        "refresh_token": refresh_token if isinstance(refresh_token, str) else None,
        "user_id": user_id,
        "is_anonymous": value.get("is_anonymous", True) is True,
    }


class AuthSession:
    """
    Backend session for the current device.

    Users who have not signed up get an anonymous account so they can use the
    trial. The session is cached in the local store between runs.
    """

    def __init__(
        self,
        http: requests.Session,
        base_url: str,
        anon_key: str,
        store: KeyValueStore,
        timeout: int = 60,
    ) -> None:
        self._http = http
        self._base_url = base_url.rstrip("/")
        self._anon_key = anon_key
        self._store = store
        self._timeout = timeout
        self._session: Optional[AuthSessionData] = None

    @property
    def anon_key(self) -> str:
        return self._anon_key

    def get_session(self) -> Optional[AuthSessionData]:
        if self._session is None:
            result = self._store.read(AUTH_SESSION_KEY)
            if isinstance(result, Err):
                logger.error(
                    "error reading stored session: %s", result.reason, exc_info=result.error
                )
            elif result.value is not None:
                self._session = convert_session_for_deserialization(result.value)
                if self._session is None:
                    logger.warning("ignoring malformed stored session")
        return self._session

    def get_valid_session(self) -> AuthSessionData:
        session = self.get_session()
        if session is None:
            logger.info("no session found, creating anonymous user")
            session = self.sign_in_anonymously()
        return session

    def sign_in_anonymously(self) -> AuthSessionData:
        try:
            response = self._http.post(
                f"{self._base_url}/auth/v1/signup",
                json={},
                headers={"apikey": self._anon_key},
                timeout=self._timeout,
            )
            response.raise_for_status()
            data: dict[str, Any] = response.json()
        except (requests.RequestException, ValueError) as e:
            logger.error("anonymous sign in failed: %s", e)
            raise AuthenticationError(f"Authentication failed: {e}") from e

        user = data.get("user") or {}
        if "access_token" not in data or "id" not in user:
            raise AuthenticationError("Authentication failed: no session returned")

        session: AuthSessionData = {
            "access_token": data["access_token"],
            "refresh_token": data.get("refresh_token"),
            "user_id": user["id"],
            "is_anonymous": user.get("is_anonymous", True) is True,
        }
        self._session = session
        try:
            self._store.write(AUTH_SESSION_KEY, dict(session))
        except StorageError:
            logger.exception("could not cache session")
        return session

    def sign_out(self) -> None:
        self._session = None
        self._store.remove(AUTH_SESSION_KEY)
