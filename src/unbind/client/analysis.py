# SPDX-License-Identifier: MIT

"""
Client for the remote journal processing function.

The function transcribes the audio, analyses it into a summary, blocker, mood
and micro-tasks, and enforces the trial and daily limits server side.
"""

import base64
import logging
from pathlib import Path
from typing import Any, Optional

import requests

from unbind.client.auth import AuthSession
from unbind.errors import (
    AnalysisError,
    AuthenticationError,
    DailyLimitReachedError,
    TrialExpiredError,
)
from unbind.model.access import LimitErrorInfo
from unbind.model.analysis import ProcessResult
from unbind.service.plans import PREMIUM
from unbind.template.task import task_from_analysis

logger = logging.getLogger(__name__)

MAX_AUTH_RETRIES = 1
LIMIT_REACHED_PREFIX = "LIMIT_REACHED:"
TRIAL_EXPIRED_MESSAGE = "TRIAL_EXPIRED"


class AnalysisClient:
    def __init__(
        self,
        http: requests.Session,
        base_url: str,
        auth: AuthSession,
        timeout: int = 60,
    ) -> None:
        self._http = http
        self._base_url = base_url.rstrip("/")
        self._auth = auth
        self._timeout = timeout

    def process_journal_entry(self, audio_path: Path, language: str) -> ProcessResult:
        try:
            return self.__process(audio_path, language, retry_count=0)
        except (TrialExpiredError, DailyLimitReachedError) as e:
            logger.info("access restricted: %s", e)
            raise
        except AnalysisError:
            logger.exception("process error")
            raise

    def __process(
        self, audio_path: Path, language: str, retry_count: int
    ) -> ProcessResult:
        try:
            session = self._auth.get_valid_session()
        except AuthenticationError as e:
            raise AnalysisError(str(e)) from e

        try:
            audio_base64 = base64.b64encode(audio_path.read_bytes()).decode("ascii")
        except OSError as e:
            raise AnalysisError(f"could not read audio file {audio_path}: {e}") from e

        logger.debug("calling process-journal for %s", audio_path)
        try:
            response = self._http.post(
                f"{self._base_url}/functions/v1/process-journal",
                json={"audioBase64": audio_base64, "language": language},
                headers={"Authorization": f"Bearer {session['access_token']}"},
                timeout=self._timeout,
            )
        except requests.RequestException as e:
            raise AnalysisError(f"Processing failed: {e}") from e

        try:
            data: dict[str, Any] = response.json()
        except ValueError:
            data = {}
        logger.debug("process-journal response: %s", response.status_code)

        if not response.ok:
            if response.status_code == 401 and retry_count < MAX_AUTH_RETRIES:
                logger.info("invalid token, creating new session and retrying")
                try:
                    self._auth.sign_in_anonymously()
                except AuthenticationError:
                    logger.warning("re-authentication failed, not retrying")
                else:
                    return self.__process(audio_path, language, retry_count + 1)

            error = data.get("error")
            if error == "trial_expired":
                raise TrialExpiredError()
            if error == "daily_limit_reached":
                raise DailyLimitReachedError(
                    int(data.get("sessionsToday") or 0),
                    int(data.get("maxSessions") or 0),
                )
            raise AnalysisError(
                error or data.get("message") or f"Processing failed: {response.status_code}"
            )

        return convert_process_result(data)


def convert_process_result(data: dict[str, Any]) -> ProcessResult:
    try:
        analysis = data["analysis"]
        return {
            "transcript": data.get("transcript") or "",
            "analysis": {
                "summary": analysis.get("summary") or "",
                "blocker": analysis.get("blocker") or "",
                "mood": analysis.get("mood") or "",
                "tasks": [
                    task_from_analysis(raw_task, position)
                    for position, raw_task in enumerate(analysis.get("tasks") or [])
                ],
            },
            "session_id": data.get("sessionId"),
            "sessions_today": int(data.get("sessionsToday") or 0),
            "max_sessions": int(data.get("maxSessions") or 0),
            "is_in_trial": data.get("isInTrial"),
            "trial_days_remaining": data.get("trialDaysRemaining"),
            "is_premium": data.get("isPremium"),
        }
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise AnalysisError(f"malformed analysis response: {e}") from e


def parse_limit_error(error: Exception) -> LimitErrorInfo:
    """Decode the access errors raised by process_journal_entry."""
    message = str(error)

    if message == TRIAL_EXPIRED_MESSAGE:
        return {
            "is_limit_error": False,
            "is_trial_expired": True,
            "sessions_today": 0,
            "max_sessions": 0,
        }

    if message.startswith(LIMIT_REACHED_PREFIX):
        parts = message.split(":")
        sessions_today: Optional[int] = None
        max_sessions: Optional[int] = None
        try:
            sessions_today = int(parts[1])
            max_sessions = int(parts[2])
        except (IndexError, ValueError):
            logger.warning("malformed limit error: %s", message)
        return {
            "is_limit_error": True,
            "is_trial_expired": False,
            "sessions_today": sessions_today or 0,
            "max_sessions": max_sessions or 0,
        }

    return {
        "is_limit_error": False,
        "is_trial_expired": False,
        "sessions_today": 0,
        "max_sessions": PREMIUM["sessions_per_day"],
    }
