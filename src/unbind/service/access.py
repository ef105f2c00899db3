# SPDX-License-Identifier: MIT

import logging
from typing import Optional

import pendulum

from unbind import time
from unbind.model.access import SessionAccess
from unbind.model.profile import Profile
from unbind.repository.profile import ProfileRepository
from unbind.service.plans import PREMIUM, TRIAL

logger = logging.getLogger(__name__)


def get_sessions_today(profile: Optional[Profile], today: str) -> int:
    """The stored daily counter, or 0 once the day it was stamped with has passed."""
    if profile is None or profile["last_session_date"] != today:
        return 0
    return profile["daily_sessions_count"] or 0


def evaluate_session_access(
    profile: Optional[Profile], now: pendulum.DateTime, today: str
) -> SessionAccess:
    """
    Decide whether a new recording session may start.

    Premium users and users inside the trial window share one daily cap. A
    non-premium user whose trial has run out is denied outright. A missing
    profile is denied as well, since the backend rejects such users.
    """
    if profile is None:
        return {
            "can_record": False,
            "sessions_today": 0,
            "max_sessions": 0,
            "is_in_trial": False,
            "trial_expired": False,
        }

    is_premium = profile["is_premium"] is True
    trial_start_date = profile["trial_start_date"]
    is_in_trial = False
    trial_expired = False

    if trial_start_date is not None and not is_premium:
        elapsed_days = time.whole_days_since(trial_start_date, now)
        is_in_trial = elapsed_days < TRIAL["duration_days"]
        trial_expired = elapsed_days >= TRIAL["duration_days"]

    if not is_premium and trial_expired:
        return {
            "can_record": False,
            "sessions_today": 0,
            "max_sessions": 0,
            "is_in_trial": False,
            "trial_expired": True,
        }

    max_sessions = PREMIUM["sessions_per_day"]
    sessions_today = get_sessions_today(profile, today)

    return {
        "can_record": sessions_today < max_sessions,
        "sessions_today": sessions_today,
        "max_sessions": max_sessions,
        "is_in_trial": is_in_trial,
        "trial_expired": False,
    }


class AccessGate:
    """
    Decides whether a user may record now and maintains the daily counter.

    The check and the increment are separate calls, so two rapid attempts can
    both pass before either increments. The backend enforces the same limits
    and remains the source of truth; this gate only pre-checks.

    When profiles live on the backend, the backend counts each processed
    session itself and counts_sessions is False.
    """

    def __init__(
        self,
        profiles: ProfileRepository,
        clock: time.Clock = time.now_utc,
        day_tz: str = "UTC",
        counts_sessions: bool = True,
    ) -> None:
        self._profiles = profiles
        self._clock = clock
        self._day_tz = day_tz
        self.counts_sessions = counts_sessions

    def today(self) -> str:
        return time.datetime_to_date_str(self._clock(), self._day_tz)

    def can_record_session(self, user_id: str) -> SessionAccess:
        now = self._clock()
        profile = self._profiles.get_profile(user_id)
        access = evaluate_session_access(
            profile, now, time.datetime_to_date_str(now, self._day_tz)
        )
        logger.debug("session access for %s: %s", user_id, access)
        return access

    def increment_session_count(self, user_id: str) -> int:
        """Count one more session today, restarting at 1 on a new day."""
        today = self.today()
        profile = self._profiles.get_profile(user_id)

        new_count = get_sessions_today(profile, today) + 1
        self._profiles.update_profile(
            user_id,
            {
                "daily_sessions_count": new_count,
                "last_session_date": today,
            },
        )
        return new_count
