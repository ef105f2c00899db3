# SPDX-License-Identifier: MIT

from typing import TypedDict


class SessionAccess(TypedDict):
    can_record: bool
    sessions_today: int
    max_sessions: int
    is_in_trial: bool
    trial_expired: bool


class SessionLimits(TypedDict):
    sessions_per_day: int
    plan_name: str
    has_access: bool


class LimitErrorInfo(TypedDict):
    is_limit_error: bool
    is_trial_expired: bool
    sessions_today: int
    max_sessions: int
