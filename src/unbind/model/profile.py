# SPDX-License-Identifier: MIT

from typing import NotRequired, Optional, TypedDict

import pendulum


class Profile(TypedDict):
    id: str
    is_premium: bool
    trial_start_date: Optional[pendulum.DateTime]
    daily_sessions_count: int
    last_session_date: Optional[str]  # YYYY-MM-DD, the day the counter applies to
    language: NotRequired[str]
    created_at: NotRequired[Optional[pendulum.DateTime]]


class ProfilePatch(TypedDict, total=False):
    is_premium: bool
    trial_start_date: Optional[pendulum.DateTime]
    daily_sessions_count: int
    last_session_date: Optional[str]
    language: str
