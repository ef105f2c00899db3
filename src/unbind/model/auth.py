# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict


class AuthSessionData(TypedDict):
    access_token: str
    refresh_token: Optional[str]
    user_id: str
    is_anonymous: bool
