# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

import pendulum


class UserStats(TypedDict):
    session_count: int  # lifetime recorded sessions on this device
    first_session_date: Optional[pendulum.DateTime]
