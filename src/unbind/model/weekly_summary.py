# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

import pendulum


class WeeklySummary(TypedDict):
    week_start: pendulum.DateTime
    week_end: pendulum.DateTime
    sessions: int
    tasks_completed: int
    total_tasks: int
    minutes_saved: int
    streak: int
    previous_week_sessions: int
    improvement: int  # percent change against the previous week
    top_blocker: Optional[str]
    insights: list[str]
