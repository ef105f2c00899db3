# SPDX-License-Identifier: MIT

from typing import Literal, NotRequired, Optional, TypedDict

import pendulum

type ConditionType = Literal["first", "sessions", "tasks", "streak", "time"]
type Comparison = Literal["gte", "lte", "eq"]


class AchievementCondition(TypedDict):
    type: ConditionType
    value: int
    comparison: NotRequired[Comparison]  # gte when absent


class Achievement(TypedDict):
    id: str
    name: str
    description: str
    xp: int
    condition: AchievementCondition
    unlocked_at: NotRequired[pendulum.DateTime]


class AchievementProgress(TypedDict):
    unlocked_achievements: list[str]
    total_xp: int
    level: int


class AchievementStats(TypedDict):
    sessions: int
    tasks_completed: int
    streak: int
    session_hour: Optional[int]  # hour of the session just recorded, if any


class Level(TypedDict):
    level: int
    name: str
    xp_required: int


class LevelInfo(TypedDict):
    level: int
    name: str
    progress: float  # 0..1 towards the next level, 1 at the top level
