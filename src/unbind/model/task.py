# SPDX-License-Identifier: MIT

from typing import NotRequired, Optional, TypedDict

import pendulum

from unbind.model.entity_id import EntityId


class MicroTask(TypedDict):
    id: str  # unique within the owning entry only
    title: str
    duration: int  # estimated minutes
    completed: bool
    completed_at: Optional[pendulum.DateTime]  # set iff completed


class NewMicroTask(TypedDict):
    title: str
    duration: int
    completed: NotRequired[bool]


class PendingTask(TypedDict):
    task: MicroTask
    entry_id: EntityId
    entry_date: pendulum.DateTime


class TaskStats(TypedDict):
    total_tasks: int
    completed_tasks: int
    pending_tasks: int
    completed_today: int
