# SPDX-License-Identifier: MIT

from typing import Any, Optional

import pendulum

from unbind.model.entity_id import generate_entity_id
from unbind.model.task import MicroTask, NewMicroTask


def get_task_template(task: NewMicroTask, now: pendulum.DateTime) -> MicroTask:
    completed = task.get("completed", False)
    return {
        "id": generate_entity_id(),
        "title": task["title"],
        "duration": max(0, int(task["duration"])),
        "completed": completed,
        "completed_at": now if completed else None,
    }


def task_from_analysis(raw_task: dict[str, Any], position: int) -> MicroTask:
    """
    Build a MicroTask from a task returned by the analysis backend.

    Backend tasks may omit ids and completion fields; missing ids fall back to
    the task's position so they stay unique within the entry.
    """
    raw_id: Optional[Any] = raw_task.get("id")
    duration = raw_task.get("duration") or 0
    return {
        "id": str(raw_id) if raw_id is not None else str(position + 1),
        "title": str(raw_task.get("title") or ""),
        "duration": max(0, int(duration)),
        "completed": False,
        "completed_at": None,
    }
