# SPDX-License-Identifier: MIT

from typing import Optional

from unbind.model.task import MicroTask

SHORT_ID_LENGTH = 8


def short_id(id: str) -> str:
    return id[:SHORT_ID_LENGTH]


def task_state(task: MicroTask) -> str:
    return "X" if task["completed"] else " "


def format_minutes(minutes: int) -> str:
    if minutes < 60:
        return f"{minutes}m"
    hours, remainder = divmod(minutes, 60)
    return f"{hours}h{remainder:02d}m" if remainder else f"{hours}h"


def format_optional_text(text: Optional[str], max_length: Optional[int] = None) -> str:
    if text is None:
        return ""
    if max_length is not None and len(text) > max_length:
        return text[: max_length - 1] + "…"
    return text
