# SPDX-License-Identifier: MIT

from typing import NotRequired, Optional, TypedDict

import pendulum

from unbind.model.entity_id import EntityId
from unbind.model.task import MicroTask


class JournalEntry(TypedDict):
    id: EntityId
    date: pendulum.DateTime  # creation instant, never modified

    # Analysis output
    audio_uri: Optional[str]
    transcript: Optional[str]
    summary: Optional[str]
    blocker: Optional[str]
    mood: Optional[str]

    # Absent on entries written by older versions
    tasks: NotRequired[list[MicroTask]]
    is_favorite: NotRequired[bool]

    # Legacy fields, kept as-is
    insights: NotRequired[list[str]]
    actions: NotRequired[list[str]]


class NewJournalEntry(TypedDict):
    audio_uri: Optional[str]
    transcript: Optional[str]
    summary: Optional[str]
    blocker: Optional[str]
    mood: Optional[str]
    tasks: list[MicroTask]
    is_favorite: NotRequired[bool]
