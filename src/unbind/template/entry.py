# SPDX-License-Identifier: MIT

from copy import deepcopy

import pendulum

from unbind.model.entity_id import generate_entity_id
from unbind.model.entry import JournalEntry, NewJournalEntry


def get_entry_template(data: NewJournalEntry, now: pendulum.DateTime) -> JournalEntry:
    entry: JournalEntry = {
        "id": generate_entity_id(),
        "date": now,
        "audio_uri": data.get("audio_uri"),
        "transcript": data.get("transcript"),
        "summary": data.get("summary"),
        "blocker": data.get("blocker"),
        "mood": data.get("mood"),
        "tasks": deepcopy(data.get("tasks", [])),
        "is_favorite": data.get("is_favorite", False),
    }
    return entry
