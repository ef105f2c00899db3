# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

from unbind.model.task import MicroTask


class JournalAnalysis(TypedDict):
    summary: str
    blocker: str
    mood: str
    tasks: list[MicroTask]


class ProcessResult(TypedDict):
    transcript: str
    analysis: JournalAnalysis
    session_id: Optional[str]
    sessions_today: int
    max_sessions: int
    is_in_trial: Optional[bool]
    trial_days_remaining: Optional[int]
    is_premium: Optional[bool]
