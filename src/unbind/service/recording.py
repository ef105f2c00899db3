# SPDX-License-Identifier: MIT

import logging
from pathlib import Path

from unbind.client.analysis import AnalysisClient
from unbind.errors import (
    DailyLimitReachedError,
    ProfileError,
    StorageError,
    TrialExpiredError,
)
from unbind.model.achievement import Achievement
from unbind.model.entry import JournalEntry
from unbind.repository.achievement import AchievementRepository
from unbind.repository.entry import EntryRepository
from unbind.repository.user_stats import UserStatsRepository
from unbind.service.access import AccessGate

logger = logging.getLogger(__name__)


def record_session(
    entries: EntryRepository,
    access_gate: AccessGate,
    analysis: AnalysisClient,
    user_id: str,
    audio_path: Path,
    language: str,
) -> JournalEntry:
    """
    Run one recording through analysis and into the journal.

    The local access check raises the same errors the backend does when it
    denies a session, so callers handle both the same way. The daily counter
    is only incremented here when the gate keeps it; a backend profile has
    already been counted by the analysis call.
    """
    access = access_gate.can_record_session(user_id)
    if access["trial_expired"]:
        raise TrialExpiredError()
    if not access["can_record"]:
        raise DailyLimitReachedError(access["sessions_today"], access["max_sessions"])

    result = analysis.process_journal_entry(audio_path, language)

    entry = entries.save_entry(
        {
            "audio_uri": str(audio_path),
            "transcript": result["transcript"],
            "summary": result["analysis"]["summary"],
            "blocker": result["analysis"]["blocker"],
            "mood": result["analysis"]["mood"],
            "tasks": result["analysis"]["tasks"],
        }
    )

    if access_gate.counts_sessions:
        try:
            access_gate.increment_session_count(user_id)
        except ProfileError:
            logger.warning(
                "could not increment session count for %s", user_id, exc_info=True
            )
    else:
        logger.debug(
            "session %s counted by the backend: %d of %d today",
            result["session_id"],
            result["sessions_today"],
            result["max_sessions"],
        )

    return entry


def track_session(
    entry: JournalEntry,
    entries: EntryRepository,
    user_stats: UserStatsRepository,
    achievements: AchievementRepository,
    tz: str = "local",
) -> list[Achievement]:
    """
    Count a recorded session towards the lifetime totals and unlock the
    achievements it earns. Returns the newly unlocked achievements.
    """
    try:
        session_count = user_stats.increment_session_count()
    except StorageError:
        logger.warning("could not update session totals", exc_info=True)
        session_count = user_stats.get_session_count()

    return achievements.check_and_unlock(
        {
            "sessions": session_count,
            "tasks_completed": entries.get_task_stats()["completed_tasks"],
            "streak": entries.calculate_streak(),
            "session_hour": entry["date"].in_tz(tz).hour,
        }
    )
