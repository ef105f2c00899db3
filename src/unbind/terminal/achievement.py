# SPDX-License-Identifier: MIT

import typer

from unbind.terminal.util import app_context, handle_errors
from unbind.view.view.views.achievement import achievements_view, unlocked_view


@handle_errors
def achievements(ctx: typer.Context) -> None:
    """Show level, XP and achievements, unlocking any already earned."""
    context = app_context(ctx)
    # Task and streak achievements can be earned between recordings
    newly_unlocked = context.achievements.check_and_unlock(
        {
            "sessions": context.user_stats.get_session_count(),
            "tasks_completed": context.entries.get_task_stats()["completed_tasks"],
            "streak": context.entries.calculate_streak(),
            "session_hour": None,
        }
    )
    achievements_view(
        context.show_header,
        context.achievements.get_progress(),
        context.user_stats.get_stats(),
        context.config["timezone"],
    )
    unlocked_view(newly_unlocked)
