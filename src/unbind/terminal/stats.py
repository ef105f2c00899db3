# SPDX-License-Identifier: MIT

import typer

from unbind.terminal.util import app_context, handle_errors
from unbind.view.view.views.stats import stats_view


@handle_errors
def stats(ctx: typer.Context) -> None:
    """Show the streak, entry counts and task progress."""
    context = app_context(ctx)
    stats_view(
        context.show_header,
        context.entries.get_entry_count(),
        context.entries.get_favorite_count(),
        context.entries.calculate_streak(),
        context.entries.get_task_stats(),
    )
