# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console

from unbind.service.recording import record_session, track_session
from unbind.terminal.util import app_context, handle_errors
from unbind.view.view.views import entry as entry_report
from unbind.view.view.views.achievement import unlocked_view


@handle_errors
def record(
    ctx: typer.Context,
    audio_path: Annotated[
        Path,
        typer.Argument(exists=True, dir_okay=False, readable=True, help="audio file"),
    ],
    language: Annotated[
        Optional[str],
        typer.Option("--language", "-l", help="language of the recording"),
    ] = None,
) -> None:
    """Analyze a recorded session and add it to the journal."""
    context = app_context(ctx)
    analysis = context.require_analysis()

    with Console(stderr=True).status("analyzing recording..."):
        entry = record_session(
            context.entries,
            context.access_gate,
            analysis,
            context.current_user_id(),
            audio_path,
            language if language is not None else context.config["language"],
        )
    newly_unlocked = track_session(
        entry,
        context.entries,
        context.user_stats,
        context.achievements,
        context.config["timezone"],
    )

    entry_report.single_entry_view(
        context.show_header, entry, context.config["timezone"]
    )
    unlocked_view(newly_unlocked)
