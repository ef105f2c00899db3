# SPDX-License-Identifier: MIT

from typing import Annotated

import typer
from rich.console import Console

from unbind.service.weekly_summary import (
    calculate_weekly_summary,
    should_show_weekly_summary,
)
from unbind.terminal.custom_typer import AliasedTyperGroup
from unbind.terminal.util import app_context, handle_errors
from unbind.view.view.views import weekly_summary as weekly_summary_report

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


@app.command("weekly, w")
@handle_errors
def weekly(
    ctx: typer.Context,
    save: Annotated[
        bool, typer.Option("--save", "-s", help="keep this summary in the history")
    ] = False,
    mark_shown: Annotated[
        bool,
        typer.Option("--mark-shown", "-m", help="record that the summary was shown"),
    ] = False,
    only_when_due: Annotated[
        bool,
        typer.Option(
            "--only-when-due",
            "-d",
            help="print nothing unless a weekly summary is due",
        ),
    ] = False,
) -> None:
    """Summarize the last seven days of journaling."""
    context = app_context(ctx)
    now = context.clock()
    tz = context.config["timezone"]

    if only_when_due and not should_show_weekly_summary(
        context.weekly_summaries.get_last_shown(), now, tz
    ):
        return

    summary = calculate_weekly_summary(
        context.entries.get_entries(), context.entries.calculate_streak(), now
    )
    weekly_summary_report.weekly_summary_view(context.show_header, summary, tz)

    if save:
        context.weekly_summaries.save_summary(summary)
    if mark_shown or only_when_due:
        context.weekly_summaries.mark_shown()


@app.command("history, h")
@handle_errors
def history(ctx: typer.Context) -> None:
    """List saved weekly summaries."""
    context = app_context(ctx)
    summaries = context.weekly_summaries.get_summaries()
    if len(summaries) == 0:
        Console().print("no weekly summaries saved")
        return
    weekly_summary_report.weekly_summaries_view(
        context.show_header, summaries, context.config["timezone"]
    )
