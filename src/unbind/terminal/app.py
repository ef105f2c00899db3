# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer

from unbind.context import AppContext
from unbind.initialize import initialize
from unbind.logger import configure_logging
from unbind.terminal import access, configuration, entry, summary, task
from unbind.terminal.achievement import achievements
from unbind.terminal.custom_typer import OrderedAliasedTyperGroup
from unbind.terminal.record import record
from unbind.terminal.stats import stats

app = typer.Typer(
    cls=OrderedAliasedTyperGroup,
    help="Unbind - Voice journaling and micro-tasks in the CLI",
    no_args_is_help=True,
)
app.command(name="record, r")(record)
app.add_typer(entry.app, name="entry, e", help="Journal entries")
app.add_typer(task.app, name="task, t", help="Micro-tasks within entries")
app.command(name="stats, s")(stats)
app.command(name="achievements, ac")(achievements)
app.add_typer(summary.app, name="summary, su", help="Weekly summaries")
app.add_typer(access.app, name="access, a", help="Trial, plan and daily sessions")
app.add_typer(configuration.app, name="config, c", help="Configuration")


@app.callback()
def main_callback(
    ctx: typer.Context,
    no_header: Annotated[
        bool,
        typer.Option(
            "--no-header",
            "-nh",
            help="Suppress header output in reports",
        ),
    ] = False,
    log_level: Annotated[
        Optional[str],
        typer.Option(
            "--log-level",
            help="Override the configured log level for this run",
        ),
    ] = None,
) -> None:
    """
    Unbind - Voice journaling and micro-tasks in the CLI

    Global options that apply to all commands.
    """
    if ctx.obj is None:
        ctx.obj = initialize()
    context: AppContext = ctx.obj
    ctx.call_on_close(context.close)

    if no_header:
        context.show_header = False
    if log_level is not None:
        configure_logging(log_level)


def run() -> None:
    app()
