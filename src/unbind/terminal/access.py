# SPDX-License-Identifier: MIT

from typing import Annotated

import typer
from rich.console import Console

from unbind.errors import ConfigurationError
from unbind.terminal.custom_typer import AliasedTyperGroup
from unbind.terminal.util import app_context, handle_errors
from unbind.view.view.views import access as access_report

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


@app.command("status, s")
@handle_errors
def status(ctx: typer.Context) -> None:
    """Show the plan, trial and today's session count."""
    context = app_context(ctx)
    user_id = context.current_user_id()

    access = context.access_gate.can_record_session(user_id)
    profile = context.profiles.get_profile(user_id)
    access_report.access_view(context.show_header, access, profile, context.clock())


@app.command("premium, p")
@handle_errors
def premium(
    ctx: typer.Context,
    enabled: Annotated[
        bool, typer.Option("--on/--off", help="grant or revoke premium")
    ] = True,
) -> None:
    """Grant or revoke premium for the local user."""
    context = app_context(ctx)
    if context.local_profiles is None:
        raise ConfigurationError(
            "premium is managed by the backend when one is configured"
        )

    user_id = context.current_user_id()
    context.local_profiles.set_premium(user_id, enabled)
    Console().print(f"premium {'enabled' if enabled else 'disabled'} for {user_id}")
