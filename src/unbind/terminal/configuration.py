# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from unbind import configuration
from unbind.configuration import Configuration
from unbind.terminal.custom_typer import AliasedTyperGroup
from unbind.terminal.util import app_context

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


def _config_table(config: Configuration, title: Optional[str] = None) -> Table:
    table = Table(title=title)
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="magenta")

    table.add_row(
        "show_header", "✓ Enabled" if config["show_header"] else "✗ Disabled"
    )
    table.add_row("timezone", config["timezone"])
    table.add_row("session_day_timezone", config["session_day_timezone"])
    table.add_row("language", config["language"])
    table.add_row("log_level", config["log_level"])
    table.add_row("backend_url", config["backend_url"] or "None (local only)")
    table.add_row(
        "backend_anon_key", "set" if config["backend_anon_key"] else "None"
    )
    table.add_row("request_timeout", f"{config['request_timeout']}s")
    table.add_row(
        "data_path",
        config["data_path"] if config["data_path"] else "None (platform default)",
    )
    table.add_row("user_id", config.get("user_id") or "None")
    return table


@app.command("view, v")
def view(ctx: typer.Context) -> None:
    """Display current configuration settings."""
    context = app_context(ctx)
    config = context.config_repo.get_config()

    console = Console()
    console.print(_config_table(config))
    console.print(f"\nconfig file: {configuration.APP_CONFIG_PATH}")
    console.print(f"data directory: {context.store.data_path}")


@app.command("set, s")
def set(
    ctx: typer.Context,
    show_header: Annotated[
        Optional[bool],
        typer.Option(
            "--show-header/--no-show-header",
            help="Show or hide the header above reports",
        ),
    ] = None,
    timezone: Annotated[
        Optional[str],
        typer.Option(
            "--timezone",
            help="Timezone for streaks and display, 'local' for the system timezone",
        ),
    ] = None,
    session_day_timezone: Annotated[
        Optional[str],
        typer.Option(
            "--session-day-timezone",
            help="Timezone that decides when the daily session count resets",
        ),
    ] = None,
    language: Annotated[
        Optional[str],
        typer.Option("--language", help="Default language for recordings"),
    ] = None,
    log_level: Annotated[
        Optional[str],
        typer.Option("--log-level", help="DEBUG, INFO, WARNING or ERROR"),
    ] = None,
    backend_url: Annotated[
        Optional[str],
        typer.Option("--backend-url", help="Base URL of the analysis backend"),
    ] = None,
    remove_backend_url: Annotated[
        bool, typer.Option("--remove-backend-url", help="Work locally only")
    ] = False,
    backend_anon_key: Annotated[
        Optional[str],
        typer.Option("--backend-anon-key", help="Public key of the backend"),
    ] = None,
    remove_backend_anon_key: Annotated[
        bool, typer.Option("--remove-backend-anon-key")
    ] = False,
    request_timeout: Annotated[
        Optional[int],
        typer.Option("--request-timeout", min=1, help="Seconds to wait for the backend"),
    ] = None,
    data_path: Annotated[
        Optional[str],
        typer.Option(
            "--data-path",
            help="Directory path for storing data files",
        ),
    ] = None,
    remove_data_path: Annotated[
        bool,
        typer.Option(
            "--remove-data-path",
            help="Reset data path to the platform default",
        ),
    ] = False,
) -> None:
    """
    Update configuration settings.
    """
    context = app_context(ctx)
    context.config_repo.update_config(
        data_path=data_path,
        remove_data_path=remove_data_path,
        show_header=show_header,
        timezone=timezone,
        session_day_timezone=session_day_timezone,
        language=language,
        log_level=log_level,
        backend_url=backend_url,
        remove_backend_url=remove_backend_url,
        backend_anon_key=backend_anon_key,
        remove_backend_anon_key=remove_backend_anon_key,
        request_timeout=request_timeout,
    )
    context.config_repo.flush()

    console = Console()
    console.print("[green]Configuration updated successfully![/green]\n")
    console.print(
        _config_table(context.config_repo.get_config(), title="Updated Configuration")
    )
