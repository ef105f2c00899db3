# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer
from rich.console import Console

from unbind.model.task import MicroTask
from unbind.template.task import get_task_template
from unbind.terminal.custom_typer import AliasedTyperGroup
from unbind.terminal.util import (
    app_context,
    handle_errors,
    optional_str,
    parse_task_option,
    resolve_entry,
)
from unbind.view.view.views import entry as entry_report

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)

console = Console()


@app.command("list, l")
@handle_errors
def list_entries(
    ctx: typer.Context,
    favorites: Annotated[
        bool, typer.Option("--favorites", "-f", help="only favorite entries")
    ] = False,
    limit: Annotated[Optional[int], typer.Option("--limit", "-n")] = None,
) -> None:
    """List journal entries, newest first."""
    context = app_context(ctx)
    if favorites:
        entries = context.entries.get_favorite_entries()
    else:
        entries = context.entries.get_entries()
    if limit is not None:
        entries = entries[:limit]

    entry_report.entries_view(
        context.show_header,
        "favorites" if favorites else "entries",
        entries,
        context.config["timezone"],
    )


@app.command("show, s", no_args_is_help=True)
@handle_errors
def show(ctx: typer.Context, id: str) -> None:
    """Show an entry and its tasks."""
    context = app_context(ctx)
    entry = resolve_entry(context, id)
    entry_report.single_entry_view(context.show_header, entry, context.config["timezone"])


@app.command("latest")
@handle_errors
def latest(ctx: typer.Context) -> None:
    """Show the most recent entry."""
    context = app_context(ctx)
    entry = context.entries.get_latest_entry()
    if entry is None:
        console.print("no entries yet")
        return
    entry_report.single_entry_view(context.show_header, entry, context.config["timezone"])


@app.command("add, a")
@handle_errors
def add(
    ctx: typer.Context,
    summary: Annotated[Optional[str], typer.Option("--summary", "-s")] = None,
    transcript: Annotated[Optional[str], typer.Option("--transcript", "-tr")] = None,
    blocker: Annotated[Optional[str], typer.Option("--blocker", "-b")] = None,
    mood: Annotated[Optional[str], typer.Option("--mood", "-m")] = None,
    tasks: Annotated[
        Optional[list[str]],
        typer.Option(
            "--task",
            "-t",
            help="valid input: title or title:minutes, accepts multiple task options",
        ),
    ] = None,
    favorite: Annotated[bool, typer.Option("--favorite", "-f")] = False,
) -> None:
    """Write an entry by hand, without a recording."""
    context = app_context(ctx)
    now = context.clock()

    entry_tasks: list[MicroTask] = []
    for task_option in tasks or []:
        title, duration = parse_task_option(task_option)
        entry_tasks.append(get_task_template({"title": title, "duration": duration}, now))

    entry = context.entries.save_entry(
        {
            "audio_uri": None,
            "transcript": optional_str(transcript),
            "summary": optional_str(summary),
            "blocker": optional_str(blocker),
            "mood": optional_str(mood),
            "tasks": entry_tasks,
            "is_favorite": favorite,
        }
    )
    entry_report.single_entry_view(context.show_header, entry, context.config["timezone"])


@app.command("delete, d", no_args_is_help=True)
@handle_errors
def delete(ctx: typer.Context, id: str) -> None:
    """Delete an entry and its tasks."""
    context = app_context(ctx)
    entry = resolve_entry(context, id)
    context.entries.delete_entry(entry["id"])
    console.print(f"deleted entry {entry['id']}")


@app.command("favorite, f", no_args_is_help=True)
@handle_errors
def favorite(ctx: typer.Context, id: str) -> None:
    """Toggle whether an entry is a favorite."""
    context = app_context(ctx)
    entry = resolve_entry(context, id)
    updated = context.entries.toggle_favorite(entry["id"])
    if updated is None:
        raise typer.BadParameter(f"entry {id} no longer exists")
    state = "added to" if updated.get("is_favorite", False) else "removed from"
    console.print(f"entry {entry['id']} {state} favorites")


@app.command("clear")
@handle_errors
def clear(
    ctx: typer.Context,
    yes: Annotated[bool, typer.Option("--yes", "-y", help="skip confirmation")] = False,
) -> None:
    """Delete every entry."""
    context = app_context(ctx)
    if not yes:
        count = context.entries.get_entry_count()
        typer.confirm(f"Delete all {count} entries?", abort=True)
    context.entries.clear_all_entries()
    console.print("cleared all entries")
