# SPDX-License-Identifier: MIT

from typing import Annotated, Any, Optional

import typer
from rich.console import Console

from unbind.model.entry import JournalEntry
from unbind.terminal.custom_typer import AliasedTyperGroup
from unbind.terminal.util import (
    app_context,
    handle_errors,
    resolve_entry,
    resolve_task_id,
)
from unbind.view.view.views import entry as entry_report
from unbind.view.view.views import task as task_report

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)

console = Console()


def _require_entry(entry: Optional[JournalEntry], entry_id: str) -> JournalEntry:
    if entry is None:
        raise typer.BadParameter(f"entry {entry_id} or its task no longer exists")
    return entry


@app.command("pending, p")
@handle_errors
def pending(ctx: typer.Context) -> None:
    """List incomplete tasks across all entries."""
    context = app_context(ctx)
    task_report.pending_tasks_view(
        context.show_header,
        context.entries.get_all_pending_tasks(),
        context.config["timezone"],
    )


@app.command("toggle, t", no_args_is_help=True)
@handle_errors
def toggle(ctx: typer.Context, entry_id: str, task_id: str) -> None:
    """Mark a task complete, or incomplete again."""
    context = app_context(ctx)
    entry = resolve_entry(context, entry_id)
    resolved_task_id = resolve_task_id(entry, task_id)

    updated = _require_entry(
        context.entries.toggle_task_complete(entry["id"], resolved_task_id), entry_id
    )
    entry_report.single_entry_view(
        context.show_header, updated, context.config["timezone"]
    )


@app.command("add, a", no_args_is_help=True)
@handle_errors
def add(
    ctx: typer.Context,
    entry_id: str,
    title: str,
    duration: Annotated[
        int, typer.Option("--duration", "-d", min=0, help="estimated minutes")
    ] = 5,
) -> None:
    """Add a task to an entry."""
    context = app_context(ctx)
    entry = resolve_entry(context, entry_id)

    updated = _require_entry(
        context.entries.add_task_to_entry(
            entry["id"], {"title": title, "duration": duration}
        ),
        entry_id,
    )
    entry_report.single_entry_view(
        context.show_header, updated, context.config["timezone"]
    )


@app.command("remove, r", no_args_is_help=True)
@handle_errors
def remove(ctx: typer.Context, entry_id: str, task_id: str) -> None:
    """Remove a task from an entry."""
    context = app_context(ctx)
    entry = resolve_entry(context, entry_id)
    resolved_task_id = resolve_task_id(entry, task_id)

    updated = _require_entry(
        context.entries.remove_task_from_entry(entry["id"], resolved_task_id), entry_id
    )
    entry_report.single_entry_view(
        context.show_header, updated, context.config["timezone"]
    )


@app.command("modify, m", no_args_is_help=True)
@handle_errors
def modify(
    ctx: typer.Context,
    entry_id: str,
    task_id: str,
    title: Annotated[Optional[str], typer.Option("--title", "-t")] = None,
    duration: Annotated[
        Optional[int], typer.Option("--duration", "-d", min=0, help="estimated minutes")
    ] = None,
    completed: Annotated[
        Optional[bool], typer.Option("--completed/--not-completed")
    ] = None,
) -> None:
    """Change a task's title, duration or completion."""
    context = app_context(ctx)
    entry = resolve_entry(context, entry_id)
    resolved_task_id = resolve_task_id(entry, task_id)

    updates: dict[str, Any] = {}
    if title is not None:
        updates["title"] = title
    if duration is not None:
        updates["duration"] = duration
    if completed is not None:
        updates["completed"] = completed

    updated = _require_entry(
        context.entries.update_task(entry["id"], resolved_task_id, updates), entry_id
    )
    entry_report.single_entry_view(
        context.show_header, updated, context.config["timezone"]
    )
