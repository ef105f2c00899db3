# SPDX-License-Identifier: MIT

import functools
from typing import Callable, Optional

import typer
from rich.console import Console

from unbind.context import AppContext
from unbind.errors import UnbindError
from unbind.model.entry import JournalEntry
from unbind.service.entry import get_tasks

error_console = Console(stderr=True)


def app_context(ctx: typer.Context) -> AppContext:
    context = ctx.find_object(AppContext)
    if context is None:
        raise RuntimeError("application context was not initialized")
    return context


def handle_errors[**P, T](func: Callable[P, T]) -> Callable[P, T]:
    """Report UnbindError to the user and exit non-zero instead of a traceback."""

    @functools.wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
        try:
            return func(*args, **kwargs)
        except UnbindError as e:
            error_console.print(f"[red]{e}[/red]")
            raise typer.Exit(1)

    return wrapper


def resolve_id(ids: list[str], id_or_prefix: str, kind: str) -> str:
    """Match an exact id, or else a unique id prefix."""
    if id_or_prefix in ids:
        return id_or_prefix
    matches = [id for id in ids if id.startswith(id_or_prefix)]
    if len(matches) == 1:
        return matches[0]
    if len(matches) == 0:
        raise typer.BadParameter(f"no {kind} matches '{id_or_prefix}'")
    raise typer.BadParameter(f"'{id_or_prefix}' matches {len(matches)} {kind}s")


def resolve_entry(context: AppContext, id_or_prefix: str) -> JournalEntry:
    entries = context.entries.get_entries()
    entry_id = resolve_id([entry["id"] for entry in entries], id_or_prefix, "entry")
    return [entry for entry in entries if entry["id"] == entry_id][0]


def resolve_task_id(entry: JournalEntry, id_or_prefix: str) -> str:
    return resolve_id([task["id"] for task in get_tasks(entry)], id_or_prefix, "task")


def parse_task_option(value: str) -> tuple[str, int]:
    """Parse 'title' or 'title:minutes' into a title and a duration."""
    title, separator, minutes = value.rpartition(":")
    if separator == "" or not minutes.strip().isdigit():
        return value.strip(), 0
    return title.strip(), int(minutes)


def optional_str(value: Optional[str]) -> Optional[str]:
    if value is None or value.strip() == "":
        return None
    return value
