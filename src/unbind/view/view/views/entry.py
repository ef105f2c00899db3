# SPDX-License-Identifier: MIT

from rich import box
from rich.console import Console
from rich.table import Table

from unbind.model.entry import JournalEntry
from unbind.service.entry import get_tasks
from unbind.time import (
    datetime_to_display_datetime_str,
    datetime_to_display_datetime_str_optional,
)
from unbind.view.view.util import (
    format_minutes,
    format_optional_text,
    short_id,
    task_state,
)
from unbind.view.view.views.header import header


def entries_view(
    show_header: bool,
    report_name: str,
    entries: list[JournalEntry],
    tz: str = "local",
) -> None:
    """Display list of entries in a table, newest first."""
    header(show_header, report_name)

    entries_table = Table(box=box.SIMPLE)
    entries_table.add_column("id")
    entries_table.add_column("date")
    entries_table.add_column("fav")
    entries_table.add_column("mood")
    entries_table.add_column("summary", overflow="ellipsis")
    entries_table.add_column("tasks")

    for entry in entries:
        tasks = get_tasks(entry)
        completed = len([task for task in tasks if task["completed"]])
        entries_table.add_row(
            short_id(entry["id"]),
            datetime_to_display_datetime_str(entry["date"], tz),
            "*" if entry.get("is_favorite", False) else "",
            format_optional_text(entry["mood"]),
            format_optional_text(entry["summary"], 60),
            f"{completed}/{len(tasks)}" if len(tasks) > 0 else "",
        )

    console = Console()
    console.print(entries_table)


def single_entry_view(show_header: bool, entry: JournalEntry, tz: str = "local") -> None:
    """Display detailed view of a single entry and its tasks."""
    header(show_header, "entry")

    entry_table = Table(box=box.SIMPLE)
    entry_table.add_column("property")
    entry_table.add_column("value")

    entry_table.add_row("id", entry["id"])
    entry_table.add_row("date", datetime_to_display_datetime_str(entry["date"], tz))
    entry_table.add_row("favorite", "yes" if entry.get("is_favorite", False) else "no")
    entry_table.add_row("mood", format_optional_text(entry["mood"]))
    entry_table.add_row("summary", format_optional_text(entry["summary"]))
    entry_table.add_row("blocker", format_optional_text(entry["blocker"]))
    entry_table.add_row("transcript", format_optional_text(entry["transcript"]))
    entry_table.add_row("audio", format_optional_text(entry["audio_uri"]))
    if "insights" in entry:
        entry_table.add_row("insights", "\n".join(entry["insights"]))
    if "actions" in entry:
        entry_table.add_row("actions", "\n".join(entry["actions"]))

    tasks_table = Table(box=box.SIMPLE)
    tasks_table.add_column("id")
    tasks_table.add_column("")
    tasks_table.add_column("title")
    tasks_table.add_column("duration")
    tasks_table.add_column("completed")
    for task in get_tasks(entry):
        tasks_table.add_row(
            short_id(task["id"]),
            task_state(task),
            task["title"],
            format_minutes(task["duration"]),
            datetime_to_display_datetime_str_optional(task["completed_at"], tz) or "",
        )

    console = Console()
    console.print(entry_table)
    console.print(tasks_table)
