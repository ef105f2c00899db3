# SPDX-License-Identifier: MIT

from typing import Iterable

from rich import box
from rich.console import Console
from rich.table import Table

from unbind.model.task import PendingTask
from unbind.time import datetime_to_display_date_str
from unbind.view.view.util import format_minutes, short_id
from unbind.view.view.views.header import header


def pending_tasks_view(
    show_header: bool,
    pending_tasks: Iterable[PendingTask],
    tz: str = "local",
) -> None:
    header(show_header, "pending tasks")

    tasks_table = Table(box=box.SIMPLE)
    tasks_table.add_column("entry")
    tasks_table.add_column("task")
    tasks_table.add_column("entry date")
    tasks_table.add_column("title")
    tasks_table.add_column("duration")

    total_minutes = 0
    for pending in pending_tasks:
        task = pending["task"]
        total_minutes += task["duration"]
        tasks_table.add_row(
            short_id(pending["entry_id"]),
            short_id(task["id"]),
            datetime_to_display_date_str(pending["entry_date"], tz),
            task["title"],
            format_minutes(task["duration"]),
        )

    console = Console()
    console.print(tasks_table)
    console.print(f" [bold]total:[/bold] {format_minutes(total_minutes)}")
