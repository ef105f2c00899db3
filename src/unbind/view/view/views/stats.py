# SPDX-License-Identifier: MIT

from rich import box
from rich.console import Console
from rich.table import Table

from unbind.model.task import TaskStats
from unbind.view.view.views.header import header


def stats_view(
    show_header: bool,
    entry_count: int,
    favorite_count: int,
    streak: int,
    task_stats: TaskStats,
) -> None:
    header(show_header, "stats")

    stats_table = Table(box=box.SIMPLE)
    stats_table.add_column("stat")
    stats_table.add_column("value", justify="right")

    stats_table.add_row("streak", f"{streak} day{'s' if streak != 1 else ''}")
    stats_table.add_row("entries", str(entry_count))
    stats_table.add_row("favorites", str(favorite_count))
    stats_table.add_row("tasks", str(task_stats["total_tasks"]))
    stats_table.add_row("completed", str(task_stats["completed_tasks"]))
    stats_table.add_row("pending", str(task_stats["pending_tasks"]))
    stats_table.add_row("completed today", str(task_stats["completed_today"]))

    console = Console()
    console.print(stats_table)
