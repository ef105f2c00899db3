# SPDX-License-Identifier: MIT

from rich import box
from rich.console import Console
from rich.table import Table

from unbind.model.weekly_summary import WeeklySummary
from unbind.time import datetime_to_display_date_str
from unbind.view.view.util import format_minutes
from unbind.view.view.views.header import header


def weekly_summary_view(
    show_header: bool, summary: WeeklySummary, tz: str = "local"
) -> None:
    header(show_header, "weekly summary")

    summary_table = Table(box=box.SIMPLE)
    summary_table.add_column("stat")
    summary_table.add_column("value", justify="right")

    summary_table.add_row(
        "week",
        f"{datetime_to_display_date_str(summary['week_start'], tz)} - "
        f"{datetime_to_display_date_str(summary['week_end'], tz)}",
    )
    summary_table.add_row("sessions", str(summary["sessions"]))
    summary_table.add_row("previous week", str(summary["previous_week_sessions"]))
    summary_table.add_row("change", f"{summary['improvement']:+d}%")
    summary_table.add_row(
        "tasks completed", f"{summary['tasks_completed']}/{summary['total_tasks']}"
    )
    summary_table.add_row("time saved", format_minutes(summary["minutes_saved"]))
    summary_table.add_row("streak", str(summary["streak"]))
    summary_table.add_row("top blocker", summary["top_blocker"] or "")

    console = Console()
    console.print(summary_table)
    for insight in summary["insights"]:
        console.print(f" • {insight}")


def weekly_summaries_view(
    show_header: bool, summaries: list[WeeklySummary], tz: str = "local"
) -> None:
    header(show_header, "weekly summaries")

    summaries_table = Table(box=box.SIMPLE)
    summaries_table.add_column("week ending")
    summaries_table.add_column("sessions", justify="right")
    summaries_table.add_column("tasks", justify="right")
    summaries_table.add_column("streak", justify="right")
    summaries_table.add_column("change", justify="right")

    for summary in reversed(summaries):
        summaries_table.add_row(
            datetime_to_display_date_str(summary["week_end"], tz),
            str(summary["sessions"]),
            f"{summary['tasks_completed']}/{summary['total_tasks']}",
            str(summary["streak"]),
            f"{summary['improvement']:+d}%",
        )

    console = Console()
    console.print(summaries_table)
