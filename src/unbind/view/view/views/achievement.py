# SPDX-License-Identifier: MIT

from rich import box
from rich.console import Console
from rich.table import Table

from unbind.model.achievement import Achievement, AchievementProgress
from unbind.model.user_stats import UserStats
from unbind.service.achievement import (
    calculate_level,
    get_locked_achievements,
    get_unlocked_achievements,
)
from unbind.time import datetime_to_display_date_str
from unbind.view.view.views.header import header


def achievements_view(
    show_header: bool,
    progress: AchievementProgress,
    user_stats: UserStats,
    tz: str,
) -> None:
    header(show_header, "achievements")

    level = calculate_level(progress["total_xp"])
    console = Console()
    console.print(
        f" level {level['level']} [bold]{level['name']}[/bold]"
        f", {progress['total_xp']} xp ({round(level['progress'] * 100)}% to next)"
    )
    first_session_date = user_stats["first_session_date"]
    if first_session_date is not None:
        console.print(
            f" {user_stats['session_count']} sessions"
            f" since {datetime_to_display_date_str(first_session_date, tz)}"
        )

    achievement_table = Table(box=box.SIMPLE)
    achievement_table.add_column("", width=1)
    achievement_table.add_column("name")
    achievement_table.add_column("description")
    achievement_table.add_column("xp", justify="right")

    unlocked_ids = progress["unlocked_achievements"]
    for achievement in get_unlocked_achievements(unlocked_ids):
        achievement_table.add_row(
            "X", achievement["name"], achievement["description"], str(achievement["xp"])
        )
    for achievement in get_locked_achievements(unlocked_ids):
        achievement_table.add_row(
            " ",
            f"[dim]{achievement['name']}[/dim]",
            f"[dim]{achievement['description']}[/dim]",
            f"[dim]{achievement['xp']}[/dim]",
        )

    console.print(achievement_table)


def unlocked_view(achievements: list[Achievement]) -> None:
    console = Console()
    for achievement in achievements:
        console.print(
            f" [green]achievement unlocked:[/green] [bold]{achievement['name']}[/bold]"
            f" ({achievement['description']}, +{achievement['xp']} xp)"
        )
