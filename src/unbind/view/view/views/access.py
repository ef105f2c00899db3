# SPDX-License-Identifier: MIT

from typing import Optional

import pendulum
from rich import box
from rich.console import Console
from rich.table import Table

from unbind.model.access import SessionAccess
from unbind.model.profile import Profile
from unbind.service.plans import format_price, get_remaining_trial_days, get_session_limits
from unbind.view.view.views.header import header


def access_view(
    show_header: bool,
    access: SessionAccess,
    profile: Optional[Profile],
    now: pendulum.DateTime,
) -> None:
    header(show_header, "access")

    is_premium = profile is not None and profile["is_premium"]
    trial_start_date = profile["trial_start_date"] if profile is not None else None
    limits = get_session_limits(is_premium, access["is_in_trial"])

    access_table = Table(box=box.SIMPLE)
    access_table.add_column("property")
    access_table.add_column("value")

    access_table.add_row("plan", limits["plan_name"])
    access_table.add_row(
        "can record",
        "[green]yes[/green]" if access["can_record"] else "[red]no[/red]",
    )
    access_table.add_row(
        "sessions today", f"{access['sessions_today']}/{access['max_sessions']}"
    )
    if not is_premium and trial_start_date is not None:
        access_table.add_row(
            "trial days left", str(get_remaining_trial_days(trial_start_date, now))
        )

    console = Console()
    console.print(access_table)

    if access["trial_expired"]:
        console.print(" [red]Your free trial has expired. Subscribe to continue.[/red]")
        for plan in ("monthly", "yearly"):
            price = format_price(plan)
            badge = f" [bold]{price['badge']}[/bold]" if price["badge"] else ""
            console.print(f"  {plan}: {price['main_price']} ({price['subtext']}){badge}")
