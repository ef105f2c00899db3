# SPDX-License-Identifier: MIT

"""
Plan configuration and limits.

Trial only, no freemium tier:

- trial: 3 days from first use, 10 sessions per day
- premium: 10 sessions per day, billed monthly or yearly

Keep these values in sync with the backend, which enforces the same limits.
"""

from typing import Literal, Optional, TypedDict

import pendulum

from unbind.model.access import SessionLimits
from unbind.time import whole_days_since


class TrialPlan(TypedDict):
    id: str
    name: str
    duration_days: int
    sessions_per_day: int
    max_total_sessions: int


class PremiumPlan(TypedDict):
    id: str
    name: str
    sessions_per_day: int
    sessions_per_month: int
    price_monthly: float
    price_yearly: float
    price_per_month_yearly: float
    yearly_savings_percent: int
    trial_days: int


class PriceDisplay(TypedDict):
    main_price: str
    subtext: str
    badge: Optional[str]


TRIAL: TrialPlan = {
    "id": "trial",
    "name": "Free Trial",
    "duration_days": 3,
    "sessions_per_day": 10,
    "max_total_sessions": 30,
}

PREMIUM: PremiumPlan = {
    "id": "premium",
    "name": "Premium",
    "sessions_per_day": 10,
    "sessions_per_month": 300,
    "price_monthly": 19.99,
    "price_yearly": 99.99,
    "price_per_month_yearly": 8.33,
    "yearly_savings_percent": 58,
    "trial_days": 3,
}


def is_in_trial_period(
    trial_start_date: Optional[pendulum.DateTime], now: pendulum.DateTime
) -> bool:
    if trial_start_date is None:
        return False
    return whole_days_since(trial_start_date, now) < TRIAL["duration_days"]


def get_remaining_trial_days(
    trial_start_date: Optional[pendulum.DateTime], now: pendulum.DateTime
) -> int:
    if trial_start_date is None:
        return TRIAL["duration_days"]
    return max(0, TRIAL["duration_days"] - whole_days_since(trial_start_date, now))


def get_session_limits(is_premium: bool, is_in_trial: bool) -> SessionLimits:
    if is_premium:
        return {
            "sessions_per_day": PREMIUM["sessions_per_day"],
            "plan_name": "Premium",
            "has_access": True,
        }

    if is_in_trial:
        return {
            "sessions_per_day": TRIAL["sessions_per_day"],
            "plan_name": "Trial",
            "has_access": True,
        }

    return {
        "sessions_per_day": 0,
        "plan_name": "Expired",
        "has_access": False,
    }


def has_reached_daily_limit(
    used_today: int, is_premium: bool, is_in_trial: bool
) -> bool:
    limits = get_session_limits(is_premium, is_in_trial)
    if not limits["has_access"]:
        return True
    return used_today >= limits["sessions_per_day"]


def format_price(plan: Literal["monthly", "yearly"]) -> PriceDisplay:
    if plan == "yearly":
        return {
            "main_price": f"${PREMIUM['price_per_month_yearly']:.2f}",
            "subtext": f"${PREMIUM['price_yearly']} billed annually",
            "badge": f"SAVE {PREMIUM['yearly_savings_percent']}%",
        }

    return {
        "main_price": f"${PREMIUM['price_monthly']:.2f}",
        "subtext": "Billed monthly",
        "badge": None,
    }
