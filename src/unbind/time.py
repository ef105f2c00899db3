# SPDX-License-Identifier: MIT

import datetime
import math
from typing import Callable, Optional, Union

import pendulum

type Clock = Callable[[], pendulum.DateTime]

SECONDS_PER_DAY = 60 * 60 * 24


def now_utc() -> pendulum.DateTime:
    return pendulum.now("UTC")


def datetime_to_iso_str(datetime: pendulum.DateTime) -> str:
    return datetime.isoformat()


def datetime_to_iso_str_optional(
    datetime: Optional[pendulum.DateTime],
) -> Optional[str]:
    if datetime is None:
        return None
    return datetime_to_iso_str(datetime)


def datetime_from_str(datetime: str) -> pendulum.DateTime:
    parsed = pendulum.parse(datetime)
    if not isinstance(parsed, pendulum.DateTime):
        raise ValueError(f"not a date and time: {datetime!r}")
    return parsed


def datetime_from_value(value: Union[str, datetime.datetime]) -> pendulum.DateTime:
    """Accept either an ISO string or a datetime that YAML already decoded."""
    if isinstance(value, datetime.datetime):
        return pendulum.instance(value)
    if isinstance(value, str):
        return datetime_from_str(value)
    raise TypeError(f"expected an ISO-8601 string, got {type(value).__name__}")


def datetime_from_value_optional(
    value: Optional[Union[str, datetime.datetime]],
) -> Optional[pendulum.DateTime]:
    if value is None:
        return None
    return datetime_from_value(value)


def datetime_to_date_str(datetime: pendulum.DateTime, tz: str = "local") -> str:
    """Convert a pendulum.DateTime to a 'YYYY-MM-DD' date string in the given timezone."""
    return datetime.in_tz(tz).format("YYYY-MM-DD")


def datetime_to_date(datetime: pendulum.DateTime, tz: str = "local") -> pendulum.Date:
    """The calendar day containing datetime, in the given timezone."""
    return datetime.in_tz(tz).date()


def whole_days_since(start: pendulum.DateTime, now: pendulum.DateTime) -> int:
    """Number of full 24 hour periods elapsed from start to now, floored."""
    return math.floor((now - start).total_seconds() / SECONDS_PER_DAY)


def datetime_to_display_date_str(datetime: pendulum.DateTime, tz: str = "local") -> str:
    return datetime.in_tz(tz).format("YYYY-MM-DD ddd")


def datetime_to_display_datetime_str(
    datetime: pendulum.DateTime, tz: str = "local"
) -> str:
    return datetime.in_tz(tz).format("MMM-DD ddd HH:mm")


def datetime_to_display_datetime_str_optional(
    datetime: Optional[pendulum.DateTime], tz: str = "local"
) -> Optional[str]:
    if datetime is None:
        return None
    return datetime_to_display_datetime_str(datetime, tz)
