"""
Recurring Task Scheduling.

Computes the due date of the next instance of a recurring task. Dates are
stepped in the agency's local timezone (``application.timezone``) on whole calendar
days, so DST shifts never move the result onto a neighbouring day.
Month and year steps clamp to the last day of the target month, and the
new instance is due at 23:59:59 local time, stored as naive UTC.
"""

import calendar
from datetime import date, datetime, time, timedelta, timezone
from zoneinfo import ZoneInfo

from agencyhub.backend.core.config import get_app_config

PATTERNS = ("daily", "weekly", "monthly", "yearly")

_END_OF_DAY = time(23, 59, 59)


def _local_zone() -> ZoneInfo:
    return ZoneInfo(get_app_config().application.timezone)


def _add_months(day: date, months: int) -> date:
    month_index = day.month - 1 + months
    year = day.year + month_index // 12
    month = month_index % 12 + 1
    last = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last))


def step_date(day: date, pattern: str, interval: int) -> date:
    """Advance a calendar date by ``interval`` units of ``pattern``."""
    if interval < 1:
        raise ValueError("interval must be at least 1")
    if pattern == "daily":
        return day + timedelta(days=interval)
    if pattern == "weekly":
        return day + timedelta(weeks=interval)
    if pattern == "monthly":
        return _add_months(day, interval)
    if pattern == "yearly":
        return _add_months(day, 12 * interval)
    raise ValueError(f"Unknown recurring pattern: {pattern}")


def next_due_date(
    base: datetime,
    pattern: str,
    interval: int = 1,
    zone: ZoneInfo | None = None,
) -> datetime:
    """
    Due date of the next occurrence.

    Args:
        base: Naive UTC datetime the step starts from (previous due date or
            completion time)
        pattern: daily, weekly, monthly or yearly
        interval: Number of pattern units to step
        zone: Local timezone; defaults to the configured application zone

    Returns:
        Naive UTC datetime at 23:59:59 local time on the computed day
    """
    zone = zone or _local_zone()
    local_day = local_date(base, zone)
    target_day = step_date(local_day, pattern, interval)
    due_local = datetime.combine(target_day, _END_OF_DAY, tzinfo=zone)
    return due_local.astimezone(timezone.utc).replace(tzinfo=None)


def local_date(value: datetime, zone: ZoneInfo | None = None) -> date:
    """Calendar day of a naive UTC datetime in the local timezone."""
    zone = zone or _local_zone()
    return value.replace(tzinfo=timezone.utc).astimezone(zone).date()
