"""Calendar helpers shared by the schedule generator and the planner."""

from __future__ import annotations

import calendar
from datetime import date, datetime, time

from django.utils import timezone

from vaxi_backend.vaccines.exceptions import ValidationError

DAYS_PER_MONTH = 30
DAYS_PER_YEAR = 365
AVERAGE_DAYS_PER_MONTH = 30.44


def today() -> date:
    return timezone.localdate()


def add_months(value: date, months: int) -> date:
    """Shift ``value`` by calendar months, clamping to the last day of the month."""
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)


def add_years(value: date, years: int) -> date:
    """Shift ``value`` by calendar years; Feb 29 becomes Feb 28 in non-leap years."""
    return add_months(value, years * 12)


def days_until(target: date, current: date) -> int:
    """Whole days from ``current`` to ``target`` (negative when ``target`` is past)."""
    return (target - current).days


def age_in_months(date_of_birth: date, current: date) -> int:
    """Approximate age in completed months (average month length)."""
    return int((current - date_of_birth).days // AVERAGE_DAYS_PER_MONTH)


def parse_date(value, field: str = 'date') -> date | None:
    """Accept a ``date`` or an ISO ``YYYY-MM-DD`` string; ``None``/'' pass through."""
    if value in (None, ''):
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value))
    except ValueError:
        raise ValidationError('Invalid date format. Use YYYY-MM-DD', field=field)


def parse_time(value, field: str = 'time') -> time | None:
    """Accept a ``time`` or an ``HH:MM`` / ``HH:MM:SS`` string."""
    if value in (None, ''):
        return None
    if isinstance(value, time):
        return value
    for fmt in ('%H:%M:%S', '%H:%M'):
        try:
            return datetime.strptime(str(value), fmt).time()
        except ValueError:
            continue
    raise ValidationError('Invalid time format. Use HH:MM or HH:MM:SS', field=field)
