"""Day-granular date arithmetic on immutable ``datetime.date`` values."""
from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta
from typing import List, Optional, Union

DateLike = Union[date, datetime, str]


def to_day(value: Optional[DateLike]) -> Optional[date]:
    """Normalize a date, datetime or ISO string to a plain ``date``."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = value.strip()
    if not text:
        return None
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        return None


def add_days(day: date, days: int) -> date:
    return day + timedelta(days=days)


def add_months(day: date, months: int) -> date:
    """Shift by whole calendar months, clamping to the target month's length."""
    index = day.month - 1 + months
    year = day.year + index // 12
    month = index % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return day.replace(year=year, month=month, day=min(day.day, last_day))


def start_of_week(day: date) -> date:
    """Monday of the week containing ``day`` (Sunday closes the week)."""
    return day - timedelta(days=day.weekday())


def start_of_month(day: date) -> date:
    return day.replace(day=1)


def days_between(start: date, end: date) -> int:
    """Signed whole days from ``start`` to ``end``."""
    return (end - start).days


def iso_week_number(day: date) -> int:
    return day.isocalendar()[1]


def date_span(start: date, days: int) -> List[date]:
    """Every day from ``start`` through ``start + days`` inclusive."""
    return [start + timedelta(days=offset) for offset in range(days + 1)]
