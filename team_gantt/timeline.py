"""Visible date window and grouped header computation."""
from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date
from typing import List, Optional, Sequence, Tuple

from . import config
from .dates import (
    add_days,
    add_months,
    date_span,
    days_between,
    iso_week_number,
    start_of_month,
    start_of_week,
    to_day,
)
from .models import Task, ViewMode, effective_date_range


@dataclass(frozen=True)
class GroupedHeader:
    """A header cell spanning a week or a month block."""

    label: str
    sub_label: str
    width: float
    date: date
    days: int


@dataclass(frozen=True)
class Timeline:
    view_mode: ViewMode
    min_date: date
    total_days: int
    dates: Tuple[date, ...]
    grouped_headers: Tuple[GroupedHeader, ...]
    day_width: float

    @property
    def max_date(self) -> date:
        return add_days(self.min_date, self.total_days)


def resolve_task_range(task: Task, today: Optional[date] = None) -> Tuple[Optional[date], Optional[date]]:
    """Effective range with the display fallbacks applied.

    A missing start falls back to the creation date (then ``today`` when
    given); a missing end becomes start + 3 days.
    """
    start, end = effective_date_range(task)
    if start is None:
        start = to_day(task.created_at) or today
    if end is None and start is not None:
        end = add_days(start, config.DEFAULT_END_OFFSET_DAYS)
    return start, end


def compute_timeline(
    tasks: Sequence[Task],
    view_mode: ViewMode = ViewMode.DAY,
    today: Optional[date] = None,
) -> Timeline:
    """Derive the visible window and header blocks for ``tasks``."""
    view_mode = ViewMode(view_mode)
    today = today or date.today()
    view = config.VIEW_CONFIG[view_mode]

    if not tasks:
        min_date = add_days(today, -config.EMPTY_WINDOW_LOOKBACK_DAYS)
        return Timeline(
            view_mode=view_mode,
            min_date=min_date,
            total_days=config.EMPTY_WINDOW_DAYS,
            dates=tuple(date_span(min_date, config.EMPTY_WINDOW_DAYS)),
            grouped_headers=(),
            day_width=view.day_width,
        )

    lowest: Optional[date] = None
    highest: Optional[date] = None
    for task in tasks:
        start, end = resolve_task_range(task, today)
        if start is not None and (lowest is None or start < lowest):
            lowest = start
        if end is not None and (highest is None or end > highest):
            highest = end

    if lowest is None:
        lowest = today
    if highest is None:
        highest = add_days(lowest, config.FALLBACK_MAX_OFFSET_DAYS)

    min_date, max_date = _snap(lowest, highest, view_mode)
    total_days = max(1, days_between(min_date, max_date))

    if view_mode is ViewMode.WEEK:
        headers = _week_headers(min_date, total_days, view.day_width)
    elif view_mode is ViewMode.MONTH:
        headers = _month_headers(min_date, total_days, view.day_width)
    else:
        headers = []

    return Timeline(
        view_mode=view_mode,
        min_date=min_date,
        total_days=total_days,
        dates=tuple(date_span(min_date, total_days)),
        grouped_headers=tuple(headers),
        day_width=view.day_width,
    )


def _snap(lowest: date, highest: date, view_mode: ViewMode) -> Tuple[date, date]:
    """Apply the zoom level's grid snapping and buffers."""
    view = config.VIEW_CONFIG[view_mode]
    if view_mode is ViewMode.WEEK:
        min_date = start_of_week(lowest)
    elif view_mode is ViewMode.MONTH:
        min_date = start_of_month(lowest)
    else:
        min_date = add_days(lowest, -view.lookback_days)
    max_date = add_months(add_days(highest, view.lookahead_days), view.lookahead_months)
    return min_date, max_date


def _week_headers(min_date: date, total_days: int, day_width: float) -> List[GroupedHeader]:
    blocks: List[Tuple[date, int]] = []
    for offset in range(0, total_days, 7):
        remaining = total_days - offset
        if remaining < 7 and blocks:
            # trailing partial week joins the previous block
            block_start, block_days = blocks[-1]
            blocks[-1] = (block_start, block_days + remaining)
            break
        blocks.append((add_days(min_date, offset), min(7, remaining)))

    headers = []
    for block_start, block_days in blocks:
        block_end = add_days(block_start, block_days - 1)
        headers.append(
            GroupedHeader(
                label=f"Week {iso_week_number(block_start)}",
                sub_label=f"{block_start:%d/%m} - {block_end:%d/%m}",
                width=block_days * day_width,
                date=block_start,
                days=block_days,
            )
        )
    return headers


def _month_headers(min_date: date, total_days: int, day_width: float) -> List[GroupedHeader]:
    headers = []
    block_start = min_date
    block_days = 0
    for offset in range(total_days + 1):
        day = add_days(min_date, offset)
        if day.month != block_start.month or offset == total_days:
            headers.append(
                GroupedHeader(
                    label=month_label(block_start),
                    sub_label="",
                    width=block_days * day_width,
                    date=block_start,
                    days=block_days,
                )
            )
            block_start = day
            block_days = 0
        block_days += 1
    return headers


def month_label(day: date) -> str:
    return f"{calendar.month_name[day.month]} {day.year}"
