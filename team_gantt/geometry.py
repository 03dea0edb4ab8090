"""Pixel geometry for task bars and the today marker."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from . import config
from .dates import add_days, days_between, to_day
from .models import Task, ViewMode, effective_date_range
from .timeline import Timeline


@dataclass(frozen=True)
class BarGeometry:
    task_id: str
    left: float
    width: float
    start: date
    end: date
    duration_days: int


@dataclass(frozen=True)
class TodayMarker:
    visible: bool
    left: float = 0


def position_offset(timeline: Timeline, day: date) -> float:
    """Horizontal offset of ``day`` relative to the timeline's first day."""
    return days_between(timeline.min_date, day) * timeline.day_width


def duration_days(start: date, end: Optional[date]) -> int:
    """Number of day cells a bar spans, end date included."""
    if end is None:
        end = add_days(start, config.DEFAULT_END_OFFSET_DAYS)
    return max(1, days_between(start, end)) + 1


def bar_geometry(task: Task, timeline: Timeline, today: Optional[date] = None) -> BarGeometry:
    start, end = effective_date_range(task)
    if start is None:
        start = to_day(task.created_at) or today or date.today()
    if end is None:
        end = add_days(start, config.DEFAULT_END_OFFSET_DAYS)
    days = duration_days(start, end)
    return BarGeometry(
        task_id=task.id,
        left=position_offset(timeline, start),
        width=max(config.MIN_BAR_WIDTH, days * timeline.day_width),
        start=start,
        end=end,
        duration_days=days,
    )


def today_marker(timeline: Timeline, today: Optional[date] = None) -> TodayMarker:
    """Vertical "today" line, drawn only at day zoom."""
    if timeline.view_mode is not ViewMode.DAY:
        return TodayMarker(visible=False)
    return TodayMarker(visible=True, left=position_offset(timeline, today or date.today()))


def bar_caption(task: Task, width: float) -> str:
    if width <= config.BAR_TITLE_MIN_WIDTH:
        return ""
    if width > config.BAR_PROGRESS_MIN_WIDTH:
        return f"{task.title}  {task.progress}%"
    return task.title
