"""Header cells and background grid lines for a computed timeline."""
from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date
from typing import List, Sequence, Tuple

from .timeline import Timeline

_WEEKDAY_INITIALS = "MTWTFSS"


@dataclass(frozen=True)
class HeaderCell:
    label: str
    sub_label: str
    left: float
    width: float
    date: date
    weekend: bool = False


@dataclass(frozen=True)
class GridLayout:
    cells: Tuple[HeaderCell, ...]
    lines: Tuple[float, ...]
    width: float


def build_grid(timeline: Timeline) -> GridLayout:
    """Project the timeline onto header cells and vertical grid lines.

    Boundaries come from cumulative day counts, so rounding never drifts and
    the last line always lands on ``total_days * day_width``.
    """
    if timeline.grouped_headers:
        blocks = [header.days for header in timeline.grouped_headers]
        lines = _boundaries(blocks, timeline.day_width)
        cells = [
            HeaderCell(
                label=header.label,
                sub_label=header.sub_label,
                left=left,
                width=right - left,
                date=header.date,
            )
            for header, left, right in zip(timeline.grouped_headers, lines, lines[1:])
        ]
    else:
        lines = _boundaries([1] * timeline.total_days, timeline.day_width)
        cells = [_day_cell(day, index, timeline.day_width) for index, day in enumerate(timeline.dates)]
    return GridLayout(cells=tuple(cells), lines=tuple(lines), width=lines[-1])


def _boundaries(block_days: Sequence[int], day_width: float) -> List[float]:
    positions = [_snap_px(0, day_width)]
    elapsed = 0
    for days in block_days:
        elapsed += days
        positions.append(_snap_px(elapsed, day_width))
    return positions


def _snap_px(days: int, day_width: float) -> float:
    value = days * day_width
    return value if isinstance(value, int) else round(value)


def _day_cell(day: date, index: int, day_width: float) -> HeaderCell:
    left = _snap_px(index, day_width)
    return HeaderCell(
        label=str(day.day),
        sub_label=f"{calendar.month_abbr[day.month]} {_WEEKDAY_INITIALS[day.weekday()]}",
        left=left,
        width=_snap_px(index + 1, day_width) - left,
        date=day,
        weekend=day.weekday() >= 5,
    )
