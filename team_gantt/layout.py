"""One full render pass of the chart."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from functools import lru_cache
from typing import Optional, Sequence, Tuple

from .geometry import BarGeometry, TodayMarker, bar_geometry, today_marker
from .grid import GridLayout, build_grid
from .models import Task, ViewMode
from .timeline import Timeline, compute_timeline


@dataclass(frozen=True)
class GanttLayout:
    timeline: Timeline
    grid: GridLayout
    bars: Tuple[BarGeometry, ...]
    today_marker: TodayMarker


def render_gantt(
    tasks: Sequence[Task],
    view_mode: ViewMode = ViewMode.DAY,
    today: Optional[date] = None,
) -> GanttLayout:
    """Compute the window, grid, bars and today marker for ``tasks``.

    Results are cached on the (immutable) inputs, so repeated paints with an
    unchanged task list and zoom level reuse the previous layout.
    """
    return _render(tuple(tasks), ViewMode(view_mode), today or date.today())


@lru_cache(maxsize=32)
def _render(tasks: Tuple[Task, ...], view_mode: ViewMode, today: date) -> GanttLayout:
    timeline = compute_timeline(tasks, view_mode, today=today)
    return GanttLayout(
        timeline=timeline,
        grid=build_grid(timeline),
        bars=tuple(bar_geometry(task, timeline, today=today) for task in tasks),
        today_marker=today_marker(timeline, today),
    )
