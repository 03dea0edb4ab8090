"""UI state for the chart view and the reducer that advances it."""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional, Union

from .models import ViewMode


@dataclass(frozen=True)
class GanttState:
    view_mode: ViewMode = ViewMode.DAY
    selected_task_id: Optional[str] = None
    detail_open: bool = False


@dataclass(frozen=True)
class SetViewMode:
    view_mode: ViewMode


@dataclass(frozen=True)
class SelectTask:
    task_id: str


@dataclass(frozen=True)
class CloseDetail:
    pass


Action = Union[SetViewMode, SelectTask, CloseDetail]


def reduce(state: GanttState, action: Action) -> GanttState:
    """Return the state that follows ``action``; ``state`` is left untouched."""
    if isinstance(action, SetViewMode):
        return replace(state, view_mode=ViewMode(action.view_mode))
    if isinstance(action, SelectTask):
        return replace(state, selected_task_id=action.task_id, detail_open=True)
    if isinstance(action, CloseDetail):
        return replace(state, detail_open=False)
    raise TypeError(f"Unsupported action: {action!r}")
