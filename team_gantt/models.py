"""Data models shared across the Gantt application."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Iterable, Optional, Tuple


class Priority(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class ViewMode(str, Enum):
    """Zoom level of the chart."""

    DAY = "day"
    WEEK = "week"
    MONTH = "month"


@dataclass(frozen=True)
class StatusColumn:
    """A kanban column configured by the team."""

    id: str
    title: str
    color: str = "#9e9e9e"


@dataclass(frozen=True)
class Status:
    title: str
    column_id: Optional[str] = None
    color: Optional[str] = None

    @property
    def is_known(self) -> bool:
        return self.column_id is not None


UNKNOWN_STATUS = Status(title="Unknown")

DEFAULT_COLUMNS: Tuple[StatusColumn, ...] = (
    StatusColumn(id="todo", title="To Do", color="#9e9e9e"),
    StatusColumn(id="in_progress", title="In Progress", color="#3b82f6"),
    StatusColumn(id="review", title="Review", color="#a855f7"),
    StatusColumn(id="done", title="Done", color="#22c55e"),
)


class StatusBoard:
    """Resolves free-form status strings against the team's columns.

    Matching is case-insensitive on either the column id or its title.
    Anything else becomes ``UNKNOWN_STATUS``.
    """

    def __init__(self, columns: Iterable[StatusColumn] = DEFAULT_COLUMNS) -> None:
        self.columns = tuple(columns)
        self._lookup = {}
        for column in self.columns:
            status = Status(title=column.title, column_id=column.id, color=column.color)
            self._lookup[column.id.strip().lower()] = status
            self._lookup[column.title.strip().lower()] = status

    def resolve(self, raw: Optional[str]) -> Status:
        key = (raw or "").strip().lower()
        if not key:
            return UNKNOWN_STATUS
        return self._lookup.get(key, UNKNOWN_STATUS)


@dataclass(frozen=True)
class Subtask:
    id: str
    title: str
    completed: bool = False
    start_date: Optional[date] = None
    due_date: Optional[date] = None
    assignee_id: Optional[str] = None


@dataclass(frozen=True)
class Task:
    """Read-only snapshot of a task as loaded from the task store."""

    id: str
    title: str
    status: Status = UNKNOWN_STATUS
    priority: Priority = Priority.MEDIUM
    start_date: Optional[date] = None
    due_date: Optional[date] = None
    created_at: Optional[datetime] = None
    subtasks: Tuple[Subtask, ...] = field(default_factory=tuple)
    assignee_id: Optional[str] = None
    progress: int = 0

    def has_schedule(self) -> bool:
        """Return True when the task or one of its subtasks carries a date."""
        start, end = effective_date_range(self)
        return start is not None or end is not None


def effective_date_range(task: Task) -> Tuple[Optional[date], Optional[date]]:
    """Return the (start, end) pair shown on the chart for ``task``.

    Subtask dates win over the task's own fields: the earliest subtask start
    and the latest subtask due date, each side falling back independently.
    """
    starts = [sub.start_date for sub in task.subtasks if sub.start_date is not None]
    ends = [sub.due_date for sub in task.subtasks if sub.due_date is not None]
    start = min(starts) if starts else task.start_date
    end = max(ends) if ends else task.due_date
    return start, end
