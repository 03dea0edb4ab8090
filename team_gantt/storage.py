"""CSV snapshot of the team's task store."""
from __future__ import annotations

import csv
import logging
from datetime import date, datetime
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .models import Priority, StatusBoard, StatusColumn, Subtask, Task

logger = logging.getLogger(__name__)

_COLUMNS_PREFIX = "#columns"
_ROW_HEADER = [
    "kind",
    "id",
    "parent",
    "title",
    "status",
    "priority",
    "start",
    "due",
    "created",
    "completed",
    "assignee",
    "progress",
]
_TASK = "task"
_SUBTASK = "subtask"


def save_project(path: Path | str, columns: Sequence[StatusColumn], tasks: Iterable[Task]) -> None:
    """Persist the board columns and tasks to CSV."""
    csv_path = Path(path)
    csv_path.parent.mkdir(parents=True, exist_ok=True)

    with csv_path.open("w", newline="", encoding="utf-8") as handle:
        writer = csv.writer(handle)
        writer.writerow([_COLUMNS_PREFIX] + [f"{c.id}|{c.title}|{c.color}" for c in columns])
        writer.writerow(_ROW_HEADER)
        for task in tasks:
            writer.writerow([
                _TASK,
                task.id,
                "",
                task.title,
                task.status.column_id or "",
                task.priority.value,
                _serialize_optional_date(task.start_date),
                _serialize_optional_date(task.due_date),
                task.created_at.isoformat() if task.created_at else "",
                "",
                task.assignee_id or "",
                task.progress,
            ])
            for sub in task.subtasks:
                writer.writerow([
                    _SUBTASK,
                    sub.id,
                    task.id,
                    sub.title,
                    "",
                    "",
                    _serialize_optional_date(sub.start_date),
                    _serialize_optional_date(sub.due_date),
                    "",
                    int(sub.completed),
                    sub.assignee_id or "",
                    "",
                ])


def load_project(path: Path | str) -> Tuple[List[StatusColumn], List[Task]]:
    """Load board columns and tasks from CSV, resolving statuses on the way."""
    csv_path = Path(path)
    with csv_path.open("r", newline="", encoding="utf-8") as handle:
        reader = csv.reader(handle)
        columns_line = next(reader, None)
        if not columns_line or columns_line[0] != _COLUMNS_PREFIX:
            raise ValueError("Invalid task CSV: missing columns line")
        columns = [_parse_column(raw) for raw in columns_line[1:] if raw.strip()]
        board = StatusBoard(columns)

        header = next(reader, None)
        if header != _ROW_HEADER:
            raise ValueError("Invalid task CSV: missing task header")

        order: List[str] = []
        rows: Dict[str, List[str]] = {}
        subtasks: Dict[str, List[Subtask]] = {}
        for row in reader:
            if len(row) < len(_ROW_HEADER):
                continue
            kind, row_id, parent = row[0], row[1], row[2]
            if kind == _TASK:
                order.append(row_id)
                rows[row_id] = row
                subtasks.setdefault(row_id, [])
            elif kind == _SUBTASK:
                if parent not in rows:
                    raise ValueError(f"Invalid task CSV: subtask {row_id!r} has unknown parent {parent!r}")
                subtasks[parent].append(_parse_subtask(row))

        tasks = [_parse_task(rows[task_id], subtasks[task_id], board) for task_id in order]
        logger.info("Loaded %d tasks from %s", len(tasks), csv_path)
        return columns, tasks


def _parse_column(raw: str) -> StatusColumn:
    parts = raw.split("|")
    if len(parts) != 3:
        raise ValueError(f"Invalid task CSV: bad column entry {raw!r}")
    column_id, title, color = parts
    return StatusColumn(id=column_id, title=title, color=color)


def _parse_task(row: List[str], subtasks: List[Subtask], board: StatusBoard) -> Task:
    _kind, task_id, _parent, title, status, priority, start, due, created, _done, assignee, progress = row[:12]
    resolved = board.resolve(status)
    if not resolved.is_known:
        logger.warning("Task %s has unknown status %r", task_id, status)
    return Task(
        id=task_id,
        title=title,
        status=resolved,
        priority=_parse_priority(priority, task_id),
        start_date=_parse_optional_date(start),
        due_date=_parse_optional_date(due),
        created_at=_parse_optional_datetime(created),
        subtasks=tuple(subtasks),
        assignee_id=assignee or None,
        progress=_parse_optional_int(progress) or 0,
    )


def _parse_subtask(row: List[str]) -> Subtask:
    return Subtask(
        id=row[1],
        title=row[3],
        completed=bool(_parse_optional_int(row[9])),
        start_date=_parse_optional_date(row[6]),
        due_date=_parse_optional_date(row[7]),
        assignee_id=row[10] or None,
    )


def _parse_priority(value: str, task_id: str) -> Priority:
    try:
        return Priority(value.strip())
    except ValueError:
        logger.warning("Task %s has unknown priority %r, using Medium", task_id, value)
        return Priority.MEDIUM


def _serialize_optional_date(value: Optional[date]) -> str:
    return "" if value is None else value.isoformat()


def _parse_optional_date(value: str) -> Optional[date]:
    parsed = _parse_optional_datetime(value)
    return None if parsed is None else parsed.date()


def _parse_optional_datetime(value: str) -> Optional[datetime]:
    text = value.strip() if value is not None else ""
    if not text:
        return None
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def _parse_optional_int(value: str) -> Optional[int]:
    text = value.strip() if value is not None else ""
    if not text:
        return None
    try:
        return int(text)
    except ValueError:
        return None
