from datetime import date, datetime
from pathlib import Path

import pytest

from team_gantt.models import DEFAULT_COLUMNS, UNKNOWN_STATUS, Priority, StatusBoard, Subtask, Task
from team_gantt.storage import load_project, save_project

BOARD = StatusBoard(DEFAULT_COLUMNS)


def _tasks() -> list:
    return [
        Task(
            id="t1",
            title="Design",
            status=BOARD.resolve("Done"),
            priority=Priority.HIGH,
            start_date=date(2024, 1, 10),
            due_date=date(2024, 1, 20),
            created_at=datetime(2024, 1, 2, 9, 30),
            subtasks=(
                Subtask(id="s1", title="Sketch", completed=True, start_date=date(2024, 1, 10)),
                Subtask(id="s2", title="Review", due_date=date(2024, 1, 18), assignee_id="u2"),
            ),
            assignee_id="u1",
            progress=50,
        ),
        Task(id="t2", title="Draft", status=BOARD.resolve("todo"), priority=Priority.LOW),
    ]


def test_save_and_load_roundtrip(tmp_path: Path) -> None:
    path = tmp_path / "tasks.csv"

    save_project(path, DEFAULT_COLUMNS, _tasks())
    columns, loaded = load_project(path)

    assert columns == list(DEFAULT_COLUMNS)
    assert loaded == _tasks()


def test_save_project_writes_blank_cells_for_missing_values(tmp_path: Path) -> None:
    path = tmp_path / "tasks.csv"

    save_project(path, DEFAULT_COLUMNS[:1], _tasks())

    text = path.read_text().splitlines()
    assert text[0] == "#columns,todo|To Do|#9e9e9e"
    assert text[1] == "kind,id,parent,title,status,priority,start,due,created,completed,assignee,progress"
    assert text[2] == "task,t1,,Design,done,High,2024-01-10,2024-01-20,2024-01-02T09:30:00,,u1,50"
    assert text[3] == "subtask,s1,t1,Sketch,,,2024-01-10,,,1,,"
    assert text[5] == "task,t2,,Draft,todo,Low,,,,,,0"


def test_unknown_status_and_priority_degrade(tmp_path: Path) -> None:
    path = tmp_path / "tasks.csv"
    path.write_text(
        "#columns,todo|To Do|#9e9e9e\n"
        "kind,id,parent,title,status,priority,start,due,created,completed,assignee,progress\n"
        "task,t1,,Odd,Blocked,Urgent,not-a-date,,,,,\n"
    )

    _columns, tasks = load_project(path)

    assert tasks[0].status is UNKNOWN_STATUS
    assert tasks[0].priority is Priority.MEDIUM
    assert tasks[0].start_date is None
    assert tasks[0].progress == 0


def test_missing_columns_line_is_rejected(tmp_path: Path) -> None:
    path = tmp_path / "tasks.csv"
    path.write_text("kind,id\n")

    with pytest.raises(ValueError, match="columns"):
        load_project(path)


def test_orphan_subtask_is_rejected(tmp_path: Path) -> None:
    path = tmp_path / "tasks.csv"
    path.write_text(
        "#columns\n"
        "kind,id,parent,title,status,priority,start,due,created,completed,assignee,progress\n"
        "subtask,s1,t9,Lost,,,,,,0,,\n"
    )

    with pytest.raises(ValueError, match="unknown parent"):
        load_project(path)
