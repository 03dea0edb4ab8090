from datetime import date, datetime
from pathlib import Path
import csv

from team_gantt.exporters import export_as_csv
from team_gantt.models import Task, ViewMode


def test_export_csv_marks_effective_ranges(tmp_path: Path) -> None:
    path = tmp_path / "export.csv"
    tasks = [
        Task(id="a", title="Active", start_date=date(2024, 3, 1), due_date=date(2024, 3, 3)),
        Task(id="b", title="Undated", created_at=datetime(2024, 3, 2, 10, 0)),
    ]

    export_as_csv(path, tasks, ViewMode.DAY, today=date(2024, 3, 2))

    with path.open(newline="", encoding="utf-8") as handle:
        rows = list(csv.reader(handle))

    assert rows[0][:4] == ["Task", "Start", "End", "2024-02-27"]
    assert rows[0][-1] == "2024-03-12"
    assert len(rows[0]) == 3 + 15

    assert rows[1][:3] == ["Active", "2024-03-01", "2024-03-03"]
    assert [i for i, cell in enumerate(rows[1][3:]) if cell] == [3, 4, 5]

    assert rows[2][:3] == ["Undated", "2024-03-02", "2024-03-05"]
    assert [i for i, cell in enumerate(rows[2][3:]) if cell] == [4, 5, 6, 7]
