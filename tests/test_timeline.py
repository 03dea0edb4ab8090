from datetime import date, datetime

import pytest

from team_gantt.models import Subtask, Task, ViewMode
from team_gantt.timeline import compute_timeline, resolve_task_range

TODAY = date(2024, 5, 15)


def _march_task() -> Task:
    return Task(id="t1", title="Build", start_date=date(2024, 3, 1), due_date=date(2024, 3, 5))


def _mixed_tasks() -> list:
    return [
        _march_task(),
        Task(id="t2", title="Undated", created_at=datetime(2024, 2, 20, 16, 45)),
        Task(
            id="t3",
            title="Subtasks",
            subtasks=(
                Subtask(id="a", title="A", start_date=date(2024, 4, 2)),
                Subtask(id="b", title="B", due_date=date(2024, 6, 30)),
            ),
        ),
        Task(id="t4", title="Start only", start_date=date(2023, 11, 29)),
    ]


def test_empty_task_list_uses_default_window() -> None:
    timeline = compute_timeline([], ViewMode.DAY, today=TODAY)

    assert timeline.min_date == date(2024, 5, 8)
    assert timeline.total_days == 30
    assert len(timeline.dates) == 31
    assert timeline.grouped_headers == ()


@pytest.mark.parametrize("mode", [ViewMode.WEEK, ViewMode.MONTH])
def test_empty_task_list_has_no_grouped_headers(mode: ViewMode) -> None:
    timeline = compute_timeline([], mode, today=TODAY)

    assert timeline.grouped_headers == ()
    assert timeline.total_days == 30


def test_day_mode_applies_lookback_and_lookahead() -> None:
    timeline = compute_timeline([_march_task()], ViewMode.DAY, today=TODAY)

    assert timeline.min_date == date(2024, 2, 27)
    assert timeline.max_date == date(2024, 3, 12)
    assert timeline.total_days == 14
    assert timeline.dates[0] == date(2024, 2, 27)
    assert timeline.dates[-1] == date(2024, 3, 12)
    assert timeline.grouped_headers == ()
    assert timeline.day_width == 50


def test_week_mode_snaps_to_monday_and_groups_weeks() -> None:
    timeline = compute_timeline([_march_task()], ViewMode.WEEK, today=TODAY)

    assert timeline.min_date == date(2024, 2, 26)
    assert timeline.min_date.weekday() == 0
    assert timeline.total_days == 36
    headers = timeline.grouped_headers
    assert [header.days for header in headers] == [7, 7, 7, 7, 8]
    assert headers[0].label == "Week 9"
    assert headers[0].sub_label == "26/02 - 03/03"
    assert headers[1].date == date(2024, 3, 4)
    assert headers[-1].sub_label == "25/03 - 01/04"
    assert sum(header.width for header in headers) == timeline.total_days * 20


def test_month_mode_snaps_to_first_and_groups_months() -> None:
    timeline = compute_timeline([_march_task()], ViewMode.MONTH, today=TODAY)

    assert timeline.min_date == date(2024, 3, 1)
    assert timeline.max_date == date(2024, 5, 5)
    assert timeline.total_days == 65
    headers = timeline.grouped_headers
    assert [header.label for header in headers] == ["March 2024", "April 2024", "May 2024"]
    assert [header.days for header in headers] == [31, 30, 4]
    assert [header.width for header in headers] == [186, 180, 24]
    assert all(header.sub_label == "" for header in headers)


@pytest.mark.parametrize("mode", list(ViewMode))
def test_window_contains_every_task(mode: ViewMode) -> None:
    tasks = _mixed_tasks()
    timeline = compute_timeline(tasks, mode, today=TODAY)

    for task in tasks:
        start, end = resolve_task_range(task)
        assert timeline.min_date <= start
        assert timeline.max_date >= end


@pytest.mark.parametrize("mode", [ViewMode.WEEK, ViewMode.MONTH])
def test_grouped_header_widths_cover_the_whole_span(mode: ViewMode) -> None:
    timeline = compute_timeline(_mixed_tasks(), mode, today=TODAY)

    assert sum(header.days for header in timeline.grouped_headers) == timeline.total_days
    assert sum(header.width for header in timeline.grouped_headers) == timeline.total_days * timeline.day_width


def test_switching_modes_back_reproduces_the_window() -> None:
    tasks = _mixed_tasks()
    first = compute_timeline(tasks, ViewMode.DAY, today=TODAY)
    compute_timeline(tasks, ViewMode.MONTH, today=TODAY)
    again = compute_timeline(tasks, ViewMode.DAY, today=TODAY)

    assert (again.min_date, again.total_days) == (first.min_date, first.total_days)


def test_missing_end_is_synthesized_from_start() -> None:
    task = Task(id="t1", title="Open ended", start_date=date(2024, 3, 1))

    assert resolve_task_range(task) == (date(2024, 3, 1), date(2024, 3, 4))


def test_creation_date_is_used_when_no_dates_exist() -> None:
    task = Task(id="t1", title="Idea", created_at=datetime(2024, 3, 10, 22, 15))
    timeline = compute_timeline([task], ViewMode.DAY, today=TODAY)

    assert timeline.min_date == date(2024, 3, 7)
    assert timeline.max_date == date(2024, 3, 20)


def test_tasks_without_any_date_fall_back_to_today() -> None:
    timeline = compute_timeline([Task(id="t1", title="Ghost")], ViewMode.DAY, today=TODAY)

    assert timeline.min_date == date(2024, 5, 12)
    assert timeline.max_date == date(2024, 5, 25)


def test_view_mode_accepts_plain_strings() -> None:
    timeline = compute_timeline([_march_task()], "week", today=TODAY)

    assert timeline.view_mode is ViewMode.WEEK


@pytest.mark.parametrize("mode", list(ViewMode))
def test_window_covers_undated_task_placed_on_today(mode: ViewMode) -> None:
    ghost = Task(id="b", title="Ghost")
    timeline = compute_timeline([_march_task(), ghost], mode, today=TODAY)

    start, end = resolve_task_range(ghost, TODAY)
    assert (start, end) == (date(2024, 5, 15), date(2024, 5, 18))
    assert timeline.min_date <= date(2024, 3, 1)
    assert timeline.max_date >= end
