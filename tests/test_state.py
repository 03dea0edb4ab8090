import pytest

from team_gantt.models import ViewMode
from team_gantt.state import CloseDetail, GanttState, SelectTask, SetViewMode, reduce


def test_set_view_mode_returns_new_state() -> None:
    state = GanttState()

    updated = reduce(state, SetViewMode(ViewMode.MONTH))

    assert updated.view_mode is ViewMode.MONTH
    assert state.view_mode is ViewMode.DAY


def test_set_view_mode_accepts_strings() -> None:
    assert reduce(GanttState(), SetViewMode("week")).view_mode is ViewMode.WEEK


def test_select_and_close_detail() -> None:
    selected = reduce(GanttState(), SelectTask("t1"))
    closed = reduce(selected, CloseDetail())

    assert (selected.selected_task_id, selected.detail_open) == ("t1", True)
    assert (closed.selected_task_id, closed.detail_open) == ("t1", False)


def test_unknown_action_is_rejected() -> None:
    with pytest.raises(TypeError):
        reduce(GanttState(), "zoom")
