"""Task board grouping."""

from __future__ import annotations

from datetime import date

from pulse_desk.services.task_board import STATUS_LABELS, TASKS, Task, group_by_status


def test_columns_in_fixed_order():
    columns = group_by_status(TASKS)
    assert list(columns) == ["ready", "working", "done", "stuck"]
    assert [t.id for t in columns["working"]] == ["1"]
    assert sum(len(v) for v in columns.values()) == len(TASKS)


def test_empty_columns_kept_and_unknown_status_dropped():
    odd = Task("9", "Archived thing", "archived", "low", "XX", date(2025, 1, 1), "Misc")
    columns = group_by_status([odd])
    assert all(tasks == [] for tasks in columns.values())
    assert set(columns) == set(STATUS_LABELS)


def test_labels():
    assert TASKS[0].status_label == "Working on it"
    assert TASKS[0].priority_label == "High"
