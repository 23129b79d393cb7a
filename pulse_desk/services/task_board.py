"""Task board - static tasks grouped into status columns."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable

STATUS_LABELS: dict[str, str] = {
    "ready": "Ready to launch",
    "working": "Working on it",
    "done": "Done",
    "stuck": "Stuck",
}

PRIORITY_LABELS: dict[str, str] = {"high": "High", "medium": "Medium", "low": "Low"}


@dataclass(frozen=True)
class Task:
    id: str
    title: str
    status: str
    priority: str
    assignee: str
    due_date: date
    project: str

    @property
    def status_label(self) -> str:
        return STATUS_LABELS.get(self.status, self.status)

    @property
    def priority_label(self) -> str:
        return PRIORITY_LABELS.get(self.priority, self.priority)


TASKS: list[Task] = [
    Task("1", "Facebook campaign - CMYK", "working", "high", "RO",
         date(2025, 1, 15), "Paid traffic: CMYK"),
    Task("2", "Monthly report - Client XYZ", "ready", "medium", "JS",
         date(2025, 1, 20), "Reports"),
    Task("3", "Google Ads setup - New client", "done", "high", "MK",
         date(2025, 1, 10), "Paid traffic: New"),
    Task("4", "Q4 performance analysis", "stuck", "low", "AL",
         date(2025, 1, 25), "Analysis"),
]


def group_by_status(tasks: Iterable[Task]) -> dict[str, list[Task]]:
    """Bucket tasks into the four columns, in column order.

    Every column is present even when empty; unknown statuses are dropped.
    """
    columns: dict[str, list[Task]] = {status: [] for status in STATUS_LABELS}
    for task in tasks:
        if task.status in columns:
            columns[task.status].append(task)
    return columns
