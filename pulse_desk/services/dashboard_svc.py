"""Dashboard aggregation."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ..errors import StorageError
from ..schemas.activity import Activity
from ..schemas.client import Client
from .activity_log import ActivityLog
from .client_repo import ClientRepository
from .task_board import TASKS, Task

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StatCard:
    title: str
    value: str
    change: str | None = None
    placeholder: bool = False


# Not wired to any data source yet
PLACEHOLDER_CARDS: tuple[StatCard, ...] = (
    StatCard("Pending tasks", "18", "-5%", placeholder=True),
    StatCard("Signed contracts", "8", "+25%", placeholder=True),
    StatCard("Monthly revenue", "R$ 42.800", "+18%", placeholder=True),
)


@dataclass
class DashboardSummary:
    client_count: int = 0
    recent_clients: list[Client] = field(default_factory=list)
    recent_activities: list[Activity] = field(default_factory=list)
    recent_tasks: list[Task] = field(default_factory=list)
    failed: bool = False

    @property
    def stat_cards(self) -> list[StatCard]:
        return [StatCard("Active clients", str(self.client_count)), *PLACEHOLDER_CARDS]


async def build_summary(
    repo: ClientRepository,
    activities: ActivityLog,
    *,
    client_limit: int = 3,
    activity_limit: int = 5,
    task_limit: int = 3,
) -> DashboardSummary:
    """Fetch count, newest clients and newest activities, sequentially."""
    summary = DashboardSummary(recent_tasks=TASKS[:task_limit])
    try:
        summary.client_count = await repo.count()
        summary.recent_clients = await repo.recent(client_limit)
        summary.recent_activities = await activities.recent(activity_limit)
    except StorageError:
        logger.warning("Dashboard data unavailable", exc_info=True)
        return DashboardSummary(recent_tasks=summary.recent_tasks, failed=True)
    return summary
