"""Analytics for the activity screen.

- Completed: most recent due first.
- Upcoming: pending tasks, soonest due first.
- Failed: most recent due first.
"""

import logging

from palplanner.core.logging import span
from palplanner.domain.task import Task, TaskStatus
from palplanner.models.service_models import ActivitySummary
from palplanner.services.task_service import TaskStore


logger = logging.getLogger(__name__)


def _by_status(tasks: list[Task], status: TaskStatus, *, newest_first: bool) -> list[Task]:
    return sorted((t for t in tasks if t.status == status), key=lambda t: t.due_at, reverse=newest_first)


def get_activity_summary(*, store: TaskStore, limit: int | None = None) -> ActivitySummary:
    """Summarize the user's task history and balance.

    Args:
        store: Task store to read from
        limit: Maximum number of tasks per list (None for all)

    Returns:
        ActivitySummary with balance, completion count and the three task lists
    """
    with span("analytics_service.get_activity_summary"):
        tasks = store.tasks
        completed = _by_status(tasks, TaskStatus.COMPLETED, newest_first=True)
        upcoming = _by_status(tasks, TaskStatus.PENDING, newest_first=False)
        failed = _by_status(tasks, TaskStatus.FAILED, newest_first=True)

        summary = ActivitySummary(
            pal_points=store.pal_points,
            completed_count=len(completed),
            completed=completed[:limit],
            upcoming=upcoming[:limit],
            failed=failed[:limit],
        )
        logger.debug(
            "Activity summary: %d completed, %d upcoming, %d failed",
            len(completed),
            len(upcoming),
            len(failed),
        )
        return summary
