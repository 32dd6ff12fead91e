"""Task reminder scheduling.

The stores only talk to the NotificationScheduler port. LocalNotificationScheduler
keeps pending reminders in memory, keyed the same way a platform notification
center would key them, so the app shell can hand them to the device.
"""

import logging
import threading
from typing import Protocol

from palplanner.core.clock import Clock, SystemClock
from palplanner.core.logging import span
from palplanner.domain.notification import NotificationTime
from palplanner.domain.task import Task
from palplanner.models.service_models import ScheduledNotification


logger = logging.getLogger(__name__)


class NotificationScheduler(Protocol):
    """Port for scheduling and cancelling task reminders."""

    def schedule_task_notification(self, *, task: Task, time: NotificationTime) -> bool: ...

    def cancel_notifications(self, *, task_id: str) -> None: ...


def notification_identifier(task_id: str, time: NotificationTime) -> str:
    """Identifier for one reminder of one task."""
    return f"{task_id}-{time.value}"


class LocalNotificationScheduler:
    """In-memory NotificationScheduler."""

    def __init__(self, clock: Clock | None = None) -> None:
        self._clock = clock or SystemClock()
        self._pending: dict[str, ScheduledNotification] = {}
        self._lock = threading.Lock()

    def schedule_task_notification(self, *, task: Task, time: NotificationTime) -> bool:
        """Schedule a reminder for a task.

        Args:
            task: Task to remind about
            time: Lead time relative to the task's due instant

        Returns:
            True if a reminder was scheduled, False if the lead time is "none"
            or the reminder would fire in the past
        """
        with span("notification_service.schedule_task_notification"):
            fire_at = time.fire_at(task.due_at)
            if fire_at is None:
                logger.debug("No reminder requested for task %s", task.id)
                return False

            if fire_at <= self._clock.now():
                logger.info("Reminder time for task %s is in the past, skipping", task.id)
                return False

            identifier = notification_identifier(task.id, time)
            notification = ScheduledNotification(
                identifier=identifier,
                task_id=task.id,
                title="Task Reminder",
                body=f"{time.value}: {task.title}",
                fire_at=fire_at,
                time=time,
            )
            with self._lock:
                self._pending[identifier] = notification

            logger.info("Task reminder scheduled for task %s (%s)", task.id, time.value)
            return True

    def cancel_notifications(self, *, task_id: str) -> None:
        """Remove every pending reminder for a task, whatever its lead time."""
        identifiers = [notification_identifier(task_id, time) for time in NotificationTime]
        with self._lock:
            removed = sum(1 for identifier in identifiers if self._pending.pop(identifier, None) is not None)

        if removed:
            logger.info("Cancelled %d reminder(s) for task %s", removed, task_id)

    def pending_notifications(self) -> list[ScheduledNotification]:
        """Pending reminders ordered by fire time."""
        with self._lock:
            pending = list(self._pending.values())
        return sorted(pending, key=lambda n: n.fire_at)

    def due_notifications(self) -> list[ScheduledNotification]:
        """Remove and return reminders whose fire time has arrived."""
        now = self._clock.now()
        with self._lock:
            due = [n for n in self._pending.values() if n.fire_at <= now]
            for notification in due:
                del self._pending[notification.identifier]
        return sorted(due, key=lambda n: n.fire_at)
