"""Task store: task lifecycle, the PalPoints balance and the expiration sweep.

Lifecycle:
- A task is created PENDING by add_task().
- complete_task() moves PENDING -> COMPLETED and credits the task's points once.
- check_expired_tasks() moves PENDING -> FAILED once the grace period has passed.
- COMPLETED and FAILED are terminal. delete_task() removes a task in any state.

Ordinary domain conditions (unknown ID, task already finished) are reported
through boolean results, never exceptions.
"""

import logging
import threading
from datetime import date, datetime, time
from uuid import uuid4

from palplanner.core.clock import Clock, SystemClock
from palplanner.core.config import Constants, Settings, get_settings
from palplanner.core.errors import RejectionReason
from palplanner.core.events import ChangeKind, ChangeNotifier
from palplanner.core.logging import log_with_context, span
from palplanner.core.scheduler import JobHandle, Ticker
from palplanner.domain.create_models import TaskCreate
from palplanner.domain.notification import NotificationTime
from palplanner.domain.task import Task, TaskStatus
from palplanner.services.notification_service import NotificationScheduler


logger = logging.getLogger(__name__)

EXPIRATION_JOB_ID = "task_expiration_check"


class TaskStore:
    """Owns tasks and the PalPoints balance.

    Also acts as the points account the shop purchases against.
    """

    def __init__(
        self,
        *,
        settings: Settings | None = None,
        clock: Clock | None = None,
        notifications: NotificationScheduler | None = None,
        ticker: Ticker | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._clock = clock or SystemClock()
        self._notifications = notifications
        self._ticker = ticker
        self._tasks: dict[str, Task] = {}
        self._pal_points = self._settings.starting_pal_points
        self._lock = threading.RLock()
        self._job: JobHandle | None = None
        self.changes = ChangeNotifier("tasks")

    # Points account

    @property
    def pal_points(self) -> int:
        with self._lock:
            return self._pal_points

    @property
    def balance(self) -> int:
        return self.pal_points

    def try_debit(self, amount: int) -> bool:
        """Take PalPoints from the balance if it covers the amount.

        Returns:
            True if the balance was debited, False if the amount is negative
            or larger than the balance
        """
        with self._lock:
            if amount < 0 or amount > self._pal_points:
                return False
            self._pal_points -= amount
            balance = self._pal_points

        log_with_context(logger, "info", "PalPoints debited", amount=amount, balance=balance)
        if amount:
            self.changes.publish(ChangeKind.POINTS_CHANGED)
        return True

    # Commands

    def add_task(
        self,
        *,
        title: str,
        due_date: date,
        due_time: time,
        description: str = "",
        points: int = Constants.DEFAULT_TASK_POINTS,
        grace_period_minutes: int = Constants.DEFAULT_GRACE_PERIOD_MINUTES,
        notification_time: NotificationTime = NotificationTime.FIFTEEN_MINUTES_BEFORE,
    ) -> str:
        """Create a pending task and schedule its reminder.

        Returns:
            The new task's ID

        Raises:
            pydantic.ValidationError: If the title is blank or points/grace period are negative
        """
        with span("task_store.add_task"):
            data = TaskCreate(
                title=title,
                description=description,
                due_date=due_date,
                due_time=due_time,
                points=points,
                grace_period_minutes=grace_period_minutes,
                notification_time=notification_time,
            )
            task = Task(id=uuid4().hex, **data.model_dump())

            with self._lock:
                self._tasks[task.id] = task

            log_with_context(
                logger,
                "info",
                "Task added",
                task_id=task.id,
                due_at=task.due_at.isoformat(),
                points=task.points,
            )
            self._schedule_notification(task)
            self.changes.publish(ChangeKind.TASK_ADDED, task.id)
            return task.id

    def check_complete(self, *, task_id: str) -> RejectionReason | None:
        """Return why complete_task() would be refused, or None if it would succeed."""
        with self._lock:
            task = self._tasks.get(task_id)
            if task is None:
                return RejectionReason.UNKNOWN_TASK
            if task.status != TaskStatus.PENDING:
                return RejectionReason.TASK_NOT_PENDING
            return None

    def complete_task(self, *, task_id: str) -> bool:
        """Mark a pending task completed and credit its points.

        Returns:
            True if the task was completed by this call. Unknown IDs and tasks
            that are already completed or failed return False.
        """
        with span("task_store.complete_task"):
            with self._lock:
                reason = self.check_complete(task_id=task_id)
                if reason is not None:
                    log_with_context(logger, "debug", "Task not completed", task_id=task_id, reason=reason.value)
                    return False

                task = self._tasks[task_id]
                task.status = TaskStatus.COMPLETED
                self._pal_points += task.points
                balance = self._pal_points

            log_with_context(
                logger,
                "info",
                "Task completed",
                task_id=task_id,
                points=task.points,
                balance=balance,
            )
            self._cancel_notifications(task_id)
            self.changes.publish(ChangeKind.TASK_COMPLETED, task_id)
            self.changes.publish(ChangeKind.POINTS_CHANGED)
            return True

    def delete_task(self, *, task_id: str) -> bool:
        """Remove a task in any state.

        Returns:
            True if a task was removed, False if the ID is unknown
        """
        with span("task_store.delete_task"):
            with self._lock:
                task = self._tasks.pop(task_id, None)

            if task is None:
                logger.debug("Delete ignored, unknown task %s", task_id)
                return False

            logger.info("Deleted task %s (%s)", task_id, task.status)
            self._cancel_notifications(task_id)
            self.changes.publish(ChangeKind.TASK_DELETED, task_id)
            return True

    def check_expired_tasks(self, now: datetime | None = None) -> bool:
        """Fail every pending task whose grace period has passed.

        Args:
            now: Reference time (defaults to the store's clock)

        Returns:
            True if at least one task changed state
        """
        with span("task_store.check_expired_tasks"):
            now = now or self._clock.now()
            with self._lock:
                expired = [task for task in self._tasks.values() if task.is_expired(now)]
                for task in expired:
                    task.status = TaskStatus.FAILED

            if not expired:
                return False

            for task in expired:
                logger.info("Task %s expired at %s", task.id, task.expires_at.isoformat())
                self._cancel_notifications(task.id)

            self.changes.publish(ChangeKind.TASKS_EXPIRED)
            return True

    # Queries

    def get_task(self, task_id: str) -> Task | None:
        with self._lock:
            task = self._tasks.get(task_id)
            return task.model_copy() if task else None

    @property
    def tasks(self) -> list[Task]:
        """All tasks in insertion order."""
        with self._lock:
            return [task.model_copy() for task in self._tasks.values()]

    def tasks_for_date(self, day: date | datetime) -> list[Task]:
        """Tasks on the same calendar day as `day`, ordered by due instant.

        Tasks due at the same instant keep the order they were added in.
        """
        if isinstance(day, datetime):
            day = day.date()
        with self._lock:
            tasks = [task.model_copy() for task in self._tasks.values() if task.due_date == day]
        return sorted(tasks, key=lambda t: t.due_at)

    def pending_tasks_for_date(self, day: date | datetime) -> list[Task]:
        return [task for task in self.tasks_for_date(day) if task.status == TaskStatus.PENDING]

    def completed_tasks_for_date(self, day: date | datetime) -> list[Task]:
        return [task for task in self.tasks_for_date(day) if task.status == TaskStatus.COMPLETED]

    def failed_tasks_for_date(self, day: date | datetime) -> list[Task]:
        return [task for task in self.tasks_for_date(day) if task.status == TaskStatus.FAILED]

    # Periodic expiration sweep

    @property
    def is_running(self) -> bool:
        return self._job is not None

    def start(self) -> None:
        """Run one sweep now and register the periodic sweep with the ticker."""
        if self._job is not None:
            return
        if self._ticker is None:
            msg = "TaskStore was created without a ticker"
            raise RuntimeError(msg)

        self.check_expired_tasks()
        self._job = self._ticker.add_interval_job(
            func=self.check_expired_tasks,
            seconds=self._settings.expiration_check_interval_seconds,
            job_id=EXPIRATION_JOB_ID,
            name="Check Expired Tasks",
        )

    def stop(self) -> None:
        """Cancel the periodic sweep. No sweep runs after this returns."""
        if self._job is None:
            return
        self._job.cancel()
        self._job = None

    # Notification hooks

    def _schedule_notification(self, task: Task) -> None:
        if self._notifications is None:
            return
        try:
            self._notifications.schedule_task_notification(task=task, time=task.notification_time)
        except Exception:
            logger.exception("Failed to schedule reminder for task %s", task.id)

    def _cancel_notifications(self, task_id: str) -> None:
        if self._notifications is None:
            return
        try:
            self._notifications.cancel_notifications(task_id=task_id)
        except Exception:
            logger.exception("Failed to cancel reminders for task %s", task_id)
