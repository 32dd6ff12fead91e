"""In-memory fakes for the stores' collaborators."""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timedelta

from palplanner.core.scheduler import JobHandle
from palplanner.domain.notification import NotificationTime
from palplanner.domain.task import Task


class FakeClock:
    """Clock that only moves when told to."""

    def __init__(self, now: datetime) -> None:
        self.current = now

    def now(self) -> datetime:
        return self.current

    def set(self, now: datetime) -> None:
        self.current = now

    def advance(self, **delta: float) -> datetime:
        self.current += timedelta(**delta)
        return self.current


@dataclass
class ManualJob:
    handle: JobHandle
    func: Callable[[], object]
    seconds: float
    name: str


class ManualTicker:
    """Ticker whose jobs run only when a test calls tick()."""

    def __init__(self) -> None:
        self.jobs: dict[str, ManualJob] = {}

    def add_interval_job(
        self,
        *,
        func: Callable[[], object],
        seconds: float,
        job_id: str,
        name: str,
    ) -> JobHandle:
        handle = JobHandle(job_id=job_id, remove=lambda: self._remove(job_id))
        self.jobs[job_id] = ManualJob(handle=handle, func=func, seconds=seconds, name=name)
        return handle

    def _remove(self, job_id: str) -> None:
        self.jobs.pop(job_id, None)

    def tick(self, job_id: str, times: int = 1) -> int:
        """Run a job `times` times. Returns how many runs happened."""
        runs = 0
        for _ in range(times):
            job = self.jobs.get(job_id)
            if job is None or not job.handle.run_if_active(job.func):
                break
            runs += 1
        return runs


@dataclass
class RecordingNotificationScheduler:
    """NotificationScheduler that records every call."""

    scheduled: list[tuple[str, NotificationTime]] = field(default_factory=list)
    cancelled: list[str] = field(default_factory=list)

    def schedule_task_notification(self, *, task: Task, time: NotificationTime) -> bool:
        self.scheduled.append((task.id, time))
        return True

    def cancel_notifications(self, *, task_id: str) -> None:
        self.cancelled.append(task_id)
