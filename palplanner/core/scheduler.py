"""Periodic job scheduling for the stores (expiration sweep, pet decay)."""

import logging
import threading
from collections.abc import Callable
from typing import Protocol

from apscheduler.jobstores.base import JobLookupError
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.schedulers.base import BaseScheduler
from apscheduler.triggers.interval import IntervalTrigger

from palplanner.core.scheduler_tracker import JobTracker, run_tracked_job


logger = logging.getLogger(__name__)


class JobHandle:
    """Cancelable handle for one registered periodic job.

    Once cancel() returns, the job body is never entered again, even if the
    underlying scheduler already queued a run. cancel() waits for a run that
    is already inside the body on another thread.
    """

    def __init__(self, job_id: str, remove: Callable[[], None]) -> None:
        self.job_id = job_id
        self._remove = remove
        self._cancelled = threading.Event()
        self._run_lock = threading.RLock()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def run_if_active(self, func: Callable[[], object]) -> bool:
        """Call func unless the handle is cancelled. Returns whether it ran."""
        with self._run_lock:
            if self._cancelled.is_set():
                return False
            func()
            return True

    def cancel(self) -> None:
        """Stop further runs. Safe to call more than once."""
        with self._run_lock:
            if self._cancelled.is_set():
                return
            self._cancelled.set()
        self._remove()
        logger.info("Cancelled periodic job %s", self.job_id)


class Ticker(Protocol):
    """Registers functions to run at a fixed interval."""

    def add_interval_job(
        self,
        *,
        func: Callable[[], object],
        seconds: float,
        job_id: str,
        name: str,
    ) -> JobHandle: ...


class APSchedulerTicker:
    """Ticker backed by an APScheduler BackgroundScheduler.

    Job runs are recorded in a JobTracker and exceptions never reach the
    scheduler's worker threads.
    """

    def __init__(self, scheduler: BaseScheduler | None = None, tracker: JobTracker | None = None) -> None:
        self.scheduler = scheduler or BackgroundScheduler()
        self.tracker = tracker or JobTracker()

    def add_interval_job(
        self,
        *,
        func: Callable[[], object],
        seconds: float,
        job_id: str,
        name: str,
    ) -> JobHandle:
        handle = JobHandle(job_id=job_id, remove=lambda: self._remove_job(job_id))

        def run() -> None:
            handle.run_if_active(lambda: run_tracked_job(func, job_id, self.tracker))

        self.scheduler.add_job(
            run,
            trigger=IntervalTrigger(seconds=seconds),
            id=job_id,
            name=name,
            replace_existing=True,
            max_instances=1,
            coalesce=True,
        )
        logger.info("Scheduled %s job: every %ss", job_id, seconds)
        return handle

    def _remove_job(self, job_id: str) -> None:
        try:
            self.scheduler.remove_job(job_id)
        except JobLookupError:
            logger.debug("Job %s already removed", job_id)

    @property
    def running(self) -> bool:
        return self.scheduler.running

    def start(self) -> None:
        """Start delivering ticks."""
        if self.scheduler.running:
            return
        logger.info("Starting scheduler")
        self.scheduler.start()
        logger.info("Scheduler started successfully")

    def shutdown(self) -> None:
        """Stop the scheduler and wait for running jobs to finish."""
        if not self.scheduler.running:
            return
        logger.info("Stopping scheduler")
        self.scheduler.shutdown(wait=True)
        logger.info("Scheduler stopped")
