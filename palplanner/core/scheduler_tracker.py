"""Job execution tracking for periodic store jobs."""

import logging
import threading
from collections.abc import Callable
from datetime import datetime
from typing import Any


logger = logging.getLogger(__name__)


class JobTracker:
    """Track job execution history and health status in memory."""

    def __init__(self) -> None:
        """Initialize job tracker."""
        self._memory_storage: dict[str, dict[str, Any]] = {}
        self._lock = threading.Lock()

    def _job_data(self, job_name: str) -> dict[str, Any]:
        if job_name not in self._memory_storage:
            self._memory_storage[job_name] = {}
        return self._memory_storage[job_name]

    def record_job_start(self, job_name: str) -> None:
        """Record job execution start.

        Args:
            job_name: Name of the scheduled job
        """
        with self._lock:
            self._job_data(job_name)["current_run"] = datetime.now().isoformat()

    def record_job_success(self, job_name: str) -> None:
        """Record successful job execution.

        Args:
            job_name: Name of the scheduled job
        """
        with self._lock:
            job_data = self._job_data(job_name)
            job_data["last_success"] = datetime.now().isoformat()
            job_data["consecutive_failures"] = 0
            job_data["success_count"] = job_data.get("success_count", 0) + 1
            job_data.pop("current_run", None)

    def record_job_failure(self, job_name: str, error: str) -> int:
        """Record failed job execution.

        Args:
            job_name: Name of the scheduled job
            error: Error message

        Returns:
            Number of consecutive failures including this one
        """
        with self._lock:
            job_data = self._job_data(job_name)
            job_data["last_failure"] = datetime.now().isoformat()
            job_data["last_error"] = error[:500]

            consecutive_failures = job_data.get("consecutive_failures", 0) + 1
            job_data["consecutive_failures"] = consecutive_failures
            job_data["failure_count"] = job_data.get("failure_count", 0) + 1
            job_data.pop("current_run", None)

            return consecutive_failures

    def get_job_status(self, job_name: str) -> dict[str, Any]:
        """Get job execution status.

        Args:
            job_name: Name of the scheduled job

        Returns:
            Dict with job status information
        """
        with self._lock:
            job_data = dict(self._memory_storage.get(job_name, {}))
        return {
            "job_name": job_name,
            "last_success": job_data.get("last_success"),
            "last_failure": job_data.get("last_failure"),
            "last_error": job_data.get("last_error"),
            "consecutive_failures": job_data.get("consecutive_failures", 0),
            "success_count": job_data.get("success_count", 0),
            "failure_count": job_data.get("failure_count", 0),
            "currently_running": "current_run" in job_data,
            "current_run_started": job_data.get("current_run"),
        }


def run_tracked_job(job_func: Callable[[], object], job_name: str, tracker: JobTracker) -> bool:
    """Execute a job once and record the outcome.

    Periodic jobs are retried by their next tick, so a failure is recorded and
    logged instead of being raised into the scheduler thread.

    Args:
        job_func: Function to execute
        job_name: Name of the job for tracking
        tracker: Tracker receiving the outcome

    Returns:
        True if the job ran without raising
    """
    tracker.record_job_start(job_name)
    try:
        job_func()
    except Exception as e:
        consecutive_failures = tracker.record_job_failure(job_name, str(e))
        logger.exception(
            "%s failed",
            job_name,
            extra={"consecutive_failures": consecutive_failures},
        )
        return False

    tracker.record_job_success(job_name)
    logger.debug("%s completed successfully", job_name)
    return True
