"""Tests for scheduler job tracking."""

import pytest

from palplanner.core.scheduler_tracker import JobTracker, run_tracked_job


@pytest.fixture
def job_tracker() -> JobTracker:
    return JobTracker()


@pytest.mark.unit
def test_record_job_start(job_tracker: JobTracker) -> None:
    """Test recording job start."""
    job_tracker.record_job_start("test_job")

    status = job_tracker.get_job_status("test_job")
    assert status["currently_running"] is True
    assert status["current_run_started"] is not None


@pytest.mark.unit
def test_record_job_success(job_tracker: JobTracker) -> None:
    """Test recording successful job execution."""
    job_tracker.record_job_start("test_job")
    job_tracker.record_job_success("test_job")

    status = job_tracker.get_job_status("test_job")
    assert status["last_success"] is not None
    assert status["consecutive_failures"] == 0
    assert status["success_count"] == 1
    assert status["currently_running"] is False


@pytest.mark.unit
def test_record_job_failure(job_tracker: JobTracker) -> None:
    """Test recording failed job execution."""
    job_tracker.record_job_start("test_job")
    consecutive = job_tracker.record_job_failure("test_job", "Test error")

    status = job_tracker.get_job_status("test_job")
    assert consecutive == 1
    assert status["last_error"] == "Test error"
    assert status["failure_count"] == 1
    assert status["currently_running"] is False


@pytest.mark.unit
def test_success_resets_consecutive_failures(job_tracker: JobTracker) -> None:
    job_tracker.record_job_failure("test_job", "first")
    job_tracker.record_job_failure("test_job", "second")
    assert job_tracker.get_job_status("test_job")["consecutive_failures"] == 2

    job_tracker.record_job_success("test_job")

    status = job_tracker.get_job_status("test_job")
    assert status["consecutive_failures"] == 0
    assert status["failure_count"] == 2


@pytest.mark.unit
def test_long_errors_are_truncated(job_tracker: JobTracker) -> None:
    job_tracker.record_job_failure("test_job", "x" * 1000)

    assert len(job_tracker.get_job_status("test_job")["last_error"]) == 500


@pytest.mark.unit
def test_unknown_job_status(job_tracker: JobTracker) -> None:
    status = job_tracker.get_job_status("never_ran")

    assert status["success_count"] == 0
    assert status["failure_count"] == 0
    assert status["currently_running"] is False


@pytest.mark.unit
def test_run_tracked_job_success(job_tracker: JobTracker) -> None:
    calls = []

    assert run_tracked_job(lambda: calls.append(1), "sweep", job_tracker) is True
    assert calls == [1]
    assert job_tracker.get_job_status("sweep")["success_count"] == 1


@pytest.mark.unit
def test_run_tracked_job_failure_is_recorded_not_raised(job_tracker: JobTracker) -> None:
    def boom() -> None:
        raise RuntimeError("tick failed")

    assert run_tracked_job(boom, "sweep", job_tracker) is False

    status = job_tracker.get_job_status("sweep")
    assert status["last_error"] == "tick failed"
    assert status["consecutive_failures"] == 1
