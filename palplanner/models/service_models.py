"""Pydantic models for service layer return types."""

from datetime import datetime

from pydantic import BaseModel

from palplanner.domain.notification import NotificationTime
from palplanner.domain.task import Task


class ScheduledNotification(BaseModel):
    """A task reminder waiting to fire."""

    identifier: str
    task_id: str
    title: str
    body: str
    fire_at: datetime
    time: NotificationTime


class ActivitySummary(BaseModel):
    """Data behind the activity screen."""

    pal_points: int
    completed_count: int
    completed: list[Task]
    upcoming: list[Task]
    failed: list[Task]
