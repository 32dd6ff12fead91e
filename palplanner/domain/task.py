"""Task domain models and enums."""

from datetime import date, datetime, time, timedelta
from enum import StrEnum

from pydantic import BaseModel, Field

from palplanner.core.config import Constants
from palplanner.domain.notification import NotificationTime


class TaskStatus(StrEnum):
    """Task lifecycle state. COMPLETED and FAILED are terminal."""

    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


class Task(BaseModel):
    """Task data transfer object."""

    id: str = Field(..., description="Unique task ID, stable for the task's lifetime")
    title: str = Field(..., description="Task title")
    description: str = Field(default="", description="Detailed task description")
    due_date: date = Field(..., description="Calendar day the task belongs to")
    due_time: time = Field(..., description="Time of day the task is due (hour and minute)")
    status: TaskStatus = Field(default=TaskStatus.PENDING, description="Current lifecycle state")
    points: int = Field(default=Constants.DEFAULT_TASK_POINTS, ge=0, description="PalPoints awarded on completion")
    grace_period_minutes: int = Field(
        default=Constants.DEFAULT_GRACE_PERIOD_MINUTES,
        ge=0,
        description="Minutes after the due time before the task fails",
    )
    notification_time: NotificationTime = Field(
        default=NotificationTime.FIFTEEN_MINUTES_BEFORE,
        description="Reminder lead time",
    )

    @property
    def due_at(self) -> datetime:
        """Due date and time of day combined, to the minute."""
        return datetime.combine(self.due_date, time(hour=self.due_time.hour, minute=self.due_time.minute))

    @property
    def expires_at(self) -> datetime:
        """End of the grace period. datetime.max if that lies past the calendar."""
        try:
            return self.due_at + timedelta(minutes=self.grace_period_minutes)
        except OverflowError:
            return datetime.max

    @property
    def is_terminal(self) -> bool:
        return self.status != TaskStatus.PENDING

    def is_expired(self, now: datetime) -> bool:
        """True if the task is still pending and its grace period has passed."""
        return self.status == TaskStatus.PENDING and now > self.expires_at
