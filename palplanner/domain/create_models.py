"""Input models for creating domain entities."""

from datetime import date, datetime, time, timedelta
from typing import Self

from pydantic import BaseModel, ConfigDict, Field, model_validator

from palplanner.core.config import Constants
from palplanner.domain.notification import NotificationTime


class TaskCreate(BaseModel):
    """Validated input for a new task."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(..., min_length=1, description="Task title (must not be blank)")
    description: str = Field(default="", description="Detailed task description")
    due_date: date = Field(..., description="Calendar day the task belongs to")
    due_time: time = Field(..., description="Time of day the task is due")
    points: int = Field(default=Constants.DEFAULT_TASK_POINTS, ge=0, description="PalPoints awarded on completion")
    grace_period_minutes: int = Field(
        default=Constants.DEFAULT_GRACE_PERIOD_MINUTES,
        ge=0,
        le=Constants.MAX_GRACE_PERIOD_MINUTES,
    )
    notification_time: NotificationTime = Field(default=NotificationTime.FIFTEEN_MINUTES_BEFORE)

    @model_validator(mode="after")
    def validate_due_range(self) -> Self:
        """Reject due dates whose reminder or expiry instant can't be represented."""
        due_at = datetime.combine(self.due_date, self.due_time)
        if due_at - datetime.min < timedelta(days=1) or datetime.max - due_at < timedelta(
            minutes=self.grace_period_minutes
        ):
            msg = "Due date is too close to the edge of the supported date range"
            raise ValueError(msg)
        return self
