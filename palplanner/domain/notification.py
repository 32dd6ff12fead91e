"""Reminder lead-time options for tasks."""

from datetime import datetime, timedelta
from enum import StrEnum

from palplanner.core.config import Constants


class NotificationTime(StrEnum):
    """When a task reminder fires relative to the task's due instant."""

    DAY_BEFORE = "1 day before"
    DAY_OF = "Day of task"
    HOUR_BEFORE = "1 hour before"
    FIFTEEN_MINUTES_BEFORE = "15 minutes before"
    NONE = "No notification"

    def fire_at(self, due_at: datetime) -> datetime | None:
        """Return when the reminder should fire, or None for no reminder."""
        match self:
            case NotificationTime.DAY_BEFORE:
                return due_at - timedelta(days=1)
            case NotificationTime.DAY_OF:
                return due_at.replace(hour=Constants.DAY_OF_REMINDER_HOUR, minute=0, second=0, microsecond=0)
            case NotificationTime.HOUR_BEFORE:
                return due_at - timedelta(hours=1)
            case NotificationTime.FIFTEEN_MINUTES_BEFORE:
                return due_at - timedelta(minutes=15)
            case _:
                return None
