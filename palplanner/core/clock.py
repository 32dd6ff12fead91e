"""Time source used by the stores."""

from datetime import datetime
from typing import Protocol


class Clock(Protocol):
    """Returns the current local time."""

    def now(self) -> datetime: ...


class SystemClock:
    """Wall-clock time in the device's local timezone (naive datetimes)."""

    def now(self) -> datetime:
        return datetime.now()
