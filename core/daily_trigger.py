"""Once-per-day trigger used to schedule the status digest."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime

from core.errors import InvalidParameterError


class DailyTrigger(ABC):
    """Interface for time-of-day predicates evaluated on every cycle."""

    @abstractmethod
    def is_time_of_day(self, now: datetime) -> bool:
        """Return True when the configured time of day has been reached."""


class DisabledDailyTrigger(DailyTrigger):
    """Trigger that never fires."""

    def is_time_of_day(self, now: datetime) -> bool:
        return False


class TimeOfDayTrigger(DailyTrigger):
    """Fires once per calendar day, on the first evaluation at or after the set time."""

    def __init__(self, hour: int, minute: int, second: int) -> None:
        _check_range("hour", hour, 23)
        _check_range("minute", minute, 59)
        _check_range("second", second, 59)
        self._hour = hour
        self._minute = minute
        self._second = second
        # 0 is never a day of month, so the trigger may fire on its first evaluation.
        self._last_fired_day = 0

    @property
    def hour(self) -> int:
        return self._hour

    @property
    def minute(self) -> int:
        return self._minute

    @property
    def second(self) -> int:
        return self._second

    def is_time_of_day(self, now: datetime) -> bool:
        if self._last_fired_day == now.day:
            return False

        target = now.replace(
            hour=self._hour,
            minute=self._minute,
            second=self._second,
            microsecond=0,
        )
        if target <= now:
            self._last_fired_day = now.day
            return True
        return False


def create_daily_trigger(active: bool, hour: int, minute: int, second: int) -> DailyTrigger:
    """Return the enabled trigger when active, the disabled one otherwise.

    The disabled variant performs no validation of the time values.
    """

    if active:
        return TimeOfDayTrigger(hour, minute, second)
    return DisabledDailyTrigger()


def _check_range(field: str, value: int, upper: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0 or value > upper:
        raise InvalidParameterError(field, value, interval=f"0-{upper}")
