"""Models for alarm results and polling cycle counters."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class AlarmLevel(str, Enum):
    """Severity attached to an alarm result."""

    NO_EVENT = "No event"
    INFO = "Info"
    ERROR = "Error"


@dataclass(frozen=True)
class AlarmResult:
    """Result produced by an alarm query or by the daily digest."""

    identifier: str
    level: AlarmLevel
    data: str


@dataclass(frozen=True)
class CycleCounters:
    """Snapshot of the polling handler error counters."""

    errors: int = 0
    alarm_errors: int = 0
