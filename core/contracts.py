"""Capability contracts consumed by the polling handler."""

from __future__ import annotations

from abc import ABC, abstractmethod
import threading

from core.models import AlarmResult


class Alarm(ABC):
    """Interface for pluggable checks queried on every polling cycle."""

    @abstractmethod
    def should_query(self) -> bool:
        """Return True when the alarm wants to be queried in this cycle.

        Must be cheap and local; no I/O is expected here.
        """

    @abstractmethod
    def query(self, cancel_event: threading.Event) -> AlarmResult:
        """Run the check. Raises on failure."""

    @abstractmethod
    def query_info(self, cancel_event: threading.Event) -> str:
        """Return a human readable status line for the daily digest. Raises on failure."""

    @abstractmethod
    def identifier(self) -> str:
        """Return the stable label of this alarm."""


class Notifier(ABC):
    """Interface for delivery channels of alarm results."""

    @abstractmethod
    def deliver(self, cancel_event: threading.Event, result: AlarmResult) -> None:
        """Deliver the result. Raises on failure."""
