"""Thread-safe counters and lifecycle flag for the polling handler."""

from __future__ import annotations

import threading

from core.models import CycleCounters


class CycleState:
    """Error counters and running flag shared between the cycle thread and readers."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._num_errors = 0
        self._num_alarm_errors = 0
        self._running = False

    def increment_errors(self) -> None:
        with self._lock:
            self._num_errors += 1

    def increment_alarm_errors(self) -> None:
        with self._lock:
            self._num_alarm_errors += 1

    def get_num_errors(self) -> int:
        with self._lock:
            return self._num_errors

    def get_num_alarm_errors(self) -> int:
        with self._lock:
            return self._num_alarm_errors

    def get_counters(self) -> CycleCounters:
        with self._lock:
            return CycleCounters(errors=self._num_errors, alarm_errors=self._num_alarm_errors)

    def reset_counters(self) -> None:
        with self._lock:
            self._num_errors = 0
            self._num_alarm_errors = 0

    def set_running(self) -> None:
        with self._lock:
            self._running = True

    def set_stopped(self) -> None:
        with self._lock:
            self._running = False

    def is_running(self) -> bool:
        with self._lock:
            return self._running
