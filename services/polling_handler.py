"""Polling handler that queries alarms and fans results out to notifiers."""

from __future__ import annotations

from datetime import datetime, timedelta
import threading
import time
from typing import Sequence

from core.contracts import Alarm, Notifier
from core.cycle_state import CycleState
from core.daily_trigger import create_daily_trigger
from core.errors import NilAlarmError, NilNotifierError, NoAlarmsError, NoNotifiersError
from core.logging import logger as LOGGER
from core.models import AlarmLevel, AlarmResult, CycleCounters


POLLING_INTERVAL_S = 0.1
SYSTEM_IDENTIFIER = "system"
SYSTEM_MESSAGE = (
    "System is running. Uptime: {uptime}.\n"
    "Number of processing error: {errors}, number of alarms with error: {alarm_errors}"
)


class PollingHandler:
    """Background loop running one poll cycle per tick.

    The loop thread is started by the constructor and stopped by ``close``.
    """

    def __init__(
        self,
        alarms: Sequence[Alarm],
        notifiers: Sequence[Notifier],
        *,
        digest_enabled: bool = False,
        digest_hour: int = 0,
        digest_minute: int = 0,
        digest_second: int = 0,
        polling_interval_s: float = POLLING_INTERVAL_S,
    ) -> None:
        if not alarms:
            raise NoAlarmsError()
        for index, alarm in enumerate(alarms):
            if alarm is None or not isinstance(alarm, Alarm):
                raise NilAlarmError(index)
        if not notifiers:
            raise NoNotifiersError()
        for index, notifier in enumerate(notifiers):
            if notifier is None or not isinstance(notifier, Notifier):
                raise NilNotifierError(index)

        self._daily_trigger = create_daily_trigger(
            digest_enabled,
            digest_hour,
            digest_minute,
            digest_second,
        )
        self._alarms: tuple[Alarm, ...] = tuple(alarms)
        self._notifiers: tuple[Notifier, ...] = tuple(notifiers)
        self._state = CycleState()
        self._polling_interval_s = max(float(polling_interval_s), 0.001)
        self._start_time = time.monotonic()
        self._stop_event = threading.Event()
        self._loop_thread = threading.Thread(
            target=self._loop,
            name="polling-handler",
            daemon=True,
        )
        self._loop_thread.start()

    def close(self) -> None:
        """Signal the loop to stop. Safe to call any number of times."""

        self._stop_event.set()

    def join(self, timeout_s: float | None = None) -> bool:
        """Wait for the loop thread to exit. Returns True when it has stopped."""

        self._loop_thread.join(timeout=timeout_s)
        if self._loop_thread.is_alive():
            LOGGER.warning(
                "[Poll] Loop thread did not exit within %s s; continuing shutdown.",
                timeout_s,
            )
            return False
        return True

    def is_running(self) -> bool:
        return self._state.is_running()

    def get_num_errors(self) -> int:
        return self._state.get_num_errors()

    def get_num_alarm_errors(self) -> int:
        return self._state.get_num_alarm_errors()

    def get_counters(self) -> CycleCounters:
        return self._state.get_counters()

    def _loop(self) -> None:
        self._state.set_running()
        LOGGER.debug("[Poll] Process loop has started.")
        try:
            while not self._stop_event.wait(timeout=self._polling_interval_s):
                try:
                    self._poll()
                except Exception as exc:  # noqa: BLE001 - the loop must survive any cycle failure
                    LOGGER.exception("[Poll] Error in poll cycle (continuing): %s", exc)
                    self._state.increment_errors()
        finally:
            self._state.set_stopped()
            LOGGER.debug("[Poll] Process loop has been stopped.")

    def _poll(self) -> None:
        if self._daily_trigger.is_time_of_day(datetime.now()):
            self._notify_all(self._create_info_message())

        for alarm in self._alarms:
            identifier = type(alarm).__name__
            try:
                if not alarm.should_query():
                    continue
                identifier = alarm.identifier()
                result = alarm.query(self._stop_event)
            except Exception as exc:  # noqa: BLE001 - a failing alarm never blocks its peers
                LOGGER.exception(
                    "[Poll] Error querying alarm: identifier=%s error=%s",
                    identifier,
                    exc,
                )
                self._state.increment_errors()
                continue

            self._notify_all(result)

    def _notify_all(self, result: AlarmResult) -> None:
        if result.level == AlarmLevel.ERROR:
            self._state.increment_alarm_errors()

        for notifier in self._notifiers:
            try:
                notifier.deliver(self._stop_event, result)
            except Exception as exc:  # noqa: BLE001 - delivery continues with the next notifier
                LOGGER.exception(
                    "[Poll] Error pushing notification: notifier=%s identifier=%s error=%s",
                    type(notifier).__name__,
                    result.identifier,
                    exc,
                )
                self._state.increment_errors()

    def _create_info_message(self) -> AlarmResult:
        counters = self._state.get_counters()
        level = AlarmLevel.INFO
        if counters.errors > 0 or counters.alarm_errors > 0:
            level = AlarmLevel.ERROR

        lines = [
            SYSTEM_MESSAGE.format(
                uptime=self._uptime(),
                errors=counters.errors,
                alarm_errors=counters.alarm_errors,
            )
        ]
        for alarm in self._alarms:
            identifier = type(alarm).__name__
            try:
                identifier = alarm.identifier()
                info = alarm.query_info(self._stop_event)
            except Exception as exc:  # noqa: BLE001 - reported inside the digest
                LOGGER.exception(
                    "[Poll] Error querying alarm info: identifier=%s error=%s",
                    identifier,
                    exc,
                )
                lines.append(f"Status for alarm {identifier}: error querying info: {exc}")
                level = AlarmLevel.ERROR
                continue
            lines.append(f"Status for alarm {identifier}: {info}")

        self._state.reset_counters()

        response = AlarmResult(
            identifier=SYSTEM_IDENTIFIER,
            level=level,
            data="\n".join(lines),
        )
        LOGGER.debug(
            "[Poll] Created info message: identifier=%s level=%s message=%s",
            response.identifier,
            response.level.value,
            response.data,
        )
        return response

    def _uptime(self) -> timedelta:
        return timedelta(seconds=int(time.monotonic() - self._start_time))
