"""Shared scheduling and state transitions for polling alarms."""

from __future__ import annotations

import time

from core.contracts import Alarm
from core.errors import InvalidParameterError
from core.models import AlarmLevel, AlarmResult


MIN_POLLING_TIME_S = 1.0


class PollingAlarm(Alarm):
    """Alarm queried at most once every ``polling_time_s`` seconds.

    Subclasses report problems through ``_build_result``; an ERROR result is
    produced while problems persist, a single INFO result on recovery, and
    NO_EVENT otherwise.
    """

    def __init__(self, identifier: str, polling_time_s: float) -> None:
        identifier = str(identifier or "").strip()
        if not identifier:
            raise InvalidParameterError("identifier", identifier)
        polling_time_s = float(polling_time_s)
        if polling_time_s < MIN_POLLING_TIME_S:
            raise InvalidParameterError(
                "polling_time_s",
                polling_time_s,
                interval=f">= {MIN_POLLING_TIME_S}",
            )
        self._identifier = identifier
        self._polling_time_s = polling_time_s
        self._next_query_ts: float | None = None
        self._in_error = False

    def identifier(self) -> str:
        return self._identifier

    def should_query(self, now: float | None = None) -> bool:
        if now is None:
            now = time.monotonic()
        if self._next_query_ts is not None and now < self._next_query_ts:
            return False
        self._next_query_ts = now + self._polling_time_s
        return True

    def _build_result(self, problems: list[str]) -> AlarmResult:
        if problems:
            self._in_error = True
            return AlarmResult(
                identifier=self._identifier,
                level=AlarmLevel.ERROR,
                data="\n".join(problems),
            )
        if self._in_error:
            self._in_error = False
            return AlarmResult(
                identifier=self._identifier,
                level=AlarmLevel.INFO,
                data="All checks recovered",
            )
        return AlarmResult(identifier=self._identifier, level=AlarmLevel.NO_EVENT, data="")


def shorten_key(key: str, keep: int = 6) -> str:
    if len(key) <= keep * 2 + 3:
        return key
    return f"{key[:keep]}...{key[-keep:]}"
