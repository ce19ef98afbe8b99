"""Notifier writing alarm results to the process log."""

from __future__ import annotations

import threading

from core.contracts import Notifier
from core.logging import logger as LOGGER
from core.models import AlarmLevel, AlarmResult


class LogNotifier(Notifier):
    """Logs every reportable result; does not perform any network activity."""

    def deliver(self, cancel_event: threading.Event, result: AlarmResult) -> None:
        if result.level == AlarmLevel.NO_EVENT:
            return
        if result.level == AlarmLevel.ERROR:
            LOGGER.warning("[Notify] %s: %s", result.identifier, result.data)
        else:
            LOGGER.info("[Notify] %s: %s", result.identifier, result.data)
