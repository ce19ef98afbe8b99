"""Pushover push-notification channel."""

from __future__ import annotations

import threading

from core.contracts import Notifier
from core.errors import InvalidParameterError
from core.logging import logger as LOGGER
from core.models import AlarmLevel, AlarmResult
from services.http_client import HttpClientWrapper


PUSHOVER_API_URL = "https://api.pushover.net/1/messages.json"
MAX_TITLE_CHARS = 250
MAX_MESSAGE_CHARS = 1024


class PushoverNotifier(Notifier):
    """Posts alarm results to the Pushover messages endpoint."""

    def __init__(
        self,
        *,
        token: str,
        user: str,
        http_client: HttpClientWrapper,
        api_url: str = PUSHOVER_API_URL,
    ) -> None:
        token = str(token or "").strip()
        user = str(user or "").strip()
        if not token:
            raise InvalidParameterError("token", token)
        if not user:
            raise InvalidParameterError("user", user)
        self._token = token
        self._user = user
        self._http_client = http_client
        self._api_url = api_url

    def deliver(self, cancel_event: threading.Event, result: AlarmResult) -> None:
        if result.level == AlarmLevel.NO_EVENT:
            return

        payload = {
            "token": self._token,
            "user": self._user,
            "title": _truncate(f"[{result.level.value}] {result.identifier}", MAX_TITLE_CHARS),
            "message": _truncate(result.data or result.level.value, MAX_MESSAGE_CHARS),
            "priority": 1 if result.level == AlarmLevel.ERROR else 0,
        }
        self._http_client.post_json(self._api_url, payload, cancel_event)
        LOGGER.info(
            "[Pushover] Notification sent: identifier=%s level=%s",
            result.identifier,
            result.level.value,
        )


def _truncate(text: str, max_len: int) -> str:
    if len(text) <= max_len:
        return text
    return text[: max_len - 1] + "…"
