"""Minimal JSON-over-HTTP client shared by alarms and notifiers."""

from __future__ import annotations

import json
import threading
from typing import Any
from urllib import request

from core.errors import InvalidParameterError
from core.logging import logger as LOGGER


MIN_REQUEST_TIMEOUT_S = 1.0
USER_AGENT = "Node Monitoring / 1.0.0 <Requesting data from api>"
APPLICATION_TYPE = "application/json"


class RequestCancelledError(RuntimeError):
    """Raised when a request is attempted after cancellation was signalled."""


class HttpClientWrapper:
    """HTTP client issuing JSON GET and POST requests with a fixed timeout."""

    def __init__(self, request_timeout_s: float = 10.0) -> None:
        request_timeout_s = float(request_timeout_s)
        if request_timeout_s < MIN_REQUEST_TIMEOUT_S:
            raise InvalidParameterError(
                "request_timeout_s",
                request_timeout_s,
                interval=f">= {MIN_REQUEST_TIMEOUT_S}",
            )
        self._timeout_s = request_timeout_s

    @property
    def timeout_s(self) -> float:
        return self._timeout_s

    def get_json(self, url: str, cancel_event: threading.Event | None = None) -> Any:
        _raise_if_cancelled(cancel_event, url)
        req = request.Request(url, headers=_get_headers(), method="GET")
        with request.urlopen(req, timeout=self._timeout_s) as response:
            body = response.read().decode("utf-8")
        LOGGER.debug("[Http] GET %s returned %d bytes", url, len(body))
        return json.loads(body) if body else None

    def post_json(
        self,
        url: str,
        payload: Any,
        cancel_event: threading.Event | None = None,
    ) -> None:
        _raise_if_cancelled(cancel_event, url)
        data = json.dumps(payload).encode("utf-8")
        req = request.Request(url, data=data, headers=_post_headers(), method="POST")
        with request.urlopen(req, timeout=self._timeout_s) as response:
            response.read()
        LOGGER.debug("[Http] POST %s sent %d bytes", url, len(data))


def _raise_if_cancelled(cancel_event: threading.Event | None, url: str) -> None:
    if cancel_event is not None and cancel_event.is_set():
        raise RequestCancelledError(f"request to {url} cancelled")


def _get_headers() -> dict[str, str]:
    return {
        "Accept": APPLICATION_TYPE,
        "User-Agent": USER_AGENT,
    }


def _post_headers() -> dict[str, str]:
    headers = _get_headers()
    headers["Content-Type"] = APPLICATION_TYPE
    return headers
