"""Alarm checking that a set of nodes agree on the current nonce."""

from __future__ import annotations

import threading
from typing import Iterable

from core.errors import InvalidParameterError
from core.models import AlarmResult
from services.alarms.base import PollingAlarm
from services.http_client import HttpClientWrapper


class NodeNonceAlarm(PollingAlarm):
    """Compares ``erd_nonce`` reported by ``{url}/node/status`` across nodes."""

    def __init__(
        self,
        *,
        identifier: str,
        api_urls: Iterable[str],
        nonce_difference: int,
        polling_time_s: float,
        http_client: HttpClientWrapper,
    ) -> None:
        super().__init__(identifier, polling_time_s)
        urls = [str(url).strip().rstrip("/") for url in api_urls or [] if str(url).strip()]
        if len(urls) < 2:
            raise InvalidParameterError("api_urls", urls, interval="at least 2 urls")
        nonce_difference = int(nonce_difference)
        if nonce_difference < 0:
            raise InvalidParameterError("nonce_difference", nonce_difference, interval=">= 0")
        self._api_urls = urls
        self._nonce_difference = nonce_difference
        self._http_client = http_client

    def query(self, cancel_event: threading.Event) -> AlarmResult:
        nonces = self._fetch_nonces(cancel_event)
        spread = max(nonces.values()) - min(nonces.values())
        problems: list[str] = []
        if spread > self._nonce_difference:
            problems.append(
                f"nonce difference {spread} exceeds {self._nonce_difference}: "
                + _format_nonces(nonces)
            )
        return self._build_result(problems)

    def query_info(self, cancel_event: threading.Event) -> str:
        nonces = self._fetch_nonces(cancel_event)
        spread = max(nonces.values()) - min(nonces.values())
        return f"{_format_nonces(nonces)} (difference {spread})"

    def _fetch_nonces(self, cancel_event: threading.Event) -> dict[str, int]:
        nonces: dict[str, int] = {}
        for url in self._api_urls:
            payload = self._http_client.get_json(f"{url}/node/status", cancel_event)
            nonces[url] = _extract_nonce(payload, url)
        return nonces


def _extract_nonce(payload: object, url: str) -> int:
    data = payload.get("data") if isinstance(payload, dict) else None
    metrics = data.get("metrics") if isinstance(data, dict) else None
    nonce = metrics.get("erd_nonce") if isinstance(metrics, dict) else None
    if isinstance(nonce, bool) or not isinstance(nonce, int):
        raise ValueError(f"missing erd_nonce in status of {url}")
    return nonce


def _format_nonces(nonces: dict[str, int]) -> str:
    return ", ".join(f"{url}={nonce}" for url, nonce in nonces.items())
