"""Alarm checking validator ratings against a threshold."""

from __future__ import annotations

import threading
from typing import Iterable

from core.errors import InvalidParameterError
from core.models import AlarmResult
from services.alarms.base import PollingAlarm, shorten_key
from services.http_client import HttpClientWrapper


class NodeRatingAlarm(PollingAlarm):
    """Queries ``{api_url}/nodes/{public_key}`` and flags ratings below the threshold."""

    def __init__(
        self,
        *,
        identifier: str,
        api_url: str,
        public_keys: Iterable[str],
        threshold: float,
        polling_time_s: float,
        http_client: HttpClientWrapper,
    ) -> None:
        super().__init__(identifier, polling_time_s)
        api_url = str(api_url or "").strip().rstrip("/")
        if not api_url:
            raise InvalidParameterError("api_url", api_url)
        raw_keys = list(public_keys or [])
        keys = [str(key).strip() for key in raw_keys if str(key).strip()]
        if not keys:
            raise InvalidParameterError("public_keys", raw_keys)
        self._api_url = api_url
        self._public_keys = keys
        self._threshold = float(threshold)
        self._http_client = http_client

    def query(self, cancel_event: threading.Event) -> AlarmResult:
        ratings = self._fetch_ratings(cancel_event)
        problems = [
            f"{shorten_key(key)}: rating {rating:.2f} below threshold {self._threshold:.2f}"
            for key, rating in ratings.items()
            if rating < self._threshold
        ]
        return self._build_result(problems)

    def query_info(self, cancel_event: threading.Event) -> str:
        ratings = self._fetch_ratings(cancel_event)
        return ", ".join(
            f"{shorten_key(key)} rating {rating:.2f}" for key, rating in ratings.items()
        )

    def _fetch_ratings(self, cancel_event: threading.Event) -> dict[str, float]:
        ratings: dict[str, float] = {}
        for key in self._public_keys:
            payload = self._http_client.get_json(f"{self._api_url}/nodes/{key}", cancel_event)
            ratings[key] = _extract_rating(payload, key)
        return ratings


def _extract_rating(payload: object, key: str) -> float:
    if not isinstance(payload, dict):
        raise ValueError(f"unexpected node payload for {shorten_key(key)}")
    rating = payload.get("tempRating", payload.get("rating"))
    if isinstance(rating, bool) or not isinstance(rating, (int, float)):
        raise ValueError(f"missing rating for {shorten_key(key)}")
    return float(rating)
