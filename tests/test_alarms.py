"""Tests for the node rating and node nonce alarms."""

from __future__ import annotations

import threading
from typing import Any

import pytest

from core.errors import InvalidParameterError
from core.models import AlarmLevel
from services.alarms import NodeNonceAlarm, NodeRatingAlarm
from services.http_client import HttpClientWrapper


LONG_KEY = "a" * 20 + "b" * 20


class _FakeHttpClient(HttpClientWrapper):
    def __init__(self, responses: dict[str, Any]) -> None:
        self.responses = responses
        self.urls: list[str] = []

    def get_json(self, url: str, cancel_event: threading.Event | None = None) -> Any:
        self.urls.append(url)
        response = self.responses[url]
        if isinstance(response, Exception):
            raise response
        return response


def _status(nonce: int) -> dict[str, Any]:
    return {"data": {"metrics": {"erd_nonce": nonce}}, "error": "", "code": "successful"}


def _rating_alarm(client: _FakeHttpClient, **overrides) -> NodeRatingAlarm:
    kwargs = {
        "identifier": "testnet - rating",
        "api_url": "http://api/",
        "public_keys": ["pk1", LONG_KEY],
        "threshold": 90.0,
        "polling_time_s": 5,
        "http_client": client,
    }
    kwargs.update(overrides)
    return NodeRatingAlarm(**kwargs)


def _nonce_alarm(client: _FakeHttpClient, **overrides) -> NodeNonceAlarm:
    kwargs = {
        "identifier": "testnet - nonce",
        "api_urls": ["http://n1", "http://n2"],
        "nonce_difference": 3,
        "polling_time_s": 2,
        "http_client": client,
    }
    kwargs.update(overrides)
    return NodeNonceAlarm(**kwargs)


def test_should_query_rate_limits_by_polling_time() -> None:
    alarm = _rating_alarm(_FakeHttpClient({}), polling_time_s=5)

    assert alarm.should_query(now=100.0) is True
    assert alarm.should_query(now=101.0) is False
    assert alarm.should_query(now=104.9) is False
    assert alarm.should_query(now=105.0) is True
    assert alarm.should_query(now=106.0) is False


@pytest.mark.parametrize(
    ("overrides", "field"),
    [
        ({"identifier": " "}, "identifier"),
        ({"polling_time_s": 0}, "polling_time_s"),
        ({"api_url": ""}, "api_url"),
        ({"public_keys": []}, "public_keys"),
    ],
)
def test_rating_alarm_rejects_invalid_config(overrides: dict, field: str) -> None:
    with pytest.raises(InvalidParameterError) as exc_info:
        _rating_alarm(_FakeHttpClient({}), **overrides)

    assert exc_info.value.field == field


def test_rating_alarm_reports_low_ratings_then_recovery() -> None:
    client = _FakeHttpClient(
        {
            "http://api/nodes/pk1": {"tempRating": 100.0},
            f"http://api/nodes/{LONG_KEY}": {"tempRating": 80.25},
        }
    )
    alarm = _rating_alarm(client)

    result = alarm.query(threading.Event())

    assert result.identifier == "testnet - rating"
    assert result.level == AlarmLevel.ERROR
    assert result.data == "aaaaaa...bbbbbb: rating 80.25 below threshold 90.00"

    client.responses[f"http://api/nodes/{LONG_KEY}"] = {"rating": 95.0}
    recovered = alarm.query(threading.Event())
    quiet = alarm.query(threading.Event())

    assert recovered.level == AlarmLevel.INFO
    assert recovered.data == "All checks recovered"
    assert quiet.level == AlarmLevel.NO_EVENT


def test_rating_alarm_info_lists_every_key() -> None:
    client = _FakeHttpClient(
        {
            "http://api/nodes/pk1": {"tempRating": 100.0},
            f"http://api/nodes/{LONG_KEY}": {"tempRating": 99.5},
        }
    )

    info = _rating_alarm(client).query_info(threading.Event())

    assert info == "pk1 rating 100.00, aaaaaa...bbbbbb rating 99.50"


def test_rating_alarm_missing_rating_raises() -> None:
    client = _FakeHttpClient(
        {
            "http://api/nodes/pk1": {"identity": "x"},
            f"http://api/nodes/{LONG_KEY}": {"tempRating": 99.5},
        }
    )

    with pytest.raises(ValueError):
        _rating_alarm(client).query(threading.Event())


def test_nonce_alarm_requires_two_urls() -> None:
    with pytest.raises(InvalidParameterError) as exc_info:
        _nonce_alarm(_FakeHttpClient({}), api_urls=["http://n1"])

    assert exc_info.value.field == "api_urls"


def test_nonce_alarm_reports_divergence() -> None:
    client = _FakeHttpClient({"http://n1/node/status": _status(100), "http://n2/node/status": _status(105)})

    result = _nonce_alarm(client).query(threading.Event())

    assert result.level == AlarmLevel.ERROR
    assert result.data == "nonce difference 5 exceeds 3: http://n1=100, http://n2=105"


def test_nonce_alarm_within_tolerance_is_quiet() -> None:
    client = _FakeHttpClient({"http://n1/node/status": _status(100), "http://n2/node/status": _status(103)})

    result = _nonce_alarm(client).query(threading.Event())

    assert result.level == AlarmLevel.NO_EVENT
    assert client.urls == ["http://n1/node/status", "http://n2/node/status"]


def test_nonce_alarm_info() -> None:
    client = _FakeHttpClient({"http://n1/node/status": _status(7), "http://n2/node/status": _status(9)})

    info = _nonce_alarm(client).query_info(threading.Event())

    assert info == "http://n1=7, http://n2=9 (difference 2)"


def test_nonce_alarm_propagates_transport_errors() -> None:
    client = _FakeHttpClient(
        {"http://n1/node/status": _status(7), "http://n2/node/status": OSError("timed out")}
    )

    with pytest.raises(OSError):
        _nonce_alarm(client).query(threading.Event())


def test_nonce_alarm_malformed_status_raises() -> None:
    client = _FakeHttpClient({"http://n1/node/status": {"data": {}}, "http://n2/node/status": _status(9)})

    with pytest.raises(ValueError):
        _nonce_alarm(client).query(threading.Event())
