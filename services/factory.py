"""Builds alarms, notifiers and the polling handler from configuration."""

from __future__ import annotations

from typing import Any

from config.controller import parse_time_of_day
from core.contracts import Alarm, Notifier
from core.logging import logger as LOGGER
from services.alarms import NodeNonceAlarm, NodeRatingAlarm
from services.http_client import HttpClientWrapper
from services.notifiers import LogNotifier, PushoverNotifier
from services.polling_handler import PollingHandler


def build_http_client(config: dict[str, Any]) -> HttpClientWrapper:
    http_cfg = config.get("http") or {}
    return HttpClientWrapper(float(http_cfg.get("request_timeout_s", 10.0)))


def build_alarms(config: dict[str, Any], http_client: HttpClientWrapper) -> list[Alarm]:
    alarms_cfg = config.get("alarms") or {}
    alarms: list[Alarm] = []
    for entry in alarms_cfg.get("node_rating") or []:
        alarms.append(
            NodeRatingAlarm(
                identifier=entry["identifier"],
                api_url=entry["api_url"],
                public_keys=entry["public_keys"],
                threshold=entry["threshold"],
                polling_time_s=entry["polling_time_s"],
                http_client=http_client,
            )
        )
    for entry in alarms_cfg.get("node_nonce") or []:
        alarms.append(
            NodeNonceAlarm(
                identifier=entry["identifier"],
                api_urls=entry["api_urls"],
                nonce_difference=entry["nonce_difference"],
                polling_time_s=entry["polling_time_s"],
                http_client=http_client,
            )
        )
    return alarms


def build_notifiers(config: dict[str, Any], http_client: HttpClientWrapper) -> list[Notifier]:
    notifiers_cfg = config.get("notifiers") or {}
    notifiers: list[Notifier] = [
        PushoverNotifier(token=entry["token"], user=entry["user"], http_client=http_client)
        for entry in notifiers_cfg.get("pushover") or []
    ]
    if (notifiers_cfg.get("log") or {}).get("enabled", False):
        notifiers.append(LogNotifier())
    return notifiers


def build_polling_handler(config: dict[str, Any]) -> PollingHandler:
    """Wire every configured collaborator and start the polling handler."""

    http_client = build_http_client(config)
    alarms = build_alarms(config, http_client)
    notifiers = build_notifiers(config, http_client)
    digest_enabled, hour, minute, second = parse_time_of_day(config.get("info_time_of_day"))
    LOGGER.info(
        "[Factory] Starting polling handler: alarms=%d notifiers=%d digest=%s",
        len(alarms),
        len(notifiers),
        f"{hour:02d}:{minute:02d}:{second:02d}" if digest_enabled else "disabled",
    )
    return PollingHandler(
        alarms,
        notifiers,
        digest_enabled=digest_enabled,
        digest_hour=hour,
        digest_minute=minute,
        digest_second=second,
        polling_interval_s=float(config.get("polling_interval_s", 0.1)),
    )
