"""Configuration controller for YAML-based settings."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import re
from typing import Any

import yaml

from core.errors import InvalidParameterError


_TIME_OF_DAY_PATTERN = re.compile(r"^\s*(\d{1,2}):(\d{1,2}):(\d{1,2})\s*$")

DEFAULT_POLLING_TIME_S = 60.0
DEFAULT_REQUEST_TIMEOUT_S = 10.0


@dataclass(frozen=True)
class ConfigPaths:
    """Filesystem paths for configuration files."""

    config_dir: Path
    config_file: Path
    override_file: Path


class ConfigController:
    """Singleton controller for loading configuration."""

    _instance: "ConfigController | None" = None

    def __init__(self, config_file: str = "default.yaml") -> None:
        if ConfigController._instance is not None:
            raise RuntimeError("You cannot create another ConfigController class")

        config_dir = Path("config")
        self.paths = ConfigPaths(
            config_dir=config_dir,
            config_file=config_dir / config_file,
            override_file=config_dir / "override.yaml",
        )
        self.config: dict[str, Any] = {}
        self.load_config()
        ConfigController._instance = self

    @classmethod
    def get_instance(cls, config_file: str = "default.yaml") -> "ConfigController":
        """Return the singleton instance of the controller."""

        if cls._instance is None:
            cls._instance = cls(config_file)
        return cls._instance

    def load_config(self) -> None:
        """Load configuration from default and override YAML files."""

        with self.paths.config_file.open("r", encoding="utf-8") as file:
            config = yaml.safe_load(file) or {}

        if self.paths.override_file.exists():
            with self.paths.override_file.open("r", encoding="utf-8") as file:
                override_config = yaml.safe_load(file) or {}
            if override_config:
                config = self._deep_merge(config, override_config)

        self.config = normalize_config(config)

    def get_config(self) -> dict[str, Any]:
        """Return the currently loaded configuration."""

        return dict(self.config)

    def _deep_merge(self, base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """Deep merge dictionaries, overriding base values with override values."""

        merged = dict(base)
        for key, value in override.items():
            if (
                key in merged
                and isinstance(merged[key], dict)
                and isinstance(value, dict)
            ):
                merged[key] = self._deep_merge(merged[key], value)
            else:
                merged[key] = value
        return merged


def parse_time_of_day(value: str | None) -> tuple[bool, int, int, int]:
    """Parse ``HH:MM:SS`` into ``(active, hour, minute, second)``.

    An empty value disables the daily digest. Range checks are left to the
    daily trigger.
    """

    if value is None or not str(value).strip():
        return False, 0, 0, 0
    match = _TIME_OF_DAY_PATTERN.match(str(value))
    if match is None:
        raise InvalidParameterError("info_time_of_day", value, interval="HH:MM:SS")
    hour, minute, second = (int(part) for part in match.groups())
    return True, hour, minute, second


def normalize_config(config: dict[str, Any]) -> dict[str, Any]:
    """Normalize config, accepting the legacy TOML-style key names.

    Values of the wrong type raise ``InvalidParameterError`` naming the key.
    """

    if not isinstance(config, dict):
        raise InvalidParameterError("config", config)
    normalized = dict(config)
    alarms_cfg = _as_dict("alarms", _pick(normalized, "alarms", "Alarms"))
    notifiers_cfg = _as_dict("notifiers", _pick(normalized, "notifiers", "Notifiers"))
    http_cfg = _as_dict("http", normalized.get("http"))
    log_notifier_cfg = _as_dict("notifiers.log", notifiers_cfg.get("log"))

    normalized.pop("Alarms", None)
    normalized.pop("Notifiers", None)

    normalized["logging_level"] = str(normalized.get("logging_level", "INFO"))
    normalized["file_logging_enabled"] = bool(normalized.get("file_logging_enabled", False))
    normalized["log_file"] = str(normalized.get("log_file", "logs/node-monitor.log"))
    normalized["info_time_of_day"] = _time_of_day_text(
        _pick(normalized, "info_time_of_day", "InfoTimeOfDay")
    )
    normalized.pop("InfoTimeOfDay", None)
    normalized["polling_interval_s"] = _as_float(
        "polling_interval_s", normalized.get("polling_interval_s", 0.1)
    )

    http_cfg["request_timeout_s"] = _as_float(
        "http.request_timeout_s",
        http_cfg.get("request_timeout_s", DEFAULT_REQUEST_TIMEOUT_S),
    )
    normalized["http"] = http_cfg

    normalized["alarms"] = {
        "node_rating": [
            {
                "identifier": str(_pick(entry, "identifier", "Identifier") or ""),
                "threshold": _as_float(
                    "threshold", _pick(entry, "threshold", "Threshold") or 0.0
                ),
                "api_url": str(_pick(entry, "api_url", "ApiUrl") or ""),
                "public_keys": _as_list("public_keys", _pick(entry, "public_keys", "PublicKeys")),
                "polling_time_s": _polling_time(entry),
            }
            for entry in _entries(alarms_cfg, "node_rating", "NodeRating")
        ],
        "node_nonce": [
            {
                "identifier": str(_pick(entry, "identifier", "Identifier") or ""),
                "api_urls": _as_list("api_urls", _pick(entry, "api_urls", "ApiUrls")),
                "nonce_difference": _as_int(
                    "nonce_difference", _pick(entry, "nonce_difference", "NonceDifference") or 0
                ),
                "polling_time_s": _polling_time(entry),
            }
            for entry in _entries(alarms_cfg, "node_nonce", "NodeNonce")
        ],
    }

    normalized["notifiers"] = {
        "pushover": [
            {
                "token": str(_pick(entry, "token", "Token") or ""),
                "user": str(_pick(entry, "user", "User") or ""),
            }
            for entry in _entries(notifiers_cfg, "pushover", "Pushover")
        ],
        "log": {"enabled": bool(log_notifier_cfg.get("enabled", False))},
    }
    return normalized


def _pick(section: dict[str, Any], key: str, legacy_key: str) -> Any:
    if key in section:
        return section[key]
    return section.get(legacy_key)


def _entries(section: dict[str, Any], key: str, legacy_key: str) -> list[dict[str, Any]]:
    entries = _as_list(key, _pick(section, key, legacy_key))
    return [dict(entry) for entry in entries if isinstance(entry, dict)]


def _polling_time(entry: dict[str, Any]) -> float:
    value = _pick(entry, "polling_time_s", "PollingTimeInSeconds")
    return _as_float("polling_time_s", value if value is not None else DEFAULT_POLLING_TIME_S)


def _as_float(field: str, value: Any) -> float:
    if isinstance(value, bool):
        raise InvalidParameterError(field, value)
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise InvalidParameterError(field, value) from exc


def _as_int(field: str, value: Any) -> int:
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise InvalidParameterError(field, value)
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise InvalidParameterError(field, value) from exc


def _as_dict(field: str, value: Any) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise InvalidParameterError(field, value)
    return dict(value)


def _as_list(field: str, value: Any) -> list[Any]:
    if value is None:
        return []
    if not isinstance(value, (list, tuple)):
        raise InvalidParameterError(field, value)
    return list(value)


def _time_of_day_text(value: Any) -> str:
    # YAML 1.1 reads an unquoted 11:00:00 as the sexagesimal integer 39600.
    if isinstance(value, int) and not isinstance(value, bool):
        hours, remainder = divmod(value, 3600)
        minutes, seconds = divmod(remainder, 60)
        return f"{hours:02d}:{minutes:02d}:{seconds:02d}"
    if value is None:
        return ""
    return str(value)
