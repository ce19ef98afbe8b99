"""Configuration errors raised while building the polling handler."""

from __future__ import annotations


class ConfigError(ValueError):
    """Base class for construction-time configuration failures."""


class NoAlarmsError(ConfigError):
    def __init__(self) -> None:
        super().__init__("no alarms set")


class NoNotifiersError(ConfigError):
    def __init__(self) -> None:
        super().__init__("no active notifiers")


class NilAlarmError(ConfigError):
    """An alarm entry is missing or does not implement the Alarm contract."""

    def __init__(self, index: int) -> None:
        self.index = index
        super().__init__(f"nil alarm handler at index {index}")


class NilNotifierError(ConfigError):
    """A notifier entry is missing or does not implement the Notifier contract."""

    def __init__(self, index: int) -> None:
        self.index = index
        super().__init__(f"nil notifier at index {index}")


class InvalidParameterError(ConfigError):
    """A configuration value is outside of its allowed range or format."""

    def __init__(self, field: str, value: object, interval: str | None = None) -> None:
        self.field = field
        self.value = value
        self.interval = interval
        if interval:
            message = f"invalid value for {field}: interval {interval}, got {value!r}"
        else:
            message = f"invalid value for {field}: got {value!r}"
        super().__init__(message)
