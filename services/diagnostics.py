"""Diagnostics routines for the services subsystem."""

from __future__ import annotations

from typing import Any

from core.errors import ConfigError
from diagnostics.models import DiagnosticResult, DiagnosticStatus


def probe(config: dict[str, Any] | None = None) -> DiagnosticResult:
    """Build every configured alarm and notifier without starting the polling loop.

    Args:
        config: Optional normalized config; loaded from the controller when omitted.

    Returns:
        Diagnostic result indicating service readiness.
    """

    from services.factory import build_alarms, build_http_client, build_notifiers

    name = "services"
    try:
        if config is None:
            from config import ConfigController

            config = ConfigController.get_instance().get_config()
        http_client = build_http_client(config)
        alarms = build_alarms(config, http_client)
        notifiers = build_notifiers(config, http_client)
    except (ConfigError, KeyError, OSError, TypeError, ValueError) as exc:
        return DiagnosticResult(
            name=name,
            status=DiagnosticStatus.FAIL,
            details=f"Service construction failed: {exc}",
        )

    if not alarms or not notifiers:
        return DiagnosticResult(
            name=name,
            status=DiagnosticStatus.FAIL,
            details=f"Need at least one alarm and one notifier, got {len(alarms)} and {len(notifiers)}",
        )

    return DiagnosticResult(
        name=name,
        status=DiagnosticStatus.PASS,
        details=(
            f"Alarms: {', '.join(alarm.identifier() for alarm in alarms)}; "
            f"notifiers: {', '.join(type(notifier).__name__ for notifier in notifiers)}"
        ),
    )
