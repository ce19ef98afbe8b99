"""Diagnostics routines for the core subsystem."""

from __future__ import annotations

from datetime import datetime

from diagnostics.models import DiagnosticResult, DiagnosticStatus


def probe() -> DiagnosticResult:
    """Run a core probe to validate logging and daily trigger readiness.

    Returns:
        Diagnostic result indicating core readiness.
    """

    name = "core"
    from core import logging as core_logging
    from core.daily_trigger import create_daily_trigger

    if core_logging.logger is None or not core_logging.logger.handlers:
        return DiagnosticResult(
            name=name,
            status=DiagnosticStatus.FAIL,
            details="Core logger failed to initialize",
        )

    trigger = create_daily_trigger(True, 0, 0, 0)
    if not trigger.is_time_of_day(datetime.now()):
        return DiagnosticResult(
            name=name,
            status=DiagnosticStatus.FAIL,
            details="Daily trigger did not fire for midnight",
        )
    return DiagnosticResult(
        name=name,
        status=DiagnosticStatus.PASS,
        details="Rich logging enabled; daily trigger ready",
    )
