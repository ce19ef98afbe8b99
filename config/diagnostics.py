"""Diagnostics routines for the configuration subsystem."""

from __future__ import annotations

from pathlib import Path

import yaml

from core.errors import ConfigError
from diagnostics.models import DiagnosticResult, DiagnosticStatus


def probe(base_dir: Path | None = None, config_file: str = "default.yaml") -> DiagnosticResult:
    """Run a configuration probe to validate config file availability.

    Args:
        base_dir: Optional base directory for offline testing.
        config_file: Name of the config file inside the config directory.

    Returns:
        Diagnostic result indicating config readiness.
    """

    from config.controller import normalize_config, parse_time_of_day

    name = "config"
    try:
        root_dir = base_dir if base_dir is not None else Path.cwd()
        config_dir = root_dir / "config"
        config_path = config_dir / config_file

        if not config_dir.exists():
            return DiagnosticResult(
                name=name,
                status=DiagnosticStatus.FAIL,
                details=f"Config directory missing at {config_dir}",
            )

        if not config_path.exists():
            return DiagnosticResult(
                name=name,
                status=DiagnosticStatus.FAIL,
                details=f"Missing config at {config_path}",
            )

        config = normalize_config(yaml.safe_load(config_path.read_text(encoding="utf-8")) or {})
        parse_time_of_day(config["info_time_of_day"])
    except (OSError, yaml.YAMLError, ConfigError, TypeError, ValueError) as exc:
        return DiagnosticResult(
            name=name,
            status=DiagnosticStatus.FAIL,
            details=f"Config unusable: {exc}",
        )

    num_alarms = sum(len(entries) for entries in config["alarms"].values())
    num_notifiers = len(config["notifiers"]["pushover"]) + int(config["notifiers"]["log"]["enabled"])
    if num_alarms == 0 or num_notifiers == 0:
        return DiagnosticResult(
            name=name,
            status=DiagnosticStatus.WARN,
            details=f"Config readable but has {num_alarms} alarms and {num_notifiers} notifiers",
        )
    return DiagnosticResult(
        name=name,
        status=DiagnosticStatus.PASS,
        details=f"Config readable at {config_path} ({num_alarms} alarms, {num_notifiers} notifiers)",
    )
