"""Command-line entry point for the node monitor."""

from __future__ import annotations

import argparse
from pathlib import Path
import signal
import sys
import threading

import yaml

from config import ConfigController
from core.errors import ConfigError
from core.logging import enable_file_logging, logger, set_level


def parse_args(argv: list[str]) -> argparse.Namespace:
    """Parse command-line arguments.

    Args:
        argv: Raw command-line arguments.

    Returns:
        Parsed arguments namespace.
    """

    parser = argparse.ArgumentParser(
        description="Poll node alarms and push triggered results to notifiers."
    )
    parser.add_argument(
        "--config",
        type=str,
        default="default.yaml",
        help="Config file name inside the config directory.",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Override the configured logging level.",
    )
    parser.add_argument(
        "--diagnostics",
        action="store_true",
        help="Run diagnostics probes and exit.",
    )
    return parser.parse_args(argv)


def run_diagnostics_report(config_file: str) -> int:
    from config.diagnostics import probe as config_probe
    from core.diagnostics import probe as core_probe
    from diagnostics.runner import format_results, has_failures, run_diagnostics
    from services.diagnostics import probe as services_probe

    def config_probe_with_file():
        return config_probe(config_file=config_file)

    results = run_diagnostics([config_probe_with_file, core_probe, services_probe])
    print(format_results(results))
    return 1 if has_failures(results) else 0


def main(argv: list[str] | None = None) -> int:
    """Application entry point.

    Args:
        argv: Optional list of command-line arguments.

    Returns:
        Process exit code.
    """

    if argv is None:
        argv = sys.argv[1:]

    args = parse_args(argv)
    try:
        config = ConfigController.get_instance(args.config).get_config()
    except (OSError, ConfigError, yaml.YAMLError) as exc:
        logger.error("Could not load configuration: %s", exc)
        return 1

    set_level(args.log_level or config.get("logging_level", "INFO"))
    if args.diagnostics:
        return run_diagnostics_report(args.config)

    if config.get("file_logging_enabled", False):
        log_file_path = Path(config["log_file"])
        enable_file_logging(log_file_path)
        logger.info("Writing logs to %s", log_file_path)

    from services.factory import build_polling_handler

    try:
        polling_handler = build_polling_handler(config)
    except ConfigError as exc:
        logger.error("Node monitor could not start: %s", exc)
        return 1

    shutdown = threading.Event()

    def _request_shutdown(signum, _frame) -> None:
        logger.info("Received signal %s, stopping...", signum)
        shutdown.set()

    signal.signal(signal.SIGTERM, _request_shutdown)
    logger.info("Node monitor started. Press Ctrl+C to stop.")
    try:
        while not shutdown.wait(timeout=1.0):
            pass
    except KeyboardInterrupt:
        logger.info("Program terminated by user")
    finally:
        polling_handler.close()
        polling_handler.join(timeout_s=5.0)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
