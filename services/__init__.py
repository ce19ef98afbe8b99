"""Polling handler and the alarm, notifier and transport services it drives."""

from services.polling_handler import PollingHandler

__all__ = ["PollingHandler"]
