"""Notification channels receiving alarm results."""

from services.notifiers.log_notifier import LogNotifier
from services.notifiers.pushover import PushoverNotifier

__all__ = ["LogNotifier", "PushoverNotifier"]
