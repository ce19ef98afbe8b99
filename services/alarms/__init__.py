"""Alarm implementations polled by the polling handler."""

from services.alarms.base import PollingAlarm
from services.alarms.node_nonce import NodeNonceAlarm
from services.alarms.node_rating import NodeRatingAlarm

__all__ = ["NodeNonceAlarm", "NodeRatingAlarm", "PollingAlarm"]
