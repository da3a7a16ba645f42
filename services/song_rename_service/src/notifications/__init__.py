"""User-facing notifications for the song rename service."""

from .base import Notification, NotificationSink, Severity
from .sinks import CallbackNotificationSink, CollectingNotificationSink, LoggingNotificationSink

__all__ = [
    "CallbackNotificationSink",
    "CollectingNotificationSink",
    "LoggingNotificationSink",
    "Notification",
    "NotificationSink",
    "Severity",
]
