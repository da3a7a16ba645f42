"""Concrete notification sinks."""

from collections.abc import Callable

import structlog

from .base import Notification, NotificationSink, Severity

logger = structlog.get_logger(__name__)

_LOG_METHODS = {
    Severity.INFO: "info",
    Severity.SUCCESS: "info",
    Severity.WARNING: "warning",
    Severity.ERROR: "error",
}


class LoggingNotificationSink(NotificationSink):
    """Writes notifications to the structured log."""

    def notify(self, notification: Notification) -> None:
        log = getattr(logger, _LOG_METHODS[notification.severity])
        log(
            notification.title,
            description=notification.description,
            severity=notification.severity.value,
        )


class CallbackNotificationSink(NotificationSink):
    """Forwards notifications to a host callback, such as a UI toast function."""

    def __init__(self, callback: Callable[[Notification], None]) -> None:
        self.callback = callback

    def notify(self, notification: Notification) -> None:
        self.callback(notification)


class CollectingNotificationSink(NotificationSink):
    """Keeps every notification in memory, newest last."""

    def __init__(self) -> None:
        self.notifications: list[Notification] = []

    def notify(self, notification: Notification) -> None:
        self.notifications.append(notification)

    @property
    def last(self) -> Notification | None:
        return self.notifications[-1] if self.notifications else None
