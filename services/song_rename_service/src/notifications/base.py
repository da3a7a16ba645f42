"""Notification abstractions for scan and batch outcomes."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any


class Severity(Enum):
    """Severity of a user-facing notification."""

    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class Notification:
    """A single user-facing notification."""

    severity: Severity
    title: str
    description: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))

    def to_dict(self) -> dict[str, Any]:
        """Convert notification to dictionary."""
        return {
            "severity": self.severity.value,
            "title": self.title,
            "description": self.description,
            "timestamp": self.timestamp.isoformat(),
        }


class NotificationSink(ABC):
    """Destination for user-facing notifications.

    Delivery is fire-and-forget: callers do not wait on or react to the result.
    """

    @abstractmethod
    def notify(self, notification: Notification) -> None:
        """Deliver a notification.

        Args:
            notification: The notification to deliver
        """
