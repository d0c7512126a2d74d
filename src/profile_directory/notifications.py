# ABOUTME: Transient, timed notifications raised in response to controller outcomes.
# ABOUTME: Notifications expire after a fixed duration and can be dismissed early.

import time
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from uuid import uuid4

DEFAULT_DURATION_SECONDS = 5.0


class NotificationKind(str, Enum):
    """Severity of a notification."""

    SUCCESS = "success"
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass(frozen=True)
class Notification:
    """A single message shown to the user until it expires."""

    id: str
    kind: NotificationKind
    message: str
    created_at: float
    expires_at: float


class NotificationCenter:
    """Holds the currently visible notifications for a session."""

    def __init__(
        self,
        duration_seconds: float = DEFAULT_DURATION_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the notification center.

        Args:
            duration_seconds: How long each notification stays visible.
            clock: Monotonic time source, replaceable in tests.
        """
        self.duration_seconds = duration_seconds
        self._clock = clock
        self._notifications: list[Notification] = []

    def add(self, kind: NotificationKind, message: str) -> str:
        """Show a notification.

        Returns:
            The id of the new notification.
        """
        now = self._clock()
        notification = Notification(
            id=uuid4().hex[:7],
            kind=kind,
            message=message,
            created_at=now,
            expires_at=now + self.duration_seconds,
        )
        self._notifications.append(notification)
        return notification.id

    def success(self, message: str) -> str:
        return self.add(NotificationKind.SUCCESS, message)

    def error(self, message: str) -> str:
        return self.add(NotificationKind.ERROR, message)

    def warning(self, message: str) -> str:
        return self.add(NotificationKind.WARNING, message)

    def info(self, message: str) -> str:
        return self.add(NotificationKind.INFO, message)

    def remove(self, notification_id: str) -> None:
        """Dismiss a notification before it expires."""
        self._notifications = [n for n in self._notifications if n.id != notification_id]

    def clear(self) -> None:
        self._notifications = []

    def active(self, now: float | None = None) -> list[Notification]:
        """Return unexpired notifications, oldest first, pruning expired ones.

        Args:
            now: Time to evaluate expiry at. Defaults to the clock.
        """
        current = self._clock() if now is None else now
        self._notifications = [n for n in self._notifications if n.expires_at > current]
        return list(self._notifications)
