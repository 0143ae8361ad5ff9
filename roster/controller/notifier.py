import itertools
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Callable, List, Optional
from pydantic import BaseModel
from roster.config import settings


class NotificationLevel(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


class Notification(BaseModel):
    id: int
    level: NotificationLevel
    message: str
    created_at: datetime
    duration: float  # seconds

    @property
    def expires_at(self) -> datetime:
        return self.created_at + timedelta(seconds=self.duration)


def _now() -> datetime:
    return datetime.now(timezone.utc)


class Notifier:
    """Transient success/error messages, shown in insertion order.

    Notifications need no acknowledgement: they disappear once their display
    duration has elapsed or when dismissed.
    """

    def __init__(
        self,
        success_seconds: Optional[float] = None,
        error_seconds: Optional[float] = None,
        clock: Optional[Callable[[], datetime]] = None
    ):
        self.success_seconds = settings.success_toast_seconds if success_seconds is None else success_seconds
        self.error_seconds = settings.error_toast_seconds if error_seconds is None else error_seconds
        self._clock = clock or _now
        self._ids = itertools.count(1)
        self._notifications: List[Notification] = []

    def success(self, message: str) -> Notification:
        return self._push(NotificationLevel.SUCCESS, message, self.success_seconds)

    def error(self, message: str) -> Notification:
        return self._push(NotificationLevel.ERROR, message, self.error_seconds)

    def active(self, now: Optional[datetime] = None) -> List[Notification]:
        """Notifications still on display, oldest first."""
        now = now or self._clock()
        self._notifications = [n for n in self._notifications if n.expires_at > now]
        return list(self._notifications)

    def dismiss(self, notification_id: int) -> bool:
        self.active()
        remaining = [n for n in self._notifications if n.id != notification_id]
        dismissed = len(remaining) != len(self._notifications)
        self._notifications = remaining
        return dismissed

    def _push(self, level: NotificationLevel, message: str, duration: float) -> Notification:
        notification = Notification(
            id=next(self._ids),
            level=level,
            message=message,
            created_at=self._clock(),
            duration=duration
        )
        self._notifications.append(notification)
        return notification
