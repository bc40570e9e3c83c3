"""
Ephemeral notification queue.

Holds the transient messages shown to the user after gateway operations.
Entries are kept in insertion order and removed either explicitly or when
their expiry timer fires. A timer whose entry is already gone does nothing.
"""
import itertools
import threading
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, List, Optional, Tuple, Union

from core.config import settings
from core.logging import get_logger
from core.utils_datetime import current_millis, get_current_datetime
from domain.enums import NotificationType
from notifications.scheduling import Scheduler, ThreadingScheduler


logger = get_logger(__name__)

DEFAULT_TIMEOUT_MS = 5000


@dataclass(frozen=True)
class Notification:
    """A message waiting to be displayed."""
    id: str
    message: str
    type: NotificationType
    timeout: int  # ms before auto-removal; <= 0 never expires
    created_at: datetime = field(default_factory=get_current_datetime)

    @property
    def expires(self) -> bool:
        return self.timeout > 0


Snapshot = Tuple[Notification, ...]
Listener = Callable[[Snapshot], None]


class NotificationQueue:
    """Ordered, thread-safe collection of notifications with timed expiry."""

    def __init__(
        self,
        scheduler: Optional[Scheduler] = None,
        default_timeout_ms: Optional[int] = None,
    ):
        """
        Initialize the queue.

        Args:
            scheduler: Timer capability used for expiry; defaults to
                ThreadingScheduler
            default_timeout_ms: Timeout applied when add() gets none;
                defaults to settings.notification_default_timeout_ms
        """
        self._scheduler = scheduler or ThreadingScheduler()
        if default_timeout_ms is None:
            default_timeout_ms = settings.notification_default_timeout_ms
        self.default_timeout_ms = default_timeout_ms

        self._entries: List[Notification] = []
        self._listeners: List[Listener] = []
        self._sequence = itertools.count(1)
        self._lock = threading.RLock()

    @property
    def notifications(self) -> Snapshot:
        """Current notifications, oldest first."""
        with self._lock:
            return tuple(self._entries)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, notification_id: object) -> bool:
        with self._lock:
            return any(n.id == notification_id for n in self._entries)

    def add(
        self,
        message: str,
        notification_type: Union[NotificationType, str] = NotificationType.INFO,
        timeout: Optional[int] = None,
    ) -> str:
        """
        Append a notification and schedule its expiry.

        Args:
            message: Text to display
            notification_type: success, error, info or warning
            timeout: Milliseconds before auto-removal; None uses the default,
                zero or negative keeps it until removed

        Returns:
            Identifier of the new notification
        """
        notification_type = NotificationType(notification_type)
        if timeout is None:
            timeout = self.default_timeout_ms

        with self._lock:
            notification = Notification(
                id=f"{current_millis()}-{next(self._sequence)}",
                message=message,
                type=notification_type,
                timeout=timeout,
            )
            self._entries.append(notification)

            if notification.expires:
                self._scheduler.call_later(timeout, lambda: self.remove(notification.id))

            self._publish()

        logger.debug(f"Notification {notification.id} added ({notification_type.value})")
        return notification.id

    def remove(self, notification_id: str) -> None:
        """Remove a notification; unknown ids are ignored."""
        with self._lock:
            for index, notification in enumerate(self._entries):
                if notification.id == notification_id:
                    del self._entries[index]
                    self._publish()
                    return

    def clear_all(self) -> None:
        """Remove every notification. Pending timers become no-ops."""
        with self._lock:
            if not self._entries:
                return
            self._entries = []
            self._publish()

    def success(self, message: str, timeout: int = DEFAULT_TIMEOUT_MS) -> str:
        return self.add(message, NotificationType.SUCCESS, timeout)

    def error(self, message: str, timeout: int = DEFAULT_TIMEOUT_MS) -> str:
        return self.add(message, NotificationType.ERROR, timeout)

    def info(self, message: str, timeout: int = DEFAULT_TIMEOUT_MS) -> str:
        return self.add(message, NotificationType.INFO, timeout)

    def warning(self, message: str, timeout: int = DEFAULT_TIMEOUT_MS) -> str:
        return self.add(message, NotificationType.WARNING, timeout)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Call ``listener`` with the new snapshot after every change.

        Returns:
            Function that unsubscribes the listener
        """
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def _publish(self) -> None:
        # Called with the lock held so listeners see changes in order
        snapshot = tuple(self._entries)
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception as e:
                logger.error(f"Notification listener failed: {e}", exc_info=True)


_notification_queue_instance: Optional[NotificationQueue] = None


def get_notification_queue() -> NotificationQueue:
    """Get or create the process-wide notification queue."""
    global _notification_queue_instance
    if _notification_queue_instance is None:
        _notification_queue_instance = NotificationQueue()
    return _notification_queue_instance
