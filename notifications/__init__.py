"""Transient user notifications."""

from .queue import Notification, NotificationQueue, get_notification_queue
from .reporting import describe_failure, failure_type, report_failure, reporting
from .scheduling import AsyncioScheduler, Scheduler, ThreadingScheduler, VirtualClock

__all__ = [
    "Notification",
    "NotificationQueue",
    "get_notification_queue",
    "describe_failure",
    "failure_type",
    "report_failure",
    "reporting",
    "AsyncioScheduler",
    "Scheduler",
    "ThreadingScheduler",
    "VirtualClock",
]
