"""
Route gateway outcomes into the notification queue.

Repositories only raise; calling code decides what the user sees. These
helpers render structured gateway errors as short messages and push them
with the category the application uses for each kind of failure.
"""
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import httpx

from domain.enums import NotificationType
from gateway.errors import ConnectivityError, GatewayError, TransportError
from notifications.queue import NotificationQueue


def describe_failure(exc: BaseException, action: Optional[str] = None) -> str:
    """
    Render a user-facing message for a failed operation.

    Args:
        exc: The exception raised by a repository
        action: What the user tried to do, e.g. "save the reservation"

    Returns:
        Human-readable message
    """
    prefix = f"Could not {action}" if action else "The request failed"

    if isinstance(exc, ConnectivityError):
        return f"{prefix}: no internet connection available."

    if isinstance(exc, TransportError):
        if exc.status_code == 404:
            reason = f"the {exc.resource} no longer exists"
        elif exc.is_server_error:
            reason = f"the server reported an error ({exc.status_code} {exc.status_text})"
        else:
            reason = f"the server rejected the request ({exc.status_code} {exc.status_text})"
        return f"{prefix}: {reason}."

    if isinstance(exc, httpx.HTTPError):
        return f"{prefix}: the server could not be reached."

    return f"{prefix}: {exc}"


def failure_type(exc: BaseException) -> NotificationType:
    """Connectivity and transport failures are warnings; everything else is an error."""
    if isinstance(exc, (ConnectivityError, httpx.HTTPError)):
        return NotificationType.WARNING
    return NotificationType.ERROR


def report_failure(queue: NotificationQueue, exc: BaseException, action: Optional[str] = None) -> str:
    """Push a failure notification and return its id."""
    return queue.add(describe_failure(exc, action), failure_type(exc))


@asynccontextmanager
async def reporting(
    queue: NotificationQueue,
    action: str,
    success_message: Optional[str] = None,
) -> AsyncIterator[None]:
    """
    Notify the user of the outcome of the wrapped gateway calls.

    Gateway errors and httpx transport failures are reported and re-raised.

    Example:
        async with reporting(queue, "save the reservation", "Reservation saved"):
            await reservations.create(reservation)
    """
    try:
        yield
    except (GatewayError, httpx.HTTPError) as e:
        report_failure(queue, e, action)
        raise
    if success_message:
        queue.success(success_message)
