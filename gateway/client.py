"""HTTP client construction for the backend API."""
from typing import Optional

import httpx

from core.config import settings


def create_http_client(
    base_url: Optional[str] = None,
    timeout: Optional[float] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    """
    Create the async client shared by the repositories.

    Args:
        base_url: Backend API root; defaults to settings.api_base_url
        timeout: Request timeout in seconds; defaults to
            settings.request_timeout_seconds, where None disables it
        transport: Optional transport override (e.g. httpx.MockTransport)

    Returns:
        Configured httpx.AsyncClient. The caller owns its lifetime.
    """
    if timeout is None:
        timeout = settings.request_timeout_seconds

    return httpx.AsyncClient(
        base_url=base_url or settings.api_base_url,
        timeout=httpx.Timeout(timeout),
        headers={"Accept": "application/json"},
        transport=transport,
    )
