"""Errors raised by the gateway repositories."""
from typing import Optional


class GatewayError(Exception):
    """Base class for gateway failures."""
    pass


class ConnectivityError(GatewayError):
    """Raised before a request when no network path is available."""

    def __init__(self, endpoint: Optional[str] = None):
        self.endpoint = endpoint
        message = "No internet connection available"
        if endpoint:
            message += f" (API URL: {endpoint})"
        super().__init__(message)


class TransportError(GatewayError):
    """
    Raised when the backend answers with a non-success status.

    Carries the response details as fields so callers can render their
    own message; ``str()`` gives the full diagnostic text for logs.
    """

    def __init__(
        self,
        status_code: int,
        status_text: str = "",
        body: Optional[str] = None,
        endpoint: Optional[str] = None,
        method: Optional[str] = None,
        action: str = "requesting",
        resource: str = "resource",
    ):
        self.status_code = status_code
        self.status_text = status_text
        self.body = body
        self.endpoint = endpoint
        self.method = method
        self.action = action
        self.resource = resource
        super().__init__(self._render())

    def _render(self) -> str:
        message = f"Error {self.action} {self.resource} ({self.status_code}): {self.status_text}"
        if self.body:
            message += f". Details: {self.body}"
        if self.endpoint:
            message += f" (API URL: {self.endpoint})"
        return message

    @property
    def is_client_error(self) -> bool:
        return 400 <= self.status_code < 500

    @property
    def is_server_error(self) -> bool:
        return self.status_code >= 500
