"""
Error taxonomy for the satellite list client.

Two families cover most failures:

- ValidationError: raised before any request is issued, when input is missing
  or malformed.
- RemoteError: raised for every non-success HTTP outcome, carrying the status
  text and, when the server sent one, its own error message.

RequestDigestError is raised when a mutating call cannot obtain the
anti-forgery token. TransportError is raised when no HTTP response arrived at
all, for example on a refused connection or a timeout.
"""

from __future__ import annotations

from typing import Optional


class SatelliteClientError(Exception):
    """Base class for all errors raised by this package."""


class ValidationError(SatelliteClientError, ValueError):
    """Client-side input error; never reaches the network."""

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.field = field


class RequestDigestError(SatelliteClientError):
    """The request digest (anti-forgery token) is not available."""


class RemoteError(SatelliteClientError):
    """
    A request completed with a non-success HTTP status.

    Attributes
    ----------
    status_code : int
        HTTP status returned by the server.
    reason : str
        HTTP status text (e.g. "Not Found").
    server_message : str | None
        Message extracted from the server's error payload, if any.
    """

    def __init__(
        self,
        action: str,
        status_code: int,
        reason: str,
        server_message: Optional[str] = None,
        method: Optional[str] = None,
        url: Optional[str] = None,
    ) -> None:
        self.action = action
        self.status_code = status_code
        self.reason = reason
        self.server_message = server_message
        self.method = method
        self.url = url
        detail = f"{status_code} {reason}".strip()
        message = f"{action}: {detail}"
        if server_message:
            message = f"{message} - {server_message}"
        super().__init__(message)
        self.message = message


class TransportError(SatelliteClientError):
    """
    The request never produced an HTTP response.

    The underlying `httpx` exception is chained as `__cause__`.
    """

    def __init__(
        self,
        action: str,
        reason: str,
        method: Optional[str] = None,
        url: Optional[str] = None,
    ) -> None:
        self.action = action
        self.reason = reason
        self.method = method
        self.url = url
        message = f"{action}: {reason}"
        super().__init__(message)
        self.message = message


__all__ = [
    "SatelliteClientError",
    "ValidationError",
    "RequestDigestError",
    "RemoteError",
    "TransportError",
]
