from typing import Optional


class RosterServiceError(Exception):
    """Base class for failures talking to the remote student API."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class NetworkError(RosterServiceError):
    """Transport failure, unexpected status code or unreadable response."""


class ServerValidationError(RosterServiceError):
    """The server rejected the submitted student fields."""


class NotFoundError(RosterServiceError):
    """The targeted student no longer exists on the server."""
