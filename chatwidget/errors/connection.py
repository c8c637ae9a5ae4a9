"""Socket connection error types."""

from __future__ import annotations

from .base import ChatWidgetError


class ConnectionError(ChatWidgetError):
    """Base class for socket connection issues."""


class ConnectionFailedError(ConnectionError):
    """Raised when every connect attempt allowed by the retry policy failed."""

    def __init__(self, endpoint: str, attempts: int, last_error: BaseException | None = None):
        self.endpoint = endpoint
        self.attempts = attempts
        self.last_error = last_error
        detail = f": {last_error}" if last_error is not None else ""
        super().__init__(f"Could not connect to {endpoint} after {attempts} attempt(s){detail}")


class ConnectionStateError(ConnectionError):
    """Raised when an operation conflicts with the handle lifecycle.

    Examples: opening a second live handle on one manager, or emitting on a
    handle that has already been closed.
    """


__all__ = [
    "ConnectionError",
    "ConnectionFailedError",
    "ConnectionStateError",
]
