"""Backend session lifecycle errors."""

from __future__ import annotations

from .base import ChatWidgetError


class SessionDeleteError(ChatWidgetError):
    """Raised by a delete notifier when the backend did not accept the request.

    Teardown catches and logs it; it is never surfaced to the user.
    """

    def __init__(self, session_id: str, reason: str, *, status_code: int | None = None):
        self.session_id = session_id
        self.reason = reason
        self.status_code = status_code
        status = f" (status={status_code})" if status_code is not None else ""
        super().__init__(f"Failed to delete session {session_id}{status}: {reason}")


__all__ = ["SessionDeleteError"]
