"""Backend-originated error types."""

from __future__ import annotations

from typing import Any

from .base import ChatWidgetError


class ServerError(ChatWidgetError):
    """An explicit ``error`` event from the assistant backend."""

    def __init__(self, message: str, *, extra: dict[str, Any] | None = None):
        self.message = message
        self.extra = extra or {}
        super().__init__(message)

    @classmethod
    def from_payload(cls, payload: Any, *, fallback: str) -> ServerError:
        """Build an error from an ``error`` event payload.

        The backend sends ``{"message": "..."}``; anything without a usable
        message text (missing, blank, non-string, non-dict payload) gets the
        fallback text.
        """
        if isinstance(payload, dict):
            message = payload.get("message")
            extra = {k: v for k, v in payload.items() if k != "message"}
        else:
            message = payload if isinstance(payload, str) else None
            extra = {}
        if not isinstance(message, str) or not message.strip():
            message = fallback
        return cls(message, extra=extra)

    def format_for_user(self) -> str:
        return self.message


__all__ = ["ServerError"]
