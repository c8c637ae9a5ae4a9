"""Transport contract shared by every socket implementation.

A transport owns one socket and exposes the small surface the connection
manager relies on:

    sid         backend/session identifier (None until known)
    connected   True while the socket is usable
    on()        register a handler for an inbound or lifecycle event
    emit()      queue an outbound event (fire-and-forget, order preserved)
    open()      one connect attempt; raises on failure
    close()     flush queued emits (bounded) and disconnect
    notify()    deliver an event to registered handlers

Lifecycle events delivered through the same handler registry:
    connect, connect_error, disconnect
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, Protocol, runtime_checkable

logger = logging.getLogger(__name__)

EventHandler = Callable[[Any], Any]

CONNECT_EVENT = "connect"
CONNECT_ERROR_EVENT = "connect_error"
DISCONNECT_EVENT = "disconnect"
LIFECYCLE_EVENTS: frozenset[str] = frozenset({CONNECT_EVENT, CONNECT_ERROR_EVENT, DISCONNECT_EVENT})


@runtime_checkable
class Transport(Protocol):
    @property
    def sid(self) -> str | None: ...

    @property
    def connected(self) -> bool: ...

    def on(self, event: str, handler: EventHandler) -> None: ...

    def emit(self, event: str, payload: Any = None) -> None: ...

    def notify(self, event: str, data: Any = None) -> None: ...

    async def open(self) -> None: ...

    async def close(self) -> None: ...


class BaseTransport:
    """Handler registry shared by concrete transports."""

    def __init__(self) -> None:
        self._handlers: dict[str, list[EventHandler]] = {}

    def on(self, event: str, handler: EventHandler) -> None:
        self._handlers.setdefault(event, []).append(handler)

    def notify(self, event: str, data: Any = None) -> None:
        """Run every handler for ``event`` in registration order.

        A failing handler is logged and does not prevent the remaining
        handlers from running.
        """
        for handler in list(self._handlers.get(event, ())):
            try:
                handler(data)
            except Exception:
                logger.exception("Handler for %r failed", event)


__all__ = [
    "EventHandler",
    "Transport",
    "BaseTransport",
    "CONNECT_EVENT",
    "CONNECT_ERROR_EVENT",
    "DISCONNECT_EVENT",
    "LIFECYCLE_EVENTS",
]
