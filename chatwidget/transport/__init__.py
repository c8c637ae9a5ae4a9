"""Socket transports implementing the shared ``Transport`` contract."""

from __future__ import annotations

from ..settings import ConnectionOptions
from .base import (
    BaseTransport,
    EventHandler,
    Transport,
    CONNECT_EVENT,
    CONNECT_ERROR_EVENT,
    DISCONNECT_EVENT,
    LIFECYCLE_EVENTS,
)
from .envelope import decode_envelope, encode_envelope


def create_transport(endpoint: str, options: ConnectionOptions) -> Transport:
    """Build the transport selected by ``options.transport``.

    Imports are deferred so only the selected client library is loaded.
    """
    if options.transport == "websocket":
        from .websocket import WebSocketTransport  # noqa: PLC0415

        return WebSocketTransport(endpoint, options)
    from .sio import SocketIOTransport  # noqa: PLC0415

    return SocketIOTransport(endpoint, options)


__all__ = [
    "BaseTransport",
    "EventHandler",
    "Transport",
    "CONNECT_EVENT",
    "CONNECT_ERROR_EVENT",
    "DISCONNECT_EVENT",
    "LIFECYCLE_EVENTS",
    "decode_envelope",
    "encode_envelope",
    "create_transport",
]
