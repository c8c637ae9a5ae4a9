"""Connection lifecycle: one live handle per manager.

ConnectionHandle wraps a transport and adds the session-level rules:

1. ``startChat`` is emitted on every transport-level ``connect`` before any
   caller handler runs (the handle registers its own handler first).
2. The first connect is retried up to ``reconnection_attempts`` times with a
   fixed delay; each failure is reported through ``connect_error`` handlers.
   Exhaustion raises ConnectionFailedError.
3. ``notify_session_deleted()`` is best-effort: failures are logged only.
4. ``close()`` is idempotent.

ConnectionManager refuses to create a second handle while one is live.

Usage:
    manager = ConnectionManager()
    handle = await manager.connect(url, options, handlers={"response": on_response})
    handle.emit("message", {"message": "hi"})
    await handle.notify_session_deleted()
    await manager.close()
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Mapping
from typing import Any

from ..errors import ConnectionFailedError, ConnectionStateError
from ..settings import ConnectionOptions
from ..transport import (
    CONNECT_ERROR_EVENT,
    CONNECT_EVENT,
    EventHandler,
    Transport,
    create_transport,
)
from .session_delete import EventSessionDeleter, SessionDeleter

logger = logging.getLogger(__name__)

START_CHAT_EVENT = "startChat"

TransportFactory = Callable[[str, ConnectionOptions], Transport]


class ConnectionHandle:
    """One socket session with the assistant backend."""

    def __init__(
        self,
        transport: Transport,
        *,
        endpoint: str,
        options: ConnectionOptions,
        deleter: SessionDeleter | None = None,
    ) -> None:
        self._transport = transport
        self._endpoint = endpoint
        self._options = options
        self._deleter = deleter or EventSessionDeleter()
        self._closed = False
        self._connections = 0
        transport.on(CONNECT_EVENT, self._on_transport_connect)

    @property
    def sid(self) -> str | None:
        return self._transport.sid

    @property
    def connected(self) -> bool:
        return not self._closed and self._transport.connected

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def connection_count(self) -> int:
        """Number of successful transport-level connects so far."""
        return self._connections

    def on(self, event: str, handler: EventHandler) -> None:
        self._transport.on(event, handler)

    def emit(self, event: str, payload: Any = None) -> bool:
        """Queue an outbound event.

        Returns False (and drops the event) while the socket is not connected.

        Raises:
            ConnectionStateError: If the handle was closed.
        """
        if self._closed:
            raise ConnectionStateError(f"cannot emit {event!r} on a closed connection")
        if not self._transport.connected:
            logger.debug("Dropping %r while disconnected", event)
            return False
        self._transport.emit(event, payload)
        return True

    def _on_transport_connect(self, _data: Any) -> None:
        self._connections += 1
        logger.info("Connected to %s (sid=%s)", self._endpoint, self.sid)
        self._transport.emit(START_CHAT_EVENT)

    async def open(self) -> None:
        """Connect, retrying the first attempt per the reconnection policy.

        Raises:
            ConnectionFailedError: When every allowed attempt failed.
            ConnectionStateError: If the handle was closed.
        """
        if self._closed:
            raise ConnectionStateError("cannot open a closed connection")
        max_attempts = 1 + self._options.reconnection_attempts
        last_error: BaseException | None = None
        for attempt in range(1, max_attempts + 1):
            try:
                await self._transport.open()
                return
            except asyncio.CancelledError:
                raise
            except Exception as exc:  # noqa: BLE001
                last_error = exc
                logger.warning(
                    "Connect attempt %d/%d to %s failed: %s",
                    attempt,
                    max_attempts,
                    self._endpoint,
                    exc,
                )
                self._transport.notify(CONNECT_ERROR_EVENT, str(exc))
            if attempt < max_attempts:
                await asyncio.sleep(self._options.reconnection_delay_s)
        raise ConnectionFailedError(self._endpoint, max_attempts, last_error)

    async def notify_session_deleted(self) -> bool:
        """Ask the backend to drop this session. Never raises (except cancellation)."""
        session_id = self.sid
        if self._closed or session_id is None:
            logger.debug("No backend session to delete")
            return False
        try:
            await self._deleter.delete(self._transport, session_id)
        except asyncio.CancelledError:
            raise
        except Exception as exc:  # noqa: BLE001
            logger.warning("Failed to delete session %s: %s", session_id, exc)
            return False
        logger.info("Requested deletion of session %s", session_id)
        return True

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            await self._transport.close()
        except asyncio.CancelledError:
            raise
        except Exception as exc:  # noqa: BLE001
            logger.warning("Error while closing connection: %s", exc)
        logger.info("Connection to %s closed", self._endpoint)


class ConnectionManager:
    """Creates and owns at most one live ConnectionHandle."""

    def __init__(self, transport_factory: TransportFactory | None = None) -> None:
        self._transport_factory = transport_factory or create_transport
        self._handle: ConnectionHandle | None = None

    @property
    def handle(self) -> ConnectionHandle | None:
        return self._handle

    async def connect(
        self,
        endpoint: str,
        options: ConnectionOptions | None = None,
        *,
        handlers: Mapping[str, EventHandler] | None = None,
        deleter: SessionDeleter | None = None,
    ) -> ConnectionHandle:
        """Create a handle, register ``handlers`` and open it.

        The handle is reachable through ``self.handle`` as soon as it exists,
        so a concurrent ``close()`` can abort a connect still in progress.

        Raises:
            ConnectionStateError: If a live handle already exists.
            ConnectionFailedError: When the connect retry budget is exhausted.
        """
        if self._handle is not None and not self._handle.closed:
            raise ConnectionStateError("a live connection already exists for this controller")
        options = options or ConnectionOptions()
        transport = self._transport_factory(endpoint, options)
        handle = ConnectionHandle(transport, endpoint=endpoint, options=options, deleter=deleter)
        for event, handler in (handlers or {}).items():
            handle.on(event, handler)
        self._handle = handle
        await handle.open()
        return handle

    async def close(self) -> None:
        if self._handle is None:
            return
        await self._handle.close()


__all__ = [
    "START_CHAT_EVENT",
    "TransportFactory",
    "ConnectionHandle",
    "ConnectionManager",
]
