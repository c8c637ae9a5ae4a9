"""Socket.IO transport backed by ``socketio.AsyncClient``.

Reconnection after the first successful connect is delegated to the
Socket.IO client with a fixed delay: ``reconnection_delay`` equals
``reconnection_delay_max`` and jitter is disabled. The first connect is a
single attempt; the connection manager owns the retry loop for it.

Raw ``connect_error``/``disconnect`` callbacks from the client are forwarded
only once the transport has been opened and is not closing, so a failed
initial attempt is reported once (by the manager) and a client-initiated
close does not look like a dropped connection.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import Any

import socketio
from socketio.exceptions import ConnectionError as SocketIOConnectionError

from ..settings import ConnectionOptions
from .base import (
    BaseTransport,
    CONNECT_EVENT,
    CONNECT_ERROR_EVENT,
    DISCONNECT_EVENT,
    LIFECYCLE_EVENTS,
)

logger = logging.getLogger(__name__)


class SocketIOTransport(BaseTransport):
    """Socket.IO client wrapped in the transport contract."""

    def __init__(
        self,
        url: str,
        options: ConnectionOptions,
        *,
        client: socketio.AsyncClient | None = None,
    ) -> None:
        super().__init__()
        self._url = url
        self._options = options
        self._client = client or socketio.AsyncClient(
            reconnection=options.reconnection_attempts > 0,
            reconnection_attempts=options.reconnection_attempts,
            reconnection_delay=options.reconnection_delay_s,
            reconnection_delay_max=options.reconnection_delay_s,
            randomization_factor=0,
            logger=False,
            engineio_logger=False,
        )
        self._bridged: set[str] = set()
        self._pending: set[asyncio.Task] = set()
        self._opened = False
        self._closing = False
        self._link_up = False
        for event in LIFECYCLE_EVENTS:
            self._bridge(event)

    @property
    def sid(self) -> str | None:
        return self._client.get_sid()

    @property
    def connected(self) -> bool:
        # The client flips its own flag only after the connect handler returns
        return self._link_up and not self._closing

    def on(self, event: str, handler) -> None:
        super().on(event, handler)
        self._bridge(event)

    def _bridge(self, event: str) -> None:
        if event not in self._bridged:
            self._bridged.add(event)
            self._client.on(event, self._make_bridge(event))

    def _make_bridge(self, event: str):
        def bridge(*args: Any) -> None:
            if event == CONNECT_EVENT:
                self._link_up = True
            elif event in (CONNECT_ERROR_EVENT, DISCONNECT_EVENT):
                self._link_up = False
            if event in (CONNECT_ERROR_EVENT, DISCONNECT_EVENT) and (not self._opened or self._closing):
                logger.debug("Suppressing %s outside the open session", event)
                return
            data = args[0] if args else None
            self.notify(event, data)

        return bridge

    def emit(self, event: str, payload: Any = None) -> None:
        if event in LIFECYCLE_EVENTS:
            raise ValueError(f"{event!r} is reserved for lifecycle notifications")
        task = asyncio.get_running_loop().create_task(self._client.emit(event, payload))
        self._pending.add(task)
        task.add_done_callback(self._on_emit_done)

    def _on_emit_done(self, task: asyncio.Task) -> None:
        self._pending.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.warning("Socket.IO emit failed: %s", exc)

    async def open(self) -> None:
        try:
            await asyncio.wait_for(
                self._client.connect(
                    self._url,
                    socketio_path=self._options.socketio_path,
                    wait_timeout=self._options.connect_timeout_s,
                ),
                timeout=self._options.connect_timeout_s,
            )
        except (asyncio.TimeoutError, SocketIOConnectionError):
            # Leave the client reusable for the next attempt
            with contextlib.suppress(Exception):
                await self._client.disconnect()
            raise
        self._opened = True

    async def close(self) -> None:
        if self._closing:
            return
        self._closing = True
        if self._pending:
            _done, pending = await asyncio.wait(set(self._pending), timeout=self._options.close_timeout_s)
            for task in pending:
                task.cancel()
            if pending:
                logger.warning("Dropped %d queued event(s) on close", len(pending))
        try:
            await self._client.disconnect()
        except Exception as exc:  # noqa: BLE001
            logger.warning("Socket.IO disconnect failed: %s", exc)


__all__ = ["SocketIOTransport"]
