"""Plain WebSocket transport using the ``websockets`` library.

Frames use the JSON envelope from ``envelope.py``. The client generates its
own session id (``chat-<uuid hex>``) and sends it as the ``session_id``
query parameter, so the backend can key the session before any frame is
exchanged.

Tasks per open connection:
    reader  decodes inbound envelopes and notifies handlers; on an
            unexpected close it fires ``disconnect`` and runs the bounded
            fixed-delay reconnect loop.
    writer  drains the outbound queue in FIFO order so emits keep the order
            in which they were issued.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import uuid
from collections.abc import Callable
from typing import Any

import websockets

from ..helpers.urls import normalize_ws_url
from ..settings import ConnectionOptions
from .base import (
    BaseTransport,
    CONNECT_EVENT,
    CONNECT_ERROR_EVENT,
    DISCONNECT_EVENT,
    LIFECYCLE_EVENTS,
)
from .envelope import decode_envelope, encode_envelope

logger = logging.getLogger(__name__)


def new_session_id() -> str:
    return f"chat-{uuid.uuid4().hex}"


class WebSocketTransport(BaseTransport):
    """JSON-envelope WebSocket client wrapped in the transport contract."""

    def __init__(
        self,
        url: str,
        options: ConnectionOptions,
        *,
        connect: Callable[..., Any] | None = None,
        session_id: str | None = None,
    ) -> None:
        super().__init__()
        self._options = options
        self._sid = session_id or new_session_id()
        self._url = normalize_ws_url(url, default_path=options.ws_path, session_id=self._sid)
        self._connect = connect or websockets.connect
        self._ws = None
        self._outbox: asyncio.Queue[str] = asyncio.Queue()
        self._reader_task: asyncio.Task | None = None
        self._writer_task: asyncio.Task | None = None
        self._closing = False

    @property
    def sid(self) -> str | None:
        return self._sid

    @property
    def url(self) -> str:
        return self._url

    @property
    def connected(self) -> bool:
        return self._ws is not None and not self._closing

    def emit(self, event: str, payload: Any = None) -> None:
        if event in LIFECYCLE_EVENTS:
            raise ValueError(f"{event!r} is reserved for lifecycle notifications")
        self._outbox.put_nowait(encode_envelope(event, payload))

    async def open(self) -> None:
        await self._open_socket()
        self._start_tasks()
        self.notify(CONNECT_EVENT)

    async def _open_socket(self) -> None:
        self._ws = await asyncio.wait_for(
            self._connect(
                self._url,
                max_queue=None,
                ping_interval=self._options.ws_ping_interval_s,
                ping_timeout=self._options.ws_ping_timeout_s,
            ),
            timeout=self._options.connect_timeout_s,
        )

    def _start_tasks(self) -> None:
        loop = asyncio.get_running_loop()
        if self._writer_task is None:
            self._writer_task = loop.create_task(self._writer_loop())
        self._reader_task = loop.create_task(self._reader_loop())

    async def _reader_loop(self) -> None:
        ws = self._ws
        try:
            async for raw in ws:
                decoded = decode_envelope(raw)
                if decoded is None:
                    logger.debug("Dropping malformed frame: %r", raw)
                    continue
                event, data = decoded
                if event in LIFECYCLE_EVENTS:
                    logger.debug("Ignoring reserved event %r from peer", event)
                    continue
                self.notify(event, data)
        except asyncio.CancelledError:
            raise
        except (websockets.ConnectionClosedError, websockets.ConnectionClosedOK) as exc:
            logger.info("WebSocket closed (code=%s)", getattr(exc, "code", None))
        except Exception as exc:  # noqa: BLE001
            logger.warning("WebSocket read failed: %s", exc)
        if self._closing:
            return
        self._ws = None
        self.notify(DISCONNECT_EVENT, "transport close")
        await self._reconnect()

    async def _reconnect(self) -> None:
        for attempt in range(1, self._options.reconnection_attempts + 1):
            await asyncio.sleep(self._options.reconnection_delay_s)
            if self._closing:
                return
            try:
                await self._open_socket()
            except asyncio.CancelledError:
                raise
            except Exception as exc:  # noqa: BLE001
                logger.warning(
                    "Reconnect attempt %d/%d failed: %s",
                    attempt,
                    self._options.reconnection_attempts,
                    exc,
                )
                self.notify(CONNECT_ERROR_EVENT, str(exc))
                continue
            logger.info("Reconnected on attempt %d", attempt)
            self._start_tasks()
            self.notify(CONNECT_EVENT)
            return
        logger.error("Giving up after %d reconnect attempt(s)", self._options.reconnection_attempts)

    async def _writer_loop(self) -> None:
        while True:
            frame = await self._outbox.get()
            try:
                ws = self._ws
                if ws is None:
                    logger.debug("Dropping frame while disconnected: %s", frame)
                    continue
                await ws.send(frame)
            except asyncio.CancelledError:
                raise
            except (websockets.ConnectionClosedError, websockets.ConnectionClosedOK):
                logger.warning("WebSocket closed while sending; frame dropped")
            except Exception as exc:  # noqa: BLE001
                logger.warning("WebSocket send failed; frame dropped: %s", exc)
            finally:
                self._outbox.task_done()

    async def close(self) -> None:
        if self._closing:
            return
        # Flush before flipping the flag so queued frames (e.g. deleteSession) still go out
        if self._ws is not None and self._writer_task is not None:
            try:
                await asyncio.wait_for(self._outbox.join(), timeout=self._options.close_timeout_s)
            except asyncio.TimeoutError:
                logger.warning("Dropped %d queued frame(s) on close", self._outbox.qsize())
        self._closing = True
        for task in (self._reader_task, self._writer_task):
            if task is None or task.done():
                continue
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task
        ws, self._ws = self._ws, None
        if ws is None:
            return
        with contextlib.suppress(Exception):
            await ws.close(code=self._options.ws_close_code)
            await asyncio.wait_for(ws.wait_closed(), timeout=self._options.close_timeout_s)


__all__ = ["WebSocketTransport", "new_session_id"]
