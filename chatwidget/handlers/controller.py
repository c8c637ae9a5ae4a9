"""Session controller: the single facade a presentation layer talks to.

The controller owns exactly one of each collaborator:

    ConnectionManager    socket lifecycle, startChat, session deletion
    SessionStateMachine  conversation state transitions
    TypingDebouncer      local typing/stopTyping signals
    ViewportNegotiator   mobile classification

Remote events are translated into state-machine events; user intents become
socket emits, state transitions, or both. Subscribers receive a fresh
``SessionSnapshot`` after every change.

Teardown (``aclose``) always runs the same sequence, once:

    1. cancel the pending stopTyping timer and any in-flight connect
    2. ask the backend to delete the session (unless the user ended it)
    3. close the connection
    4. detach viewport and signal hooks

Deletion goes first because event-mode deletion rides on the open socket.

Usage:
    async with SessionController(settings) as controller:
        controller.subscribe(render)
        controller.send("hello")
        await controller.wait_closed()
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import signal
from collections.abc import Callable, Iterable
from typing import Any

from ..errors import ConnectionFailedError, ConnectionStateError, ServerError
from ..logging import log_context
from ..settings import ChatSettings
from ..state import (
    ConnectFailed,
    ConnectSucceeded,
    Disconnected,
    DismissError,
    EndSession,
    Minimize,
    QuickReplySelected,
    RemoteError,
    RemoteResponse,
    RemoteStopTyping,
    RemoteTyping,
    ResetConversation,
    Restore,
    SessionEvent,
    SessionSnapshot,
    SessionState,
    SessionStateMachine,
    UserSend,
)
from ..transport import CONNECT_ERROR_EVENT, CONNECT_EVENT, DISCONNECT_EVENT
from .connection import START_CHAT_EVENT, ConnectionHandle, ConnectionManager, TransportFactory
from .debounce import TypingDebouncer
from .session_delete import SessionDeleter, build_session_deleter
from .viewport import FrameChannel, ViewportNegotiator

logger = logging.getLogger(__name__)

MESSAGE_EVENT = "message"
RESPONSE_EVENT = "response"
TYPING_EVENT = "typing"
STOP_TYPING_EVENT = "stopTyping"
ERROR_EVENT = "error"

SnapshotCallback = Callable[[SessionSnapshot], None]


class Subscription:
    """Handle returned by ``SessionController.subscribe``."""

    def __init__(self, controller: SessionController, callback: SnapshotCallback) -> None:
        self._controller = controller
        self.callback = callback
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def cancel(self) -> None:
        if not self._active:
            return
        self._active = False
        self._controller._unsubscribe(self)


def _sender_of(data: Any) -> Any:
    if isinstance(data, dict):
        return data.get("sessionId")
    return None


class SessionController:
    def __init__(
        self,
        settings: ChatSettings | None = None,
        *,
        transport_factory: TransportFactory | None = None,
        session_deleter: SessionDeleter | None = None,
        frame_channel: FrameChannel | None = None,
        initial_width: int | None = None,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        self.settings = settings or ChatSettings()
        self._machine = SessionStateMachine(
            self.settings.greeting,
            assistant_sender_id=self.settings.assistant_sender_id,
            generic_error=self.settings.generic_error_message,
        )
        self._manager = ConnectionManager(transport_factory)
        self._deleter = session_deleter or build_session_deleter(self.settings)
        self._debouncer = TypingDebouncer(
            self._emit_typing_signal,
            quiet_interval_s=self.settings.typing_quiet_interval_s,
            loop=loop,
        )
        self._viewport = ViewportNegotiator(
            frame_channel,
            expected_origin=self.settings.host_origin,
            mobile_max_width=self.settings.mobile_max_width,
            initial_width=initial_width,
            on_change=self._on_viewport_change,
        )
        self._subscriptions: list[Subscription] = []
        self._connect_task: asyncio.Task | None = None
        self._background: set[asyncio.Task] = set()
        self._session_op: asyncio.Task | None = None
        self._close_task: asyncio.Task | None = None
        self._closed_event = asyncio.Event()
        self._installed_signals: list[int] = []
        self._started = False
        self._closing = False

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> SessionController:
        self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    def start(self) -> None:
        """Begin viewport negotiation and connect in the background.

        Raises:
            ConnectionStateError: If the controller was already closed.
        """
        if self._closing:
            raise ConnectionStateError("controller is closed")
        if self._started:
            return
        self._started = True
        self._viewport.start()
        self._connect_task = asyncio.get_running_loop().create_task(self._run_connect())

    async def _run_connect(self) -> None:
        try:
            await self._manager.connect(
                self.settings.server_url,
                self.settings.connection,
                handlers=self._event_handlers(),
                deleter=self._deleter,
            )
        except ConnectionFailedError as exc:
            logger.error("%s", exc)

    @property
    def closed(self) -> bool:
        return self._closed_event.is_set()

    async def wait_closed(self) -> None:
        await self._closed_event.wait()

    async def aclose(self) -> None:
        """Tear the session down; safe to call repeatedly and concurrently."""
        await asyncio.shield(self._schedule_close())

    def _schedule_close(self) -> asyncio.Task:
        if self._close_task is None:
            self._close_task = asyncio.get_running_loop().create_task(self._teardown())
        return self._close_task

    async def _teardown(self) -> None:
        self._closing = True
        self._debouncer.cancel()
        await self._cancel_connect()
        if self._background:
            await asyncio.gather(*self._background, return_exceptions=True)
        handle = self._manager.handle
        with log_context(session_id=self._session_id()):
            if handle is not None and handle.connection_count and not self._machine.state.session_ended:
                await handle.notify_session_deleted()
            await self._manager.close()
            self._viewport.close()
            self._remove_signal_handlers()
            logger.info("Chat session closed")
        self._closed_event.set()

    async def _cancel_connect(self) -> None:
        task = self._connect_task
        if task is None or task.done():
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task

    def bind_unload_signals(self, signals: Iterable[int] = (signal.SIGINT, signal.SIGTERM)) -> bool:
        """Run teardown when the process is asked to stop."""
        loop = asyncio.get_running_loop()
        for sig in signals:
            try:
                loop.add_signal_handler(sig, self._handle_unload, sig)
            except (NotImplementedError, RuntimeError, ValueError):
                logger.warning("Signal handlers unavailable; teardown runs only on explicit close")
                self._remove_signal_handlers()
                return False
            self._installed_signals.append(sig)
        return True

    def _handle_unload(self, sig: int) -> None:
        if self._closing:
            return
        logger.info("%s received; closing chat session", signal.Signals(sig).name)
        self._schedule_close()

    def _remove_signal_handlers(self) -> None:
        if not self._installed_signals:
            return
        loop = asyncio.get_running_loop()
        for sig in self._installed_signals:
            with contextlib.suppress(Exception):
                loop.remove_signal_handler(sig)
        self._installed_signals.clear()

    # ------------------------------------------------------------------
    # Subscriptions and snapshots
    # ------------------------------------------------------------------

    @property
    def state(self) -> SessionState:
        return self._machine.state

    @property
    def handle(self) -> ConnectionHandle | None:
        return self._manager.handle

    def snapshot(self) -> SessionSnapshot:
        handle = self._manager.handle
        return SessionSnapshot.build(
            self._machine.state,
            quick_replies=self.settings.quick_replies,
            is_mobile=self._viewport.is_mobile,
            connected=handle is not None and handle.connected,
            session_id=handle.sid if handle is not None else None,
        )

    def subscribe(self, callback: SnapshotCallback) -> Subscription:
        subscription = Subscription(self, callback)
        self._subscriptions.append(subscription)
        return subscription

    def _unsubscribe(self, subscription: Subscription) -> None:
        with contextlib.suppress(ValueError):
            self._subscriptions.remove(subscription)

    def _publish(self) -> None:
        if not self._subscriptions:
            return
        snapshot = self.snapshot()
        for subscription in list(self._subscriptions):
            try:
                subscription.callback(snapshot)
            except Exception:
                logger.exception("Session subscriber failed")

    def _apply(self, event: SessionEvent, *, force_publish: bool = False) -> bool:
        before = self._machine.state
        after = self._machine.dispatch(event)
        changed = after is not before
        if changed or force_publish:
            self._publish()
        return changed

    # ------------------------------------------------------------------
    # Remote events
    # ------------------------------------------------------------------

    def _event_handlers(self) -> dict[str, Callable[[Any], None]]:
        handlers = {
            CONNECT_EVENT: self._on_connect,
            CONNECT_ERROR_EVENT: self._on_connect_error,
            DISCONNECT_EVENT: self._on_disconnect,
            RESPONSE_EVENT: self._on_response,
            TYPING_EVENT: self._on_typing,
            STOP_TYPING_EVENT: self._on_stop_typing,
            ERROR_EVENT: self._on_error,
        }
        return {event: self._in_session_context(handler) for event, handler in handlers.items()}

    def _session_id(self) -> str | None:
        handle = self._manager.handle
        return handle.sid if handle is not None else None

    def _in_session_context(self, handler: Callable[[Any], None]) -> Callable[[Any], None]:
        def run(data: Any) -> None:
            with log_context(session_id=self._session_id()):
                handler(data)

        return run

    def _on_connect(self, _data: Any) -> None:
        self._apply(ConnectSucceeded(), force_publish=True)

    def _on_connect_error(self, data: Any) -> None:
        logger.warning("Connection error: %s", data)
        self._apply(ConnectFailed(self.settings.connect_error_message))

    def _on_disconnect(self, data: Any) -> None:
        if self._closing:
            return
        logger.warning("Disconnected from server: %s", data)
        self._apply(Disconnected(self.settings.disconnect_error_message), force_publish=True)

    def _on_response(self, data: Any) -> None:
        text = data.get("message") if isinstance(data, dict) else None
        self._apply(RemoteResponse(text))

    def _on_typing(self, data: Any) -> None:
        self._apply(RemoteTyping(_sender_of(data)))

    def _on_stop_typing(self, data: Any) -> None:
        self._apply(RemoteStopTyping(_sender_of(data)))

    def _on_error(self, data: Any) -> None:
        error = ServerError.from_payload(data, fallback=self.settings.generic_error_message)
        logger.warning("Server error: %s", error)
        self._apply(RemoteError(error.format_for_user()))

    # ------------------------------------------------------------------
    # User intents
    # ------------------------------------------------------------------

    def _live_handle(self) -> ConnectionHandle | None:
        handle = self._manager.handle
        if self._closing or handle is None or not handle.connected:
            return None
        return handle

    def send(self, text: str) -> bool:
        """Send a user message; returns False for guarded no-ops."""
        return self._send(text, UserSend)

    def select_quick_reply(self, text: str) -> bool:
        """Send one of the configured quick replies while they are offered."""
        if not self._machine.state.show_quick_replies:
            return False
        if text not in self.settings.quick_replies:
            logger.debug("Ignoring unknown quick reply %r", text)
            return False
        return self._send(text, QuickReplySelected)

    def _send(self, text: str, event_type: type[UserSend] | type[QuickReplySelected]) -> bool:
        if not isinstance(text, str) or not text.strip():
            return False
        handle = self._live_handle()
        if handle is None:
            logger.debug("Not connected; message not sent")
            return False
        content = text.strip()
        if not handle.emit(MESSAGE_EVENT, {"message": content}):
            return False
        self._apply(event_type(content))
        return True

    def keystroke(self) -> None:
        if self._closing:
            return
        self._debouncer.keystroke()

    def _emit_typing_signal(self, event: str) -> None:
        handle = self._live_handle()
        if handle is not None:
            handle.emit(event)

    def minimize(self) -> None:
        self._apply(Minimize())

    def restore(self) -> None:
        """Reopen the chat; after an ended session this starts a new one."""
        if self._machine.state.session_ended:
            self._schedule_session_op(delete=False, restart=True)
        self._apply(Restore())

    def end_session(self) -> None:
        if self._machine.state.session_ended:
            return
        self._schedule_session_op(delete=True, restart=False)
        self._apply(EndSession())

    def reset_conversation(self) -> None:
        """Delete the backend session and start over from the greeting."""
        self._schedule_session_op(delete=True, restart=True)
        self._apply(ResetConversation())

    def dismiss_error(self) -> None:
        self._apply(DismissError())

    def on_resize(self, width: int) -> None:
        self._viewport.on_resize(width)

    def handle_frame_message(self, data: Any, origin: str | None) -> bool:
        return self._viewport.handle_message(data, origin)

    def _on_viewport_change(self, is_mobile: bool) -> None:
        logger.debug("Viewport classified as %s", "mobile" if is_mobile else "desktop")
        self._publish()

    def _schedule_session_op(self, *, delete: bool, restart: bool) -> None:
        # Ops run strictly in order so a restart never overtakes its delete
        handle = self._live_handle()
        if handle is None:
            return
        self._session_op = self._spawn(
            self._run_session_op(handle, self._session_op, delete=delete, restart=restart)
        )

    async def _run_session_op(
        self,
        handle: ConnectionHandle,
        previous: asyncio.Task | None,
        *,
        delete: bool,
        restart: bool,
    ) -> None:
        if previous is not None:
            await asyncio.gather(previous, return_exceptions=True)
        with log_context(session_id=handle.sid):
            if delete:
                await handle.notify_session_deleted()
            if restart and self._live_handle() is handle:
                logger.info("Starting a new chat session")
                handle.emit(START_CHAT_EVENT)

    def _spawn(self, coro) -> asyncio.Task:
        task = asyncio.get_running_loop().create_task(coro)
        self._background.add(task)
        task.add_done_callback(self._background.discard)
        return task


__all__ = ["SessionController", "Subscription"]
