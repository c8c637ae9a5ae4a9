"""Session state and the transition table that drives it.

SessionState:
    Immutable container for everything the presentation layer renders.
    Each transition returns a new instance; ``messages`` is a tuple that only
    ever grows by one entry (append) or is replaced by the greeting-only log
    on an explicit reset.

SessionStateMachine:
    Owns the current state and a dispatch table mapping event types to pure
    transition functions. Guarded no-ops (blank text, typing events from
    another sender) return the current state object unchanged, so callers can
    use identity to detect "nothing happened".

Typing indicator:
    ``is_typing`` is the raw flag driven by typing/stopTyping events and local
    sends. ``typing_mark`` records how many messages existed when typing was
    last raised; a response appended afterwards hides the indicator without
    clearing the raw flag (see ``SessionState.typing_indicator``).
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, replace

from .events import (
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
    UserSend,
)
from .messages import Message, Role, greeting_message

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionState:
    """Snapshot of one conversation.

    Attributes:
        messages: Ordered conversation log; index 0 is the greeting.
        is_typing: Raw "peer is typing" flag.
        typing_mark: Message count when typing was last raised.
        is_loading: True until the first connect attempt resolves.
        is_minimized: Widget collapsed.
        is_visible: Widget panel shown (always ``not is_minimized``).
        session_ended: User ended the session; implies ``is_minimized``.
        error: Current user-facing notice, if any.
        show_quick_replies: Offer quick replies next to the greeting.
    """

    messages: tuple[Message, ...]
    is_typing: bool = False
    typing_mark: int = 0
    is_loading: bool = True
    is_minimized: bool = False
    is_visible: bool = True
    session_ended: bool = False
    error: str | None = None
    show_quick_replies: bool = True

    @classmethod
    def initial(cls, greeting: str) -> SessionState:
        return cls(messages=(greeting_message(greeting),))

    @property
    def typing_indicator(self) -> bool:
        """Whether the presentation layer should show "assistant is typing"."""
        return self.is_typing and len(self.messages) <= self.typing_mark


Transition = Callable[[SessionState, SessionEvent], SessionState]


class SessionStateMachine:
    """Pure transition logic for one chat session."""

    def __init__(self, greeting: str, *, assistant_sender_id: str = "assistant", generic_error: str = "An error occurred"):
        if not greeting.strip():
            raise ValueError("greeting must not be blank")
        self._greeting = greeting
        self._assistant_sender_id = assistant_sender_id
        self._generic_error = generic_error
        self._state = SessionState.initial(greeting)
        self._handlers: dict[type, Transition] = {
            ConnectSucceeded: self._on_connect_success,
            ConnectFailed: self._on_connect_error,
            Disconnected: self._on_disconnected,
            RemoteResponse: self._on_remote_response,
            RemoteTyping: self._on_remote_typing,
            RemoteStopTyping: self._on_remote_stop_typing,
            RemoteError: self._on_remote_error,
            UserSend: self._on_user_send,
            QuickReplySelected: self._on_user_send,
            Minimize: self._on_minimize,
            Restore: self._on_restore,
            EndSession: self._on_end_session,
            DismissError: self._on_dismiss_error,
            ResetConversation: self._on_reset,
        }

    @property
    def state(self) -> SessionState:
        return self._state

    def dispatch(self, event: SessionEvent) -> SessionState:
        """Apply one event and return the resulting state.

        Raises:
            TypeError: If the event type has no registered transition.
        """
        handler = self._handlers.get(type(event))
        if handler is None:
            raise TypeError(f"Unsupported session event: {type(event).__name__}")
        self._state = handler(self._state, event)
        return self._state

    # ------------------------------------------------------------------
    # Connection
    # ------------------------------------------------------------------

    def _on_connect_success(self, state: SessionState, event: ConnectSucceeded) -> SessionState:
        if not state.is_loading:
            return state
        return replace(state, is_loading=False)

    def _on_connect_error(self, state: SessionState, event: ConnectFailed) -> SessionState:
        return replace(state, is_loading=False, error=event.message)

    def _on_disconnected(self, state: SessionState, event: Disconnected) -> SessionState:
        return replace(state, error=event.message)

    # ------------------------------------------------------------------
    # Remote peer
    # ------------------------------------------------------------------

    def _on_remote_response(self, state: SessionState, event: RemoteResponse) -> SessionState:
        if not isinstance(event.text, str) or not event.text.strip():
            logger.debug("Ignoring response without message text: %r", event.text)
            return state
        # Quick replies are only offered on the lone greeting.
        return replace(
            state,
            messages=state.messages + (Message(Role.ASSISTANT, event.text),),
            show_quick_replies=False,
        )

    def _on_remote_typing(self, state: SessionState, event: RemoteTyping) -> SessionState:
        if event.sender != self._assistant_sender_id:
            return state
        return replace(state, is_typing=True, typing_mark=len(state.messages))

    def _on_remote_stop_typing(self, state: SessionState, event: RemoteStopTyping) -> SessionState:
        if event.sender != self._assistant_sender_id:
            return state
        if not state.is_typing:
            return state
        return replace(state, is_typing=False)

    def _on_remote_error(self, state: SessionState, event: RemoteError) -> SessionState:
        return replace(state, error=event.message or self._generic_error)

    # ------------------------------------------------------------------
    # Local intents
    # ------------------------------------------------------------------

    def _on_user_send(self, state: SessionState, event: UserSend | QuickReplySelected) -> SessionState:
        text = event.text.strip() if isinstance(event.text, str) else ""
        if not text:
            return state
        messages = state.messages + (Message(Role.USER, text),)
        return replace(
            state,
            messages=messages,
            show_quick_replies=False,
            is_typing=True,
            typing_mark=len(messages),
        )

    def _on_minimize(self, state: SessionState, event: Minimize) -> SessionState:
        return replace(state, is_minimized=True, is_visible=False)

    def _on_restore(self, state: SessionState, event: Restore) -> SessionState:
        if state.session_ended:
            state = self._fresh_conversation(state)
        return replace(state, is_minimized=False, is_visible=True, session_ended=False)

    def _on_end_session(self, state: SessionState, event: EndSession) -> SessionState:
        return replace(state, is_minimized=True, is_visible=False, session_ended=True)

    def _on_dismiss_error(self, state: SessionState, event: DismissError) -> SessionState:
        if state.error is None:
            return state
        return replace(state, error=None)

    def _on_reset(self, state: SessionState, event: ResetConversation) -> SessionState:
        return self._fresh_conversation(state)

    def _fresh_conversation(self, state: SessionState) -> SessionState:
        return replace(
            state,
            messages=(greeting_message(self._greeting),),
            show_quick_replies=True,
            is_typing=False,
            typing_mark=0,
        )


__all__ = ["SessionState", "SessionStateMachine"]
