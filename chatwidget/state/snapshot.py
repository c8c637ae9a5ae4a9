"""Read-only view handed to subscribers after every change."""

from __future__ import annotations

from dataclasses import dataclass

from .machine import SessionState
from .messages import Message


@dataclass(frozen=True)
class SessionSnapshot:
    messages: tuple[Message, ...]
    is_typing: bool
    typing_indicator: bool
    is_loading: bool
    is_minimized: bool
    is_visible: bool
    session_ended: bool
    error: str | None
    show_quick_replies: bool
    quick_replies: tuple[str, ...]
    is_mobile: bool
    connected: bool
    session_id: str | None

    @classmethod
    def build(
        cls,
        state: SessionState,
        *,
        quick_replies: tuple[str, ...],
        is_mobile: bool,
        connected: bool,
        session_id: str | None,
    ) -> SessionSnapshot:
        return cls(
            messages=state.messages,
            is_typing=state.is_typing,
            typing_indicator=state.typing_indicator,
            is_loading=state.is_loading,
            is_minimized=state.is_minimized,
            is_visible=state.is_visible,
            session_ended=state.session_ended,
            error=state.error,
            show_quick_replies=state.show_quick_replies,
            quick_replies=quick_replies if state.show_quick_replies else (),
            is_mobile=is_mobile,
            connected=connected,
            session_id=session_id,
        )


__all__ = ["SessionSnapshot"]
