"""Conversation state: messages, events, transitions and snapshots."""

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
from .machine import SessionState, SessionStateMachine
from .messages import Message, Role, greeting_message
from .snapshot import SessionSnapshot

__all__ = [
    "ConnectFailed",
    "ConnectSucceeded",
    "Disconnected",
    "DismissError",
    "EndSession",
    "Minimize",
    "QuickReplySelected",
    "RemoteError",
    "RemoteResponse",
    "RemoteStopTyping",
    "RemoteTyping",
    "ResetConversation",
    "Restore",
    "SessionEvent",
    "UserSend",
    "SessionState",
    "SessionStateMachine",
    "Message",
    "Role",
    "greeting_message",
    "SessionSnapshot",
]
