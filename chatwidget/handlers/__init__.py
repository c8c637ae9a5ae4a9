"""Session orchestration handlers.

connection.py:
    ConnectionManager and ConnectionHandle: bounded fixed-delay connect
    retries, startChat on every connect, idempotent close.

session_delete.py:
    Backend session delete notifiers (socket event or HTTP DELETE).

debounce.py:
    Trailing-edge typing/stopTyping debouncer.

viewport.py:
    Mobile classification by width with optional host-frame negotiation.

controller.py:
    SessionController composing all of the above behind one facade.
"""

from .connection import START_CHAT_EVENT, ConnectionHandle, ConnectionManager, TransportFactory
from .controller import SessionController, Subscription
from .debounce import STOP_TYPING_EVENT, TYPING_EVENT, TypingDebouncer
from .session_delete import (
    DELETE_SESSION_EVENT,
    EventSessionDeleter,
    HttpSessionDeleter,
    SessionDeleter,
    build_session_deleter,
)
from .viewport import FrameChannel, TopLevelFrame, ViewportNegotiator, parse_viewport_info

__all__ = [
    "START_CHAT_EVENT",
    "ConnectionHandle",
    "ConnectionManager",
    "TransportFactory",
    "SessionController",
    "Subscription",
    "STOP_TYPING_EVENT",
    "TYPING_EVENT",
    "TypingDebouncer",
    "DELETE_SESSION_EVENT",
    "EventSessionDeleter",
    "HttpSessionDeleter",
    "SessionDeleter",
    "build_session_deleter",
    "FrameChannel",
    "TopLevelFrame",
    "ViewportNegotiator",
    "parse_viewport_info",
]
