"""Events consumed by the session state machine.

Remote events are produced by the controller from socket callbacks; local
events come from user intents. Every event is an immutable value so a
sequence of them can be replayed in tests.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ConnectSucceeded:
    pass


@dataclass(frozen=True)
class ConnectFailed:
    message: str


@dataclass(frozen=True)
class Disconnected:
    message: str


@dataclass(frozen=True)
class RemoteResponse:
    text: object


@dataclass(frozen=True)
class RemoteTyping:
    sender: object


@dataclass(frozen=True)
class RemoteStopTyping:
    sender: object


@dataclass(frozen=True)
class RemoteError:
    message: str


@dataclass(frozen=True)
class UserSend:
    text: str


@dataclass(frozen=True)
class QuickReplySelected:
    text: str


@dataclass(frozen=True)
class Minimize:
    pass


@dataclass(frozen=True)
class Restore:
    pass


@dataclass(frozen=True)
class EndSession:
    pass


@dataclass(frozen=True)
class DismissError:
    pass


@dataclass(frozen=True)
class ResetConversation:
    pass


SessionEvent = (
    ConnectSucceeded
    | ConnectFailed
    | Disconnected
    | RemoteResponse
    | RemoteTyping
    | RemoteStopTyping
    | RemoteError
    | UserSend
    | QuickReplySelected
    | Minimize
    | Restore
    | EndSession
    | DismissError
    | ResetConversation
)

__all__ = [
    "ConnectSucceeded",
    "ConnectFailed",
    "Disconnected",
    "RemoteResponse",
    "RemoteTyping",
    "RemoteStopTyping",
    "RemoteError",
    "UserSend",
    "QuickReplySelected",
    "Minimize",
    "Restore",
    "EndSession",
    "DismissError",
    "ResetConversation",
    "SessionEvent",
]
