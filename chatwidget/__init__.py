"""Client-side chat session controller.

This package runs one conversation with a remote assistant over a real-time
socket connection:

- Connection lifecycle with bounded fixed-delay reconnection
- Conversation state machine (messages, typing, minimize/restore, end)
- Debounced local typing signals
- Mobile/desktop classification with optional host-frame negotiation
- Best-effort backend session deletion on teardown

Presentation layers subscribe to ``SessionController`` snapshots; a small
terminal front-end ships in ``chatwidget.terminal``.
"""

from .handlers import SessionController, Subscription
from .settings import ChatSettings, ConnectionOptions
from .state import Message, Role, SessionSnapshot, SessionState

__all__ = [
    "SessionController",
    "Subscription",
    "ChatSettings",
    "ConnectionOptions",
    "Message",
    "Role",
    "SessionSnapshot",
    "SessionState",
]
