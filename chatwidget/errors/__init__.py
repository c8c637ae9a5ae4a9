"""Error hierarchy for the chat widget.

Organization:
    - base.py: ChatWidgetError root
    - connection.py: connect/reconnect and handle lifecycle errors
    - server.py: explicit backend error events
    - session.py: backend session deletion failures
"""

from .base import ChatWidgetError
from .server import ServerError
from .session import SessionDeleteError
from .connection import (
    ConnectionError,
    ConnectionFailedError,
    ConnectionStateError,
)

__all__ = [
    "ChatWidgetError",
    "ServerError",
    "SessionDeleteError",
    "ConnectionError",
    "ConnectionFailedError",
    "ConnectionStateError",
]
