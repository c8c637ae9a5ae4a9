"""Aggregator of configuration modules.

This module re-exports the config API from smaller modules:
- connection: endpoint, transport and reconnection policy
- session: greeting, quick replies, sender sentinel, session deletion
- typing_signals: local typing debounce interval
- viewport: mobile threshold and host negotiation
- messages: user-facing notice texts
- logging: log level and format
"""

from .connection import (
    CHAT_SERVER_URL,
    CHAT_TRANSPORT,
    CHAT_WS_PATH,
    CHAT_SOCKETIO_PATH,
    SUPPORTED_TRANSPORTS,
    CHAT_RECONNECTION_ATTEMPTS,
    CHAT_RECONNECTION_DELAY_S,
    CHAT_CONNECT_TIMEOUT_S,
    CHAT_CLOSE_TIMEOUT_S,
    CHAT_WS_PING_INTERVAL_S,
    CHAT_WS_PING_TIMEOUT_S,
    CHAT_WS_CLOSE_CODE,
)
from .session import (
    DEFAULT_GREETING,
    DEFAULT_QUICK_REPLIES,
    CHAT_GREETING,
    CHAT_QUICK_REPLIES,
    CHAT_ASSISTANT_SENDER_ID,
    CHAT_SESSION_DELETE_MODE,
    CHAT_SESSION_DELETE_PATH,
    CHAT_SESSION_DELETE_TIMEOUT_S,
    SUPPORTED_DELETE_MODES,
)
from .typing_signals import CHAT_TYPING_QUIET_INTERVAL_S
from .viewport import (
    VIEWPORT_MOBILE_MAX_WIDTH,
    VIEWPORT_HOST_ORIGIN,
    VIEWPORT_REQUEST_TYPE,
    VIEWPORT_RESPONSE_TYPE,
)
from .messages import (
    CONNECT_ERROR_MESSAGE,
    DISCONNECT_ERROR_MESSAGE,
    GENERIC_ERROR_MESSAGE,
)
from .logging import APP_LOG_LEVEL, APP_LOG_FORMAT, APP_LOG_DATEFMT

__all__ = [
    # connection
    "CHAT_SERVER_URL",
    "CHAT_TRANSPORT",
    "CHAT_WS_PATH",
    "CHAT_SOCKETIO_PATH",
    "SUPPORTED_TRANSPORTS",
    "CHAT_RECONNECTION_ATTEMPTS",
    "CHAT_RECONNECTION_DELAY_S",
    "CHAT_CONNECT_TIMEOUT_S",
    "CHAT_CLOSE_TIMEOUT_S",
    "CHAT_WS_PING_INTERVAL_S",
    "CHAT_WS_PING_TIMEOUT_S",
    "CHAT_WS_CLOSE_CODE",
    # session
    "DEFAULT_GREETING",
    "DEFAULT_QUICK_REPLIES",
    "CHAT_GREETING",
    "CHAT_QUICK_REPLIES",
    "CHAT_ASSISTANT_SENDER_ID",
    "CHAT_SESSION_DELETE_MODE",
    "CHAT_SESSION_DELETE_PATH",
    "CHAT_SESSION_DELETE_TIMEOUT_S",
    "SUPPORTED_DELETE_MODES",
    # typing
    "CHAT_TYPING_QUIET_INTERVAL_S",
    # viewport
    "VIEWPORT_MOBILE_MAX_WIDTH",
    "VIEWPORT_HOST_ORIGIN",
    "VIEWPORT_REQUEST_TYPE",
    "VIEWPORT_RESPONSE_TYPE",
    # messages
    "CONNECT_ERROR_MESSAGE",
    "DISCONNECT_ERROR_MESSAGE",
    "GENERIC_ERROR_MESSAGE",
    # logging
    "APP_LOG_LEVEL",
    "APP_LOG_FORMAT",
    "APP_LOG_DATEFMT",
]
