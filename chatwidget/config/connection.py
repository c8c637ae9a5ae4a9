"""Socket connection configuration values.

Endpoint:
    CHAT_SERVER_URL: Base URL of the assistant backend. For the Socket.IO
        transport this is the HTTP(S) origin; the WebSocket transport converts
        it to ws(s):// and appends CHAT_WS_PATH when no path is given.

    CHAT_TRANSPORT: "socketio" (default) or "websocket".

Reconnection:
    The initial connect and any mid-session reconnect are attempted up to
    CHAT_RECONNECTION_ATTEMPTS times, separated by a fixed
    CHAT_RECONNECTION_DELAY_S (no backoff, no jitter).

Shutdown:
    CHAT_CLOSE_TIMEOUT_S bounds how long close() waits for queued outbound
    events (e.g. deleteSession) to flush before disconnecting.
"""

from __future__ import annotations

import os

# ============================================================================
# Endpoint
# ============================================================================

CHAT_SERVER_URL = os.getenv("CHAT_SERVER_URL", "http://localhost:3000").strip()
CHAT_TRANSPORT = (os.getenv("CHAT_TRANSPORT", "socketio") or "socketio").strip().lower()
CHAT_WS_PATH = os.getenv("CHAT_WS_PATH", "/ws")
CHAT_SOCKETIO_PATH = os.getenv("CHAT_SOCKETIO_PATH", "socket.io")

SUPPORTED_TRANSPORTS: frozenset[str] = frozenset({"socketio", "websocket"})

# ============================================================================
# Reconnection policy
# ============================================================================

CHAT_RECONNECTION_ATTEMPTS = int(os.getenv("CHAT_RECONNECTION_ATTEMPTS", "5"))
CHAT_RECONNECTION_DELAY_S = float(os.getenv("CHAT_RECONNECTION_DELAY_S", "1.0"))
CHAT_CONNECT_TIMEOUT_S = float(os.getenv("CHAT_CONNECT_TIMEOUT_S", "10"))

# ============================================================================
# Shutdown
# ============================================================================

CHAT_CLOSE_TIMEOUT_S = float(os.getenv("CHAT_CLOSE_TIMEOUT_S", "3.0"))

# ============================================================================
# WebSocket keepalive (plain WebSocket transport only)
# ============================================================================

CHAT_WS_PING_INTERVAL_S = float(os.getenv("CHAT_WS_PING_INTERVAL_S", "20"))
CHAT_WS_PING_TIMEOUT_S = float(os.getenv("CHAT_WS_PING_TIMEOUT_S", "20"))
CHAT_WS_CLOSE_CODE = int(os.getenv("CHAT_WS_CLOSE_CODE", "1000"))  # Normal closure

__all__ = [
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
]
