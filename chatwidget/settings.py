"""Injectable settings for one chat session controller.

Defaults come from ``chatwidget.config`` (environment driven); tests and
embedders construct ``ChatSettings`` directly with overrides.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from . import config


@dataclass(frozen=True)
class ConnectionOptions:
    """Transport-level options passed to ``ConnectionManager.connect``.

    Attributes:
        transport: "socketio" or "websocket".
        reconnection_attempts: Retries after the first failed attempt.
        reconnection_delay_s: Fixed delay between attempts.
        connect_timeout_s: Timeout for a single connect attempt.
        close_timeout_s: Max time close() waits for queued emits.
        ws_path: Default path for the plain WebSocket transport.
        socketio_path: Engine.IO path for the Socket.IO transport.
        ws_ping_interval_s: WebSocket keepalive interval.
        ws_ping_timeout_s: WebSocket keepalive timeout.
        ws_close_code: Close code sent on a client-initiated close.
    """

    transport: str = config.CHAT_TRANSPORT
    reconnection_attempts: int = config.CHAT_RECONNECTION_ATTEMPTS
    reconnection_delay_s: float = config.CHAT_RECONNECTION_DELAY_S
    connect_timeout_s: float = config.CHAT_CONNECT_TIMEOUT_S
    close_timeout_s: float = config.CHAT_CLOSE_TIMEOUT_S
    ws_path: str = config.CHAT_WS_PATH
    socketio_path: str = config.CHAT_SOCKETIO_PATH
    ws_ping_interval_s: float = config.CHAT_WS_PING_INTERVAL_S
    ws_ping_timeout_s: float = config.CHAT_WS_PING_TIMEOUT_S
    ws_close_code: int = config.CHAT_WS_CLOSE_CODE

    def __post_init__(self) -> None:
        if self.transport not in config.SUPPORTED_TRANSPORTS:
            raise ValueError(
                f"transport must be one of {sorted(config.SUPPORTED_TRANSPORTS)}, got {self.transport!r}"
            )
        if self.reconnection_attempts < 0:
            raise ValueError("reconnection_attempts must be >= 0")
        if self.reconnection_delay_s < 0:
            raise ValueError("reconnection_delay_s must be >= 0")
        if self.connect_timeout_s <= 0:
            raise ValueError("connect_timeout_s must be > 0")
        if self.close_timeout_s < 0:
            raise ValueError("close_timeout_s must be >= 0")


@dataclass(frozen=True)
class ChatSettings:
    """Everything a ``SessionController`` needs to run one session."""

    server_url: str = config.CHAT_SERVER_URL
    connection: ConnectionOptions = field(default_factory=ConnectionOptions)
    session_delete_mode: str = config.CHAT_SESSION_DELETE_MODE
    session_delete_path: str = config.CHAT_SESSION_DELETE_PATH
    session_delete_timeout_s: float = config.CHAT_SESSION_DELETE_TIMEOUT_S
    assistant_sender_id: str = config.CHAT_ASSISTANT_SENDER_ID
    greeting: str = config.CHAT_GREETING
    quick_replies: tuple[str, ...] = config.CHAT_QUICK_REPLIES
    typing_quiet_interval_s: float = config.CHAT_TYPING_QUIET_INTERVAL_S
    mobile_max_width: int = config.VIEWPORT_MOBILE_MAX_WIDTH
    host_origin: str | None = config.VIEWPORT_HOST_ORIGIN
    connect_error_message: str = config.CONNECT_ERROR_MESSAGE
    disconnect_error_message: str = config.DISCONNECT_ERROR_MESSAGE
    generic_error_message: str = config.GENERIC_ERROR_MESSAGE

    def __post_init__(self) -> None:
        if not self.server_url:
            raise ValueError("server_url is required")
        if self.session_delete_mode not in config.SUPPORTED_DELETE_MODES:
            raise ValueError(
                f"session_delete_mode must be one of {sorted(config.SUPPORTED_DELETE_MODES)}, "
                f"got {self.session_delete_mode!r}"
            )
        if "{session_id}" not in self.session_delete_path:
            raise ValueError("session_delete_path must contain a '{session_id}' placeholder")
        if not self.greeting.strip():
            raise ValueError("greeting must not be blank")
        if self.typing_quiet_interval_s <= 0:
            raise ValueError("typing_quiet_interval_s must be > 0")
        if self.mobile_max_width < 0:
            raise ValueError("mobile_max_width must be >= 0")
        # Accept lists from callers; the snapshot exposes an immutable tuple
        object.__setattr__(self, "quick_replies", tuple(self.quick_replies))


__all__ = ["ChatSettings", "ConnectionOptions"]
