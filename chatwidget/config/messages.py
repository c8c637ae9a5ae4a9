"""User-facing notice texts."""

import os


CONNECT_ERROR_MESSAGE = os.getenv(
    "CHAT_CONNECT_ERROR_MESSAGE",
    "Failed to connect to the server. Please try again later.",
)
DISCONNECT_ERROR_MESSAGE = os.getenv(
    "CHAT_DISCONNECT_ERROR_MESSAGE",
    "Connection to the server was lost. Reconnecting...",
)
GENERIC_ERROR_MESSAGE = os.getenv("CHAT_GENERIC_ERROR_MESSAGE", "An error occurred")


__all__ = [
    "CONNECT_ERROR_MESSAGE",
    "DISCONNECT_ERROR_MESSAGE",
    "GENERIC_ERROR_MESSAGE",
]
