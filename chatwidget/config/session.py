"""Conversation defaults and backend session handling.

The greeting and quick replies default to the strings the widget shipped
with; both can be overridden per deployment. CHAT_QUICK_REPLIES accepts a
JSON array (preferred) or a comma-separated list.
"""

from __future__ import annotations

import os

from ..helpers.env import env_list

# ============================================================================
# Conversation content
# ============================================================================

DEFAULT_GREETING = (
    "Γεια σου! Είμαι ο Lucca, ο ψηφιακός βοηθός της Gruppo Cucine. "
    "Πώς μπορώ να σε βοηθήσω;"
)
DEFAULT_QUICK_REPLIES: tuple[str, ...] = (
    "Θέλω να σχεδιάσω κουζίνα",
    "Θέλω να δω επιλογές κουζινών",
    "Θέλω βοήθεια με αγορά & εγκατάσταση",
)

CHAT_GREETING = os.getenv("CHAT_GREETING", DEFAULT_GREETING)
CHAT_QUICK_REPLIES = env_list("CHAT_QUICK_REPLIES", DEFAULT_QUICK_REPLIES)

# Sender id the backend uses to tag typing events from the assistant
CHAT_ASSISTANT_SENDER_ID = os.getenv("CHAT_ASSISTANT_SENDER_ID", "assistant")

# ============================================================================
# Backend session deletion
# ============================================================================

# "event": emit deleteSession over the open socket
# "http": DELETE {CHAT_SERVER_URL}{CHAT_SESSION_DELETE_PATH}
CHAT_SESSION_DELETE_MODE = (os.getenv("CHAT_SESSION_DELETE_MODE", "event") or "event").strip().lower()
CHAT_SESSION_DELETE_PATH = os.getenv("CHAT_SESSION_DELETE_PATH", "/api/sessions/{session_id}")
CHAT_SESSION_DELETE_TIMEOUT_S = float(os.getenv("CHAT_SESSION_DELETE_TIMEOUT_S", "3.0"))

SUPPORTED_DELETE_MODES: frozenset[str] = frozenset({"event", "http"})

__all__ = [
    "DEFAULT_GREETING",
    "DEFAULT_QUICK_REPLIES",
    "CHAT_GREETING",
    "CHAT_QUICK_REPLIES",
    "CHAT_ASSISTANT_SENDER_ID",
    "CHAT_SESSION_DELETE_MODE",
    "CHAT_SESSION_DELETE_PATH",
    "CHAT_SESSION_DELETE_TIMEOUT_S",
    "SUPPORTED_DELETE_MODES",
]
