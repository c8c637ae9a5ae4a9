"""Local typing signal configuration."""

import os


# Quiet period after the last keystroke before stopTyping is sent
CHAT_TYPING_QUIET_INTERVAL_S = float(os.getenv("CHAT_TYPING_QUIET_INTERVAL_S", "1.0"))


__all__ = ["CHAT_TYPING_QUIET_INTERVAL_S"]
