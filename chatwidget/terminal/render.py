"""Snapshot rendering for the terminal front-end.

The renderer is stateful: it remembers what it already printed and only
writes the difference between consecutive snapshots (new messages, typing
indicator flips, error notices, window state changes).
"""

from __future__ import annotations

import sys
from collections.abc import Callable

from ..state import Message, Role, SessionSnapshot

# ANSI color codes (disabled if not a tty)
_USE_COLOR = sys.stdout.isatty()


def _c(code: str, text: str) -> str:
    if not _USE_COLOR:
        return text
    return f"\033[{code}m{text}\033[0m"


def dim(text: str) -> str:
    return _c("2", text)


def bold(text: str) -> str:
    return _c("1", text)


def cyan(text: str) -> str:
    return _c("36", text)


def yellow(text: str) -> str:
    return _c("33", text)


def format_message(message: Message) -> str:
    if message.role is Role.ASSISTANT:
        return f"{cyan('assistant >')} {message.content}"
    return f"{dim('you >')} {message.content}"


def format_quick_replies(quick_replies: tuple[str, ...]) -> str:
    lines = [dim("Quick replies (/quick <n>):")]
    lines.extend(f"  {index}. {text}" for index, text in enumerate(quick_replies, start=1))
    return "\n".join(lines)


class SnapshotRenderer:
    """Print what changed since the previous snapshot."""

    def __init__(self, write: Callable[[str], object] = print) -> None:
        self._write = write
        self._previous: SessionSnapshot | None = None
        self._printed = 0

    def __call__(self, snapshot: SessionSnapshot) -> None:
        self.render(snapshot)

    def render(self, snapshot: SessionSnapshot) -> None:
        previous = self._previous
        self._previous = snapshot

        if previous is None or self._was_reset(previous, snapshot):
            if previous is not None:
                self._write(dim("--- new conversation ---"))
            self._printed = 0

        for message in snapshot.messages[self._printed:]:
            self._write(format_message(message))
        self._printed = len(snapshot.messages)

        if snapshot.quick_replies and (previous is None or not previous.quick_replies):
            self._write(format_quick_replies(snapshot.quick_replies))

        if previous is not None and previous.is_loading and not snapshot.is_loading and snapshot.connected:
            self._write(dim(f"Connected (session {snapshot.session_id})."))

        if snapshot.typing_indicator and (previous is None or not previous.typing_indicator):
            self._write(dim("assistant is typing..."))

        if snapshot.error and (previous is None or previous.error != snapshot.error):
            self._write(yellow(f"⚠️  {snapshot.error}") + dim("  (/dismiss to hide)"))

        if previous is not None:
            self._render_window_state(previous, snapshot)

    def _render_window_state(self, previous: SessionSnapshot, snapshot: SessionSnapshot) -> None:
        if snapshot.session_ended and not previous.session_ended:
            self._write(dim("Session ended. /restore starts a new conversation."))
        elif snapshot.is_minimized and not previous.is_minimized:
            self._write(dim("Chat minimized. /restore to reopen."))
        elif previous.is_minimized and not snapshot.is_minimized:
            self._write(dim("Chat restored."))

    def _was_reset(self, previous: SessionSnapshot, snapshot: SessionSnapshot) -> bool:
        return len(snapshot.messages) < self._printed or (
            len(snapshot.messages) == 1 and len(previous.messages) > 1
        )


__all__ = ["SnapshotRenderer", "format_message", "format_quick_replies", "bold", "dim"]
