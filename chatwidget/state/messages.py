"""Chat message value types."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Role(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True)
class Message:
    """One entry of the conversation log.

    Attributes:
        role: Who produced the message.
        content: Message text; non-empty for every message the log accepts.
    """

    role: Role
    content: str

    def to_dict(self) -> dict[str, str]:
        return {"role": self.role.value, "content": self.content}


def greeting_message(text: str) -> Message:
    """Return the assistant greeting that opens every conversation."""
    return Message(Role.ASSISTANT, text)


__all__ = ["Role", "Message", "greeting_message"]
