"""Base error class shared by the chat widget."""

from __future__ import annotations


class ChatWidgetError(Exception):
    """Base class for all chat widget errors."""


__all__ = ["ChatWidgetError"]
