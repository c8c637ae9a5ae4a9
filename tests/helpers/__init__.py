"""Shared fakes for unit tests."""

__all__ = [
    "fakes",
]
