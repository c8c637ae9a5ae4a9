"""Environment helper utilities.

Provides functions for parsing environment variables that carry optional
or structured values (JSON lists) rather than plain strings.
"""

from __future__ import annotations

import json
import os


def env_list(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    """Parse a JSON array of strings from the environment.

    Falls back to a comma-separated list when the value is not JSON so
    shell users can write ``CHAT_QUICK_REPLIES="a,b,c"``.

    Raises:
        ValueError: If the JSON value is not a list of strings.
    """
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError:
        return tuple(item.strip() for item in raw.split(",") if item.strip())
    if not isinstance(parsed, list) or not all(isinstance(item, str) for item in parsed):
        raise ValueError(f"{name} must be a JSON array of strings")
    return tuple(item for item in parsed if item.strip())


def env_optional(name: str) -> str | None:
    """Return a stripped env value, or None when unset or blank."""
    value = os.getenv(name)
    if value is None:
        return None
    value = value.strip()
    return value or None


__all__ = ["env_list", "env_optional"]
