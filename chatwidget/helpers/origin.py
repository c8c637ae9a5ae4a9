"""Origin canonicalization for cross-frame messages."""

from __future__ import annotations

from urllib.parse import urlsplit


def canonical_origin(value: str | None) -> str:
    """Reduce a URL or origin string to ``scheme://netloc`` (lowercased).

    Returns an empty string for anything that does not parse into both a
    scheme and a network location.
    """
    if not value:
        return ""
    try:
        parts = urlsplit(value.strip())
    except ValueError:
        return ""
    if not parts.scheme or not parts.netloc:
        return ""
    return f"{parts.scheme.lower()}://{parts.netloc.lower()}"


def origin_matches(origin: str | None, expected: str | None) -> bool:
    """Return True when ``origin`` is exactly the expected origin."""
    expected_origin = canonical_origin(expected)
    if not expected_origin:
        return False
    return canonical_origin(origin) == expected_origin


__all__ = ["canonical_origin", "origin_matches"]
