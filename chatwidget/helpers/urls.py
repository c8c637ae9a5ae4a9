"""URL helpers for the socket endpoint and the session delete endpoint.

WebSocket URLs are normalized so callers can pass either the base origin
(``https://chat.example.com``) or the full endpoint (``wss://host/ws``).
"""

from __future__ import annotations

from urllib.parse import quote, urlsplit, parse_qsl, urlencode, urlunsplit

_HTTP_TO_WS = {"http": "ws", "https": "wss"}


def _ensure_path_and_scheme(url: str, default_path: str) -> tuple[str, str, str, str, str]:
    """Parse and normalize a WebSocket URL."""
    parts = urlsplit(url)
    scheme = parts.scheme or "ws"
    netloc = parts.netloc
    path = parts.path or ""

    # Handle inputs like "localhost:8000" (missing scheme)
    if not netloc and parts.path and ":" in parts.path:
        netloc = parts.path
        path = ""

    scheme = _HTTP_TO_WS.get(scheme, scheme)

    normalized_path = path
    if not normalized_path or normalized_path.strip("/") == "":
        normalized_path = default_path if default_path.startswith("/") else f"/{default_path}"

    return scheme, netloc, normalized_path, parts.query, parts.fragment


def normalize_ws_url(url: str, *, default_path: str, session_id: str | None = None) -> str:
    """Return a ``ws(s)://`` URL, optionally tagged with a ``session_id`` query param.

    Raises:
        ValueError: If the URL has no host.
    """
    scheme, netloc, path, query, fragment = _ensure_path_and_scheme(url, default_path)
    if not netloc:
        raise ValueError(f"Invalid WebSocket URL '{url}'. Expected format ws(s)://host[:port][{default_path}]")

    query_items = parse_qsl(query, keep_blank_values=True)
    if session_id is not None:
        query_items = [(key, value) for key, value in query_items if key != "session_id"]
        query_items.append(("session_id", session_id))
    encoded_query = urlencode(query_items, doseq=True)

    return urlunsplit((scheme, netloc, path, encoded_query, fragment))


def build_delete_url(base_url: str, path_template: str, session_id: str) -> str:
    """Build the HTTP endpoint used to delete a backend session."""
    path = path_template.format(session_id=quote(session_id, safe=""))
    if not path.startswith("/"):
        path = f"/{path}"
    return f"{base_url.rstrip('/')}{path}"


__all__ = ["normalize_ws_url", "build_delete_url"]
