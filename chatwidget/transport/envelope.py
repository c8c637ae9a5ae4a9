"""JSON envelope used by the plain WebSocket transport.

Every frame is ``{"event": "<name>", "data": <any JSON value>}``. Frames that
are not valid UTF-8 JSON objects with a non-empty string ``event`` are
rejected by ``decode_envelope`` (returns None) rather than raising, since a
single malformed frame must not tear down the connection.
"""

from __future__ import annotations

import json
from typing import Any


def encode_envelope(event: str, data: Any = None) -> str:
    if not event:
        raise ValueError("event name is required")
    payload: dict[str, Any] = {"event": event}
    if data is not None:
        payload["data"] = data
    return json.dumps(payload, ensure_ascii=False)


def decode_envelope(raw: str | bytes) -> tuple[str, Any] | None:
    if isinstance(raw, (bytes, bytearray)):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError:
            return None
    try:
        payload = json.loads(raw)
    except (TypeError, json.JSONDecodeError):
        return None
    if not isinstance(payload, dict):
        return None
    event = payload.get("event")
    if not isinstance(event, str) or not event:
        return None
    return event, payload.get("data")


__all__ = ["encode_envelope", "decode_envelope"]
