"""Viewport classification with optional host negotiation.

When the widget runs inside a nested frame, the host page knows better than
the widget whether the user is on a mobile layout. The negotiator asks once
(``REQUEST_VIEWPORT_INFO``) and trusts a ``VIEWPORT_INFO`` reply only from the
configured host origin. Until such a reply arrives, the width heuristic
(``width <= mobile_max_width``) decides, re-evaluated on every resize. A host
reply wins for the rest of the negotiator's life.

Messages that fail the origin check or are not a well-formed VIEWPORT_INFO
object are ignored without raising; they are routine on shared message
channels.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from typing import Any, Protocol

from ..config.viewport import VIEWPORT_REQUEST_TYPE, VIEWPORT_RESPONSE_TYPE
from ..helpers.origin import canonical_origin, origin_matches

logger = logging.getLogger(__name__)


class FrameChannel(Protocol):
    """Message-passing link to the embedding context."""

    @property
    def is_nested(self) -> bool: ...

    def post_to_parent(self, message: dict[str, Any], target_origin: str) -> None: ...


class TopLevelFrame:
    """Channel for a widget that is not embedded anywhere."""

    is_nested = False

    def post_to_parent(self, message: dict[str, Any], target_origin: str) -> None:
        logger.debug("No parent frame; dropping %s", message.get("type"))


def parse_viewport_info(data: Any) -> bool | None:
    """Return ``isMobile`` from a VIEWPORT_INFO payload, or None if malformed."""
    if isinstance(data, (str, bytes, bytearray)):
        try:
            data = json.loads(data)
        except (UnicodeDecodeError, json.JSONDecodeError):
            return None
    if not isinstance(data, dict):
        return None
    if data.get("type") != VIEWPORT_RESPONSE_TYPE:
        return None
    is_mobile = data.get("isMobile")
    if not isinstance(is_mobile, bool):
        return None
    return is_mobile


class ViewportNegotiator:
    def __init__(
        self,
        channel: FrameChannel | None = None,
        *,
        expected_origin: str | None = None,
        mobile_max_width: int = 600,
        initial_width: int | None = None,
        on_change: Callable[[bool], None] | None = None,
    ) -> None:
        self._channel = channel or TopLevelFrame()
        self._expected_origin = canonical_origin(expected_origin) or None
        self._mobile_max_width = mobile_max_width
        self._width = initial_width
        self._host_is_mobile: bool | None = None
        self._on_change = on_change
        self._requested = False
        self._closed = False

    @property
    def is_mobile(self) -> bool:
        if self._host_is_mobile is not None:
            return self._host_is_mobile
        return self._width is not None and self._width <= self._mobile_max_width

    @property
    def host_classified(self) -> bool:
        return self._host_is_mobile is not None

    @property
    def requested(self) -> bool:
        return self._requested

    def start(self) -> None:
        if self._requested or not self._channel.is_nested:
            return
        if self._expected_origin is None:
            logger.debug("Nested frame but no host origin configured; using width heuristic")
            return
        self._channel.post_to_parent({"type": VIEWPORT_REQUEST_TYPE}, self._expected_origin)
        self._requested = True

    def handle_message(self, data: Any, origin: str | None) -> bool:
        """Process one inbound cross-frame message; return True if accepted."""
        if self._closed:
            return False
        if not origin_matches(origin, self._expected_origin):
            logger.debug("Ignoring frame message from origin %r", origin)
            return False
        is_mobile = parse_viewport_info(data)
        if is_mobile is None:
            logger.debug("Ignoring malformed frame message")
            return False
        before = self.is_mobile
        self._host_is_mobile = is_mobile
        self._notify_if_changed(before)
        return True

    def on_resize(self, width: int) -> None:
        if self._closed:
            return
        before = self.is_mobile
        self._width = width
        self._notify_if_changed(before)

    def close(self) -> None:
        self._closed = True
        self._on_change = None

    def _notify_if_changed(self, before: bool) -> None:
        after = self.is_mobile
        if after != before and self._on_change is not None:
            self._on_change(after)


__all__ = [
    "FrameChannel",
    "TopLevelFrame",
    "ViewportNegotiator",
    "parse_viewport_info",
]
