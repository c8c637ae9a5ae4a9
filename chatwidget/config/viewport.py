"""Viewport classification and host negotiation settings.

VIEWPORT_HOST_ORIGIN is the only origin whose VIEWPORT_INFO replies are
trusted. When unset, no request is sent to the host and the width
heuristic is used for the life of the controller.
"""

from __future__ import annotations

import os

from ..helpers.env import env_optional

VIEWPORT_MOBILE_MAX_WIDTH = int(os.getenv("VIEWPORT_MOBILE_MAX_WIDTH", "600"))
VIEWPORT_HOST_ORIGIN = env_optional("VIEWPORT_HOST_ORIGIN")

# Cross-frame message type discriminators
VIEWPORT_REQUEST_TYPE = "REQUEST_VIEWPORT_INFO"
VIEWPORT_RESPONSE_TYPE = "VIEWPORT_INFO"

__all__ = [
    "VIEWPORT_MOBILE_MAX_WIDTH",
    "VIEWPORT_HOST_ORIGIN",
    "VIEWPORT_REQUEST_TYPE",
    "VIEWPORT_RESPONSE_TYPE",
]
