"""Small shared helpers (environment parsing, origin handling, URLs)."""

from .env import env_list, env_optional
from .origin import canonical_origin, origin_matches
from .urls import build_delete_url, normalize_ws_url

__all__ = [
    "env_list",
    "env_optional",
    "canonical_origin",
    "origin_matches",
    "build_delete_url",
    "normalize_ws_url",
]
