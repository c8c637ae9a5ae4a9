"""Unit tests for backend error payload handling."""

from __future__ import annotations

import pytest

from chatwidget.errors import ChatWidgetError, ConnectionFailedError, ServerError, SessionDeleteError

FALLBACK = "An error occurred"


def test_server_error_uses_payload_message_and_keeps_extras() -> None:
    error = ServerError.from_payload({"message": "Rate limited", "code": 429}, fallback=FALLBACK)

    assert error.format_for_user() == "Rate limited"
    assert error.extra == {"code": 429}
    assert isinstance(error, ChatWidgetError)


@pytest.mark.parametrize("payload", [None, {}, {"message": ""}, {"message": "  "}, {"message": 3}, 7])
def test_server_error_falls_back_to_generic_text(payload: object) -> None:
    assert ServerError.from_payload(payload, fallback=FALLBACK).message == FALLBACK


def test_server_error_accepts_bare_string_payload() -> None:
    assert ServerError.from_payload("boom", fallback=FALLBACK).message == "boom"


def test_connection_failed_error_describes_attempts() -> None:
    error = ConnectionFailedError("http://chat.test", 6, OSError("refused"))

    assert "6 attempt(s)" in str(error)
    assert "refused" in str(error)


def test_session_delete_error_includes_status() -> None:
    error = SessionDeleteError("sid-1", "Not Found", status_code=404)

    assert str(error) == "Failed to delete session sid-1 (status=404): Not Found"
