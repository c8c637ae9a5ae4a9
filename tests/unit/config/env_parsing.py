"""Unit tests for environment parsing and URL/origin helpers."""

from __future__ import annotations

import pytest

from chatwidget.helpers.env import env_list, env_optional
from chatwidget.helpers.origin import canonical_origin, origin_matches
from chatwidget.helpers.urls import build_delete_url


def test_env_list_accepts_json_and_comma_lists(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CHAT_TEST_LIST", '["a", "b c", " "]')
    assert env_list("CHAT_TEST_LIST", ()) == ("a", "b c")

    monkeypatch.setenv("CHAT_TEST_LIST", "a, b ,,c")
    assert env_list("CHAT_TEST_LIST", ()) == ("a", "b", "c")

    monkeypatch.setenv("CHAT_TEST_LIST", "")
    assert env_list("CHAT_TEST_LIST", ("x",)) == ("x",)


def test_env_list_rejects_non_string_json(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CHAT_TEST_LIST", "[1, 2]")
    with pytest.raises(ValueError):
        env_list("CHAT_TEST_LIST", ())


def test_env_optional_treats_blank_as_unset(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CHAT_TEST_ORIGIN", "   ")
    assert env_optional("CHAT_TEST_ORIGIN") is None


def test_canonical_origin_strips_path_and_case() -> None:
    assert canonical_origin("HTTPS://Shop.Example.com/embed?x=1") == "https://shop.example.com"
    assert canonical_origin("shop.example.com") == ""
    assert origin_matches("https://shop.example.com", "https://SHOP.example.com/")
    assert not origin_matches("https://shop.example.com:8443", "https://shop.example.com")


def test_build_delete_url_quotes_session_id() -> None:
    assert build_delete_url("http://chat.test/", "api/sessions/{session_id}", "a b") == (
        "http://chat.test/api/sessions/a%20b"
    )
