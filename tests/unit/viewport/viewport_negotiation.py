"""Unit tests for viewport classification and host negotiation."""

from __future__ import annotations

import json

import pytest

from chatwidget.handlers.viewport import ViewportNegotiator, parse_viewport_info
from tests.helpers.fakes import FakeFrameChannel

HOST = "https://shop.example.com"


def test_width_heuristic_uses_inclusive_threshold() -> None:
    negotiator = ViewportNegotiator(initial_width=600)
    assert negotiator.is_mobile

    negotiator.on_resize(601)
    assert not negotiator.is_mobile


def test_unknown_width_counts_as_desktop() -> None:
    assert not ViewportNegotiator().is_mobile


def test_nested_frame_requests_viewport_info_from_host_origin() -> None:
    channel = FakeFrameChannel(is_nested=True)
    negotiator = ViewportNegotiator(channel, expected_origin=f"{HOST}/embed")
    negotiator.start()
    negotiator.start()

    assert channel.posted == [({"type": "REQUEST_VIEWPORT_INFO"}, HOST)]
    assert negotiator.requested


def test_no_request_without_configured_origin_or_nesting() -> None:
    nested = FakeFrameChannel(is_nested=True)
    ViewportNegotiator(nested).start()
    top = FakeFrameChannel(is_nested=False)
    ViewportNegotiator(top, expected_origin=HOST).start()

    assert nested.posted == []
    assert top.posted == []


@pytest.mark.parametrize(
    "payload",
    [
        {"type": "VIEWPORT_INFO", "isMobile": True},
        json.dumps({"type": "VIEWPORT_INFO", "isMobile": True}),
    ],
)
def test_host_reply_from_expected_origin_wins_over_width(payload: object) -> None:
    changes: list[bool] = []
    negotiator = ViewportNegotiator(expected_origin=HOST, initial_width=1200, on_change=changes.append)

    assert negotiator.handle_message(payload, HOST)
    assert negotiator.is_mobile
    assert negotiator.host_classified

    negotiator.on_resize(1400)
    assert negotiator.is_mobile
    assert changes == [True]


def test_malformed_frame_message_is_ignored() -> None:
    negotiator = ViewportNegotiator(expected_origin=HOST, initial_width=400)

    assert not negotiator.handle_message("not json", HOST)
    assert negotiator.is_mobile
    assert not negotiator.host_classified

    negotiator.on_resize(900)
    assert not negotiator.is_mobile


@pytest.mark.parametrize(
    "origin",
    ["https://evil.example.com", "http://shop.example.com", None, "null"],
)
def test_message_from_other_origin_is_ignored(origin: str | None) -> None:
    negotiator = ViewportNegotiator(expected_origin=HOST, initial_width=1200)

    assert not negotiator.handle_message({"type": "VIEWPORT_INFO", "isMobile": True}, origin)
    assert not negotiator.is_mobile


def test_messages_ignored_when_no_origin_configured() -> None:
    negotiator = ViewportNegotiator(initial_width=1200)

    assert not negotiator.handle_message({"type": "VIEWPORT_INFO", "isMobile": True}, HOST)


@pytest.mark.parametrize(
    "payload",
    [
        {"type": "OTHER", "isMobile": True},
        {"type": "VIEWPORT_INFO"},
        {"type": "VIEWPORT_INFO", "isMobile": "yes"},
        ["VIEWPORT_INFO"],
        b"\xff\xfe",
        42,
    ],
)
def test_parse_viewport_info_rejects_bad_payloads(payload: object) -> None:
    assert parse_viewport_info(payload) is None


def test_resize_notifies_only_on_classification_flip() -> None:
    changes: list[bool] = []
    negotiator = ViewportNegotiator(initial_width=1000, on_change=changes.append)

    negotiator.on_resize(900)
    negotiator.on_resize(500)
    negotiator.on_resize(450)
    negotiator.on_resize(800)

    assert changes == [True, False]


def test_close_detaches_listener() -> None:
    changes: list[bool] = []
    negotiator = ViewportNegotiator(expected_origin=HOST, initial_width=1000, on_change=changes.append)
    negotiator.close()

    negotiator.on_resize(300)
    assert not negotiator.handle_message({"type": "VIEWPORT_INFO", "isMobile": True}, HOST)
    assert changes == []
