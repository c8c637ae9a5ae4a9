"""Unit tests for SessionController event wiring and user intents."""

from __future__ import annotations

import asyncio

from chatwidget.handlers.controller import SessionController
from chatwidget.settings import ChatSettings, ConnectionOptions
from chatwidget.state import Message, Role, SessionSnapshot
from tests.helpers.fakes import FakeFrameChannel, FakeLoop, FakeTransport, settle

GREETING = "Hi, I am the shop assistant."
QUICK_REPLIES = ("Opening hours?", "Where are you?")
HOST = "https://shop.example.com"


def _settings(**overrides) -> ChatSettings:
    values = dict(
        server_url="http://chat.test",
        connection=ConnectionOptions(reconnection_attempts=0, reconnection_delay_s=0.0),
        greeting=GREETING,
        quick_replies=QUICK_REPLIES,
        host_origin=HOST,
    )
    values.update(overrides)
    return ChatSettings(**values)


def _controller(transport: FakeTransport, **kwargs) -> SessionController:
    return SessionController(
        kwargs.pop("settings", None) or _settings(),
        transport_factory=lambda _endpoint, _options: transport,
        **kwargs,
    )


def test_connect_then_response_scenario() -> None:
    async def _run() -> None:
        transport = FakeTransport()
        controller = _controller(transport)
        snapshots: list[SessionSnapshot] = []
        controller.subscribe(snapshots.append)

        controller.start()
        await settle()
        transport.receive("response", {"message": "hi"})

        snapshot = controller.snapshot()
        assert snapshot.messages == (Message(Role.ASSISTANT, GREETING), Message(Role.ASSISTANT, "hi"))
        assert not snapshot.is_loading
        assert snapshot.connected
        assert snapshot.session_id == "sid-1"
        assert transport.events() == ["startChat"]
        assert snapshots[-1] == snapshot
        await controller.aclose()

    asyncio.run(_run())


def test_send_emits_message_and_appends_user_entry() -> None:
    async def _run() -> None:
        transport = FakeTransport()
        async with _controller(transport) as controller:
            await settle()
            assert controller.send("  hello there  ")

            assert transport.emitted[-1] == ("message", {"message": "hello there"})
            state = controller.state
            assert state.messages[-1] == Message(Role.USER, "hello there")
            assert state.typing_indicator
            assert not state.show_quick_replies

    asyncio.run(_run())


def test_whitespace_send_is_a_no_op() -> None:
    async def _run() -> None:
        transport = FakeTransport()
        async with _controller(transport) as controller:
            await settle()
            snapshots: list[SessionSnapshot] = []
            controller.subscribe(snapshots.append)

            assert not controller.send("  ")
            assert transport.events() == ["startChat"]
            assert len(controller.state.messages) == 1
            assert snapshots == []

    asyncio.run(_run())


def test_send_without_live_connection_is_a_no_op() -> None:
    async def _run() -> None:
        transport = FakeTransport()
        async with _controller(transport) as controller:
            await settle()
            transport.drop()

            assert not controller.send("hello")
            assert len(controller.state.messages) == 1
            assert controller.state.error == controller.settings.disconnect_error_message

    asyncio.run(_run())


def test_connect_failure_surfaces_error_notice() -> None:
    async def _run() -> None:
        transport = FakeTransport(fail_times=5)
        async with _controller(transport) as controller:
            await settle()
            state = controller.state

            assert state.error == controller.settings.connect_error_message
            assert not state.is_loading
            assert not controller.snapshot().connected

    asyncio.run(_run())


def test_remote_typing_filters_sender_and_server_errors_use_fallback() -> None:
    async def _run() -> None:
        transport = FakeTransport()
        async with _controller(transport) as controller:
            await settle()
            transport.receive("typing", {"sessionId": "other-visitor"})
            assert not controller.state.is_typing

            transport.receive("typing", {"sessionId": "assistant"})
            assert controller.snapshot().typing_indicator
            transport.receive("stopTyping", {"sessionId": "assistant"})
            assert not controller.state.is_typing

            transport.receive("error", {})
            assert controller.state.error == "An error occurred"
            controller.dismiss_error()
            assert controller.state.error is None
            assert controller.snapshot().connected

    asyncio.run(_run())


def test_quick_reply_only_while_offered_and_configured() -> None:
    async def _run() -> None:
        transport = FakeTransport()
        async with _controller(transport) as controller:
            await settle()
            assert not controller.select_quick_reply("Something else")
            assert controller.select_quick_reply(QUICK_REPLIES[1])
            assert transport.emitted[-1] == ("message", {"message": QUICK_REPLIES[1]})
            assert controller.snapshot().quick_replies == ()

            assert not controller.select_quick_reply(QUICK_REPLIES[0])
            assert len(controller.state.messages) == 2

    asyncio.run(_run())


def test_quick_reply_refused_after_assistant_response() -> None:
    async def _run() -> None:
        transport = FakeTransport()
        async with _controller(transport) as controller:
            await settle()
            transport.receive("response", {"message": "welcome back"})

            assert controller.snapshot().quick_replies == ()
            assert not controller.select_quick_reply(QUICK_REPLIES[0])
            assert transport.events() == ["startChat"]
            assert len(controller.state.messages) == 2

    asyncio.run(_run())


def test_keystrokes_emit_debounced_typing_signals() -> None:
    async def _run() -> None:
        transport = FakeTransport()
        loop = FakeLoop()
        async with _controller(transport, loop=loop) as controller:
            await settle()
            for _ in range(4):
                controller.keystroke()
                loop.advance(0.3)
            loop.advance(1.0)

            assert transport.events() == ["startChat", "typing", "stopTyping"]

    asyncio.run(_run())


def test_end_session_then_restore_starts_new_conversation() -> None:
    async def _run() -> None:
        transport = FakeTransport()
        async with _controller(transport) as controller:
            await settle()
            controller.send("hello")
            controller.end_session()
            await settle()

            assert transport.emitted[-1] == ("deleteSession", {"sessionId": "sid-1"})
            assert controller.state.session_ended
            assert controller.state.is_minimized

            controller.end_session()
            await settle()
            assert transport.events().count("deleteSession") == 1

            controller.restore()
            snapshot = controller.snapshot()
            assert snapshot.messages == (Message(Role.ASSISTANT, GREETING),)
            assert snapshot.quick_replies == QUICK_REPLIES
            assert snapshot.is_visible

            await settle()
            assert transport.emitted[-1] == ("startChat", None)

    asyncio.run(_run())


def test_reset_conversation_deletes_backend_session() -> None:
    async def _run() -> None:
        transport = FakeTransport()
        async with _controller(transport) as controller:
            await settle()
            controller.send("hello")
            controller.minimize()
            controller.reset_conversation()
            await settle()

            assert transport.events()[-2:] == ["deleteSession", "startChat"]
            assert len(controller.state.messages) == 1
            assert controller.state.is_minimized

    asyncio.run(_run())


def test_viewport_negotiation_feeds_snapshot() -> None:
    async def _run() -> None:
        transport = FakeTransport()
        channel = FakeFrameChannel(is_nested=True)
        async with _controller(transport, frame_channel=channel, initial_width=1024) as controller:
            await settle()
            snapshots: list[SessionSnapshot] = []
            controller.subscribe(snapshots.append)

            assert channel.posted == [({"type": "REQUEST_VIEWPORT_INFO"}, HOST)]
            assert not controller.handle_frame_message("not json", HOST)
            assert not controller.snapshot().is_mobile

            controller.on_resize(480)
            assert snapshots[-1].is_mobile

            assert controller.handle_frame_message({"type": "VIEWPORT_INFO", "isMobile": False}, HOST)
            controller.on_resize(320)
            assert not controller.snapshot().is_mobile

    asyncio.run(_run())


def test_failing_subscriber_does_not_block_others_and_cancel_is_idempotent() -> None:
    async def _run() -> None:
        transport = FakeTransport()
        async with _controller(transport) as controller:
            await settle()

            def _boom(_snapshot: SessionSnapshot) -> None:
                raise RuntimeError("render failed")

            received: list[SessionSnapshot] = []
            controller.subscribe(_boom)
            subscription = controller.subscribe(received.append)

            controller.minimize()
            assert len(received) == 1

            subscription.cancel()
            subscription.cancel()
            assert not subscription.active
            controller.restore()
            assert len(received) == 1

    asyncio.run(_run())
