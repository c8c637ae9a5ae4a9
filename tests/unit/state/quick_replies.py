"""Unit tests for quick reply visibility in snapshots."""

from __future__ import annotations

from chatwidget.state import (
    QuickReplySelected,
    RemoteResponse,
    ResetConversation,
    SessionSnapshot,
    SessionStateMachine,
    UserSend,
)

QUICK_REPLIES = ("first", "second")


def _snapshot(machine: SessionStateMachine) -> SessionSnapshot:
    return SessionSnapshot.build(
        machine.state,
        quick_replies=QUICK_REPLIES,
        is_mobile=False,
        connected=True,
        session_id="sid-1",
    )


def test_quick_replies_offered_with_greeting_only() -> None:
    machine = SessionStateMachine("Hi")
    snapshot = _snapshot(machine)

    assert snapshot.show_quick_replies
    assert snapshot.quick_replies == QUICK_REPLIES
    assert len(snapshot.messages) == 1


def test_selecting_quick_reply_sends_it_and_hides_the_rest() -> None:
    machine = SessionStateMachine("Hi")
    machine.dispatch(QuickReplySelected("second"))
    snapshot = _snapshot(machine)

    assert snapshot.messages[-1].content == "second"
    assert not snapshot.show_quick_replies
    assert snapshot.quick_replies == ()


def test_quick_replies_stay_hidden_after_send_until_reset() -> None:
    machine = SessionStateMachine("Hi")
    machine.dispatch(UserSend("hello"))
    machine.dispatch(RemoteResponse("hey"))
    assert _snapshot(machine).quick_replies == ()

    machine.dispatch(ResetConversation())
    snapshot = _snapshot(machine)
    assert snapshot.quick_replies == QUICK_REPLIES
    assert len(snapshot.messages) == 1


def test_assistant_response_before_first_send_hides_quick_replies() -> None:
    machine = SessionStateMachine("Hi")
    machine.dispatch(RemoteResponse("welcome back"))
    snapshot = _snapshot(machine)

    assert len(snapshot.messages) == 2
    assert not snapshot.show_quick_replies
    assert snapshot.quick_replies == ()
