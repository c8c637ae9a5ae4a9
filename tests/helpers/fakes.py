"""In-memory stand-ins for the socket, the loop timer and the host frame."""

from __future__ import annotations

import asyncio
from typing import Any

from chatwidget.transport import CONNECT_EVENT, DISCONNECT_EVENT, BaseTransport


class FakeTransport(BaseTransport):
    """Transport that records emits and lets tests inject inbound events.

    ``journal`` is shared with other fakes so tests can assert on the
    relative order of emits, deletes and closes.
    """

    def __init__(
        self,
        *,
        sid: str = "sid-1",
        fail_times: int = 0,
        journal: list[str] | None = None,
    ) -> None:
        super().__init__()
        self._sid = sid
        self._connected = False
        self.fail_times = fail_times
        self.journal = journal if journal is not None else []
        self.emitted: list[tuple[str, Any]] = []
        self.open_calls = 0
        self.close_calls = 0

    @property
    def sid(self) -> str | None:
        return self._sid

    @property
    def connected(self) -> bool:
        return self._connected

    def emit(self, event: str, payload: Any = None) -> None:
        self.emitted.append((event, payload))
        self.journal.append(f"emit:{event}")

    def events(self) -> list[str]:
        return [event for event, _ in self.emitted]

    async def open(self) -> None:
        self.open_calls += 1
        if self.fail_times > 0:
            self.fail_times -= 1
            raise OSError("connection refused")
        self._connected = True
        self.notify(CONNECT_EVENT)

    async def close(self) -> None:
        self.close_calls += 1
        self.journal.append("close")
        self._connected = False

    # Test controls -----------------------------------------------------

    def receive(self, event: str, data: Any = None) -> None:
        self.notify(event, data)

    def drop(self, reason: str = "transport close") -> None:
        self._connected = False
        self.notify(DISCONNECT_EVENT, reason)

    def reconnect(self, sid: str | None = None) -> None:
        if sid is not None:
            self._sid = sid
        self._connected = True
        self.notify(CONNECT_EVENT)


class RecordingDeleter:
    """Session deleter that records calls and can be told to fail."""

    def __init__(self, *, journal: list[str] | None = None, error: Exception | None = None) -> None:
        self.journal = journal if journal is not None else []
        self.error = error
        self.deleted: list[str] = []

    async def delete(self, transport, session_id: str) -> None:
        self.journal.append(f"delete:{session_id}")
        if self.error is not None:
            raise self.error
        self.deleted.append(session_id)


class _FakeTimer:
    def __init__(self, loop: FakeLoop, when: float, callback) -> None:
        self._loop = loop
        self.when = when
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class FakeLoop:
    """Manual clock implementing the ``call_later`` subset the debouncer uses."""

    def __init__(self) -> None:
        self.now = 0.0
        self.timers: list[_FakeTimer] = []

    def call_later(self, delay: float, callback, *args) -> _FakeTimer:
        timer = _FakeTimer(self, self.now + delay, lambda: callback(*args))
        self.timers.append(timer)
        return timer

    def pending(self) -> list[_FakeTimer]:
        return [timer for timer in self.timers if not timer.cancelled]

    def advance(self, seconds: float) -> None:
        self.now += seconds
        due = sorted(
            (t for t in self.timers if not t.cancelled and t.when <= self.now),
            key=lambda t: t.when,
        )
        for timer in due:
            self.timers.remove(timer)
            timer.callback()


class FakeFrameChannel:
    def __init__(self, *, is_nested: bool = True) -> None:
        self.is_nested = is_nested
        self.posted: list[tuple[dict[str, Any], str]] = []

    def post_to_parent(self, message: dict[str, Any], target_origin: str) -> None:
        self.posted.append((message, target_origin))


async def settle(rounds: int = 5) -> None:
    """Let scheduled tasks run to their next suspension point."""
    for _ in range(rounds):
        await asyncio.sleep(0)


__all__ = [
    "FakeTransport",
    "RecordingDeleter",
    "FakeLoop",
    "FakeFrameChannel",
    "settle",
]
