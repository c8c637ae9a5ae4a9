"""Unit tests for the session log context."""

from __future__ import annotations

import asyncio
import logging

from chatwidget.config.logging import APP_LOG_DATEFMT, APP_LOG_FORMAT
from chatwidget.handlers.controller import SessionController
from chatwidget.logging import install_log_context, log_context
from chatwidget.settings import ChatSettings, ConnectionOptions
from tests.helpers.fakes import FakeTransport, settle


def _record(message: str) -> logging.LogRecord:
    return logging.getLogger("chatwidget.tests").makeRecord(
        "chatwidget.tests", logging.INFO, __file__, 1, message, (), None
    )


def test_default_format_renders_session_field() -> None:
    install_log_context()
    formatter = logging.Formatter(APP_LOG_FORMAT, datefmt=APP_LOG_DATEFMT)

    assert "[session=-]" in formatter.format(_record("outside"))
    with log_context(session_id="sid-9"):
        assert "[session=sid-9]" in formatter.format(_record("inside"))


class _RecordingHandler(logging.Handler):
    def __init__(self) -> None:
        super().__init__(logging.WARNING)
        self.records: list[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)


def test_remote_events_are_logged_with_session_id() -> None:
    install_log_context()
    handler = _RecordingHandler()
    controller_logger = logging.getLogger("chatwidget.handlers.controller")

    async def _run() -> None:
        transport = FakeTransport()
        settings = ChatSettings(
            server_url="http://chat.test",
            connection=ConnectionOptions(reconnection_attempts=0, reconnection_delay_s=0.0),
            greeting="Hello",
        )
        async with SessionController(settings, transport_factory=lambda _endpoint, _options: transport):
            await settle()
            transport.receive("error", {"message": "Rate limited"})

    controller_logger.addHandler(handler)
    try:
        asyncio.run(_run())
    finally:
        controller_logger.removeHandler(handler)

    server_errors = [record for record in handler.records if record.getMessage().startswith("Server error")]
    assert server_errors
    assert all(record.session_id == "sid-1" for record in server_errors)
