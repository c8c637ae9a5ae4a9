"""Interactive terminal chat client.

- Connects to the assistant backend (Socket.IO by default, plain WebSocket
  with ``--transport websocket``)
- Prints the greeting, quick replies, responses, typing and error notices
- Lets you drive every session intent through slash commands
- Deletes the backend session on /quit, Ctrl+C or SIGTERM
"""

from __future__ import annotations

import argparse
import asyncio
import logging

from . import config
from .errors import ChatWidgetError
from .handlers.controller import SessionController
from .logging import configure_logging
from .settings import ChatSettings, ConnectionOptions
from .terminal import interactive_loop

logger = logging.getLogger("chatwidget")


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="chatwidget", description="Interactive chat session client")
    parser.add_argument(
        "--server",
        default=config.CHAT_SERVER_URL,
        help=f"Backend URL (default env CHAT_SERVER_URL or {config.CHAT_SERVER_URL})",
    )
    parser.add_argument(
        "--transport",
        choices=sorted(config.SUPPORTED_TRANSPORTS),
        default=config.CHAT_TRANSPORT,
        help=f"Socket transport (default: {config.CHAT_TRANSPORT})",
    )
    parser.add_argument(
        "--delete-mode",
        dest="delete_mode",
        choices=sorted(config.SUPPORTED_DELETE_MODES),
        default=config.CHAT_SESSION_DELETE_MODE,
        help=f"How the backend session is deleted on exit (default: {config.CHAT_SESSION_DELETE_MODE})",
    )
    parser.add_argument(
        "--viewport-width",
        dest="viewport_width",
        type=int,
        default=None,
        help=f"Simulated viewport width; <= {config.VIEWPORT_MOBILE_MAX_WIDTH} counts as mobile",
    )
    parser.add_argument(
        "--log-level",
        dest="log_level",
        default=None,
        help=f"Log level (default env APP_LOG_LEVEL or {config.APP_LOG_LEVEL})",
    )
    return parser.parse_args(argv)


def build_settings(args: argparse.Namespace) -> ChatSettings:
    return ChatSettings(
        server_url=args.server,
        connection=ConnectionOptions(transport=args.transport),
        session_delete_mode=args.delete_mode,
    )


async def _run(args: argparse.Namespace) -> None:
    try:
        settings = build_settings(args)
    except ValueError as exc:
        raise SystemExit(f"Invalid configuration: {exc}") from exc

    controller = SessionController(settings, initial_width=args.viewport_width)
    try:
        await interactive_loop(controller)
    except ChatWidgetError as exc:
        logger.error("Chat session failed: %s", exc)
        raise SystemExit(1) from exc


def main(argv: list[str] | None = None) -> None:
    args = _parse_args(argv)
    configure_logging(args.log_level)
    asyncio.run(_run(args))


if __name__ == "__main__":
    main()
