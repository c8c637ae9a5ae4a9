"""Slash-command handlers for the terminal front-end.

Each handler has the same signature and returns True when the interactive
loop should exit. Aliases map common alternatives (``/exit`` -> ``/quit``,
``/?`` -> ``/help``).
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING

from .render import bold, dim

if TYPE_CHECKING:
    from ..handlers.controller import SessionController

logger = logging.getLogger(__name__)


# ============================================================================
# Command Handlers
# ============================================================================


async def _handle_help_command(_: str, controller: SessionController, *, raw_command: str) -> bool:
    del controller, raw_command
    print_help(verbose=True)
    return False


async def _handle_quick_command(arg: str, controller: SessionController, *, raw_command: str) -> bool:
    """List quick replies, or send the n-th one."""
    quick_replies = controller.snapshot().quick_replies
    if not quick_replies:
        logger.info("Quick replies are only offered with the greeting")
        return False
    if not arg:
        for index, text in enumerate(quick_replies, start=1):
            print(f"  {index}. {text}")
        return False
    try:
        choice = int(arg)
    except ValueError:
        logger.warning("Usage: /%s [n]", raw_command)
        return False
    if not 1 <= choice <= len(quick_replies):
        logger.warning("Pick a quick reply between 1 and %d", len(quick_replies))
        return False
    if not controller.select_quick_reply(quick_replies[choice - 1]):
        logger.warning("Not connected; quick reply not sent")
    return False


async def _handle_minimize_command(_: str, controller: SessionController, *, raw_command: str) -> bool:
    del raw_command
    controller.minimize()
    return False


async def _handle_restore_command(_: str, controller: SessionController, *, raw_command: str) -> bool:
    del raw_command
    controller.restore()
    return False


async def _handle_end_command(_: str, controller: SessionController, *, raw_command: str) -> bool:
    del raw_command
    controller.end_session()
    return False


async def _handle_reset_command(_: str, controller: SessionController, *, raw_command: str) -> bool:
    del raw_command
    controller.reset_conversation()
    return False


async def _handle_dismiss_command(_: str, controller: SessionController, *, raw_command: str) -> bool:
    del raw_command
    controller.dismiss_error()
    return False


async def _handle_info_command(_: str, controller: SessionController, *, raw_command: str) -> bool:
    del raw_command
    snapshot = controller.snapshot()
    logger.info(
        "Session %s connected=%s mobile=%s messages=%d minimized=%s ended=%s",
        snapshot.session_id or "-",
        snapshot.connected,
        snapshot.is_mobile,
        len(snapshot.messages),
        snapshot.is_minimized,
        snapshot.session_ended,
    )
    return False


async def _handle_quit_command(_: str, controller: SessionController, *, raw_command: str) -> bool:
    del raw_command
    logger.info("Closing chat session...")
    await controller.aclose()
    return True


def print_help(verbose: bool = False) -> None:
    """Print the help banner or detailed command list."""
    if verbose:
        print(
            f"\n{bold('Commands:')}\n"
            f"  {dim('/help')}                Show this list\n"
            f"  {dim('/quick [n]')}           List quick replies or send the n-th one\n"
            f"  {dim('/min')}                 Minimize the chat\n"
            f"  {dim('/restore')}             Reopen the chat\n"
            f"  {dim('/end')}                 End the session\n"
            f"  {dim('/reset')}               Delete the conversation and start over\n"
            f"  {dim('/dismiss')}             Hide the current error notice\n"
            f"  {dim('/info')}                Show session metadata\n"
            f"  {dim('/quit')}                Close the session and exit\n"
            "\n"
            "Any line without a leading '/' is sent to the assistant.\n"
        )
    else:
        print(f"\n{bold('Chat ready.')} Type /help for commands.\n")


# ============================================================================
# Command Registry
# ============================================================================

CommandHandler = Callable[..., Awaitable[bool]]

COMMAND_HANDLERS: dict[str, CommandHandler] = {
    "help": _handle_help_command,
    "quick": _handle_quick_command,
    "min": _handle_minimize_command,
    "restore": _handle_restore_command,
    "end": _handle_end_command,
    "reset": _handle_reset_command,
    "dismiss": _handle_dismiss_command,
    "info": _handle_info_command,
    "quit": _handle_quit_command,
}

COMMAND_ALIASES: dict[str, str] = {
    "?": "help",
    "minimize": "min",
    "open": "restore",
    "delete": "reset",
    "status": "info",
    "exit": "quit",
    "stop": "quit",
}


async def dispatch_command(command_line: str, controller: SessionController) -> bool:
    """Parse and dispatch a slash command.

    Returns True if the session should exit, False otherwise.
    """
    if not command_line.strip():
        logger.warning("Empty command. Type /help for options.")
        return False
    command, *rest = command_line.split(maxsplit=1)
    arg = rest[0].strip() if rest else ""
    cmd = command.lower()
    handler = COMMAND_HANDLERS.get(COMMAND_ALIASES.get(cmd, cmd))
    if handler is None:
        logger.warning("Unknown command '/%s'. Type /help for options.", command)
        return False
    return await handler(arg, controller, raw_command=cmd)


__all__ = ["COMMAND_HANDLERS", "COMMAND_ALIASES", "dispatch_command", "print_help"]
