"""Interactive terminal loop driving one SessionController.

The InteractiveRunner orchestrates the interactive session lifecycle:
- Subscribes a SnapshotRenderer so every state change is printed
- Binds SIGINT/SIGTERM to the controller teardown
- Monitors both user input and controller shutdown
- Delegates slash commands to the commands module
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import os
from dataclasses import dataclass

from ..errors import ChatWidgetError
from ..handlers.controller import SessionController
from .commands import dispatch_command, print_help
from .render import SnapshotRenderer

logger = logging.getLogger(__name__)


class InputClosedError(ChatWidgetError):
    """stdin was closed or input was interrupted."""


@dataclass(slots=True)
class InteractiveRunner:
    """Manages the interactive CLI session lifecycle."""

    controller: SessionController
    show_banner: bool = True
    stdin_task: asyncio.Task[str] | None = None
    _closing: bool = False

    async def run(self) -> None:
        """Execute the interactive loop until exit or teardown."""
        subscription = self.controller.subscribe(SnapshotRenderer())
        self.controller.bind_unload_signals()
        if self.show_banner:
            print_help()
        self.controller.start()
        loop_task = asyncio.create_task(self._loop())
        closed_task = asyncio.create_task(self._watch_closed())
        try:
            done, _ = await asyncio.wait({loop_task, closed_task}, return_when=asyncio.FIRST_COMPLETED)
            if closed_task in done:
                await self._cancel_task(loop_task, suppress=(asyncio.CancelledError, InputClosedError))
            else:
                await self._cancel_task(closed_task)
                with contextlib.suppress(InputClosedError):
                    await loop_task
        finally:
            subscription.cancel()
            await self.controller.aclose()

    async def _cancel_task(
        self,
        task: asyncio.Task,
        *,
        suppress: tuple[type[BaseException], ...] = (asyncio.CancelledError,),
    ) -> None:
        if task.done():
            return
        task.cancel()
        with contextlib.suppress(*suppress):
            await task

    async def _loop(self) -> None:
        """Main input loop: read lines and dispatch commands or messages."""
        while True:
            try:
                line = await self._read_line()
            except InputClosedError as exc:
                if not self._closing:
                    logger.info("%s", exc)
                else:
                    logger.debug("stdin closed while shutting down: %s", exc)
                break

            if not line:
                continue
            if line.startswith("/"):
                if await dispatch_command(line[1:], self.controller):
                    self._closing = True
                    break
                continue

            # A submitted line counts as one typing burst
            self.controller.keystroke()
            if not self.controller.send(line):
                logger.warning("Not connected; message not sent")

    async def _read_line(self) -> str:
        loop = asyncio.get_running_loop()
        self.stdin_task = loop.create_task(_ainput())
        try:
            line = await self.stdin_task
        except asyncio.CancelledError as exc:
            raise InputClosedError("input cancelled") from exc
        finally:
            self.stdin_task = None
        return line.strip()

    async def _watch_closed(self) -> None:
        """Exit once the controller was torn down (signal or error)."""
        try:
            await self.controller.wait_closed()
        except asyncio.CancelledError:
            return
        if self._closing:
            return
        self._closing = True
        logger.info("Chat session closed; exiting.")
        if self.stdin_task:
            self.stdin_task.cancel()
        # Force exit: input() blocks in a thread and can't be interrupted
        os._exit(0)


async def interactive_loop(controller: SessionController, *, show_banner: bool = True) -> None:
    runner = InteractiveRunner(controller, show_banner=show_banner)
    await runner.run()


async def _ainput(prompt: str = "") -> str:
    """Async wrapper around input() that runs in an executor."""
    loop = asyncio.get_running_loop()
    try:
        return await loop.run_in_executor(None, lambda: input(prompt))
    except EOFError as exc:
        raise InputClosedError("stdin closed") from exc
    except KeyboardInterrupt as exc:
        raise InputClosedError("keyboard interrupt") from exc


__all__ = ["InputClosedError", "InteractiveRunner", "interactive_loop"]
