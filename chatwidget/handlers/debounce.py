"""Trailing-edge debounce for local typing signals.

The first keystroke of a burst emits ``typing`` immediately; every keystroke
(re)arms a single timer that emits ``stopTyping`` once the input has been
quiet for ``quiet_interval_s``. Replacing the timer cancels the previous one,
so N keystrokes inside the interval yield one ``typing`` and one
``stopTyping``.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

logger = logging.getLogger(__name__)

TYPING_EVENT = "typing"
STOP_TYPING_EVENT = "stopTyping"


class TypingDebouncer:
    def __init__(
        self,
        emit: Callable[[str], object],
        *,
        quiet_interval_s: float = 1.0,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        if quiet_interval_s <= 0:
            raise ValueError("quiet_interval_s must be > 0")
        self._emit = emit
        self._quiet_interval_s = quiet_interval_s
        self._loop = loop
        self._timer: asyncio.TimerHandle | None = None
        self._active = False

    @property
    def active(self) -> bool:
        """True between the burst's ``typing`` and its ``stopTyping``."""
        return self._active

    @property
    def pending(self) -> bool:
        return self._timer is not None

    def keystroke(self) -> None:
        loop = self._loop or asyncio.get_running_loop()
        if self._timer is not None:
            self._timer.cancel()
        if not self._active:
            self._active = True
            self._emit(TYPING_EVENT)
        self._timer = loop.call_later(self._quiet_interval_s, self._fire)

    def _fire(self) -> None:
        self._timer = None
        self._active = False
        self._emit(STOP_TYPING_EVENT)

    def cancel(self) -> None:
        """Drop the pending stopTyping without emitting it."""
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
            logger.debug("Cancelled pending stopTyping")
        self._active = False


__all__ = ["TYPING_EVENT", "STOP_TYPING_EVENT", "TypingDebouncer"]
