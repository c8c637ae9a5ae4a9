"""Minimal terminal presentation for a chat session.

runner.py:
    Interactive stdin loop driving a SessionController.

commands.py:
    Slash-command registry (/help, /quick, /min, /restore, /end, /reset,
    /dismiss, /info, /quit).

render.py:
    Prints the difference between consecutive session snapshots.
"""

from .commands import dispatch_command, print_help
from .render import SnapshotRenderer
from .runner import InputClosedError, InteractiveRunner, interactive_loop

__all__ = [
    "dispatch_command",
    "print_help",
    "SnapshotRenderer",
    "InputClosedError",
    "InteractiveRunner",
    "interactive_loop",
]
