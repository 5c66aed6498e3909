"""Replays turn events on a rich console with a pause between them.

The engine resolves a whole turn up front; this is the only place that
waits, and waiting never changes what happened.
"""

import time
from typing import Callable

from rich.console import Console

from pokearena.core.battle import Side, TurnEvent
from pokearena.utils.config import config

EVENT_STYLES = {
    "move": "bold",
    "damage": "",
    "miss": "dim",
    "immune": "dim",
    "ability": "bold magenta",
    "status": "yellow",
    "stat": "cyan",
    "heal": "green",
    "faint": "bold red",
    "switch": "bold",
    "item": "green",
    "prompt": "bold yellow",
    "run": "yellow",
    "end": "bold green",
    "info": "",
    "refused": "red",
}


def format_event(event: TurnEvent) -> str:
    """Console markup for one event."""
    message = event.message
    if event.event_type == "damage" and event.critical:
        message = f"{message} (critical)"
    style = EVENT_STYLES.get(event.event_type, "")
    if event.event_type == "info" and event.effectiveness > 1:
        style = "bold green"
    elif event.event_type == "info" and 0 < event.effectiveness < 1:
        style = "dim"
    if event.side == Side.CPU and event.event_type in ("move", "switch"):
        style = f"{style} red".strip()
    return f"[{style}]{message}[/{style}]" if style else message


class EventPlayer:
    """Prints a turn's events one at a time with config.message_delay between them."""

    def __init__(
        self,
        console: Console | None = None,
        delay: float | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.console = console or Console()
        self.delay = config.message_delay if delay is None else delay
        self._sleep = sleep

    def play(self, events: list[TurnEvent]) -> None:
        shown = 0
        for event in events:
            if not event.message:
                continue
            if shown and self.delay > 0:
                self._sleep(self.delay)
            self.console.print(format_event(event))
            shown += 1
