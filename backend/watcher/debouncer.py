"""
LiveWatch Debouncer.

Collapses bursts of file system events into a single trailing-edge action.
Requires Python 3.11+.
"""

import threading
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from utils.logger import LoggerMixin
from watcher.scheduler import Scheduler


@dataclass(frozen=True)
class WatchEvent:
    """A file change accepted by a watcher."""

    event_type: str  # created, modified, deleted, moved
    filename: str  # relative to the watch root


class TicketState(str, Enum):
    """Lifecycle of a pending ticket."""

    PENDING = "pending"
    FIRED = "fired"
    SUPERSEDED = "superseded"


@dataclass
class PendingTicket:
    """Counter snapshot taken when an event was accepted."""

    ticket: int
    event: WatchEvent
    state: TicketState = TicketState.PENDING


class Debouncer(LoggerMixin):
    """
    Trailing-edge debouncer built on a monotonically increasing counter.

    Every accepted event bumps the counter and schedules a check tagged
    with the new value. When the check runs, the action fires only if no
    newer event has bumped the counter in the meantime, so a burst of any
    length yields exactly one action, ``delay_ms`` after its last event.
    Superseded checks are left to expire; timers are never cancelled.
    """

    def __init__(
        self,
        action: Callable[[WatchEvent], Any],
        scheduler: Scheduler,
        delay_ms: int = 100,
    ) -> None:
        """
        Initialize the debouncer.

        Args:
            action: Called with the last event of a burst
            scheduler: Runs the delayed check
            delay_ms: Quiet period in milliseconds before the action fires
        """
        self._action = action
        self._scheduler = scheduler
        self._delay_ms = delay_ms
        self._counter = 0
        self._fired = 0
        self._lock = threading.Lock()

    def accept(self, event: WatchEvent) -> PendingTicket:
        """
        Register an event and schedule its delayed check.

        Args:
            event: The accepted file change

        Returns:
            The pending ticket for this event
        """
        with self._lock:
            self._counter += 1
            pending = PendingTicket(ticket=self._counter, event=event)

        self.log.debug(
            "event_accepted",
            filename=event.filename,
            event_type=event.event_type,
            ticket=pending.ticket,
        )
        self._scheduler.call_later(self._delay_ms / 1000.0, lambda: self._check(pending))
        return pending

    def _check(self, pending: PendingTicket) -> None:
        """Fire the action if ``pending`` is still the latest ticket."""
        with self._lock:
            if pending.ticket != self._counter:
                pending.state = TicketState.SUPERSEDED
            else:
                pending.state = TicketState.FIRED
                self._fired += 1

        if pending.state is TicketState.SUPERSEDED:
            self.log.debug("event_superseded", ticket=pending.ticket)
            return

        self.log.debug("debounce_fired", ticket=pending.ticket, filename=pending.event.filename)
        self._action(pending.event)

    @property
    def counter(self) -> int:
        """Number of events accepted so far."""
        return self._counter

    @property
    def fired_count(self) -> int:
        """Number of times the action has fired."""
        return self._fired

    @property
    def delay_ms(self) -> int:
        """Quiet period in milliseconds."""
        return self._delay_ms
