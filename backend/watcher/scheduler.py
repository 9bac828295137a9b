"""
LiveWatch Schedulers.

Run a zero-argument callback after a delay. No cancel handle is kept:
callers that need to supersede earlier callbacks do it themselves.
Requires Python 3.11+.
"""

import asyncio
import threading
from collections.abc import Callable
from typing import Protocol


class Scheduler(Protocol):
    """Schedule-after-delay capability."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> None:
        """Run ``callback`` once, ``delay`` seconds from now."""
        ...


class AsyncioScheduler:
    """
    Schedules callbacks on an asyncio event loop.

    Callbacks run on the loop thread, so everything they touch stays
    single-threaded.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop) -> None:
        self._loop = loop

    def call_later(self, delay: float, callback: Callable[[], None]) -> None:
        self._loop.call_later(delay, callback)


class ThreadingScheduler:
    """Schedules callbacks on daemon timer threads."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> None:
        timer = threading.Timer(delay, callback)
        timer.daemon = True
        timer.start()
