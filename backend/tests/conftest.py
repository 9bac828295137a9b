"""
LiveWatch Test Configuration.

Pytest fixtures and configuration.
Requires Python 3.11+.
"""

import heapq
import itertools
from collections.abc import Callable
from pathlib import Path

import pytest

from utils.config import get_settings
from watcher.debouncer import WatchEvent


class ManualScheduler:
    """Scheduler driven by a virtual millisecond clock."""

    def __init__(self) -> None:
        self.now_ms = 0.0
        self._queue: list[tuple[float, int, Callable[[], None]]] = []
        self._seq = itertools.count()

    def call_later(self, delay: float, callback: Callable[[], None]) -> None:
        heapq.heappush(self._queue, (self.now_ms + delay * 1000.0, next(self._seq), callback))

    def advance_to(self, target_ms: float) -> None:
        """Run every callback due at or before ``target_ms``, in order."""
        while self._queue and self._queue[0][0] <= target_ms:
            due, _, callback = heapq.heappop(self._queue)
            self.now_ms = due
            callback()
        self.now_ms = target_ms

    def advance(self, delta_ms: float) -> None:
        self.advance_to(self.now_ms + delta_ms)

    @property
    def pending(self) -> int:
        return len(self._queue)


class RecordingAction:
    """Action that records each event with the virtual time it fired at."""

    def __init__(self, scheduler: ManualScheduler | None = None) -> None:
        self._scheduler = scheduler
        self.calls: list[tuple[float | None, WatchEvent]] = []

    def __call__(self, event: WatchEvent) -> None:
        now = self._scheduler.now_ms if self._scheduler is not None else None
        self.calls.append((now, event))

    @property
    def fire_times(self) -> list[float | None]:
        return [t for t, _ in self.calls]

    @property
    def filenames(self) -> list[str]:
        return [e.filename for _, e in self.calls]


@pytest.fixture
def scheduler() -> ManualScheduler:
    """Virtual-clock scheduler."""
    return ManualScheduler()


@pytest.fixture
def recorder(scheduler: ManualScheduler) -> RecordingAction:
    """Action recording fire times against the virtual clock."""
    return RecordingAction(scheduler)


@pytest.fixture(autouse=True)
def fresh_settings():
    """Make every test read settings from its own environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def source_tree(tmp_path: Path) -> Path:
    """Create a small source tree to watch."""
    src = tmp_path / "src"
    (src / "Page").mkdir(parents=True)
    (src / "Main.elm").write_text("module Main exposing (main)\n")
    (src / "Page" / "Home.elm").write_text("module Page.Home exposing (view)\n")
    (src / "readme.md").write_text("# notes\n")
    return src
