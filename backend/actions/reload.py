"""
LiveWatch Reload Action.

Requires Python 3.11+.
"""

from typing import Protocol

from utils.logger import LoggerMixin
from watcher.debouncer import WatchEvent


class Reloadable(Protocol):
    def reload(self) -> None: ...


class WindowHost(Protocol):
    """Anything that can hand out its current window."""

    @property
    def current_window(self) -> Reloadable | None: ...


class ReloadAction(LoggerMixin):
    """Reloads the host's current window when a watched file changes."""

    def __init__(self, host: WindowHost) -> None:
        self._host = host

    def __call__(self, event: WatchEvent) -> bool:
        window = self._host.current_window
        if window is None:
            self.log.info("reload_skipped_no_window", filename=event.filename)
            return False

        print(f"Reloading on file change: {event.filename}")
        self.log.debug("window_reload", filename=event.filename)
        window.reload()
        return True
