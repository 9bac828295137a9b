"""
LiveWatch File Watcher.

Cross-platform file system monitoring using watchdog.
Requires Python 3.11+.
"""

import asyncio
import os
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any

from watchdog.events import (
    EVENT_TYPE_CREATED,
    EVENT_TYPE_DELETED,
    EVENT_TYPE_MODIFIED,
    EVENT_TYPE_MOVED,
    FileSystemEvent,
    FileSystemEventHandler,
)
from watchdog.observers import Observer

from utils.logger import LoggerMixin
from watcher.debouncer import Debouncer, WatchEvent

# Opened/closed notifications also fire on plain reads
_CHANGE_EVENT_TYPES = frozenset(
    {EVENT_TYPE_CREATED, EVENT_TYPE_MODIFIED, EVENT_TYPE_DELETED, EVENT_TYPE_MOVED}
)


class WatcherError(Exception):
    """The watch root is unusable or the observer stopped unexpectedly."""


class SuffixFilterHandler(FileSystemEventHandler, LoggerMixin):
    """
    Forwards file changes whose name ends with one of the given suffixes.

    Directory events and events without a filename are dropped.
    """

    def __init__(
        self,
        dispatch: Callable[[WatchEvent], Any],
        root: Path,
        suffixes: Iterable[str],
    ) -> None:
        """
        Initialize the handler.

        Args:
            dispatch: Receives each accepted event
            root: Watch root, used to make filenames relative
            suffixes: Accepted filename endings, e.g. ``.elm``
        """
        super().__init__()
        self._dispatch = dispatch
        self._root = os.path.realpath(root)
        self._suffixes = tuple(suffixes)

    def _relative_name(self, path: str | bytes) -> str:
        """Return ``path`` relative to the watch root, or '' if absent."""
        if isinstance(path, bytes):
            path = os.fsdecode(path)
        if not path:
            return ""
        # Resolve the directory only so a symlinked file keeps its own name
        head, tail = os.path.split(os.path.abspath(path))
        absolute = os.path.join(os.path.realpath(head), tail)
        try:
            if os.path.commonpath([absolute, self._root]) != self._root:
                return path
        except ValueError:
            # Different drives on Windows
            return path
        relative = os.path.relpath(absolute, self._root)
        return "" if relative == os.curdir else relative

    def matches(self, filename: str) -> bool:
        """Check if a filename passes the suffix filter."""
        return filename.endswith(self._suffixes)

    def on_any_event(self, event: FileSystemEvent) -> None:
        """Filter a raw watchdog event and dispatch it if relevant."""
        if event.is_directory or event.event_type not in _CHANGE_EVENT_TYPES:
            return

        path = event.dest_path if event.event_type == EVENT_TYPE_MOVED else event.src_path
        filename = self._relative_name(path)
        self.log.debug("fs_event", event_type=event.event_type, filename=filename)

        if not filename:
            return
        if not self.matches(filename):
            return

        self._dispatch(WatchEvent(event_type=event.event_type, filename=filename))


class FileWatcher(LoggerMixin):
    """
    Watches a directory tree and feeds matching changes to a debouncer.

    When an event loop is given, events hop onto that loop so the
    debouncer and its action run on the loop thread only.
    """

    def __init__(
        self,
        root_path: Path,
        suffixes: Iterable[str],
        debouncer: Debouncer,
        loop: asyncio.AbstractEventLoop | None = None,
        recursive: bool = True,
    ) -> None:
        """
        Initialize the file watcher.

        Args:
            root_path: Root directory to watch
            suffixes: Accepted filename endings
            debouncer: Debouncer receiving accepted events
            loop: Event loop to deliver events on (watchdog thread if None)
            recursive: Whether to watch subdirectories
        """
        self._root_path = Path(root_path)
        self._suffixes = list(suffixes)
        self._debouncer = debouncer
        self._loop = loop
        self._recursive = recursive

        self._handler = SuffixFilterHandler(
            dispatch=self._dispatch,
            root=self._root_path,
            suffixes=self._suffixes,
        )

        self._observer: Observer | None = None
        self._running = False

    def _dispatch(self, event: WatchEvent) -> None:
        if self._loop is not None:
            self._loop.call_soon_threadsafe(self._debouncer.accept, event)
        else:
            self._debouncer.accept(event)

    def start(self) -> None:
        """Start watching for file changes."""
        if self._running:
            return

        if not self._root_path.is_dir():
            raise WatcherError(f"Watch root is not a directory: {self._root_path}")

        self._observer = Observer()
        self._observer.schedule(
            self._handler,
            str(self._root_path),
            recursive=self._recursive,
        )
        self._observer.start()
        self._running = True

        self.log.info(
            "file_watcher_started",
            path=str(self._root_path),
            recursive=self._recursive,
            suffixes=self._suffixes,
        )

    def stop(self) -> None:
        """Stop watching for file changes."""
        if not self._running:
            return

        if self._observer is not None:
            self._observer.stop()
            self._observer.join(timeout=5.0)
            self._observer = None

        self._running = False
        self.log.info("file_watcher_stopped")

    def raise_if_failed(self) -> None:
        """Raise WatcherError if the observer thread died while running."""
        if self._running and (self._observer is None or not self._observer.is_alive()):
            self._running = False
            raise WatcherError(f"Observer for {self._root_path} stopped unexpectedly")

    async def wait(self, poll_interval: float = 1.0) -> None:
        """Block until the observer fails, checking every ``poll_interval`` seconds."""
        while True:
            self.raise_if_failed()
            await asyncio.sleep(poll_interval)

    @property
    def is_running(self) -> bool:
        """Check if the watcher is running."""
        return self._running

    @property
    def handler(self) -> SuffixFilterHandler:
        """The watchdog handler used by this watcher."""
        return self._handler

    def __enter__(self) -> "FileWatcher":
        """Context manager entry."""
        self.start()
        return self

    def __exit__(self, *args: Any) -> None:
        """Context manager exit."""
        self.stop()
