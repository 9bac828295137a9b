"""
LiveWatch File Watcher Package.

File system monitoring with trailing-edge debouncing.
Requires Python 3.11+.
"""

from watcher.debouncer import Debouncer, PendingTicket, TicketState, WatchEvent
from watcher.file_watcher import FileWatcher, SuffixFilterHandler, WatcherError
from watcher.scheduler import AsyncioScheduler, Scheduler, ThreadingScheduler

__all__ = [
    "Debouncer",
    "PendingTicket",
    "TicketState",
    "WatchEvent",
    "FileWatcher",
    "SuffixFilterHandler",
    "WatcherError",
    "AsyncioScheduler",
    "Scheduler",
    "ThreadingScheduler",
]
