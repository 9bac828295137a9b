"""
LiveWatch Build Runner.

Watches a source tree and rebuilds when a matching file settles.
Requires Python 3.11+.
"""

import asyncio
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any

from actions.build import BuildAction
from utils.logger import get_logger
from watcher.debouncer import Debouncer, WatchEvent
from watcher.file_watcher import FileWatcher
from watcher.scheduler import AsyncioScheduler

logger = get_logger(__name__)


def create_build_watcher(
    root: Path,
    suffixes: Iterable[str],
    action: Callable[[WatchEvent], Any],
    loop: asyncio.AbstractEventLoop,
    delay_ms: int = 100,
    recursive: bool = True,
) -> FileWatcher:
    """
    Wire a file watcher, debouncer and build action onto one event loop.

    Filesystem events are handed to ``loop``; the debounce checks and the
    blocking build run there, so events arriving mid-build queue up and
    are handled once the build returns.

    Args:
        root: Directory to watch
        suffixes: Filename endings that trigger a build
        action: Build to run
        loop: Event loop owning the debouncer
        delay_ms: Debounce delay in milliseconds
        recursive: Whether to watch subdirectories

    Returns:
        Configured, not yet started FileWatcher
    """
    debouncer = Debouncer(
        action=action,
        scheduler=AsyncioScheduler(loop),
        delay_ms=delay_ms,
    )
    return FileWatcher(
        root_path=root,
        suffixes=suffixes,
        debouncer=debouncer,
        loop=loop,
        recursive=recursive,
    )


async def watch_and_build(
    root: Path,
    suffixes: Iterable[str],
    command: str,
    cwd: Path | None = None,
    delay_ms: int = 100,
    recursive: bool = True,
    exit_on_failure: bool = False,
) -> None:
    """
    Watch ``root`` and run ``command`` after each settled burst of changes.

    Runs until the watcher fails or the build raises (see
    ``BuildAction``'s ``exit_on_failure``); either error is re-raised here.
    """
    loop = asyncio.get_running_loop()
    failure: asyncio.Future[None] = loop.create_future()
    suffixes = list(suffixes)
    action = BuildAction(command=command, cwd=cwd, exit_on_failure=exit_on_failure)

    def build(event: WatchEvent) -> None:
        # Callbacks run by the loop cannot raise into this coroutine
        try:
            action(event)
        except Exception as e:
            if not failure.done():
                failure.set_exception(e)

    watcher = create_build_watcher(
        root=root,
        suffixes=suffixes,
        action=build,
        loop=loop,
        delay_ms=delay_ms,
        recursive=recursive,
    )

    print(f"Watching {root}/** for {', '.join(suffixes)} file changes")
    logger.info("build_watch_started", root=str(root), command=command, delay_ms=delay_ms)

    with watcher:
        watching = asyncio.create_task(watcher.wait())
        done, _ = await asyncio.wait({watching, failure}, return_when=asyncio.FIRST_COMPLETED)
        watching.cancel()
        for finished in done:
            finished.result()
