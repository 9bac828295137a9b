"""
LiveWatch Reload Runner.

Opens the desktop shell and reloads it when a matching file settles.
Requires Python 3.11+.
"""

from collections.abc import Callable

import webview

from actions.reload import ReloadAction
from desktop.shell import DesktopShell, WebviewWindow
from utils.config import ReloadSettings
from utils.logger import get_logger
from watcher.debouncer import Debouncer
from watcher.file_watcher import FileWatcher
from watcher.scheduler import ThreadingScheduler

logger = get_logger(__name__)


def create_shell(settings: ReloadSettings) -> DesktopShell:
    """Build a desktop shell whose windows follow ``settings``."""

    def window_factory(shell: DesktopShell) -> WebviewWindow:
        return WebviewWindow(
            title=settings.title,
            width=settings.width,
            height=settings.height,
            frameless=settings.frameless,
            background_color=settings.background_color,
            on_closed=shell.on_window_closed,
        )

    return DesktopShell(window_factory=window_factory, entry_file=settings.entry_file)


def create_reload_watcher(
    shell: DesktopShell,
    settings: ReloadSettings,
    delay_ms: int = 100,
    recursive: bool = True,
) -> FileWatcher:
    """
    Wire a file watcher to reload the shell's current window.

    The GUI loop owns the main thread, so the debounce checks run on
    timer threads and reload the window from there.
    """
    debouncer = Debouncer(
        action=ReloadAction(shell),
        scheduler=ThreadingScheduler(),
        delay_ms=delay_ms,
    )
    return FileWatcher(
        root_path=settings.root,
        suffixes=settings.suffixes,
        debouncer=debouncer,
        recursive=recursive,
    )


def run_live_reload(
    settings: ReloadSettings,
    delay_ms: int = 100,
    recursive: bool = True,
    start_gui: Callable[[], object] = webview.start,
) -> None:
    """Show the shell window and keep it fresh until the shell quits."""
    shell = create_shell(settings)
    watcher = create_reload_watcher(shell, settings, delay_ms=delay_ms, recursive=recursive)

    logger.info(
        "live_reload_started",
        root=str(settings.root),
        entry_file=str(settings.entry_file),
        delay_ms=delay_ms,
    )

    with watcher:
        shell.run(start_gui)
        watcher.raise_if_failed()
