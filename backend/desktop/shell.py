"""
LiveWatch Desktop Shell.

A pywebview window showing a local HTML page, plus the window
lifecycle rules of the live reload shell.
Requires Python 3.11+.
"""

import sys
from collections.abc import Callable
from pathlib import Path
from typing import Protocol

import webview

from utils.logger import LoggerMixin

# Platforms where closing the last window keeps the app alive
KEEP_ALIVE_PLATFORMS = frozenset({"darwin"})


class WindowSurface(Protocol):
    """A visible window that can load and reload a page."""

    def load_file(self, path: Path) -> None: ...

    def reload(self) -> None: ...


class WebviewWindow(LoggerMixin):
    """
    WindowSurface backed by a pywebview window.

    The native window is created on the first ``load_file`` call, since
    pywebview can only navigate a window after the GUI loop has shown it.
    """

    def __init__(
        self,
        title: str,
        width: int = 800,
        height: int = 600,
        frameless: bool = True,
        background_color: str = "#002b36",
        on_closed: Callable[["WebviewWindow"], None] | None = None,
    ) -> None:
        self._title = title
        self._width = width
        self._height = height
        self._frameless = frameless
        self._background_color = background_color
        self._on_closed = on_closed
        self._window: webview.Window | None = None

    def load_file(self, path: Path) -> None:
        uri = Path(path).resolve().as_uri()
        if self._window is not None:
            self._window.load_url(uri)
            return

        self._window = webview.create_window(
            self._title,
            url=uri,
            width=self._width,
            height=self._height,
            frameless=self._frameless,
            background_color=self._background_color,
        )
        self._window.events.closed += self._handle_closed
        self.log.debug("window_created", url=uri)

    def reload(self) -> None:
        if self._window is None:
            return
        self._window.evaluate_js("window.location.reload()")

    def _handle_closed(self) -> None:
        if self._on_closed is not None:
            self._on_closed(self)


class DesktopShell(LoggerMixin):
    """
    Owns the shell's windows and decides when the app should quit.

    Closing the last window quits, except on platforms in
    KEEP_ALIVE_PLATFORMS, where the next activation recreates a window.
    """

    def __init__(
        self,
        window_factory: Callable[["DesktopShell"], WindowSurface],
        entry_file: Path,
        platform: str = sys.platform,
    ) -> None:
        """
        Initialize the shell.

        Args:
            window_factory: Builds a new, not yet loaded window for this shell
            entry_file: Page loaded into every new window
            platform: Value compared against KEEP_ALIVE_PLATFORMS
        """
        self._window_factory = window_factory
        self._entry_file = Path(entry_file)
        self._platform = platform
        self._windows: list[WindowSurface] = []
        self._quit_requested = False

    def create_window(self) -> WindowSurface:
        """Create a window and load the entry file into it."""
        window = self._window_factory(self)
        window.load_file(self._entry_file)
        self._windows.append(window)
        self.log.info("window_opened", entry_file=str(self._entry_file))
        return window

    def on_window_closed(self, window: WindowSurface) -> None:
        if window in self._windows:
            self._windows.remove(window)
        if not self._windows:
            self.on_all_windows_closed()

    def on_all_windows_closed(self) -> None:
        if self._platform in KEEP_ALIVE_PLATFORMS:
            self.log.debug("all_windows_closed_keep_alive", platform=self._platform)
            return
        self.quit()

    def on_activate(self) -> WindowSurface | None:
        """Recreate a window if none are open."""
        if self._windows:
            return None
        return self.create_window()

    def quit(self) -> None:
        self._quit_requested = True
        self.log.info("shell_quit")

    def run(self, start_gui: Callable[[], object]) -> None:
        """
        Run the GUI loop until the shell decides to quit.

        ``start_gui`` must block until every window is closed, as
        ``webview.start`` does.
        """
        while not self._quit_requested:
            self.on_activate()
            start_gui()

    @property
    def current_window(self) -> WindowSurface | None:
        """Most recently opened window that is still open."""
        return self._windows[-1] if self._windows else None

    @property
    def window_count(self) -> int:
        return len(self._windows)

    @property
    def quit_requested(self) -> bool:
        return self._quit_requested
