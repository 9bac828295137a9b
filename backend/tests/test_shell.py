"""
Tests for the Desktop Shell.

Requires Python 3.11+.
"""

from pathlib import Path

import pytest

from actions.reload import ReloadAction
from desktop.shell import DesktopShell
from watcher.debouncer import Debouncer, WatchEvent

from conftest import ManualScheduler


class FakeWindow:
    """Window surface that records what was asked of it."""

    def __init__(self, shell: DesktopShell) -> None:
        self.shell = shell
        self.loaded: list[Path] = []
        self.reloads = 0

    def load_file(self, path: Path) -> None:
        self.loaded.append(path)

    def reload(self) -> None:
        self.reloads += 1

    def close(self) -> None:
        self.shell.on_window_closed(self)


def make_shell(platform: str = "linux") -> DesktopShell:
    return DesktopShell(window_factory=FakeWindow, entry_file=Path("app.html"), platform=platform)


class TestDesktopShell:
    """Test cases for DesktopShell."""

    def test_create_window_loads_entry(self):
        """Test new windows load the entry page."""
        shell = make_shell()

        window = shell.create_window()

        assert window.loaded == [Path("app.html")]
        assert shell.current_window is window
        assert shell.window_count == 1

    def test_last_window_close_quits(self):
        """Test closing the last window quits on most platforms."""
        shell = make_shell("linux")
        first = shell.create_window()
        second = shell.create_window()

        first.close()
        assert not shell.quit_requested
        assert shell.current_window is second

        second.close()
        assert shell.quit_requested
        assert shell.current_window is None

    def test_darwin_keeps_running(self):
        """Test closing the last window on macOS keeps the app alive."""
        shell = make_shell("darwin")
        shell.create_window().close()

        assert not shell.quit_requested

    def test_activate_recreates_only_when_empty(self):
        """Test activation opens a window only if none are open."""
        shell = make_shell("darwin")
        window = shell.create_window()

        assert shell.on_activate() is None
        assert shell.window_count == 1

        window.close()
        replacement = shell.on_activate()

        assert replacement is not None
        assert replacement is not window
        assert shell.current_window is replacement

    def test_run_until_quit(self):
        """Test run opens a window and returns once the GUI loop ends."""
        shell = make_shell("linux")
        starts = []

        def start_gui() -> None:
            starts.append(shell.window_count)
            shell.current_window.close()

        shell.run(start_gui)

        assert starts == [1]
        assert shell.quit_requested

    def test_run_reopens_on_darwin(self):
        """Test run reactivates on macOS until quit is requested."""
        shell = make_shell("darwin")
        starts = []

        def start_gui() -> None:
            starts.append(shell.window_count)
            shell.current_window.close()
            if len(starts) == 2:
                shell.quit()

        shell.run(start_gui)

        assert starts == [1, 1]

    def test_reload_follows_current_window(self):
        """Test debounced reloads hit the window open at fire time."""
        shell = make_shell("darwin")
        scheduler = ManualScheduler()
        debouncer = Debouncer(action=ReloadAction(shell), scheduler=scheduler, delay_ms=100)
        old = shell.create_window()

        debouncer.accept(WatchEvent(event_type="modified", filename="app.html"))
        old.close()
        new = shell.on_activate()
        scheduler.advance_to(100)

        assert old.reloads == 0
        assert new.reloads == 1


@pytest.mark.parametrize("platform", ["linux", "win32"])
def test_non_darwin_platforms_quit(platform):
    """Test every non-macOS platform quits when the last window closes."""
    shell = make_shell(platform)
    shell.create_window().close()

    assert shell.quit_requested
