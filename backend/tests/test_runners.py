"""
Tests for the watch runners.

Requires Python 3.11+.
"""

import asyncio
import os
import shlex
import sys
import threading
import time
from pathlib import Path

import pytest

from actions.build import BuildError
from runners.build import create_build_watcher, watch_and_build
from runners.reload import create_reload_watcher
from utils.config import ReloadSettings
from watcher.debouncer import WatchEvent
from watcher.file_watcher import WatcherError


async def touch_later(path: Path, delay: float = 0.3) -> None:
    await asyncio.sleep(delay)
    path.write_text(path.read_text() + "\n")


class TestBuildRunner:
    """Test cases for the build runner."""

    @pytest.mark.asyncio
    async def test_change_triggers_action_on_loop(self, source_tree):
        """Test a real change reaches the action on the loop thread."""
        loop = asyncio.get_running_loop()
        fired: asyncio.Future[tuple[WatchEvent, int]] = loop.create_future()

        def action(event: WatchEvent) -> None:
            if not fired.done():
                fired.set_result((event, threading.get_ident()))

        watcher = create_build_watcher(
            root=source_tree,
            suffixes=[".elm"],
            action=action,
            loop=loop,
            delay_ms=50,
        )

        with watcher:
            await touch_later(source_tree / "Page" / "Home.elm")
            event, thread_id = await asyncio.wait_for(fired, timeout=10.0)

        assert event.filename.endswith("Home.elm")
        assert thread_id == threading.get_ident()

    @pytest.mark.asyncio
    async def test_change_during_build_triggers_rebuild(self, source_tree):
        """Test a change made while a build blocks the loop is built afterwards."""
        loop = asyncio.get_running_loop()
        second_build: asyncio.Future[None] = loop.create_future()
        builds: list[str] = []
        home = source_tree / "Page" / "Home.elm"

        def slow_build(event: WatchEvent) -> None:
            builds.append(os.path.basename(event.filename))
            if len(builds) == 1:
                # Edit another file while this build still holds the loop
                edit = threading.Timer(
                    0.2,
                    home.write_text,
                    args=("module Page.Home exposing (view)\n-- edited\n",),
                )
                edit.start()
                time.sleep(0.8)
            elif not second_build.done():
                second_build.set_result(None)

        watcher = create_build_watcher(
            root=source_tree,
            suffixes=[".elm"],
            action=slow_build,
            loop=loop,
            delay_ms=50,
        )

        with watcher:
            await touch_later(source_tree / "Main.elm")
            await asyncio.wait_for(second_build, timeout=10.0)

        assert builds == ["Main.elm", "Home.elm"]

    @pytest.mark.asyncio
    async def test_failed_build_stops_watch_when_asked(self, source_tree):
        """Test exit_on_failure ends the watch with BuildError."""
        command = f"{shlex.quote(sys.executable)} -c 'import sys; sys.exit(3)'"
        toucher = asyncio.create_task(touch_later(source_tree / "Main.elm"))

        with pytest.raises(BuildError) as exc_info:
            await asyncio.wait_for(
                watch_and_build(
                    root=source_tree,
                    suffixes=[".elm"],
                    command=command,
                    delay_ms=50,
                    exit_on_failure=True,
                ),
                timeout=10.0,
            )

        await toucher
        assert exc_info.value.result.returncode == 3

    @pytest.mark.asyncio
    async def test_missing_root_raises(self, tmp_path):
        """Test a missing watch root fails fast."""
        with pytest.raises(WatcherError):
            await watch_and_build(
                root=tmp_path / "missing",
                suffixes=[".elm"],
                command="true",
            )


class FakeWindow:
    def __init__(self) -> None:
        self.reloaded = threading.Event()

    def reload(self) -> None:
        self.reloaded.set()


class FakeShell:
    def __init__(self) -> None:
        self.current_window = FakeWindow()


class TestReloadRunner:
    """Test cases for the reload runner."""

    def test_change_reloads_window(self, tmp_path):
        """Test editing a page reloads the shell's window."""
        page = tmp_path / "app.html"
        page.write_text("<html></html>")
        shell = FakeShell()
        settings = ReloadSettings(root=tmp_path, entry_file=page, suffixes=[".js", ".html"])

        with create_reload_watcher(shell, settings, delay_ms=50):
            threading.Event().wait(0.3)
            page.write_text("<html><body>changed</body></html>")
            assert shell.current_window.reloaded.wait(timeout=10.0)
