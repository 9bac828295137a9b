"""
LiveWatch Build Action.

Runs an external build command and prints its output.
Requires Python 3.11+.
"""

import subprocess
import time
from dataclasses import dataclass
from pathlib import Path

from utils.logger import LoggerMixin
from watcher.debouncer import WatchEvent

BANNER = "=" * 60


@dataclass(frozen=True)
class BuildResult:
    """Outcome of one build command run."""

    command: str
    returncode: int
    output: str
    duration_seconds: float

    @property
    def succeeded(self) -> bool:
        return self.returncode == 0


class BuildError(Exception):
    """The build command exited with a non-zero status."""

    def __init__(self, result: BuildResult) -> None:
        super().__init__(
            f"Build command exited with status {result.returncode}: {result.command}"
        )
        self.result = result


class BuildAction(LoggerMixin):
    """
    Runs a fixed shell command line when a watched file changes.

    The command runs synchronously with stdout and stderr merged, so
    the caller's thread is blocked for the whole build.
    """

    def __init__(
        self,
        command: str,
        cwd: Path | None = None,
        exit_on_failure: bool = False,
    ) -> None:
        """
        Initialize the build action.

        Args:
            command: Shell command line to run
            cwd: Working directory for the command (current if None)
            exit_on_failure: Raise BuildError on a non-zero exit status
        """
        self._command = command
        self._cwd = cwd
        self._exit_on_failure = exit_on_failure

    def __call__(self, event: WatchEvent) -> BuildResult:
        print(BANNER)
        print(f"{event.filename} updated, rebuilding")
        self.log.info("build_started", filename=event.filename, command=self._command)

        start = time.perf_counter()
        completed = subprocess.run(
            self._command,
            shell=True,
            cwd=self._cwd,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            encoding="utf-8",
            errors="replace",
        )
        result = BuildResult(
            command=self._command,
            returncode=completed.returncode,
            output=completed.stdout or "",
            duration_seconds=round(time.perf_counter() - start, 3),
        )

        print(result.output)

        if not result.succeeded:
            self.log.warning(
                "build_failed",
                returncode=result.returncode,
                duration_seconds=result.duration_seconds,
            )
            if self._exit_on_failure:
                raise BuildError(result)
        else:
            self.log.info("build_finished", duration_seconds=result.duration_seconds)

        return result
