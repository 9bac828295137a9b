#!/usr/bin/env python3
"""
LiveWatch Build Watcher Script.

Watches a source tree and reruns the build command whenever a matching
file changes, collapsing rapid bursts of events into one build.
Requires Python 3.11+.

Usage:
    python scripts/watch_build.py
    python scripts/watch_build.py --root src --command "elm make src/Main.elm --output=elm.js"
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))

from actions.build import BuildError
from runners.build import watch_and_build
from utils.config import get_settings
from utils.logger import configure_logging, get_logger
from watcher.file_watcher import WatcherError


configure_logging()
logger = get_logger("watch_build")


def main() -> None:
    """Main entry point."""
    settings = get_settings()

    parser = argparse.ArgumentParser(
        description="Rebuild whenever source files change"
    )
    parser.add_argument(
        "--root",
        type=Path,
        default=settings.build.root,
        help=f"Directory to watch (default: {settings.build.root})",
    )
    parser.add_argument(
        "--command",
        default=settings.build.command,
        help="Shell command line to run on change",
    )
    parser.add_argument(
        "--suffix",
        action="append",
        dest="suffixes",
        default=None,
        help="File suffix that triggers a build (repeatable)",
    )
    parser.add_argument(
        "--delay-ms",
        type=int,
        default=settings.watcher.debounce_delay_ms,
        help="Quiet period before building, in milliseconds",
    )
    parser.add_argument(
        "--exit-on-failure",
        action="store_true",
        default=settings.build.exit_on_failure,
        help="Stop watching when the build command fails",
    )

    args = parser.parse_args()

    try:
        asyncio.run(watch_and_build(
            root=args.root,
            suffixes=args.suffixes or settings.build.suffixes,
            command=args.command,
            cwd=settings.build.cwd,
            delay_ms=args.delay_ms,
            recursive=settings.watcher.recursive,
            exit_on_failure=args.exit_on_failure,
        ))
    except WatcherError as e:
        logger.error("watcher_failed", error=str(e))
        print(f"Error: {e}")
        sys.exit(1)
    except BuildError as e:
        logger.error("build_failed", returncode=e.result.returncode)
        print(f"Error: {e}")
        sys.exit(e.result.returncode or 1)
    except KeyboardInterrupt:
        print("\nStopped watching")


if __name__ == "__main__":
    main()
