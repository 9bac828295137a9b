#!/usr/bin/env python3
"""
LiveWatch Live Reload Shell.

Opens a desktop window on a local HTML page and reloads it whenever a
script or page under the watched directory changes.
Requires Python 3.11+.

Usage:
    python scripts/live_reload.py
    python scripts/live_reload.py --entry app.html --root .
"""

import argparse
import sys
from pathlib import Path

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))

from runners.reload import run_live_reload
from utils.config import get_settings
from utils.logger import configure_logging, get_logger
from watcher.file_watcher import WatcherError


configure_logging()
logger = get_logger("live_reload")


def main() -> None:
    """Main entry point."""
    settings = get_settings()

    parser = argparse.ArgumentParser(
        description="Show a page in a desktop window and reload it on change"
    )
    parser.add_argument(
        "--entry",
        type=Path,
        default=settings.reload.entry_file,
        help=f"HTML file to load (default: {settings.reload.entry_file})",
    )
    parser.add_argument(
        "--root",
        type=Path,
        default=settings.reload.root,
        help="Directory to watch for changes",
    )
    parser.add_argument(
        "--delay-ms",
        type=int,
        default=settings.watcher.debounce_delay_ms,
        help="Quiet period before reloading, in milliseconds",
    )

    args = parser.parse_args()

    if not args.entry.is_file():
        logger.error("entry_file_missing", path=str(args.entry))
        print(f"Error: Entry file does not exist: {args.entry}")
        sys.exit(1)

    reload_settings = settings.reload.model_copy(
        update={"entry_file": args.entry, "root": args.root}
    )

    try:
        run_live_reload(
            reload_settings,
            delay_ms=args.delay_ms,
            recursive=settings.watcher.recursive,
        )
    except WatcherError as e:
        logger.error("watcher_failed", error=str(e))
        print(f"Error: {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        print("\nStopped watching")


if __name__ == "__main__":
    main()
