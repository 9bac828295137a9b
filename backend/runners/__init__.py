"""
LiveWatch Runners Package.

Ready-made watch loops for building and live reloading.
Requires Python 3.11+.
"""

from runners.build import create_build_watcher, watch_and_build

__all__ = [
    "create_build_watcher",
    "watch_and_build",
]
