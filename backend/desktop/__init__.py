"""
LiveWatch Desktop Package.

Window surface for the live reload shell.
Requires Python 3.11+.
"""

from desktop.shell import DesktopShell, KEEP_ALIVE_PLATFORMS, WebviewWindow, WindowSurface

__all__ = [
    "DesktopShell",
    "KEEP_ALIVE_PLATFORMS",
    "WebviewWindow",
    "WindowSurface",
]
