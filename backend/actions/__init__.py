"""
LiveWatch Actions Package.

What to do once a burst of file changes has settled.
Requires Python 3.11+.
"""

from actions.build import BuildAction, BuildError, BuildResult
from actions.reload import ReloadAction

__all__ = [
    "BuildAction",
    "BuildError",
    "BuildResult",
    "ReloadAction",
]
