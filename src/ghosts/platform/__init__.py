"""
Platform abstraction layer for cross-platform compatibility.

Small portable helpers for path expansion and terminal detection, so
ghosts behaves the same on Windows and Unix.
"""

import platform as _platform

# Detect current platform
IS_WINDOWS = _platform.system() == "Windows"
