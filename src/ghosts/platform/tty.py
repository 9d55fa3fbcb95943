"""
Cross-platform TTY and terminal handling.

Decides whether diagnostics written to a stream can use ANSI colour.
"""

import os
import sys
from typing import Optional, TextIO

from . import IS_WINDOWS


def is_tty(stream: Optional[TextIO] = None) -> bool:
    """Check if the given stream (or stdout) is a TTY."""
    if stream is None:
        stream = sys.stdout

    try:
        return stream.isatty()
    except AttributeError:
        return False


def supports_color(stream: Optional[TextIO] = None) -> bool:
    """
    Check if the stream supports ANSI color codes.

    NO_COLOR always disables colour; FORCE_COLOR enables it even when
    the stream is not a terminal.
    """
    if stream is None:
        stream = sys.stdout

    # Check for explicit disable
    if os.environ.get("NO_COLOR"):
        return False

    # Check for explicit enable
    if os.environ.get("FORCE_COLOR"):
        return True

    if not is_tty(stream):
        return False

    if IS_WINDOWS:
        # Windows Terminal, ConEmu and the VSCode terminal understand ANSI
        return bool(
            os.environ.get("WT_SESSION")
            or os.environ.get("ConEmuANSI") == "ON"
            or os.environ.get("TERM_PROGRAM") == "vscode"
        )

    return os.environ.get("TERM", "") != "dumb"


class Colors:
    """ANSI color codes for terminal output."""

    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"
    RED = "\033[31m"
    YELLOW = "\033[33m"


class ColorPrinter:
    """Helper class for printing colored output."""

    def __init__(self, stream: Optional[TextIO] = None, enabled: Optional[bool] = None):
        self.stream = stream or sys.stderr
        self.enabled = supports_color(self.stream) if enabled is None else enabled

    def _wrap(self, text: str, *codes: str) -> str:
        """Wrap text with color codes if enabled."""
        if not self.enabled:
            return text
        return "".join(codes) + text + Colors.RESET

    def error(self, text: str) -> str:
        return self._wrap(text, Colors.RED, Colors.BOLD)

    def warning(self, text: str) -> str:
        return self._wrap(text, Colors.YELLOW)

    def dim(self, text: str) -> str:
        return self._wrap(text, Colors.DIM)

    def print(self, text: str) -> None:
        print(text, file=self.stream)
