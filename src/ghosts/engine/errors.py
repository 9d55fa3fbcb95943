# Copyright (c) 2024 Ghosts Contributors
# MIT License

"""
Ghosts Error Classes.

All custom exceptions for clear error handling and exit codes.
Load-time errors abort the run; expression errors only fail the
expression that raised them.
"""

from __future__ import annotations

import enum
from typing import Sequence


class ExitCode(enum.IntEnum):
    """Exit codes returned by the ghosts command."""

    SUCCESS = 0
    GENERIC_ERROR = 1
    PARSE_ERROR = 3
    KEYBOARD_INTERRUPT = 130


class GhostsError(Exception):
    """Base exception for all ghosts errors."""

    exit_code: int = ExitCode.GENERIC_ERROR

    def __init__(self, message: str, details: str | None = None) -> None:
        self.message = message
        self.details = details
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}\n  Details: {self.details}"
        return self.message


class ParseError(GhostsError):
    """Error reading or parsing a ghosts directory file."""

    exit_code: int = ExitCode.PARSE_ERROR

    def __init__(
        self,
        message: str,
        file_path: str | None = None,
        line: int | None = None,
        details: str | None = None,
    ) -> None:
        self.file_path = file_path
        self.line = line
        location = ""
        if file_path:
            location = f" in {file_path}"
        if line:
            location += f" at line {line}"
        super().__init__(f"Parse error{location}: {message}", details)


class SourceUnreadable(ParseError):
    """The directory file is missing or cannot be read."""

    def __init__(self, file_path: str, details: str | None = None) -> None:
        super().__init__("cannot read hosts directory", file_path=file_path, details=details)


class MalformedLine(ParseError):
    """A declaration line that is structurally invalid."""

    def __init__(
        self,
        message: str,
        text: str,
        line: int | None = None,
        file_path: str | None = None,
    ) -> None:
        self.text = text
        super().__init__(message, file_path=file_path, line=line, details=f"line: {text!r}")


class BadExpression(GhostsError):
    """A host expression that does not follow ``atom (op atom)*``."""

    exit_code: int = ExitCode.PARSE_ERROR

    def __init__(self, expression: str, message: str, macro: str | None = None) -> None:
        self.expression = expression
        self.macro = macro
        where = f" in macro '{macro}'" if macro else ""
        super().__init__(f"Bad expression{where}: {message}", f"expression: {expression!r}")


class CyclicMacro(BadExpression):
    """A macro whose expansion reaches itself again."""

    def __init__(self, expression: str, cycle: Sequence[str]) -> None:
        self.cycle = tuple(cycle)
        super().__init__(expression, "macro cycle " + " -> ".join(self.cycle), macro=self.cycle[0])


class BadPattern(GhostsError):
    """An invalid regular expression given as a usage filter."""

    exit_code: int = ExitCode.PARSE_ERROR

    def __init__(self, pattern: str, reason: str) -> None:
        self.pattern = pattern
        super().__init__(f"Invalid filter pattern {pattern!r}: {reason}")
