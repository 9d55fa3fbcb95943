"""
Ghosts Engine Module

Expression evaluation and query operations over a loaded directory.

Only the error classes are re-exported here; import the evaluator and
query facade from their modules (``ghosts.engine.evaluator``,
``ghosts.engine.query``).
"""

from ghosts.engine.errors import (
    ExitCode,
    GhostsError,
    ParseError,
    SourceUnreadable,
    MalformedLine,
    BadExpression,
    CyclicMacro,
    BadPattern,
)

__all__ = [
    'ExitCode',
    'GhostsError',
    'ParseError',
    'SourceUnreadable',
    'MalformedLine',
    'BadExpression',
    'CyclicMacro',
    'BadPattern',
]
