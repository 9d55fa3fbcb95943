"""
Cross-platform path handling.

Expands user and environment references in configured paths.
"""

import os
from typing import Union


PathLike = Union[str, os.PathLike]


def expand_user(path: PathLike) -> str:
    """Expand ~ to user home directory."""
    return os.path.expanduser(os.fspath(path))


def expand_vars(path: PathLike) -> str:
    """Expand environment variables in path."""
    return os.path.expandvars(os.fspath(path))


def expand(path: PathLike) -> str:
    """Expand both ~ and environment variables."""
    return expand_vars(expand_user(path))
