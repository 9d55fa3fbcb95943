# Copyright (c) 2024 Ghosts Contributors
# MIT License

"""
Ghosts: global hosts directory and host expression resolver.

Reads a "ghosts" directory file that tags hosts and defines macros over
those tags, then resolves expressions like ``prod^intel`` or
``solaris+e450`` into an ordered list of hosts for a remote-execution tool.

Features:
    - Whole-line comments, ``[user@]host[:port]`` host specs, free-form tags
    - Lazily expanded macros with cycle detection
    - Union (``+``) and difference (``^``) over tags, macros and hostnames
    - Stable declaration-order output

This package exposes the main CLI entry point and release metadata.
"""

from __future__ import annotations

from ghosts.release import __version__, __author__, __codename__

__all__ = [
    "__version__",
    "__author__",
    "__codename__",
]
