# Copyright (c) 2024 Ghosts Contributors
# MIT License

"""Ghosts release metadata."""

from __future__ import annotations

__version__ = "1.1.0"
__author__ = "Ghosts Contributors"
__codename__ = "Barrow"

# Version info tuple for programmatic comparison
VERSION_INFO = (1, 1, 0)
