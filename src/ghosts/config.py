"""
Ghosts Configuration

Settings for locating and loading the hosts directory.
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional, Union

from ghosts.platform import paths


DEFAULT_DIRECTORY_PATH = "/etc/ghosts"
DIRECTORY_PATH_ENV = "GHOSTS"


@dataclass
class GhostsConfig:
    """
    Configuration for a ghosts run.

    Attributes:
        directory_path: Hosts directory from the environment, if any
        strict: Fail the load on malformed lines instead of skipping them
        color: Colour diagnostics (None = detect from the terminal)
    """

    directory_path: Optional[str] = None
    strict: bool = False
    color: Optional[bool] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'GhostsConfig':
        """Build a configuration from environment variables."""
        if environ is None:
            environ = os.environ
        return cls(directory_path=environ.get(DIRECTORY_PATH_ENV) or None)

    def resolve_path(self, explicit: Optional[Union[str, os.PathLike]] = None) -> str:
        """
        Pick the directory file to load.

        Precedence: explicit path, then the environment override, then
        /etc/ghosts. ``~`` and ``$VARS`` are expanded.
        """
        if explicit:
            return paths.expand(explicit)
        if self.directory_path:
            return paths.expand(self.directory_path)
        return DEFAULT_DIRECTORY_PATH
