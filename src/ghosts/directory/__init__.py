"""
Ghosts Directory Module

Provides ghosts file parsing and host/tag/macro management.
"""

from ghosts.directory.parser import DirectoryParser, HostDeclaration, MacroDeclaration
from ghosts.directory.host import Host
from ghosts.directory.model import AtomKind, AtomResolution, Directory, Macro

__all__ = [
    'DirectoryParser',
    'HostDeclaration',
    'MacroDeclaration',
    'Host',
    'AtomKind',
    'AtomResolution',
    'Directory',
    'Macro',
]
