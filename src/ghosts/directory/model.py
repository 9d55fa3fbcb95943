"""
Ghosts Directory Model

Holds the hosts, tag index and macro table loaded from one ghosts file.
"""

import enum
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Union

from ghosts.config import GhostsConfig
from ghosts.directory.host import Host
from ghosts.directory.parser import DirectoryParser, HostDeclaration, MacroDeclaration
from ghosts.engine.errors import MalformedLine, SourceUnreadable


class AtomKind(enum.Enum):
    """What a single expression identifier resolved to."""
    MACRO = "macro"
    TAG = "tag"
    LITERAL = "literal"
    UNKNOWN = "unknown"


@dataclass
class AtomResolution:
    """Result of looking up one identifier."""

    kind: AtomKind
    hosts: List[Host] = field(default_factory=list)
    # Unevaluated macro body, set only for MACRO
    expression: Optional[str] = None


@dataclass
class Macro:
    """A named expression, stored unevaluated."""

    name: str
    expression: str
    line: int = 0


class Directory:
    """
    In-memory ghosts directory.

    Supports:
    - Hosts in declaration order, unique by name
    - Tag index (tag -> hosts in declaration order)
    - Macro table with lazily evaluated expressions
    - Shared tag/macro namespace where macros shadow tags
    """

    def __init__(self, source: Optional[str] = None):
        self.source = source
        self.diagnostics: List[MalformedLine] = []
        self._hosts: Dict[str, Host] = {}
        self._tags: Dict[str, Dict[str, Host]] = {}
        self._macros: Dict[str, Macro] = {}
        # First-seen order of tag and macro names
        self._names: Dict[str, None] = {}
        self._next_sequence = 0

    @classmethod
    def load(
        cls,
        path: Optional[Union[str, Path]] = None,
        strict: bool = False,
        config: Optional[GhostsConfig] = None,
    ) -> 'Directory':
        """
        Load a ghosts file.

        Args:
            path: Explicit file path; when omitted the configured path
                (``GHOSTS`` environment variable or /etc/ghosts) is used
            strict: Fail on the first malformed line instead of skipping it;
                ``config.strict`` turns this on as well
            config: Configuration used to resolve the default path

        Returns:
            The loaded Directory
        """
        config = config or GhostsConfig.from_env()
        source_path = Path(config.resolve_path(path))

        try:
            content = source_path.read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as e:
            raise SourceUnreadable(str(source_path), details=str(e)) from e

        return cls.from_string(content, source=str(source_path), strict=strict or config.strict)

    @classmethod
    def from_string(cls, content: str, source: Optional[str] = None, strict: bool = False) -> 'Directory':
        """Build a Directory from ghosts file text."""
        directory = cls(source)
        parser = DirectoryParser(file_path=source)
        on_error = None if strict else directory.diagnostics.append

        for declaration in parser.parse(content, on_error=on_error):
            if isinstance(declaration, MacroDeclaration):
                directory.add_macro(declaration)
            else:
                directory.add_host(declaration)

        return directory

    def add_host(self, declaration: HostDeclaration) -> Host:
        """Add a host, or update it if the name is already declared."""
        host = self._hosts.get(declaration.name)
        if host is None:
            host = Host(declaration.name, sequence=self._next_sequence)
            self._next_sequence += 1
            self._hosts[host.name] = host
        else:
            # Last declaration wins; the sequence stays put
            for tag in host.tags:
                self._untag(host, tag)
            host = Host(declaration.name, sequence=host.sequence)
            self._hosts[host.name] = host

        host.user = declaration.user
        host.port = declaration.port
        for tag in declaration.tags:
            host.add_tag(tag)
            self._names.setdefault(tag, None)
            self._tags.setdefault(tag, {})[host.name] = host

        return host

    def add_macro(self, declaration: MacroDeclaration) -> Macro:
        """Define a macro, replacing any earlier definition."""
        macro = Macro(declaration.name, declaration.expression, declaration.line)
        self._macros[macro.name] = macro
        self._names.setdefault(macro.name, None)
        return macro

    def _untag(self, host: Host, tag: str) -> None:
        members = self._tags.get(tag)
        if members is None:
            return
        members.pop(host.name, None)
        if not members:
            del self._tags[tag]

    def resolve_atom(self, name: str) -> AtomResolution:
        """
        Look up a single identifier.

        Macros are checked first. Otherwise a tag and a host of the same
        name both contribute; a bare hostname acts as a tag matching only
        itself. Unknown names resolve to no hosts.

        A name that is both a tag and a hostname therefore selects one more
        host than the number of lines listing it as a tag.
        """
        macro = self._macros.get(name)
        if macro is not None:
            return AtomResolution(AtomKind.MACRO, expression=macro.expression)

        host = self._hosts.get(name)
        members = self._tags.get(name)
        if members is not None:
            hosts = dict(members)
            if host is not None:
                hosts[host.name] = host
            return AtomResolution(AtomKind.TAG, hosts=self.ordered(hosts.values()))

        if host is not None:
            return AtomResolution(AtomKind.LITERAL, hosts=[host])

        return AtomResolution(AtomKind.UNKNOWN)

    @staticmethod
    def ordered(hosts) -> List[Host]:
        """Sort hosts into declaration order."""
        return sorted(hosts, key=lambda h: h.sequence)

    @property
    def hosts(self) -> List[Host]:
        """Return all hosts in declaration order."""
        return self.ordered(self._hosts.values())

    def get_host(self, name: str) -> Optional[Host]:
        """Get a host by name."""
        return self._hosts.get(name)

    def get_macro(self, name: str) -> Optional[Macro]:
        """Get a macro by name."""
        return self._macros.get(name)

    def tag_hosts(self, tag: str) -> List[Host]:
        """Return the hosts carrying a tag, in declaration order."""
        return self.ordered(self._tags.get(tag, {}).values())

    def is_macro(self, name: str) -> bool:
        return name in self._macros

    @property
    def tag_names(self) -> List[str]:
        """Return column tag names in first-seen order."""
        return [name for name in self._names if name in self._tags]

    @property
    def macro_names(self) -> List[str]:
        """Return macro names in declaration order."""
        return list(self._macros)

    @property
    def names(self) -> List[str]:
        """Return tag and macro names interleaved in first-seen order."""
        return [name for name in self._names if name in self._macros or name in self._tags]

    def __len__(self) -> int:
        return len(self._hosts)

    def __contains__(self, name: object) -> bool:
        return name in self._hosts

    def __iter__(self) -> Iterator[Host]:
        return iter(self.hosts)

    def __repr__(self) -> str:
        return f"Directory({self.source!r}, hosts={len(self._hosts)}, macros={len(self._macros)})"
