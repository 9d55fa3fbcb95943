"""
Directory Parser

Splits ghosts file text into host and macro declarations.

File format, one declaration per line::

    # comment
    sunprod = solaris ^ e450
    me@gandalf:2222   prod  intel  linux

Only whole-line comments are recognised; a ``#`` after real content is an
ordinary token.
"""

import re
from dataclasses import dataclass, field
from typing import Callable, Iterator, List, Optional, Union

from ghosts.engine.errors import MalformedLine


@dataclass
class HostDeclaration:
    """A ``[user@]name[:port] tag tag ...`` line."""

    line: int
    name: str
    user: Optional[str] = None
    port: Optional[int] = None
    tags: List[str] = field(default_factory=list)


@dataclass
class MacroDeclaration:
    """A ``name = expression`` line."""

    line: int
    name: str
    expression: str


Declaration = Union[HostDeclaration, MacroDeclaration]


class DirectoryParser:
    """
    Parse ghosts directory text.

    Supports:
    - Whole-line ``#`` comments and blank lines
    - Macro lines with a bare ``=`` token
    - Host lines with optional ``user@`` prefix and ``:port`` suffix
    """

    # Pattern for host spec: [user@]name[:port]
    HOST_SPEC_PATTERN = re.compile(
        r'^(?:(?P<user>[^@:\s]+)@)?(?P<name>[^@:\s]+)(?::(?P<port>\d+))?$'
    )
    MAX_PORT = 65535

    def __init__(self, file_path: Optional[str] = None):
        self.file_path = file_path

    def parse(
        self,
        content: str,
        on_error: Optional[Callable[[MalformedLine], None]] = None,
    ) -> Iterator[Declaration]:
        """
        Yield declarations from ``content`` in file order.

        Args:
            content: Full text of a ghosts file
            on_error: Called with each MalformedLine; parsing then moves on
                to the next line. Without it the first bad line raises.
        """
        for line_num, raw in enumerate(content.splitlines(), 1):
            try:
                declaration = self.parse_line(raw, line_num)
            except MalformedLine as e:
                if on_error is None:
                    raise
                on_error(e)
                continue
            if declaration is not None:
                yield declaration

    def parse_line(self, raw: str, line_num: int = 0) -> Optional[Declaration]:
        """Parse one line; comments and blank lines give None."""
        line = raw.strip()

        # Skip empty lines and comments
        if not line or line.startswith('#'):
            return None

        words = line.split()
        if '=' in words:
            return self._parse_macro_line(line, words, line_num)
        return self._parse_host_line(line, words, line_num)

    def parse_host_spec(self, spec: str, line: str = "", line_num: Optional[int] = None) -> HostDeclaration:
        """Split ``[user@]name[:port]`` into its parts."""
        match = self.HOST_SPEC_PATTERN.match(spec)
        if not match:
            raise self._malformed(f"invalid host spec {spec!r}", line or spec, line_num)

        port = None
        if match.group('port') is not None:
            port = int(match.group('port'))
            if not 0 < port <= self.MAX_PORT:
                raise self._malformed(f"port out of range in {spec!r}", line or spec, line_num)

        return HostDeclaration(
            line=line_num or 0,
            name=match.group('name'),
            user=match.group('user'),
            port=port,
        )

    def _parse_host_line(self, line: str, words: List[str], line_num: int) -> HostDeclaration:
        declaration = self.parse_host_spec(words[0], line, line_num)
        for tag in words[1:]:
            if tag not in declaration.tags:
                declaration.tags.append(tag)
        return declaration

    def _parse_macro_line(self, line: str, words: List[str], line_num: int) -> MacroDeclaration:
        split_at = words.index('=')
        name_words = words[:split_at]
        expression = ' '.join(words[split_at + 1:])

        if not name_words:
            raise self._malformed("macro has an empty name", line, line_num)
        if len(name_words) > 1:
            raise self._malformed("macro name must be a single word", line, line_num)
        if not expression:
            raise self._malformed(f"macro '{name_words[0]}' has an empty expression", line, line_num)

        return MacroDeclaration(line=line_num, name=name_words[0], expression=expression)

    def _malformed(self, message: str, line: str, line_num: Optional[int]) -> MalformedLine:
        return MalformedLine(message, line, line=line_num, file_path=self.file_path)
