"""
Ghosts Query Facade

Read-only operations the command line needs over a loaded Directory.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple

from ghosts.directory.host import Host
from ghosts.directory.model import Directory
from ghosts.engine.errors import BadExpression, BadPattern
from ghosts.engine.evaluator import ExpressionEvaluator


@dataclass
class TagUsage:
    """How many hosts a tag or macro selects."""

    name: str
    kind: str
    count: int

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON/YAML output."""
        return {"name": self.name, "kind": self.kind, "count": self.count}


@dataclass
class Resolution:
    """Hosts selected by a list of expressions, plus per-expression failures."""

    hosts: List[Host] = field(default_factory=list)
    errors: List[Tuple[str, BadExpression]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        """True when every expression evaluated."""
        return not self.errors

    @property
    def host_names(self) -> List[str]:
        return [host.name for host in self.hosts]


class Query:
    """Read operations over one Directory."""

    def __init__(self, directory: Directory):
        self.directory = directory
        self.evaluator = ExpressionEvaluator(directory)

    def list_hosts(self) -> List[str]:
        """Return host names in declaration order."""
        return [host.name for host in self.directory.hosts]

    def list_tags(self) -> List[str]:
        """Return tag and macro names in the order they first appeared."""
        return self.directory.names

    def list_macros(self) -> List[str]:
        """Return macro names in declaration order."""
        return self.directory.macro_names

    def tag_usage(self, patterns: Optional[Iterable[str]] = None) -> List[TagUsage]:
        """
        Count the hosts selected by each tag and macro.

        Args:
            patterns: Regular expressions; a name is kept if any of them
                matches somewhere in it. None or empty keeps every name.

        Returns:
            Usage entries in first-seen order
        """
        compiled = []
        for pattern in patterns or ():
            try:
                compiled.append(re.compile(pattern))
            except re.error as e:
                raise BadPattern(pattern, str(e)) from e

        usage = []
        for name in self.directory.names:
            if compiled and not any(regex.search(name) for regex in compiled):
                continue
            if self.directory.is_macro(name):
                usage.append(TagUsage(name, "macro", len(self.evaluator.evaluate(name))))
            else:
                usage.append(TagUsage(name, "tag", len(self.directory.tag_hosts(name))))
        return usage

    def resolve(self, expressions: Iterable[str]) -> Resolution:
        """
        Evaluate each expression independently.

        A failing expression is recorded in ``errors`` and contributes no
        hosts; the others are still evaluated. Hosts are deduplicated,
        keeping first occurrence across all expressions.
        """
        resolution = Resolution()
        seen: Dict[str, Host] = {}

        for expression in expressions:
            try:
                hosts = self.evaluator.evaluate(expression)
            except BadExpression as e:
                resolution.errors.append((expression, e))
                continue
            for host in hosts:
                seen.setdefault(host.name, host)

        resolution.hosts = list(seen.values())
        return resolution

    def select(self, expressions: Iterable[str]) -> List[Host]:
        """Evaluate expressions, raising the first failure."""
        return self.evaluator.evaluate_many(expressions)
