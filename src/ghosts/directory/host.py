"""
Directory Host representation.

A Host is one machine declared in the ghosts file.
"""

from typing import Any, Dict, Iterable, List, Optional


class Host:
    """Represents a single host in the directory."""

    def __init__(
        self,
        name: str,
        sequence: int,
        user: Optional[str] = None,
        port: Optional[int] = None,
        tags: Optional[Iterable[str]] = None,
    ):
        """
        Initialize a Host.

        Args:
            name: Hostname, without user or port
            sequence: Declaration-order index, fixed at first declaration
            user: Optional login name from a ``user@host`` spec
            port: Optional port number from a ``host:port`` spec
            tags: Tags from the declaration line, in column order
        """
        self.name = name
        self.sequence = sequence
        self.user = user
        self.port = port
        self._tags: List[str] = []
        for tag in tags or ():
            self.add_tag(tag)

    @property
    def tags(self) -> List[str]:
        """Return list of tags carried by this host."""
        return self._tags.copy()

    @property
    def target(self) -> str:
        """Connection target in ``[user@]name[:port]`` form."""
        target = self.name
        if self.user:
            target = f"{self.user}@{target}"
        if self.port is not None:
            target = f"{target}:{self.port}"
        return target

    def add_tag(self, tag: str) -> None:
        """Attach a tag; repeated tags are ignored."""
        if tag not in self._tags:
            self._tags.append(tag)

    def has_tag(self, tag: str) -> bool:
        """Check if this host carries a tag."""
        return tag in self._tags

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON/YAML output."""
        return {
            "name": self.name,
            "user": self.user,
            "port": self.port,
            "tags": self.tags,
        }

    def __repr__(self) -> str:
        return f"Host(name={self.name!r}, user={self.user!r}, port={self.port}, tags={self._tags})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Host):
            return NotImplemented
        return self.name == other.name

    def __hash__(self) -> int:
        return hash(self.name)
