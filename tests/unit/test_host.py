"""
Tests for the Host type.
"""

from ghosts.directory.host import Host


class TestHost:
    """Test Host attributes and identity."""

    def test_defaults(self):
        host = Host("bilbo", sequence=0)
        assert host.user is None
        assert host.port is None
        assert host.tags == []
        assert host.target == "bilbo"

    def test_target(self):
        assert Host("sauron", 1, user="root", port=2200).target == "root@sauron:2200"

    def test_tags_are_ordered_and_unique(self):
        host = Host("bilbo", 0, tags=["prod", "intel", "prod"])
        host.add_tag("linux")
        host.add_tag("intel")
        assert host.tags == ["prod", "intel", "linux"]
        assert host.has_tag("linux")
        assert not host.has_tag("solaris")

    def test_tags_copy(self):
        host = Host("bilbo", 0, tags=["prod"])
        host.tags.append("oops")
        assert host.tags == ["prod"]

    def test_identity_by_name(self):
        assert Host("bilbo", 0) == Host("bilbo", 7, port=22)
        assert len({Host("bilbo", 0), Host("bilbo", 1)}) == 1
        assert Host("bilbo", 0) != Host("baggins", 0)

    def test_to_dict(self):
        host = Host("frodo", 3, port=2222, tags=["mordor"])
        assert host.to_dict() == {"name": "frodo", "user": None, "port": 2222, "tags": ["mordor"]}
