"""
Shared fixtures for unit tests.
"""

import pytest
from pathlib import Path

from ghosts.directory.model import Directory


MIDDLE_EARTH = """\
# Sample ghosts file
#   host          tags...

sunprod = solaris ^ e450

bilbo     prod  intel  linux
baggins   prod  e4500  solaris
tolkien   devel e450   solaris

frodo:2222      mordor
me@gandalf      mordor
"""


@pytest.fixture
def ghosts_text() -> str:
    """Return the text of the sample ghosts file."""
    return MIDDLE_EARTH


@pytest.fixture
def ghosts_file(tmp_path: Path, ghosts_text: str) -> Path:
    """Write the sample ghosts file and return its path."""
    path = tmp_path / "ghosts"
    path.write_text(ghosts_text)
    return path


@pytest.fixture
def directory(ghosts_text: str) -> Directory:
    """Return the sample directory, loaded from text."""
    return Directory.from_string(ghosts_text, source="ghosts")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the caller's environment out of the tests."""
    monkeypatch.delenv("GHOSTS", raising=False)
    monkeypatch.delenv("FORCE_COLOR", raising=False)
    monkeypatch.setenv("NO_COLOR", "1")
