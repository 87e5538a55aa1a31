"""
Pytest configuration and shared fixtures.
"""

import sys
from pathlib import Path
import pytest

# The tools live as plain scripts under python/
sys.path.insert(0, str(Path(__file__).parent.parent / "python"))


@pytest.fixture
def write_file(tmp_path):
    """Write text (or bytes) to a file under tmp_path and return its path."""
    def _write(name, content):
        path = tmp_path / name
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_bytes(content.encode("utf-8"))
        return str(path)
    return _write
