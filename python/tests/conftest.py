"""Pytest configuration and fixtures."""

import pytest
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))


@pytest.fixture
def sample_dict_content():
    """Sample Rime dictionary with header, marker and mixed-case rows."""
    return """# Rime dictionary
---
name: en
version: "1"
sort: by_weight
...
# +_+
Apple\tAPPL\t100
apple\tappl
Windows XP\twindows xp\t50
e-mail\temail
email\temail\t10
"""


@pytest.fixture
def sample_acronym_content():
    """Sample acronym definition file."""
    return """# abbreviations
NASA\tNational Aeronautics and Space Administration

CPU\tCentral Processing Unit\tcentral processor
NASA\tNational Aeronautics and Space Administration
"""


@pytest.fixture
def write_file(tmp_path):
    """Write content to a file under tmp_path and return its path."""
    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path
    return _write
