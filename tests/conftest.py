"""Pytest configuration for tests.

No sys.path hacks - tests should import from installed versionflow package.
"""

import pytest

from versionflow.kernel.version import parse_version


@pytest.fixture
def versions():
    """Parse a list of version literals."""
    def _parse(*literals):
        return [parse_version(literal) for literal in literals]
    return _parse

