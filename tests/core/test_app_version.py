"""
Tests for the version helper.
"""
from core.app_version import get_app_version


def test_version_matches_pyproject():
    version = get_app_version()
    assert version != "0.0.0"
    assert version.count(".") == 2
