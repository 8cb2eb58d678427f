"""
Shared fixtures for the Opkit test suite.
"""

import pytest

from opkit import logging as opkit_logging
from opkit.context import Settings
from opkit.session import Session


@pytest.fixture(autouse=True)
def isolated_log_file(tmp_path, monkeypatch):
    """Send log output to a per-test file instead of the working directory."""
    log_path = tmp_path / "opkit_test.log"
    monkeypatch.setattr(opkit_logging, "log_file_path", str(log_path))
    return log_path


@pytest.fixture
def session():
    return Session(Settings())


@pytest.fixture
def small_page_session():
    """Session with tiny pages and chunks so paging is easy to exercise."""
    return Session(Settings(page_size=10, batch_size=3))
