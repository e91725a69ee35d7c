"""Pytest configuration for integration tests.

These tests run the real git binary. npm is always faked so no network
access is needed.
"""

import os
import shutil

import pytest


def pytest_collection_modifyitems(config, items):
    """Skip integration tests when git is not installed."""
    if shutil.which("git"):
        return

    skip_git = pytest.mark.skip(reason="git is not installed")
    for item in items:
        if "integration" in str(item.fspath):
            item.add_marker(skip_git)


@pytest.fixture
def isolated_git_env(monkeypatch):
    """Give git a fixed identity and ignore the user's git config."""
    monkeypatch.setenv("GIT_CONFIG_GLOBAL", os.devnull)
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    for prefix in ("GIT_AUTHOR", "GIT_COMMITTER"):
        monkeypatch.setenv(f"{prefix}_NAME", "Snapp Test")
        monkeypatch.setenv(f"{prefix}_EMAIL", "snapp@example.com")
