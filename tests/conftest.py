"""Shared pytest fixtures for SNAPP tests."""

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from snapp.config.settings import Settings
from tests.fakes import FakeFetcher, FakeRunner
from tests.helpers import build_archive


@pytest.fixture
def temp_config_file(tmp_path: Path) -> Path:
    """Create a temporary config file with sample values."""
    config_file = tmp_path / ".snapp-config"
    config_file.write_text(
        """# SNAPP Configuration
TEMPLATE_SOURCE="github:acme/templates/web#v2"
TEMPLATE_CACHE="false"
FAIL_FAST="false"
FETCH_TIMEOUT_SECONDS="15"
"""
    )
    return config_file


@pytest.fixture
def isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run the test from an empty directory so no local .snapp file is found."""
    workdir = tmp_path / "work"
    workdir.mkdir()
    (workdir / ".git").mkdir()
    monkeypatch.chdir(workdir)
    return workdir


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove configuration keys from the environment."""
    for key in Settings.get_config_keys():
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def mock_subprocess():
    """Mock subprocess.run for git/npm commands."""
    with patch("subprocess.run") as mock:
        mock.return_value = MagicMock(
            returncode=0,
            stdout="",
            stderr="",
        )
        yield mock


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def fake_fetcher() -> FakeFetcher:
    return FakeFetcher()


@pytest.fixture
def template_archive() -> bytes:
    """Archive with a template under templates/project and unrelated files."""
    return build_archive(
        {
            "README.md": "# repo\n",
            "templates/project/package.json": '{"name": "app"}\n',
            "templates/project/package-lock.json": "{}\n",
            "templates/project/scripts/setup.sh": "#!/bin/sh\n",
            "templates/project/src/index.ts": "export {};\n",
            "templates/other/file.txt": "other\n",
        },
        top="snapp-cli-main",
    )
