"""Tests for snapp.config.manager module.

Tests cover:
- ConfigManager.load with the cascading hierarchy
- ConfigManager.save with validation and atomic writes
- ConfigManager.get / get_source
- ConfigManager.show
"""

import os
import stat
from unittest.mock import patch

import pytest

from snapp import DEFAULT_TEMPLATE_SOURCE
from snapp.config.manager import ConfigManager
from snapp.utils.errors import ConfigError


@pytest.fixture(autouse=True)
def _isolate(isolated_cwd, clean_env):
    """Every test runs in an empty repository without config env vars."""


class TestConfigManagerLoad:
    """Tests for ConfigManager.load method."""

    def test_load_missing_file(self, tmp_path):
        """Returns defaults when config file doesn't exist."""
        manager = ConfigManager(tmp_path / "missing-config")

        settings = manager.load()

        assert settings.template_source == DEFAULT_TEMPLATE_SOURCE
        assert settings.fail_fast is True

    def test_load_valid_file(self, temp_config_file):
        manager = ConfigManager(temp_config_file)

        settings = manager.load()

        assert settings.template_source == "github:acme/templates/web#v2"
        assert settings.template_cache is False
        assert settings.fail_fast is False
        assert settings.fetch_timeout_seconds == 15

    def test_load_ignores_comments_and_empty_lines(self, tmp_path):
        config_file = tmp_path / "config"
        config_file.write_text('# comment\n\nTEMPLATE_SOURCE="user/repo"\n\n# end\n')
        manager = ConfigManager(config_file)

        assert manager.load().template_source == "user/repo"

    def test_load_handles_unquoted_and_single_quoted(self, tmp_path):
        config_file = tmp_path / "config"
        config_file.write_text("TEMPLATE_SOURCE=user/repo\nCACHE_DIR='/tmp/c'\n")
        manager = ConfigManager(config_file)

        settings = manager.load()

        assert settings.template_source == "user/repo"
        assert settings.cache_dir == "/tmp/c"

    def test_load_keeps_default_on_bad_integer(self, tmp_path):
        config_file = tmp_path / "config"
        config_file.write_text('FETCH_TIMEOUT_SECONDS="soon"\n')
        manager = ConfigManager(config_file)

        assert manager.load().fetch_timeout_seconds == 0

    def test_load_ignores_unknown_keys(self, tmp_path):
        config_file = tmp_path / "config"
        config_file.write_text('SOMETHING_ELSE="x"\n')
        manager = ConfigManager(config_file)

        manager.load()

        assert not hasattr(manager.settings, "something_else")

    def test_load_is_idempotent(self, tmp_path):
        config_file = tmp_path / "config"
        config_file.write_text('TEMPLATE_SOURCE="user/repo"\n')
        manager = ConfigManager(config_file)
        manager.load()

        config_file.write_text("")
        settings = manager.load()

        assert settings.template_source == DEFAULT_TEMPLATE_SOURCE


class TestCascade:
    def test_local_overrides_global(self, tmp_path, isolated_cwd):
        global_file = tmp_path / "global"
        global_file.write_text('TEMPLATE_SOURCE="global/repo"\nFAIL_FAST="false"\n')
        (isolated_cwd / ".snapp").write_text('TEMPLATE_SOURCE="local/repo"\n')
        manager = ConfigManager(global_file)

        settings = manager.load()

        assert settings.template_source == "local/repo"
        assert settings.fail_fast is False
        assert manager.local_config_path == isolated_cwd / ".snapp"
        assert manager.get_source("TEMPLATE_SOURCE") == "local"
        assert manager.get_source("FAIL_FAST") == "global"

    def test_environment_overrides_files(self, tmp_path, isolated_cwd, monkeypatch):
        (isolated_cwd / ".snapp").write_text('TEMPLATE_SOURCE="local/repo"\n')
        monkeypatch.setenv("TEMPLATE_SOURCE", "env/repo")
        manager = ConfigManager(tmp_path / "global")

        settings = manager.load()

        assert settings.template_source == "env/repo"
        assert manager.get_source("TEMPLATE_SOURCE") == "environment"

    def test_local_search_stops_at_repo_root(self, tmp_path, isolated_cwd, monkeypatch):
        """A .snapp above the repository root is not picked up."""
        (isolated_cwd.parent / ".snapp").write_text('TEMPLATE_SOURCE="outside/repo"\n')
        nested = isolated_cwd / "a" / "b"
        nested.mkdir(parents=True)
        monkeypatch.chdir(nested)
        manager = ConfigManager(tmp_path / "global")

        assert manager.load().template_source == DEFAULT_TEMPLATE_SOURCE
        assert manager.local_config_path is None

    def test_default_source(self, tmp_path):
        manager = ConfigManager(tmp_path / "global")
        manager.load()

        assert manager.get_source("CACHE_DIR") == "default"


class TestConfigManagerSave:
    def test_save_creates_global_file(self, tmp_path):
        config_file = tmp_path / "nested" / "config"
        manager = ConfigManager(config_file)

        manager.save("TEMPLATE_SOURCE", "user/repo")

        assert config_file.read_text() == 'TEMPLATE_SOURCE="user/repo"\n'
        assert manager.settings.template_source == "user/repo"

    def test_save_sets_private_permissions(self, tmp_path):
        config_file = tmp_path / "config"
        manager = ConfigManager(config_file)

        manager.save("FAIL_FAST", "false")

        assert stat.S_IMODE(os.stat(config_file).st_mode) == 0o600

    def test_save_replaces_existing_key_and_keeps_rest(self, tmp_path):
        config_file = tmp_path / "config"
        config_file.write_text('# mine\nTEMPLATE_SOURCE="old/repo"\nFAIL_FAST="true"\n')
        manager = ConfigManager(config_file)

        manager.save("TEMPLATE_SOURCE", "new/repo")

        assert config_file.read_text() == '# mine\nTEMPLATE_SOURCE="new/repo"\nFAIL_FAST="true"\n'

    def test_save_round_trips_special_characters(self, tmp_path):
        config_file = tmp_path / "config"
        manager = ConfigManager(config_file)

        manager.save("CACHE_DIR", 'C:\\cache "x"')

        assert manager.load().cache_dir == 'C:\\cache "x"'

    def test_save_local_writes_at_repo_root(self, tmp_path, isolated_cwd, monkeypatch):
        nested = isolated_cwd / "sub"
        nested.mkdir()
        monkeypatch.chdir(nested)
        manager = ConfigManager(tmp_path / "global")
        manager.load()

        manager.save("FAIL_FAST", "false", scope="local")

        assert (isolated_cwd / ".snapp").read_text() == 'FAIL_FAST="false"\n'
        assert manager.settings.fail_fast is False

    def test_save_rejects_unknown_key(self, tmp_path):
        manager = ConfigManager(tmp_path / "config")

        with pytest.raises(ConfigError, match="Unknown config key"):
            manager.save("NOPE", "x")

    def test_save_rejects_bad_scope(self, tmp_path):
        manager = ConfigManager(tmp_path / "config")

        with pytest.raises(ConfigError, match="Invalid scope"):
            manager.save("FAIL_FAST", "x", scope="team")  # type: ignore[arg-type]


class TestConfigManagerShow:
    @patch("snapp.config.manager.console")
    @patch("snapp.config.manager.print_info")
    @patch("snapp.config.manager.print_header")
    def test_show_lists_every_key(self, mock_header, mock_info, mock_console, tmp_path):
        manager = ConfigManager(tmp_path / "config")
        manager.load()

        manager.show()

        mock_header.assert_called_once_with("Current Configuration")
        printed = " ".join(str(c) for c in mock_console.print.call_args_list)
        for key in ("TEMPLATE_SOURCE", "TEMPLATE_CACHE", "CACHE_DIR", "FAIL_FAST"):
            assert key in printed
