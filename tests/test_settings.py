"""Tests for snapp.config.settings module."""

from pathlib import Path

from snapp import DEFAULT_TEMPLATE_SOURCE
from snapp.config.settings import CONFIG_FILE, Settings


class TestSettings:
    def test_default_values(self):
        settings = Settings()

        assert settings.template_source == DEFAULT_TEMPLATE_SOURCE
        assert settings.template_cache is True
        assert settings.cache_dir == str(Path.home() / ".snapp" / "cache")
        assert settings.fail_fast is True
        assert settings.fetch_timeout_seconds == 0

    def test_custom_values(self):
        settings = Settings(template_source="user/repo", fail_fast=False)

        assert settings.template_source == "user/repo"
        assert settings.fail_fast is False

    def test_get_attribute_for_key(self):
        settings = Settings()

        assert settings.get_attribute_for_key("TEMPLATE_SOURCE") == "template_source"
        assert settings.get_attribute_for_key("FAIL_FAST") == "fail_fast"
        assert settings.get_attribute_for_key("UNKNOWN_KEY") is None

    def test_get_config_keys(self):
        assert Settings.get_config_keys() == [
            "TEMPLATE_SOURCE",
            "TEMPLATE_CACHE",
            "CACHE_DIR",
            "FAIL_FAST",
            "FETCH_TIMEOUT_SECONDS",
        ]

    def test_cache_path_expands_user(self):
        settings = Settings(cache_dir="~/templates")

        assert settings.cache_path == Path.home() / "templates"

    def test_fetch_timeout_zero_means_none(self):
        assert Settings().fetch_timeout is None
        assert Settings(fetch_timeout_seconds=-5).fetch_timeout is None
        assert Settings(fetch_timeout_seconds=20).fetch_timeout == 20.0


class TestConfigFile:
    def test_default_config_file_in_home(self):
        assert CONFIG_FILE == Path.home() / ".snapp-config"
