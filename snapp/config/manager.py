"""Configuration manager for SNAPP.

This module provides the ConfigManager class for loading, saving, and
managing configuration values with a cascading hierarchy:

    1. Environment Variables (highest priority)
    2. Local Config (.snapp in project/parent directories)
    3. Global Config (~/.snapp-config)
    4. Built-in Defaults (lowest priority)
"""

from __future__ import annotations

import logging
import os
import re
import tempfile
from pathlib import Path
from typing import Literal

from rich.markup import escape

from snapp.config.settings import CONFIG_FILE, Settings
from snapp.integrations.git import find_repo_root
from snapp.utils.console import console, print_header, print_info
from snapp.utils.errors import ConfigError

logger = logging.getLogger(__name__)

_LINE_PATTERN = re.compile(r"^([a-zA-Z_][a-zA-Z0-9_]*)=(.*)$")


class ConfigManager:
    """Manages configuration loading and saving with cascading hierarchy.

    Configuration Precedence (highest to lowest):
    1. Environment Variables - CI/CD, temporary overrides
    2. Local Config (.snapp) - Project-specific settings
    3. Global Config (~/.snapp-config) - User defaults
    4. Built-in Defaults - Fallback values

    Files are parsed line by line (no eval/exec) and written atomically
    with 600 permissions.

    Attributes:
        settings: Current settings instance
        global_config_path: Path to global ~/.snapp-config file
        local_config_path: Path to discovered local .snapp file (after load)
    """

    LOCAL_CONFIG_NAME = ".snapp"
    GLOBAL_CONFIG_NAME = ".snapp-config"

    def __init__(self, global_config_path: Path | None = None) -> None:
        """Initialize the configuration manager.

        Args:
            global_config_path: Optional custom path to global config file.
                                Defaults to ~/.snapp-config.
        """
        self.global_config_path = global_config_path or CONFIG_FILE
        self.local_config_path: Path | None = None
        self.settings = Settings()
        self._raw_values: dict[str, str] = {}
        self._config_sources: dict[str, str] = {}

    def load(self) -> Settings:
        """Load configuration from all sources with cascading precedence.

        Each call starts from clean defaults, so repeated loads never keep
        stale values.

        Returns:
            Settings instance with loaded values
        """
        self.settings = Settings()
        self.local_config_path = None
        self._raw_values = {}
        self._config_sources = {}

        if self.global_config_path.exists():
            logger.info("Loading global configuration from %s", self.global_config_path)
            self._load_file(self.global_config_path, source="global")

        local_path = self._find_local_config()
        if local_path is not None:
            logger.info("Loading local configuration from %s", local_path)
            self.local_config_path = local_path
            self._load_file(local_path, source="local")

        self._load_environment()

        for key, value in self._raw_values.items():
            self._apply_value_to_settings(key, value)

        logger.info("Configuration loaded (%d keys)", len(self._raw_values))
        return self.settings

    def _find_local_config(self) -> Path | None:
        """Find local .snapp config by traversing up from CWD.

        Stops at the first .snapp file, at a repository root (.git), or at
        the filesystem root.

        Returns:
            Path to local config file, or None if not found
        """
        current = Path.cwd()
        while True:
            config_path = current / self.LOCAL_CONFIG_NAME
            if config_path.exists() and config_path.is_file():
                return config_path

            if (current / ".git").exists():
                break

            parent = current.parent
            if parent == current:
                break
            current = parent

        return None

    def _load_file(self, path: Path, source: str = "file") -> None:
        """Load key=value pairs from a config file into the raw value map."""
        for key, value in self._read_file_values(path).items():
            self._raw_values[key] = value
            self._config_sources[key] = source

    def _load_environment(self) -> None:
        """Override config with environment variables for known keys only."""
        for key in Settings.get_config_keys():
            env_value = os.environ.get(key)
            if env_value is not None:
                self._raw_values[key] = env_value
                self._config_sources[key] = "environment"

    def _apply_value_to_settings(self, key: str, value: str) -> None:
        """Apply a raw config value to the settings object.

        Args:
            key: Configuration key
            value: Raw string value from file or environment
        """
        attr = self.settings.get_attribute_for_key(key)
        if attr is None:
            return  # Unknown key, ignore

        current_value = getattr(self.settings, attr)

        if isinstance(current_value, bool):
            setattr(self.settings, attr, value.lower() in ("true", "1", "yes"))
        elif isinstance(current_value, int):
            try:
                setattr(self.settings, attr, int(value))
            except ValueError:
                logger.warning("Invalid integer for %s: '%s', keeping default", key, value)
        else:
            setattr(self.settings, attr, value)

    def save(
        self,
        key: str,
        value: str,
        scope: Literal["global", "local"] = "global",
    ) -> None:
        """Save a configuration value to a config file, then reload.

        If scope="local" and no local config exists, a .snapp file is created
        at the repository root, or in the current directory outside a
        repository.

        Args:
            key: Configuration key, one of Settings.get_config_keys()
            value: Configuration value to save
            scope: Target config file - "global" or "local"

        Raises:
            ConfigError: If the key is unknown or the scope is invalid
        """
        if key not in Settings.get_config_keys():
            valid = ", ".join(Settings.get_config_keys())
            raise ConfigError(f"Unknown config key: {key}. Valid keys: {valid}")

        if scope not in ("global", "local"):
            raise ConfigError(f"Invalid scope: {scope}. Must be 'global' or 'local'")

        if scope == "local":
            if self.local_config_path is None:
                repo_root = find_repo_root()
                base = repo_root if repo_root else Path.cwd()
                self.local_config_path = base / self.LOCAL_CONFIG_NAME
            target_path = self.local_config_path
        else:
            target_path = self.global_config_path

        existing_lines: list[str] = []
        if target_path.exists():
            existing_lines = target_path.read_text().splitlines()

        new_lines: list[str] = []
        written = False
        escaped_value = self._escape_value_for_storage(value)

        for line in existing_lines:
            match = _LINE_PATTERN.match(line.strip())
            if match and match.group(1) == key:
                new_lines.append(f'{key}="{escaped_value}"')
                written = True
            else:
                new_lines.append(line)

        if not written:
            new_lines.append(f'{key}="{escaped_value}"')

        self._atomic_write_to_path(new_lines, target_path)
        logger.info("Configuration saved to %s: %s", scope, key)

        # Keep the in-memory state consistent with the full precedence order
        self.load()

    def _read_file_values(self, path: Path) -> dict[str, str]:
        """Read key=value pairs from a config file without modifying state."""
        values: dict[str, str] = {}

        if not path.exists():
            return values

        with path.open() as f:
            for line in f:
                line = line.strip()
                if not line or line.startswith("#"):
                    continue
                match = _LINE_PATTERN.match(line)
                if match:
                    key, value = match.groups()
                    # Double quotes allow escapes, single quotes are literal
                    if len(value) >= 2 and value.startswith('"') and value.endswith('"'):
                        value = self._unescape_value(value[1:-1])
                    elif len(value) >= 2 and value.startswith("'") and value.endswith("'"):
                        value = value[1:-1]
                    values[key] = value
        return values

    def _atomic_write_to_path(self, lines: list[str], target_path: Path) -> None:
        """Atomically write lines to a config file with 600 permissions."""
        target_path.parent.mkdir(parents=True, exist_ok=True)

        fd, temp_path = tempfile.mkstemp(
            dir=target_path.parent,
            prefix=".snapp-config-",
        )
        try:
            with os.fdopen(fd, "w") as f:
                f.write("\n".join(lines))
                if lines:
                    f.write("\n")

            os.chmod(temp_path, 0o600)
            Path(temp_path).replace(target_path)
        except Exception:
            try:
                os.unlink(temp_path)
            except OSError:
                pass
            raise

    @staticmethod
    def _escape_value_for_storage(value: str) -> str:
        """Escape backslashes and double quotes for double-quoted storage."""
        result = value.replace("\\", "\\\\")
        result = result.replace('"', '\\"')
        return result

    @staticmethod
    def _unescape_value(value: str) -> str:
        """Reverse :meth:`_escape_value_for_storage`."""
        result: list[str] = []
        chars = iter(value)
        for char in chars:
            if char == "\\":
                result.append(next(chars, "\\"))
            else:
                result.append(char)
        return "".join(result)

    def get_source(self, key: str) -> str:
        """Return where a key's effective value came from."""
        return self._config_sources.get(key, "default")

    def show(self) -> None:
        """Display current configuration using Rich formatting."""
        print_header("Current Configuration")

        print_info(f"Global config: {self.global_config_path}")
        if self.local_config_path:
            print_info(f"Local config:  {self.local_config_path}")
        else:
            print_info("Local config:  (not found)")
        console.print()

        console.print("  [bold]Settings:[/bold]")
        for key in Settings.get_config_keys():
            attr = self.settings.get_attribute_for_key(key)
            value = getattr(self.settings, attr) if attr else ""
            console.print(f"    {key}: {escape(str(value))} [dim]({self.get_source(key)})[/dim]")
        console.print()


__all__ = [
    "ConfigManager",
]
