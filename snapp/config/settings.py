"""Settings dataclass for SNAPP configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from snapp import DEFAULT_TEMPLATE_SOURCE


@dataclass
class Settings:
    """Configuration settings for SNAPP.

    All settings have sensible defaults and can be loaded from
    the configuration file (~/.snapp-config).

    Attributes:
        template_source: Template identifier (``host:user/repo/subdir#ref``)
        template_cache: Reuse a previously downloaded template archive
        cache_dir: Directory holding downloaded template archives
        fail_fast: Abort the pipeline on the first failed step
        fetch_timeout_seconds: HTTP timeout for archive downloads (0 = none)
    """

    template_source: str = DEFAULT_TEMPLATE_SOURCE
    template_cache: bool = True
    cache_dir: str = str(Path.home() / ".snapp" / "cache")
    fail_fast: bool = True
    fetch_timeout_seconds: int = 0

    # Config key to attribute mapping
    _key_mapping: dict[str, str] = field(
        default_factory=lambda: {
            "TEMPLATE_SOURCE": "template_source",
            "TEMPLATE_CACHE": "template_cache",
            "CACHE_DIR": "cache_dir",
            "FAIL_FAST": "fail_fast",
            "FETCH_TIMEOUT_SECONDS": "fetch_timeout_seconds",
        },
        repr=False,
    )

    def get_attribute_for_key(self, key: str) -> str | None:
        """Get the attribute name for a config key (e.g., "FAIL_FAST")."""
        return self._key_mapping.get(key)

    @classmethod
    def get_config_keys(cls) -> list[str]:
        """Get list of all valid configuration keys."""
        temp = cls()
        return list(temp._key_mapping.keys())

    @property
    def cache_path(self) -> Path:
        return Path(self.cache_dir).expanduser()

    @property
    def fetch_timeout(self) -> float | None:
        """Download timeout in seconds, or None when no timeout applies."""
        if self.fetch_timeout_seconds <= 0:
            return None
        return float(self.fetch_timeout_seconds)


# Default configuration file path
CONFIG_FILE = Path.home() / ".snapp-config"
