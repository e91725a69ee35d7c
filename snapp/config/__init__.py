"""Configuration management for SNAPP.

This package contains:
- settings: Settings dataclass with configuration values
- manager: ConfigManager for loading/saving configuration
"""

from snapp.config.manager import ConfigManager
from snapp.config.settings import CONFIG_FILE, Settings

__all__ = [
    "ConfigManager",
    "CONFIG_FILE",
    "Settings",
]
