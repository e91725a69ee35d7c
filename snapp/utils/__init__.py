"""Utility modules for SNAPP.

This package contains:
- console: Rich-based terminal output utilities
- errors: Custom exceptions and exit codes
- logging: Logging configuration
"""

from snapp.utils.console import (
    console,
    print_error,
    print_header,
    print_info,
    print_success,
    print_warning,
    step_status,
)
from snapp.utils.errors import (
    ConfigError,
    DestinationNotEmptyError,
    ExitCode,
    MissingDependencyError,
    SnappError,
    StepFailedError,
    TemplateFetchError,
    UserCancelledError,
)
from snapp.utils.logging import log_command, log_message, setup_logging

__all__ = [
    # Console
    "console",
    "print_error",
    "print_success",
    "print_warning",
    "print_info",
    "print_header",
    "step_status",
    # Errors
    "ExitCode",
    "SnappError",
    "TemplateFetchError",
    "DestinationNotEmptyError",
    "MissingDependencyError",
    "StepFailedError",
    "UserCancelledError",
    "ConfigError",
    # Logging
    "setup_logging",
    "log_message",
    "log_command",
]
